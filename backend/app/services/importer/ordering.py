"""Display-order allocation for imported questions."""

from typing import Iterable
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.question import Question
from app.services.importer.validators import ValidatedRow


def get_max_order(db: Session, section_id: UUID) -> int:
    """Highest ``order`` in the section, or -1 when the section is empty."""
    return (
        db.query(func.coalesce(func.max(Question.order), -1))
        .filter(Question.section_id == section_id)
        .scalar()
    )


class OrderAllocator:
    """Hand out max+1, max+2, ... from one snapshot of the section max.

    No lock is taken, so two uploads racing on the same section can produce
    duplicate order values.
    """

    def __init__(self, current_max: int):
        self.next_order = current_max + 1

    @classmethod
    def for_section(cls, db: Session, section_id: UUID) -> "OrderAllocator":
        return cls(get_max_order(db, section_id))

    def allocate(self) -> int:
        order = self.next_order
        self.next_order += 1
        return order

    def assign(self, rows: Iterable[ValidatedRow]) -> None:
        """Stamp orders onto rows in the order given."""
        for row in rows:
            row.order = self.allocate()
