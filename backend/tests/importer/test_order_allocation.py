"""Tests for display-order allocation."""

import uuid

from sqlalchemy.orm import Session

from app.models.question import QuestionType
from app.models.section import Section
from app.services.importer.ordering import OrderAllocator, get_max_order
from app.services.importer.validators import ValidatedRow
from tests.helpers.seed import create_test_question, create_test_section


def _rows(count: int) -> list[ValidatedRow]:
    return [
        ValidatedRow(
            row_number=index + 2,
            id=uuid.uuid4(),
            label=f"Q{index}",
            type=QuestionType.TEXT,
            required=True,
            placeholder="",
        )
        for index in range(count)
    ]


def test_empty_section_starts_at_zero(db: Session, section: Section):
    rows = _rows(3)

    OrderAllocator.for_section(db, section.id).assign(rows)

    assert get_max_order(db, section.id) == -1
    assert [row.order for row in rows] == [0, 1, 2]


def test_continues_after_existing_max(db: Session, section: Section):
    create_test_question(db, section, label="First", order=0)
    create_test_question(db, section, label="Gap", order=4)
    rows = _rows(3)

    OrderAllocator.for_section(db, section.id).assign(rows)

    assert [row.order for row in rows] == [5, 6, 7]


def test_other_sections_do_not_count(db: Session, section: Section, provider):
    other = create_test_section(db, provider, title="Other", order=1)
    create_test_question(db, other, order=20)

    assert get_max_order(db, section.id) == -1


def test_allocate_is_strictly_increasing():
    allocator = OrderAllocator(current_max=9)

    assert [allocator.allocate() for _ in range(3)] == [10, 11, 12]
