"""Row mapper for import engine."""

from dataclasses import dataclass

from app.services.importer.file_parser import ParsedRow

# Canonical field -> accepted header names, first non-empty wins
COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "text": ("question_text", "label", "question"),
    "type": ("question_type", "type"),
    "options": ("options",),
    "required": ("required",),
    "placeholder": ("placeholder",),
}

DEFAULT_QUESTION_TYPE = "text"


@dataclass(frozen=True)
class CandidateRow:
    """A parsed row with header aliases resolved, not yet validated.

    ``required`` is ``None`` when the file has no required column at all,
    which is different from a present-but-empty cell.
    """

    row_number: int
    text: str
    type: str
    options: str
    required: str | None
    placeholder: str


class RowMapper:
    """Map parsed rows to canonical question fields using COLUMN_ALIASES."""

    def __init__(self, aliases: dict[str, tuple[str, ...]] | None = None):
        self.aliases = aliases or COLUMN_ALIASES

    def map_row(self, row: ParsedRow) -> CandidateRow:
        return CandidateRow(
            row_number=row.row_number,
            text=self._first_value(row, "text") or "",
            type=self._first_value(row, "type") or DEFAULT_QUESTION_TYPE,
            options=self._first_value(row, "options") or "",
            required=self._required_value(row),
            placeholder=self._first_value(row, "placeholder") or "",
        )

    def _first_value(self, row: ParsedRow, field: str) -> str | None:
        for column in self.aliases[field]:
            value = row.get(column)
            if value:
                return value
        return None

    def _required_value(self, row: ParsedRow) -> str | None:
        columns = [column for column in self.aliases["required"] if row.has(column)]
        if not columns:
            return None
        return self._first_value(row, "required") or ""
