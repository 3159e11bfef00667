"""Bulk employee import: CSV validation and the preview/commit session.

Validation is a pure function of the payload: it partitions the data lines
into rows ready to commit and rows reported with a line number and reason.
Nothing touches the store until an ``ImportSession`` is explicitly committed.
"""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import TYPE_CHECKING

import structlog

from fitbusiness.services.builders import employee_draft_from_import

if TYPE_CHECKING:
    from fitbusiness.models.employee import Employee
    from fitbusiness.store import DataStore

logger = structlog.get_logger()

# Column names as they appear in the CSV header, mapped to row fields
NAME_COLUMN = "nome"
EMAIL_COLUMN = "email"
TITLE_COLUMN = "cargo"
REQUIRED_COLUMNS = (NAME_COLUMN, EMAIL_COLUMN, TITLE_COLUMN)

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")

NAME_REQUIRED = "name is required"
INVALID_EMAIL = "invalid or missing email"
TITLE_REQUIRED = "title is required"

TEMPLATE_FILENAME = "modelo_importacao_funcionarios.csv"
CSV_TEMPLATE = (
    "nome,email,cargo\n"
    "João da Silva,joao.silva@exemplo.com,Engenheiro de Software\n"
    "Maria Oliveira,maria.o@exemplo.com,Designer de Produto\n"
)


class ImportStructureError(Exception):
    """Raised when the payload as a whole cannot be imported."""


class ImportStateError(Exception):
    """Raised when a session operation is not allowed in its current step."""


@dataclass(frozen=True)
class ImportRow:
    """A validated row, ready to become an employee."""

    name: str
    email: str
    title: str


@dataclass(frozen=True)
class ImportRowError:
    """A rejected row with its 1-based line number (header is line 1)."""

    line: int
    message: str
    raw_line: str


@dataclass(frozen=True)
class ImportResult:
    valid_rows: list[ImportRow] = field(default_factory=list)
    error_rows: list[ImportRowError] = field(default_factory=list)

    @property
    def total_rows(self) -> int:
        return len(self.valid_rows) + len(self.error_rows)


def template_csv() -> str:
    """The downloadable import template: required header plus two examples."""
    return CSV_TEMPLATE


def _validate_row(row: dict[str, str]) -> str | None:
    """Return the first failure message for a row, or None if it is valid."""
    if not row.get(NAME_COLUMN):
        return NAME_REQUIRED
    email = row.get(EMAIL_COLUMN, "")
    if not email or not EMAIL_PATTERN.search(email):
        return INVALID_EMAIL
    if not row.get(TITLE_COLUMN):
        return TITLE_REQUIRED
    return None


def parse_employee_csv(text: str) -> ImportResult:
    """Parse and validate a comma-separated employee payload.

    Args:
        text: UTF-8 text whose first non-empty line is the header. The header
            must contain ``nome``, ``email`` and ``cargo`` in any order;
            extra columns are ignored.

    Returns:
        ImportResult with valid and rejected rows in original order.

    Raises:
        ImportStructureError: If a required column is missing. No row is
            processed in that case.
    """
    lines = text.lstrip("\ufeff").splitlines()
    header_index = next((i for i, line in enumerate(lines) if line.strip()), None)
    if header_index is None:
        raise ImportStructureError("The CSV file is empty.")

    headers = [h.strip() for h in lines[header_index].strip().lower().split(",")]
    missing = [c for c in REQUIRED_COLUMNS if c not in headers]
    if missing:
        raise ImportStructureError(
            "The CSV file is invalid. Make sure it contains the columns: "
            f"{', '.join(REQUIRED_COLUMNS)}."
        )

    valid: list[ImportRow] = []
    errors: list[ImportRowError] = []

    # Numbering starts at the header, leading blank lines are not counted
    for offset, raw in enumerate(lines[header_index + 1:], start=2):
        line = raw.strip()
        if not line:
            continue

        values = line.split(",")
        row = {
            header: values[i].strip() if i < len(values) else ""
            for i, header in enumerate(headers)
        }

        message = _validate_row(row)
        if message is not None:
            errors.append(ImportRowError(line=offset, message=message, raw_line=line))
        else:
            valid.append(ImportRow(
                name=row[NAME_COLUMN],
                email=row[EMAIL_COLUMN],
                title=row[TITLE_COLUMN],
            ))

    return ImportResult(valid_rows=valid, error_rows=errors)


class ImportStep(str, Enum):
    UPLOAD = "upload"
    PREVIEW = "preview"
    COMPLETE = "complete"


class ImportSession:
    """One pass through the upload -> preview -> complete flow.

    ``load`` validates a payload and moves to PREVIEW; ``reset`` returns to
    UPLOAD; ``commit`` writes the valid rows and ends in COMPLETE, which is
    terminal.
    """

    def __init__(self, company_id: str, session_id: str | None = None) -> None:
        self.session_id = session_id or f"imp-{uuid.uuid4().hex[:12]}"
        self.company_id = company_id
        self.step = ImportStep.UPLOAD
        self.filename: str | None = None
        self.result = ImportResult()
        self.imported: list[Employee] = []

    def load(self, text: str, filename: str | None = None) -> ImportResult:
        """Validate a payload and enter PREVIEW. State is unchanged on failure."""
        if self.step is not ImportStep.UPLOAD:
            raise ImportStateError(f"Cannot load a file while in the '{self.step.value}' step")
        if filename is not None and not filename.lower().endswith(".csv"):
            raise ImportStructureError("Please select a file in CSV format.")

        result = parse_employee_csv(text)
        self.filename = filename
        self.result = result
        self.step = ImportStep.PREVIEW
        logger.info(
            "import_previewed",
            session_id=self.session_id,
            company_id=self.company_id,
            valid=len(result.valid_rows),
            errors=len(result.error_rows),
        )
        return result

    def reset(self) -> None:
        """Discard the preview and go back to UPLOAD."""
        if self.step is ImportStep.COMPLETE:
            raise ImportStateError("A completed import cannot be reset")
        self.step = ImportStep.UPLOAD
        self.filename = None
        self.result = ImportResult()

    def commit(self, store: DataStore, today: date | None = None) -> list[Employee]:
        """Create one employee per valid row, with a single recompute."""
        if self.step is not ImportStep.PREVIEW:
            raise ImportStateError(f"Cannot commit while in the '{self.step.value}' step")
        if not self.result.valid_rows:
            raise ImportStateError("There are no valid rows to import")

        company = store.require_company(self.company_id)
        drafts = [
            employee_draft_from_import(row.name, row.email, row.title, company, today)
            for row in self.result.valid_rows
        ]
        self.imported = store.bulk_add_employees(drafts, company.company_id)
        self.step = ImportStep.COMPLETE
        logger.info(
            "employees_imported",
            session_id=self.session_id,
            company_id=self.company_id,
            count=len(self.imported),
        )
        return self.imported
