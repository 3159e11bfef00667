"""Schemas for the bulk CSV import endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from fitbusiness.models.employee import Employee


class ImportPreviewRequest(BaseModel):
    content: str = Field(..., description="UTF-8 CSV text, header on the first line")
    filename: str | None = Field(default=None, description="Original file name, must end in .csv")


class ImportRowResponse(BaseModel):
    name: str
    email: str
    title: str


class ImportErrorResponse(BaseModel):
    line: int
    message: str
    raw_line: str


class ImportPreviewResponse(BaseModel):
    import_id: str
    company_id: str
    step: str
    filename: str | None = None
    valid_count: int
    error_count: int
    valid_rows: list[ImportRowResponse]
    error_rows: list[ImportErrorResponse]


class ImportCommitResponse(BaseModel):
    import_id: str
    company_id: str
    step: str
    imported_count: int
    employees: list[Employee]
    total_employees: int
    average_fit_score: int
    message: str
