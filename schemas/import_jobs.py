"""Pydantic schemas for import_jobs_csv and export_csv_template tools."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import model_validator

from schemas.common import (
    ActingUserMixin,
    DbPathMixin,
    StrictIgnoreRequest,
    StrictResponse,
    TodayMixin,
)


class ImportJobsRequest(DbPathMixin, ActingUserMixin, TodayMixin, StrictIgnoreRequest):
    """Request schema for import_jobs_csv."""

    layout: Literal["scoped", "global"] = "scoped"
    category: Optional[str] = None
    sub_category: Optional[str] = None
    csv_text: Optional[str] = None
    file_path: Optional[str] = None

    @model_validator(mode="after")
    def check_source_and_scope(self) -> "ImportJobsRequest":
        if (self.csv_text is None) == (self.file_path is None):
            raise ValueError("Provide exactly one of csv_text or file_path")
        if self.layout == "scoped" and (not self.category or not self.sub_category):
            raise ValueError("Scoped import requires category and sub_category")
        return self


class ImportJobsResponse(StrictResponse):
    """
    Response schema for import_jobs_csv.

    ``success`` is False when no row was accepted; the store is then left
    untouched.
    """

    success: bool
    layout: str
    imported_count: int
    skipped_count: int
    total_lines: int
    message: str
    job_ids: list[str]


class ExportTemplateRequest(TodayMixin, StrictIgnoreRequest):
    """Request schema for export_csv_template."""

    category: Optional[str] = None
    sub_category: Optional[str] = None
    templates_dir: Optional[str] = None

    @model_validator(mode="after")
    def check_scope(self) -> "ExportTemplateRequest":
        if (self.category is None) != (self.sub_category is None):
            raise ValueError("category and sub_category must be given together")
        return self


class ExportTemplateResponse(StrictResponse):
    """Response schema for export_csv_template."""

    layout: str
    filename: str
    path: str
    content: str
