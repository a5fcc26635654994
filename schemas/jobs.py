"""Pydantic schemas for the job CRUD and listing tools."""

from __future__ import annotations

from typing import Any, Optional

from schemas.common import (
    ActingUserMixin,
    DbPathMixin,
    StrictIgnoreRequest,
    StrictResponse,
    TodayMixin,
)


class CreateJobRequest(DbPathMixin, ActingUserMixin, TodayMixin, StrictIgnoreRequest):
    """Request schema for create_job (the manual entry form)."""

    category: str
    sub_category: str
    branch_dept: Optional[str] = None
    job_type: Optional[str] = None
    deadline: Optional[str] = None
    date_input: Optional[str] = None
    status: Optional[str] = None
    activation_date: Optional[str] = None
    keterangan: Optional[str] = None
    notes: Optional[str] = None


class UpdateJobRequest(DbPathMixin, ActingUserMixin, TodayMixin, StrictIgnoreRequest):
    """Request schema for update_job (edit form and inline edits)."""

    job_id: str
    fields: dict[str, Any]


class DeleteJobRequest(DbPathMixin, ActingUserMixin, StrictIgnoreRequest):
    """Request schema for delete_job."""

    job_id: str


class ListCategoryJobsRequest(DbPathMixin, TodayMixin, StrictIgnoreRequest):
    """Request schema for list_category_jobs."""

    category: str
    sub_category: str
    search: Optional[str] = None


class JobMutationResponse(StrictResponse):
    """Response schema for create_job and update_job."""

    success: bool
    job: dict[str, Any]


class DeleteJobResponse(StrictResponse):
    """Response schema for delete_job."""

    success: bool
    id: str


class ListCategoryJobsResponse(StrictResponse):
    """Response schema for list_category_jobs."""

    category: str
    sub_category: str
    has_activation_date: bool
    count: int
    jobs: list[dict[str, Any]]


class ListActivityLogRequest(DbPathMixin, StrictIgnoreRequest):
    """Request schema for list_activity_log."""

    limit: Optional[int] = None


class ListActivityLogResponse(StrictResponse):
    """Response schema for list_activity_log."""

    count: int
    entries: list[dict[str, Any]]
