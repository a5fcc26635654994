"""Pydantic schemas for get_dashboard_summary and filter_jobs tools."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import field_validator

from schemas.common import DbPathMixin, StrictIgnoreRequest, StrictResponse, TodayMixin


class GetDashboardSummaryRequest(DbPathMixin, TodayMixin, StrictIgnoreRequest):
    """Request schema for get_dashboard_summary."""


class StatusSlice(StrictResponse):
    """One slice of the status distribution chart."""

    name: str
    value: int


class CategoryCount(StrictResponse):
    """One bar of the per-category chart."""

    name: str
    count: int


class DashboardSummaryResponse(StrictResponse):
    """Response schema for get_dashboard_summary."""

    today: str
    total: int
    completed: int
    pending: int
    in_progress: int
    in_progress_combined: int
    overdue: int
    overdue_job_ids: list[str]
    status_distribution: list[StatusSlice]
    category_counts: list[CategoryCount]


class FilterJobsRequest(DbPathMixin, TodayMixin, StrictIgnoreRequest):
    """Request schema for filter_jobs."""

    filter_key: str
    search: Optional[str] = None

    @field_validator("filter_key")
    @classmethod
    def validate_filter_key(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("cannot be empty")
        return value


class FilterJobsResponse(StrictResponse):
    """Response schema for filter_jobs."""

    filter_key: str
    title: str
    count: int
    jobs: list[dict[str, Any]]


class CategoryInfo(StrictResponse):
    """One category of the taxonomy with its sub-categories."""

    name: str
    sub_categories: list[str]
    has_activation_date: bool


class ListCategoriesResponse(StrictResponse):
    """Response schema for list_categories."""

    count: int
    categories: list[CategoryInfo]
