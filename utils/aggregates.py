"""
Dashboard aggregates.

Everything here is a pure function of the job collection and "today".
Overdue is derived on the fly: a job is overdue when its deadline is before
today and its status is not Completed. It is never written back.
"""

from datetime import date
from typing import Any, Dict, Iterable, List

from models.job import Job
from models.status import JobStatus
from utils.dates import parse_calendar_date

# Order of the status distribution series.
DISTRIBUTION_ORDER = (
    JobStatus.PENDING,
    JobStatus.IN_PROGRESS,
    JobStatus.COMPLETED,
    JobStatus.OVERDUE,
)


def is_overdue(job: Job, today: date) -> bool:
    """
    Whether ``job`` is overdue on ``today``.

    A deadline that is not a valid YYYY-MM-DD date never makes a job overdue.
    """
    if job.status == JobStatus.COMPLETED:
        return False
    deadline = parse_calendar_date(job.deadline)
    return deadline is not None and deadline < today


def display_status(job: Job, today: date) -> str:
    """Status label to show: Overdue when overdue, else the stored status."""
    if is_overdue(job, today):
        return JobStatus.OVERDUE.value
    return job.status


def job_view(job: Job, today: date) -> Dict[str, Any]:
    """Job payload annotated with its derived display state."""
    payload = job.to_payload()
    payload["isOverdue"] = is_overdue(job, today)
    payload["displayStatus"] = display_status(job, today)
    return payload


def count_by_category(jobs: Iterable[Job], categories: Iterable[str]) -> List[Dict[str, Any]]:
    """
    Count jobs per category.

    Every known category appears, in taxonomy order, even with zero jobs.
    Categories found only in the data follow in first-seen order.
    """
    counts: Dict[str, int] = {name: 0 for name in categories}
    for job in jobs:
        counts[job.category] = counts.get(job.category, 0) + 1
    return [{"name": name, "count": count} for name, count in counts.items()]


def compute_summary(jobs: List[Job], today: date, categories: Iterable[str]) -> Dict[str, Any]:
    """
    Compute the dashboard summary.

    Args:
        jobs: The full collection
        today: Local calendar date used for the overdue predicate
        categories: Known category names in taxonomy order

    Returns:
        Dictionary with total, per-status counts, overdue count and ids,
        the status distribution series and per-category counts
    """
    completed = sum(1 for j in jobs if j.status == JobStatus.COMPLETED)
    pending = sum(1 for j in jobs if j.status == JobStatus.PENDING)
    in_progress = sum(1 for j in jobs if j.status == JobStatus.IN_PROGRESS)
    overdue_ids = [j.id for j in jobs if is_overdue(j, today)]

    values = {
        JobStatus.PENDING: pending,
        JobStatus.IN_PROGRESS: in_progress,
        JobStatus.COMPLETED: completed,
        JobStatus.OVERDUE: len(overdue_ids),
    }

    return {
        "total": len(jobs),
        "completed": completed,
        "pending": pending,
        "in_progress": in_progress,
        "in_progress_combined": pending + in_progress,
        "overdue": len(overdue_ids),
        "overdue_job_ids": overdue_ids,
        "status_distribution": [
            {"name": status.value, "value": values[status]} for status in DISTRIBUTION_ORDER
        ],
        "category_counts": count_by_category(jobs, categories),
    }
