"""
Drill-down and category list filters.

Both filters return an ordered subsequence of the collection; nothing is
re-sorted.
"""

from datetime import date
from typing import Iterable, List, Optional

from models.job import Job
from models.status import JobStatus
from utils.aggregates import is_overdue

FILTER_TOTAL = "Total"
FILTER_OVERDUE = "Overdue"
FILTER_IN_PROGRESS = "In Progress"


def _contains(value: Optional[str], needle: str) -> bool:
    return bool(value) and needle in value.lower()


def matches_search(job: Job, search: str) -> bool:
    """Dashboard search over branch, job type, category and keterangan."""
    needle = search.lower()
    return (
        _contains(job.branch_dept, needle)
        or _contains(job.job_type, needle)
        or _contains(job.category, needle)
        or _contains(job.keterangan, needle)
    )


def filter_jobs(
    jobs: List[Job],
    filter_key: str,
    today: date,
    categories: Iterable[str],
    search: Optional[str] = None,
) -> List[Job]:
    """
    Apply a dashboard drill-down filter.

    Filter keys:
        - "Total": every job
        - "Overdue": deadline before today and not Completed
        - "In Progress": In Progress or Pending (the card groups both)
        - a known category name: jobs in that category
        - anything else: jobs whose stored status equals the key

    Args:
        jobs: The full collection
        filter_key: Drill-down key
        today: Local calendar date for the overdue predicate
        categories: Known category names
        search: Optional case-insensitive search term

    Returns:
        Matching jobs in collection order
    """
    if filter_key == FILTER_TOTAL:
        result = list(jobs)
    elif filter_key == FILTER_OVERDUE:
        result = [j for j in jobs if is_overdue(j, today)]
    elif filter_key == FILTER_IN_PROGRESS:
        result = [
            j for j in jobs if j.status in (JobStatus.IN_PROGRESS, JobStatus.PENDING)
        ]
    elif filter_key in set(categories):
        result = [j for j in jobs if j.category == filter_key]
    else:
        result = [j for j in jobs if j.status == filter_key]

    if search:
        result = [j for j in result if matches_search(j, search)]

    return result


def filter_title(filter_key: str, categories: Iterable[str]) -> str:
    """Heading shown above a drill-down list."""
    if filter_key == FILTER_IN_PROGRESS:
        return "Dalam Proses & Pending"
    if filter_key in set(categories):
        return f"Kategori: {filter_key}"
    return filter_key


def filter_category_jobs(
    jobs: List[Job],
    category: str,
    sub_category: str,
    search: Optional[str] = None,
) -> List[Job]:
    """
    Jobs of one category view, optionally narrowed by a search term.

    The category list searches branch, job type and keterangan only.
    """
    needle = (search or "").lower()
    return [
        j
        for j in jobs
        if j.category == category
        and j.sub_category == sub_category
        and (
            needle in j.branch_dept.lower()
            or needle in j.job_type.lower()
            or _contains(j.keterangan, needle)
        )
    ]
