"""
MCP tool handlers for the dashboard: summary cards, charts and drill-downs.

Both tools are read-only. Overdue is computed against "today" on every call
and never written back.
"""

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from db.jobs_store import open_store
from db.store import JobStore
from models.errors import ToolError, create_internal_error
from schemas.dashboard import (
    DashboardSummaryResponse,
    FilterJobsRequest,
    FilterJobsResponse,
    GetDashboardSummaryRequest,
)
from utils.aggregates import compute_summary, job_view
from utils.dates import format_date, resolve_today
from utils.job_filter import filter_jobs as apply_filter
from utils.job_filter import filter_title
from utils.pydantic_error_mapper import map_pydantic_validation_error
from utils.taxonomy import get_taxonomy
from utils.validation import validate_search

logger = logging.getLogger(__name__)


def get_dashboard_summary(args: Dict[str, Any], store: Optional[JobStore] = None) -> Dict[str, Any]:
    """
    Compute the dashboard summary for the whole collection.

    Args:
        args: Dictionary containing optional parameters:
            - today (str): YYYY-MM-DD override for the overdue cut-off
            - db_path (str): Database path override
        store: Injected store; a SQLite store for db_path is opened otherwise

    Returns:
        Dictionary with structure:
        {
            "today": str,
            "total": int,
            "completed": int,
            "pending": int,
            "in_progress": int,
            "in_progress_combined": int,   # pending + in_progress
            "overdue": int,
            "overdue_job_ids": [str, ...],
            "status_distribution": [{"name": str, "value": int}, ...],
            "category_counts": [{"name": str, "count": int}, ...]
        }

        On error, returns:
        {
            "error": {
                "code": str,
                "message": str,
                "retryable": bool
            }
        }
    """
    try:
        request = GetDashboardSummaryRequest.model_validate(args)
        today = resolve_today(request.today)
        categories = list(get_taxonomy().keys())

        with open_store(request.db_path, store) as job_store:
            jobs = job_store.list_jobs()

        summary = compute_summary(jobs, today, categories)
        logger.debug(f"Dashboard summary: {summary['total']} jobs, {summary['overdue']} overdue")

        response = DashboardSummaryResponse(today=format_date(today), **summary)
        return response.model_dump()

    except ValidationError as e:
        return map_pydantic_validation_error(e).to_dict()

    except ToolError as e:
        return e.to_dict()

    except Exception as e:
        return create_internal_error(message=str(e), original_error=e).to_dict()


def filter_jobs(args: Dict[str, Any], store: Optional[JobStore] = None) -> Dict[str, Any]:
    """
    Drill down from a summary card, chart slice or category bar.

    Filter keys are "Total", "Overdue", "In Progress" (which also returns
    Pending jobs), a category name, or a literal stored status.

    Args:
        args: Dictionary containing parameters:
            - filter_key (str, required): Drill-down key
            - search (str, optional): Case-insensitive search over branch,
              job type, category and keterangan
            - today (str, optional): YYYY-MM-DD override
            - db_path (str, optional): Database path override
        store: Injected store; a SQLite store for db_path is opened otherwise

    Returns:
        Dictionary with filter_key, title, count and jobs (collection order,
        each annotated with isOverdue and displayStatus), or an error dict
    """
    try:
        request = FilterJobsRequest.model_validate(args)
        today = resolve_today(request.today)
        search = validate_search(request.search)
        categories = list(get_taxonomy().keys())

        with open_store(request.db_path, store) as job_store:
            jobs = job_store.list_jobs()

        matched = apply_filter(jobs, request.filter_key, today, categories, search)

        response = FilterJobsResponse(
            filter_key=request.filter_key,
            title=filter_title(request.filter_key, categories),
            count=len(matched),
            jobs=[job_view(job, today) for job in matched],
        )
        return response.model_dump()

    except ValidationError as e:
        return map_pydantic_validation_error(e).to_dict()

    except ToolError as e:
        return e.to_dict()

    except Exception as e:
        return create_internal_error(message=str(e), original_error=e).to_dict()
