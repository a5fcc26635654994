"""
MCP tool handlers for the category job list.

Covers the scoped listing plus the manual entry form (create), the edit form
and inline status/deadline edits (update), and delete. Every mutation is
attributed to the acting user and recorded in the activity log by the store.
"""

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from db.jobs_store import open_store
from db.store import JobStore
from models.errors import ToolError, create_internal_error, create_job_not_found_error
from models.job import Job, is_production_master, new_job_id
from models.status import JobStatus
from schemas.jobs import (
    CreateJobRequest,
    DeleteJobRequest,
    DeleteJobResponse,
    JobMutationResponse,
    ListCategoryJobsRequest,
    ListCategoryJobsResponse,
    UpdateJobRequest,
)
from utils.aggregates import job_view
from utils.dates import format_date, resolve_today
from utils.job_filter import filter_category_jobs
from utils.pydantic_error_mapper import map_pydantic_validation_error
from utils.taxonomy import get_taxonomy
from utils.validation import (
    resolve_acting_user,
    validate_category_context,
    validate_iso_date,
    validate_job_id,
    validate_required_text,
    validate_search,
    validate_stored_status,
    validate_update_fields,
)

logger = logging.getLogger(__name__)


def build_job_from_form(request: CreateJobRequest, created_by: str) -> Job:
    """
    Validate the entry form and build a new job.

    dateInput defaults to today; status defaults to Pending. The activation
    date is required in the production-master category and dropped elsewhere.

    Raises:
        ToolError: VALIDATION_ERROR for a missing or malformed field
    """
    today = resolve_today(request.today)

    date_input = request.date_input if request.date_input is not None else format_date(today)
    date_input = validate_iso_date(validate_required_text(date_input, "date_input"), "date_input")
    deadline = validate_iso_date(validate_required_text(request.deadline, "deadline"), "deadline")

    status = JobStatus.PENDING.value
    if request.status is not None:
        status = validate_stored_status(request.status)

    activation_date = None
    if is_production_master(request.category):
        activation_date = validate_iso_date(
            validate_required_text(request.activation_date, "activation_date"),
            "activation_date",
        )

    return Job(
        id=new_job_id(),
        category=request.category,
        sub_category=request.sub_category,
        date_input=date_input,
        branch_dept=validate_required_text(request.branch_dept, "branch_dept"),
        job_type=validate_required_text(request.job_type, "job_type"),
        status=status,
        deadline=deadline,
        activation_date=activation_date,
        keterangan=request.keterangan or "",
        notes=request.notes,
        created_by=created_by,
    )


def create_job(args: Dict[str, Any], store: Optional[JobStore] = None) -> Dict[str, Any]:
    """
    Add one job from the manual entry form.

    Args:
        args: Dictionary containing parameters:
            - category (str, required): Must exist in the taxonomy
            - sub_category (str, required): Must belong to category
            - branch_dept, job_type, deadline (str, required)
            - date_input (str, optional): Defaults to today
            - status (str, optional): Pending, In Progress or Completed
            - activation_date (str): Required for the production-master category
            - keterangan, notes (str, optional)
            - acting_user (str, optional): Defaults to JOBTRACKER_DEFAULT_USER
            - today (str, optional): YYYY-MM-DD override
            - db_path (str, optional): Database path override
        store: Injected store; a SQLite store for db_path is opened otherwise

    Returns:
        {"success": true, "job": {...}} or an error dict
    """
    try:
        request = CreateJobRequest.model_validate(args)
        validate_category_context(request.category, request.sub_category, get_taxonomy())
        created_by = resolve_acting_user(request.acting_user).email
        job = build_job_from_form(request, created_by)

        with open_store(request.db_path, store) as job_store:
            job_store.add_job(job)

        logger.info(f"Created job {job.id} in {job.category} / {job.sub_category}")
        today = resolve_today(request.today)
        return JobMutationResponse(success=True, job=job_view(job, today)).model_dump()

    except ValidationError as e:
        return map_pydantic_validation_error(e).to_dict()

    except ToolError as e:
        return e.to_dict()

    except Exception as e:
        return create_internal_error(message=str(e), original_error=e).to_dict()


def update_job(args: Dict[str, Any], store: Optional[JobStore] = None) -> Dict[str, Any]:
    """
    Apply a partial update to one job.

    Inline edits from the list are updates of a single field (status or
    deadline). Field names may be camelCase or snake_case.

    Args:
        args: Dictionary containing parameters:
            - job_id (str, required)
            - fields (dict, required): Editable field name -> new value
            - acting_user (str, optional)
            - today (str, optional): YYYY-MM-DD override
            - db_path (str, optional)
        store: Injected store; a SQLite store for db_path is opened otherwise

    Returns:
        {"success": true, "job": {...}} or an error dict
    """
    try:
        request = UpdateJobRequest.model_validate(args)
        job_id = validate_job_id(request.job_id)
        actor = resolve_acting_user(request.acting_user).email

        with open_store(request.db_path, store) as job_store:
            current = job_store.get_job(job_id)
            if current is None:
                raise create_job_not_found_error(job_id)

            fields = validate_update_fields(request.fields, current.category)
            updated = job_store.update_job(job_id, fields, actor)

        logger.info(f"Updated job {job_id}: {', '.join(sorted(fields))}")
        today = resolve_today(request.today)
        return JobMutationResponse(success=True, job=job_view(updated, today)).model_dump()

    except ValidationError as e:
        return map_pydantic_validation_error(e).to_dict()

    except ToolError as e:
        return e.to_dict()

    except Exception as e:
        return create_internal_error(message=str(e), original_error=e).to_dict()


def delete_job(args: Dict[str, Any], store: Optional[JobStore] = None) -> Dict[str, Any]:
    """
    Delete one job.

    Returns:
        {"success": true, "id": str}, or a JOB_NOT_FOUND error dict for an
        unknown id
    """
    try:
        request = DeleteJobRequest.model_validate(args)
        job_id = validate_job_id(request.job_id)
        actor = resolve_acting_user(request.acting_user).email

        with open_store(request.db_path, store) as job_store:
            job_store.delete_job(job_id, actor)

        logger.info(f"Deleted job {job_id}")
        return DeleteJobResponse(success=True, id=job_id).model_dump()

    except ValidationError as e:
        return map_pydantic_validation_error(e).to_dict()

    except ToolError as e:
        return e.to_dict()

    except Exception as e:
        return create_internal_error(message=str(e), original_error=e).to_dict()


def list_category_jobs(args: Dict[str, Any], store: Optional[JobStore] = None) -> Dict[str, Any]:
    """
    List the jobs of one category view.

    The search term matches branch, job type and keterangan
    (case-insensitive). Rows keep collection order and carry isOverdue and
    displayStatus.

    Returns:
        Dictionary with category, sub_category, has_activation_date, count
        and jobs, or an error dict
    """
    try:
        request = ListCategoryJobsRequest.model_validate(args)
        validate_category_context(request.category, request.sub_category, get_taxonomy())
        search = validate_search(request.search)
        today = resolve_today(request.today)

        with open_store(request.db_path, store) as job_store:
            jobs = job_store.list_jobs()

        matched = filter_category_jobs(jobs, request.category, request.sub_category, search)

        response = ListCategoryJobsResponse(
            category=request.category,
            sub_category=request.sub_category,
            has_activation_date=is_production_master(request.category),
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
