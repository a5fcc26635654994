"""
MCP tool handler for import_jobs_csv.

Parses an uploaded CSV (scoped to one category view, or global with the
category on each row), hands every accepted row to the store in a single
bulk-add, and reports the outcome. Only one import runs at a time.
"""

import logging
from datetime import date
from typing import Any, Dict, Optional

from pydantic import ValidationError

from db.jobs_store import open_store
from db.store import JobStore
from models.errors import ToolError, create_file_not_found_error, create_internal_error
from schemas.import_jobs import ImportJobsRequest, ImportJobsResponse
from utils.csv_import import ImportLayout, decode_upload, parse_import_text
from utils.dates import resolve_today
from utils.import_guard import import_guard
from utils.path_resolution import resolve_repo_relative_path
from utils.pydantic_error_mapper import map_pydantic_validation_error
from utils.taxonomy import get_taxonomy
from utils.validation import resolve_acting_user, validate_category_context

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Berhasil mengimport {count} data pekerjaan!"
GLOBAL_SUCCESS_MESSAGE = "Berhasil mengimport {count} data pekerjaan secara global!"
EMPTY_MESSAGE = (
    "Gagal membaca file atau format tidak sesuai. Pastikan menggunakan Template "
    "yang disediakan dan tidak ada baris kosong."
)
GLOBAL_EMPTY_MESSAGE = "Gagal membaca file. Pastikan menggunakan Template Global yang sesuai."


def read_upload(file_path: str) -> str:
    """
    Read an upload from disk and decode it.

    Raises:
        ToolError: FILE_NOT_FOUND if the file does not exist
    """
    path = resolve_repo_relative_path(file_path)
    if not path.is_file():
        raise create_file_not_found_error(str(path), "CSV file")
    return decode_upload(path.read_bytes())


def run_import(
    text: str,
    layout: ImportLayout,
    created_by: Optional[str],
    today: date,
    store: JobStore,
    category: Optional[str] = None,
    sub_category: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Import already-decoded CSV text into ``store``.

    Accepted rows are added with exactly one ``bulk_add_jobs`` call. When no
    row is accepted the store is not called and the outcome is unsuccessful.

    Args:
        text: File content including the header line
        layout: Scoped or global column layout
        created_by: Importing user's identifier
        today: Date substituted for blank date and deadline cells
        store: Collection store receiving the batch
        category: Category for scoped imports
        sub_category: Sub-category for scoped imports

    Returns:
        Dictionary with success, layout, imported_count, skipped_count,
        total_lines, message and job_ids

    Raises:
        ToolError: IMPORT_IN_PROGRESS if another import is running
    """
    with import_guard.hold():
        parsed = parse_import_text(
            text,
            layout,
            created_by=created_by,
            today=today,
            category=category,
            sub_category=sub_category,
        )

        if not parsed.jobs:
            logger.info(
                f"{layout.value.capitalize()} import accepted no rows "
                f"({parsed.skipped_lines} skipped)"
            )
            message = EMPTY_MESSAGE if layout == ImportLayout.SCOPED else GLOBAL_EMPTY_MESSAGE
            return ImportJobsResponse(
                success=False,
                layout=layout.value,
                imported_count=0,
                skipped_count=parsed.skipped_lines,
                total_lines=parsed.total_lines,
                message=message,
                job_ids=[],
            ).model_dump()

        imported = store.bulk_add_jobs(parsed.jobs, actor=created_by)

    logger.info(
        f"{layout.value.capitalize()} import added {imported} jobs "
        f"({parsed.skipped_lines} skipped)"
    )
    template = SUCCESS_MESSAGE if layout == ImportLayout.SCOPED else GLOBAL_SUCCESS_MESSAGE
    return ImportJobsResponse(
        success=True,
        layout=layout.value,
        imported_count=imported,
        skipped_count=parsed.skipped_lines,
        total_lines=parsed.total_lines,
        message=template.format(count=imported),
        job_ids=[job.id for job in parsed.jobs],
    ).model_dump()


def import_jobs_csv(args: Dict[str, Any], store: Optional[JobStore] = None) -> Dict[str, Any]:
    """
    Bulk-import jobs from CSV text or a CSV file.

    Args:
        args: Dictionary containing parameters:
            - layout (str, optional): "scoped" (default) or "global"
            - category, sub_category (str): Required for scoped imports and
              must exist in the taxonomy
            - csv_text (str): Inline file content, or
            - file_path (str): Path to the file (repo-relative or absolute)
            - acting_user (str, optional): Defaults to JOBTRACKER_DEFAULT_USER
            - today (str, optional): YYYY-MM-DD override
            - db_path (str, optional): Database path override
        store: Injected store; a SQLite store for db_path is opened otherwise

    Returns:
        Import outcome (see run_import). An empty import is not an error:
        it returns success=false with an explanatory message. Errors
        (validation, missing file, import already running) return:
        {
            "error": {
                "code": str,
                "message": str,
                "retryable": bool
            }
        }
    """
    try:
        request = ImportJobsRequest.model_validate(args)
        layout = ImportLayout(request.layout)

        if layout == ImportLayout.SCOPED:
            validate_category_context(request.category, request.sub_category, get_taxonomy())

        created_by = resolve_acting_user(request.acting_user).email
        today = resolve_today(request.today)

        if request.file_path is not None:
            text = read_upload(request.file_path)
        else:
            text = request.csv_text

        with open_store(request.db_path, store) as job_store:
            return run_import(
                text,
                layout,
                created_by=created_by,
                today=today,
                store=job_store,
                category=request.category if layout == ImportLayout.SCOPED else None,
                sub_category=request.sub_category if layout == ImportLayout.SCOPED else None,
            )

    except ValidationError as e:
        return map_pydantic_validation_error(e).to_dict()

    except ToolError as e:
        return e.to_dict()

    except Exception as e:
        return create_internal_error(message=str(e), original_error=e).to_dict()
