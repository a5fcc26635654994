#!/usr/bin/env python3
"""
MCP Server entry point for the JobTracker job monitoring tools.

Exposes the operational job tracker (dashboard summary and drill-downs,
per-category job lists, manual entry and edits, CSV bulk import and
template export, activity log) to LLM agents via the Model Context
Protocol using the FastMCP framework.

Usage:
    python server.py

The server runs in stdio mode by default, which is the standard transport
for MCP servers that are invoked by LLM agents.
"""

import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from config import get_config
from tools.catalog import list_activity_log, list_categories
from tools.dashboard import filter_jobs, get_dashboard_summary
from tools.export_template import export_csv_template
from tools.import_jobs import import_jobs_csv
from tools.manage_jobs import create_job, delete_job, list_category_jobs, update_job

# Create FastMCP server instance
config = get_config()
mcp = FastMCP(
    name=config.server_name,
    instructions=(
        "This server tracks operational jobs (tariff adjustments, master-data "
        "production, validations, reports) grouped by category and sub-category."
        "\n\n"
        "READ TOOLS:\n"
        "Use list_categories to discover the category/sub-category views. "
        "Use get_dashboard_summary for totals, per-status counts, overdue count and chart series. "
        "Use filter_jobs to drill down from a card ('Total', 'Overdue', 'In Progress'), "
        "a status slice or a category bar. "
        "Use list_category_jobs to list one category view. "
        "Use list_activity_log to review recent changes."
        "\n\n"
        "WRITE TOOLS:\n"
        "Use create_job, update_job and delete_job for single jobs. "
        "Use import_jobs_csv to bulk-import a CSV (scoped to one view, or global with the "
        "category on each row) and export_csv_template to get the matching template. "
        "Overdue is derived from the deadline and is never set directly."
    ),
)


@mcp.tool(
    name="get_dashboard_summary",
    description=(
        "Summarize the whole job collection: total, completed, pending, in-progress and "
        "overdue counts, the status distribution series and per-category counts."
    ),
)
def get_dashboard_summary_tool(
    today: str | None = None,
    db_path: str | None = None,
) -> dict:
    """
    Compute the dashboard summary.

    A job is overdue when its deadline (YYYY-MM-DD) is before today and its
    status is not Completed. The In Progress card counts Pending jobs too
    (in_progress_combined).

    Args:
        today: Optional YYYY-MM-DD override for the overdue cut-off (default: local date).
        db_path: Optional database path override (default: data/jobs.db).

    Returns:
        Dictionary with today, total, completed, pending, in_progress,
        in_progress_combined, overdue, overdue_job_ids, status_distribution
        and category_counts, or {"error": {"code", "message", "retryable"}}.
    """
    args: dict[str, Any] = {}
    if today is not None:
        args["today"] = today
    if db_path is not None:
        args["db_path"] = db_path

    return get_dashboard_summary(args)


@mcp.tool(
    name="filter_jobs",
    description=(
        "Drill down into the collection by a dashboard filter key: 'Total', 'Overdue', "
        "'In Progress' (includes Pending), a category name, or a status. "
        "Optionally narrowed by a case-insensitive search term."
    ),
)
def filter_jobs_tool(
    filter_key: str,
    search: str | None = None,
    today: str | None = None,
    db_path: str | None = None,
) -> dict:
    """
    List the jobs behind a summary card, chart slice or category bar.

    Args:
        filter_key: 'Total', 'Overdue', 'In Progress', a category name, or a status value.
        search: Optional search over branch/dept, job type, category and keterangan.
        today: Optional YYYY-MM-DD override for the overdue cut-off.
        db_path: Optional database path override.

    Returns:
        {"filter_key": str, "title": str, "count": int, "jobs": [...]} with
        jobs in collection order, each carrying isOverdue and displayStatus.
    """
    args: dict[str, Any] = {"filter_key": filter_key}
    if search is not None:
        args["search"] = search
    if today is not None:
        args["today"] = today
    if db_path is not None:
        args["db_path"] = db_path

    return filter_jobs(args)


@mcp.tool(
    name="list_category_jobs",
    description=(
        "List the jobs of one category/sub-category view, optionally filtered by a search "
        "over branch/dept, job type and keterangan."
    ),
)
def list_category_jobs_tool(
    category: str,
    sub_category: str,
    search: str | None = None,
    today: str | None = None,
    db_path: str | None = None,
) -> dict:
    """
    List one category view.

    Args:
        category: Category name (see list_categories).
        sub_category: Sub-category within the category.
        search: Optional case-insensitive search term.
        today: Optional YYYY-MM-DD override for the overdue cut-off.
        db_path: Optional database path override.

    Returns:
        {"category", "sub_category", "has_activation_date", "count", "jobs"}
        or an error dict.
    """
    args: dict[str, Any] = {"category": category, "sub_category": sub_category}
    if search is not None:
        args["search"] = search
    if today is not None:
        args["today"] = today
    if db_path is not None:
        args["db_path"] = db_path

    return list_category_jobs(args)


@mcp.tool(
    name="create_job",
    description=(
        "Add one job to a category view. Requires branch_dept, job_type and deadline; "
        "activation_date is required for 'Produksi Master Data'."
    ),
)
def create_job_tool(
    category: str,
    sub_category: str,
    branch_dept: str,
    job_type: str,
    deadline: str,
    date_input: str | None = None,
    status: str | None = None,
    activation_date: str | None = None,
    keterangan: str | None = None,
    notes: str | None = None,
    acting_user: str | None = None,
    db_path: str | None = None,
) -> dict:
    """
    Create a job from the manual entry form.

    Args:
        category: Category name; must exist in the taxonomy.
        sub_category: Sub-category within the category.
        branch_dept: Branch or department.
        job_type: Job description.
        deadline: Deadline, YYYY-MM-DD.
        date_input: Input date, YYYY-MM-DD (default: today).
        status: 'Pending' (default), 'In Progress' or 'Completed'.
        activation_date: Activation date, YYYY-MM-DD (production-master category only).
        keterangan: Optional remark.
        notes: Optional free-form notes.
        acting_user: Email of the user creating the job (default: JOBTRACKER_DEFAULT_USER).
        db_path: Optional database path override.

    Returns:
        {"success": true, "job": {...}} or an error dict.
    """
    args: dict[str, Any] = {
        "category": category,
        "sub_category": sub_category,
        "branch_dept": branch_dept,
        "job_type": job_type,
        "deadline": deadline,
    }
    if date_input is not None:
        args["date_input"] = date_input
    if status is not None:
        args["status"] = status
    if activation_date is not None:
        args["activation_date"] = activation_date
    if keterangan is not None:
        args["keterangan"] = keterangan
    if notes is not None:
        args["notes"] = notes
    if acting_user is not None:
        args["acting_user"] = acting_user
    if db_path is not None:
        args["db_path"] = db_path

    return create_job(args)


@mcp.tool(
    name="update_job",
    description=(
        "Update fields of one job (dateInput, branchDept, jobType, status, deadline, "
        "activationDate, keterangan, notes). Status may be Pending, In Progress or Completed."
    ),
)
def update_job_tool(
    job_id: str,
    fields: dict[str, Any],
    acting_user: str | None = None,
    today: str | None = None,
    db_path: str | None = None,
) -> dict:
    """
    Apply a partial update to one job.

    Args:
        job_id: Identifier of the job.
        fields: Field name (camelCase or snake_case) to new value.
            Example: {"status": "Completed"} or {"deadline": "2024-04-01"}.
        acting_user: Email of the user making the change.
        today: Optional YYYY-MM-DD override for the overdue cut-off.
        db_path: Optional database path override.

    Returns:
        {"success": true, "job": {...}} or an error dict
        (JOB_NOT_FOUND for an unknown id).
    """
    args: dict[str, Any] = {"job_id": job_id, "fields": fields}
    if acting_user is not None:
        args["acting_user"] = acting_user
    if today is not None:
        args["today"] = today
    if db_path is not None:
        args["db_path"] = db_path

    return update_job(args)


@mcp.tool(
    name="delete_job",
    description="Delete one job by id.",
)
def delete_job_tool(
    job_id: str,
    acting_user: str | None = None,
    db_path: str | None = None,
) -> dict:
    """
    Delete one job.

    Args:
        job_id: Identifier of the job.
        acting_user: Email of the user deleting the job.
        db_path: Optional database path override.

    Returns:
        {"success": true, "id": str} or an error dict.
    """
    args: dict[str, Any] = {"job_id": job_id}
    if acting_user is not None:
        args["acting_user"] = acting_user
    if db_path is not None:
        args["db_path"] = db_path

    return delete_job(args)


@mcp.tool(
    name="import_jobs_csv",
    description=(
        "Bulk-import jobs from CSV text or a CSV file. layout='scoped' imports into one "
        "category view; layout='global' reads the category from each row. The first line "
        "is a header; columns are separated by ',' or ';'. Malformed rows are skipped."
    ),
)
def import_jobs_csv_tool(
    layout: str = "scoped",
    category: str | None = None,
    sub_category: str | None = None,
    csv_text: str | None = None,
    file_path: str | None = None,
    acting_user: str | None = None,
    today: str | None = None,
    db_path: str | None = None,
) -> dict:
    """
    Bulk-import jobs.

    Scoped columns: date, branch/dept, job type, status, deadline, keterangan
    and, for 'Produksi Master Data', activation date (at least 5 columns).
    Global columns: category, sub-category, date, branch/dept, job type,
    status, deadline, keterangan (at least 7 columns).

    Args:
        layout: 'scoped' (default) or 'global'.
        category: Target category (scoped layout).
        sub_category: Target sub-category (scoped layout).
        csv_text: File content. Provide this or file_path.
        file_path: Path to a UTF-8 CSV file.
        acting_user: Email of the importing user.
        today: Optional YYYY-MM-DD used for blank date cells.
        db_path: Optional database path override.

    Returns:
        {"success", "layout", "imported_count", "skipped_count", "total_lines",
        "message", "job_ids"}. success is false when no row was accepted.
        IMPORT_IN_PROGRESS is returned while another import is running.
    """
    args: dict[str, Any] = {"layout": layout}
    if category is not None:
        args["category"] = category
    if sub_category is not None:
        args["sub_category"] = sub_category
    if csv_text is not None:
        args["csv_text"] = csv_text
    if file_path is not None:
        args["file_path"] = file_path
    if acting_user is not None:
        args["acting_user"] = acting_user
    if today is not None:
        args["today"] = today
    if db_path is not None:
        args["db_path"] = db_path

    return import_jobs_csv(args)


@mcp.tool(
    name="export_csv_template",
    description=(
        "Write the CSV import template for a category view (or the global template when "
        "no category is given) and return its filename, path and content."
    ),
)
def export_csv_template_tool(
    category: str | None = None,
    sub_category: str | None = None,
    templates_dir: str | None = None,
    today: str | None = None,
) -> dict:
    """
    Export an import template.

    Args:
        category: Category of the view (omit for the global template).
        sub_category: Sub-category of the view.
        templates_dir: Output directory override (default: data/templates).
        today: Optional YYYY-MM-DD for the example row.

    Returns:
        {"layout", "filename", "path", "content"} or an error dict.
    """
    args: dict[str, Any] = {}
    if category is not None:
        args["category"] = category
    if sub_category is not None:
        args["sub_category"] = sub_category
    if templates_dir is not None:
        args["templates_dir"] = templates_dir
    if today is not None:
        args["today"] = today

    return export_csv_template(args)


@mcp.tool(
    name="list_categories",
    description="List categories and their sub-categories in display order.",
)
def list_categories_tool() -> dict:
    """
    List the category taxonomy.

    Returns:
        {"count": int, "categories": [{"name", "sub_categories", "has_activation_date"}]}
    """
    return list_categories()


@mcp.tool(
    name="list_activity_log",
    description="List recent job changes (create, update, delete, bulk import), newest first.",
)
def list_activity_log_tool(
    limit: int | None = None,
    db_path: str | None = None,
) -> dict:
    """
    Review the activity log.

    Args:
        limit: Number of entries, 1-1000 (default: JOBTRACKER_ACTIVITY_LOG_LIMIT).
        db_path: Optional database path override.

    Returns:
        {"count": int, "entries": [{"id", "timestamp", "user", "action",
        "description", "category"}]}
    """
    args: dict[str, Any] = {}
    if limit is not None:
        args["limit"] = limit
    if db_path is not None:
        args["db_path"] = db_path

    return list_activity_log(args)


def main():
    """
    Main entry point for the MCP server.

    Runs the server in stdio mode, which is the standard transport
    for MCP servers that are invoked by LLM agents.
    """
    config.setup_logging()

    logger = logging.getLogger(__name__)
    logger.info("Starting JobTracker MCP Server")
    logger.info(f"Server name: {config.server_name}")
    logger.info(f"Database path: {config.db_path}")

    warnings = config.validate()
    for warning in warnings:
        logger.warning(warning)

    logger.info("Server starting in stdio mode")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
