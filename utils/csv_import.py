"""
CSV bulk-import parser.

Turns uploaded delimited text into new ``Job`` records. Two column layouts
exist:

- scoped: category and sub-category come from the calling view;
  columns are [date, branch, jobType, status, deadline, keterangan,
  activationDate?], at least 5 per row.
- global: each row names its own category and sub-category; columns are
  [category, subCategory, date, branch, jobType, status, deadline,
  keterangan], at least 7 per row.

The dialect is loose: lines end in CRLF or LF, the first line is always a
header, and columns are split on every comma or semicolon with no quoting.
A field that contains a delimiter is split as well.

Rows with too few columns or a blank leading column are dropped without
being reported.
"""

import logging
import re
from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel

from models.job import Job, is_production_master, new_job_id
from models.status import IMPORT_PASSTHROUGH_STATUSES, JobStatus
from utils.dates import format_date

logger = logging.getLogger(__name__)

LINE_SPLIT_RE = re.compile(r"\r\n|\n")
COLUMN_SPLIT_RE = re.compile(r"[,;]")

SCOPED_MIN_COLUMNS = 5
GLOBAL_MIN_COLUMNS = 7

DEFAULT_BRANCH_DEPT = "Unknown"
DEFAULT_JOB_TYPE = "Imported Job"


class ImportLayout(str, Enum):
    """Column layout of an uploaded file."""

    SCOPED = "scoped"
    GLOBAL = "global"


class ImportParseResult(BaseModel):
    """Parsed jobs plus line counts for logging."""

    jobs: List[Job]
    total_lines: int
    skipped_lines: int


def split_lines(text: str) -> List[str]:
    """Split text on CRLF or LF line endings."""
    return LINE_SPLIT_RE.split(text)


def split_columns(line: str) -> List[str]:
    """
    Split a line on every comma or semicolon.

    Examples:
        >>> split_columns("a,b;c")
        ['a', 'b', 'c']
    """
    return COLUMN_SPLIT_RE.split(line)


def _column(cols: List[str], index: int) -> str:
    """Stripped column value, or empty string when the column is missing."""
    if index < len(cols):
        return cols[index].strip()
    return ""


def resolve_import_status(raw: str) -> str:
    """
    Map a raw status cell to the stored status.

    In Progress, Completed and Overdue pass through verbatim; anything else,
    including blank and lowercase spellings, becomes Pending.
    """
    for status in IMPORT_PASSTHROUGH_STATUSES:
        if raw == status.value:
            return status.value
    return JobStatus.PENDING.value


def parse_scoped_line(
    cols: List[str],
    category: str,
    sub_category: str,
    created_by: Optional[str],
    today: date,
) -> Optional[Job]:
    """
    Build a job from a scoped-layout row, or None if the row is malformed.
    """
    if len(cols) < SCOPED_MIN_COLUMNS or not cols[0]:
        return None

    today_str = format_date(today)
    activation_date = None
    if is_production_master(category):
        activation_date = _column(cols, 6) or None

    return Job(
        id=new_job_id(),
        category=category,
        sub_category=sub_category,
        date_input=_column(cols, 0) or today_str,
        branch_dept=_column(cols, 1) or DEFAULT_BRANCH_DEPT,
        job_type=_column(cols, 2) or DEFAULT_JOB_TYPE,
        status=resolve_import_status(_column(cols, 3)),
        deadline=_column(cols, 4) or today_str,
        keterangan=_column(cols, 5),
        activation_date=activation_date,
        created_by=created_by,
    )


def parse_global_line(
    cols: List[str],
    created_by: Optional[str],
    today: date,
) -> Optional[Job]:
    """
    Build a job from a global-layout row, or None if the row is malformed.

    The global layout has no activation-date column.
    """
    if len(cols) < GLOBAL_MIN_COLUMNS or not cols[0] or not cols[1]:
        return None

    today_str = format_date(today)
    return Job(
        id=new_job_id(),
        category=_column(cols, 0),
        sub_category=_column(cols, 1),
        date_input=_column(cols, 2) or today_str,
        branch_dept=_column(cols, 3) or DEFAULT_BRANCH_DEPT,
        job_type=_column(cols, 4) or DEFAULT_JOB_TYPE,
        status=resolve_import_status(_column(cols, 5)),
        deadline=_column(cols, 6) or today_str,
        keterangan=_column(cols, 7),
        activation_date=None,
        created_by=created_by,
    )


def parse_import_text(
    text: str,
    layout: ImportLayout,
    created_by: Optional[str],
    today: date,
    category: Optional[str] = None,
    sub_category: Optional[str] = None,
) -> ImportParseResult:
    """
    Parse uploaded text into new jobs.

    Args:
        text: Full file content; the first line is a header and is skipped
        layout: Scoped or global column layout
        created_by: Importing user's identifier, stamped on every job
        today: Date substituted for blank date and deadline cells
        category: Category for scoped imports
        sub_category: Sub-category for scoped imports

    Returns:
        ImportParseResult with jobs in file order

    Raises:
        ValueError: If a scoped import is missing its category context
    """
    if layout == ImportLayout.SCOPED and (category is None or sub_category is None):
        raise ValueError("Scoped import requires category and sub_category")

    jobs: List[Job] = []
    total_lines = 0

    for line in split_lines(text)[1:]:
        if not line or not line.strip():
            continue

        total_lines += 1
        cols = split_columns(line)

        if layout == ImportLayout.SCOPED:
            job = parse_scoped_line(cols, category, sub_category, created_by, today)
        else:
            job = parse_global_line(cols, created_by, today)

        if job is not None:
            jobs.append(job)

    skipped = total_lines - len(jobs)
    if skipped:
        logger.debug(f"Dropped {skipped} malformed row(s) from {layout.value} import")

    return ImportParseResult(jobs=jobs, total_lines=total_lines, skipped_lines=skipped)


def decode_upload(data: bytes) -> str:
    """
    Decode uploaded file bytes as UTF-8 (a leading BOM is dropped).

    A file that is not valid UTF-8 decodes to empty text, which the importer
    reports as an empty import.
    """
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        logger.warning("Upload is not valid UTF-8; treating it as empty")
        return ""
