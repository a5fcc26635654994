"""
CSV import templates.

Each template is a header row naming the columns the importer expects plus
one example row. Column order must match utils.csv_import exactly; the
example row imports back into a job with the same values.
"""

from datetime import date
from typing import Optional, Tuple

from models.job import is_production_master
from utils.dates import add_days, format_date

SCOPED_HEADERS = [
    "Tanggal Input (YYYY-MM-DD)",
    "Cabang/Dept",
    "Jenis Pekerjaan",
    "Status",
    "Deadline (YYYY-MM-DD)",
    "Keterangan",
]
ACTIVATION_HEADER = "Tanggal Aktifasi (YYYY-MM-DD)"

GLOBAL_HEADERS = [
    "Kategori",
    "Sub Kategori",
    "Tanggal Input (YYYY-MM-DD)",
    "Cabang/Dept",
    "Jenis Pekerjaan",
    "Status",
    "Dateline (YYYY-MM-DD)",
    "Keterangan",
]

GLOBAL_TEMPLATE_FILENAME = "Template_Global_Upload.csv"

EXAMPLE_LEAD_DAYS = 7


def template_filename(category: Optional[str] = None, sub_category: Optional[str] = None) -> str:
    """
    Deterministic download filename.

    Examples:
        >>> template_filename("Penyesuaian", "Publish Rate")
        'Template_Penyesuaian_Publish Rate.csv'
        >>> template_filename()
        'Template_Global_Upload.csv'
    """
    if category is None:
        return GLOBAL_TEMPLATE_FILENAME
    return f"Template_{category}_{sub_category}.csv"


def build_scoped_template(category: str, today: date) -> str:
    """
    Template for importing into one category view.

    The production-master category gets a trailing activation-date column.
    """
    today_str = format_date(today)
    next_week = format_date(add_days(today, EXAMPLE_LEAD_DAYS))

    if is_production_master(category):
        headers = SCOPED_HEADERS + [ACTIVATION_HEADER]
        example = [today_str, "Jakarta", "Input Master Vendor", "Pending", next_week,
                   "Notes optional", today_str]
    else:
        headers = SCOPED_HEADERS
        example = [today_str, "Bandung", "Update Routing", "In Progress", next_week,
                   "Notes optional"]

    return ",".join(headers) + "\n" + ",".join(example)


def build_global_template(today: date) -> str:
    """Template for the dashboard-wide import, one category per row."""
    example = [
        "Penyesuaian",
        "Publish Rate",
        format_date(today),
        "Jakarta",
        "Update Tarif",
        "Pending",
        format_date(add_days(today, EXAMPLE_LEAD_DAYS)),
        "Catatan Tambahan",
    ]
    return ",".join(GLOBAL_HEADERS) + "\n" + ",".join(example)


def build_template(
    today: date,
    category: Optional[str] = None,
    sub_category: Optional[str] = None,
) -> Tuple[str, str]:
    """
    Build a template for a category view, or the global template when no
    category is given.

    Returns:
        Tuple of (filename, content)
    """
    if category is None:
        return template_filename(), build_global_template(today)
    return template_filename(category, sub_category), build_scoped_template(category, today)
