"""
Input validation utilities for the JobTracker MCP tools.

Validates job identifiers, statuses, calendar dates, form fields and the
category context, raising VALIDATION_ERROR ToolErrors with actionable
messages.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic.alias_generators import to_camel

from config import get_config
from models.errors import create_validation_error
from models.job import EDITABLE_FIELDS, Job, User, is_production_master
from models.status import STORED_STATUSES
from utils.dates import parse_calendar_date

# Constants for validation
MIN_ACTIVITY_LIMIT = 1
MAX_ACTIVITY_LIMIT = 1000

# Form fields that may not be blank once provided
REQUIRED_TEXT_FIELDS = ("date_input", "branch_dept", "job_type", "deadline")

DATE_FIELDS = ("date_input", "deadline", "activation_date")

IMMUTABLE_FIELDS = ("id", "category", "sub_category", "created_by")

# camelCase alias -> field name, plus identity entries for snake_case input
_FIELD_NAMES: Dict[str, str] = {}
for _name in Job.model_fields:
    _FIELD_NAMES[_name] = _name
    _FIELD_NAMES[to_camel(_name)] = _name


def get_current_utc_timestamp() -> str:
    """
    Get the current UTC timestamp in ISO 8601 format.

    Returns:
        ISO 8601 timestamp string with Z suffix and millisecond precision
    """
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def validate_job_id(job_id) -> str:
    """
    Validate a job identifier.

    Raises:
        ToolError: If job_id is not a non-empty string
    """
    if job_id is None:
        raise create_validation_error("Invalid job id: cannot be null")

    if not isinstance(job_id, str):
        raise create_validation_error(
            f"Invalid job id type: expected string, got {type(job_id).__name__}"
        )

    if not job_id.strip():
        raise create_validation_error("Invalid job id: cannot be empty")

    return job_id.strip()


def validate_stored_status(status) -> str:
    """
    Validate a status written by the form or an inline edit.

    Only Pending, In Progress and Completed may be written this way; Overdue
    is derived from the deadline.

    Raises:
        ToolError: If status is invalid
    """
    if status is None:
        raise create_validation_error("Invalid status: cannot be null")

    if not isinstance(status, str):
        raise create_validation_error(
            f"Invalid status type: expected string, got {type(status).__name__}"
        )

    if not status:
        raise create_validation_error("Invalid status: cannot be empty")

    if status != status.strip():
        raise create_validation_error(
            f"Invalid status: '{status}' contains leading or trailing whitespace"
        )

    allowed = [s.value for s in STORED_STATUSES]
    if status not in allowed:
        raise create_validation_error(
            f"Invalid status value: '{status}'. Allowed values are: {', '.join(allowed)}"
        )

    return status


def validate_iso_date(value, field_name: str) -> str:
    """
    Validate a YYYY-MM-DD calendar date string.

    Raises:
        ToolError: If value is not a valid calendar date
    """
    if not isinstance(value, str):
        raise create_validation_error(
            f"Invalid {field_name} type: expected string, got {type(value).__name__}"
        )

    if parse_calendar_date(value) is None:
        raise create_validation_error(
            f"Invalid {field_name}: '{value}' is not a YYYY-MM-DD date"
        )

    return value.strip()


def validate_required_text(value, field_name: str) -> str:
    """
    Validate a required free-text form field.

    Raises:
        ToolError: If value is missing, not a string, or blank
    """
    if value is None:
        raise create_validation_error(f"Missing required field: '{field_name}'")

    if not isinstance(value, str):
        raise create_validation_error(
            f"Invalid {field_name} type: expected string, got {type(value).__name__}"
        )

    if not value.strip():
        raise create_validation_error(f"Invalid {field_name}: cannot be empty")

    return value.strip()


def validate_category_context(category: str, sub_category: str, taxonomy: Dict[str, List[str]]) -> None:
    """
    Validate that a category/sub-category pair exists in the taxonomy.

    Raises:
        ToolError: If the category or sub-category is unknown
    """
    if category not in taxonomy:
        allowed = ", ".join(taxonomy.keys())
        raise create_validation_error(
            f"Unknown category: '{category}'. Known categories are: {allowed}"
        )

    if sub_category not in taxonomy[category]:
        raise create_validation_error(
            f"Unknown sub-category '{sub_category}' for category '{category}'"
        )


def normalize_field_names(fields: Dict[str, Any]) -> Dict[str, Any]:
    """
    Map camelCase or snake_case keys to Job field names.

    Raises:
        ToolError: If a key is not a Job field
    """
    normalized = {}
    for key, value in fields.items():
        name = _FIELD_NAMES.get(key)
        if name is None:
            raise create_validation_error(f"Unknown job field: '{key}'")
        normalized[name] = value
    return normalized


def validate_update_fields(fields, category: str) -> Dict[str, Any]:
    """
    Validate a partial update for a job in ``category``.

    Args:
        fields: Mapping of field name (camelCase or snake_case) to new value
        category: Category of the job being edited

    Returns:
        Cleaned mapping keyed by snake_case field name

    Raises:
        ToolError: If the update is empty, touches an immutable field, or
            carries an invalid value
    """
    if not isinstance(fields, dict):
        raise create_validation_error(
            f"Invalid fields type: expected object, got {type(fields).__name__}"
        )

    if not fields:
        raise create_validation_error("Invalid fields: at least one field is required")

    normalized = normalize_field_names(fields)

    for name in normalized:
        if name in IMMUTABLE_FIELDS:
            raise create_validation_error(f"Field '{name}' cannot be changed after creation")
        if name not in EDITABLE_FIELDS:
            raise create_validation_error(f"Field '{name}' is not editable")

    cleaned: Dict[str, Any] = {}
    for name, value in normalized.items():
        if name == "status":
            cleaned[name] = validate_stored_status(value)
        elif name in REQUIRED_TEXT_FIELDS:
            value = validate_required_text(value, name)
            if name in DATE_FIELDS:
                value = validate_iso_date(value, name)
            cleaned[name] = value
        elif name == "activation_date":
            if not is_production_master(category) or value in (None, ""):
                cleaned[name] = None
            else:
                cleaned[name] = validate_iso_date(value, name)
        else:
            if value is not None and not isinstance(value, str):
                raise create_validation_error(
                    f"Invalid {name} type: expected string, got {type(value).__name__}"
                )
            cleaned[name] = value

    return cleaned


def validate_search(search: Optional[str]) -> Optional[str]:
    """Return the search term, or None when it is missing or blank."""
    if search is None:
        return None
    if not isinstance(search, str):
        raise create_validation_error(
            f"Invalid search type: expected string, got {type(search).__name__}"
        )
    if not search.strip():
        return None
    return search


def resolve_acting_user(acting_user: Optional[str]) -> User:
    """
    Resolve the acting user.

    Falls back to JOBTRACKER_DEFAULT_USER when the caller does not name one.

    Raises:
        ToolError: If no user can be resolved
    """
    if acting_user is not None:
        if not isinstance(acting_user, str) or not acting_user.strip():
            raise create_validation_error("Invalid acting_user: cannot be empty")
        return User(email=acting_user.strip())

    default_user = get_config().default_user
    if default_user:
        return User(email=default_user)

    raise create_validation_error(
        "Missing acting_user: pass acting_user or set JOBTRACKER_DEFAULT_USER"
    )


def validate_activity_limit(limit: Optional[int]) -> int:
    """
    Validate the activity-log page size.

    Raises:
        ToolError: If limit is not an integer within range
    """
    if limit is None:
        return get_config().activity_log_limit

    if isinstance(limit, bool) or not isinstance(limit, int):
        raise create_validation_error(
            f"Invalid limit type: expected integer, got {type(limit).__name__}"
        )

    if limit < MIN_ACTIVITY_LIMIT:
        raise create_validation_error(
            f"Invalid limit: {limit} is below minimum of {MIN_ACTIVITY_LIMIT}"
        )

    if limit > MAX_ACTIVITY_LIMIT:
        raise create_validation_error(
            f"Invalid limit: {limit} exceeds maximum of {MAX_ACTIVITY_LIMIT}"
        )

    return limit
