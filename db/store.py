"""
Collection store contract.

The job collection is owned by a store; tool logic only consumes it through
these operations, so any implementation (SQLite, in-memory test double)
can be injected.
"""

import uuid
from typing import Any, Dict, List, Optional, Protocol

from models.errors import create_validation_error
from models.job import EDITABLE_FIELDS, ActivityLogEntry, Job
from models.status import ActivityAction
from utils.validation import get_current_utc_timestamp


class JobStore(Protocol):
    """Capability set the job tools are written against."""

    def list_jobs(self) -> List[Job]:
        """Return the whole collection in insertion order."""
        ...

    def get_job(self, job_id: str) -> Optional[Job]:
        ...

    def add_job(self, job: Job) -> None:
        ...

    def update_job(self, job_id: str, fields: Dict[str, Any], actor: Optional[str] = None) -> Job:
        """Apply a partial update and return the updated job."""
        ...

    def delete_job(self, job_id: str, actor: Optional[str] = None) -> None:
        ...

    def bulk_add_jobs(self, jobs: List[Job], actor: Optional[str] = None) -> int:
        """Add a batch as one logical unit; returns the number added."""
        ...

    def list_activity(self, limit: int) -> List[ActivityLogEntry]:
        """Return the newest activity-log entries first."""
        ...


def build_activity_entry(
    action: ActivityAction,
    actor: Optional[str],
    description: str,
    category: Optional[str] = None,
) -> ActivityLogEntry:
    """Build an activity-log entry stamped with the current UTC time."""
    return ActivityLogEntry(
        id=uuid.uuid4().hex,
        timestamp=get_current_utc_timestamp(),
        user=actor or "system",
        action=action,
        description=description,
        category=category,
    )


def describe_update(job_id: str, fields: Dict[str, Any]) -> str:
    return f"Updated job {job_id}: {', '.join(sorted(fields))}"


def check_update_fields(fields: Dict[str, Any]) -> None:
    """
    Reject an empty update or one naming a non-editable field.

    Raises:
        ToolError: VALIDATION_ERROR
    """
    if not fields:
        raise create_validation_error("Invalid fields: at least one field is required")

    for name in fields:
        if name not in EDITABLE_FIELDS:
            raise create_validation_error(f"Field '{name}' is not editable")
