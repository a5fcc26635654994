"""
Centralized, type-safe status definitions for JobTracker.

``JobStatus`` lists every value that can appear in the ``status`` column.
Only three of them are written by manual edits; ``Overdue`` is a derived
display state and reaches storage only when an imported CSV row spells it
out literally.

The Enum inherits from ``(str, Enum)`` so that members compare equal to
plain strings and serialize naturally to JSON at API boundaries.
"""

from enum import Enum


class JobStatus(str, Enum):
    """Enum for statuses used in the ``jobs`` table."""

    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    OVERDUE = "Overdue"


# Values accepted from the create/edit form and inline status edits.
STORED_STATUSES = (JobStatus.PENDING, JobStatus.IN_PROGRESS, JobStatus.COMPLETED)

# Values the CSV importer passes through verbatim; anything else becomes Pending.
IMPORT_PASSTHROUGH_STATUSES = (JobStatus.IN_PROGRESS, JobStatus.COMPLETED, JobStatus.OVERDUE)


class ActivityAction(str, Enum):
    """Actions recorded in the activity log."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    BULK_IMPORT = "BULK_IMPORT"
