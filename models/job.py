"""
Job, user and activity-log models.

``Job`` is the one record type shared by every tool. Fields are declared in
snake_case and serialized with camelCase aliases (``subCategory``,
``dateInput`` ...) so that payloads keep the field names of the dashboard
the data was first captured in. Both spellings are accepted on input.
"""

import uuid
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from models.status import ActivityAction, JobStatus

# Category whose jobs carry an activation date.
PRODUCTION_MASTER_CATEGORY = "Produksi Master Data"

# Fields the edit form and inline edits may change. id, category,
# sub_category and created_by are fixed at creation.
EDITABLE_FIELDS = (
    "date_input",
    "branch_dept",
    "job_type",
    "status",
    "deadline",
    "activation_date",
    "keterangan",
    "notes",
)


def new_job_id() -> str:
    """Generate an opaque unique job identifier."""
    return str(uuid.uuid4())


class CamelModel(BaseModel):
    """Base model serializing with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        extra="ignore",
    )


class Job(CamelModel):
    """
    One tracked unit of work.

    ``status`` is kept as the stored text. Writes are checked against the
    status set; rows read back may carry a value outside it, which the
    aggregates count as unrecognized.
    """

    id: str
    category: str
    sub_category: str
    date_input: str
    branch_dept: str
    job_type: str
    status: str = JobStatus.PENDING.value
    deadline: str
    activation_date: Optional[str] = None
    keterangan: Optional[str] = None
    notes: Optional[str] = None
    created_by: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to the camelCase JSON payload returned by tools."""
        return self.model_dump(by_alias=True)


class User(CamelModel):
    """Acting user; only ``email`` is consumed as the job attribution."""

    email: str
    name: str = ""
    role: Literal["Admin", "User"] = "User"


class ActivityLogEntry(CamelModel):
    """One row of the mutation audit trail."""

    id: str
    timestamp: str
    user: str
    action: ActivityAction
    description: str
    category: Optional[str] = None


def is_production_master(category: str) -> bool:
    """Whether jobs in ``category`` carry an activation date."""
    return category == PRODUCTION_MASTER_CATEGORY


def to_job(row: Dict[str, Any]) -> Job:
    """
    Map a database row (snake_case columns) to a ``Job``.

    Extra columns such as the insertion sequence are ignored.
    """
    return Job.model_validate(dict(row))
