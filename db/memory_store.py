"""
In-memory JobStore.

Holds the collection in a Python list. Used as the test double for tool
logic and for dry runs that must not touch the database.
"""

from typing import Any, Dict, List, Optional

from db.store import build_activity_entry, check_update_fields, describe_update
from models.errors import create_db_error, create_job_not_found_error
from models.job import ActivityLogEntry, Job
from models.status import ActivityAction


class InMemoryJobStore:
    """
    List-backed implementation of the JobStore protocol.

    ``bulk_batches`` records each bulk-add call so callers can assert that a
    whole import arrived as one batch.
    """

    def __init__(self, jobs: Optional[List[Job]] = None):
        self.jobs: List[Job] = list(jobs or [])
        self.activity: List[ActivityLogEntry] = []
        self.bulk_batches: List[List[Job]] = []

    def list_jobs(self) -> List[Job]:
        return list(self.jobs)

    def get_job(self, job_id: str) -> Optional[Job]:
        for job in self.jobs:
            if job.id == job_id:
                return job
        return None

    def _index_of(self, job_id: str) -> int:
        for index, job in enumerate(self.jobs):
            if job.id == job_id:
                return index
        raise create_job_not_found_error(job_id)

    def _ensure_new_ids(self, jobs: List[Job]) -> None:
        existing = {job.id for job in self.jobs}
        for job in jobs:
            if job.id in existing:
                raise create_db_error(f"Duplicate job id: {job.id}")
            existing.add(job.id)

    def add_job(self, job: Job) -> None:
        self._ensure_new_ids([job])
        self.jobs.append(job)
        self.activity.append(
            build_activity_entry(
                ActivityAction.CREATE,
                job.created_by,
                f"Created job '{job.job_type}' in {job.category} / {job.sub_category}",
                job.category,
            )
        )

    def update_job(self, job_id: str, fields: Dict[str, Any], actor: Optional[str] = None) -> Job:
        check_update_fields(fields)
        index = self._index_of(job_id)
        updated = Job.model_validate({**self.jobs[index].model_dump(), **fields})
        self.jobs[index] = updated
        self.activity.append(
            build_activity_entry(
                ActivityAction.UPDATE, actor, describe_update(job_id, fields), updated.category
            )
        )
        return updated

    def delete_job(self, job_id: str, actor: Optional[str] = None) -> None:
        index = self._index_of(job_id)
        removed = self.jobs.pop(index)
        self.activity.append(
            build_activity_entry(
                ActivityAction.DELETE, actor, f"Deleted job {job_id}", removed.category
            )
        )

    def bulk_add_jobs(self, jobs: List[Job], actor: Optional[str] = None) -> int:
        self._ensure_new_ids(jobs)
        batch = list(jobs)
        self.bulk_batches.append(batch)
        self.jobs.extend(batch)
        self.activity.append(
            build_activity_entry(ActivityAction.BULK_IMPORT, actor, f"Imported {len(batch)} jobs")
        )
        return len(batch)

    def list_activity(self, limit: int) -> List[ActivityLogEntry]:
        return list(reversed(self.activity))[:limit]
