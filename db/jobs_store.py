"""
SQLite-backed job store.

Provides schema bootstrap, ordered reads, and the four collection mutations
(add, update, delete, bulk-add). Every mutation runs in its own transaction
together with the activity-log row that describes it; bulk-add inserts the
whole batch in one transaction.
"""

import logging
import sqlite3
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from db.store import JobStore, build_activity_entry, check_update_fields, describe_update
from models.errors import (
    create_db_error,
    create_job_not_found_error,
)
from models.job import ActivityLogEntry, Job, to_job
from models.status import ActivityAction
from utils.path_resolution import resolve_db_path
from utils.validation import get_current_utc_timestamp

logger = logging.getLogger(__name__)

JOB_COLUMNS = (
    "id",
    "category",
    "sub_category",
    "date_input",
    "branch_dept",
    "job_type",
    "status",
    "deadline",
    "activation_date",
    "keterangan",
    "notes",
    "created_by",
)


def ensure_parent_dirs(db_path: Path) -> None:
    """
    Ensure parent directories exist for the database file.

    Raises:
        ToolError: If directory creation fails
    """
    try:
        db_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise create_db_error(
            f"Failed to create parent directories: {str(e)}", retryable=False, original_error=e
        ) from e


def bootstrap_schema(conn: sqlite3.Connection) -> None:
    """
    Bootstrap the jobs and activity_log tables if they don't exist.

    ``seq`` preserves insertion order, which is the order every list view
    returns. The operation is idempotent.

    Raises:
        ToolError: If schema creation fails
    """
    try:
        conn.execute("""
            CREATE TABLE IF NOT EXISTS jobs (
                seq INTEGER PRIMARY KEY AUTOINCREMENT,
                id TEXT NOT NULL UNIQUE,
                category TEXT NOT NULL,
                sub_category TEXT NOT NULL,
                date_input TEXT NOT NULL,
                branch_dept TEXT NOT NULL,
                job_type TEXT NOT NULL,
                status TEXT NOT NULL DEFAULT 'Pending',
                deadline TEXT NOT NULL,
                activation_date TEXT,
                keterangan TEXT,
                notes TEXT,
                created_by TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT
            )
        """)

        conn.execute("""
            CREATE INDEX IF NOT EXISTS idx_jobs_category
            ON jobs(category, sub_category)
        """)

        conn.execute("""
            CREATE TABLE IF NOT EXISTS activity_log (
                seq INTEGER PRIMARY KEY AUTOINCREMENT,
                id TEXT NOT NULL UNIQUE,
                timestamp TEXT NOT NULL,
                user TEXT NOT NULL,
                action TEXT NOT NULL,
                description TEXT NOT NULL,
                category TEXT
            )
        """)

        conn.commit()

    except sqlite3.Error as e:
        raise create_db_error(
            f"Failed to bootstrap schema: {str(e)}", retryable=False, original_error=e
        ) from e


class JobsStore:
    """
    Context manager implementing the JobStore protocol on SQLite.

    Usage:
        with JobsStore(db_path) as store:
            jobs = store.list_jobs()
            store.bulk_add_jobs(new_jobs, actor="ops@example.com")
    """

    def __init__(self, db_path: Optional[str] = None):
        """
        Initialize store with database path.

        Args:
            db_path: Optional database path override
        """
        self.db_path = db_path
        self.resolved_path: Optional[Path] = None
        self.conn: Optional[sqlite3.Connection] = None

    def __enter__(self):
        """
        Open connection and ensure schema.

        The database file is created on first use.

        Raises:
            ToolError: If database operations fail
        """
        self.resolved_path = resolve_db_path(self.db_path)

        if self.resolved_path.exists() and not self.resolved_path.is_file():
            raise create_db_error(
                f"Database path is not a file: {self.resolved_path.name}", retryable=False
            )

        ensure_parent_dirs(self.resolved_path)

        try:
            self.conn = sqlite3.connect(str(self.resolved_path))
            self.conn.row_factory = sqlite3.Row
            bootstrap_schema(self.conn)
            return self

        except sqlite3.OperationalError as e:
            raise create_db_error(str(e), retryable=True, original_error=e) from e

        except sqlite3.Error as e:
            raise create_db_error(str(e), retryable=False, original_error=e) from e

    def __exit__(self, exc_type, exc_val, exc_tb):
        """
        Close connection always.

        Returns:
            False to propagate exceptions
        """
        if self.conn is not None:
            self.conn.close()
            self.conn = None

        return False

    @contextmanager
    def _transaction(self):
        """
        Run the enclosed statements as one transaction.

        Commits on success, rolls back on any exception. SQLite errors are
        wrapped as DB_ERROR.
        """
        if self.conn is None:
            raise create_db_error("Connection not established", retryable=False)

        try:
            self.conn.execute("BEGIN")
            yield self.conn
            self.conn.commit()

        except sqlite3.Error as e:
            self._rollback()
            raise create_db_error(str(e), retryable=False, original_error=e) from e

        except BaseException:
            self._rollback()
            raise

    def _rollback(self) -> None:
        """Roll back, ignoring failures since we're already handling an error."""
        try:
            self.conn.rollback()
        except sqlite3.Error:
            pass

    def _insert_job(self, conn: sqlite3.Connection, job: Job, timestamp: str) -> None:
        values = job.model_dump()
        placeholders = ", ".join("?" * (len(JOB_COLUMNS) + 1))
        conn.execute(
            f"INSERT INTO jobs ({', '.join(JOB_COLUMNS)}, created_at) VALUES ({placeholders})",
            tuple(values[column] for column in JOB_COLUMNS) + (timestamp,),
        )

    def _insert_activity(self, conn: sqlite3.Connection, entry: ActivityLogEntry) -> None:
        conn.execute(
            """
            INSERT INTO activity_log (id, timestamp, user, action, description, category)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                entry.id,
                entry.timestamp,
                entry.user,
                entry.action,
                entry.description,
                entry.category,
            ),
        )

    def list_jobs(self) -> List[Job]:
        """
        Return every job in insertion order.

        Raises:
            ToolError: If query execution fails
        """
        if self.conn is None:
            raise create_db_error("Connection not established", retryable=False)

        try:
            cursor = self.conn.execute(f"SELECT {', '.join(JOB_COLUMNS)} FROM jobs ORDER BY seq ASC")
            return [to_job(row) for row in cursor.fetchall()]
        except sqlite3.Error as e:
            raise create_db_error(str(e), retryable=False, original_error=e) from e

    def get_job(self, job_id: str) -> Optional[Job]:
        if self.conn is None:
            raise create_db_error("Connection not established", retryable=False)

        try:
            cursor = self.conn.execute(
                f"SELECT {', '.join(JOB_COLUMNS)} FROM jobs WHERE id = ?", (job_id,)
            )
            row = cursor.fetchone()
        except sqlite3.Error as e:
            raise create_db_error(str(e), retryable=False, original_error=e) from e

        return to_job(row) if row is not None else None

    def add_job(self, job: Job) -> None:
        """Insert one job and its CREATE activity entry."""
        timestamp = get_current_utc_timestamp()
        with self._transaction() as conn:
            self._insert_job(conn, job, timestamp)
            self._insert_activity(
                conn,
                build_activity_entry(
                    ActivityAction.CREATE,
                    job.created_by,
                    f"Created job '{job.job_type}' in {job.category} / {job.sub_category}",
                    job.category,
                ),
            )

    def update_job(self, job_id: str, fields: Dict[str, Any], actor: Optional[str] = None) -> Job:
        """
        Apply a partial update to one job.

        Args:
            job_id: The job to update
            fields: Mapping of editable snake_case field name to new value
            actor: Identifier recorded in the activity log

        Returns:
            The updated job

        Raises:
            ToolError: JOB_NOT_FOUND if no job has this id, VALIDATION_ERROR
                for non-editable fields
        """
        check_update_fields(fields)

        assignments = ", ".join(f"{name} = ?" for name in fields)
        params = [
            value.value if isinstance(value, Enum) else value for value in fields.values()
        ]

        with self._transaction() as conn:
            cursor = conn.execute(
                f"UPDATE jobs SET {assignments}, updated_at = ? WHERE id = ?",
                (*params, get_current_utc_timestamp(), job_id),
            )
            if cursor.rowcount == 0:
                raise create_job_not_found_error(job_id)

            row = conn.execute(
                f"SELECT {', '.join(JOB_COLUMNS)} FROM jobs WHERE id = ?", (job_id,)
            ).fetchone()
            updated = to_job(row)

            self._insert_activity(
                conn,
                build_activity_entry(
                    ActivityAction.UPDATE, actor, describe_update(job_id, fields), updated.category
                ),
            )

        return updated

    def delete_job(self, job_id: str, actor: Optional[str] = None) -> None:
        """
        Delete one job.

        Raises:
            ToolError: JOB_NOT_FOUND if no job has this id
        """
        with self._transaction() as conn:
            row = conn.execute("SELECT category FROM jobs WHERE id = ?", (job_id,)).fetchone()
            if row is None:
                raise create_job_not_found_error(job_id)

            conn.execute("DELETE FROM jobs WHERE id = ?", (job_id,))
            self._insert_activity(
                conn,
                build_activity_entry(
                    ActivityAction.DELETE, actor, f"Deleted job {job_id}", row["category"]
                ),
            )

    def bulk_add_jobs(self, jobs: List[Job], actor: Optional[str] = None) -> int:
        """
        Insert a batch of jobs in a single transaction.

        Either every job in the batch is stored or none is.

        Returns:
            Number of jobs inserted
        """
        if not jobs:
            return 0

        timestamp = get_current_utc_timestamp()
        with self._transaction() as conn:
            for job in jobs:
                self._insert_job(conn, job, timestamp)
            self._insert_activity(
                conn,
                build_activity_entry(
                    ActivityAction.BULK_IMPORT, actor, f"Imported {len(jobs)} jobs"
                ),
            )

        logger.info(f"Bulk-added {len(jobs)} jobs")
        return len(jobs)

    def list_activity(self, limit: int) -> List[ActivityLogEntry]:
        """Return up to ``limit`` activity entries, newest first."""
        if self.conn is None:
            raise create_db_error("Connection not established", retryable=False)

        try:
            cursor = self.conn.execute(
                """
                SELECT id, timestamp, user, action, description, category
                FROM activity_log
                ORDER BY seq DESC
                LIMIT ?
                """,
                (limit,),
            )
            return [ActivityLogEntry.model_validate(dict(row)) for row in cursor.fetchall()]
        except sqlite3.Error as e:
            raise create_db_error(str(e), retryable=False, original_error=e) from e


@contextmanager
def open_store(db_path: Optional[str] = None, store: Optional[JobStore] = None):
    """
    Yield ``store`` when one is injected, else a SQLite store for ``db_path``.

    The SQLite connection is closed when the block exits.
    """
    if store is not None:
        yield store
        return

    with JobsStore(db_path) as sqlite_store:
        yield sqlite_store
