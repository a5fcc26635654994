"""
Path resolution helpers for repository-root anchored behavior.

These helpers ensure relative paths are interpreted from the JobTracker
repository root (or JOBTRACKER_ROOT override), not process cwd.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

from config import config

DEFAULT_DB_RELATIVE_PATH = Path("data/jobs.db")


def get_repo_root() -> Path:
    """
    Resolve JobTracker repository root.

    Resolution order:
    1. JOBTRACKER_ROOT environment variable
    2. Parent of the utils/ package
    """
    root_env = os.getenv("JOBTRACKER_ROOT")
    if root_env:
        return Path(root_env).expanduser().resolve()

    return Path(__file__).resolve().parents[1]


def resolve_repo_relative_path(path: Union[str, Path]) -> Path:
    """
    Resolve absolute path directly; resolve relative path from repo root.
    """
    path_obj = Path(path)
    if path_obj.is_absolute():
        return path_obj
    return get_repo_root() / path_obj


def resolve_templates_dir(templates_dir: str | None) -> Path:
    """
    Resolve the CSV template export directory.

    Default directory is <repo_root>/data/templates.
    """
    if templates_dir is None:
        return resolve_repo_relative_path(config.templates_dir)
    return resolve_repo_relative_path(templates_dir)


def resolve_db_path(db_path: str | None = None) -> Path:
    """
    Resolve database path with consistent precedence across tools.

    Resolution order:
    1. Explicit `db_path` argument
    2. `JOBTRACKER_DB`
    3. `JOBTRACKER_ROOT/data/jobs.db`
    4. `<repo_root>/data/jobs.db`
    """
    if db_path is not None:
        return resolve_repo_relative_path(db_path)

    db_env = os.getenv("JOBTRACKER_DB")
    if db_env:
        return resolve_repo_relative_path(db_env)

    root_env = os.getenv("JOBTRACKER_ROOT")
    if root_env:
        return Path(root_env).expanduser().resolve() / DEFAULT_DB_RELATIVE_PATH

    return resolve_repo_relative_path(DEFAULT_DB_RELATIVE_PATH)
