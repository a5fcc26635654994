"""
Process-wide guard allowing one CSV import at a time.

A second import that starts while another is still running is rejected
with IMPORT_IN_PROGRESS rather than queued.
"""

import threading
from contextlib import contextmanager

from models.errors import create_import_in_progress_error


class ImportGuard:
    """Non-blocking mutual exclusion around import runs."""

    def __init__(self):
        self._lock = threading.Lock()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    @contextmanager
    def hold(self):
        """
        Hold the guard for the duration of an import.

        Raises:
            ToolError: IMPORT_IN_PROGRESS if another import holds the guard
        """
        if not self._lock.acquire(blocking=False):
            raise create_import_in_progress_error()
        try:
            yield
        finally:
            self._lock.release()


import_guard = ImportGuard()
