"""Tests for the one-import-at-a-time guard."""

import threading

import pytest

from models.errors import ErrorCode, ToolError
from utils.import_guard import ImportGuard


class TestImportGuard:
    def test_not_busy_initially(self):
        assert ImportGuard().busy is False

    def test_busy_while_held(self):
        guard = ImportGuard()

        with guard.hold():
            assert guard.busy is True

        assert guard.busy is False

    def test_second_hold_rejected(self):
        guard = ImportGuard()

        with guard.hold():
            with pytest.raises(ToolError) as exc_info:
                with guard.hold():
                    pass

        assert exc_info.value.code == ErrorCode.IMPORT_IN_PROGRESS
        assert exc_info.value.retryable is True

    def test_released_after_exception(self):
        guard = ImportGuard()

        with pytest.raises(RuntimeError):
            with guard.hold():
                raise RuntimeError("parse failed")

        assert guard.busy is False

    def test_rejects_hold_from_another_thread(self):
        guard = ImportGuard()
        errors = []

        def second_import():
            try:
                with guard.hold():
                    pass
            except ToolError as e:
                errors.append(e.code)

        with guard.hold():
            worker = threading.Thread(target=second_import)
            worker.start()
            worker.join()

        assert errors == [ErrorCode.IMPORT_IN_PROGRESS]
