"""
Unit tests for error model and sanitization functions.

Tests error codes, error structure, and message sanitization.
"""

import pytest
from models.errors import (
    ErrorCode,
    ToolError,
    sanitize_path,
    sanitize_sql_error,
    sanitize_stack_trace,
    create_validation_error,
    create_file_not_found_error,
    create_job_not_found_error,
    create_import_in_progress_error,
    create_db_error,
    create_internal_error,
)


class TestErrorCode:
    """Tests for ErrorCode enum."""

    def test_all_error_codes_exist(self):
        """Test that all required error codes are defined."""
        assert ErrorCode.VALIDATION_ERROR == "VALIDATION_ERROR"
        assert ErrorCode.FILE_NOT_FOUND == "FILE_NOT_FOUND"
        assert ErrorCode.DB_ERROR == "DB_ERROR"
        assert ErrorCode.JOB_NOT_FOUND == "JOB_NOT_FOUND"
        assert ErrorCode.IMPORT_IN_PROGRESS == "IMPORT_IN_PROGRESS"
        assert ErrorCode.INTERNAL_ERROR == "INTERNAL_ERROR"

    def test_error_codes_are_strings(self):
        for code in ErrorCode:
            assert isinstance(code.value, str)


class TestToolError:
    """Tests for ToolError exception class."""

    def test_tool_error_creation(self):
        error = ToolError(code=ErrorCode.VALIDATION_ERROR, message="Test error", retryable=False)

        assert error.code == ErrorCode.VALIDATION_ERROR
        assert error.message == "Test error"
        assert error.retryable is False
        assert error.original_error is None
        assert str(error) == "Test error"

    def test_tool_error_with_original_exception(self):
        original = ValueError("Original error")
        error = ToolError(
            code=ErrorCode.INTERNAL_ERROR,
            message="Wrapped error",
            retryable=True,
            original_error=original,
        )

        assert error.original_error is original

    def test_to_dict_structure(self):
        error = ToolError(code=ErrorCode.DB_ERROR, message="boom", retryable=True)

        assert error.to_dict() == {
            "error": {"code": "DB_ERROR", "message": "boom", "retryable": True}
        }

    def test_tool_error_is_raisable(self):
        with pytest.raises(ToolError) as exc_info:
            raise create_validation_error("bad input")

        assert exc_info.value.code == ErrorCode.VALIDATION_ERROR


class TestSanitization:
    """Tests for message sanitizers."""

    def test_sanitize_absolute_path_keeps_basename(self):
        assert sanitize_path("/home/ops/data/jobs.db") == "jobs.db"

    def test_sanitize_relative_path_unchanged(self):
        assert sanitize_path("data/jobs.db") == "data/jobs.db"

    def test_sanitize_sql_removes_statement(self):
        message = sanitize_sql_error("near 'FROM': syntax error in SELECT * FROM jobs")

        assert "FROM jobs" not in message
        assert "[SQL query]" in message

    def test_sanitize_sql_removes_paths(self):
        message = sanitize_sql_error("unable to open /var/lib/app/jobs.db")

        assert "/var/lib/app/" not in message

    def test_sanitize_stack_trace_keeps_first_line(self):
        message = sanitize_stack_trace("KeyError: 'x'\n  File \"a.py\", line 1\n")

        assert message == "KeyError: 'x'"


class TestErrorFactories:
    """Tests for the error factory helpers."""

    def test_validation_error_not_retryable(self):
        error = create_validation_error("Invalid status")

        assert error.code == ErrorCode.VALIDATION_ERROR
        assert error.retryable is False

    def test_file_not_found_names_file_type(self):
        error = create_file_not_found_error("/tmp/upload/jobs.csv", "CSV file")

        assert error.code == ErrorCode.FILE_NOT_FOUND
        assert error.message == "CSV file not found: jobs.csv"

    def test_job_not_found_names_id(self):
        error = create_job_not_found_error("abc-123")

        assert error.code == ErrorCode.JOB_NOT_FOUND
        assert error.message == "Job not found: abc-123"
        assert error.retryable is False

    def test_import_in_progress_is_retryable(self):
        error = create_import_in_progress_error()

        assert error.code == ErrorCode.IMPORT_IN_PROGRESS
        assert error.retryable is True

    def test_db_error_prefix_and_sanitized(self):
        error = create_db_error("no such table: jobs\nTraceback ...", retryable=True)

        assert error.code == ErrorCode.DB_ERROR
        assert error.message == "Database error: no such table: jobs"
        assert error.retryable is True

    def test_internal_error_is_retryable(self):
        original = RuntimeError("unexpected")
        error = create_internal_error("unexpected", original_error=original)

        assert error.code == ErrorCode.INTERNAL_ERROR
        assert error.message == "Internal error: unexpected"
        assert error.retryable is True
        assert error.original_error is original
