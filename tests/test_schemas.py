"""Unit tests for request/response schemas."""

import pytest
from pydantic import ValidationError

from schemas.dashboard import FilterJobsRequest, GetDashboardSummaryRequest
from schemas.import_jobs import ExportTemplateRequest, ImportJobsRequest
from schemas.jobs import ListActivityLogRequest, UpdateJobRequest
from utils.pydantic_error_mapper import map_pydantic_validation_error


class TestCommonMixins:
    def test_unknown_fields_ignored(self):
        request = GetDashboardSummaryRequest.model_validate({"verbose": True})

        assert request.db_path is None
        assert request.today is None

    def test_blank_db_path_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            GetDashboardSummaryRequest.model_validate({"db_path": " "})

        error = map_pydantic_validation_error(exc_info.value)
        assert error.message == "Invalid db_path: cannot be empty"

    def test_today_must_be_a_date(self):
        with pytest.raises(ValidationError):
            GetDashboardSummaryRequest.model_validate({"today": "2024-02-30"})

    def test_strict_types(self):
        with pytest.raises(ValidationError):
            ListActivityLogRequest.model_validate({"limit": "5"})


class TestFilterJobsRequest:
    def test_blank_filter_key_rejected(self):
        with pytest.raises(ValidationError):
            FilterJobsRequest.model_validate({"filter_key": " "})


class TestImportJobsRequest:
    def test_defaults_to_scoped(self):
        request = ImportJobsRequest.model_validate(
            {"category": "Laporan", "sub_category": "Harian", "csv_text": "h\n"}
        )

        assert request.layout == "scoped"

    def test_global_needs_no_category(self):
        request = ImportJobsRequest.model_validate({"layout": "global", "csv_text": "h\n"})

        assert request.category is None

    def test_source_required(self):
        with pytest.raises(ValidationError) as exc_info:
            ImportJobsRequest.model_validate({"layout": "global"})

        error = map_pydantic_validation_error(exc_info.value)
        assert error.message == "Provide exactly one of csv_text or file_path"

    def test_scoped_needs_context(self):
        with pytest.raises(ValidationError):
            ImportJobsRequest.model_validate({"csv_text": "h\n", "category": "Laporan"})


class TestOtherRequests:
    def test_update_fields_must_be_object(self):
        with pytest.raises(ValidationError):
            UpdateJobRequest.model_validate({"job_id": "j1", "fields": ["status"]})

    def test_export_scope_pairs(self):
        with pytest.raises(ValidationError):
            ExportTemplateRequest.model_validate({"sub_category": "Harian"})

        assert ExportTemplateRequest.model_validate({}).category is None
