"""
Unit tests for validation functions.

Tests job id, status, date, form-field, category-context, update and
activity-limit validation.
"""

import os
import re
from unittest.mock import patch

import pytest

from config import Config
from models.errors import ErrorCode, ToolError
from utils.taxonomy import DEFAULT_TAXONOMY
from utils.validation import (
    get_current_utc_timestamp,
    normalize_field_names,
    resolve_acting_user,
    validate_activity_limit,
    validate_category_context,
    validate_iso_date,
    validate_job_id,
    validate_required_text,
    validate_search,
    validate_stored_status,
    validate_update_fields,
)


class TestValidateJobId:
    def test_valid_id_stripped(self):
        assert validate_job_id(" abc ") == "abc"

    def test_none_rejected(self):
        with pytest.raises(ToolError) as exc_info:
            validate_job_id(None)
        assert exc_info.value.code == ErrorCode.VALIDATION_ERROR

    def test_non_string_rejected(self):
        with pytest.raises(ToolError) as exc_info:
            validate_job_id(12)
        assert "expected string" in exc_info.value.message

    def test_blank_rejected(self):
        with pytest.raises(ToolError):
            validate_job_id("  ")


class TestValidateStoredStatus:
    @pytest.mark.parametrize("status", ["Pending", "In Progress", "Completed"])
    def test_stored_statuses_accepted(self, status):
        assert validate_stored_status(status) == status

    def test_overdue_cannot_be_written(self):
        with pytest.raises(ToolError) as exc_info:
            validate_stored_status("Overdue")
        assert "Allowed values are: Pending, In Progress, Completed" in exc_info.value.message

    def test_case_sensitive(self):
        with pytest.raises(ToolError):
            validate_stored_status("completed")

    def test_whitespace_rejected(self):
        with pytest.raises(ToolError) as exc_info:
            validate_stored_status(" Pending")
        assert "whitespace" in exc_info.value.message

    def test_empty_rejected(self):
        with pytest.raises(ToolError):
            validate_stored_status("")


class TestValidateDatesAndText:
    def test_valid_date(self):
        assert validate_iso_date("2024-03-25", "deadline") == "2024-03-25"

    def test_invalid_date_names_field(self):
        with pytest.raises(ToolError) as exc_info:
            validate_iso_date("25-03-2024", "deadline")
        assert exc_info.value.message.startswith("Invalid deadline")

    def test_required_text_missing(self):
        with pytest.raises(ToolError) as exc_info:
            validate_required_text(None, "branch_dept")
        assert exc_info.value.message == "Missing required field: 'branch_dept'"

    def test_required_text_blank(self):
        with pytest.raises(ToolError):
            validate_required_text("   ", "job_type")

    def test_required_text_stripped(self):
        assert validate_required_text(" Jakarta ", "branch_dept") == "Jakarta"


class TestValidateCategoryContext:
    def test_known_pair(self):
        validate_category_context("Penyesuaian", "Publish Rate", DEFAULT_TAXONOMY)

    def test_unknown_category(self):
        with pytest.raises(ToolError) as exc_info:
            validate_category_context("Finance", "Publish Rate", DEFAULT_TAXONOMY)
        assert "Unknown category" in exc_info.value.message

    def test_sub_category_from_other_category(self):
        with pytest.raises(ToolError) as exc_info:
            validate_category_context("Penyesuaian", "Master Vendor", DEFAULT_TAXONOMY)
        assert "Unknown sub-category" in exc_info.value.message


class TestValidateUpdateFields:
    def test_camel_and_snake_case_keys(self):
        assert normalize_field_names({"branchDept": "A", "job_type": "B"}) == {
            "branch_dept": "A",
            "job_type": "B",
        }

    def test_unknown_key_rejected(self):
        with pytest.raises(ToolError) as exc_info:
            normalize_field_names({"priority": "high"})
        assert "Unknown job field" in exc_info.value.message

    def test_inline_status_edit(self):
        assert validate_update_fields({"status": "Completed"}, "Penyesuaian") == {
            "status": "Completed"
        }

    def test_inline_deadline_edit(self):
        assert validate_update_fields({"deadline": "2024-04-01"}, "Validasi") == {
            "deadline": "2024-04-01"
        }

    def test_empty_update_rejected(self):
        with pytest.raises(ToolError):
            validate_update_fields({}, "Penyesuaian")

    @pytest.mark.parametrize("field", ["id", "category", "subCategory", "createdBy"])
    def test_immutable_fields_rejected(self, field):
        with pytest.raises(ToolError) as exc_info:
            validate_update_fields({field: "x"}, "Penyesuaian")
        assert "cannot be changed" in exc_info.value.message

    def test_overdue_status_rejected(self):
        with pytest.raises(ToolError):
            validate_update_fields({"status": "Overdue"}, "Penyesuaian")

    def test_blank_required_field_rejected(self):
        with pytest.raises(ToolError):
            validate_update_fields({"branchDept": ""}, "Penyesuaian")

    def test_activation_date_kept_for_production_master(self):
        cleaned = validate_update_fields({"activationDate": "2024-05-01"}, "Produksi Master Data")
        assert cleaned == {"activation_date": "2024-05-01"}

    def test_activation_date_dropped_elsewhere(self):
        cleaned = validate_update_fields({"activationDate": "2024-05-01"}, "Penyesuaian")
        assert cleaned == {"activation_date": None}

    def test_blank_activation_date_cleared(self):
        cleaned = validate_update_fields({"activationDate": ""}, "Produksi Master Data")
        assert cleaned == {"activation_date": None}

    def test_notes_may_be_cleared(self):
        assert validate_update_fields({"notes": None}, "Laporan") == {"notes": None}

    def test_non_string_keterangan_rejected(self):
        with pytest.raises(ToolError):
            validate_update_fields({"keterangan": 5}, "Laporan")


class TestValidateSearch:
    def test_blank_search_is_none(self):
        assert validate_search("   ") is None
        assert validate_search(None) is None

    def test_search_returned(self):
        assert validate_search("jak") == "jak"


class TestResolveActingUser:
    def test_explicit_user(self):
        assert resolve_acting_user(" ops@example.com ").email == "ops@example.com"

    def test_falls_back_to_default_user(self):
        with patch.dict(os.environ, {"JOBTRACKER_DEFAULT_USER": "bot@example.com"}, clear=True):
            test_config = Config()
        with patch("utils.validation.get_config", return_value=test_config):
            assert resolve_acting_user(None).email == "bot@example.com"

    def test_missing_user_rejected(self):
        with patch.dict(os.environ, {}, clear=True):
            test_config = Config()
        with patch("utils.validation.get_config", return_value=test_config):
            with pytest.raises(ToolError) as exc_info:
                resolve_acting_user(None)
        assert "acting_user" in exc_info.value.message


class TestValidateActivityLimit:
    def test_default_from_config(self):
        with patch.dict(os.environ, {"JOBTRACKER_ACTIVITY_LOG_LIMIT": "7"}, clear=True):
            test_config = Config()
        with patch("utils.validation.get_config", return_value=test_config):
            assert validate_activity_limit(None) == 7

    def test_bounds(self):
        assert validate_activity_limit(1) == 1
        assert validate_activity_limit(1000) == 1000
        with pytest.raises(ToolError):
            validate_activity_limit(0)
        with pytest.raises(ToolError):
            validate_activity_limit(1001)

    def test_bool_rejected(self):
        with pytest.raises(ToolError):
            validate_activity_limit(True)


class TestTimestamp:
    def test_utc_timestamp_format(self):
        assert re.match(
            r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$", get_current_utc_timestamp()
        )
