"""Integration tests for the list_categories and list_activity_log MCP tools."""

from unittest.mock import patch

from db.memory_store import InMemoryJobStore
from models.errors import ErrorCode
from models.job import Job
from tools.catalog import list_activity_log, list_categories
from utils.taxonomy import DEFAULT_TAXONOMY


def make_job(job_id):
    return Job(
        id=job_id,
        category="Laporan",
        sub_category="Harian",
        date_input="2024-03-01",
        branch_dept="Jakarta",
        job_type="Rekap",
        deadline="2024-03-05",
        created_by="ops@example.com",
    )


class TestListCategories:
    def test_default_taxonomy(self):
        with patch("tools.catalog.get_taxonomy", return_value=DEFAULT_TAXONOMY):
            result = list_categories()

        assert result["count"] == len(DEFAULT_TAXONOMY)
        names = [c["name"] for c in result["categories"]]
        assert names == list(DEFAULT_TAXONOMY)
        pm = result["categories"][names.index("Produksi Master Data")]
        assert pm["has_activation_date"] is True
        assert pm["sub_categories"] == DEFAULT_TAXONOMY["Produksi Master Data"]

    def test_custom_taxonomy(self):
        with patch("tools.catalog.get_taxonomy", return_value={"Laporan": ["Harian"]}):
            result = list_categories()

        assert result == {
            "count": 1,
            "categories": [
                {"name": "Laporan", "sub_categories": ["Harian"], "has_activation_date": False}
            ],
        }


class TestListActivityLog:
    def test_newest_first(self):
        store = InMemoryJobStore()
        store.add_job(make_job("a"))
        store.delete_job("a", "lead@example.com")

        result = list_activity_log({"limit": 10}, store=store)

        assert result["count"] == 2
        assert [e["action"] for e in result["entries"]] == ["DELETE", "CREATE"]
        assert result["entries"][0]["user"] == "lead@example.com"
        assert set(result["entries"][0]) == {"id", "timestamp", "user", "action", "description", "category"}

    def test_limit_applied(self):
        store = InMemoryJobStore()
        for index in range(3):
            store.add_job(make_job(f"j{index}"))

        result = list_activity_log({"limit": 2}, store=store)

        assert result["count"] == 2

    def test_limit_out_of_range(self):
        result = list_activity_log({"limit": 0}, store=InMemoryJobStore())

        assert result["error"]["code"] == ErrorCode.VALIDATION_ERROR.value

    def test_limit_wrong_type(self):
        result = list_activity_log({"limit": "10"}, store=InMemoryJobStore())

        assert result["error"]["code"] == ErrorCode.VALIDATION_ERROR.value
