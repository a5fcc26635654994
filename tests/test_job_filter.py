"""Unit tests for drill-down and category list filters."""

from datetime import date

from models.job import Job
from utils.job_filter import filter_category_jobs, filter_jobs, filter_title, matches_search
from utils.taxonomy import DEFAULT_TAXONOMY

TODAY = date(2024, 3, 20)
CATEGORIES = list(DEFAULT_TAXONOMY)


def make_job(job_id, status="Pending", deadline="2024-03-25", category="Penyesuaian",
             sub_category="Publish Rate", branch_dept="Jakarta", job_type="Update Tarif",
             keterangan=""):
    return Job(
        id=job_id,
        category=category,
        sub_category=sub_category,
        date_input="2024-03-01",
        branch_dept=branch_dept,
        job_type=job_type,
        status=status,
        deadline=deadline,
        keterangan=keterangan,
    )


JOBS = [
    make_job("p1", status="Pending"),
    make_job("ip1", status="In Progress", category="Validasi", sub_category="Tarif"),
    make_job("c1", status="Completed", deadline="2024-03-01"),
    make_job("late", status="Pending", deadline="2024-03-10", branch_dept="Bandung"),
    make_job("imp", status="Overdue", deadline="2024-03-30", category="Laporan", sub_category="Harian"),
]


class TestFilterJobs:
    def test_total_returns_everything_in_order(self):
        assert [j.id for j in filter_jobs(JOBS, "Total", TODAY, CATEGORIES)] == [
            "p1", "ip1", "c1", "late", "imp"
        ]

    def test_in_progress_includes_pending(self):
        result = filter_jobs(JOBS, "In Progress", TODAY, CATEGORIES)

        assert [j.id for j in result] == ["p1", "ip1", "late"]

    def test_overdue_is_derived(self):
        result = filter_jobs(JOBS, "Overdue", TODAY, CATEGORIES)

        assert [j.id for j in result] == ["late"]

    def test_category_key(self):
        result = filter_jobs(JOBS, "Validasi", TODAY, CATEGORIES)

        assert [j.id for j in result] == ["ip1"]

    def test_status_key(self):
        result = filter_jobs(JOBS, "Completed", TODAY, CATEGORIES)

        assert [j.id for j in result] == ["c1"]

    def test_pending_status_key(self):
        result = filter_jobs(JOBS, "Pending", TODAY, CATEGORIES)

        assert [j.id for j in result] == ["p1", "late"]

    def test_unknown_key_matches_nothing(self):
        assert filter_jobs(JOBS, "Archived", TODAY, CATEGORIES) == []

    def test_search_narrows_result(self):
        result = filter_jobs(JOBS, "Total", TODAY, CATEGORIES, search="BANDUNG")

        assert [j.id for j in result] == ["late"]

    def test_search_matches_category(self):
        result = filter_jobs(JOBS, "Total", TODAY, CATEGORIES, search="lapor")

        assert [j.id for j in result] == ["imp"]


class TestMatchesSearch:
    def test_keterangan_searched(self):
        job = make_job("k", keterangan="Urgent review")

        assert matches_search(job, "urgent")

    def test_no_match(self):
        assert not matches_search(make_job("k"), "surabaya")


class TestFilterTitle:
    def test_in_progress_title(self):
        assert filter_title("In Progress", CATEGORIES) == "Dalam Proses & Pending"

    def test_category_title(self):
        assert filter_title("Laporan", CATEGORIES) == "Kategori: Laporan"

    def test_other_keys_verbatim(self):
        assert filter_title("Overdue", CATEGORIES) == "Overdue"


class TestFilterCategoryJobs:
    def test_scoped_by_category_and_sub_category(self):
        jobs = JOBS + [make_job("other-sub", sub_category="Special Rate")]

        result = filter_category_jobs(jobs, "Penyesuaian", "Publish Rate")

        assert [j.id for j in result] == ["p1", "c1", "late"]

    def test_search_over_branch_job_type_and_keterangan(self):
        jobs = [
            make_job("a", branch_dept="Medan"),
            make_job("b", job_type="Medan Rate Update"),
            make_job("c", keterangan="for medan office"),
            make_job("d"),
        ]

        result = filter_category_jobs(jobs, "Penyesuaian", "Publish Rate", search="medan")

        assert [j.id for j in result] == ["a", "b", "c"]

    def test_search_does_not_match_category_name(self):
        result = filter_category_jobs(JOBS, "Penyesuaian", "Publish Rate", search="penyesuaian")

        assert result == []
