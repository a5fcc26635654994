"""Unit tests for the category taxonomy loader."""

import pytest

from models.errors import ErrorCode, ToolError
from models.job import PRODUCTION_MASTER_CATEGORY
from utils.taxonomy import DEFAULT_TAXONOMY, load_taxonomy, parse_taxonomy


class TestDefaultTaxonomy:
    def test_contains_production_master_category(self):
        assert PRODUCTION_MASTER_CATEGORY in DEFAULT_TAXONOMY

    def test_every_category_has_sub_categories(self):
        for name, subs in DEFAULT_TAXONOMY.items():
            assert subs, name

    def test_load_without_path_returns_copy(self):
        taxonomy = load_taxonomy()
        taxonomy["Penyesuaian"].append("Scratch")

        assert "Scratch" not in DEFAULT_TAXONOMY["Penyesuaian"]


class TestParseTaxonomy:
    def test_parse_preserves_order(self):
        content = "Laporan:\n  - Harian\nPenyesuaian:\n  - Publish Rate\n  - Special Rate\n"

        taxonomy = parse_taxonomy(content)

        assert list(taxonomy) == ["Laporan", "Penyesuaian"]
        assert taxonomy["Penyesuaian"] == ["Publish Rate", "Special Rate"]

    def test_category_without_subs(self):
        assert parse_taxonomy("Laporan:\n") == {"Laporan": []}

    def test_not_a_mapping_rejected(self):
        with pytest.raises(ToolError) as exc_info:
            parse_taxonomy("- a\n- b\n")

        assert exc_info.value.code == ErrorCode.VALIDATION_ERROR

    def test_empty_rejected(self):
        with pytest.raises(ToolError):
            parse_taxonomy("")

    def test_non_list_subs_rejected(self):
        with pytest.raises(ToolError) as exc_info:
            parse_taxonomy("Laporan: Harian\n")

        assert "Laporan" in exc_info.value.message

    def test_malformed_yaml_rejected(self):
        with pytest.raises(ToolError) as exc_info:
            parse_taxonomy("Laporan: [Harian\n")

        assert exc_info.value.code == ErrorCode.VALIDATION_ERROR

    @pytest.mark.parametrize(
        "content", ["Laporan/Harian:\n  - Harian\n", "Laporan:\n  - Harian\\Malam\n"]
    )
    def test_path_separator_in_name_rejected(self, content):
        with pytest.raises(ToolError) as exc_info:
            parse_taxonomy(content)

        assert "path separator" in exc_info.value.message


class TestLoadTaxonomyFile:
    def test_load_from_file(self, tmp_path):
        path = tmp_path / "taxonomy.yaml"
        path.write_text("Validasi:\n  - Tarif\n", encoding="utf-8")

        assert load_taxonomy(str(path)) == {"Validasi": ["Tarif"]}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ToolError) as exc_info:
            load_taxonomy(str(tmp_path / "missing.yaml"))

        assert exc_info.value.code == ErrorCode.FILE_NOT_FOUND
        assert exc_info.value.message == "Taxonomy file not found: missing.yaml"
