"""
Category taxonomy loader.

The taxonomy maps each category to its sub-categories. It seeds the
zero-valued aggregate buckets, decides which drill-down keys are category
filters, and validates the category context of manual job entry.

A built-in taxonomy is used unless a YAML file is configured. The YAML file
is a mapping of category name to a list of sub-category names::

    Penyesuaian:
      - Publish Rate
      - Special Rate
    Produksi Master Data:
      - Master Vendor
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

import yaml

from config import get_config
from models.errors import create_file_not_found_error, create_validation_error
from utils.path_resolution import resolve_repo_relative_path

logger = logging.getLogger(__name__)

DEFAULT_TAXONOMY: Dict[str, List[str]] = {
    "Penyesuaian": ["Publish Rate", "Special Rate", "Diskon Customer"],
    "Produksi Master Data": ["Master Vendor", "Master Customer", "Master Routing"],
    "Validasi": ["Tarif", "Biaya"],
    "Laporan": ["Harian", "Bulanan"],
}


# Names end up in template filenames.
UNSAFE_NAME_CHARS = ("/", "\\")


def _check_name_is_filename_safe(name: str) -> None:
    if any(char in name for char in UNSAFE_NAME_CHARS):
        raise create_validation_error(
            f"Invalid taxonomy: '{name}' must not contain a path separator"
        )


def parse_taxonomy(content: str) -> Dict[str, List[str]]:
    """
    Parse taxonomy YAML content.

    Args:
        content: YAML text

    Returns:
        Ordered mapping of category to sub-categories

    Raises:
        ToolError: VALIDATION_ERROR if the YAML is malformed or not a mapping
            of names to lists of names
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise create_validation_error(f"Invalid taxonomy YAML: {str(e).splitlines()[0]}") from e

    if not isinstance(data, dict) or not data:
        raise create_validation_error("Invalid taxonomy: expected a non-empty mapping")

    taxonomy: Dict[str, List[str]] = {}
    for category, submenus in data.items():
        if not isinstance(category, str) or not category.strip():
            raise create_validation_error("Invalid taxonomy: category names must be non-empty strings")
        if submenus is None:
            submenus = []
        if not isinstance(submenus, list) or not all(isinstance(s, str) for s in submenus):
            raise create_validation_error(
                f"Invalid taxonomy: sub-categories of '{category}' must be a list of strings"
            )
        for name in [category] + submenus:
            _check_name_is_filename_safe(name)
        taxonomy[category.strip()] = [s.strip() for s in submenus if s.strip()]

    return taxonomy


def load_taxonomy(path: Optional[str] = None) -> Dict[str, List[str]]:
    """
    Load the taxonomy from ``path`` or fall back to the built-in default.

    Relative paths are resolved from the repository root.
    """
    if path is None:
        return {k: list(v) for k, v in DEFAULT_TAXONOMY.items()}

    resolved = resolve_repo_relative_path(path)
    if not resolved.is_file():
        raise create_file_not_found_error(str(resolved), "Taxonomy file")

    taxonomy = parse_taxonomy(resolved.read_text(encoding="utf-8"))
    logger.debug(f"Loaded {len(taxonomy)} categories from {resolved.name}")
    return taxonomy


def get_taxonomy() -> Dict[str, List[str]]:
    """Load the taxonomy configured for this process."""
    return load_taxonomy(get_config().taxonomy_path)
