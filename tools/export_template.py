"""
MCP tool handler for export_csv_template.

Writes the import template for a category view (or the global template)
into the templates directory and returns its content.
"""

import logging
from typing import Any, Dict

from pydantic import ValidationError

from models.errors import ToolError, create_internal_error
from schemas.import_jobs import ExportTemplateRequest, ExportTemplateResponse
from utils.csv_template import build_template
from utils.dates import resolve_today
from utils.path_resolution import resolve_templates_dir
from utils.pydantic_error_mapper import map_pydantic_validation_error
from utils.taxonomy import get_taxonomy
from utils.validation import validate_category_context

logger = logging.getLogger(__name__)


def export_csv_template(args: Dict[str, Any]) -> Dict[str, Any]:
    """
    Generate a CSV import template.

    Args:
        args: Dictionary containing optional parameters:
            - category, sub_category (str): Scoped template for this view;
              omit both for the global template
            - templates_dir (str): Output directory override
            - today (str): YYYY-MM-DD override for the example row

    Returns:
        Dictionary with layout, filename, path and content, or an error dict
    """
    try:
        request = ExportTemplateRequest.model_validate(args)
        if request.category is not None:
            validate_category_context(request.category, request.sub_category, get_taxonomy())

        today = resolve_today(request.today)
        filename, content = build_template(today, request.category, request.sub_category)

        output_dir = resolve_templates_dir(request.templates_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        output_path = output_dir / filename
        output_path.write_text(content, encoding="utf-8")

        logger.info(f"Wrote CSV template {filename}")
        return ExportTemplateResponse(
            layout="global" if request.category is None else "scoped",
            filename=filename,
            path=str(output_path),
            content=content,
        ).model_dump()

    except ValidationError as e:
        return map_pydantic_validation_error(e).to_dict()

    except ToolError as e:
        return e.to_dict()

    except Exception as e:
        return create_internal_error(message=str(e), original_error=e).to_dict()
