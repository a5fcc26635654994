"""Read-only MCP tool handlers: the category taxonomy and the activity log."""

from typing import Any, Dict, Optional

from pydantic import ValidationError

from db.jobs_store import open_store
from db.store import JobStore
from models.errors import ToolError, create_internal_error
from models.job import is_production_master
from schemas.dashboard import CategoryInfo, ListCategoriesResponse
from schemas.jobs import ListActivityLogRequest, ListActivityLogResponse
from utils.pydantic_error_mapper import map_pydantic_validation_error
from utils.taxonomy import get_taxonomy
from utils.validation import validate_activity_limit


def list_categories() -> Dict[str, Any]:
    """
    List the categories and sub-categories that have job views.

    Returns:
        {"count": int, "categories": [{"name", "sub_categories",
        "has_activation_date"}, ...]} in taxonomy order, or an error dict
    """
    try:
        taxonomy = get_taxonomy()
        categories = [
            CategoryInfo(
                name=name,
                sub_categories=list(subs),
                has_activation_date=is_production_master(name),
            )
            for name, subs in taxonomy.items()
        ]
        return ListCategoriesResponse(count=len(categories), categories=categories).model_dump()

    except ToolError as e:
        return e.to_dict()

    except Exception as e:
        return create_internal_error(message=str(e), original_error=e).to_dict()


def list_activity_log(args: Dict[str, Any], store: Optional[JobStore] = None) -> Dict[str, Any]:
    """
    Return recent mutations, newest first.

    Args:
        args: Dictionary containing optional parameters:
            - limit (int): 1-1000, defaults to JOBTRACKER_ACTIVITY_LOG_LIMIT
            - db_path (str): Database path override
        store: Injected store; a SQLite store for db_path is opened otherwise
    """
    try:
        request = ListActivityLogRequest.model_validate(args)
        limit = validate_activity_limit(request.limit)

        with open_store(request.db_path, store) as job_store:
            entries = job_store.list_activity(limit)

        return ListActivityLogResponse(
            count=len(entries),
            entries=[entry.model_dump(by_alias=True) for entry in entries],
        ).model_dump()

    except ValidationError as e:
        return map_pydantic_validation_error(e).to_dict()

    except ToolError as e:
        return e.to_dict()

    except Exception as e:
        return create_internal_error(message=str(e), original_error=e).to_dict()
