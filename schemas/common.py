"""Shared schema primitives for MCP tool request/response models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from utils.dates import parse_calendar_date


def validate_optional_non_empty_str(value: Optional[str]) -> Optional[str]:
    """Validate optional string fields that cannot be empty/whitespace."""
    if value is None:
        return None
    if not value.strip():
        raise ValueError("cannot be empty")
    return value


class StrictIgnoreRequest(BaseModel):
    """Request base with strict typing and ignored unknown fields."""

    model_config = ConfigDict(extra="ignore", strict=True)


class StrictResponse(BaseModel):
    """Response/result base with strict typing and forbidden unknown fields."""

    model_config = ConfigDict(extra="forbid")


class DbPathMixin(BaseModel):
    """Reusable db_path field validation."""

    db_path: Optional[str] = None

    @field_validator("db_path")
    @classmethod
    def validate_db_path(cls, value: Optional[str]) -> Optional[str]:
        return validate_optional_non_empty_str(value)


class TodayMixin(BaseModel):
    """Optional override of the local date used for overdue and defaults."""

    today: Optional[str] = None

    @field_validator("today")
    @classmethod
    def validate_today(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        if parse_calendar_date(value) is None:
            raise ValueError(f"'{value}' is not a YYYY-MM-DD date")
        return value


class ActingUserMixin(BaseModel):
    """Identifier of the user performing a mutation."""

    acting_user: Optional[str] = None

    @field_validator("acting_user")
    @classmethod
    def validate_acting_user(cls, value: Optional[str]) -> Optional[str]:
        return validate_optional_non_empty_str(value)
