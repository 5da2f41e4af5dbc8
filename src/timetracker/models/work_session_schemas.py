# File: src/timetracker/models/work_session_schemas.py
"""Pydantic schemas for the WorkSession API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from timetracker.utils.datetime import as_utc


class CamelModel(BaseModel):
    """Base schema that reads snake_case and writes camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WorkSessionStart(CamelModel):
    """Body of POST /api/sessions/start."""

    description: str = Field(..., max_length=500)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        """Reject blank descriptions, trim surrounding whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("Description is required")
        return v


class WorkSessionRead(CamelModel):
    """WorkSession as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    description: str
    start_time: datetime
    end_time: datetime | None = None
    active: bool
    duration_seconds: int

    @field_validator("start_time", "end_time")
    @classmethod
    def mark_utc(cls, v: datetime | None) -> datetime | None:
        return as_utc(v)


class WorkStats(CamelModel):
    """Aggregate figures for GET /api/sessions/stats."""

    total_hours_worked: float
    contracted_hours: int
