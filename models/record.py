"""
Alumni progress record: the engine's only input shape.

Records are supplied by callers (read from storage) for every computation.
The engine reads them and never mutates them, so the model is frozen.

Field names are snake_case; the dashboard's camelCase names
(``cohortYear``, ``pathType``, ``stageManuallySet`` ...) are accepted as
aliases so API payloads can be validated without remapping.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from models.status import PathType, TrackingStatus


class AlumniProgressRecord(BaseModel):
    """Semantic fields the progress engine reads from an alumni record."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    alumni_id: Optional[Union[int, str]] = None
    cohort_year: int
    path_type: PathType = PathType.UNDEFINED
    stored_stage: Optional[str] = None
    stage_manually_set: bool = False
    stored_tracking_status: Optional[TrackingStatus] = None
    tracking_status_manually_set: bool = False
    employed: bool = False
    current_income: Optional[float] = Field(default=None, ge=0)
    income_liberation_override: Optional[bool] = None
    income_consent_given: bool = False

    @field_validator("path_type", mode="before")
    @classmethod
    def missing_path_is_undefined(cls, value: Any) -> Any:
        """Treat ``None`` and empty strings as 'no path chosen'."""
        if value is None or value == "":
            return PathType.UNDEFINED
        return value

    @field_validator("stored_stage", "stored_tracking_status", mode="before")
    @classmethod
    def empty_string_to_none(cls, value: Any) -> Any:
        if value == "":
            return None
        return value
