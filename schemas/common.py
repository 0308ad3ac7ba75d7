"""Shared schema primitives for MCP tool request/response models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.milestone import MilestoneDefinition, validate_milestone_sequence
from models.record import AlumniProgressRecord

# Upper bound on records per call; larger populations are batched upstream
MAX_RECORDS = 100_000


def validate_optional_non_empty_str(value: Optional[str], field_name: str) -> Optional[str]:
    """Validate optional string fields that cannot be empty/whitespace."""
    if value is None:
        return None
    if not value.strip():
        raise ValueError(f"Invalid {field_name}: cannot be empty")
    return value


class IgnoreRequest(BaseModel):
    """Request base with lax typing and ignored unknown fields.

    Lax mode lets JSON payloads carry ISO timestamps and camelCase record
    dicts that coerce into engine types.
    """

    model_config = ConfigDict(extra="ignore")


class StrictResponse(BaseModel):
    """Response/result base with strict typing and forbidden unknown fields."""

    model_config = ConfigDict(extra="forbid")


class RecordsMixin(BaseModel):
    """Reusable records field: the population the engine evaluates."""

    records: list[AlumniProgressRecord] = Field(max_length=MAX_RECORDS)


class EngineContextMixin(BaseModel):
    """Reusable optional engine inputs: reference time, catalog, median income."""

    now: Optional[datetime] = None
    catalog_path: Optional[str] = None
    national_median_income: Optional[float] = Field(default=None, gt=0)

    @field_validator("catalog_path")
    @classmethod
    def validate_catalog_path(cls, value: Optional[str]) -> Optional[str]:
        return validate_optional_non_empty_str(value, "catalog_path")


class MilestonesMixin(BaseModel):
    """Reusable optional milestone sequence override."""

    milestones: Optional[list[MilestoneDefinition]] = None

    @field_validator("milestones")
    @classmethod
    def validate_milestones(
        cls, value: Optional[list[MilestoneDefinition]]
    ) -> Optional[list[MilestoneDefinition]]:
        if value is None:
            return None
        validate_milestone_sequence(value)
        return value
