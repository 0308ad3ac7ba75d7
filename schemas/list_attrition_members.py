"""Pydantic schemas for list_attrition_members tool."""

from __future__ import annotations

from typing import Optional, Union

from pydantic import field_validator

from schemas.common import (
    EngineContextMixin,
    IgnoreRequest,
    MilestonesMixin,
    RecordsMixin,
    StrictResponse,
)


class ListAttritionMembersRequest(RecordsMixin, MilestonesMixin, EngineContextMixin, IgnoreRequest):
    """Request schema for list_attrition_members."""

    transition: str
    cohort_year: Optional[int] = None

    @field_validator("transition")
    @classmethod
    def validate_transition(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Invalid transition: cannot be empty")
        return value.strip()


class AttritionMember(StrictResponse):
    """A record that dropped out at the requested transition."""

    index: int
    alumni_id: Optional[Union[int, str]] = None
    cohort_year: int


class ListAttritionMembersResponse(StrictResponse):
    """Success response schema for list_attrition_members."""

    now: str
    transition: str
    years_required: int
    count: int
    members: list[AttritionMember]
