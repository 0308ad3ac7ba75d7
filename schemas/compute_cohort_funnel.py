"""Pydantic schemas for compute_cohort_funnel tool."""

from __future__ import annotations

from typing import Optional

from models.results import AttritionStep, FunnelStep
from schemas.common import (
    EngineContextMixin,
    IgnoreRequest,
    MilestonesMixin,
    RecordsMixin,
    StrictResponse,
)


class ComputeCohortFunnelRequest(RecordsMixin, MilestonesMixin, EngineContextMixin, IgnoreRequest):
    """Request schema for compute_cohort_funnel."""

    cohort_year: Optional[int] = None


class ComputeCohortFunnelResponse(StrictResponse):
    """Success response schema for compute_cohort_funnel."""

    now: str
    cohort_year: Optional[int] = None
    total_records: int
    never_started: int
    success: list[FunnelStep]
    attrition: list[AttritionStep]
    distribution: dict[str, int]
    distribution_percentages: dict[str, int]
    warnings: list[str] = []
