"""Pydantic schemas for cohort_status_breakdown tool."""

from __future__ import annotations

from schemas.common import EngineContextMixin, IgnoreRequest, RecordsMixin, StrictResponse


class CohortStatusBreakdownRequest(RecordsMixin, EngineContextMixin, IgnoreRequest):
    """Request schema for cohort_status_breakdown."""


class CohortBreakdownItem(StrictResponse):
    """Tracking-status counts and percentages for one cohort year."""

    cohort_year: int
    total: int
    counts: dict[str, int]
    percentages: dict[str, int]


class CohortStatusBreakdownResponse(StrictResponse):
    """Success response schema for cohort_status_breakdown."""

    now: str
    cohorts: list[CohortBreakdownItem]
