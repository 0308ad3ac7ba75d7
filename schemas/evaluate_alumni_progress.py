"""Pydantic schemas for evaluate_alumni_progress tool."""

from __future__ import annotations

from typing import Optional, Union

from schemas.common import (
    EngineContextMixin,
    IgnoreRequest,
    MilestonesMixin,
    RecordsMixin,
    StrictResponse,
)


class EvaluateAlumniProgressRequest(
    RecordsMixin, MilestonesMixin, EngineContextMixin, IgnoreRequest
):
    """Request schema for evaluate_alumni_progress."""


class RecordProgressItem(StrictResponse):
    """Per-record progress snapshot returned by evaluate_alumni_progress."""

    index: int
    alumni_id: Optional[Union[int, str]] = None
    cohort_year: int
    path_type: str
    stage: Optional[str] = None
    stage_index: int
    stage_clamped: bool
    expected_stage_index: int
    progress_percentage: float
    tracking_status: str
    stage_differs_from_stored: bool
    status_differs_from_stored: bool
    milestones: dict[str, str]


class EvaluateAlumniProgressResponse(StrictResponse):
    """Success response schema for evaluate_alumni_progress."""

    now: str
    count: int
    records: list[RecordProgressItem]
