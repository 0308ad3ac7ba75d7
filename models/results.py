"""
Value types returned by the progress engine.

All results are frozen pydantic models so they serialize to JSON at the
tool boundary with ``model_dump(mode="json")``.
"""

from __future__ import annotations

import math
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

from models.status import PathType, TrackingStatus


class _EngineResult(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class ResolvedStage(_EngineResult):
    """Outcome of stage resolution for one record.

    ``stages`` is the resolved path's ordered stage list (empty for
    ``undefined``) so downstream steps never need the catalog again.
    """

    path_type: PathType
    stage: Optional[str] = None
    stage_index: int = -1
    stages: tuple[str, ...] = ()
    employment_stage_index: Optional[int] = None
    clamped: bool = False


class RecordProgress(_EngineResult):
    """Resolution plus classification for one record."""

    alumni_id: Optional[Union[int, str]] = None
    cohort_year: int
    resolved: ResolvedStage
    expected_stage_index: int
    progress_percentage: float
    tracking_status: TrackingStatus
    stage_differs_from_stored: bool
    status_differs_from_stored: bool


class FunnelStep(_EngineResult):
    """Success funnel bar: records successfully progressing at a milestone."""

    milestone: str
    count: int


class AttritionStep(_EngineResult):
    """Eligibility-windowed dropout between two consecutive milestones."""

    transition: str
    from_milestone: str
    to_milestone: str
    years_required: int
    eligible_count: int
    reached_count: int
    advanced_count: int
    dropped_count: int
    negative_clamped: bool = False


class StatusDistribution(_EngineResult):
    """Four-way tally of tracking statuses."""

    on_track: int = 0
    near_track: int = 0
    off_track: int = 0
    unknown: int = 0

    @property
    def total(self) -> int:
        return self.on_track + self.near_track + self.off_track + self.unknown

    def counts(self) -> dict[str, int]:
        return {
            TrackingStatus.ON_TRACK.value: self.on_track,
            TrackingStatus.NEAR_TRACK.value: self.near_track,
            TrackingStatus.OFF_TRACK.value: self.off_track,
            TrackingStatus.UNKNOWN.value: self.unknown,
        }

    def percentages(self) -> dict[str, int]:
        """
        Whole-number percentages per status.

        Each share is rounded half up. For a non-empty tally the values sum
        to exactly 100: the rounding residue is added to the largest bucket,
        the last one in status order on a tie. An empty tally is all zeros.
        """
        counts = self.counts()
        total = self.total
        if total == 0:
            return {status: 0 for status in counts}

        percentages = {
            status: math.floor(count / total * 100 + 0.5) for status, count in counts.items()
        }
        residue = 100 - sum(percentages.values())
        if residue:
            largest = None
            for status, value in percentages.items():
                if largest is None or value >= percentages[largest]:
                    largest = status
            percentages[largest] += residue
        return percentages


class FunnelResult(_EngineResult):
    """Success funnel, attrition funnel and overall status distribution."""

    total_records: int
    never_started: int
    success: list[FunnelStep]
    attrition: list[AttritionStep]
    distribution: StatusDistribution


class CohortStatus(_EngineResult):
    """Tracking-status distribution for one cohort year."""

    cohort_year: int
    distribution: StatusDistribution
