"""
Stage resolution for alumni progress records.

Resolution rules:
- ``undefined`` path: no stage, index -1
- Manual stage override: trusted verbatim when valid for the current path,
  otherwise clamped to the nearest valid index
- Otherwise: one stage per elapsed whole year since the cohort reference
  date, saturating at the path's final stage
"""

from datetime import date
from typing import Optional

from models.catalog import StageCatalog
from models.record import AlumniProgressRecord
from models.results import ResolvedStage
from models.status import PathType


def elapsed_years(cohort_year: int, now: date, reference_month: int) -> int:
    """
    Count whole years elapsed since the cohort reference date.

    The reference date is the 1st of ``reference_month`` in ``cohort_year``.
    Future cohorts and dates before the first anniversary yield 0.

    Args:
        cohort_year: The cohort's reference year
        now: Reference time supplied by the caller (date or datetime)
        reference_month: Month of the cohort reference date (1-12)

    Returns:
        Non-negative number of whole years

    Examples:
        >>> elapsed_years(2024, date(2026, 3, 15), 6)
        1
        >>> elapsed_years(2024, date(2026, 6, 1), 6)
        2
        >>> elapsed_years(2030, date(2026, 6, 1), 6)
        0
    """
    years = now.year - cohort_year
    if now.month < reference_month:
        years -= 1
    return max(0, years)


def _auto_index(record: AlumniProgressRecord, stage_count: int, now: date, reference_month: int) -> int:
    years = elapsed_years(record.cohort_year, now, reference_month)
    return max(0, min(years, stage_count - 1))


def expected_stage_index(record: AlumniProgressRecord, catalog: StageCatalog, now: date) -> int:
    """
    Stage index a record should have reached by ``now`` on its path.

    Uses the same cadence as auto-resolution. Returns -1 for ``undefined``.
    """
    path = catalog.path(record.path_type)
    if path is None:
        return -1
    return _auto_index(record, len(path.stages), now, catalog.reference_month)


def _clamp_stored_stage(
    stored_stage: str, path_type: PathType, catalog: StageCatalog
) -> tuple[int, bool]:
    """Return (index, clamped) for a manually set stage on the current path."""
    path = catalog.paths[path_type]
    index = path.index_of(stored_stage)
    if index >= 0:
        return index, False

    # Stage belongs to another path (e.g. the path type changed after the
    # override was set): keep its ordinal position, bounded to this path.
    ordinal: Optional[int] = catalog.ordinal_elsewhere(stored_stage, exclude=path_type)
    if ordinal is None:
        return 0, True
    return max(0, min(ordinal, len(path.stages) - 1)), True


def resolve_stage(record: AlumniProgressRecord, catalog: StageCatalog, now: date) -> ResolvedStage:
    """
    Resolve a record's current stage and its index on the record's path.

    Args:
        record: Alumni progress record
        catalog: Stage catalog supplied by the caller
        now: Reference time supplied by the caller

    Returns:
        ResolvedStage with index in ``[-1, len(stages) - 1]``; -1 only for
        the ``undefined`` path
    """
    path = catalog.path(record.path_type)
    if path is None:
        return ResolvedStage(path_type=PathType.UNDEFINED)

    clamped = False
    if record.stage_manually_set and record.stored_stage is not None:
        index, clamped = _clamp_stored_stage(record.stored_stage, record.path_type, catalog)
    else:
        index = _auto_index(record, len(path.stages), now, catalog.reference_month)

    return ResolvedStage(
        path_type=record.path_type,
        stage=path.stages[index],
        stage_index=index,
        stages=path.stages,
        employment_stage_index=path.employment_stage_index,
        clamped=clamped,
    )


def progress_percentage(resolved: ResolvedStage) -> float:
    """
    Position of the resolved stage along its path as a 0..1 fraction.

    A single-stage path is complete (1.0) at index 0.
    """
    if resolved.stage_index < 0 or not resolved.stages:
        return 0.0
    if len(resolved.stages) == 1:
        return 1.0
    fraction = resolved.stage_index / (len(resolved.stages) - 1)
    return min(1.0, max(0.0, fraction))
