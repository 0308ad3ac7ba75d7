"""
Input resolution and validation utilities for the progress engine tools.

Fills in engine inputs the caller may omit (reference time, median income,
milestone sequence) and resolves transition names for attrition drill-down.
"""

from datetime import datetime, timezone
from typing import Optional, Sequence

from config import get_config
from engine.funnel_aggregator import transition_name
from models.errors import create_validation_error
from models.milestone import MilestoneDefinition
from models.record import AlumniProgressRecord


def get_current_utc_time() -> datetime:
    """Return the current time in UTC."""
    return datetime.now(timezone.utc)


def resolve_reference_time(now: Optional[datetime]) -> datetime:
    """
    Resolve the reference time for an engine call.

    The engine never reads the clock; when the caller omits ``now`` the tool
    layer supplies the current UTC time.
    """
    if now is None:
        return get_current_utc_time()
    return now


def resolve_median_income(national_median_income: Optional[float]) -> float:
    """Resolve the salary threshold: explicit value or configured default."""
    if national_median_income is None:
        return get_config().national_median_income
    return national_median_income


def resolve_milestones(
    override: Optional[Sequence[MilestoneDefinition]],
    catalog_default: Sequence[MilestoneDefinition],
) -> list[MilestoneDefinition]:
    """
    Pick the milestone sequence for a funnel computation.

    Raises:
        ToolError: If neither the request nor the catalog defines milestones
    """
    milestones = list(override) if override is not None else list(catalog_default)
    if not milestones:
        raise create_validation_error(
            "Invalid milestones: no milestone sequence provided and catalog defines none"
        )
    return milestones


def filter_by_cohort(
    records: Sequence[AlumniProgressRecord], cohort_year: Optional[int]
) -> list[AlumniProgressRecord]:
    """Restrict records to one cohort year (None keeps all)."""
    if cohort_year is None:
        return list(records)
    return [record for record in records if record.cohort_year == cohort_year]


def resolve_transition_index(milestones: Sequence[MilestoneDefinition], transition: str) -> int:
    """
    Resolve a transition reference to its index in the milestone sequence.

    Accepts either the full transition name (``"year1->year2"``) or the name
    of the milestone the transition starts from (``"year1"``).

    Args:
        milestones: Ordered milestone sequence
        transition: Transition reference

    Returns:
        Index ``i`` of transition ``i -> i + 1``

    Raises:
        ToolError: If the reference does not match any transition

    Examples:
        >>> from models.milestone import EmploymentMilestone, SalaryMilestone
        >>> seq = [EmploymentMilestone(name="employment"), SalaryMilestone(name="salary")]
        >>> resolve_transition_index(seq, "employment->salary")
        0
        >>> resolve_transition_index(seq, "employment")
        0
    """
    for i in range(len(milestones) - 1):
        source, target = milestones[i], milestones[i + 1]
        if transition in (transition_name(source, target), source.name):
            return i

    available = [transition_name(a, b) for a, b in zip(milestones, milestones[1:])]
    raise create_validation_error(
        f"Invalid transition: '{transition}' is not one of: "
        + (", ".join(f"'{name}'" for name in available) or "(none)")
    )
