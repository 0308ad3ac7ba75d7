"""
Per-milestone status derivation.

Stage milestones follow the stage counter and inherit their quality from the
record's tracking status. Employment and salary are evaluated from the
record's employment and income fields because employment can start, lapse
and restart while the stage counter only moves forward.
"""

from models.milestone import (
    EmploymentMilestone,
    MilestoneDefinition,
    SalaryMilestone,
    StageMilestone,
)
from models.record import AlumniProgressRecord
from models.results import ResolvedStage
from models.status import MilestoneStatus, TrackingStatus

# Tracking statuses that carry over to a reached stage milestone unchanged;
# everything else (off-track, unknown) is reported as off-track.
_INHERITED_STATUSES = {
    TrackingStatus.ON_TRACK: MilestoneStatus.ON_TRACK,
    TrackingStatus.NEAR_TRACK: MilestoneStatus.NEAR_TRACK,
}


def stage_milestone_status(
    resolved: ResolvedStage, milestone: StageMilestone, tracking_status: TrackingStatus
) -> MilestoneStatus:
    """Status of a stage-based milestone for a resolved record."""
    if resolved.stage_index < 0:
        return MilestoneStatus.NOT_REACHED
    if milestone.path_type is not None and milestone.path_type != resolved.path_type:
        return MilestoneStatus.NOT_REACHED

    try:
        target = resolved.stages.index(milestone.stage)
    except ValueError:
        # Stage does not exist on this path: unreachable, not a failure
        return MilestoneStatus.NOT_REACHED

    if resolved.stage_index < target:
        return MilestoneStatus.NOT_REACHED
    return _INHERITED_STATUSES.get(tracking_status, MilestoneStatus.OFF_TRACK)


def employment_milestone_status(
    record: AlumniProgressRecord, resolved: ResolvedStage
) -> MilestoneStatus:
    """
    Status of the employment milestone.

    Employed records are on track regardless of stage. Unemployed records
    whose progression has passed the path's employment stage are off track
    (should be employed but are not); all others have not reached it.
    """
    if record.employed:
        return MilestoneStatus.ON_TRACK

    employment_index = resolved.employment_stage_index
    if employment_index is not None and resolved.stage_index >= employment_index >= 0:
        return MilestoneStatus.OFF_TRACK
    return MilestoneStatus.NOT_REACHED


def salary_milestone_status(
    record: AlumniProgressRecord, national_median_income: float
) -> MilestoneStatus:
    """
    Status of the salary milestone.

    Employment is a precondition: unemployed records are never past this
    milestone even if income fields remain from a prior job. Numeric income
    only counts when consent to use it was given.
    """
    if not record.employed:
        return MilestoneStatus.NOT_REACHED

    if record.income_liberation_override:
        return MilestoneStatus.ON_TRACK

    if (
        record.income_consent_given
        and record.current_income is not None
        and record.current_income >= national_median_income
    ):
        return MilestoneStatus.ON_TRACK

    return MilestoneStatus.NEAR_TRACK


def milestone_status(
    record: AlumniProgressRecord,
    resolved: ResolvedStage,
    milestone: MilestoneDefinition,
    national_median_income: float,
    tracking_status: TrackingStatus,
) -> MilestoneStatus:
    """
    Derive a record's status for one milestone.

    Args:
        record: Alumni progress record
        resolved: Output of the stage resolver for this record
        milestone: Milestone definition (stage, employment or salary)
        national_median_income: Salary threshold supplied by the caller
        tracking_status: The record's classified tracking status

    Returns:
        MilestoneStatus for this record and milestone
    """
    if isinstance(milestone, EmploymentMilestone):
        return employment_milestone_status(record, resolved)
    if isinstance(milestone, SalaryMilestone):
        return salary_milestone_status(record, national_median_income)
    return stage_milestone_status(resolved, milestone, tracking_status)
