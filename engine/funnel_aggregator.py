"""
Cohort funnel aggregation over a collection of alumni records.

Produces three views of a population:
- Success funnel: records successfully progressing (on/near track) per milestone
- Attrition: dropouts per consecutive milestone transition, each computed
  over its own cohort-eligibility window so recent cohorts are not counted
  as dropouts for milestones they have not had time to reach
- Distribution: snapshot tally of tracking statuses (no windowing)
"""

from datetime import date
from typing import Iterable, NamedTuple, Sequence

from engine.milestone_status import milestone_status
from engine.record_progress import evaluate_record
from models.catalog import StageCatalog
from models.milestone import MilestoneDefinition
from models.record import AlumniProgressRecord
from models.results import (
    AttritionStep,
    CohortStatus,
    FunnelResult,
    FunnelStep,
    RecordProgress,
    StatusDistribution,
)
from models.status import SUCCESS_STATUSES, MilestoneStatus, TrackingStatus


class EvaluatedRecord(NamedTuple):
    """A record with its progress snapshot and per-milestone statuses."""

    record: AlumniProgressRecord
    progress: RecordProgress
    statuses: tuple[MilestoneStatus, ...]


def calendar_years_since(cohort_year: int, now: date) -> int:
    """Calendar years elapsed since the cohort year (may be negative)."""
    return now.year - cohort_year


def is_eligible(record: AlumniProgressRecord, years_required: int, now: date) -> bool:
    """Whether a record's cohort has had enough time for a transition."""
    return calendar_years_since(record.cohort_year, now) >= years_required


def transition_name(from_milestone: MilestoneDefinition, to_milestone: MilestoneDefinition) -> str:
    return f"{from_milestone.name}->{to_milestone.name}"


def evaluate_records(
    records: Iterable[AlumniProgressRecord],
    milestones: Sequence[MilestoneDefinition],
    catalog: StageCatalog,
    now: date,
    national_median_income: float,
) -> list[EvaluatedRecord]:
    """Evaluate every record once against every milestone."""
    evaluated = []
    for record in records:
        progress = evaluate_record(record, catalog, now)
        statuses = tuple(
            milestone_status(
                record,
                progress.resolved,
                milestone,
                national_median_income,
                progress.tracking_status,
            )
            for milestone in milestones
        )
        evaluated.append(EvaluatedRecord(record, progress, statuses))
    return evaluated


def tally_statuses(statuses: Iterable[TrackingStatus]) -> StatusDistribution:
    counts = {status: 0 for status in TrackingStatus}
    for status in statuses:
        counts[status] += 1
    return StatusDistribution(
        on_track=counts[TrackingStatus.ON_TRACK],
        near_track=counts[TrackingStatus.NEAR_TRACK],
        off_track=counts[TrackingStatus.OFF_TRACK],
        unknown=counts[TrackingStatus.UNKNOWN],
    )


def _reached(entry: EvaluatedRecord, index: int) -> bool:
    return entry.statuses[index] != MilestoneStatus.NOT_REACHED


def attrition_step(
    evaluated: Sequence[EvaluatedRecord],
    milestones: Sequence[MilestoneDefinition],
    index: int,
    now: date,
) -> AttritionStep:
    """
    Compute dropout for transition ``index -> index + 1``.

    Both counts are restricted to records whose cohort has had at least
    ``milestones[index + 1].years_required`` calendar years. A negative
    difference (inconsistent manual overrides) is floored to zero and
    flagged with ``negative_clamped``.
    """
    source = milestones[index]
    target = milestones[index + 1]
    years_required = target.years_required

    eligible = [entry for entry in evaluated if is_eligible(entry.record, years_required, now)]
    reached = sum(1 for entry in eligible if _reached(entry, index))
    advanced = sum(1 for entry in eligible if _reached(entry, index + 1))
    raw_dropout = reached - advanced

    return AttritionStep(
        transition=transition_name(source, target),
        from_milestone=source.name,
        to_milestone=target.name,
        years_required=years_required,
        eligible_count=len(eligible),
        reached_count=reached,
        advanced_count=advanced,
        dropped_count=max(0, raw_dropout),
        negative_clamped=raw_dropout < 0,
    )


def aggregate_funnel(
    records: Sequence[AlumniProgressRecord],
    milestones: Sequence[MilestoneDefinition],
    catalog: StageCatalog,
    now: date,
    national_median_income: float,
) -> FunnelResult:
    """
    Aggregate a population into success and attrition funnels.

    Args:
        records: Records to aggregate (already filtered by the caller,
            e.g. to one cohort year, if desired)
        milestones: Ordered milestone sequence with non-decreasing
            ``years_required``
        catalog: Stage catalog supplied by the caller
        now: Reference time supplied by the caller
        national_median_income: Salary threshold supplied by the caller

    Returns:
        FunnelResult with one success step per milestone, one attrition
        step per consecutive pair, and the overall status distribution
    """
    evaluated = evaluate_records(records, milestones, catalog, now, national_median_income)

    success = [
        FunnelStep(
            milestone=milestone.name,
            count=sum(1 for entry in evaluated if entry.statuses[i] in SUCCESS_STATUSES),
        )
        for i, milestone in enumerate(milestones)
    ]
    attrition = [attrition_step(evaluated, milestones, i, now) for i in range(len(milestones) - 1)]
    distribution = tally_statuses(entry.progress.tracking_status for entry in evaluated)

    total = len(evaluated)
    never_started = max(0, total - success[0].count) if success else 0

    return FunnelResult(
        total_records=total,
        never_started=never_started,
        success=success,
        attrition=attrition,
        distribution=distribution,
    )


def attrition_members(
    records: Sequence[AlumniProgressRecord],
    milestones: Sequence[MilestoneDefinition],
    transition_index: int,
    catalog: StageCatalog,
    now: date,
    national_median_income: float,
) -> list[tuple[int, AlumniProgressRecord]]:
    """
    List the eligible records that dropped out at one transition.

    A record dropped out when its cohort is eligible for the transition and
    it reached ``milestones[transition_index]`` but not the next milestone.
    Returns ``(position, record)`` pairs in input order.
    """
    years_required = milestones[transition_index + 1].years_required
    evaluated = evaluate_records(records, milestones, catalog, now, national_median_income)
    return [
        (position, entry.record)
        for position, entry in enumerate(evaluated)
        if is_eligible(entry.record, years_required, now)
        and _reached(entry, transition_index)
        and not _reached(entry, transition_index + 1)
    ]


def cohort_breakdown(
    records: Iterable[AlumniProgressRecord], catalog: StageCatalog, now: date
) -> list[CohortStatus]:
    """Tracking-status distribution per cohort year, newest cohort first."""
    by_cohort: dict[int, list[TrackingStatus]] = {}
    for record in records:
        progress = evaluate_record(record, catalog, now)
        by_cohort.setdefault(record.cohort_year, []).append(progress.tracking_status)

    return [
        CohortStatus(cohort_year=year, distribution=tally_statuses(by_cohort[year]))
        for year in sorted(by_cohort, reverse=True)
    ]
