"""
Per-record progress evaluation: resolver and classifier in one pass.
"""

from datetime import date

from engine.progress_classifier import classify
from engine.stage_resolver import expected_stage_index, progress_percentage, resolve_stage
from models.catalog import StageCatalog
from models.record import AlumniProgressRecord
from models.results import RecordProgress
from models.status import TrackingStatus


def evaluate_record(record: AlumniProgressRecord, catalog: StageCatalog, now: date) -> RecordProgress:
    """
    Resolve, classify and summarize one record's progress.

    The ``*_differs_from_stored`` flags tell a persistence layer whether the
    computed stage or status disagrees with what is stored; deciding whether
    to write it back is left to the caller.

    Args:
        record: Alumni progress record
        catalog: Stage catalog supplied by the caller
        now: Reference time supplied by the caller

    Returns:
        RecordProgress snapshot
    """
    resolved = resolve_stage(record, catalog, now)
    expected = expected_stage_index(record, catalog, now)
    status = classify(record, resolved.stage_index, expected)

    stored_status = record.stored_tracking_status or TrackingStatus.UNKNOWN

    return RecordProgress(
        alumni_id=record.alumni_id,
        cohort_year=record.cohort_year,
        resolved=resolved,
        expected_stage_index=expected,
        progress_percentage=progress_percentage(resolved),
        tracking_status=status,
        stage_differs_from_stored=resolved.stage != record.stored_stage,
        status_differs_from_stored=status != stored_status,
    )
