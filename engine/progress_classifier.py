"""
Tracking-status classification against the time-based expectation.
"""

from models.record import AlumniProgressRecord
from models.status import PathType, TrackingStatus


def classify(
    record: AlumniProgressRecord, resolved_stage_index: int, expected_stage_index: int
) -> TrackingStatus:
    """
    Classify a record's progress into a tracking status.

    Rules:
    1. A manually set status is authoritative and returned verbatim
       (absent stored value maps to ``unknown``)
    2. ``undefined`` path or no stage data -> ``unknown``
    3. At or ahead of the expected index -> ``on-track``
    4. Exactly one stage behind -> ``near-track``
    5. Two or more stages behind -> ``off-track``

    Args:
        record: Alumni progress record
        resolved_stage_index: Index from the stage resolver
        expected_stage_index: Index expected from elapsed time on the same path

    Returns:
        One of the four TrackingStatus values, never None

    Examples:
        >>> from models.record import AlumniProgressRecord
        >>> record = AlumniProgressRecord(cohort_year=2024, path_type="college")
        >>> classify(record, 1, 1).value
        'on-track'
        >>> classify(record, 0, 1).value
        'near-track'
        >>> classify(record, 0, 2).value
        'off-track'
    """
    if record.tracking_status_manually_set:
        return record.stored_tracking_status or TrackingStatus.UNKNOWN

    if record.path_type == PathType.UNDEFINED or resolved_stage_index < 0 or expected_stage_index < 0:
        return TrackingStatus.UNKNOWN

    if resolved_stage_index >= expected_stage_index:
        return TrackingStatus.ON_TRACK
    if resolved_stage_index == expected_stage_index - 1:
        return TrackingStatus.NEAR_TRACK
    return TrackingStatus.OFF_TRACK
