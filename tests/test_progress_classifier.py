"""
Unit tests for tracking-status classification and per-record evaluation.
"""

import pytest

from engine.progress_classifier import classify
from engine.record_progress import evaluate_record
from models.status import TrackingStatus


class TestClassify:
    """Tests for the classification rules."""

    @pytest.mark.parametrize(
        "resolved,expected,status",
        [
            (3, 3, TrackingStatus.ON_TRACK),
            (5, 3, TrackingStatus.ON_TRACK),
            (0, 0, TrackingStatus.ON_TRACK),
            (2, 3, TrackingStatus.NEAR_TRACK),
            (1, 3, TrackingStatus.OFF_TRACK),
            (0, 6, TrackingStatus.OFF_TRACK),
        ],
    )
    def test_index_comparison(self, make_record, resolved, expected, status):
        """Test classification from resolved and expected indices."""
        assert classify(make_record(), resolved, expected) == status

    def test_undefined_path_is_unknown(self, make_record):
        """Test that the undefined path is unknown."""
        record = make_record(path_type="undefined")
        assert classify(record, 3, 3) == TrackingStatus.UNKNOWN

    def test_no_stage_data_is_unknown(self, make_record):
        """Test that a record with no stage is unknown."""
        assert classify(make_record(), -1, 2) == TrackingStatus.UNKNOWN

    def test_manual_status_returned_verbatim(self, make_record):
        """Test that a manual status is returned unchanged."""
        record = make_record(
            stored_tracking_status="off-track", tracking_status_manually_set=True
        )
        assert classify(record, 6, 0) == TrackingStatus.OFF_TRACK

    def test_manual_status_wins_over_undefined_path(self, make_record):
        """Test that a manual status wins even without a path."""
        record = make_record(
            path_type="undefined",
            stored_tracking_status="on-track",
            tracking_status_manually_set=True,
        )
        assert classify(record, -1, -1) == TrackingStatus.ON_TRACK

    def test_manual_flag_without_stored_status_is_unknown(self, make_record):
        """Test unknown when flagged manual with no stored status."""
        record = make_record(tracking_status_manually_set=True)
        assert classify(record, 3, 3) == TrackingStatus.UNKNOWN

    def test_stored_status_ignored_without_manual_flag(self, make_record):
        """Test that a stored status is ignored unless flagged manual."""
        record = make_record(stored_tracking_status="off-track")
        assert classify(record, 3, 3) == TrackingStatus.ON_TRACK


class TestEvaluateRecord:
    """Tests for the combined per-record snapshot."""

    def test_auto_resolved_record_is_on_track(self, catalog, now, make_record):
        """Test that an auto-resolved record is on-track."""
        record = make_record(alumni_id=1, cohort_year=now.year - 2)
        progress = evaluate_record(record, catalog, now)

        assert progress.resolved.stage == "yr2"
        assert progress.resolved.stage_index == 1
        assert progress.expected_stage_index == 1
        assert progress.tracking_status == TrackingStatus.ON_TRACK
        assert progress.progress_percentage == pytest.approx(1 / 6)

    def test_manual_stage_one_behind_is_near_track(self, catalog, now, make_record):
        """Test near-track one stage behind expectation."""
        record = make_record(
            alumni_id=2, cohort_year=now.year - 2, stored_stage="yr1", stage_manually_set=True
        )
        progress = evaluate_record(record, catalog, now)

        assert progress.resolved.stage == "yr1"
        assert progress.tracking_status == TrackingStatus.NEAR_TRACK

    def test_manual_stage_far_behind_is_off_track(self, catalog, now, make_record):
        """Test off-track two or more stages behind."""
        record = make_record(cohort_year=2020, stored_stage="yr1", stage_manually_set=True)
        progress = evaluate_record(record, catalog, now)

        assert progress.expected_stage_index == 5
        assert progress.tracking_status == TrackingStatus.OFF_TRACK

    def test_undefined_path_snapshot(self, catalog, now, make_record):
        """Test the evaluated snapshot for a record without a path."""
        progress = evaluate_record(make_record(path_type="undefined"), catalog, now)

        assert progress.resolved.stage is None
        assert progress.expected_stage_index == -1
        assert progress.progress_percentage == 0
        assert progress.tracking_status == TrackingStatus.UNKNOWN

    def test_differs_flags_when_stored_values_stale(self, catalog, now, make_record):
        """Test the differs flags when stored values are stale."""
        record = make_record(
            cohort_year=now.year - 2, stored_stage="yr1", stored_tracking_status="off-track"
        )
        progress = evaluate_record(record, catalog, now)

        assert progress.stage_differs_from_stored is True
        assert progress.status_differs_from_stored is True

    def test_differs_flags_when_stored_values_current(self, catalog, now, make_record):
        """Test the differs flags when stored values are current."""
        record = make_record(
            cohort_year=now.year - 2, stored_stage="yr2", stored_tracking_status="on-track"
        )
        progress = evaluate_record(record, catalog, now)

        assert progress.stage_differs_from_stored is False
        assert progress.status_differs_from_stored is False

    def test_missing_stored_status_compares_as_unknown(self, catalog, now, make_record):
        """Test that a missing stored status compares as unknown."""
        progress = evaluate_record(make_record(path_type="undefined"), catalog, now)

        assert progress.stage_differs_from_stored is False
        assert progress.status_differs_from_stored is False

    def test_same_inputs_same_snapshot(self, catalog, now, make_record):
        """Test that evaluation is deterministic."""
        record = make_record(cohort_year=2021, employed=True, current_income=90000)
        assert evaluate_record(record, catalog, now) == evaluate_record(record, catalog, now)
