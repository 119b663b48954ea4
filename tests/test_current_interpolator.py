"""
Tests for interpolating current speed and direction between NOAA predictions.
"""
from datetime import datetime, timezone

import pytest

from conftest import CURRENT_RECORDS, local
from features.common.services.normalizer import parse_current_records
from features.currents.models.current_types import CompassPoint, CurrentKind, CurrentPrediction
from features.currents.services.current_interpolator import classify_velocity, resolve_current


def sample(hour, velocity, kind, minute=0, flood_dir=11.0, ebb_dir=183.0):
    return CurrentPrediction(
        time=local(hour, minute),
        kind=kind,
        velocity_major=velocity,
        mean_flood_direction=flood_dir,
        mean_ebb_direction=ebb_dir,
    )


@pytest.fixture
def predictions(tz):
    return parse_current_records(CURRENT_RECORDS, tz)


class TestInterpolation:
    """Velocity is linear between the bracketing predictions."""

    def test_midpoint_between_ebb_and_flood_is_slack(self, predictions, tz):
        state = resolve_current(predictions, local(11), tz)
        assert state.speed_knots == pytest.approx(0.0)
        assert state.kind == CurrentKind.SLACK
        assert state.source_is_measured is True

    @pytest.mark.parametrize("v0,v1", [(-1.0, 1.0), (0.4, 2.2), (-2.5, -0.5), (1.8, -1.6)])
    def test_endpoints_and_midpoint(self, tz, v0, v1):
        samples = [sample(10, v0, CurrentKind.FLOOD), sample(12, v1, CurrentKind.EBB)]
        assert resolve_current(samples, local(10), tz).speed_knots == pytest.approx(abs(v0))
        assert resolve_current(samples, local(12), tz).speed_knots == pytest.approx(abs(v1))
        assert resolve_current(samples, local(11), tz).speed_knots == pytest.approx(abs((v0 + v1) / 2))

    def test_quarter_way(self, tz):
        samples = [sample(10, 0.0, CurrentKind.SLACK), sample(12, 2.0, CurrentKind.FLOOD)]
        state = resolve_current(samples, local(10, 30), tz)
        assert state.speed_knots == pytest.approx(0.5)
        assert state.kind == CurrentKind.FLOOD

    def test_selects_bracketing_pair_not_neighbour(self, predictions, tz):
        # Between 12:00 flood (1.0) and 15:00 slack (0.0)
        state = resolve_current(predictions, local(13, 30), tz)
        assert state.speed_knots == pytest.approx(0.5)
        assert state.kind == CurrentKind.FLOOD

    def test_after_last_prediction_holds_last_value(self, tz):
        samples = [sample(10, -1.0, CurrentKind.EBB), sample(12, 1.4, CurrentKind.FLOOD)]
        state = resolve_current(samples, local(18), tz)
        assert state.speed_knots == pytest.approx(1.4)
        assert state.kind == CurrentKind.FLOOD

    def test_before_first_prediction_uses_earliest(self, tz):
        samples = [sample(10, -1.2, CurrentKind.EBB), sample(12, 1.0, CurrentKind.FLOOD)]
        state = resolve_current(samples, local(6), tz)
        assert state.speed_knots == pytest.approx(1.2)
        assert state.kind == CurrentKind.EBB

    def test_duplicate_timestamps_skip_interpolation(self, tz):
        samples = [sample(10, -1.2, CurrentKind.EBB), sample(10, 1.0, CurrentKind.FLOOD)]
        state = resolve_current(samples, local(9), tz)
        assert state.speed_knots == pytest.approx(1.2)

    def test_unsorted_input_is_not_mutated(self, predictions, tz):
        shuffled = list(reversed(predictions))
        before = list(shuffled)
        state = resolve_current(shuffled, local(13, 30), tz)
        assert shuffled == before
        assert state.speed_knots == pytest.approx(0.5)

    @pytest.mark.parametrize("hour", [6, 10, 11, 13, 16, 23])
    def test_speed_is_never_negative(self, tz, hour):
        samples = [sample(10, -3.1, CurrentKind.EBB), sample(14, -0.9, CurrentKind.EBB)]
        state = resolve_current(samples, local(hour), tz)
        assert state.speed_knots >= 0
        assert state.kind == CurrentKind.EBB

    def test_no_predictions(self, tz):
        assert resolve_current([], local(11), tz) is None


class TestTimeZone:
    """Now is compared with predictions in station-local time."""

    def test_utc_now_matches_local_now(self, predictions, tz):
        utc_now = datetime(2024, 5, 1, 17, 30, tzinfo=timezone.utc)  # 13:30 EDT
        assert resolve_current(predictions, utc_now, tz) == resolve_current(predictions, local(13, 30), tz)

    def test_naive_now_is_station_local(self, predictions, tz):
        naive_now = datetime(2024, 5, 1, 13, 30)
        state = resolve_current(predictions, naive_now, tz)
        assert state.speed_knots == pytest.approx(0.5)

    def test_naive_utc_reading_would_pick_other_pair(self, predictions, tz):
        # 13:30 EDT read naively as UTC wall time lands after the last prediction
        aware = resolve_current(predictions, local(13, 30), tz)
        misread = resolve_current(predictions, datetime(2024, 5, 1, 17, 30), tz)
        assert aware.speed_knots != misread.speed_knots


class TestClassification:
    """Type comes from the interpolated velocity, not the stored label."""

    @pytest.mark.parametrize("velocity,kind", [
        (0.0, CurrentKind.SLACK),
        (0.19, CurrentKind.SLACK),
        (-0.19, CurrentKind.SLACK),
        (0.2, CurrentKind.FLOOD),
        (-0.2, CurrentKind.EBB),
        (2.4, CurrentKind.FLOOD),
        (-2.4, CurrentKind.EBB),
    ])
    def test_classify_velocity(self, velocity, kind):
        assert classify_velocity(velocity) == kind

    def test_stored_label_is_ignored(self, tz):
        samples = [sample(10, -1.5, CurrentKind.FLOOD)]
        assert resolve_current(samples, local(10), tz).kind == CurrentKind.EBB


class TestDirection:
    """Direction follows the reclassified type."""

    def test_flood_uses_mean_flood_direction(self, tz):
        samples = [sample(10, 1.5, CurrentKind.FLOOD, flood_dir=14.0, ebb_dir=190.0)]
        assert resolve_current(samples, local(10), tz).direction_degrees == 14.0

    def test_ebb_uses_mean_ebb_direction(self, tz):
        samples = [sample(10, -1.5, CurrentKind.EBB, flood_dir=14.0, ebb_dir=190.0)]
        assert resolve_current(samples, local(10), tz).direction_degrees == 190.0

    def test_slack_before_flood_uses_upcoming_flood_direction(self, tz):
        samples = [
            sample(10, -1.0, CurrentKind.EBB, flood_dir=10.0, ebb_dir=180.0),
            sample(12, 1.0, CurrentKind.FLOOD, flood_dir=15.0, ebb_dir=185.0),
        ]
        state = resolve_current(samples, local(11), tz)
        assert state.kind == CurrentKind.SLACK
        assert state.direction_degrees == 15.0

    def test_slack_before_ebb_uses_ebb_direction(self, tz):
        samples = [
            sample(10, 1.0, CurrentKind.FLOOD, flood_dir=10.0, ebb_dir=180.0),
            sample(12, -1.0, CurrentKind.EBB, flood_dir=15.0, ebb_dir=185.0),
        ]
        assert resolve_current(samples, local(11), tz).direction_degrees == 185.0

    def test_slack_without_upcoming_uses_ebb_direction(self, tz):
        samples = [sample(10, 0.1, CurrentKind.SLACK, flood_dir=10.0, ebb_dir=180.0)]
        state = resolve_current(samples, local(12), tz)
        assert state.kind == CurrentKind.SLACK
        assert state.direction_degrees == 180.0

    def test_missing_direction_falls_back_to_opposite(self, tz):
        samples = [sample(10, 1.5, CurrentKind.FLOOD, flood_dir=None, ebb_dir=183.0)]
        assert resolve_current(samples, local(10), tz).direction_degrees == 183.0

    def test_missing_both_directions_uses_default_bearing(self, tz):
        flood = [sample(10, 1.5, CurrentKind.FLOOD, flood_dir=None, ebb_dir=None)]
        ebb = [sample(10, -1.5, CurrentKind.EBB, flood_dir=None, ebb_dir=None)]
        assert resolve_current(flood, local(10), tz).direction_degrees == 11.0
        assert resolve_current(ebb, local(10), tz).direction_degrees == 183.0

    def test_direction_is_normalized(self, tz):
        samples = [sample(10, 1.5, CurrentKind.FLOOD, flood_dir=371.0)]
        assert resolve_current(samples, local(10), tz).direction_degrees == pytest.approx(11.0)

    @pytest.mark.parametrize("degrees,point", [
        (11, CompassPoint.N),
        (183, CompassPoint.S),
        (350, CompassPoint.N),
        (45, CompassPoint.NE),
        (270, CompassPoint.W),
    ])
    def test_compass_point(self, degrees, point):
        assert CompassPoint.from_degrees(degrees) == point
