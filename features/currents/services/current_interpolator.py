"""
Instantaneous current from discrete NOAA current predictions.

NOAA MAX_SLACK predictions only give the turning points of the tidal
current (max flood, max ebb, slack). The current at an arbitrary instant is
linearly interpolated between the prediction at or before it and the one
after it, then reclassified from the interpolated velocity.

Prediction timestamps are station-local civil time, so ``now`` is moved into
the station time zone before it is compared with them.
"""
import logging
from datetime import datetime, tzinfo
from typing import Optional, Sequence

from core.config import settings
from features.common.utils.conversions import UnitConversions
from features.currents.models.current_types import CurrentKind, CurrentPrediction, CurrentState

logger = logging.getLogger(__name__)

SLACK_THRESHOLD_KNOTS = settings.slack_threshold_knots

def localize(now: datetime, tz: tzinfo) -> datetime:
    """Express ``now`` in station-local time; naive values are already local."""
    if now.tzinfo is None:
        return now.replace(tzinfo=tz)
    return now.astimezone(tz)

def classify_velocity(velocity: float, slack_threshold: float = SLACK_THRESHOLD_KNOTS) -> CurrentKind:
    """Flood is positive, ebb negative; anything weaker than the threshold is slack."""
    if abs(velocity) < slack_threshold:
        return CurrentKind.SLACK
    return CurrentKind.FLOOD if velocity > 0 else CurrentKind.EBB

def _direction_for(kind: CurrentKind, sample: CurrentPrediction) -> float:
    """Mean direction of ``kind`` from ``sample``, falling back to the opposite then a fixed bearing."""
    if kind == CurrentKind.FLOOD:
        chosen, opposite = sample.mean_flood_direction, sample.mean_ebb_direction
        default = settings.flood_bearing_degrees
    else:
        chosen, opposite = sample.mean_ebb_direction, sample.mean_flood_direction
        default = settings.ebb_bearing_degrees

    if chosen is not None:
        return chosen
    if opposite is not None:
        logger.warning(f"Missing mean {kind.value} direction at {sample.time.isoformat()}, using opposite direction")
        return opposite
    return default

def resolve_current(
    predictions: Sequence[CurrentPrediction],
    now: datetime,
    tz: tzinfo
) -> Optional[CurrentState]:
    """Interpolate current speed and direction at ``now``.

    Returns None when there are no predictions; callers then fall back to
    estimating the current from the tide.
    """
    if not predictions:
        return None

    local_now = localize(now, tz)
    ordered = sorted(predictions, key=lambda p: p.time)

    # Most recent prediction at or before now, else the earliest one
    active_index = 0
    for index in range(len(ordered) - 1, -1, -1):
        if ordered[index].time <= local_now:
            active_index = index
            break

    active = ordered[active_index]
    upcoming = ordered[active_index + 1] if active_index + 1 < len(ordered) else None

    velocity = active.velocity_major
    if upcoming is not None and upcoming.time > active.time:
        span = (upcoming.time - active.time).total_seconds()
        elapsed = (local_now - active.time).total_seconds()
        ratio = min(max(elapsed / span, 0.0), 1.0)
        velocity = active.velocity_major + (upcoming.velocity_major - active.velocity_major) * ratio

    kind = classify_velocity(velocity)

    if kind == CurrentKind.SLACK:
        # Report the direction the water is about to turn toward
        if upcoming is not None and upcoming.kind == CurrentKind.FLOOD:
            direction = _direction_for(CurrentKind.FLOOD, upcoming)
        elif upcoming is not None:
            direction = _direction_for(CurrentKind.EBB, upcoming)
        else:
            direction = _direction_for(CurrentKind.EBB, active)
    else:
        direction = _direction_for(kind, active)

    return CurrentState(
        speed_knots=abs(velocity),
        direction_degrees=UnitConversions.normalize_bearing(direction),
        kind=kind,
        source_is_measured=True
    )
