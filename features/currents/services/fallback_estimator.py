from datetime import datetime
from typing import Optional

from core.config import settings
from features.currents.models.current_types import CurrentKind, CurrentState
from features.tides.models.tide_types import TidePhase, TidePrediction, TideState

# Peak current is assumed three hours from the tidal turn
MINUTES_TO_PEAK = 180.0
MIN_TIDAL_SPEED_KNOTS = 0.5
TIDAL_SPEED_RANGE_KNOTS = 1.5
# Midpoint of the 0.2-0.5 knot slack water range
SLACK_SPEED_KNOTS = 0.35

def estimate_speed(
    phase: TidePhase,
    next_high: Optional[TidePrediction],
    next_low: Optional[TidePrediction],
    now: datetime
) -> float:
    """Approximate current speed from the position in the tidal cycle."""
    next_tide_time = None
    if next_high and next_low:
        next_tide_time = min(next_high.time, next_low.time)

    if next_tide_time and phase in (TidePhase.RISING, TidePhase.FALLING):
        minutes_to_next_tide = (next_tide_time - now).total_seconds() / 60
        cycle_position = abs(minutes_to_next_tide - MINUTES_TO_PEAK) / MINUTES_TO_PEAK
        return MIN_TIDAL_SPEED_KNOTS + cycle_position * TIDAL_SPEED_RANGE_KNOTS

    return SLACK_SPEED_KNOTS

def estimate_direction(phase: TidePhase) -> float:
    """Rising tide floods upstream, falling tide ebbs downstream."""
    if phase == TidePhase.RISING:
        return settings.flood_bearing_degrees
    if phase == TidePhase.FALLING:
        return settings.ebb_bearing_degrees
    return 0.0

def estimate_current(tide_state: TideState, now: datetime) -> CurrentState:
    kind = {
        TidePhase.RISING: CurrentKind.FLOOD,
        TidePhase.FALLING: CurrentKind.EBB
    }.get(tide_state.phase, CurrentKind.SLACK)

    return CurrentState(
        speed_knots=estimate_speed(tide_state.phase, tide_state.next_high, tide_state.next_low, now),
        direction_degrees=estimate_direction(tide_state.phase),
        kind=kind,
        source_is_measured=False
    )
