from datetime import datetime, timedelta
from typing import Optional, Sequence

from features.tides.models.tide_types import TideKind, TidePhase, TidePrediction, TideState

# Only events this close to "now" may decide the phase
PHASE_WINDOW = timedelta(hours=12)

def resolve_phase(predictions: Sequence[TidePrediction], now: datetime) -> TideState:
    """Determine the tide phase and the next high and low tides at ``now``.

    The phase comes from the pair of consecutive events, within twelve hours
    of ``now``, that brackets it: low then high is rising, high then low is
    falling. Anything else, including an empty schedule, is unknown.
    """
    if now.tzinfo is None:
        raise ValueError("now must be timezone-aware")

    ordered = sorted(predictions, key=lambda p: p.time)

    next_high: Optional[TidePrediction] = None
    next_low: Optional[TidePrediction] = None
    for prediction in ordered:
        if prediction.time > now:
            if prediction.kind == TideKind.HIGH and next_high is None:
                next_high = prediction
            elif prediction.kind == TideKind.LOW and next_low is None:
                next_low = prediction
        if next_high and next_low:
            break

    window = [p for p in ordered if abs(p.time - now) < PHASE_WINDOW]

    phase = TidePhase.UNKNOWN
    for current, following in zip(window, window[1:]):
        if current.time <= now <= following.time:
            if current.kind == TideKind.LOW and following.kind == TideKind.HIGH:
                phase = TidePhase.RISING
            elif current.kind == TideKind.HIGH and following.kind == TideKind.LOW:
                phase = TidePhase.FALLING
            break

    return TideState(phase=phase, next_high=next_high, next_low=next_low)
