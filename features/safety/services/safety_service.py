import logging
from typing import List, Optional

from core.config import settings
from features.safety.models.safety_types import SafetyAssessment, SafetyLevel, SafetyThresholds

logger = logging.getLogger(__name__)

class SafetyService:
    """Kayaking safety advisory from fixed discharge and current thresholds."""

    def __init__(self, thresholds: Optional[SafetyThresholds] = None):
        self.thresholds = thresholds or SafetyThresholds(
            discharge_caution=settings.discharge_caution_cfs,
            discharge_danger=settings.discharge_danger_cfs,
            current_caution=settings.current_caution_knots,
            current_danger=settings.current_danger_knots
        )
        logger.info(
            f"Safety service initialized with discharge limits "
            f"{self.thresholds.discharge_caution:.0f}/{self.thresholds.discharge_danger:.0f} cfs "
            f"and current limits {self.thresholds.current_caution}/{self.thresholds.current_danger} kn"
        )

    def assess(
        self,
        discharge: Optional[float] = None,
        current_speed: Optional[float] = None,
        tide_phase_label: Optional[str] = None
    ) -> SafetyAssessment:
        """Assess conditions; the level is the most severe one either metric triggers."""
        level = SafetyLevel.SAFE
        recommendations: List[str] = []

        if discharge:
            discharge_level = self._discharge_level(discharge)
            if discharge_level == SafetyLevel.DANGER:
                recommendations.append("🚫 EXTREME FLOODING - DO NOT kayak")
                recommendations.append("Major storm or flood event - dangerous conditions")
            elif discharge_level == SafetyLevel.CAUTION:
                recommendations.append("⚠️ High river flow - experienced kayakers only")
                recommendations.append("Stay close to shore and be aware of stronger currents")
            level = self._max_level(level, discharge_level)

        if current_speed and current_speed > 0:
            current_level = self._current_level(current_speed)
            if current_level == SafetyLevel.DANGER:
                recommendations.append("🚫 EXTREME CURRENTS - DO NOT kayak")
                recommendations.append("Unusually strong currents - likely storm or extreme conditions")
            elif current_level == SafetyLevel.CAUTION:
                recommendations.append("⚠️ Strong currents - experienced kayakers only")
                recommendations.append("Consider waiting for slack tide or stay near shore")
            level = self._max_level(level, current_level)

        if tide_phase_label:
            if "Flood" in tide_phase_label or "Rising" in tide_phase_label:
                recommendations.append("📈 Tide is rising - current flowing upstream")
            elif "Ebb" in tide_phase_label or "Falling" in tide_phase_label:
                recommendations.append("📉 Tide is falling - current flowing downstream")

        recommendations.insert(0, level.headline)
        if level == SafetyLevel.SAFE:
            recommendations.append("Always wear a life jacket")
            recommendations.append("Check weather forecast")

        return SafetyAssessment(
            level=level,
            message=level.message,
            recommendations=recommendations
        )

    def _discharge_level(self, discharge: float) -> SafetyLevel:
        if discharge > self.thresholds.discharge_danger:
            return SafetyLevel.DANGER
        if discharge > self.thresholds.discharge_caution:
            return SafetyLevel.CAUTION
        return SafetyLevel.SAFE

    def _current_level(self, current_speed: float) -> SafetyLevel:
        if current_speed > self.thresholds.current_danger:
            return SafetyLevel.DANGER
        if current_speed > self.thresholds.current_caution:
            return SafetyLevel.CAUTION
        return SafetyLevel.SAFE

    @staticmethod
    def _max_level(first: SafetyLevel, second: SafetyLevel) -> SafetyLevel:
        return first if first.severity >= second.severity else second
