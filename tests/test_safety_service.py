"""
Tests for the kayaking safety advisory.
"""
import pytest

from features.safety.models.safety_types import SafetyLevel, SafetyThresholds
from features.safety.services.safety_service import SafetyService


@pytest.fixture
def service():
    return SafetyService()


class TestDischarge:
    """Discharge thresholds use strictly-greater comparisons."""

    def test_at_caution_threshold_is_safe(self, service):
        assert service.assess(discharge=30000).level == SafetyLevel.SAFE

    def test_above_caution_threshold(self, service):
        assessment = service.assess(discharge=30001)
        assert assessment.level == SafetyLevel.CAUTION
        assert "⚠️ High river flow - experienced kayakers only" in assessment.recommendations

    def test_at_danger_threshold_is_caution(self, service):
        assert service.assess(discharge=50000).level == SafetyLevel.CAUTION

    def test_above_danger_threshold(self, service):
        assessment = service.assess(discharge=50001)
        assert assessment.level == SafetyLevel.DANGER
        assert "🚫 EXTREME FLOODING - DO NOT kayak" in assessment.recommendations
        assert "⚠️ High river flow - experienced kayakers only" not in assessment.recommendations


class TestCurrentSpeed:
    def test_at_caution_threshold_is_safe(self, service):
        assert service.assess(current_speed=2.5).level == SafetyLevel.SAFE

    def test_above_caution_threshold(self, service):
        assert service.assess(current_speed=2.6).level == SafetyLevel.CAUTION

    def test_above_danger_threshold(self, service):
        assessment = service.assess(current_speed=4.1)
        assert assessment.level == SafetyLevel.DANGER
        assert "🚫 EXTREME CURRENTS - DO NOT kayak" in assessment.recommendations

    def test_zero_speed_is_ignored(self, service):
        assessment = service.assess(current_speed=0.0)
        assert assessment.level == SafetyLevel.SAFE


class TestCombined:
    """The level is the most severe level either metric triggers."""

    def test_danger_discharge_with_caution_current(self, service):
        assert service.assess(discharge=60000, current_speed=3.0).level == SafetyLevel.DANGER

    def test_caution_discharge_with_danger_current(self, service):
        assert service.assess(discharge=35000, current_speed=5.0).level == SafetyLevel.DANGER

    def test_caution_from_either(self, service):
        assert service.assess(discharge=12000, current_speed=3.0).level == SafetyLevel.CAUTION

    def test_no_readings_is_safe(self, service):
        assessment = service.assess()
        assert assessment.level == SafetyLevel.SAFE
        assert assessment.message == "Safe for recreational kayaking"


class TestRecommendations:
    def test_safe_recommendations_order(self, service):
        assessment = service.assess(discharge=12000, current_speed=1.2, tide_phase_label="Rising (Flood)")
        assert assessment.recommendations == [
            "✅ Conditions are favorable for kayaking",
            "📈 Tide is rising - current flowing upstream",
            "Always wear a life jacket",
            "Check weather forecast",
        ]

    def test_headline_comes_first(self, service):
        assessment = service.assess(current_speed=3.0, tide_phase_label="Falling (Ebb)")
        assert assessment.recommendations[0] == "⚠️ Use caution - conditions require experience"
        assert assessment.recommendations[-1] == "📉 Tide is falling - current flowing downstream"
        assert "Always wear a life jacket" not in assessment.recommendations

    def test_unknown_tide_adds_nothing(self, service):
        assessment = service.assess(tide_phase_label="Unknown")
        assert len(assessment.recommendations) == 3

    def test_custom_thresholds(self):
        service = SafetyService(SafetyThresholds(
            discharge_caution=15000,
            discharge_danger=25000,
            current_caution=2.0,
            current_danger=3.0,
        ))
        assert service.assess(discharge=15001).level == SafetyLevel.CAUTION
        assert service.assess(current_speed=3.5).level == SafetyLevel.DANGER
