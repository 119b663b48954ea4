from typing import Optional

class UnitConversions:
    """Centralized utility for unit conversions and display formatting."""

    @staticmethod
    def knots_to_mph(knots: Optional[float]) -> Optional[float]:
        """Convert knots to miles per hour."""
        if knots is None:
            return None
        return round(knots * 1.15078, 2)

    @staticmethod
    def normalize_bearing(degrees: float) -> float:
        """Wrap a bearing into [0, 360)."""
        bearing = degrees % 360.0
        # Tiny negative inputs round up to exactly 360.0
        if bearing >= 360.0:
            return 0.0
        return bearing

    @staticmethod
    def format_discharge(value: float) -> str:
        """Format discharge in cubic feet per second, abbreviating thousands."""
        if value >= 1000:
            return f"{value / 1000:.1f}k ft³/s"
        return f"{value:.0f} ft³/s"

    @staticmethod
    def format_feet(value: float) -> str:
        return f"{value:.2f} ft"
