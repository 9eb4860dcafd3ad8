"""
Wind direction to compass point conversion.
"""
import math

COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)

SECTOR_WIDTH = 360.0 / len(COMPASS_POINTS)


def deg_to_compass(angle: float) -> str:
    """
    Convert a wind direction in degrees to the nearest of 16 compass points.

    Any finite angle is accepted; negative values and values of 360 or more
    are wrapped into [0, 360) first.

    Args:
        angle: Wind direction in degrees, clockwise from north

    Returns:
        Compass point label, e.g. "N", "SSW"

    Raises:
        ValueError: If angle is NaN or infinite
    """
    if not math.isfinite(angle):
        raise ValueError(f"Wind direction must be a finite number, got {angle}")

    normalized = angle % 360.0

    # Halves round up, so 11.25 is NNE; 16 wraps back to N.
    sector = math.floor(normalized / SECTOR_WIDTH + 0.5)
    return COMPASS_POINTS[sector % len(COMPASS_POINTS)]
