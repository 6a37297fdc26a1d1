"""Compass-point labels and human-readable formatting of bearings."""

import math
from enum import Enum

from qibla.utils.angles import normalize_degrees

SECTOR_WIDTH_DEG = 22.5


class CompassPoint(Enum):
    """The 16 points of the compass rose, clockwise from north."""

    N = "N"
    NNE = "NNE"
    NE = "NE"
    ENE = "ENE"
    E = "E"
    ESE = "ESE"
    SE = "SE"
    SSE = "SSE"
    S = "S"
    SSW = "SSW"
    SW = "SW"
    WSW = "WSW"
    W = "W"
    WNW = "WNW"
    NW = "NW"
    NNW = "NNW"

    @property
    def center_degrees(self) -> float:
        """Bearing at the centre of this point's sector."""
        return _POINTS.index(self) * SECTOR_WIDTH_DEG

    def __str__(self) -> str:
        return self.value


_POINTS = list(CompassPoint)


def compass_label(direction: float) -> CompassPoint:
    """
    Map a bearing to the nearest of the 16 compass points.

    index = round(direction / 22.5) mod 16, with ties (directions exactly
    half-way between two points, e.g. 11.25° or 348.75°) rounded up to the
    next point clockwise. The N sector therefore ends at 11.25°, so 22.4° is
    already NNE.

    Args:
        direction: Bearing in degrees (any real value; normalized first).

    Returns:
        CompassPoint whose sector contains the bearing.

    Example:
        >>> compass_label(58.48)
        <CompassPoint.ENE: 'ENE'>
        >>> compass_label(348.75)
        <CompassPoint.N: 'N'>
        >>> compass_label(22.4)
        <CompassPoint.NNE: 'NNE'>
    """
    index = int(math.floor(normalize_degrees(direction) / SECTOR_WIDTH_DEG + 0.5)) % 16
    return _POINTS[index]


def format_distance(distance_km: float) -> str:
    """
    Format a distance for display.

    Below 1 km the value is shown in whole meters, below 100 km with one
    decimal, and in whole kilometers otherwise.

    Example:
        >>> format_distance(0.85), format_distance(12.34), format_distance(10306.2)
        ('850 m', '12.3 km', '10306 km')
    """
    if distance_km < 1.0:
        return f"{distance_km * 1000.0:.0f} m"
    if distance_km < 100.0:
        return f"{distance_km:.1f} km"
    return f"{distance_km:.0f} km"


def format_direction(direction: float) -> str:
    """Bearing with one decimal and its compass point, e.g. ``'58.5° ENE'``."""
    return f"{direction:.1f}° {compass_label(direction)}"


def format_declination(declination: float) -> str:
    """
    Describe a declination as an unsigned angle and side.

    Example:
        >>> format_declination(-12.94), format_declination(0.04)
        ('12.9° West', 'No declination')
    """
    magnitude = abs(declination)
    if magnitude < 0.1:
        return "No declination"
    side = "East" if declination >= 0 else "West"
    return f"{magnitude:.1f}° {side}"
