"""Qibla direction service and compass formatting."""

from qibla.direction.compass import (
    CompassPoint,
    compass_label,
    format_declination,
    format_direction,
    format_distance,
)
from qibla.direction.qibla import KAABA, QiblaResult, QiblaService, qibla_needle_angle

__all__ = [
    "KAABA",
    "QiblaResult",
    "QiblaService",
    "qibla_needle_angle",
    "CompassPoint",
    "compass_label",
    "format_declination",
    "format_direction",
    "format_distance",
]
