"""Heading correction for compass sensor streams.

The sensor provider owns acquisition and cadence; this package only
provides the pure per-sample transforms.
"""

from qibla.sensors.heading import (
    compensate_hard_iron,
    correct_heading,
    mag_heading,
    mag_tilt_compensate,
    smooth_heading,
    true_to_magnetic,
)

__all__ = [
    "correct_heading",
    "true_to_magnetic",
    "mag_tilt_compensate",
    "mag_heading",
    "compensate_hard_iron",
    "smooth_heading",
]
