"""
Utility functions for compass and bearing arithmetic.

All public angles in this package are expressed in degrees.
"""

from .angles import (
    angular_difference,
    degrees_to_radians,
    normalize_degrees,
    radians_to_degrees,
    wrap_degrees,
)

__all__ = [
    'normalize_degrees',
    'wrap_degrees',
    'angular_difference',
    'degrees_to_radians',
    'radians_to_degrees',
]
