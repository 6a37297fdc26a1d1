"""
Angle normalization and manipulation utilities (degrees).

Provides functions for keeping compass quantities within proper bounds:
    - [0, 360) for bearings and headings
    - (-180, 180] for signed deltas and declinations

Critical for:
- Bearings to a fixed target (0° = true north, clockwise)
- Correcting magnetic headings by declination without 359° -> 0° jumps
- Needle-rotation deltas for compass animation
"""

from typing import Union

import numpy as np

Angle = Union[float, np.ndarray]


def _as_output(value: np.ndarray, like: Angle) -> Angle:
    """Return a Python float for scalar input, an array otherwise."""
    if np.ndim(like) == 0:
        return float(value)
    return value


def normalize_degrees(angle: Angle) -> Angle:
    """
    Map any real angle to the bearing range [0, 360).

    Uses fmod so that large inputs keep full precision, then shifts negative
    remainders by one turn. A shifted remainder that rounds up to exactly
    360.0 (e.g. -1e-20) is folded back to 0.0.

    Args:
        angle: Angle in degrees (any finite value, scalar or array)

    Returns:
        Equivalent angle in [0, 360)

    Example:
        >>> normalize_degrees(-90.0)
        270.0
        >>> normalize_degrees(360.0)
        0.0
        >>> normalize_degrees(725.0)
        5.0
    """
    a = np.asarray(angle, dtype=np.float64)
    wrapped = np.fmod(a, 360.0)
    wrapped = np.where(wrapped < 0.0, wrapped + 360.0, wrapped)
    wrapped = np.where(wrapped >= 360.0, 0.0, wrapped)
    # fold -0.0 to 0.0
    wrapped = wrapped + 0.0
    return _as_output(wrapped, angle)


def wrap_degrees(angle: Angle) -> Angle:
    """
    Wrap angle to the signed range (-180, 180].

    The construction is odd-symmetric: wrap_degrees(-x) == -wrap_degrees(x)
    bit-for-bit, except at the ±180° seam where both map to +180.

    Args:
        angle: Angle in degrees (scalar or array)

    Returns:
        Wrapped angle in (-180, 180]

    Example:
        >>> wrap_degrees(190.0)
        -170.0
        >>> wrap_degrees(-180.0)
        180.0
    """
    a = np.asarray(angle, dtype=np.float64)
    wrapped = np.fmod(a, 360.0)
    wrapped = np.where(wrapped > 180.0, wrapped - 360.0, wrapped)
    wrapped = np.where(wrapped <= -180.0, wrapped + 360.0, wrapped)
    wrapped = wrapped + 0.0
    return _as_output(wrapped, angle)


def angular_difference(angle1: Angle, angle2: Angle) -> Angle:
    """
    Compute the signed shortest rotation from angle1 to angle2.

    Returns angle2 - angle1, wrapped to (-180, 180]. Positive values mean a
    clockwise turn (towards increasing bearing). This is the quantity a
    compass needle animation should rotate by, so a transition from 359° to
    1° becomes +2° instead of -358°.

    Args:
        angle1: Starting angle in degrees (e.g. current needle position)
        angle2: Target angle in degrees (e.g. new heading)

    Returns:
        Shortest signed difference in (-180, 180]

    Example:
        >>> angular_difference(359.0, 1.0)
        2.0
        >>> angular_difference(1.0, 359.0)
        -2.0

    Notes:
        angular_difference(a, b) == -angular_difference(b, a) holds exactly
        whenever the two angles are not diametrically opposed. At an exact
        180° separation both directions report +180.
    """
    a1 = np.asarray(angle1, dtype=np.float64)
    a2 = np.asarray(angle2, dtype=np.float64)
    delta = wrap_degrees(a2 - a1)
    if np.ndim(angle1) == 0 and np.ndim(angle2) == 0:
        return float(delta)
    return np.asarray(delta)


def degrees_to_radians(degrees: Angle) -> Angle:
    """Convert degrees to radians."""
    return np.deg2rad(degrees)


def radians_to_degrees(radians: Angle) -> Angle:
    """Convert radians to degrees."""
    return np.rad2deg(radians)
