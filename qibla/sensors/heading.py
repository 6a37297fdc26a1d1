"""
Heading correction for magnetometer and compass streams.

This module turns raw magnetic headings into true headings and provides the
small amount of signal handling a compass display needs:
    - Declination correction, magnetic <-> true
    - Magnetometer tilt compensation and heading from a body-frame sample
    - Hard-iron offset removal
    - Circular exponential smoothing of a heading stream

Frame Conventions:
    - B: Body frame (x = forward, y = right, z = down)
    - Headings are compass bearings in degrees: 0 = north, 90 = east,
      clockwise, in [0, 360)

Declination sign convention:
    Positive declination means magnetic north lies east of true north.
        true     = normalize(magnetic + declination)
        magnetic = normalize(true − declination)

All functions are pure and stateless; the caller owns the sampling cadence.
"""

import numpy as np

from qibla.utils.angles import angular_difference, normalize_degrees


def correct_heading(raw_magnetic_heading: float, declination: float) -> float:
    """
    Correct a magnetic compass heading to a true heading.

        true = normalize(raw_magnetic_heading + declination)

    Args:
        raw_magnetic_heading: Heading relative to magnetic north (degrees).
        declination: Local magnetic declination (degrees, positive east).

    Returns:
        True heading in [0, 360).

    Example:
        >>> correct_heading(350.0, 20.0)
        10.0
        >>> correct_heading(10.0, -20.0)
        350.0
    """
    return normalize_degrees(raw_magnetic_heading + declination)


def true_to_magnetic(true_heading: float, declination: float) -> float:
    """
    Express a true bearing relative to magnetic north.

        magnetic = normalize(true_heading − declination)

    Inverse of :func:`correct_heading` for the same declination.

    Args:
        true_heading: Bearing relative to true north (degrees).
        declination: Local magnetic declination (degrees, positive east).

    Returns:
        Magnetic bearing in [0, 360).
    """
    return normalize_degrees(true_heading - declination)


def mag_tilt_compensate(
    mag_b: np.ndarray,
    roll: float,
    pitch: float,
) -> np.ndarray:
    """
    Project a body-frame magnetometer sample onto the horizontal plane.

        mag_h = R_y(pitch) @ R_x(roll) @ mag_b

    The body attitude is R_nb = R_z(yaw) R_y(pitch) R_x(roll); applying the
    roll and pitch rotations to the body-frame sample levels it, leaving only
    the yaw rotation between mag_h and the local North-East-Down field.

    Args:
        mag_b: Magnetic field in body frame B, shape (3,). Units: μT, nT or
               normalized.
        roll: Roll angle in degrees (positive = right side down).
        pitch: Pitch angle in degrees (positive = nose up).

    Returns:
        Tilt-compensated field, shape (3,), same units as mag_b.

    Raises:
        ValueError: If mag_b does not have shape (3,).
    """
    mag_b = np.asarray(mag_b, dtype=np.float64)
    if mag_b.shape != (3,):
        raise ValueError(f"mag_b must have shape (3,), got {mag_b.shape}")

    c_roll = np.cos(np.deg2rad(roll))
    s_roll = np.sin(np.deg2rad(roll))
    R_x = np.array([[1, 0, 0], [0, c_roll, -s_roll], [0, s_roll, c_roll]])

    c_pitch = np.cos(np.deg2rad(pitch))
    s_pitch = np.sin(np.deg2rad(pitch))
    R_y = np.array([[c_pitch, 0, s_pitch], [0, 1, 0], [-s_pitch, 0, c_pitch]])

    return R_y @ R_x @ mag_b


def mag_heading(
    mag_b: np.ndarray,
    roll: float = 0.0,
    pitch: float = 0.0,
    declination: float = 0.0,
) -> float:
    """
    Compass heading from a magnetometer sample.

        1. Tilt compensation (see mag_tilt_compensate)
        2. ψ_mag = atan2(−mag_hy, mag_hx)   (forward-right-down body frame)
        3. ψ = correct_heading(ψ_mag, declination)

    With the default declination of 0 the result is the magnetic heading.

    Args:
        mag_b: Magnetic field in body frame B, shape (3,).
        roll: Roll angle in degrees.
        pitch: Pitch angle in degrees.
        declination: Magnetic declination in degrees (positive east).

    Returns:
        Heading in [0, 360) degrees.

    Example:
        >>> # Level device facing magnetic east: north lies to the left (−y)
        >>> mag_heading(np.array([0.0, -20.0, 40.0]))
        90.0
    """
    mag_h = mag_tilt_compensate(mag_b, roll, pitch)
    psi_mag = float(np.rad2deg(np.arctan2(-mag_h[1], mag_h[0])))
    return correct_heading(psi_mag, declination)


def compensate_hard_iron(
    mag_raw: np.ndarray,
    offset: np.ndarray,
) -> np.ndarray:
    """
    Remove a constant hard-iron bias from a magnetometer sample.

        mag_corrected = mag_raw − offset

    Args:
        mag_raw: Raw magnetometer measurement in body frame, shape (3,).
        offset: Hard-iron offset in body frame, shape (3,).

    Returns:
        Corrected field, shape (3,).

    Raises:
        ValueError: If either input does not have shape (3,).
    """
    mag_raw = np.asarray(mag_raw, dtype=np.float64)
    offset = np.asarray(offset, dtype=np.float64)
    if mag_raw.shape != (3,):
        raise ValueError(f"mag_raw must have shape (3,), got {mag_raw.shape}")
    if offset.shape != (3,):
        raise ValueError(f"offset must have shape (3,), got {offset.shape}")

    return mag_raw - offset


def smooth_heading(
    previous: float,
    measurement: float,
    alpha: float = 0.2,
) -> float:
    """
    Circular exponential smoothing of a heading stream.

        ψ_k = normalize(ψ_{k−1} + α · Δ(ψ_{k−1}, z_k))

    where Δ is the shortest signed angular difference, so smoothing across
    north (e.g. 358° -> 2°) moves through 0° instead of sweeping back
    through 180°.

    Args:
        previous: Previous smoothed heading (degrees).
        measurement: New raw heading (degrees).
        alpha: Smoothing factor in (0, 1]. 1 tracks the raw measurement.

    Returns:
        Smoothed heading in [0, 360).

    Raises:
        ValueError: If alpha is outside (0, 1].

    Example:
        >>> smooth_heading(358.0, 2.0, alpha=0.5)
        0.0
    """
    if not (0.0 < alpha <= 1.0):
        raise ValueError(f"alpha must be in (0, 1], got {alpha}")

    return normalize_degrees(previous + alpha * angular_difference(previous, measurement))
