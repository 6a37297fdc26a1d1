"""Great-circle geodesy on a spherical Earth.

This module provides the validated coordinate value type and the spherical
primitives used to point a compass at a distant target:
- Initial great-circle bearing (forward azimuth)
- Haversine distance
- UTM grid convergence

Earth is modelled as a sphere of radius 6371.0 km (mean radius). Against
the WGS84 ellipsoid this costs up to ~0.5% in distance and a few tenths of
a degree in bearing over intercontinental paths, which is well below
compass resolution.
"""

import math
from dataclasses import dataclass

import numpy as np

from qibla.utils.angles import normalize_degrees

EARTH_RADIUS_KM = 6371.0  # Mean Earth radius (km)


class InvalidCoordinate(ValueError):
    """Latitude or longitude outside its valid range (or not finite)."""


@dataclass(frozen=True)
class GeoCoordinate:
    """
    Geographic position on the Earth's surface.

    Attributes:
        latitude: Latitude in degrees, [-90, 90] (positive north).
        longitude: Longitude in degrees, [-180, 180] (positive east).

    Construction is the single validation gate: out-of-range values raise
    InvalidCoordinate and are never clamped. Downstream functions assume a
    valid instance.

    Example:
        >>> GeoCoordinate(40.7128, -74.0060)
        GeoCoordinate(latitude=40.7128, longitude=-74.006)
        >>> GeoCoordinate(91.0, 0.0)
        Traceback (most recent call last):
            ...
        qibla.coords.geodesy.InvalidCoordinate: latitude must be in [-90, 90], got 91.0
    """

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        """Validate ranges and coerce to float."""
        for value in (self.latitude, self.longitude):
            if isinstance(value, (str, bytes, bool)):
                raise InvalidCoordinate(
                    f"latitude/longitude must be real numbers, "
                    f"got {type(value).__name__} {value!r}"
                )
        try:
            lat = float(self.latitude)
            lon = float(self.longitude)
        except (TypeError, ValueError) as exc:
            raise InvalidCoordinate(
                f"latitude/longitude must be real numbers, "
                f"got ({self.latitude!r}, {self.longitude!r})"
            ) from exc

        if not math.isfinite(lat) or not -90.0 <= lat <= 90.0:
            raise InvalidCoordinate(f"latitude must be in [-90, 90], got {lat}")
        if not math.isfinite(lon) or not -180.0 <= lon <= 180.0:
            raise InvalidCoordinate(f"longitude must be in [-180, 180], got {lon}")

        object.__setattr__(self, "latitude", lat)
        object.__setattr__(self, "longitude", lon)

    @property
    def latitude_rad(self) -> float:
        """Latitude in radians."""
        return math.radians(self.latitude)

    @property
    def longitude_rad(self) -> float:
        """Longitude in radians."""
        return math.radians(self.longitude)


def is_same_point(first: GeoCoordinate, second: GeoCoordinate) -> bool:
    """
    True when two coordinates name the same physical point.

    Longitudes -180 and 180 are one meridian, and at either pole every
    longitude is the same point.

    Example:
        >>> is_same_point(GeoCoordinate(0.0, 180.0), GeoCoordinate(0.0, -180.0))
        True
        >>> is_same_point(GeoCoordinate(90.0, 10.0), GeoCoordinate(90.0, -45.0))
        True
    """
    if first.latitude != second.latitude:
        return False
    if abs(first.latitude) == 90.0:
        return True
    return normalize_degrees(first.longitude - second.longitude) == 0.0


def bearing(origin: GeoCoordinate, target: GeoCoordinate) -> float:
    """Initial great-circle bearing from origin to target.

    Uses the spherical forward-azimuth formula:

        θ = atan2(sin Δλ · cos φ2, cos φ1 · sin φ2 − sin φ1 · cos φ2 · cos Δλ)

    Args:
        origin: Starting point.
        target: Destination point.

    Returns:
        Bearing in degrees, [0, 360), measured clockwise from true north.
        When origin and target are the same point (see is_same_point) the
        bearing is undefined and 0.0 is returned.

    Notes:
        The bearing is not reversible: bearing(B, A) differs from
        bearing(A, B) + 180 by the meridian convergence along the path,
        except for points on the same meridian or both on the equator.

    Example:
        >>> round(bearing(GeoCoordinate(0.0, 0.0), GeoCoordinate(0.0, 1.0)), 6)
        90.0
    """
    if is_same_point(origin, target):
        return 0.0

    phi1 = np.deg2rad(origin.latitude)
    phi2 = np.deg2rad(target.latitude)
    delta_lambda = np.deg2rad(target.longitude - origin.longitude)

    y = np.sin(delta_lambda) * np.cos(phi2)
    x = np.cos(phi1) * np.sin(phi2) - np.sin(phi1) * np.cos(phi2) * np.cos(delta_lambda)

    return normalize_degrees(float(np.rad2deg(np.arctan2(y, x))))


def distance(
    origin: GeoCoordinate,
    target: GeoCoordinate,
    radius_km: float = EARTH_RADIUS_KM,
) -> float:
    """Great-circle distance using the haversine formula.

        a = sin²(Δφ/2) + cos φ1 · cos φ2 · sin²(Δλ/2)
        d = 2R · atan2(√a, √(1 − a))

    Absolute coordinate differences are used so that the result is exactly
    symmetric: distance(A, B) == distance(B, A) bit-for-bit.

    Args:
        origin: First point.
        target: Second point.
        radius_km: Sphere radius in kilometers (default: mean Earth radius).

    Returns:
        Distance in kilometers (0.0 when is_same_point holds).
    """
    if is_same_point(origin, target):
        return 0.0

    phi1 = np.deg2rad(origin.latitude)
    phi2 = np.deg2rad(target.latitude)
    delta_phi = np.deg2rad(abs(target.latitude - origin.latitude))
    delta_lambda = np.deg2rad(abs(target.longitude - origin.longitude))

    a = np.sin(delta_phi / 2.0) ** 2 + (
        np.cos(phi1) * np.cos(phi2) * np.sin(delta_lambda / 2.0) ** 2
    )
    # Guard against a marginally exceeding 1 through rounding (antipodes)
    a = min(max(float(a), 0.0), 1.0)
    c = 2.0 * np.arctan2(np.sqrt(a), np.sqrt(1.0 - a))

    return float(radius_km * c)


def grid_convergence(coordinate: GeoCoordinate, utm_zone: int) -> float:
    """Approximate grid convergence for a UTM zone.

    Angle between grid north and true north, first-order approximation:

        γ ≈ (λ − λ0) · sin φ,  λ0 = 6 · zone − 183

    Args:
        coordinate: Point of interest.
        utm_zone: UTM zone number, 1..60.

    Returns:
        Grid convergence in degrees (positive when grid north is east of
        true north).

    Raises:
        ValueError: If utm_zone is outside 1..60.
    """
    if not 1 <= utm_zone <= 60:
        raise ValueError(f"utm_zone must be in 1..60, got {utm_zone}")

    central_meridian = 6.0 * utm_zone - 183.0
    delta_lon = coordinate.longitude - central_meridian
    return float(delta_lon * np.sin(np.deg2rad(coordinate.latitude)))
