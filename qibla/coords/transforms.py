"""Ellipsoidal transformations used by the geomagnetic model.

The magnetic potential is expanded about the Earth's centre, so a
geodetic position (latitude on the WGS84 ellipsoid, height above it) must
be expressed in geocentric spherical coordinates before evaluation, and
the resulting field vector rotated back into the local geodetic
North-East-Down frame.

WGS84 ellipsoid parameters:
- Semi-major axis (a): 6378137.0 m
- Flattening (f): 1/298.257223563
- Semi-minor axis (b): 6356752.314245 m
- First eccentricity squared (e²): 0.00669437999014
"""

from typing import Tuple

import numpy as np
from numpy.typing import NDArray

# WGS84 ellipsoid parameters
WGS84_A = 6378137.0  # Semi-major axis (m)
WGS84_F = 1.0 / 298.257223563  # Flattening
WGS84_B = WGS84_A * (1.0 - WGS84_F)  # Semi-minor axis (m)
WGS84_E2 = 1.0 - (WGS84_B / WGS84_A) ** 2  # First eccentricity squared


def llh_to_ecef(
    lat: float,
    lon: float,
    height: float,
) -> NDArray[np.float64]:
    """Convert geodetic coordinates (LLH) to ECEF Cartesian coordinates.

    Args:
        lat: Geodetic latitude in radians (positive north).
        lon: Longitude in radians (positive east).
        height: Height above WGS84 ellipsoid in meters.

    Returns:
        ECEF coordinates as numpy array [x, y, z] in meters.

    Example:
        >>> xyz = llh_to_ecef(0.0, 0.0, 0.0)
        >>> xyz[0]
        6378137.0
    """
    sin_lat = np.sin(lat)
    cos_lat = np.cos(lat)
    # Radius of curvature in the prime vertical
    N = WGS84_A / np.sqrt(1.0 - WGS84_E2 * sin_lat**2)

    x = (N + height) * cos_lat * np.cos(lon)
    y = (N + height) * cos_lat * np.sin(lon)
    z = (N * (1.0 - WGS84_E2) + height) * sin_lat

    return np.array([x, y, z], dtype=np.float64)


def geodetic_to_geocentric(
    lat: float,
    height_km: float = 0.0,
) -> Tuple[float, float]:
    """Convert geodetic latitude and height to geocentric latitude and radius.

    Longitude is identical in both systems, so only the meridian plane
    matters: the point is placed on the ellipsoid via llh_to_ecef and its
    distance from the centre and elevation angle are read off.

    Args:
        lat: Geodetic latitude in radians.
        height_km: Height above the WGS84 ellipsoid in kilometers.

    Returns:
        (geocentric_lat, radius_km): geocentric latitude in radians and
        geocentric radius in kilometers.

    Example:
        >>> lat_gc, r = geodetic_to_geocentric(0.0)
        >>> lat_gc, round(r, 3)
        (0.0, 6378.137)
    """
    x, _, z = llh_to_ecef(lat, 0.0, height_km * 1000.0)
    radius_m = float(np.hypot(x, z))
    lat_gc = float(np.arctan2(z, x))
    return lat_gc, radius_m / 1000.0


def geocentric_to_geodetic_ned(
    north_gc: float,
    east_gc: float,
    down_gc: float,
    lat_geocentric: float,
    lat_geodetic: float,
) -> NDArray[np.float64]:
    """Rotate a field vector from the geocentric to the geodetic local frame.

    The two local frames share the east axis and differ by a rotation about
    it through ψ = φ' − φ (geocentric minus geodetic latitude):

        N = N' cos ψ − D' sin ψ
        E = E'
        D = N' sin ψ + D' cos ψ

    Args:
        north_gc: North component in the geocentric frame.
        east_gc: East component in the geocentric frame.
        down_gc: Down (towards Earth centre) component in the geocentric frame.
        lat_geocentric: Geocentric latitude φ' in radians.
        lat_geodetic: Geodetic latitude φ in radians.

    Returns:
        Vector [north, east, down] in the geodetic frame, same units as input.
    """
    psi = lat_geocentric - lat_geodetic
    cos_psi = np.cos(psi)
    sin_psi = np.sin(psi)

    north = north_gc * cos_psi - down_gc * sin_psi
    down = north_gc * sin_psi + down_gc * cos_psi

    return np.array([north, east_gc, down], dtype=np.float64)
