"""Geographic coordinates and geodesy.

This module provides:
- GeoCoordinate: validated latitude/longitude value type (degrees)
- Great-circle bearing and haversine distance on a spherical Earth
- WGS84 geodetic -> geocentric conversion used by the magnetic model
"""

from qibla.coords.geodesy import (
    EARTH_RADIUS_KM,
    GeoCoordinate,
    InvalidCoordinate,
    bearing,
    distance,
    grid_convergence,
    is_same_point,
)
from qibla.coords.transforms import (
    geocentric_to_geodetic_ned,
    geodetic_to_geocentric,
    llh_to_ecef,
)

__all__ = [
    # Geodesy
    "EARTH_RADIUS_KM",
    "GeoCoordinate",
    "InvalidCoordinate",
    "bearing",
    "distance",
    "grid_convergence",
    "is_same_point",
    # Transforms
    "llh_to_ecef",
    "geodetic_to_geocentric",
    "geocentric_to_geodetic_ned",
]
