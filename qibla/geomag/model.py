"""
Spherical-harmonic geomagnetic field model.

This module evaluates the main geomagnetic field at a point and time from
a table of Gauss coefficients with linear secular variation, the algorithm
behind NOAA/BGS's World Magnetic Model (WMM):

    1. Convert the date to a decimal year t and form Δt = t − epoch.
    2. Time-interpolate each coefficient: g' = g + ġ·Δt, h' = h + ḣ·Δt.
    3. Convert geodetic latitude/height to geocentric colatitude θ and
       radius r (WGS84).
    4. Evaluate Schmidt semi-normalized P_n^m(cos θ) and dP_n^m/dθ.
    5. Sum the gradient of the potential

           V = a Σ_n (a/r)^(n+1) Σ_m (g' cos mλ + h' sin mλ) P_n^m(cos θ)

       into spherical components B_r, B_θ, B_λ, each term scaled by
       (a/r)^(n+2).
    6. Map to geocentric North/East/Down and rotate into the geodetic frame.

Validity:
    A model release is valid for validity_years after its epoch. Outside
    that window the secular variation is extrapolated linearly; results are
    still returned and callers are expected to flag reduced confidence via
    is_within_validity().

Thread safety:
    MagneticModel is immutable (frozen dataclass with read-only coefficient
    arrays). All functions here are pure and may be called concurrently.
"""

import math
import warnings
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Sequence, Tuple, Union

import numpy as np

from qibla.coords.geodesy import GeoCoordinate
from qibla.coords.transforms import geocentric_to_geodetic_ned, geodetic_to_geocentric
from qibla.geomag.legendre import schmidt_legendre
from qibla.geomag.types import MagneticCoefficient, MagneticFieldVector

GEOMAG_REFERENCE_RADIUS_KM = 6371.2  # Geomagnetic reference radius a (km)
DEFAULT_VALIDITY_YEARS = 5.0

# Colatitude is kept this far from the poles so that the B_λ / sin θ term
# stays finite; the limit is continuous so the clamp is invisible at
# double precision.
_POLE_EPSILON = 1e-10

DateLike = Union[datetime, date, float, int]


@dataclass(frozen=True)
class MagneticModel:
    """
    Immutable geomagnetic coefficient table with its validity window.

    Attributes:
        epoch: Reference decimal year of the coefficients (e.g. 2020.0).
        validity_years: Length of the validity window after epoch (years).
        coefficients: Gauss coefficients covering degrees 1..N, keyed by
                      (n, m). Stored as a tuple sorted by (n, m).
        name: Model identifier (e.g. "WMM-2020").
        reference_radius_km: Reference sphere radius a of the expansion.
        warn_on_gaps: Emit a RuntimeWarning when terms below the top degree
                      are missing. Disable for deliberately partial
                      tables such as an axial dipole.

    The coefficient table is also exposed as read-only (N+1, N+1) arrays
    indexed [n, m]; missing terms are zero.

    Example:
        >>> model = MagneticModel(
        ...     epoch=2020.0,
        ...     validity_years=5.0,
        ...     coefficients=[MagneticCoefficient(1, 0, -29404.5, 0.0, 6.7, 0.0)],
        ...     warn_on_gaps=False,
        ... )
        >>> model.max_degree
        1
    """

    epoch: float
    validity_years: float
    coefficients: Tuple[MagneticCoefficient, ...]
    name: str = "custom"
    reference_radius_km: float = GEOMAG_REFERENCE_RADIUS_KM
    warn_on_gaps: bool = field(default=True, repr=False, compare=False)

    g: np.ndarray = field(init=False, repr=False, compare=False)
    h: np.ndarray = field(init=False, repr=False, compare=False)
    g_dot: np.ndarray = field(init=False, repr=False, compare=False)
    h_dot: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate the table and build the coefficient arrays."""
        coefficients = tuple(sorted(self.coefficients, key=lambda c: (c.n, c.m)))
        if not coefficients:
            raise ValueError("MagneticModel requires at least one coefficient")
        if self.validity_years <= 0:
            raise ValueError(f"validity_years must be positive, got {self.validity_years}")
        if self.reference_radius_km <= 0:
            raise ValueError(
                f"reference_radius_km must be positive, got {self.reference_radius_km}"
            )

        keys = [c.key for c in coefficients]
        duplicates = sorted({k for k in keys if keys.count(k) > 1})
        if duplicates:
            raise ValueError(f"Duplicate coefficients for (n, m): {duplicates}")

        max_degree = coefficients[-1].n
        expected = (max_degree * (max_degree + 3)) // 2
        if self.warn_on_gaps and len(coefficients) < expected:
            present = set(keys)
            missing = [
                (n, m)
                for n in range(1, max_degree + 1)
                for m in range(n + 1)
                if (n, m) not in present
            ]
            warnings.warn(
                f"Coefficient table for '{self.name}' is missing {len(missing)} term(s) "
                f"below degree {max_degree} (first: {missing[0]}). Missing terms are "
                "treated as zero.",
                RuntimeWarning,
            )

        shape = (max_degree + 1, max_degree + 1)
        arrays = {key: np.zeros(shape, dtype=np.float64) for key in ("g", "h", "g_dot", "h_dot")}
        for c in coefficients:
            arrays["g"][c.n, c.m] = c.g
            arrays["h"][c.n, c.m] = c.h
            arrays["g_dot"][c.n, c.m] = c.g_dot
            arrays["h_dot"][c.n, c.m] = c.h_dot

        object.__setattr__(self, "coefficients", coefficients)
        object.__setattr__(self, "epoch", float(self.epoch))
        object.__setattr__(self, "validity_years", float(self.validity_years))
        for key, array in arrays.items():
            array.setflags(write=False)
            object.__setattr__(self, key, array)

    @property
    def max_degree(self) -> int:
        """Highest degree N present in the table."""
        return self.g.shape[0] - 1

    @property
    def valid_until(self) -> float:
        """Decimal year at which the validity window closes."""
        return self.epoch + self.validity_years

    def coefficients_at(self, when: DateLike) -> Tuple[np.ndarray, np.ndarray]:
        """Time-interpolated (g, h) arrays at the given date."""
        dt = decimal_year(when) - self.epoch
        return self.g + self.g_dot * dt, self.h + self.h_dot * dt

    def evaluate(
        self, coordinate: GeoCoordinate, when: DateLike, height_km: float = 0.0
    ) -> MagneticFieldVector:
        """See :func:`evaluate`."""
        return evaluate(self, coordinate, when, height_km)

    def declination(
        self, coordinate: GeoCoordinate, when: DateLike, height_km: float = 0.0
    ) -> float:
        """See :func:`declination`."""
        return declination(self, coordinate, when, height_km)

    def field_strength(
        self, coordinate: GeoCoordinate, when: DateLike, height_km: float = 0.0
    ) -> float:
        """See :func:`field_strength`."""
        return field_strength(self, coordinate, when, height_km)

    def inclination(
        self, coordinate: GeoCoordinate, when: DateLike, height_km: float = 0.0
    ) -> float:
        """See :func:`inclination`."""
        return inclination(self, coordinate, when, height_km)

    def is_within_validity(self, when: DateLike) -> bool:
        """See :func:`is_within_validity`."""
        return is_within_validity(self, when)


def model_from_coefficients(
    rows: Sequence[Sequence[float]],
    epoch: float,
    validity_years: float = DEFAULT_VALIDITY_YEARS,
    name: str = "custom",
) -> MagneticModel:
    """
    Build a model from plain (n, m, g, h, g_dot, h_dot) rows.

    Args:
        rows: Iterable of 6-tuples in the column order of a .COF file.
        epoch: Reference decimal year.
        validity_years: Validity window length (years).
        name: Model identifier.

    Returns:
        A new MagneticModel.
    """
    coefficients = [
        MagneticCoefficient(int(n), int(m), float(g), float(h), float(gd), float(hd))
        for n, m, g, h, gd, hd in rows
    ]
    return MagneticModel(
        epoch=epoch,
        validity_years=validity_years,
        coefficients=tuple(coefficients),
        name=name,
    )


def decimal_year(when: DateLike) -> float:
    """
    Convert a date to a decimal year.

    The fraction is elapsed time since 1 January 00:00 divided by the
    length of that calendar year, so leap years use 366 days. Timezone-aware
    datetimes are converted to UTC first; naive datetimes and dates are
    taken as UTC. A number is returned unchanged (already a decimal year).

    Args:
        when: datetime, date, or decimal year.

    Returns:
        Decimal year as float.

    Example:
        >>> decimal_year(date(2020, 7, 2))  # 183 of 366 days elapsed
        2020.5
    """
    if isinstance(when, bool):
        raise TypeError("decimal_year() does not accept bool")
    if isinstance(when, (int, float)):
        return float(when)
    if isinstance(when, datetime):
        if when.tzinfo is not None:
            when = when.astimezone(timezone.utc).replace(tzinfo=None)
        moment = when
    elif isinstance(when, date):
        moment = datetime(when.year, when.month, when.day)
    else:
        raise TypeError(f"Expected datetime, date or decimal year, got {type(when).__name__}")

    start = datetime(moment.year, 1, 1)
    end = datetime(moment.year + 1, 1, 1)
    elapsed = (moment - start).total_seconds()
    year_length = (end - start).total_seconds()
    return moment.year + elapsed / year_length


def evaluate(
    model: MagneticModel,
    coordinate: GeoCoordinate,
    when: DateLike,
    height_km: float = 0.0,
) -> MagneticFieldVector:
    """
    Evaluate the main-field vector at a coordinate and date.

    Args:
        model: Coefficient table.
        coordinate: Geodetic position (WGS84 latitude, longitude).
        when: Evaluation date (datetime, date, or decimal year).
        height_km: Height above the WGS84 ellipsoid in kilometers.

    Returns:
        MagneticFieldVector in the geodetic NED frame (nT).

    Notes:
        Dates outside the validity window are extrapolated, never rejected.
    """
    g, h = model.coefficients_at(when)
    n_max = model.max_degree

    lat_geodetic = math.radians(coordinate.latitude)
    lon = math.radians(coordinate.longitude)
    lat_geocentric, radius_km = geodetic_to_geocentric(lat_geodetic, height_km)

    colatitude = math.pi / 2.0 - lat_geocentric
    colatitude = min(max(colatitude, _POLE_EPSILON), math.pi - _POLE_EPSILON)
    sin_theta = math.sin(colatitude)

    P, dP = schmidt_legendre(n_max, colatitude)

    n = np.arange(n_max + 1, dtype=np.float64)[:, np.newaxis]
    m = np.arange(n_max + 1, dtype=np.float64)[np.newaxis, :]
    cos_ml = np.cos(m * lon)
    sin_ml = np.sin(m * lon)

    # (a/r)^(n+2); row n = 0 carries no coefficients
    radial_scale = (model.reference_radius_km / radius_km) ** (n + 2.0)

    term = g * cos_ml + h * sin_ml
    d_term = g * sin_ml - h * cos_ml

    b_r = float(np.sum(radial_scale * (n + 1.0) * term * P))
    b_theta = float(-np.sum(radial_scale * term * dP))
    b_lambda = float(np.sum(radial_scale * m * d_term * P)) / sin_theta

    ned = geocentric_to_geodetic_ned(
        north_gc=-b_theta,
        east_gc=b_lambda,
        down_gc=-b_r,
        lat_geocentric=lat_geocentric,
        lat_geodetic=lat_geodetic,
    )
    return MagneticFieldVector(north=float(ned[0]), east=float(ned[1]), down=float(ned[2]))


def declination(
    model: MagneticModel,
    coordinate: GeoCoordinate,
    when: DateLike,
    height_km: float = 0.0,
) -> float:
    """
    Magnetic declination D = atan2(East, North).

    Returns:
        Declination in degrees, [-180, 180]. Positive when magnetic north
        lies east of true north.
    """
    vector = evaluate(model, coordinate, when, height_km)
    return min(max(vector.declination, -180.0), 180.0)


def field_strength(
    model: MagneticModel,
    coordinate: GeoCoordinate,
    when: DateLike,
    height_km: float = 0.0,
) -> float:
    """Total intensity F = sqrt(N² + E² + D²) in nT."""
    return evaluate(model, coordinate, when, height_km).total_intensity


def inclination(
    model: MagneticModel,
    coordinate: GeoCoordinate,
    when: DateLike,
    height_km: float = 0.0,
) -> float:
    """Inclination (dip) I = atan2(Down, H) in degrees, [-90, 90]."""
    return evaluate(model, coordinate, when, height_km).inclination


def is_within_validity(model: MagneticModel, when: DateLike) -> bool:
    """
    True iff epoch <= decimal_year(when) <= epoch + validity_years.

    Outside this window evaluation still succeeds by linear extrapolation;
    callers should surface a low-confidence indicator.
    """
    t = decimal_year(when)
    return model.epoch <= t <= model.valid_until
