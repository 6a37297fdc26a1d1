"""
Qibla direction service.

Combines great-circle geodesy (bearing and distance to the Kaaba) with the
geomagnetic model (declination and field strength at the observer) into a
single immutable QiblaResult.

Sign convention (used throughout the package):
    Declination D is positive when magnetic north lies east of true north.
        magnetic -> true:   true     = normalize(magnetic + D)
        true -> magnetic:   magnetic = normalize(true - D)

The service holds an injected MagneticModel; it has no other state, so
compute() is pure and idempotent and instances may be shared across
threads.
"""

from dataclasses import dataclass
from datetime import datetime

from qibla.coords.geodesy import GeoCoordinate, bearing, distance
from qibla.direction.compass import (
    CompassPoint,
    compass_label,
    format_declination,
    format_direction,
    format_distance,
)
from qibla.geomag.model import DateLike, MagneticModel
from qibla.sensors.heading import true_to_magnetic
from qibla.utils.angles import angular_difference

# Kaaba, Masjid al-Haram, Mecca
KAABA = GeoCoordinate(latitude=21.422487, longitude=39.826206)


@dataclass(frozen=True)
class QiblaResult:
    """
    Direction to the Kaaba from one observer at one moment.

    Attributes:
        observer: Position the result was computed for.
        direction: True bearing to the Kaaba, [0, 360) degrees.
        distance_km: Great-circle distance to the Kaaba (km).
        declination_deg: Magnetic declination at the observer (degrees,
                         positive east).
        field_strength_nt: Total geomagnetic intensity at the observer (nT).
        observed_at: The date the result was computed for.
        model_valid: False when observed_at falls outside the magnetic
                     model's validity window (declination extrapolated,
                     reduced confidence).
    """

    observer: GeoCoordinate
    direction: float
    distance_km: float
    declination_deg: float
    field_strength_nt: float
    observed_at: DateLike
    model_valid: bool

    @property
    def magnetic_direction(self) -> float:
        """Bearing to the Kaaba as read on a magnetic compass, [0, 360)."""
        return true_to_magnetic(self.direction, self.declination_deg)

    @property
    def compass_point(self) -> CompassPoint:
        """16-point compass label of the true direction."""
        return compass_label(self.direction)

    @property
    def formatted_distance(self) -> str:
        return format_distance(self.distance_km)

    @property
    def formatted_direction(self) -> str:
        return format_direction(self.direction)

    @property
    def formatted_declination(self) -> str:
        return format_declination(self.declination_deg)

    @property
    def detailed_direction_info(self) -> str:
        """Multi-line summary: true bearing, declination and compass reading."""
        return (
            f"True: {self.formatted_direction}\n"
            f"Magnetic Declination: {self.formatted_declination}\n"
            f"Compass: {self.magnetic_direction:.1f}°"
        )


class QiblaService:
    """
    Computes QiblaResult values against an injected magnetic model.

    Args:
        model: Geomagnetic coefficient table, constructed once by the caller
               (e.g. ``load_wmm2020()``) and reused for every query.
        target: Destination coordinate. Defaults to the Kaaba.

    Example:
        >>> from qibla.geomag import load_wmm2020
        >>> service = QiblaService(load_wmm2020())
        >>> result = service.compute(GeoCoordinate(40.7128, -74.0060), datetime(2022, 6, 1))
        >>> round(result.direction, 1), result.compass_point.value
        (58.5, 'ENE')
    """

    def __init__(self, model: MagneticModel, target: GeoCoordinate = KAABA) -> None:
        self._model = model
        self._target = target

    @property
    def model(self) -> MagneticModel:
        return self._model

    @property
    def target(self) -> GeoCoordinate:
        return self._target

    def compute(self, observer: GeoCoordinate, when: DateLike) -> QiblaResult:
        """
        Direction, distance and magnetic correction for an observer.

        Args:
            observer: Validated observer position.
            when: Observation date (datetime, date or decimal year).

        Returns:
            New QiblaResult. Identical inputs give bit-identical results.
        """
        vector = self._model.evaluate(observer, when)
        return QiblaResult(
            observer=observer,
            direction=bearing(observer, self._target),
            distance_km=distance(observer, self._target),
            declination_deg=min(max(vector.declination, -180.0), 180.0),
            field_strength_nt=vector.total_intensity,
            observed_at=when,
            model_valid=self._model.is_within_validity(when),
        )

    @staticmethod
    def true_bearing_from_compass(result: QiblaResult) -> float:
        """
        Express the Qibla bearing in the magnetic-compass frame.

        A compass needle aligned with magnetic north reads this value when
        the device points at the Kaaba: ``normalize(direction − declination)``.
        """
        return result.magnetic_direction


def qibla_needle_angle(true_heading: float, qibla_direction: float) -> float:
    """
    Rotation of a Qibla needle relative to the device's forward axis.

    Args:
        true_heading: Device heading corrected to true north (degrees).
        qibla_direction: True bearing to the Kaaba (degrees).

    Returns:
        Signed angle in (-180, 180]; positive means turn clockwise.

    Example:
        >>> qibla_needle_angle(350.0, 20.0)
        30.0
    """
    return angular_difference(true_heading, qibla_direction)
