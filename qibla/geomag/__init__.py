"""Geomagnetic field model (Gauss coefficients + secular variation).

This module provides:
- MagneticModel: immutable coefficient table with validity window
- evaluate / declination / field_strength / inclination at a point and date
- Schmidt semi-normalized Legendre recurrence for arbitrary degree
- .COF coefficient file loading and the packaged WMM-2020 table
"""

from qibla.geomag.coefficients import (
    CoefficientFormatError,
    load_cof,
    load_wmm2020,
    parse_cof,
)
from qibla.geomag.legendre import schmidt_legendre
from qibla.geomag.model import (
    DEFAULT_VALIDITY_YEARS,
    GEOMAG_REFERENCE_RADIUS_KM,
    MagneticModel,
    decimal_year,
    declination,
    evaluate,
    field_strength,
    inclination,
    is_within_validity,
    model_from_coefficients,
)
from qibla.geomag.types import MagneticCoefficient, MagneticFieldVector

__all__ = [
    # Types
    "MagneticCoefficient",
    "MagneticFieldVector",
    "MagneticModel",
    # Evaluation
    "decimal_year",
    "evaluate",
    "declination",
    "field_strength",
    "inclination",
    "is_within_validity",
    "schmidt_legendre",
    # Loading
    "CoefficientFormatError",
    "load_cof",
    "load_wmm2020",
    "parse_cof",
    "model_from_coefficients",
    # Constants
    "DEFAULT_VALIDITY_YEARS",
    "GEOMAG_REFERENCE_RADIUS_KM",
]
