"""Data types for the spherical-harmonic geomagnetic model.

Frame Conventions:
    - Field vectors are expressed in the local geodetic North-East-Down
      (NED) frame at the evaluation point: x = North, y = East, z = Down.
    - Units are nanotesla (nT); angles are degrees.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class MagneticCoefficient:
    """
    One Gauss coefficient pair with its linear secular variation.

    The main-field value at decimal year t is obtained by linear
    interpolation from the model epoch t0:

        g(t) = g + g_dot · (t − t0)
        h(t) = h + h_dot · (t − t0)

    Attributes:
        n: Degree, n >= 1.
        m: Order, 0 <= m <= n.
        g: Gauss coefficient g_n^m at the model epoch (nT).
        h: Gauss coefficient h_n^m at the model epoch (nT). Zero for m = 0.
        g_dot: Secular variation of g (nT/year).
        h_dot: Secular variation of h (nT/year).
    """

    n: int
    m: int
    g: float
    h: float
    g_dot: float = 0.0
    h_dot: float = 0.0

    def __post_init__(self) -> None:
        """Validate the (n, m) index pair."""
        if self.n < 1:
            raise ValueError(f"degree n must be >= 1, got {self.n}")
        if not 0 <= self.m <= self.n:
            raise ValueError(f"order m must satisfy 0 <= m <= n, got n={self.n}, m={self.m}")

    @property
    def key(self) -> tuple:
        """(n, m) index of this coefficient."""
        return (self.n, self.m)


@dataclass(frozen=True)
class MagneticFieldVector:
    """
    Geomagnetic field vector at a point, in the local NED frame.

    Attributes:
        north: X component, positive towards true north (nT).
        east: Y component, positive towards east (nT).
        down: Z component, positive towards the Earth's centre (nT).

    The derived elements follow the usual geomagnetic notation:
    H (horizontal intensity), F (total intensity), D (declination),
    I (inclination).
    """

    north: float
    east: float
    down: float

    @property
    def horizontal_intensity(self) -> float:
        """H = sqrt(X² + Y²) in nT."""
        return math.hypot(self.north, self.east)

    @property
    def total_intensity(self) -> float:
        """F = sqrt(X² + Y² + Z²) in nT."""
        return math.sqrt(self.north**2 + self.east**2 + self.down**2)

    @property
    def declination(self) -> float:
        """D = atan2(Y, X) in degrees, [-180, 180], positive east."""
        return math.degrees(math.atan2(self.east, self.north))

    @property
    def inclination(self) -> float:
        """I = atan2(Z, H) in degrees, positive when the field dips downward."""
        return math.degrees(math.atan2(self.down, self.horizontal_intensity))
