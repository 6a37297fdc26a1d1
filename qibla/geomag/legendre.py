"""
Schmidt semi-normalized associated Legendre functions.

Geomagnetic models expand the scalar potential in spherical harmonics
whose latitude dependence is P_n^m(cos θ), θ being geocentric colatitude,
in the Schmidt semi-normalization:

    P_n^m(x) = sqrt(2 (n−m)! / (n+m)!) · P_nm(x)   for m > 0
    P_n^0(x) = P_n(x)

(no Condon-Shortley phase). Both the functions and their derivatives with
respect to θ are built by recurrence, so any maximum degree is supported
without per-degree code.

Recurrences (x = cos θ, s = sin θ):

    Sectoral (n = m):
        P_1^1 = s
        P_n^n = sqrt((2n−1) / 2n) · s · P_{n−1}^{n−1}                   n >= 2

    Non-sectoral (m < n):
        P_n^m = [(2n−1) x P_{n−1}^m − sqrt((n−1)² − m²) P_{n−2}^m] / sqrt(n² − m²)

Derivatives follow by differentiating each recurrence with respect to θ.
"""

from typing import Tuple

import numpy as np


def schmidt_legendre(
    max_degree: int,
    colatitude: float,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Compute Schmidt semi-normalized P_n^m(cos θ) and dP_n^m/dθ.

    Args:
        max_degree: Highest degree N to compute (N >= 0).
        colatitude: Geocentric colatitude θ in radians, [0, π].

    Returns:
        Tuple (P, dP) of arrays with shape (N+1, N+1). Entry [n, m] holds the
        value for degree n and order m; entries with m > n are zero.

    Raises:
        ValueError: If max_degree is negative.

    Example:
        >>> P, dP = schmidt_legendre(2, np.pi / 2)  # equator
        >>> round(P[1, 0], 12), round(P[1, 1], 12)
        (0.0, 1.0)
    """
    if max_degree < 0:
        raise ValueError(f"max_degree must be >= 0, got {max_degree}")

    x = np.cos(colatitude)
    s = np.sin(colatitude)

    P = np.zeros((max_degree + 1, max_degree + 1), dtype=np.float64)
    dP = np.zeros((max_degree + 1, max_degree + 1), dtype=np.float64)
    P[0, 0] = 1.0

    for n in range(1, max_degree + 1):
        for m in range(0, n + 1):
            if m == n:
                if n == 1:
                    P[1, 1] = s
                    dP[1, 1] = x
                else:
                    k = np.sqrt((2.0 * n - 1.0) / (2.0 * n))
                    P[n, n] = k * s * P[n - 1, n - 1]
                    dP[n, n] = k * (s * dP[n - 1, n - 1] + x * P[n - 1, n - 1])
            else:
                norm = np.sqrt(n * n - m * m)
                a = (2.0 * n - 1.0) / norm
                P[n, m] = a * x * P[n - 1, m]
                dP[n, m] = a * (x * dP[n - 1, m] - s * P[n - 1, m])
                if n >= 2:
                    b = np.sqrt((n - 1.0) ** 2 - m * m) / norm
                    P[n, m] -= b * P[n - 2, m]
                    dP[n, m] -= b * dP[n - 2, m]

    return P, dP
