"""Unit tests for qibla/geomag/legendre.py.

Tests cover:
    - Agreement with scipy's associated Legendre functions after Schmidt
      normalization (phase removed)
    - Derivatives against central finite differences
    - Values at the pole and equator
    - Arbitrary maximum degree

Run with: pytest tests/qibla/geomag/test_legendre.py -v
"""

import math
import unittest

import numpy as np
from scipy.special import lpmv

from qibla.geomag.legendre import schmidt_legendre

COLATITUDES = [0.05, 0.4, 1.1, np.pi / 2.0, 2.0, 3.0]


def schmidt_reference(n: int, m: int, theta: float) -> float:
    """Schmidt semi-normalized P_n^m(cos θ) from scipy.special.lpmv."""
    value = lpmv(m, n, np.cos(theta))
    if m == 0:
        return float(value)
    # lpmv includes the Condon-Shortley phase (-1)^m
    factor = math.sqrt(2.0 * math.factorial(n - m) / math.factorial(n + m))
    return float((-1) ** m * factor * value)


class TestSchmidtLegendre(unittest.TestCase):
    """Test cases for schmidt_legendre."""

    def test_matches_scipy(self) -> None:
        max_degree = 12
        for theta in COLATITUDES:
            P, _ = schmidt_legendre(max_degree, theta)
            expected = np.zeros_like(P)
            for n in range(max_degree + 1):
                for m in range(n + 1):
                    expected[n, m] = schmidt_reference(n, m, theta)
            with self.subTest(theta=theta):
                np.testing.assert_allclose(P, expected, rtol=1e-9, atol=1e-12)

    def test_derivative_matches_finite_difference(self) -> None:
        max_degree = 10
        step = 1e-6
        for theta in COLATITUDES:
            _, dP = schmidt_legendre(max_degree, theta)
            P_plus, _ = schmidt_legendre(max_degree, theta + step)
            P_minus, _ = schmidt_legendre(max_degree, theta - step)
            numeric = (P_plus - P_minus) / (2.0 * step)
            with self.subTest(theta=theta):
                np.testing.assert_allclose(dP, numeric, atol=1e-6)

    def test_low_degree_closed_forms(self) -> None:
        theta = 0.7
        x, s = np.cos(theta), np.sin(theta)
        P, dP = schmidt_legendre(2, theta)

        self.assertAlmostEqual(P[0, 0], 1.0, places=14)
        self.assertAlmostEqual(P[1, 0], x, places=14)
        self.assertAlmostEqual(P[1, 1], s, places=14)
        self.assertAlmostEqual(P[2, 0], 1.5 * x**2 - 0.5, places=14)
        self.assertAlmostEqual(P[2, 1], np.sqrt(3.0) * x * s, places=14)
        self.assertAlmostEqual(P[2, 2], np.sqrt(3.0) / 2.0 * s**2, places=14)

        self.assertAlmostEqual(dP[1, 0], -s, places=14)
        self.assertAlmostEqual(dP[1, 1], x, places=14)

    def test_at_pole(self) -> None:
        """At θ = 0 only the zonal terms survive, all equal to 1."""
        P, _ = schmidt_legendre(8, 0.0)
        np.testing.assert_allclose(P[:, 0], np.ones(9), atol=1e-14)
        np.testing.assert_allclose(P[:, 1:], np.zeros((9, 8)), atol=1e-14)

    def test_upper_triangle_zero(self) -> None:
        P, dP = schmidt_legendre(6, 1.0)
        upper = np.triu_indices(7, k=1)
        self.assertTrue(np.all(P[upper] == 0.0))
        self.assertTrue(np.all(dP[upper] == 0.0))

    def test_shape_follows_degree(self) -> None:
        for degree in (0, 1, 5, 12, 20):
            P, dP = schmidt_legendre(degree, 1.0)
            self.assertEqual(P.shape, (degree + 1, degree + 1))
            self.assertEqual(dP.shape, (degree + 1, degree + 1))
            self.assertTrue(np.all(np.isfinite(P)))

    def test_negative_degree_raises(self) -> None:
        with self.assertRaises(ValueError):
            schmidt_legendre(-1, 1.0)


if __name__ == "__main__":
    unittest.main()
