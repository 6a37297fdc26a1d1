"""Unit tests for qibla/direction/compass.py.

Tests cover:
    - 16-point labels, sector boundaries and wraparound at north
    - Distance, direction and declination formatting

Run with: pytest tests/qibla/direction/test_compass.py -v
"""

import unittest

import pytest

from qibla.direction.compass import (
    SECTOR_WIDTH_DEG,
    CompassPoint,
    compass_label,
    format_declination,
    format_direction,
    format_distance,
)


class TestCompassLabel(unittest.TestCase):
    """Test cases for compass_label."""

    def test_cardinal_points(self) -> None:
        self.assertIs(compass_label(0.0), CompassPoint.N)
        self.assertIs(compass_label(90.0), CompassPoint.E)
        self.assertIs(compass_label(180.0), CompassPoint.S)
        self.assertIs(compass_label(270.0), CompassPoint.W)

    def test_every_center_maps_to_itself(self) -> None:
        for point in CompassPoint:
            with self.subTest(point=point):
                self.assertIs(compass_label(point.center_degrees), point)

    def test_centers_evenly_spaced(self) -> None:
        centers = [point.center_degrees for point in CompassPoint]
        self.assertEqual(len(centers), 16)
        self.assertEqual(centers[0], 0.0)
        self.assertEqual(centers[-1], 360.0 - SECTOR_WIDTH_DEG)

    def test_sector_boundaries(self) -> None:
        """Half-way points round up to the next point clockwise."""
        self.assertIs(compass_label(11.24), CompassPoint.N)
        self.assertIs(compass_label(11.25), CompassPoint.NNE)
        # Sector index rounding puts the N/NNE boundary at 11.25, not 22.5
        self.assertIs(compass_label(22.4), CompassPoint.NNE)
        self.assertIs(compass_label(22.6), CompassPoint.NNE)
        self.assertIs(compass_label(33.74), CompassPoint.NNE)
        self.assertIs(compass_label(33.75), CompassPoint.NE)

    def test_wraparound_at_north(self) -> None:
        self.assertIs(compass_label(348.74), CompassPoint.NNW)
        self.assertIs(compass_label(348.75), CompassPoint.N)
        self.assertIs(compass_label(359.99), CompassPoint.N)
        self.assertIs(compass_label(360.0), CompassPoint.N)

    def test_unnormalized_input(self) -> None:
        self.assertIs(compass_label(-22.5), CompassPoint.NNW)
        self.assertIs(compass_label(450.0), CompassPoint.E)

    def test_qibla_from_new_york(self) -> None:
        self.assertIs(compass_label(58.48), CompassPoint.ENE)

    def test_str_is_abbreviation(self) -> None:
        self.assertEqual(str(CompassPoint.WNW), "WNW")


class TestFormatting:
    """Test cases for the display helpers."""

    @pytest.mark.parametrize(
        "distance_km, expected",
        [
            (0.0, "0 m"),
            (0.85, "850 m"),
            (1.0, "1.0 km"),
            (12.34, "12.3 km"),
            (99.94, "99.9 km"),
            (100.0, "100 km"),
            (10306.2, "10306 km"),
        ],
    )
    def test_format_distance(self, distance_km: float, expected: str) -> None:
        assert format_distance(distance_km) == expected

    def test_format_direction(self) -> None:
        assert format_direction(58.48) == "58.5° ENE"
        assert format_direction(0.0) == "0.0° N"
        assert format_direction(277.5) == "277.5° W"

    @pytest.mark.parametrize(
        "declination, expected",
        [
            (-12.94, "12.9° West"),
            (3.5, "3.5° East"),
            (0.1, "0.1° East"),
            (0.05, "No declination"),
            (-0.05, "No declination"),
            (0.0, "No declination"),
        ],
    )
    def test_format_declination(self, declination: float, expected: str) -> None:
        assert format_declination(declination) == expected


if __name__ == "__main__":
    unittest.main()
