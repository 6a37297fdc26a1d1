"""Tests for scripts/generate_declination_grid.py.

Runs the generator on a coarse regional grid into a temporary directory and
checks the saved table and config.

Run with: pytest tests/test_generate_declination_grid.py -v
"""

import json
import sys
import tempfile
import unittest
from datetime import date
from pathlib import Path

import numpy as np

sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from generate_declination_grid import COLUMNS, evaluate_grid, generate_dataset, grid_axes

from qibla.geomag import load_wmm2020
from qibla.utils import angular_difference


class TestGridAxes(unittest.TestCase):
    """Test cases for grid_axes."""

    def test_inclusive_end_points(self) -> None:
        lats, lons = grid_axes((-10.0, 10.0), (-180.0, 180.0), 5.0)
        np.testing.assert_allclose(lats, [-10.0, -5.0, 0.0, 5.0, 10.0])
        self.assertEqual(lons[0], -180.0)
        self.assertEqual(lons[-1], 180.0)
        self.assertEqual(len(lons), 73)

    def test_invalid_step(self) -> None:
        with self.assertRaises(ValueError):
            grid_axes((0.0, 10.0), (0.0, 10.0), 0.0)


class TestEvaluateGrid(unittest.TestCase):
    """Row contents of evaluate_grid."""

    def test_magnetic_bearing_uses_declination_at_height(self) -> None:
        model = load_wmm2020()
        lats, lons = np.array([-30.0, 40.0]), np.array([-75.0, 20.0, 140.0])
        surface = evaluate_grid(model, date(2022, 1, 1), lats, lons)
        aloft = evaluate_grid(model, date(2022, 1, 1), lats, lons, height_km=400.0)

        true_col = COLUMNS.index("qibla_true_deg")
        magnetic_col = COLUMNS.index("qibla_magnetic_deg")
        decl_col = COLUMNS.index("declination_deg")
        for grid in (surface, aloft):
            for row in grid:
                expected = row[true_col] - row[decl_col]
                self.assertAlmostEqual(
                    angular_difference(row[magnetic_col], expected), 0.0, places=9
                )

        np.testing.assert_array_equal(aloft[:, true_col], surface[:, true_col])
        self.assertFalse(np.allclose(aloft[:, decl_col], surface[:, decl_col], atol=1e-3))


class TestGenerateDataset(unittest.TestCase):
    """End-to-end run on a small grid."""

    def test_writes_grid_and_config(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            output_dir = Path(tmp) / "grid"
            grid = generate_dataset(
                output_dir=str(output_dir),
                lat_range=(20.0, 30.0),
                lon_range=(30.0, 50.0),
                step=5.0,
                when=date(2022, 1, 1),
            )

            self.assertEqual(grid.shape, (3 * 5, len(COLUMNS)))

            saved = np.loadtxt(output_dir / "declination_grid.txt")
            np.testing.assert_allclose(saved, grid, atol=1e-4)

            with open(output_dir / "config.json") as f:
                config = json.load(f)
            self.assertEqual(config["model"]["name"], "WMM-2020")
            self.assertTrue(config["model_valid"])
            self.assertEqual(config["grid"]["num_nodes"], 15)
            self.assertEqual(config["columns"], COLUMNS)

    def test_bearings_and_field_in_range(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            grid = generate_dataset(
                output_dir=str(Path(tmp) / "grid"),
                lat_range=(-40.0, 40.0),
                lon_range=(-120.0, 120.0),
                step=40.0,
                when=date(2026, 6, 1),
            )

            for column in ("qibla_true_deg", "qibla_magnetic_deg"):
                values = grid[:, COLUMNS.index(column)]
                self.assertTrue(np.all((values >= 0.0) & (values < 360.0)))
            self.assertTrue(np.all(grid[:, COLUMNS.index("intensity_nt")] > 15000.0))


if __name__ == "__main__":
    unittest.main()
