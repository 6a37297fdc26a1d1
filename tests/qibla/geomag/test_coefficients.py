"""Unit tests for qibla/geomag/coefficients.py (.COF loading).

Run with: pytest tests/qibla/geomag/test_coefficients.py -v
"""

import unittest
from pathlib import Path

import pytest

from qibla.geomag.coefficients import (
    WMM2020_PATH,
    CoefficientFormatError,
    load_cof,
    load_wmm2020,
    parse_cof,
)

DIPOLE_COF = """\
    2020.0            TEST-DIPOLE     01/01/2020
  1  0  -29404.5       0.0        6.7        0.0
  1  1   -1450.7    4652.9        7.7      -25.1
999999999999999999999999999999999999999999999999
999999999999999999999999999999999999999999999999
"""


class TestPackagedTable(unittest.TestCase):
    """Test cases for the bundled WMM-2020 table."""

    def test_file_shipped(self) -> None:
        self.assertTrue(WMM2020_PATH.exists())

    def test_header_and_shape(self) -> None:
        model = load_wmm2020()

        self.assertEqual(model.name, "WMM-2020")
        self.assertEqual(model.epoch, 2020.0)
        self.assertEqual(model.validity_years, 5.0)
        self.assertEqual(model.valid_until, 2025.0)
        self.assertEqual(model.max_degree, 8)
        # Complete through degree 8: sum of (n + 1) for n = 1..8
        self.assertEqual(len(model.coefficients), 44)

    def test_known_coefficients(self) -> None:
        model = load_wmm2020()

        self.assertEqual(model.g[1, 0], -29404.5)
        self.assertEqual(model.g[1, 1], -1450.7)
        self.assertEqual(model.h[1, 1], 4652.9)
        self.assertEqual(model.g_dot[1, 0], 6.7)
        self.assertEqual(model.h_dot[1, 1], -25.1)
        # Zonal terms carry no h
        self.assertEqual(model.h[2, 0], 0.0)


class TestParseCof:
    """Test cases for parse_cof."""

    def test_parse_minimal_table(self) -> None:
        model = parse_cof(DIPOLE_COF)

        assert model.name == "TEST-DIPOLE"
        assert model.epoch == 2020.0
        assert model.max_degree == 1
        assert model.g[1, 1] == pytest.approx(-1450.7)

    def test_custom_validity(self) -> None:
        model = parse_cof(DIPOLE_COF, validity_years=2.5)
        assert model.valid_until == pytest.approx(2022.5)

    def test_stops_at_trailer(self) -> None:
        text = DIPOLE_COF + "this line is never parsed\n"
        model = parse_cof(text)
        assert len(model.coefficients) == 2

    def test_trailer_optional(self) -> None:
        text = "\n".join(DIPOLE_COF.splitlines()[:3])
        assert len(parse_cof(text).coefficients) == 2

    @pytest.mark.filterwarnings("ignore::RuntimeWarning")
    def test_name_defaults_to_source_stem(self) -> None:
        text = "2020.0\n1 0 -29404.5 0.0 6.7 0.0\n"
        model = parse_cof(text, source="/tmp/EXAMPLE.COF")
        assert model.name == "EXAMPLE"

    def test_empty(self) -> None:
        with pytest.raises(CoefficientFormatError, match="empty"):
            parse_cof("   \n\n")

    def test_bad_header(self) -> None:
        with pytest.raises(CoefficientFormatError, match="epoch"):
            parse_cof("WMM-2020 2020.0\n1 0 -29404.5 0.0 6.7 0.0\n")

    def test_short_row(self) -> None:
        with pytest.raises(CoefficientFormatError, match="6 columns"):
            parse_cof("2020.0 X\n1 0 -29404.5 0.0\n")

    def test_non_numeric_row(self) -> None:
        with pytest.raises(CoefficientFormatError, match=":2:"):
            parse_cof("2020.0 X\n1 0 abc 0.0 6.7 0.0\n")

    def test_invalid_order(self) -> None:
        with pytest.raises(CoefficientFormatError):
            parse_cof("2020.0 X\n1 2 -29404.5 0.0 6.7 0.0\n")

    def test_no_rows(self) -> None:
        with pytest.raises(CoefficientFormatError, match="no coefficient rows"):
            parse_cof("2020.0 X\n9999999999\n")

    def test_duplicate_rows(self) -> None:
        text = "2020.0 X\n1 0 -29404.5 0.0 6.7 0.0\n1 0 -29000.0 0.0 6.7 0.0\n"
        with pytest.raises(CoefficientFormatError, match="Duplicate"):
            parse_cof(text)

    def test_format_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_cof("")


class TestLoadCof:
    """Test cases for load_cof."""

    def test_round_trip_through_file(self, tmp_path: Path) -> None:
        path = tmp_path / "dipole.COF"
        path.write_text(DIPOLE_COF, encoding="utf-8")

        model = load_cof(path)

        assert model.name == "TEST-DIPOLE"
        assert model.h_dot[1, 1] == pytest.approx(-25.1)

    def test_accepts_str_path(self, tmp_path: Path) -> None:
        path = tmp_path / "dipole.COF"
        path.write_text(DIPOLE_COF, encoding="utf-8")
        assert load_cof(str(path)).max_degree == 1

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_cof(tmp_path / "missing.COF")

    def test_error_names_file(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.COF"
        path.write_text("2020.0 X\n1 0 -29404.5\n", encoding="utf-8")
        with pytest.raises(CoefficientFormatError, match="broken.COF"):
            load_cof(path)


if __name__ == "__main__":
    unittest.main()
