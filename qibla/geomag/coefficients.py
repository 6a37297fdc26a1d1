"""Coefficient-table loading for the geomagnetic model.

Tables use the NOAA ``.COF`` text layout shared by WMM releases:

    header:   <epoch> <model name> <release date>
    rows:     <n> <m> <g> <h> <g_dot> <h_dot>
    trailer:  a line of 9s (optional)

The packaged ``data/WMM2020.COF`` carries the WMM-2020 main field and
secular variation truncated at degree 8. Terms above degree 8 are below
~20 nT at the surface and move declination by well under 0.1°. A complete
degree-12 release can be loaded with :func:`load_cof` without code
changes.
"""

from pathlib import Path
from typing import List, Union

from qibla.geomag.model import DEFAULT_VALIDITY_YEARS, MagneticModel
from qibla.geomag.types import MagneticCoefficient

DATA_DIR = Path(__file__).parent / "data"
WMM2020_PATH = DATA_DIR / "WMM2020.COF"


class CoefficientFormatError(ValueError):
    """Malformed coefficient file."""


def _is_trailer(line: str) -> bool:
    stripped = line.strip()
    return bool(stripped) and set(stripped) == {"9"}


def parse_cof(
    text: str,
    validity_years: float = DEFAULT_VALIDITY_YEARS,
    source: str = "<string>",
) -> MagneticModel:
    """
    Parse the contents of a .COF coefficient file.

    Args:
        text: File contents.
        validity_years: Validity window to attach to the model (years).
        source: Name used in error messages.

    Returns:
        MagneticModel built from the file.

    Raises:
        CoefficientFormatError: If the header or any row cannot be parsed.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        raise CoefficientFormatError(f"{source}: file is empty")

    header = lines[0].split()
    try:
        epoch = float(header[0])
    except (IndexError, ValueError) as exc:
        raise CoefficientFormatError(
            f"{source}: header must start with the model epoch, got {lines[0]!r}"
        ) from exc
    name = header[1] if len(header) > 1 else Path(source).stem

    coefficients: List[MagneticCoefficient] = []
    for line_no, line in enumerate(lines[1:], start=2):
        if _is_trailer(line):
            break
        parts = line.split()
        if len(parts) < 6:
            raise CoefficientFormatError(
                f"{source}:{line_no}: expected 6 columns (n m g h g_dot h_dot), "
                f"got {len(parts)}"
            )
        try:
            n, m = int(parts[0]), int(parts[1])
            g, h, g_dot, h_dot = (float(p) for p in parts[2:6])
            coefficients.append(MagneticCoefficient(n, m, g, h, g_dot, h_dot))
        except ValueError as exc:
            raise CoefficientFormatError(f"{source}:{line_no}: {exc}") from exc

    if not coefficients:
        raise CoefficientFormatError(f"{source}: no coefficient rows found")

    try:
        return MagneticModel(
            epoch=epoch,
            validity_years=validity_years,
            coefficients=tuple(coefficients),
            name=name,
        )
    except ValueError as exc:
        raise CoefficientFormatError(f"{source}: {exc}") from exc


def load_cof(
    path: Union[str, Path],
    validity_years: float = DEFAULT_VALIDITY_YEARS,
) -> MagneticModel:
    """
    Load a MagneticModel from a .COF file on disk.

    Args:
        path: Path to the coefficient file.
        validity_years: Validity window to attach to the model (years).

    Returns:
        MagneticModel built from the file.

    Raises:
        FileNotFoundError: If the file does not exist.
        CoefficientFormatError: If the file is malformed.

    Examples:
        >>> model = load_cof(WMM2020_PATH)
        >>> model.name, model.epoch, model.max_degree
        ('WMM-2020', 2020.0, 8)
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Coefficient file not found: {path}")
    return parse_cof(path.read_text(encoding="utf-8"), validity_years, source=str(path))


def load_wmm2020() -> MagneticModel:
    """Load the packaged WMM-2020 table (epoch 2020.0, valid through 2025.0)."""
    return load_cof(WMM2020_PATH)
