"""
Generate Declination / Qibla Grid Dataset.

This script evaluates the geomagnetic model and the Qibla service on a
regular latitude/longitude grid and stores, for every node, the true and
magnetic Qibla bearings together with the local field elements. The output
serves as a lookup table for devices without the model, and as a reference
for regression checks when a new coefficient release is dropped in.

Columns (one row per grid node):
    latitude, longitude           degrees
    qibla_true, qibla_magnetic    degrees, [0, 360)
    distance                      km to the Kaaba
    declination, inclination      degrees
    intensity                     total field, nT

Usage:
    python scripts/generate_declination_grid.py --preset global
    python scripts/generate_declination_grid.py --preset middle_east --date 2024-06-01
"""

import argparse
import json
import sys
from datetime import date
from pathlib import Path
from typing import Dict, Optional

import numpy as np
from tqdm import tqdm

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from qibla.coords import GeoCoordinate, bearing, distance
from qibla.direction import KAABA
from qibla.geomag import MagneticModel, load_cof, load_wmm2020
from qibla.sensors import true_to_magnetic

PRESETS: Dict[str, Dict] = {
    "global": {
        "lat_range": (-80.0, 80.0),
        "lon_range": (-180.0, 180.0),
        "step": 5.0,
        "output_dir": "data/sim/declination_grid_global",
    },
    "global_fine": {
        "lat_range": (-80.0, 80.0),
        "lon_range": (-180.0, 180.0),
        "step": 1.0,
        "output_dir": "data/sim/declination_grid_global_fine",
    },
    "middle_east": {
        "lat_range": (10.0, 45.0),
        "lon_range": (25.0, 65.0),
        "step": 0.5,
        "output_dir": "data/sim/declination_grid_middle_east",
    },
}

COLUMNS = [
    "latitude_deg",
    "longitude_deg",
    "qibla_true_deg",
    "qibla_magnetic_deg",
    "distance_km",
    "declination_deg",
    "inclination_deg",
    "intensity_nt",
]


def grid_axes(lat_range, lon_range, step: float):
    """Inclusive latitude/longitude axes with the given spacing (degrees)."""
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")
    # linspace keeps the end points exact, so ±180 never overshoots
    n_lat = int(round((lat_range[1] - lat_range[0]) / step)) + 1
    n_lon = int(round((lon_range[1] - lon_range[0]) / step)) + 1
    lats = np.linspace(lat_range[0], lat_range[1], n_lat)
    lons = np.linspace(lon_range[0], lon_range[1], n_lon)
    return lats, lons


def evaluate_grid(
    model: MagneticModel,
    when: date,
    lats: np.ndarray,
    lons: np.ndarray,
    height_km: float = 0.0,
) -> np.ndarray:
    """
    Evaluate Qibla and field elements on every grid node.

    Args:
        model: Geomagnetic coefficient table.
        when: Evaluation date.
        lats: Latitude axis (degrees).
        lons: Longitude axis (degrees).
        height_km: Height above the ellipsoid for the field evaluation. The
                   magnetic bearing uses the declination at this height.

    Returns:
        Array [N×8] with the columns listed in COLUMNS, N = len(lats)·len(lons).
    """
    rows = []
    for lat in tqdm(lats, desc="Evaluating grid", unit="row"):
        for lon in lons:
            coord = GeoCoordinate(float(lat), float(lon))
            vector = model.evaluate(coord, when, height_km)
            direction = bearing(coord, KAABA)
            rows.append(
                [
                    coord.latitude,
                    coord.longitude,
                    direction,
                    true_to_magnetic(direction, vector.declination),
                    distance(coord, KAABA),
                    vector.declination,
                    vector.inclination,
                    vector.total_intensity,
                ]
            )
    return np.array(rows, dtype=np.float64)


def save_dataset(output_dir: Path, grid: np.ndarray, config: Dict) -> None:
    """Save grid dataset to disk."""
    output_dir.mkdir(parents=True, exist_ok=True)

    np.savetxt(
        output_dir / "declination_grid.txt",
        grid,
        fmt="%.4f",
        header=", ".join(COLUMNS),
    )

    with open(output_dir / "config.json", "w") as f:
        json.dump(config, f, indent=2)

    print(f"\n  Saved: {output_dir / 'declination_grid.txt'}")
    print(f"  Saved: {output_dir / 'config.json'}")


def generate_dataset(
    output_dir: str,
    preset: Optional[str] = None,
    lat_range=(-80.0, 80.0),
    lon_range=(-180.0, 180.0),
    step: float = 5.0,
    when: date = date(2022, 1, 1),
    height_km: float = 0.0,
    cof_path: Optional[str] = None,
) -> np.ndarray:
    """Generate the grid dataset with specified parameters."""
    if preset is not None:
        params = PRESETS[preset]
        lat_range = params["lat_range"]
        lon_range = params["lon_range"]
        step = params["step"]
        output_dir = params["output_dir"]

    print("\n" + "=" * 70)
    print(f"Generating Declination Grid Dataset: {Path(output_dir).name}")
    print("=" * 70)

    model = load_cof(cof_path) if cof_path else load_wmm2020()
    valid = model.is_within_validity(when)
    print(f"\nStep 1: Loaded {model.name} (epoch {model.epoch:.1f}, degree {model.max_degree})")
    if not valid:
        print(f"  [WARN] {when} is outside {model.epoch:.1f}-{model.valid_until:.1f}; "
              f"declination is extrapolated")

    lats, lons = grid_axes(lat_range, lon_range, step)
    print(f"\nStep 2: Grid {len(lats)} x {len(lons)} nodes at {step}° spacing")

    grid = evaluate_grid(model, when, lats, lons, height_km)

    decl = grid[:, 5]
    print(f"\nStep 3: Summary")
    print(f"  Declination range: {decl.min():.1f}° to {decl.max():.1f}°")
    print(f"  Intensity range:   {grid[:, 7].min():,.0f} to {grid[:, 7].max():,.0f} nT")

    config = {
        "dataset": "declination_grid",
        "preset": preset,
        "model": {
            "name": model.name,
            "epoch": model.epoch,
            "valid_until": model.valid_until,
            "max_degree": model.max_degree,
            "source": cof_path or "packaged WMM2020.COF",
        },
        "date": when.isoformat(),
        "model_valid": valid,
        "height_km": height_km,
        "grid": {
            "lat_range_deg": list(lat_range),
            "lon_range_deg": list(lon_range),
            "step_deg": step,
            "num_nodes": int(grid.shape[0]),
        },
        "columns": COLUMNS,
    }

    save_dataset(Path(output_dir), grid, config)

    print("\n" + "=" * 70)
    print("Dataset generation complete!")
    print("=" * 70)

    return grid


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Generate Declination / Qibla Grid Dataset",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Presets:
  global          80°S-80°N, all longitudes, 5° spacing
  global_fine     80°S-80°N, all longitudes, 1° spacing
  middle_east     10°N-45°N, 25°E-65°E, 0.5° spacing

Examples:
  python scripts/generate_declination_grid.py --preset global

  # Custom region and date, newer coefficient release
  python scripts/generate_declination_grid.py \\
      --output data/sim/my_grid \\
      --lat-min 30 --lat-max 60 --lon-min -130 --lon-max -60 \\
      --step 2 --date 2024-06-01 --cof WMM2025.COF
        """,
    )

    parser.add_argument(
        "--preset",
        type=str,
        choices=sorted(PRESETS),
        help="Use preset grid (overrides region and step)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="data/sim/declination_grid_custom",
        help="Output directory (default: data/sim/declination_grid_custom)",
    )

    grid_group = parser.add_argument_group("Grid Parameters")
    grid_group.add_argument("--lat-min", type=float, default=-80.0, help="Southern edge (default: -80)")
    grid_group.add_argument("--lat-max", type=float, default=80.0, help="Northern edge (default: 80)")
    grid_group.add_argument("--lon-min", type=float, default=-180.0, help="Western edge (default: -180)")
    grid_group.add_argument("--lon-max", type=float, default=180.0, help="Eastern edge (default: 180)")
    grid_group.add_argument("--step", type=float, default=5.0, help="Grid spacing in degrees (default: 5)")

    model_group = parser.add_argument_group("Model Parameters")
    model_group.add_argument(
        "--date",
        type=date.fromisoformat,
        default=date(2022, 1, 1),
        help="Evaluation date, YYYY-MM-DD (default: 2022-01-01)",
    )
    model_group.add_argument(
        "--height", type=float, default=0.0, help="Height above ellipsoid in km (default: 0)"
    )
    model_group.add_argument(
        "--cof", type=str, default=None, help="Coefficient file (default: packaged WMM-2020)"
    )

    args = parser.parse_args()

    generate_dataset(
        output_dir=args.output,
        preset=args.preset,
        lat_range=(args.lat_min, args.lat_max),
        lon_range=(args.lon_min, args.lon_max),
        step=args.step,
        when=args.date,
        height_km=args.height,
        cof_path=args.cof,
    )


if __name__ == "__main__":
    main()
