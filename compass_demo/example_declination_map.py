"""
Example: Global Magnetic Declination Map

Evaluates the packaged WMM-2020 table on a latitude/longitude grid and
draws declination contours (the classic isogonic chart) alongside total
field intensity. Qibla great-circle paths from a few cities are overlaid
to show how much a compass reading must be corrected along the way.

Implements:
    - Gridded evaluation of declination and total intensity
    - Agonic line (zero declination) extraction via contouring
    - Secular drift of declination between two dates

Key Insight: Declination varies by tens of degrees across the globe and
            drifts year to year; a compass pointed at the Qibla without
            correction can be off by more than a sector of the rose.
"""

from datetime import date
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from tqdm import tqdm

from qibla.coords import GeoCoordinate
from qibla.direction import KAABA
from qibla.geomag import MagneticModel, evaluate, load_wmm2020

OBSERVERS = {
    "New York": GeoCoordinate(40.7128, -74.0060),
    "London": GeoCoordinate(51.5074, -0.1278),
    "Sydney": GeoCoordinate(-33.8688, 151.2093),
}


def evaluate_grid(model: MagneticModel, when, lat_step: float = 5.0, lon_step: float = 5.0):
    """
    Evaluate declination and total intensity on a regular grid.

    Returns: lats, lons, declination [deg], intensity [nT]
    """
    lats = np.arange(-85.0, 85.0 + lat_step / 2, lat_step)
    lons = np.arange(-180.0, 180.0 + lon_step / 2, lon_step)

    decl = np.zeros((len(lats), len(lons)))
    total = np.zeros((len(lats), len(lons)))
    for i, lat in enumerate(tqdm(lats, desc=f"Evaluating {when}", unit="row")):
        for j, lon in enumerate(lons):
            vector = evaluate(model, GeoCoordinate(lat, lon), when)
            decl[i, j] = vector.declination
            total[i, j] = vector.total_intensity

    return lats, lons, decl, total


def great_circle_path(origin: GeoCoordinate, target: GeoCoordinate, n_points: int = 100):
    """Points along the great circle from origin to target (degrees)."""
    lat1, lon1 = np.deg2rad(origin.latitude), np.deg2rad(origin.longitude)
    lat2, lon2 = np.deg2rad(target.latitude), np.deg2rad(target.longitude)
    p1 = np.array([np.cos(lat1) * np.cos(lon1), np.cos(lat1) * np.sin(lon1), np.sin(lat1)])
    p2 = np.array([np.cos(lat2) * np.cos(lon2), np.cos(lat2) * np.sin(lon2), np.sin(lat2)])
    omega = np.arccos(np.clip(p1 @ p2, -1.0, 1.0))

    f = np.linspace(0.0, 1.0, n_points)[:, None]
    pts = (np.sin((1 - f) * omega) * p1 + np.sin(f * omega) * p2) / np.sin(omega)
    lats = np.rad2deg(np.arcsin(pts[:, 2]))
    lons = np.rad2deg(np.arctan2(pts[:, 1], pts[:, 0]))
    return lats, lons


def plot_results(lats, lons, decl, total, drift, figs_dir):
    """Generate plots."""
    lon_grid, lat_grid = np.meshgrid(lons, lats)

    # Figure 1: Declination
    fig1, ax1 = plt.subplots(figsize=(14, 7))
    levels = np.arange(-60, 61, 5)
    cf = ax1.contourf(lon_grid, lat_grid, np.clip(decl, -60, 60), levels=levels,
                      cmap='RdBu_r', extend='both')
    ax1.contour(lon_grid, lat_grid, decl, levels=[0.0], colors='k', linewidths=2)
    fig1.colorbar(cf, ax=ax1, label='Declination [deg] (positive east)')

    for name, coord in OBSERVERS.items():
        path_lat, path_lon = great_circle_path(coord, KAABA)
        ax1.plot(path_lon, path_lat, 'g-', linewidth=1.5)
        ax1.plot(coord.longitude, coord.latitude, 'go', markersize=6)
        ax1.annotate(name, (coord.longitude, coord.latitude), xytext=(5, 5),
                     textcoords='offset points', fontsize=10)
    ax1.plot(KAABA.longitude, KAABA.latitude, 'k*', markersize=14, label='Kaaba')

    ax1.set_xlabel('Longitude [deg]', fontsize=12)
    ax1.set_ylabel('Latitude [deg]', fontsize=12)
    ax1.set_title('WMM-2020 Declination (black: agonic line)', fontsize=14, fontweight='bold')
    ax1.legend(fontsize=11, loc='lower left')
    ax1.grid(True, alpha=0.3)

    plt.tight_layout()
    fig1.savefig(figs_dir / 'declination_map.svg', dpi=300, bbox_inches='tight')
    fig1.savefig(figs_dir / 'declination_map.pdf', bbox_inches='tight')
    print(f"  [OK] Saved: {figs_dir / 'declination_map.svg'}")

    # Figure 2: Intensity and secular drift
    fig2, (ax1, ax2) = plt.subplots(2, 1, figsize=(12, 10), sharex=True)

    cf1 = ax1.contourf(lon_grid, lat_grid, total / 1000.0, levels=20, cmap='viridis')
    fig2.colorbar(cf1, ax=ax1, label='Total intensity [μT]')
    ax1.set_ylabel('Latitude [deg]', fontsize=12)
    ax1.set_title('Total Field Intensity', fontsize=14, fontweight='bold')
    ax1.grid(True, alpha=0.3)

    limit = np.percentile(np.abs(drift), 98)
    cf2 = ax2.contourf(lon_grid, lat_grid, np.clip(drift, -limit, limit), levels=21,
                       cmap='PuOr')
    fig2.colorbar(cf2, ax=ax2, label='Declination change [deg]')
    ax2.set_xlabel('Longitude [deg]', fontsize=12)
    ax2.set_ylabel('Latitude [deg]', fontsize=12)
    ax2.set_title('Declination Drift 2020 -> 2025', fontsize=14, fontweight='bold')
    ax2.grid(True, alpha=0.3)

    plt.tight_layout()
    fig2.savefig(figs_dir / 'declination_drift.svg', dpi=300, bbox_inches='tight')
    fig2.savefig(figs_dir / 'declination_drift.pdf', bbox_inches='tight')
    print(f"  [OK] Saved: {figs_dir / 'declination_drift.svg'}")

    plt.close('all')


def main():
    """Main execution."""
    print("\n" + "=" * 70)
    print("Global Magnetic Declination Map")
    print("=" * 70)

    model = load_wmm2020()
    start_date = date(2020, 1, 1)
    end_date = date(2025, 1, 1)

    print(f"\nConfiguration:")
    print(f"  Model:           {model.name} (degree {model.max_degree})")
    print(f"  Grid:            5° x 5°")
    print(f"  Dates:           {start_date} and {end_date}\n")

    lats, lons, decl, total = evaluate_grid(model, start_date)
    _, _, decl_end, _ = evaluate_grid(model, end_date)
    # Declination difference wrapped to (-180, 180]
    drift = (decl_end - decl + 180.0) % 360.0 - 180.0

    figs_dir = Path(__file__).parent / 'figs'
    figs_dir.mkdir(exist_ok=True)

    print("\nGenerating plots...")
    plot_results(lats, lons, decl, total, drift, figs_dir)

    print("\n" + "=" * 70)
    print("RESULTS")
    print("=" * 70)
    i_max, j_max = np.unravel_index(np.argmax(np.abs(decl)), decl.shape)
    print(f"Declination:")
    print(f"  Range:            {decl.min():.1f}° to {decl.max():.1f}°")
    print(f"  Largest |D| at:   ({lats[i_max]:.0f}°, {lons[j_max]:.0f}°)")
    print(f"Total intensity:")
    print(f"  Min / Max:        {total.min():,.0f} / {total.max():,.0f} nT")
    print(f"Secular drift (2020 -> 2025):")
    print(f"  Median |ΔD|:      {np.median(np.abs(drift)):.2f}°")
    print()
    for name, coord in OBSERVERS.items():
        d0 = evaluate(model, coord, start_date).declination
        d1 = evaluate(model, coord, end_date).declination
        print(f"  {name:<10} {d0:+6.2f}° -> {d1:+6.2f}°")
    print()
    print(f"Figures saved to: {figs_dir}/")
    print("=" * 70)
    print()


if __name__ == "__main__":
    main()
