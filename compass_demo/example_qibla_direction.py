"""Example: Qibla direction, distance and compass reading for world cities.

This example demonstrates the full query path:
1. Validate observer coordinates (GeoCoordinate)
2. Compute the great-circle bearing and distance to the Kaaba
3. Evaluate the magnetic declination at the observer (WMM-2020)
4. Convert the true bearing into what a magnetic compass reads

It also shows why the return bearing is not the forward bearing + 180°,
and what happens when the query date falls outside the model's validity
window.
"""

from datetime import date

from qibla.coords import GeoCoordinate, InvalidCoordinate, bearing
from qibla.direction import KAABA, QiblaService
from qibla.geomag import load_wmm2020
from qibla.utils import normalize_degrees

CITIES = [
    ("New York", GeoCoordinate(40.7128, -74.0060)),
    ("London", GeoCoordinate(51.5074, -0.1278)),
    ("Tokyo", GeoCoordinate(35.6762, 139.6503)),
    ("Sydney", GeoCoordinate(-33.8688, 151.2093)),
    ("Jakarta", GeoCoordinate(-6.2088, 106.8456)),
    ("Cape Town", GeoCoordinate(-33.9249, 18.4241)),
    ("Anchorage", GeoCoordinate(61.2181, -149.9003)),
    ("Suva", GeoCoordinate(-18.1248, 178.4501)),
]


def main() -> None:
    """Run the Qibla direction examples."""
    print("=" * 78)
    print("Qibla Direction with Magnetic Declination")
    print("=" * 78)

    model = load_wmm2020()
    service = QiblaService(model)
    when = date(2024, 6, 1)

    print(f"\nModel:        {model.name} (degree {model.max_degree})")
    print(f"Valid:        {model.epoch:.1f} - {model.valid_until:.1f}")
    print(f"Query date:   {when.isoformat()}")
    print(f"Target:       Kaaba ({KAABA.latitude:.6f}°, {KAABA.longitude:.6f}°)")

    # Example 1: Reference table
    print("\n1. Qibla from reference cities")
    print("-" * 78)
    print(f"{'City':<12} {'True':>14} {'Declination':>14} {'Compass':>9} "
          f"{'Distance':>10} {'|F| [nT]':>10}")
    for name, coord in CITIES:
        result = service.compute(coord, when)
        print(f"{name:<12} {result.formatted_direction:>14} "
              f"{result.formatted_declination:>14} "
              f"{result.magnetic_direction:>8.1f}° "
              f"{result.formatted_distance:>10} "
              f"{result.field_strength_nt:>10,.0f}")

    # Example 2: Detailed result
    print("\n2. Detailed result (New York)")
    print("-" * 78)
    result = service.compute(CITIES[0][1], when)
    print(result.detailed_direction_info)

    # Example 3: Bearings are not reversible
    print("\n3. Forward vs. return bearing")
    print("-" * 78)
    for name, coord in CITIES[:3]:
        forward = bearing(coord, KAABA)
        back = bearing(KAABA, coord)
        naive = normalize_degrees(forward + 180.0)
        print(f"{name:<12} forward {forward:7.2f}°   return {back:7.2f}°   "
              f"forward+180 {naive:7.2f}°")

    # Example 4: Stale model
    print("\n4. Query outside the validity window")
    print("-" * 78)
    stale = service.compute(CITIES[0][1], date(2026, 6, 1))
    print(f"Date:         2026-06-01")
    print(f"Model valid:  {stale.model_valid}")
    print(f"Declination:  {stale.formatted_declination} (extrapolated)")

    # Example 5: Invalid input
    print("\n5. Invalid coordinates are rejected")
    print("-" * 78)
    try:
        GeoCoordinate(91.0, 0.0)
    except InvalidCoordinate as exc:
        print(f"InvalidCoordinate: {exc}")

    print("\n" + "=" * 78)
    print("Examples completed successfully!")
    print("=" * 78)


if __name__ == "__main__":
    main()
