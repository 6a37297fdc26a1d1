"""
Compass Demos: Qibla Direction and Magnetic Declination

Runnable walkthroughs of the qibla package.

Provides examples demonstrating:
    - Qibla bearing, distance and compass reading for reference cities
    - Global declination map from the packaged WMM-2020 table
    - Correcting a noisy, tilted phone compass stream to true north

Examples:
    - example_qibla_direction.py: City table (true/magnetic bearing, distance)
    - example_declination_map.py: Declination contour map
    - example_compass_heading.py: Heading correction and Qibla needle

Run from the repository root, e.g.:
    python -m compass_demo.example_qibla_direction
"""

__all__ = []
