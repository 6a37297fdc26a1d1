"""Direction-finding and geomagnetic-correction library.

This package contains the computational core of a Qibla compass:
- utils: Angle normalization and shortest-difference helpers (degrees)
- coords: Validated geographic coordinates, great-circle geodesy, WGS84 transforms
- geomag: Spherical-harmonic geomagnetic model with secular variation
- direction: Qibla bearing/distance service and compass formatting
- sensors: Heading correction for raw magnetometer/compass streams
"""

__version__ = "0.1.0"
