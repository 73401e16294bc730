# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Earth ellipsoid and render-space constants.

No external dependencies.
"""


class _EarthConstants:
    """WGS84 ellipsoid values used for ECEF→Geodetic conversion."""
    R_EARTH_EQUATORIAL: float = 6_378_137.0       # m, semi-major axis
    R_EARTH_POLAR: float = 6_356_752.3142         # m, semi-minor axis
    FLATTENING: float = 1.0 / 298.257223563       # WGS84 flattening
    E_SQUARED: float = 0.00669437999014           # first eccentricity squared


EarthConstants: _EarthConstants = _EarthConstants()

# Render space: globe mesh radius and the sphere markers sit on.
GLOBE_RADIUS: float = 10.0
MARKER_RADIUS: float = 11.0

# Trajectory window defaults: ±12 h at one-minute resolution.
DEFAULT_HALF_WINDOW_SECONDS: int = 43_200
DEFAULT_STEP_SECONDS: int = 60

# Catalog refresh gate.
CATALOG_REFRESH_INTERVAL_MS: int = 12 * 60 * 60 * 1000
