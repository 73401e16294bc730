# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Coordinate frame conversions.

ECI → ECEF → Geodetic → render-space Cartesian.

Reference frames:
    ECI  — Earth-Centered Inertial (as returned by the propagator)
    ECEF — Earth-Centered Earth-Fixed (rotating with Earth)
    Geodetic — Latitude, Longitude, Altitude (WGS84 ellipsoid)
    Render — Y-up Cartesian on a sphere around the globe mesh

The ECI→ECEF rotation is a Z-axis rotation by the sidereal angle the
propagator reports. ECEF→Geodetic iterates latitude on the WGS84
ellipsoid. Geodetic→Render uses the globe texture convention: the
texture seam sits at longitude 180°, so theta is offset by +180° and
x is negated. Changing either mirrors or rotates every marker.
"""
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any

import numpy as np

from satglobe.domain.constants import EarthConstants, MARKER_RADIUS
from satglobe.ports.propagation import OrbitalPropagator


RenderPosition = tuple[float, float, float]


@dataclass(frozen=True)
class GeodeticPosition:
    """Latitude/longitude in degrees and altitude above the ellipsoid."""
    lat_deg: float
    lon_deg: float
    alt_m: float = 0.0


def eci_to_ecef(
    pos_eci: tuple[float, float, float],
    sidereal_time_rad: float,
) -> tuple[float, float, float]:
    """
    Rotate an ECI position into the Earth-fixed frame.

    The rotation matrix R_z(-θ) rotates from inertial to Earth-fixed:
        [x_ecef]   [ cos(θ)  sin(θ)  0] [x_eci]
        [y_ecef] = [-sin(θ)  cos(θ)  0] [y_eci]
        [z_ecef]   [   0       0     1] [z_eci]

    Args:
        pos_eci: Position in ECI frame (x, y, z) in meters.
        sidereal_time_rad: Greenwich sidereal angle in radians.

    Returns:
        (x, y, z) in meters, ECEF frame.
    """
    cos_t = math.cos(sidereal_time_rad)
    sin_t = math.sin(sidereal_time_rad)

    return (
        cos_t * pos_eci[0] + sin_t * pos_eci[1],
        -sin_t * pos_eci[0] + cos_t * pos_eci[1],
        pos_eci[2],
    )


def ecef_to_geodetic(
    pos_ecef: tuple[float, float, float],
) -> tuple[float, float, float]:
    """
    Convert ECEF position to geodetic coordinates (WGS84 ellipsoid).

    Uses the iterative Bowring method for latitude convergence.

    Args:
        pos_ecef: Position in ECEF frame (x, y, z) in meters.

    Returns:
        (latitude_deg, longitude_deg, altitude_m)
        Latitude in [-90, 90], longitude in (-180, 180].
    """
    c = EarthConstants
    a = c.R_EARTH_EQUATORIAL
    b = c.R_EARTH_POLAR
    e2 = c.E_SQUARED

    x, y, z = pos_ecef
    p = math.sqrt(x**2 + y**2)

    lon_rad = math.atan2(y, x)

    # Initial estimate ignores altitude
    lat_rad = math.atan2(z, p * (1.0 - e2))

    for _ in range(10):
        sin_lat = math.sin(lat_rad)
        n = a / math.sqrt(1.0 - e2 * sin_lat**2)
        lat_rad = math.atan2(z + e2 * n * sin_lat, p)

    sin_lat = math.sin(lat_rad)
    cos_lat = math.cos(lat_rad)
    n = a / math.sqrt(1.0 - e2 * sin_lat**2)

    if abs(cos_lat) > 1e-10:
        alt = p / cos_lat - n
    else:
        alt = abs(z) - b

    return math.degrees(lat_rad), math.degrees(lon_rad), alt


def eci_to_geodetic(
    pos_eci: tuple[float, float, float],
    sidereal_time_rad: float,
) -> GeodeticPosition:
    """ECI position (m) and sidereal angle → geodetic position in degrees."""
    lat_deg, lon_deg, alt_m = ecef_to_geodetic(eci_to_ecef(pos_eci, sidereal_time_rad))
    return GeodeticPosition(lat_deg=lat_deg, lon_deg=lon_deg, alt_m=alt_m)


def geodetic_to_cartesian(
    lat_deg: float,
    lon_deg: float,
    radius: float,
) -> RenderPosition:
    """
    Map latitude/longitude in degrees onto a render-space sphere.

        phi   = (90 - lat) · π/180
        theta = (lon + 180) · π/180
        x = -r · sin(phi) · cos(theta)
        y =  r · cos(phi)
        z =  r · sin(phi) · sin(theta)

    Args:
        lat_deg: Latitude in degrees.
        lon_deg: Longitude in degrees.
        radius: Sphere radius in render units.

    Returns:
        (x, y, z) with magnitude equal to radius.
    """
    phi = (90.0 - lat_deg) * (math.pi / 180.0)
    theta = (lon_deg + 180.0) * (math.pi / 180.0)
    sin_phi = math.sin(phi)
    return (
        -(radius * sin_phi * math.cos(theta)),
        radius * math.cos(phi),
        radius * sin_phi * math.sin(theta),
    )


def geodetic_to_cartesian_array(
    lats_deg: np.ndarray,
    lons_deg: np.ndarray,
    radius: float,
) -> np.ndarray:
    """Vectorised geodetic_to_cartesian. Returns an (N, 3) array."""
    phi = np.radians(90.0 - np.asarray(lats_deg, dtype=float))
    theta = np.radians(np.asarray(lons_deg, dtype=float) + 180.0)
    sin_phi = np.sin(phi)
    return np.column_stack((
        -(radius * sin_phi * np.cos(theta)),
        radius * np.cos(phi),
        radius * sin_phi * np.sin(theta),
    ))


def propagate_geodetic(
    propagator: OrbitalPropagator,
    element_set: Any,
    time: datetime,
) -> GeodeticPosition:
    """Propagate an element set and return its sub-satellite point."""
    result = propagator.propagate(element_set, time)
    return eci_to_geodetic(result.position_eci, result.sidereal_time_rad)


def eci_to_render_position(
    propagator: OrbitalPropagator,
    element_set: Any,
    time: datetime,
    radius: float = MARKER_RADIUS,
) -> RenderPosition:
    """
    Render-space position of an element set at a given time.

    Args:
        propagator: Propagation port.
        element_set: Opaque element set from the propagator.
        time: UTC instant.
        radius: Marker sphere radius (default sits just outside the globe).

    Returns:
        (x, y, z) in render units.

    Raises:
        PropagationError: If the propagator cannot compute the position.
    """
    geo = propagate_geodetic(propagator, element_set, time)
    return geodetic_to_cartesian(geo.lat_deg, geo.lon_deg, radius)
