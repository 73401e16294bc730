# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for ECI → ECEF → geodetic → render-space conversion."""
import math
from datetime import timedelta

import numpy as np
import pytest

from satglobe.domain.constants import EarthConstants, GLOBE_RADIUS, MARKER_RADIUS
from satglobe.domain.coordinate_frames import (
    GeodeticPosition,
    ecef_to_geodetic,
    eci_to_ecef,
    eci_to_geodetic,
    eci_to_render_position,
    geodetic_to_cartesian,
    geodetic_to_cartesian_array,
    propagate_geodetic,
)


# ── ECI → ECEF ──────────────────────────────────────────────────────

class TestEciToEcef:

    def test_zero_angle_is_identity(self):
        assert eci_to_ecef((1.0, 2.0, 3.0), 0.0) == (1.0, 2.0, 3.0)

    def test_quarter_turn(self):
        x, y, z = eci_to_ecef((1.0, 0.0, 5.0), math.pi / 2)
        assert x == pytest.approx(0.0, abs=1e-12)
        assert y == pytest.approx(-1.0)
        assert z == 5.0

    def test_preserves_magnitude(self):
        pos = (7000e3, -1200e3, 300e3)
        rotated = eci_to_ecef(pos, 1.234)
        assert math.dist((0, 0, 0), rotated) == pytest.approx(math.dist((0, 0, 0), pos))


# ── ECEF → Geodetic ─────────────────────────────────────────────────

class TestEcefToGeodetic:

    def test_equator_prime_meridian(self):
        lat, lon, alt = ecef_to_geodetic((EarthConstants.R_EARTH_EQUATORIAL, 0.0, 0.0))
        assert lat == pytest.approx(0.0, abs=1e-9)
        assert lon == pytest.approx(0.0, abs=1e-9)
        assert alt == pytest.approx(0.0, abs=1e-3)

    def test_north_pole(self):
        lat, _, alt = ecef_to_geodetic((0.0, 0.0, EarthConstants.R_EARTH_POLAR))
        assert lat == pytest.approx(90.0)
        assert alt == pytest.approx(0.0, abs=1e-3)

    def test_altitude_above_equator(self):
        r = EarthConstants.R_EARTH_EQUATORIAL + 550_000.0
        lat, lon, alt = ecef_to_geodetic((0.0, r, 0.0))
        assert lat == pytest.approx(0.0, abs=1e-9)
        assert lon == pytest.approx(90.0)
        assert alt == pytest.approx(550_000.0, abs=1e-3)

    def test_longitude_west(self):
        _, lon, _ = ecef_to_geodetic((0.0, -7e6, 0.0))
        assert lon == pytest.approx(-90.0)


class TestEciToGeodetic:

    def test_sidereal_rotation_shifts_longitude(self):
        r = EarthConstants.R_EARTH_EQUATORIAL + 400_000.0
        geo = eci_to_geodetic((r, 0.0, 0.0), math.pi / 2)
        assert isinstance(geo, GeodeticPosition)
        assert geo.lon_deg == pytest.approx(-90.0)
        assert geo.lat_deg == pytest.approx(0.0, abs=1e-9)
        assert geo.alt_m == pytest.approx(400_000.0, abs=1e-3)


# ── Geodetic → render space ─────────────────────────────────────────

class TestGeodeticToCartesian:

    def test_equator_prime_meridian(self):
        x, y, z = geodetic_to_cartesian(0.0, 0.0, MARKER_RADIUS)
        assert x == pytest.approx(MARKER_RADIUS)
        assert y == pytest.approx(0.0, abs=1e-12)
        assert z == pytest.approx(0.0, abs=1e-12)

    def test_north_pole_is_up(self):
        x, y, z = geodetic_to_cartesian(90.0, 37.0, MARKER_RADIUS)
        assert x == pytest.approx(0.0, abs=1e-12)
        assert y == pytest.approx(MARKER_RADIUS)
        assert z == pytest.approx(0.0, abs=1e-12)

    def test_south_pole_is_down(self):
        _, y, _ = geodetic_to_cartesian(-90.0, 0.0, GLOBE_RADIUS)
        assert y == pytest.approx(-GLOBE_RADIUS)

    def test_east_and_west(self):
        east = geodetic_to_cartesian(0.0, 90.0, 1.0)
        west = geodetic_to_cartesian(0.0, -90.0, 1.0)
        assert east == pytest.approx((0.0, 0.0, -1.0), abs=1e-12)
        assert west == pytest.approx((0.0, 0.0, 1.0), abs=1e-12)

    def test_inputs_are_degrees(self):
        # 45° north: y = r·cos(45°); a radians mix-up gives r·cos(45 rad)
        _, y, _ = geodetic_to_cartesian(45.0, 45.0, MARKER_RADIUS)
        assert y == pytest.approx(MARKER_RADIUS * math.sqrt(2) / 2)

    @pytest.mark.parametrize("lat", [-89.5, -45.0, 0.0, 12.3, 60.0, 90.0])
    @pytest.mark.parametrize("lon", [-180.0, -97.1, 0.0, 45.0, 179.9])
    def test_magnitude_equals_radius(self, lat, lon):
        pos = geodetic_to_cartesian(lat, lon, MARKER_RADIUS)
        assert math.dist((0, 0, 0), pos) == pytest.approx(MARKER_RADIUS)

    def test_array_matches_scalar(self):
        lats = np.array([-30.0, 0.0, 51.6, 89.0])
        lons = np.array([170.0, -45.0, 0.0, -179.0])
        xyz = geodetic_to_cartesian_array(lats, lons, GLOBE_RADIUS)
        assert xyz.shape == (4, 3)
        for i in range(4):
            expected = geodetic_to_cartesian(lats[i], lons[i], GLOBE_RADIUS)
            np.testing.assert_allclose(xyz[i], expected, atol=1e-12)


# ── Propagator pipeline ─────────────────────────────────────────────

class TestPropagatedPosition:

    def test_propagate_geodetic(self, propagator, epoch):
        elements = propagator.parse_element_set("1 00001U", "2 00001")
        geo = propagate_geodetic(propagator, elements, epoch)
        assert geo.lat_deg == pytest.approx(0.0, abs=1e-9)
        assert geo.lon_deg == pytest.approx(0.0, abs=1e-9)
        assert geo.alt_m == pytest.approx(400_000.0, abs=1e-3)

    def test_render_position_at_epoch(self, propagator, epoch):
        elements = propagator.parse_element_set("1 00001U", "2 00001")
        pos = eci_to_render_position(propagator, elements, epoch)
        assert pos == pytest.approx((MARKER_RADIUS, 0.0, 0.0), abs=1e-9)

    def test_render_position_quarter_orbit(self, propagator, epoch):
        # Fake orbit period is 5400 s; a quarter later the object is at 90° E
        elements = propagator.parse_element_set("1 00001U", "2 00001")
        pos = eci_to_render_position(
            propagator, elements, epoch + timedelta(seconds=1350), radius=1.0,
        )
        assert pos == pytest.approx((0.0, 0.0, -1.0), abs=1e-9)
