# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the tracking session (toggle, select, reload, tick)."""
from datetime import timedelta

import pytest

from satglobe.adapters.marker_scene import MarkerScene
from satglobe.domain.catalog_cache import ElementSetCache
from satglobe.domain.tracking_session import Selection, TrackingConfig, TrackingSession
from satglobe.ports.propagation import PropagationError


SHORT_WINDOW = TrackingConfig(half_window_seconds=600, step_seconds=60)


@pytest.fixture
def scene():
    return MarkerScene()


@pytest.fixture
def source(make_source, sample_text):
    return make_source(sample_text)


@pytest.fixture
def session(source, propagator, scene):
    return TrackingSession(ElementSetCache(source), propagator, scene, SHORT_WINDOW)


class TestTrackingConfig:

    def test_defaults(self):
        config = TrackingConfig()
        assert config.catalog_group == "active"
        assert config.marker_radius == 11.0
        assert config.half_window_seconds == 43_200
        assert config.step_seconds == 60

    def test_frozen(self):
        with pytest.raises(AttributeError):
            TrackingConfig().catalog_group = "stations"


class TestToggle:

    def test_enable_populates_and_positions(self, session, scene, epoch):
        assert session.enable_tracking(epoch) == 5
        assert session.tracking_enabled
        assert len(scene.markers) == 5
        assert all(m.position is not None for m in scene.markers.values())

    def test_disable_hides_markers(self, session, scene, epoch):
        session.enable_tracking(epoch)
        session.disable_tracking()
        assert not session.tracking_enabled
        assert all(not m.visible for m in scene.markers.values())
        assert len(session.registry) == 5

    def test_toggle_does_not_duplicate(self, session, scene, source, epoch):
        for i in range(3):
            session.set_tracking(True, epoch + timedelta(seconds=i))
            session.set_tracking(False, epoch)
        session.set_tracking(True, epoch)
        assert len(scene.markers) == 5
        assert source.calls == 1
        assert all(m.visible for m in scene.markers.values())

    def test_fetch_failure_then_retry(self, make_source, propagator, scene, sample_text, epoch):
        source = make_source(error=ConnectionError("offline"))
        session = TrackingSession(ElementSetCache(source), propagator, scene)
        assert session.enable_tracking(epoch) == 0
        assert not session.registry.populated
        source.error = None
        source.text = sample_text
        assert session.enable_tracking(epoch) == 5

    def test_tick_skips_hidden(self, session, epoch):
        session.enable_tracking(epoch)
        session.disable_tracking()
        assert session.tick(epoch + timedelta(seconds=10)) == 0


class TestSelection:

    def test_select_draws_trajectory(self, session, scene, epoch):
        session.enable_tracking(epoch)
        selection = session.select("STARLINK-1007", epoch)
        assert isinstance(selection, Selection)
        assert selection.name == "STARLINK-1007"
        assert len(scene.trajectories) == 1
        line = next(iter(scene.trajectories.values()))
        assert len(line.positions) == 21

    def test_select_case_insensitive(self, session, epoch):
        session.enable_tracking(epoch)
        assert session.select("calipso", epoch).name == "CALIPSO"

    def test_select_unknown(self, session, epoch):
        session.enable_tracking(epoch)
        with pytest.raises(KeyError):
            session.select("HUBBLE", epoch)

    def test_reselect_replaces_line(self, session, scene, epoch):
        session.enable_tracking(epoch)
        session.select("ISS (ZARYA)", epoch)
        session.select("USA 245", epoch)
        assert len(scene.trajectories) == 1
        assert session.selection.selected_name == "USA 245"

    def test_select_propagation_failure(self, make_source, make_propagator, scene, sample_text, epoch):
        propagator = make_propagator(failing={"00003U"})
        session = TrackingSession(
            ElementSetCache(make_source(sample_text)), propagator, scene, SHORT_WINDOW,
        )
        session.enable_tracking(epoch)
        with pytest.raises(PropagationError):
            session.select("INTELSAT 901", epoch)
        assert scene.trajectories == {}

    def test_clear_selection(self, session, scene, epoch):
        session.enable_tracking(epoch)
        session.select("ISS (ZARYA)", epoch)
        session.clear_selection()
        assert scene.trajectories == {}
        assert session.selection.selected_name is None


class TestReload:

    def test_reload_refetches(self, session, scene, source, epoch):
        session.enable_tracking(epoch)
        session.select("ISS (ZARYA)", epoch)
        assert session.reload(epoch) == 5
        assert source.calls == 2
        assert scene.trajectories == {}
        assert len(scene.markers) == 10
        visible = [m for m in scene.markers.values() if m.visible]
        assert len(visible) == 5

    def test_reload_while_disabled(self, session, source, epoch):
        session.enable_tracking(epoch)
        session.disable_tracking()
        assert session.reload(epoch) == 0
        assert not session.registry.populated
        assert source.calls == 1


class TestState:

    def test_state_summary(self, session, epoch):
        session.enable_tracking(epoch)
        session.select("USA 245", epoch)
        state = session.state()
        assert state["tracking_enabled"] is True
        assert state["tracked"] == 5
        assert state["categories"]["military"] == 1
        assert state["categories"]["unclassified"] == 1
        assert state["selected"] == "USA 245"
        assert state["frames"] == 1
        assert state["last_updated"] == 5
        assert state["catalog_fetched_at_ms"] is not None

    def test_state_before_tracking(self, session):
        state = session.state()
        assert state["tracked"] == 0
        assert state["catalog_fetched_at_ms"] is None
        assert state["selected"] is None
