# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Tracking session: the viewer-facing service over cache, registry,
refresh loop and trajectory selection.

Handles the UI events (tracking toggle, object selection, clear) and the
per-frame tick. An RLock serialises registry mutation and ticks. The
catalog fetch runs outside the lock, so frames keep refreshing any
already-tracked objects while a fetch is pending.
"""
import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from satglobe.domain.catalog_cache import ElementSetCache, epoch_millis
from satglobe.domain.constants import (
    CATALOG_REFRESH_INTERVAL_MS,
    DEFAULT_HALF_WINDOW_SECONDS,
    DEFAULT_STEP_SECONDS,
    MARKER_RADIUS,
)
from satglobe.domain.registry import TrackedObjectRegistry
from satglobe.domain.refresh import PositionRefreshLoop
from satglobe.domain.trajectory import TrajectorySelection
from satglobe.ports.propagation import OrbitalPropagator
from satglobe.ports.render import SceneRenderer


_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackingConfig:
    """Immutable configuration for a tracking session and its adapters."""
    catalog_group: str = "active"
    catalog_base_url: str | None = None
    fetch_timeout_s: float = 30.0
    refresh_interval_ms: int = CATALOG_REFRESH_INTERVAL_MS
    marker_radius: float = MARKER_RADIUS
    half_window_seconds: float = DEFAULT_HALF_WINDOW_SECONDS
    step_seconds: float = DEFAULT_STEP_SECONDS


@dataclass(frozen=True)
class Selection:
    """Selection event payload."""
    name: str
    element_set: Any


class TrackingSession:
    """
    One viewer session.

    Args:
        cache: Catalog cache shared by the process.
        propagator: Propagation port.
        renderer: Scene renderer port.
        config: Session configuration.
    """

    def __init__(
        self,
        cache: ElementSetCache,
        propagator: OrbitalPropagator,
        renderer: SceneRenderer,
        config: TrackingConfig = TrackingConfig(),
    ):
        self._cache = cache
        self._propagator = propagator
        self._lock = threading.RLock()
        self.config = config
        self.registry = TrackedObjectRegistry(propagator, renderer)
        self.loop = PositionRefreshLoop(
            self.registry, propagator, renderer, config.marker_radius,
        )
        self.selection = TrajectorySelection(
            propagator, renderer,
            half_window_seconds=config.half_window_seconds,
            step_seconds=config.step_seconds,
            radius=config.marker_radius,
        )
        self.tracking_enabled = False

    @property
    def cache(self) -> ElementSetCache:
        return self._cache

    @property
    def propagator(self) -> OrbitalPropagator:
        return self._propagator

    @property
    def lock(self) -> threading.RLock:
        """Guards registry and renderer state; hold it to read a consistent frame."""
        return self._lock

    def enable_tracking(self, now: datetime) -> int:
        """
        Turn tracking on, populating the registry on first demand.

        Returns:
            Number of tracked objects (0 if the catalog fetch failed).
        """
        if not self.registry.populated:
            catalog = self._cache.get_catalog(epoch_millis(now))
            with self._lock:
                self.registry.populate(catalog)
        with self._lock:
            self.registry.set_all_visible(True)
            self.tracking_enabled = True
            self.loop.tick(now)
            return len(self.registry)

    def disable_tracking(self) -> None:
        """Hide every marker; handles and entries are kept."""
        with self._lock:
            self.registry.set_all_visible(False)
            self.tracking_enabled = False

    def set_tracking(self, enabled: bool, now: datetime) -> int:
        """Apply a toggle event. Returns the number of tracked objects."""
        if enabled:
            return self.enable_tracking(now)
        self.disable_tracking()
        return len(self.registry)

    def tick(self, now: datetime) -> int:
        """Advance one frame. Returns the number of markers updated."""
        with self._lock:
            return self.loop.tick(now)

    def select(self, name: str, now: datetime) -> Selection:
        """
        Select a tracked object and display its trajectory centred on now.

        Raises:
            KeyError: If no tracked object has that name.
        """
        with self._lock:
            tracked = self.registry.find(name)
            if tracked is None:
                raise KeyError(f"Not tracked: {name}")
            self.selection.select(tracked.name, tracked.entry.element_set, now)
            return Selection(name=tracked.name, element_set=tracked.entry.element_set)

    def clear_selection(self) -> None:
        with self._lock:
            self.selection.clear()

    def reload(self, now: datetime) -> int:
        """
        Drop the cached catalog and all tracked objects, then repopulate
        if tracking is on.

        Returns:
            Number of tracked objects after the reload.
        """
        self._cache.invalidate()
        with self._lock:
            self.selection.clear()
            self.registry.set_all_visible(False)
            self.registry.reset()
            enabled = self.tracking_enabled
        _log.info("Catalog reload requested")
        if enabled:
            return self.enable_tracking(now)
        return 0

    def state(self) -> dict[str, Any]:
        """Session summary for status displays (JSON-serialisable)."""
        with self._lock:
            fetched_at = self._cache.catalog.fetched_at_ms
            return {
                "tracking_enabled": self.tracking_enabled,
                "tracked": len(self.registry),
                "categories": {
                    category.value: count
                    for category, count in self.registry.counts_by_category().items()
                },
                "selected": self.selection.selected_name,
                "frames": self.loop.frames,
                "last_updated": self.loop.last_updated,
                "last_skipped": self.loop.last_skipped,
                "catalog_fetched_at_ms": fetched_at,
            }
