# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Per-frame marker position refresh.

Recomputes the render-space position of every visible tracked object and
forwards it to the renderer. A propagation failure for one object skips
that object for the frame; the others still update. Refresh runs every
frame, so a skipped object is retried on the next tick.
"""
import logging
from datetime import datetime
from typing import Iterable

from satglobe.domain.constants import MARKER_RADIUS
from satglobe.domain.coordinate_frames import eci_to_render_position
from satglobe.domain.registry import TrackedObject, TrackedObjectRegistry
from satglobe.ports.propagation import OrbitalPropagator, PropagationError
from satglobe.ports.render import SceneRenderer


_log = logging.getLogger(__name__)

_PROPAGATION_FAILURES = (PropagationError, ValueError, ArithmeticError)


def refresh_all(
    tracked_objects: Iterable[TrackedObject],
    now: datetime,
    propagator: OrbitalPropagator,
    renderer: SceneRenderer,
    radius: float = MARKER_RADIUS,
) -> int:
    """
    Move every visible marker to its position at `now`.

    Args:
        tracked_objects: Objects to refresh; hidden ones are skipped.
        now: UTC instant for this frame.
        propagator: Propagation port.
        renderer: Receives set_position calls.
        radius: Marker sphere radius.

    Returns:
        Number of markers updated.
    """
    updated = 0
    for tracked in tracked_objects:
        if not tracked.visible:
            continue
        try:
            position = eci_to_render_position(
                propagator, tracked.entry.element_set, now, radius,
            )
        except _PROPAGATION_FAILURES as e:
            _log.debug("Skipping %s this frame: %s", tracked.name, e)
            continue
        renderer.set_position(tracked.render_handle, position)
        updated += 1
    return updated


class PositionRefreshLoop:
    """
    Scheduler-invoked frame tick over a registry.

    tick() never blocks or suspends; call it once per rendered frame.
    """

    def __init__(
        self,
        registry: TrackedObjectRegistry,
        propagator: OrbitalPropagator,
        renderer: SceneRenderer,
        radius: float = MARKER_RADIUS,
    ):
        self._registry = registry
        self._propagator = propagator
        self._renderer = renderer
        self._radius = radius
        self.frames = 0
        self.last_updated = 0
        self.last_skipped = 0

    def tick(self, now: datetime) -> int:
        """Refresh all visible markers for one frame. Returns markers updated."""
        objects = self._registry.objects
        visible = sum(1 for tracked in objects if tracked.visible)
        updated = refresh_all(
            objects, now, self._propagator, self._renderer, self._radius,
        )
        self.frames += 1
        self.last_updated = updated
        self.last_skipped = visible - updated
        return updated
