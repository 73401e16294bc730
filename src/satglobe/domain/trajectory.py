# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Trajectory sampling around a reference time.

Propagates one element set at fixed steps across a window centred on a
reference time and converts each instant to geodetic and render-space
coordinates. Sampling is eager: the full window is computed up front and
returned as a chronological list.

At most one trajectory is displayed at a time; TrajectorySelection owns
its render handle.
"""
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

import numpy as np

from satglobe.domain.constants import (
    DEFAULT_HALF_WINDOW_SECONDS,
    DEFAULT_STEP_SECONDS,
    MARKER_RADIUS,
)
from satglobe.domain.coordinate_frames import (
    RenderPosition,
    geodetic_to_cartesian_array,
    propagate_geodetic,
)
from satglobe.ports.propagation import OrbitalPropagator
from satglobe.ports.render import SceneRenderer


@dataclass(frozen=True)
class TrajectorySample:
    """A single tick of a sampled trajectory."""
    time: datetime
    lat_deg: float
    lon_deg: float
    alt_km: float
    position: RenderPosition


def tick_offsets(
    half_window_seconds: float = DEFAULT_HALF_WINDOW_SECONDS,
    step_seconds: float = DEFAULT_STEP_SECONDS,
) -> np.ndarray:
    """
    Second offsets from -half_window to +half_window (inclusive) at each step.

    Raises:
        ValueError: If step is not positive or the window is negative.
    """
    if step_seconds <= 0:
        raise ValueError(f"Step must be positive, got {step_seconds}")
    if half_window_seconds < 0:
        raise ValueError(f"Half window must be non-negative, got {half_window_seconds}")

    count = math.floor(2.0 * half_window_seconds / step_seconds + 1e-9) + 1
    return -float(half_window_seconds) + step_seconds * np.arange(count, dtype=float)


def sample_ground_track(
    propagator: OrbitalPropagator,
    element_set: Any,
    center_time: datetime,
    half_window_seconds: float = DEFAULT_HALF_WINDOW_SECONDS,
    step_seconds: float = DEFAULT_STEP_SECONDS,
    radius: float = MARKER_RADIUS,
) -> list[TrajectorySample]:
    """
    Sample an object's ground track around a reference time.

    Pipeline per tick: propagate -> eci_to_ecef -> ecef_to_geodetic, then
    one vectorised geodetic -> render conversion for the whole window.

    Args:
        propagator: Propagation port.
        element_set: Opaque element set of the object.
        center_time: UTC reference time at the middle of the window.
        half_window_seconds: Span before and after center_time.
        step_seconds: Time between consecutive samples.
        radius: Render sphere radius.

    Returns:
        Chronological TrajectorySample list; 1441 samples for the
        default ±12 h window at 60 s.

    Raises:
        ValueError: If step is not positive or the window is negative.
        PropagationError: If any tick cannot be propagated.
    """
    offsets = tick_offsets(half_window_seconds, step_seconds)
    times = [center_time + timedelta(seconds=float(offset)) for offset in offsets]

    lats = np.empty(len(times))
    lons = np.empty(len(times))
    alts = np.empty(len(times))
    for i, t in enumerate(times):
        geo = propagate_geodetic(propagator, element_set, t)
        lats[i], lons[i], alts[i] = geo.lat_deg, geo.lon_deg, geo.alt_m

    xyz = geodetic_to_cartesian_array(lats, lons, radius)

    return [
        TrajectorySample(
            time=t,
            lat_deg=float(lats[i]),
            lon_deg=float(lons[i]),
            alt_km=float(alts[i]) / 1000.0,
            position=(float(xyz[i, 0]), float(xyz[i, 1]), float(xyz[i, 2])),
        )
        for i, t in enumerate(times)
    ]


def sample_trajectory(
    propagator: OrbitalPropagator,
    element_set: Any,
    center_time: datetime,
    half_window_seconds: float = DEFAULT_HALF_WINDOW_SECONDS,
    step_seconds: float = DEFAULT_STEP_SECONDS,
    radius: float = MARKER_RADIUS,
) -> list[RenderPosition]:
    """Render-space positions of sample_ground_track, in chronological order."""
    return [
        sample.position
        for sample in sample_ground_track(
            propagator, element_set, center_time,
            half_window_seconds, step_seconds, radius,
        )
    ]


class TrajectorySelection:
    """Owns the single displayed trajectory line."""

    def __init__(
        self,
        propagator: OrbitalPropagator,
        renderer: SceneRenderer,
        half_window_seconds: float = DEFAULT_HALF_WINDOW_SECONDS,
        step_seconds: float = DEFAULT_STEP_SECONDS,
        radius: float = MARKER_RADIUS,
    ):
        self._propagator = propagator
        self._renderer = renderer
        self._half_window_seconds = half_window_seconds
        self._step_seconds = step_seconds
        self._radius = radius
        self._handle: Any = None
        self.selected_name: str | None = None

    @property
    def active(self) -> Any:
        """Render handle of the displayed trajectory, or None."""
        return self._handle

    def select(
        self,
        name: str,
        element_set: Any,
        center_time: datetime,
    ) -> list[RenderPosition]:
        """
        Replace the displayed trajectory with one for a newly selected object.

        Sampling happens before the previous line is removed, so a failed
        sample leaves the current display untouched.

        Returns:
            The sampled render positions.
        """
        positions = sample_trajectory(
            self._propagator, element_set, center_time,
            self._half_window_seconds, self._step_seconds, self._radius,
        )
        self.clear()
        self._handle = self._renderer.create_trajectory_line(positions)
        self.selected_name = name
        return positions

    def clear(self) -> None:
        """Remove the displayed trajectory, if any."""
        if self._handle is not None:
            self._renderer.remove_trajectory_line(self._handle)
        self._handle = None
        self.selected_name = None
