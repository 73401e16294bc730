# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
In-memory scene renderer.

Implements the SceneRenderer port by keeping marker and trajectory state
in dictionaries keyed by string handles. The viewer server serialises it
to JSON for a browser-side globe; tests use it to observe what the
domain forwarded to the renderer.
"""
from dataclasses import dataclass, field
from typing import Any, Sequence

from satglobe.domain.classification import Category, category_color
from satglobe.ports.render import SceneRenderer


@dataclass
class Marker:
    """State of one satellite marker."""
    handle: str
    category: Category
    color: int
    position: tuple[float, float, float] | None = None
    visible: bool = True


@dataclass
class TrajectoryLine:
    """A drawn trajectory polyline."""
    handle: str
    positions: list[tuple[float, float, float]] = field(default_factory=list)


def _hex_color(color: int) -> str:
    return f"#{color:06x}"


class MarkerScene(SceneRenderer):
    """Marker and trajectory state for a single scene."""

    def __init__(self) -> None:
        self.markers: dict[str, Marker] = {}
        self.trajectories: dict[str, TrajectoryLine] = {}
        self._counter = 0

    def _next_id(self, prefix: str) -> str:
        self._counter += 1
        return f"{prefix}-{self._counter}"

    def create_marker(self, category: Category) -> str:
        handle = self._next_id("marker")
        self.markers[handle] = Marker(
            handle=handle, category=category, color=category_color(category),
        )
        return handle

    def set_position(self, handle: Any, position: tuple[float, float, float]) -> None:
        """Raises KeyError for an unknown handle."""
        self.markers[handle].position = tuple(position)

    def set_visible(self, handle: Any, visible: bool) -> None:
        """Raises KeyError for an unknown handle."""
        self.markers[handle].visible = visible

    def create_trajectory_line(
        self, positions: Sequence[tuple[float, float, float]],
    ) -> str:
        handle = self._next_id("trajectory")
        self.trajectories[handle] = TrajectoryLine(
            handle=handle, positions=[tuple(p) for p in positions],
        )
        return handle

    def remove_trajectory_line(self, handle: Any) -> None:
        """Raises KeyError for an unknown handle."""
        del self.trajectories[handle]

    def snapshot(
        self,
        labels: dict[str, str] | None = None,
        visible_only: bool = True,
        digits: int = 4,
    ) -> dict[str, Any]:
        """
        JSON-serialisable view of the scene.

        Args:
            labels: Optional marker handle → display name.
            visible_only: Omit hidden markers.
            digits: Rounding applied to coordinates.
        """
        labels = labels or {}
        markers = []
        for marker in self.markers.values():
            if visible_only and not marker.visible:
                continue
            markers.append({
                "id": marker.handle,
                "name": labels.get(marker.handle, ""),
                "category": marker.category.value,
                "color": _hex_color(marker.color),
                "visible": marker.visible,
                "position": (
                    [round(c, digits) for c in marker.position]
                    if marker.position is not None else None
                ),
            })
        trajectories = [
            {
                "id": line.handle,
                "positions": [[round(c, digits) for c in p] for p in line.positions],
            }
            for line in self.trajectories.values()
        ]
        return {"markers": markers, "trajectories": trajectories}
