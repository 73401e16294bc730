# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interface for the scene renderer.

Handles are opaque to the domain; it only creates them and forwards
positions and visibility to them.
"""
from typing import Any, Protocol, Sequence, runtime_checkable

from satglobe.domain.classification import Category


@runtime_checkable
class SceneRenderer(Protocol):
    """Port for markers and trajectory lines in the 3D scene."""

    def create_marker(self, category: Category) -> Any:
        """Create a marker coloured for the category. Returns its handle."""
        ...

    def set_position(self, handle: Any, position: tuple[float, float, float]) -> None:
        """Move a marker to a render-space position."""
        ...

    def set_visible(self, handle: Any, visible: bool) -> None:
        """Show or hide a marker without destroying it."""
        ...

    def create_trajectory_line(
        self, positions: Sequence[tuple[float, float, float]],
    ) -> Any:
        """Draw a polyline through render-space positions. Returns its handle."""
        ...

    def remove_trajectory_line(self, handle: Any) -> None:
        """Remove a previously drawn trajectory line."""
        ...
