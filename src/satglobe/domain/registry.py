# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Registry of tracked satellites and their render handles.

Population parses and classifies a catalog once per session and creates
exactly one render handle per entry. Until reset() the registry keeps
returning the same objects, so repeated tracking toggles never duplicate
markers.
"""
import logging
from collections import Counter
from dataclasses import dataclass
from typing import Any, Callable

from satglobe.domain.catalog_cache import CachedCatalog
from satglobe.domain.classification import (
    Category,
    ClassificationRule,
    DEFAULT_RULES,
    classify,
)
from satglobe.domain.element_records import parse_element_records
from satglobe.ports.propagation import OrbitalPropagator
from satglobe.ports.render import SceneRenderer


_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SatelliteEntry:
    """A parsed catalog object with its display category."""
    name: str
    element_set: Any
    category: Category


@dataclass
class TrackedObject:
    """A satellite entry bound to a marker in the scene."""
    entry: SatelliteEntry
    render_handle: Any
    visible: bool = True

    @property
    def name(self) -> str:
        return self.entry.name


class TrackedObjectRegistry:
    """
    Holds the live set of tracked satellites for a session.

    Args:
        propagator: Decodes element lines during population.
        renderer: Receives visibility changes; also the default source
            of render handles.
        rules: Ordered classification rules.
    """

    def __init__(
        self,
        propagator: OrbitalPropagator,
        renderer: SceneRenderer | None = None,
        rules: tuple[ClassificationRule, ...] = DEFAULT_RULES,
    ):
        self._propagator = propagator
        self._renderer = renderer
        self._rules = rules
        self._objects: list[TrackedObject] = []
        self._populated = False

    @property
    def objects(self) -> list[TrackedObject]:
        return list(self._objects)

    @property
    def populated(self) -> bool:
        return self._populated

    def __len__(self) -> int:
        return len(self._objects)

    def populate(
        self,
        catalog: CachedCatalog,
        create_render_handle: Callable[[Category], Any] | None = None,
    ) -> list[TrackedObject]:
        """
        Build tracked objects from a catalog, once per session.

        Each entry is classified once and gets exactly one render handle.
        Once populated, later calls return the existing objects without
        creating handles; call reset() to load a new catalog. An empty
        catalog leaves the registry unpopulated so a later call can retry.
        If the factory raises, handles created so far are hidden and the
        error propagates with the registry still unpopulated.

        Args:
            catalog: Catalog from ElementSetCache.
            create_render_handle: Factory called with each entry's category.
                Defaults to the renderer's create_marker.

        Returns:
            Tracked objects in catalog order.
        """
        if self._populated:
            return self.objects
        if catalog.is_empty:
            _log.info("Catalog is empty, nothing to track yet")
            return self.objects

        if create_render_handle is None:
            if self._renderer is None:
                raise ValueError("No render handle factory and no renderer configured")
            create_render_handle = self._renderer.create_marker

        objects: list[TrackedObject] = []
        try:
            for record in parse_element_records(catalog.raw_lines, self._propagator):
                category = classify(record.name, self._rules)
                entry = SatelliteEntry(
                    name=record.name,
                    element_set=record.element_set,
                    category=category,
                )
                objects.append(TrackedObject(
                    entry=entry,
                    render_handle=create_render_handle(category),
                ))
        except Exception:
            # Orphaned handles stay hidden; the registry remains unpopulated.
            _log.warning(
                "Render handle creation failed after %d objects", len(objects),
            )
            if self._renderer is not None:
                for tracked in objects:
                    self._renderer.set_visible(tracked.render_handle, False)
            raise

        self._objects = objects
        self._populated = True
        _log.info("Tracking %d objects", len(objects))
        return self.objects

    def reset(self) -> None:
        """Forget all tracked objects (explicit catalog reload)."""
        self._objects = []
        self._populated = False

    def set_visible(self, tracked: TrackedObject, visible: bool) -> None:
        """Toggle visibility without destroying the render handle."""
        tracked.visible = visible
        if self._renderer is not None:
            self._renderer.set_visible(tracked.render_handle, visible)

    def set_all_visible(self, visible: bool) -> None:
        for tracked in self._objects:
            self.set_visible(tracked, visible)

    def find(self, name: str) -> TrackedObject | None:
        """First object whose name matches exactly, else case-insensitively."""
        for tracked in self._objects:
            if tracked.name == name:
                return tracked
        folded = name.strip().casefold()
        for tracked in self._objects:
            if tracked.name.casefold() == folded:
                return tracked
        return None

    def counts_by_category(self) -> dict[Category, int]:
        counts = Counter(tracked.entry.category for tracked in self._objects)
        return {category: counts.get(category, 0) for category in Category}
