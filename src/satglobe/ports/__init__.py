# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interfaces for the propagator, catalog source, renderer and exporters.

Adapters implement these; the domain depends only on the protocols.

    satglobe.ports.propagation   — OrbitalPropagator, PropagationResult
    satglobe.ports.orbital_data  — CatalogSource
    satglobe.ports.render        — SceneRenderer
    satglobe.ports.export        — TrajectoryExporter
"""
