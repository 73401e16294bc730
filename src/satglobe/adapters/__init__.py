# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Adapters for catalog fetching, propagation, rendering and export.

External dependencies (urllib, sgp4, http.server, csv, json) are confined
to this layer. sgp4 is imported lazily by SGP4Propagator.
"""
from satglobe.adapters.celestrak import CelesTrakTleSource
from satglobe.adapters.sgp4_propagator import SGP4Propagator
from satglobe.adapters.marker_scene import MarkerScene
from satglobe.adapters.csv_exporter import CsvTrajectoryExporter
from satglobe.adapters.geojson_exporter import GeoJsonTrajectoryExporter
from satglobe.adapters.viewer_server import create_viewer_server

__all__ = [
    "CelesTrakTleSource",
    "CsvTrajectoryExporter",
    "GeoJsonTrajectoryExporter",
    "MarkerScene",
    "SGP4Propagator",
    "create_viewer_server",
]
