# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
CSV trajectory exporter.

Exports a sampled ground track as CSV, one row per tick, with geodetic
and render-space coordinates.
External dependencies (csv, file I/O) are confined to this adapter.
"""
import csv

from satglobe.ports.export import TrajectoryExporter
from satglobe.domain.trajectory import TrajectorySample


_HEADER = ['name', 'time', 'lat_deg', 'lon_deg', 'alt_km', 'x', 'y', 'z']


class CsvTrajectoryExporter(TrajectoryExporter):
    """Exports a ground track to CSV."""

    def export(
        self,
        samples: list[TrajectorySample],
        path: str,
        name: str = "",
    ) -> int:
        with open(path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(_HEADER)
            for sample in samples:
                x, y, z = sample.position
                writer.writerow([
                    name,
                    sample.time.isoformat(),
                    f'{sample.lat_deg:.6f}',
                    f'{sample.lon_deg:.6f}',
                    f'{sample.alt_km:.3f}',
                    f'{x:.6f}',
                    f'{y:.6f}',
                    f'{z:.6f}',
                ])

        return len(samples)
