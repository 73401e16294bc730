# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
GeoJSON trajectory exporter.

Exports a sampled ground track as a GeoJSON Feature with a
MultiLineString geometry, split wherever the track crosses the
antimeridian. Coordinates follow RFC 7946 order: [lon, lat, alt].
External dependencies (json, file I/O) are confined to this adapter.
"""
import json

from satglobe.ports.export import TrajectoryExporter
from satglobe.domain.trajectory import TrajectorySample


def split_at_antimeridian(
    samples: list[TrajectorySample],
) -> list[list[TrajectorySample]]:
    """Split a track into segments with no longitude jump over 180°."""
    segments: list[list[TrajectorySample]] = []
    current: list[TrajectorySample] = []
    for sample in samples:
        if current and abs(sample.lon_deg - current[-1].lon_deg) > 180.0:
            segments.append(current)
            current = []
        current.append(sample)
    if current:
        segments.append(current)
    return segments


class GeoJsonTrajectoryExporter(TrajectoryExporter):
    """Exports a ground track as a GeoJSON Feature."""

    def export(
        self,
        samples: list[TrajectorySample],
        path: str,
        name: str = "",
    ) -> int:
        lines = [
            [
                [round(s.lon_deg, 6), round(s.lat_deg, 6), round(s.alt_km, 3)]
                for s in segment
            ]
            for segment in split_at_antimeridian(samples)
        ]

        feature = {
            'type': 'Feature',
            'geometry': {
                'type': 'MultiLineString',
                'coordinates': lines,
            },
            'properties': {
                'name': name,
                'start': samples[0].time.isoformat() if samples else None,
                'end': samples[-1].time.isoformat() if samples else None,
                'samples': len(samples),
            },
        }

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(feature, f, indent=2, ensure_ascii=False)

        return len(samples)
