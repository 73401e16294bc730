# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interface for trajectory export.

Adapters implement this to write sampled ground tracks in various formats
(CSV, GeoJSON, etc.).
"""
from typing import Protocol, runtime_checkable

from satglobe.domain.trajectory import TrajectorySample


@runtime_checkable
class TrajectoryExporter(Protocol):
    """Port for exporting a sampled trajectory to file."""

    def export(
        self,
        samples: list[TrajectorySample],
        path: str,
        name: str = "",
    ) -> int:
        """
        Export trajectory samples to a file.

        Args:
            samples: Chronological samples from sample_ground_track.
            path: Output file path.
            name: Object name recorded in the output.

        Returns:
            Number of samples exported.
        """
        ...
