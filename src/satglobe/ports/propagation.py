# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interface for the orbital propagator.

The propagator owns element-set decoding and SGP4/SDP4 math. The domain
treats element sets as opaque and only consumes ECI positions plus the
sidereal angle needed to rotate them into the Earth-fixed frame.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol, runtime_checkable


class PropagationError(RuntimeError):
    """Raised when a position cannot be computed for a given time."""


@dataclass(frozen=True)
class PropagationResult:
    """ECI position (m) and Greenwich sidereal angle (rad) at one instant."""
    position_eci: tuple[float, float, float]
    sidereal_time_rad: float


@runtime_checkable
class OrbitalPropagator(Protocol):
    """Port for decoding element sets and propagating them in time."""

    def parse_element_set(self, line1: str, line2: str) -> Any:
        """
        Decode two fixed-format element lines.

        Raises:
            ValueError: If the lines are malformed.
        """
        ...

    def propagate(self, element_set: Any, time: datetime) -> PropagationResult:
        """
        Propagate an element set to a UTC instant.

        Raises:
            PropagationError: If the propagator reports an error.
        """
        ...
