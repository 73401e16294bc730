# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
SGP4 adapter: implements the propagation port with the sgp4 library.

External dependency (sgp4) is confined to this layer and imported lazily.

TLE mean elements are SGP4-specific, NOT pure Keplerian; the sgp4
library provides proper TEME state vectors. Positions are returned in
meters together with the Greenwich sidereal angle for the same instant.
"""
from datetime import datetime, timezone
from typing import Any

from satglobe.ports.propagation import (
    OrbitalPropagator,
    PropagationError,
    PropagationResult,
)


def _require_sgp4():
    """Import sgp4 lazily; raise clear error if not installed."""
    try:
        from sgp4.api import Satrec, SGP4_ERRORS, jday
        from sgp4.propagation import gstime
    except ImportError:
        raise ImportError(
            "sgp4 is required for orbit propagation. "
            "Install with: pip install satglobe[live]"
        ) from None
    return Satrec, SGP4_ERRORS, jday, gstime


def _as_utc(dt: datetime) -> datetime:
    """Ensure datetime is timezone-aware (treat naive as UTC)."""
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def _datetime_to_jd(jday_fn, dt: datetime) -> tuple[float, float]:
    dt = _as_utc(dt).astimezone(timezone.utc)
    return jday_fn(dt.year, dt.month, dt.day, dt.hour, dt.minute,
                   dt.second + dt.microsecond / 1e6)


class SGP4Propagator(OrbitalPropagator):
    """Decodes TLE line pairs into Satrec objects and propagates them."""

    def __init__(self):
        self._Satrec, self._errors, self._jday, self._gstime = _require_sgp4()

    def parse_element_set(self, line1: str, line2: str) -> Any:
        line1 = line1.strip()
        line2 = line2.strip()
        if not (line1.startswith("1 ") and line2.startswith("2 ")):
            raise ValueError("Element lines must start with '1 ' and '2 '")
        try:
            satrec = self._Satrec.twoline2rv(line1, line2)
        except (ValueError, IndexError) as e:
            raise ValueError(f"Malformed element lines: {e}") from e
        if satrec.error != 0:
            raise ValueError(
                f"SGP4 rejected elements: {self._errors.get(satrec.error, satrec.error)}"
            )
        return satrec

    def propagate(self, element_set: Any, time: datetime) -> PropagationResult:
        jd, fr = _datetime_to_jd(self._jday, time)
        error_code, position_km, _ = element_set.sgp4(jd, fr)
        if error_code != 0:
            raise PropagationError(
                f"SGP4 propagation error {error_code} for catalog number "
                f"{element_set.satnum}: {self._errors.get(error_code, 'unknown')}"
            )

        pos_m = (position_km[0] * 1000, position_km[1] * 1000, position_km[2] * 1000)
        return PropagationResult(
            position_eci=pos_m,
            sidereal_time_rad=self._gstime(jd + fr),
        )
