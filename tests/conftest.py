# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Shared test doubles: a deterministic propagator and catalog sources.

FakePropagator places every object on a circular equatorial orbit at
400 km altitude with zero sidereal angle, so geodetic latitude is 0 and
longitude advances linearly with time from EPOCH.
"""
import math
import threading
from dataclasses import dataclass
from datetime import datetime, timezone

import pytest

from satglobe.ports.propagation import PropagationError, PropagationResult


EPOCH = datetime(2026, 3, 20, 12, 0, 0, tzinfo=timezone.utc)
R_EQUATOR = 6_378_137.0
ALTITUDE_M = 400_000.0
PERIOD_S = 5400.0


@dataclass(frozen=True)
class FakeElements:
    satnum: str


class FakePropagator:
    """Decodes '1 NNNNN' / '2 NNNNN' line pairs; fails for chosen satnums."""

    def __init__(self, failing=()):
        self.failing = set(failing)
        self.propagate_calls = 0

    def parse_element_set(self, line1, line2):
        if not (line1.startswith("1 ") and line2.startswith("2 ")):
            raise ValueError("Element lines must start with '1 ' and '2 '")
        return FakeElements(satnum=line1.split()[1])

    def propagate(self, element_set, time):
        self.propagate_calls += 1
        if element_set.satnum in self.failing:
            raise PropagationError(f"decayed: {element_set.satnum}")
        angle = 2 * math.pi * (time - EPOCH).total_seconds() / PERIOD_S
        r = R_EQUATOR + ALTITUDE_M
        return PropagationResult(
            position_eci=(r * math.cos(angle), r * math.sin(angle), 0.0),
            sidereal_time_rad=0.0,
        )


class FakeSource:
    """Catalog source returning fixed text, or raising a given error."""

    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.calls = 0

    def fetch_catalog_text(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.text


class BlockingSource(FakeSource):
    """Blocks inside fetch until released, to hold a fetch in flight."""

    def __init__(self, text=""):
        super().__init__(text)
        self.entered = threading.Event()
        self.release = threading.Event()

    def fetch_catalog_text(self):
        self.entered.set()
        self.release.wait(timeout=5)
        return super().fetch_catalog_text()


def catalog_text(names):
    """Three-line catalog text with satnums 00001, 00002, ..."""
    lines = []
    for i, name in enumerate(names, start=1):
        lines.extend([name, f"1 {i:05d}U 98067A", f"2 {i:05d}  51.6400"])
    return "\n".join(lines) + "\n"


SAMPLE_NAMES = [
    "ISS (ZARYA)",
    "STARLINK-1007",
    "INTELSAT 901",
    "USA 245",
    "CALIPSO",
]


@pytest.fixture
def propagator():
    return FakePropagator()


@pytest.fixture
def make_propagator():
    return FakePropagator


@pytest.fixture
def make_source():
    return FakeSource


@pytest.fixture
def make_blocking_source():
    return BlockingSource


@pytest.fixture
def make_catalog_text():
    return catalog_text


@pytest.fixture
def sample_text():
    return catalog_text(SAMPLE_NAMES)


@pytest.fixture
def epoch():
    return EPOCH
