# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Three-line element record parsing.

Splits published catalog text into lines and groups them into
(name, line 1, line 2) triples. Decoding each pair of element lines is
delegated to the propagator port; this module never interprets the
fixed-format columns itself.
"""
import logging
from dataclasses import dataclass
from typing import Any, Iterable

from satglobe.ports.propagation import OrbitalPropagator


_log = logging.getLogger(__name__)

LINES_PER_RECORD = 3


@dataclass(frozen=True)
class ParsedRecord:
    """One catalog object before classification."""
    name: str
    line1: str
    line2: str
    element_set: Any


def split_catalog_text(text: str) -> tuple[str, ...]:
    """Split catalog text into trimmed, non-blank lines."""
    return tuple(line.strip() for line in text.splitlines() if line.strip())


def parse_element_records(
    raw_lines: Iterable[str],
    propagator: OrbitalPropagator,
) -> list[ParsedRecord]:
    """
    Group raw catalog lines into parsed records.

    Lines are consumed in fixed groups of three from index 0. A trailing
    group with fewer than three lines is dropped. A triple the propagator
    rejects is logged and skipped without aborting the rest.

    Args:
        raw_lines: Non-blank catalog lines in published order.
        propagator: Decodes each (line1, line2) pair into an element set.

    Returns:
        ParsedRecord list in catalog order.
    """
    lines = [line.strip() for line in raw_lines]
    complete = len(lines) - len(lines) % LINES_PER_RECORD
    if complete != len(lines):
        _log.debug(
            "Dropping %d trailing line(s) that do not form a full record",
            len(lines) - complete,
        )

    records: list[ParsedRecord] = []
    for i in range(0, complete, LINES_PER_RECORD):
        name, line1, line2 = lines[i:i + LINES_PER_RECORD]
        try:
            element_set = propagator.parse_element_set(line1, line2)
        except ValueError as e:
            _log.warning("Skipping %s: %s", name, e)
            continue
        records.append(ParsedRecord(
            name=name, line1=line1, line2=line2, element_set=element_set,
        ))

    return records
