# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Time-gated element catalog cache.

Holds the last successfully fetched catalog and refetches at most once
per refresh interval. A failed fetch returns an empty catalog and leaves
the stored catalog and its timestamp untouched, so the next call retries
immediately instead of waiting out the interval.

Only one fetch runs at a time: callers arriving while a fetch is in
flight wait for it and share its result.
"""
import logging
import threading
from concurrent.futures import Future
from dataclasses import dataclass
from datetime import datetime, timezone

from satglobe.domain.constants import CATALOG_REFRESH_INTERVAL_MS
from satglobe.domain.element_records import split_catalog_text
from satglobe.ports.orbital_data import CatalogSource


_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CachedCatalog:
    """Raw catalog lines and the epoch (ms) they were fetched at."""
    raw_lines: tuple[str, ...] = ()
    fetched_at_ms: int | None = None

    @property
    def is_empty(self) -> bool:
        return not self.raw_lines


def epoch_millis(dt: datetime) -> int:
    """UTC datetime → integer milliseconds since the Unix epoch (naive = UTC)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(round(dt.timestamp() * 1000))


class ElementSetCache:
    """
    Fetch-and-cache of the full catalog, gated by a refresh interval.

    Args:
        source: Catalog source port.
        refresh_interval_ms: Minimum age before a cached catalog is refetched.
    """

    def __init__(
        self,
        source: CatalogSource,
        refresh_interval_ms: int = CATALOG_REFRESH_INTERVAL_MS,
    ):
        if refresh_interval_ms <= 0:
            raise ValueError(
                f"Refresh interval must be positive, got {refresh_interval_ms}"
            )
        self._source = source
        self._refresh_interval_ms = refresh_interval_ms
        self._catalog = CachedCatalog()
        self._lock = threading.Lock()
        self._in_flight: Future | None = None
        self.fetch_count = 0

    @property
    def catalog(self) -> CachedCatalog:
        """Last successfully fetched catalog (empty before the first fetch)."""
        return self._catalog

    @property
    def refresh_interval_ms(self) -> int:
        return self._refresh_interval_ms

    def is_fresh(self, now_ms: int) -> bool:
        fetched_at = self._catalog.fetched_at_ms
        return fetched_at is not None and now_ms - fetched_at < self._refresh_interval_ms

    def get_catalog(self, now_ms: int) -> CachedCatalog:
        """
        Return the cached catalog, fetching it if missing or stale.

        Args:
            now_ms: Current time in epoch milliseconds.

        Returns:
            The fresh catalog, or an empty catalog if the fetch failed.
        """
        with self._lock:
            if self.is_fresh(now_ms):
                return self._catalog
            future = self._in_flight
            leader = future is None
            if leader:
                future = Future()
                self._in_flight = future

        if not leader:
            _log.debug("Catalog fetch already in flight, waiting for it")
            return future.result()

        try:
            catalog = self._fetch(now_ms)
        except Exception as e:
            future.set_exception(e)
            raise
        else:
            future.set_result(catalog)
            return catalog
        finally:
            with self._lock:
                self._in_flight = None

    def invalidate(self) -> None:
        """Drop the cached catalog so the next get_catalog fetches."""
        with self._lock:
            self._catalog = CachedCatalog()

    def _fetch(self, now_ms: int) -> CachedCatalog:
        self.fetch_count += 1
        try:
            text = self._source.fetch_catalog_text()
        except OSError as e:  # ConnectionError, socket timeouts
            _log.warning("Catalog fetch failed: %s", e)
            return CachedCatalog()

        catalog = CachedCatalog(raw_lines=split_catalog_text(text), fetched_at_ms=now_ms)
        self._catalog = catalog
        _log.info("Fetched catalog: %d lines", len(catalog.raw_lines))
        return catalog
