# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
CelesTrak adapter: fetches published three-line element catalogs.

External dependency (urllib) is confined to this layer.

Data source:
    CelesTrak GP API — https://celestrak.org/NORAD/elements/gp.php
    Groups: ACTIVE, STATIONS, GPS-OPS, STARLINK, ONEWEB, WEATHER, etc.
"""
import http.client
import logging
import urllib.error
import urllib.request
from urllib.parse import quote

from satglobe.ports.orbital_data import CatalogSource


_log = logging.getLogger(__name__)

BASE_URL = "https://celestrak.org/NORAD/elements/gp.php"
DEFAULT_GROUP = "active"
_NO_DATA = "No GP data found"


class CelesTrakTleSource(CatalogSource):
    """
    Fetches a CelesTrak group in three-line TLE format.

    Rate limiting: CelesTrak updates at most every 2 hours; callers are
    expected to cache (see ElementSetCache).

    Args:
        group: CelesTrak group name.
        base_url: CelesTrak GP API URL.
        timeout: HTTP request timeout in seconds.
    """

    def __init__(
        self,
        group: str = DEFAULT_GROUP,
        base_url: str = BASE_URL,
        timeout: float = 30,
    ):
        self._group = group
        self._base_url = base_url
        self._timeout = timeout

    @property
    def url(self) -> str:
        return f"{self._base_url}?GROUP={quote(self._group)}&FORMAT=tle"

    def fetch_catalog_text(self) -> str:
        """Fetch the group's TLE text. Returns '' when CelesTrak has no data."""
        req = urllib.request.Request(self.url, headers={"User-Agent": "satglobe/1.0"})
        try:
            with urllib.request.urlopen(req, timeout=self._timeout) as response:
                text = response.read().decode("utf-8")
        except urllib.error.HTTPError as e:
            raise ConnectionError(f"CelesTrak API error {e.code}: {e.reason}") from e
        except urllib.error.URLError as e:
            raise ConnectionError(f"CelesTrak connection failed: {e.reason}") from e
        except http.client.HTTPException as e:
            raise ConnectionError(f"CelesTrak response incomplete: {e!r}") from e
        except UnicodeDecodeError as e:
            raise ConnectionError(f"CelesTrak response not UTF-8: {e}") from e

        if text.strip() == _NO_DATA:
            _log.warning("CelesTrak has no data for group %s", self._group)
            return ""
        return text
