# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interface for external orbital catalog sources.

Adapters handle the actual HTTP/API calls.
"""
from typing import Protocol, runtime_checkable


@runtime_checkable
class CatalogSource(Protocol):
    """Port for fetching a published three-line element catalog."""

    def fetch_catalog_text(self) -> str:
        """
        Fetch the raw catalog text (name, line 1, line 2 per object).

        Raises:
            ConnectionError: On transport errors or non-success responses.
        """
        ...
