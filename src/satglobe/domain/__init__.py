# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Domain layer: catalog cache, record parsing, classification, coordinate
conversion, tracked-object registry, refresh loop and trajectory sampling.

No I/O here; external systems are reached through satglobe.ports.
"""
