"""
API route modules.

- simulation: daily analysis endpoints
- catalog: read-only listings of pricing structures and scenarios

All routers are prefixed with /api.
"""

from __future__ import annotations

from .catalog import router as catalog_router
from .simulation import router as simulation_router

__all__ = [
    "simulation_router",
    "catalog_router",
]
