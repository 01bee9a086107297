"""
Read-only catalog endpoints.

Endpoints:
- GET /pricing-structures: tariffs accepted by ``pricingStructure``
- GET /scenarios: scenario keys with their solar and load multipliers
"""

from __future__ import annotations

from fastapi import APIRouter

from ...simulation import SCENARIOS, list_pricing_structures
from ..schemas import catalog as catalog_schemas

router = APIRouter(prefix="/api", tags=["catalog"])


@router.get("/pricing-structures", response_model=list[catalog_schemas.PricingStructureInfo])
def list_pricing() -> list[catalog_schemas.PricingStructureInfo]:
    return [catalog_schemas.PricingStructureInfo(**entry) for entry in list_pricing_structures()]


@router.get("/scenarios", response_model=list[catalog_schemas.ScenarioInfo])
def list_scenarios() -> list[catalog_schemas.ScenarioInfo]:
    return [
        catalog_schemas.ScenarioInfo(
            key=scenario.key,
            name=scenario.name,
            solar_multiplier=scenario.solar_multiplier,
            load_multiplier=scenario.load_multiplier,
        )
        for scenario in SCENARIOS.values()
    ]
