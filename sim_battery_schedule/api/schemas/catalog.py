from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PricingStructureInfo(BaseModel):
    """Selectable tariff."""
    key: str
    name: str


class ScenarioInfo(BaseModel):
    """Selectable demand/solar scenario."""
    model_config = ConfigDict(populate_by_name=True)

    key: str
    name: str
    solar_multiplier: float = Field(alias="solarMultiplier")
    load_multiplier: float = Field(alias="loadMultiplier")
