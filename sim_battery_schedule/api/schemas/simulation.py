"""
Simulation schemas for the analysis endpoints.

The request body is the same settings record the CLI reads from JSON files,
so a scenario file can be posted unchanged. The response mirrors the result
record produced by SimulationApplication: a mapping from the scenario key
to one ScenarioResult.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ...scenario_setup import AnalysisSettings


class AnalysisRequest(AnalysisSettings):
    """
    Request schema for a one-day analysis.

    Every field is optional; omitted fields take the engine defaults
    (10 kWh battery, 95%/94% ledgers, C-rate 0.5, normal pricing).

    Example:
        ```python
        # POST /api/analysis
        {
            "batteryCapacity": 10,
            "pricingStructure": "simpleCheaper",
            "highSolar": true,
            "seed": 7
        }
        ```
    """


class ScenarioResult(BaseModel):
    """
    Result of one analyzed scenario.

    Attributes:
        name: Display name of the scenario.
        pricing_structure: Canonical key of the tariff used.
        strategy: Dispatch strategy ("optimized" or "heuristic").
        hourly_data: 24 hour records (prices, flows, battery level, action).
        summary: Totals, thresholds, schedule windows and zone lists. Empty
            zone lists are reported as the string "None".
        seed: Seed of the price jitter, when one was set.
        output_dir: Report directory, when the run was saved.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    pricing_structure: str = Field(alias="pricingStructure")
    strategy: str = "optimized"
    hourly_data: List[Dict[str, Any]] = Field(alias="hourlyData")
    summary: Dict[str, Any]
    seed: Optional[int] = None
    output_dir: Optional[str] = Field(default=None, alias="outputDir")
