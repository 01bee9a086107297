"""
Pydantic schemas for API request/response validation.

- simulation: analysis request and result record
- catalog: pricing structure and scenario listings
"""

from __future__ import annotations

from .catalog import PricingStructureInfo, ScenarioInfo
from .simulation import AnalysisRequest, ScenarioResult

__all__ = [
    "AnalysisRequest",
    "ScenarioResult",
    "PricingStructureInfo",
    "ScenarioInfo",
]
