"""
Configuration boundary of the daily battery simulation.

Loads analysis settings from a mapping or JSON file, validates them with
pydantic and turns them into engine objects. Anything that reaches the
engine from here is numerically valid; rejected input raises
:class:`InvalidScenarioError`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .config import get_default_seed
from .simulation import (
    SCENARIOS,
    BatteryConfiguration,
    DispatchStrategy,
    EnergySystemConfig,
    IdlePolicy,
    PricingStructure,
    Scenario,
    build_pricing_structure,
    select_scenario_key,
)
from .simulation.prices import canonical_pricing_key

DEFAULT_SCENARIO_PATH = Path(__file__).resolve().parent / "examples" / "default_day.json"


class InvalidScenarioError(ValueError):
    """Raised when analysis settings fail validation."""


class AnalysisSettings(BaseModel):
    """
    Validated input record of one daily analysis.

    Field names are snake_case; the camelCase aliases are the wire form used
    by JSON files and the HTTP API. Both are accepted. Numbers must be
    finite and efficiency curve steps are at least 0.01.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid", allow_inf_nan=False)

    battery_capacity: float = Field(10.0, gt=0, alias="batteryCapacity")
    charging_efficiency: float = Field(0.95, gt=0, le=1, alias="chargingEfficiency")
    discharging_efficiency: float = Field(0.95, gt=0, le=1, alias="dischargingEfficiency")
    charging_efficiency_2: float = Field(0.94, gt=0, le=1, alias="chargingEfficiency2")
    discharging_efficiency_2: float = Field(0.94, gt=0, le=1, alias="dischargingEfficiency2")
    charging_c_rate: float = Field(0.5, gt=0, le=1, alias="chargingCRate")
    discharging_c_rate: float = Field(0.5, gt=0, le=1, alias="dischargingCRate")
    high_solar: bool = Field(False, alias="highSolar")
    high_load: bool = Field(False, alias="highLoad")
    no_solar_and_load: bool = Field(False, alias="noSolarAndLoad")
    pricing_structure: str = Field("normal", alias="pricingStructure")
    scenario: Optional[str] = Field(None, description="Explicit scenario key overriding the flags")
    seed: Optional[int] = Field(None, ge=0)
    initial_soc_fraction: float = Field(0.0, ge=0, le=1, alias="initialSocFraction")
    idle_policy: IdlePolicy = Field(IdlePolicy.HOLD, alias="idlePolicy")
    charging_efficiency_step: float = Field(0.1, ge=0.01, alias="chargingEfficiencyStep")
    discharging_efficiency_step: float = Field(0.2, ge=0.01, alias="dischargingEfficiencyStep")
    charge_target: float = Field(1.0, ge=0, le=1, alias="chargeTarget")
    strategy: DispatchStrategy = DispatchStrategy.OPTIMIZED

    @field_validator("pricing_structure")
    @classmethod
    def _known_pricing_structure(cls, value: str) -> str:
        return canonical_pricing_key(value)

    @field_validator("scenario")
    @classmethod
    def _known_scenario(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in SCENARIOS:
            known = ", ".join(SCENARIOS)
            raise ValueError(f"Unknown scenario '{value}' (known: {known})")
        return value

    @property
    def scenario_key(self) -> str:
        if self.scenario is not None:
            return self.scenario
        return select_scenario_key(self.high_solar, self.high_load, self.no_solar_and_load)


def load_scenario_data(source: str | Path | Mapping[str, Any] | None = None) -> dict[str, Any]:
    """
    Load settings data from JSON or return the provided mapping.

    Args:
        source: Path to a JSON file, mapping, or None for the bundled default.

    Returns:
        Dictionary of raw (unvalidated) settings.
    """
    if source is None:
        return json.loads(DEFAULT_SCENARIO_PATH.read_text(encoding="utf-8"))
    if isinstance(source, (str, Path)):
        return json.loads(Path(source).read_text(encoding="utf-8"))
    return dict(source)


def parse_settings(
    source: AnalysisSettings | str | Path | Mapping[str, Any] | None = None,
) -> AnalysisSettings:
    """
    Validate raw settings.

    Raises:
        InvalidScenarioError: One message line per offending field.
    """
    if isinstance(source, AnalysisSettings):
        return source
    data = load_scenario_data(source)
    try:
        return AnalysisSettings.model_validate(data)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'settings'}: {error['msg']}"
            for error in exc.errors()
        )
        raise InvalidScenarioError(f"Invalid analysis settings: {problems}") from exc


def build_energy_config(settings: AnalysisSettings) -> EnergySystemConfig:
    return EnergySystemConfig(
        capacity_kwh=settings.battery_capacity,
        charging_c_rate=settings.charging_c_rate,
        discharging_c_rate=settings.discharging_c_rate,
        ledgers=(
            BatteryConfiguration(
                "battery_1",
                settings.charging_efficiency,
                settings.discharging_efficiency,
            ),
            BatteryConfiguration(
                "battery_2",
                settings.charging_efficiency_2,
                settings.discharging_efficiency_2,
            ),
        ),
        initial_soc_fraction=settings.initial_soc_fraction,
        idle_policy=settings.idle_policy,
        charging_efficiency_step=settings.charging_efficiency_step,
        discharging_efficiency_step=settings.discharging_efficiency_step,
    )


def build_scenario(settings: AnalysisSettings) -> Scenario:
    return SCENARIOS[settings.scenario_key]


def resolve_seed(settings: AnalysisSettings) -> int | None:
    return settings.seed if settings.seed is not None else get_default_seed()


def build_rng(settings: AnalysisSettings) -> np.random.Generator:
    """Random source for price jitter; seeded when a seed is configured."""
    return np.random.default_rng(resolve_seed(settings))


def build_pricing(settings: AnalysisSettings, rng: np.random.Generator) -> PricingStructure:
    return build_pricing_structure(settings.pricing_structure, rng=rng)
