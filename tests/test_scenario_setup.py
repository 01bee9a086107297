from __future__ import annotations

import json

import pytest

from sim_battery_schedule.scenario_setup import (
    AnalysisSettings,
    InvalidScenarioError,
    build_energy_config,
    load_scenario_data,
    parse_settings,
)
from sim_battery_schedule.simulation import IdlePolicy


def test_bundled_default_is_valid() -> None:
    settings = parse_settings()
    assert settings.seed == 123
    assert settings.scenario_key == "lowSolarLowLoad"
    assert settings.idle_policy is IdlePolicy.HOLD


def test_camel_and_snake_case_are_equivalent() -> None:
    camel = parse_settings({"batteryCapacity": 13.5, "highLoad": True})
    snake = parse_settings({"battery_capacity": 13.5, "high_load": True})
    assert camel == snake
    assert camel.scenario_key == "lowSolarHighLoad"


def test_pricing_alias_is_canonicalized() -> None:
    settings = parse_settings({"pricingStructure": "negativeImportandExportPrice"})
    assert settings.pricing_structure == "negativeImportAndExportPrice"


def test_explicit_scenario_overrides_flags() -> None:
    settings = parse_settings({"highSolar": True, "scenario": "noSolar"})
    assert settings.scenario_key == "noSolar"


@pytest.mark.parametrize(
    "data",
    [
        {"batteryCapacity": 0},
        {"chargingEfficiency": 1.2},
        {"chargingCRate": 0},
        {"pricingStructure": "unknown"},
        {"scenario": "midnightSun"},
        {"idlePolicy": "sell_everything"},
        {"unexpected": 1},
        {"batteryCapacity": "inf"},
        {"batteryCapacity": float("nan")},
        {"chargingEfficiencyStep": 1e-320},
        {"dischargingEfficiencyStep": 0.001},
        {"strategy": "greedy"},
    ],
)
def test_invalid_settings_raise_invalid_scenario_error(data: dict) -> None:
    with pytest.raises(InvalidScenarioError):
        parse_settings(data)


def test_settings_load_from_json_file(tmp_path) -> None:
    path = tmp_path / "day.json"
    path.write_text(json.dumps({"batteryCapacity": 5, "idlePolicy": "grid_reconcile"}))

    assert load_scenario_data(path) == {"batteryCapacity": 5, "idlePolicy": "grid_reconcile"}
    settings = parse_settings(str(path))
    config = build_energy_config(settings)
    assert config.capacity_kwh == 5
    assert config.idle_policy is IdlePolicy.GRID_RECONCILE
    assert [b.charging_efficiency for b in config.ledgers] == [0.95, 0.94]


def test_model_instance_passes_through() -> None:
    settings = AnalysisSettings(battery_capacity=4.0)
    assert parse_settings(settings) is settings
