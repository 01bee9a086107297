from __future__ import annotations

import pytest

from sim_battery_schedule.application import SimulationApplication
from sim_battery_schedule.simulation import (
    Action,
    DailyScheduleAnalyzer,
    EnergySystemConfig,
    Zone,
)


def test_simple_cheaper_day_charges_at_night_only(simple_cheaper_series) -> None:
    analysis = DailyScheduleAnalyzer(EnergySystemConfig()).analyze(simple_cheaper_series)

    charging_hours = [h.hour for h in analysis.hours if h.action is Action.OPTIMAL_CHARGING]
    assert set(charging_hours) <= {0, 1, 2, 3}
    assert sum(h.battery_charge for h in analysis.hours) == pytest.approx(10.0)
    # Zero export price: no discharging pays off.
    assert all(h.battery_discharge == 0.0 for h in analysis.hours)
    assert analysis.hours[-1].battery_level == pytest.approx(10.0)
    assert analysis.expensive_import_zones == [Zone(4, 23)]
    assert analysis.export_price_zones == [Zone(0, 23)]
    assert analysis.cheaper_tariff_zones == [Zone(0, 3, "import")]
    assert len(analysis.allocations) == 4


def test_series_must_cover_the_day_in_order(series_factory) -> None:
    analyzer = DailyScheduleAnalyzer(EnergySystemConfig())
    series = series_factory(0.1, 0.05)
    with pytest.raises(ValueError):
        analyzer.analyze(series[:23])
    with pytest.raises(ValueError):
        analyzer.analyze(list(reversed(series)))


def test_discharge_follows_charge_on_a_spread_day(series_factory) -> None:
    imports = [0.05] * 6 + [0.3] * 4 + [0.1] * 6 + [0.3] * 8
    exports = [0.02] * 6 + [0.35] * 4 + [0.05] * 6 + [0.4] * 6 + [0.02] * 2
    series = series_factory(imports, exports, load=1.0, solar=0.0)

    analysis = DailyScheduleAnalyzer(EnergySystemConfig()).analyze(series)

    by_hour = {h.hour: h for h in analysis.hours}
    assert any(by_hour[h].action is Action.OPTIMAL_DISCHARGING for h in range(6, 10))
    assert any(by_hour[h].action is Action.OPTIMAL_DISCHARGING for h in range(16, 22))
    for record in analysis.hours:
        assert 0.0 <= record.battery_level <= 10.0


def test_simple_cheaper_end_to_end_at_ninety_percent() -> None:
    settings = {
        "batteryCapacity": 10,
        "chargingEfficiency": 0.9,
        "dischargingEfficiency": 0.9,
        "pricingStructure": "simpleCheaper",
        "seed": 1,
    }

    entry = SimulationApplication().run_analysis(settings)["lowSolarLowLoad"]

    windows = {w["window"]: w for w in entry["summary"]["scheduleWindows"]}
    for name in ("morning_discharge", "evening_discharge"):
        assert windows[name]["distribution"] == [0.0] * 6
        assert windows[name]["objective"] == 0.0
    night = windows["night_charge"]
    charged_hours = {
        hour for hour, rate in zip(night["hours"], night["distribution"]) if rate > 0
    }
    assert charged_hours and charged_hours <= {0, 1, 2, 3}
