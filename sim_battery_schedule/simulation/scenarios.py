"""
Synthetic 24-hour input series for a demand/solar scenario and a tariff.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

import numpy as np

from .load_profiles import PeakRampLoadProfile
from .models import HourlyInput
from .prices import PricingStructure
from .solar import SolarModel

HOURS_PER_DAY = 24


@dataclass(frozen=True)
class Scenario:
    """
    Demand/solar scenario.

    Attributes:
        key: Identifier used as the key of the result record.
        name: Display name.
        solar_multiplier: Scaling of the solar bell curve.
        load_multiplier: Scaling of the household load curve.
    """
    key: str
    name: str
    solar_multiplier: float
    load_multiplier: float


SCENARIOS: Dict[str, Scenario] = {
    scenario.key: scenario
    for scenario in (
        Scenario("highSolarHighLoad", "High Solar, High Load", 1.5, 1.5),
        Scenario("highSolarLowLoad", "High Solar, Low Load", 1.5, 0.5),
        Scenario("lowSolarHighLoad", "Low Solar, High Load", 0.5, 1.5),
        Scenario("lowSolarLowLoad", "Low Solar, Low Load", 0.5, 0.5),
        Scenario("noSolar", "No Solar", 0.0, 1.0),
        Scenario("noSolarAndLoad", "No Solar and Load", 0.0, 0.0),
    )
}


def select_scenario_key(
    high_solar: bool,
    high_load: bool,
    no_solar_and_load: bool = False,
) -> str:
    """
    Map the dashboard flags to a scenario key.

    ``no_solar_and_load`` wins over the other two flags.
    """
    if no_solar_and_load:
        return "noSolarAndLoad"
    if high_solar and high_load:
        return "highSolarHighLoad"
    if high_solar:
        return "highSolarLowLoad"
    if high_load:
        return "lowSolarHighLoad"
    return "lowSolarLowLoad"


def generate_scenario_data(
    scenario: Scenario,
    pricing: PricingStructure,
    rng: np.random.Generator | None = None,
) -> List[HourlyInput]:
    """
    Produce the 24 hourly input records for one day.

    Args:
        scenario: Demand/solar scaling.
        pricing: Tariff used to draw import/export prices.
        rng: Generator for price jitter. When None, the structure keeps the
            generator it already holds.

    Returns:
        HourlyInput records for hours 0..23, values rounded to 2 decimals.
    """
    pricing.reset_for_run(rng=rng)
    load_profile = PeakRampLoadProfile(load_multiplier=scenario.load_multiplier)
    solar_model = SolarModel(solar_multiplier=scenario.solar_multiplier)

    series: List[HourlyInput] = []
    for hour in range(HOURS_PER_DAY):
        import_price, export_price = pricing.get_prices(hour)
        series.append(
            HourlyInput(
                hour=hour,
                import_price=round(import_price, 2),
                export_price=round(export_price, 2),
                load=round(load_profile.get_hourly_load_kwh(hour), 2),
                solar_generation=round(solar_model.hourly_generation_kwh(hour), 2),
            )
        )
    return series
