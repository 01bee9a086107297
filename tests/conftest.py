from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Callable, List, Sequence

import numpy as np
import pytest

os.environ.setdefault("MPLBACKEND", "Agg")

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sim_battery_schedule.simulation import HourlyInput  # noqa: E402


def make_series(
    import_prices: Sequence[float] | float,
    export_prices: Sequence[float] | float,
    load: Sequence[float] | float = 1.0,
    solar: Sequence[float] | float = 0.0,
) -> List[HourlyInput]:
    """Build 24 hourly inputs; scalars are repeated for every hour."""

    def expand(value):
        return list(value) if isinstance(value, (list, tuple)) else [value] * 24

    imports, exports, loads, solars = (
        expand(import_prices),
        expand(export_prices),
        expand(load),
        expand(solar),
    )
    return [
        HourlyInput(
            hour=hour,
            import_price=imports[hour],
            export_price=exports[hour],
            load=loads[hour],
            solar_generation=solars[hour],
        )
        for hour in range(24)
    ]


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    """Keep developer environment variables out of the tests."""
    for name in ("SIM_BATTERY_SEED", "SIM_BATTERY_LOG_LEVEL", "SIM_BATTERY_RESULTS_DIR"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def series_factory() -> Callable[..., List[HourlyInput]]:
    return make_series


@pytest.fixture()
def simple_cheaper_series() -> List[HourlyInput]:
    """Deterministic day shaped like the simpleCheaper tariff."""
    imports = [0.05] * 4 + [0.15] * 20
    return make_series(imports, 0.0, load=2.0, solar=0.0)


@pytest.fixture()
def flat_series() -> List[HourlyInput]:
    # Binary-exact prices so the daily average equals every hour.
    return make_series(0.25, 0.125, load=1.0, solar=0.5)


@pytest.fixture()
def seeded_rng() -> np.random.Generator:
    return np.random.default_rng(42)


@pytest.fixture()
def settings_data() -> dict:
    """Lightweight analysis settings in the camelCase wire form."""
    return {
        "batteryCapacity": 10,
        "chargingEfficiency": 0.95,
        "dischargingEfficiency": 0.95,
        "chargingEfficiency2": 0.94,
        "dischargingEfficiency2": 0.94,
        "highSolar": True,
        "highLoad": False,
        "pricingStructure": "normal",
        "seed": 7,
    }
