"""
Daily household battery scheduling engine.

This package collects the components of the one-day simulation:

* Synthetic inputs: load curve, solar curve, tariffs and scenarios.
* Zone detection over hourly price series.
* Per-window brute-force allocation search and schedule mapping.
* The sequential energy flow walk with parallel cost ledgers.
* A rule-based threshold dispatcher as an alternative to the search.
* Arbitrage classification of the simulated hours.

Higher layers (`application`, FastAPI routes, CLI) import from this
namespace only.
"""

from __future__ import annotations

from .arbitrage import ArbitrageClassifier, ArbitrageThresholds, compute_thresholds
from .battery import BatteryConfiguration, rate_adjusted_efficiency
from .day_analysis import DailyScheduleAnalyzer, DayAnalysis
from .energy_simulator import EnergyFlowSimulator, EnergySystemConfig, IdlePolicy
from .heuristic import DispatchStrategy, HeuristicDispatcher
from .load_profiles import LoadProfile, PeakRampLoadProfile
from .models import (
    Action,
    AnalyzedHour,
    EnergyProfileEntry,
    HourlyInput,
    LedgerEntry,
    Reason,
    Zone,
    resolve_reason,
)
from .optimizer import (
    CHARGING_WINDOWS,
    DISCHARGING_WINDOWS,
    Direction,
    DistributionOptimizer,
    SchedulingWindow,
    WindowAllocation,
    charging_cost,
    discharging_profit,
    enumerate_distributions,
    sort_window,
)
from .prices import (
    BandedPricingStructure,
    FixedPricingStructure,
    PriceBand,
    PricingStructure,
    build_pricing_structure,
    list_pricing_structures,
)
from .scenarios import SCENARIOS, Scenario, generate_scenario_data, select_scenario_key
from .schedule import build_schedule, merge_schedules, schedule_from_allocations
from .solar import SolarModel
from .zones import (
    cheaper_tariff_zones,
    expensive_import_zones,
    export_price_zones,
    needed_energy_profile,
    scan,
    zone_mask,
)

__all__ = [
    # Inputs
    "HourlyInput",
    "LoadProfile",
    "PeakRampLoadProfile",
    "SolarModel",
    "PriceBand",
    "PricingStructure",
    "BandedPricingStructure",
    "FixedPricingStructure",
    "build_pricing_structure",
    "list_pricing_structures",
    "Scenario",
    "SCENARIOS",
    "select_scenario_key",
    "generate_scenario_data",
    # Zones
    "Zone",
    "EnergyProfileEntry",
    "scan",
    "zone_mask",
    "expensive_import_zones",
    "export_price_zones",
    "cheaper_tariff_zones",
    "needed_energy_profile",
    # Optimization
    "Direction",
    "SchedulingWindow",
    "CHARGING_WINDOWS",
    "DISCHARGING_WINDOWS",
    "WindowAllocation",
    "DistributionOptimizer",
    "enumerate_distributions",
    "sort_window",
    "charging_cost",
    "discharging_profit",
    "build_schedule",
    "merge_schedules",
    "schedule_from_allocations",
    # Simulation
    "BatteryConfiguration",
    "rate_adjusted_efficiency",
    "EnergySystemConfig",
    "EnergyFlowSimulator",
    "IdlePolicy",
    "DispatchStrategy",
    "HeuristicDispatcher",
    "Action",
    "Reason",
    "resolve_reason",
    "AnalyzedHour",
    "LedgerEntry",
    # Analysis
    "ArbitrageClassifier",
    "ArbitrageThresholds",
    "compute_thresholds",
    "DailyScheduleAnalyzer",
    "DayAnalysis",
]
