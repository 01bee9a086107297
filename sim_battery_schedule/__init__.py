from .simulation import (
    CHARGING_WINDOWS,
    DISCHARGING_WINDOWS,
    SCENARIOS,
    ArbitrageClassifier,
    BatteryConfiguration,
    DailyScheduleAnalyzer,
    DistributionOptimizer,
    EnergyFlowSimulator,
    EnergySystemConfig,
    HourlyInput,
    IdlePolicy,
    PricingStructure,
    build_pricing_structure,
    generate_scenario_data,
)
from .scenario_setup import AnalysisSettings, InvalidScenarioError, parse_settings
from .reporting import generate_report
from .application import SimulationApplication

__all__ = [
    "CHARGING_WINDOWS",
    "DISCHARGING_WINDOWS",
    "SCENARIOS",
    "ArbitrageClassifier",
    "BatteryConfiguration",
    "DailyScheduleAnalyzer",
    "DistributionOptimizer",
    "EnergyFlowSimulator",
    "EnergySystemConfig",
    "HourlyInput",
    "IdlePolicy",
    "PricingStructure",
    "build_pricing_structure",
    "generate_scenario_data",
    "AnalysisSettings",
    "InvalidScenarioError",
    "parse_settings",
    "generate_report",
    "SimulationApplication",
]
