"""
End-to-end analysis of one simulated day.

:class:`DailyScheduleAnalyzer` chains the engine components: window
optimization and schedule mapping (or the rule-based dispatcher), the
energy flow walk, arbitrage classification and the summary zone scans.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .arbitrage import ArbitrageClassifier, ArbitrageThresholds
from .energy_simulator import EnergyFlowSimulator, EnergySystemConfig
from .heuristic import DispatchStrategy, HeuristicDispatcher
from .models import AnalyzedHour, EnergyProfileEntry, HourlyInput, Zone
from .optimizer import (
    CHARGING_WINDOWS,
    DISCHARGING_WINDOWS,
    DistributionOptimizer,
    SchedulingWindow,
    WindowAllocation,
)
from .schedule import schedule_from_allocations
from .zones import (
    cheaper_tariff_zones,
    expensive_import_zones,
    export_price_zones,
    needed_energy_profile,
)

logger = logging.getLogger(__name__)

CHEAP_IMPORT_FACTOR = 0.9
RICH_EXPORT_FACTOR = 1.1


@dataclass
class DayAnalysis:
    """
    Everything computed for one day.

    Attributes:
        hours: Simulated hours with ledgers and final reasons.
        charging_allocations: Winning distributions of the charging windows
            (empty when the heuristic dispatcher ran).
        discharging_allocations: Winning distributions of the discharging windows.
        thresholds: Arbitrage thresholds applied to the reasons.
        export_price_zones: Runs of export price at or above the daily average.
        expensive_import_zones: Runs of import price at or above the daily average.
        cheaper_tariff_zones: Runs of cheap import or rewarding export.
        needed_energy_profile: Look-ahead energy need per hour.
    """
    hours: List[AnalyzedHour]
    charging_allocations: List[WindowAllocation]
    discharging_allocations: List[WindowAllocation]
    thresholds: ArbitrageThresholds
    export_price_zones: List[Zone]
    expensive_import_zones: List[Zone]
    cheaper_tariff_zones: List[Zone]
    needed_energy_profile: List[EnergyProfileEntry]

    @property
    def allocations(self) -> List[WindowAllocation]:
        return self.charging_allocations + self.discharging_allocations


class DailyScheduleAnalyzer:
    """
    Optimizes and simulates the battery schedule for a 24-hour series.

    Each window is optimized on its own with the first ledger's base
    efficiencies; the schedule is then applied to every ledger. With
    ``DispatchStrategy.HEURISTIC`` no window is optimized and the
    threshold dispatcher decides every hour instead.
    """

    def __init__(
        self,
        config: EnergySystemConfig,
        charging_windows: Tuple[SchedulingWindow, ...] = CHARGING_WINDOWS,
        discharging_windows: Tuple[SchedulingWindow, ...] = DISCHARGING_WINDOWS,
        charge_target: float = 1.0,
        strategy: DispatchStrategy = DispatchStrategy.OPTIMIZED,
    ) -> None:
        self.config = config
        self.strategy = DispatchStrategy(strategy)
        self.charging_windows = charging_windows
        self.discharging_windows = discharging_windows
        self.optimizer = DistributionOptimizer(
            capacity_kwh=config.capacity_kwh,
            charging_efficiency=config.primary.charging_efficiency,
            discharging_efficiency=config.primary.discharging_efficiency,
            charging_efficiency_step=config.charging_efficiency_step,
            discharging_efficiency_step=config.discharging_efficiency_step,
            charge_target=charge_target,
        )
        self.simulator = EnergyFlowSimulator(config)
        self.dispatcher = HeuristicDispatcher(config)
        self.classifier = ArbitrageClassifier(
            charging_efficiency=config.primary.charging_efficiency,
            discharging_efficiency=config.primary.discharging_efficiency,
        )

    def optimize_windows(
        self,
        series: Sequence[HourlyInput],
    ) -> Tuple[List[WindowAllocation], List[WindowAllocation]]:
        charging = [self.optimizer.optimize(window, series) for window in self.charging_windows]
        discharging = [
            self.optimizer.optimize(window, series) for window in self.discharging_windows
        ]
        return charging, discharging

    def analyze(self, series: Sequence[HourlyInput]) -> DayAnalysis:
        """
        Run the full pipeline.

        Args:
            series: 24 hourly inputs, hours 0..23 in order.

        Returns:
            DayAnalysis with simulated hours, allocations, thresholds and zones.
        """
        hours = [hour.hour for hour in series]
        if hours != list(range(24)):
            raise ValueError("series must contain hours 0..23 exactly once, in order")

        if self.strategy is DispatchStrategy.HEURISTIC:
            charging: List[WindowAllocation] = []
            discharging: List[WindowAllocation] = []
            analyzed = self.dispatcher.run(series)
        else:
            charging, discharging = self.optimize_windows(series)
            charging_schedule = schedule_from_allocations(*charging)
            discharging_schedule = schedule_from_allocations(*discharging)
            logger.debug(
                "Charging schedule %s, discharging schedule %s",
                dict(charging_schedule),
                dict(discharging_schedule),
            )
            analyzed = self.simulator.run(series, charging_schedule, discharging_schedule)
        thresholds = self.classifier.classify(analyzed)

        avg_import = sum(hour.import_price for hour in series) / len(series)
        avg_export = sum(hour.export_price for hour in series) / len(series)
        expensive = expensive_import_zones(series, avg_import)

        return DayAnalysis(
            hours=analyzed,
            charging_allocations=charging,
            discharging_allocations=discharging,
            thresholds=thresholds,
            export_price_zones=export_price_zones(series, avg_export),
            expensive_import_zones=expensive,
            cheaper_tariff_zones=cheaper_tariff_zones(
                series,
                avg_import * CHEAP_IMPORT_FACTOR,
                avg_export * RICH_EXPORT_FACTOR,
            ),
            needed_energy_profile=needed_energy_profile(series, expensive),
        )
