"""
Rule-based dispatch used as an alternative to the window optimizer.

The battery discharges in expensive import hours down to a reserve and
charges in cheap import hours (or from solar surplus) toward the energy the
next expensive import zone will need. Whatever the battery does not cover is
settled with the grid in every hour.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Sequence

from .energy_simulator import EnergySystemConfig
from .models import Action, AnalyzedHour, HourlyInput, LedgerEntry, Reason, Zone
from .zones import expensive_import_zones

logger = logging.getLogger(__name__)

EXPENSIVE_IMPORT_FACTOR = 1.2
CHEAP_IMPORT_FACTOR = 0.8
RESERVE_FRACTION = 0.2


class DispatchStrategy(str, Enum):
    """How the day's battery schedule is decided."""

    OPTIMIZED = "optimized"
    HEURISTIC = "heuristic"


def next_zone_after(zones: Sequence[Zone], index: int) -> Zone | None:
    """First zone starting strictly after ``index``."""
    return next((zone for zone in zones if zone.start > index), None)


def energy_needed_for(series: Sequence[HourlyInput], zone: Zone | None) -> float:
    if zone is None:
        return 0.0
    return sum(hour.net_deficit for hour in series[zone.start : zone.end + 1])


class HeuristicDispatcher:
    """
    Hour-by-hour threshold policy over the same ledgers as the simulator.

    An hour is expensive when its import price is above
    ``expensive_factor * avg`` and cheap when below ``cheap_factor * avg``.
    Expensive hours discharge ``min(level - reserve, load, C-rate limit)``.
    Cheap hours, and hours with solar surplus, charge toward the deficit of
    the next expensive zone, capped by the C-rate (grid) or by the surplus
    (solar) and by the free capacity.
    """

    def __init__(
        self,
        config: EnergySystemConfig,
        expensive_factor: float = EXPENSIVE_IMPORT_FACTOR,
        cheap_factor: float = CHEAP_IMPORT_FACTOR,
        reserve_fraction: float = RESERVE_FRACTION,
    ) -> None:
        """
        Args:
            config: Battery capacity, C-rates, ledgers and initial level.
            expensive_factor: Multiple of the average import price above
                which an hour is expensive.
            cheap_factor: Multiple of the average import price below which
                an hour is cheap.
            reserve_fraction: Share of capacity never discharged.
        """
        if not 0.0 <= reserve_fraction <= 1.0:
            raise ValueError("reserve_fraction must be in [0, 1]")
        self.config = config
        self.expensive_factor = expensive_factor
        self.cheap_factor = cheap_factor
        self.reserve_fraction = reserve_fraction

    def run(self, series: Sequence[HourlyInput]) -> List[AnalyzedHour]:
        if not series:
            return []
        capacity = self.config.capacity_kwh
        reserve = capacity * self.reserve_fraction
        avg_import = sum(hour.import_price for hour in series) / len(series)
        expensive_threshold = avg_import * self.expensive_factor
        cheap_threshold = avg_import * self.cheap_factor
        zones = expensive_import_zones(series, expensive_threshold)

        level = capacity * self.config.initial_soc_fraction
        analyzed: List[AnalyzedHour] = []
        for index, hour in enumerate(series):
            record = AnalyzedHour(inputs=hour, battery_level_start=level)
            surplus = hour.solar_generation - hour.load
            is_cheap = hour.import_price < cheap_threshold

            if hour.import_price > expensive_threshold and level > reserve:
                amount = min(
                    level - reserve,
                    hour.load,
                    capacity * self.config.discharging_c_rate,
                )
                if amount > 0:
                    self._discharge(record, amount)
                    level -= amount
            elif is_cheap or surplus > 0:
                upcoming = next_zone_after(zones, index)
                deficit = energy_needed_for(series, upcoming) - level
                if deficit > 0:
                    amount = min(
                        deficit,
                        capacity * self.config.charging_c_rate if is_cheap else surplus,
                        capacity - level,
                    )
                    if amount > 0:
                        self._charge(record, amount, from_grid=is_cheap, upcoming=upcoming)
                        level += amount

            if not record.ledgers:
                self._settle(record, [1.0] * len(self.config.ledgers), 0.0)
            level = min(max(level, 0.0), capacity)
            record.battery_level = level
            analyzed.append(record)

        logger.debug(
            "Heuristic dispatch finished at %.3f kWh (expensive > %.4f, cheap < %.4f)",
            level,
            expensive_threshold,
            cheap_threshold,
        )
        return analyzed

    def _discharge(self, record: AnalyzedHour, amount: float) -> None:
        rate = amount / self.config.capacity_kwh
        efficiencies = [
            battery.discharging_efficiency_at(rate, self.config.discharging_efficiency_step)
            for battery in self.config.ledgers
        ]
        record.battery_discharge = amount
        record.action = Action.DISCHARGING
        record.reason = Reason.PEAK_DISCHARGE
        record.note = f"Peak hour, high import price. Efficiency: {efficiencies[0] * 100:.1f}%"
        self._settle(record, efficiencies, amount)

    def _charge(
        self,
        record: AnalyzedHour,
        amount: float,
        from_grid: bool,
        upcoming: Zone | None,
    ) -> None:
        rate = amount / self.config.capacity_kwh
        efficiencies = [
            battery.charging_efficiency_at(rate, self.config.charging_efficiency_step)
            for battery in self.config.ledgers
        ]
        record.battery_charge = amount
        record.action = Action.CHARGING_FROM_GRID if from_grid else Action.CHARGING_FROM_SOLAR
        record.reason = Reason.PREPARE_FOR_PEAK
        span = f" ({upcoming.start}-{upcoming.end})" if upcoming is not None else ""
        record.note = (
            f"Preparing for upcoming expensive period{span}. "
            f"Efficiency: {efficiencies[0] * 100:.1f}%"
        )
        self._settle(record, efficiencies, -amount)

    def _settle(self, record: AnalyzedHour, efficiencies: List[float], battery_flow: float) -> None:
        """
        Balance the hour with the grid for every ledger.

        ``battery_flow`` is positive when the battery delivers energy and
        negative when it absorbs energy.
        """
        hour = record.inputs
        for efficiency in efficiencies:
            if battery_flow >= 0:
                net = hour.solar_generation - hour.load + battery_flow * efficiency
            else:
                net = hour.solar_generation - hour.load + battery_flow / efficiency
            grid_import = max(0.0, -net)
            grid_export = max(0.0, net)
            record.ledgers.append(
                LedgerEntry(
                    efficiency=efficiency,
                    grid_import=grid_import,
                    grid_export=grid_export,
                    import_cost=grid_import * hour.import_price,
                    export_profit=grid_export * hour.export_price,
                )
            )

        if record.action is Action.IDLE:
            if record.grid_import > 0:
                record.action, record.reason = Action.IMPORTING, Reason.ENERGY_DEFICIT
            elif record.grid_export > 0:
                record.action, record.reason = Action.EXPORTING, Reason.EXCESS_ENERGY
        elif record.grid_import > 0:
            record.note += ", importing remaining energy"
        elif record.grid_export > 0:
            record.note += ", exporting remaining energy"
