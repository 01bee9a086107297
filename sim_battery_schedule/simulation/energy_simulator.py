from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Mapping, Sequence, Tuple

from .battery import BatteryConfiguration
from .models import Action, AnalyzedHour, HourlyInput, LedgerEntry, Reason
from .optimizer import DEFAULT_CHARGING_EFFICIENCY_STEP, DEFAULT_DISCHARGING_EFFICIENCY_STEP

logger = logging.getLogger(__name__)


class IdlePolicy(str, Enum):
    """
    What happens to the household balance in an unscheduled hour.

    HOLD leaves the grid untouched. GRID_RECONCILE imports the deficit
    (load above solar) or exports the surplus at the hour's prices.
    """

    HOLD = "hold"
    GRID_RECONCILE = "grid_reconcile"


@dataclass
class EnergySystemConfig:
    """
    Configuration parameters for the daily energy flow walk.

    Attributes:
        capacity_kwh: Usable battery capacity in kWh.
        charging_c_rate: Maximum charge per hour as a fraction of capacity.
        discharging_c_rate: Maximum discharge per hour as a fraction of capacity.
        ledgers: Battery configurations sharing the schedule; the first one
            drives the optimizer.
        initial_soc_fraction: Battery level at hour 0 as a fraction of capacity.
        idle_policy: Grid handling of unscheduled hours.
        charging_efficiency_step: C-rate step of the charging efficiency curve.
        discharging_efficiency_step: C-rate step of the discharging efficiency curve.
    """
    capacity_kwh: float = 10.0
    charging_c_rate: float = 0.5
    discharging_c_rate: float = 0.5
    ledgers: Tuple[BatteryConfiguration, ...] = field(
        default_factory=lambda: (
            BatteryConfiguration("battery_1", 0.95, 0.95),
            BatteryConfiguration("battery_2", 0.94, 0.94),
        )
    )
    initial_soc_fraction: float = 0.0
    idle_policy: IdlePolicy = IdlePolicy.HOLD
    charging_efficiency_step: float = DEFAULT_CHARGING_EFFICIENCY_STEP
    discharging_efficiency_step: float = DEFAULT_DISCHARGING_EFFICIENCY_STEP

    def __post_init__(self) -> None:
        if self.capacity_kwh <= 0:
            raise ValueError("capacity_kwh must be positive")
        if not self.ledgers:
            raise ValueError("at least one ledger configuration is required")
        if not 0.0 <= self.initial_soc_fraction <= 1.0:
            raise ValueError("initial_soc_fraction must be in [0, 1]")

    @property
    def primary(self) -> BatteryConfiguration:
        return self.ledgers[0]


class EnergyFlowSimulator:
    """
    Walks the day hour by hour applying charging and discharging schedules.

    The battery level is the only state carried between hours. A scheduled
    charge is limited by the scheduled rate, the charging C-rate and the free
    capacity; a scheduled discharge by the scheduled rate, the discharging
    C-rate and the stored energy, so the level always stays in
    [0, capacity].
    """

    def __init__(self, config: EnergySystemConfig) -> None:
        """
        Args:
            config: Battery capacity, C-rates, ledgers and walk options.
        """
        self.config = config

    def run(
        self,
        series: Sequence[HourlyInput],
        charging_schedule: Mapping[int, float],
        discharging_schedule: Mapping[int, float],
    ) -> List[AnalyzedHour]:
        """
        Simulate the day.

        Args:
            series: Hourly inputs in hour order.
            charging_schedule: Hour to charging rate (fraction of capacity).
            discharging_schedule: Hour to discharging rate.

        Returns:
            One AnalyzedHour per input hour. ``battery_level`` is the level at
            the end of the hour, ``battery_level_start`` the level before it.
        """
        capacity = self.config.capacity_kwh
        level = capacity * self.config.initial_soc_fraction
        analyzed: List[AnalyzedHour] = []

        for hour in series:
            record = AnalyzedHour(inputs=hour, battery_level_start=level)
            charge_rate = charging_schedule.get(hour.hour, 0.0)
            discharge_rate = discharging_schedule.get(hour.hour, 0.0)

            charge_amount = 0.0
            discharge_amount = 0.0
            if charge_rate > 0.0:
                charge_amount = min(
                    capacity * charge_rate,
                    capacity * self.config.charging_c_rate,
                    capacity - level,
                )
            elif discharge_rate > 0.0:
                discharge_amount = min(
                    capacity * discharge_rate,
                    capacity * self.config.discharging_c_rate,
                    level,
                )

            if charge_amount > 0.0:
                self._apply_charge(record, charge_amount)
            elif discharge_amount > 0.0:
                self._apply_discharge(record, discharge_amount)
            else:
                self._apply_idle(record)

            level = min(max(level + charge_amount - discharge_amount, 0.0), capacity)
            record.battery_level = level
            analyzed.append(record)

        logger.debug("Energy walk finished at %.3f kWh of %.3f kWh", level, capacity)
        return analyzed

    def _apply_charge(self, record: AnalyzedHour, amount: float) -> None:
        realized_rate = amount / self.config.capacity_kwh
        price = record.inputs.import_price
        for battery in self.config.ledgers:
            efficiency = battery.charging_efficiency_at(
                realized_rate, self.config.charging_efficiency_step
            )
            grid_import = amount / efficiency
            record.ledgers.append(
                LedgerEntry(
                    efficiency=efficiency,
                    grid_import=grid_import,
                    import_cost=grid_import * price,
                )
            )
        record.battery_charge = amount
        record.action = Action.OPTIMAL_CHARGING
        record.reason = Reason.SCHEDULED_CHARGE
        record.note = (
            f"Charging {realized_rate * 100:.0f}% of capacity. "
            f"Efficiency: {record.ledgers[0].efficiency * 100:.1f}%"
        )

    def _apply_discharge(self, record: AnalyzedHour, amount: float) -> None:
        realized_rate = amount / self.config.capacity_kwh
        price = record.inputs.export_price
        for battery in self.config.ledgers:
            efficiency = battery.discharging_efficiency_at(
                realized_rate, self.config.discharging_efficiency_step
            )
            grid_export = amount * efficiency
            record.ledgers.append(
                LedgerEntry(
                    efficiency=efficiency,
                    grid_export=grid_export,
                    export_profit=grid_export * price,
                )
            )
        record.battery_discharge = amount
        record.action = Action.OPTIMAL_DISCHARGING
        record.reason = Reason.SCHEDULED_DISCHARGE
        record.note = (
            f"Discharging {realized_rate * 100:.0f}% of capacity. "
            f"Efficiency: {record.ledgers[0].efficiency * 100:.1f}%"
        )

    def _apply_idle(self, record: AnalyzedHour) -> None:
        hour = record.inputs
        grid_import = 0.0
        grid_export = 0.0
        action = Action.IDLE
        reason = Reason.NO_ACTION
        if self.config.idle_policy is IdlePolicy.GRID_RECONCILE:
            net_energy = hour.solar_generation - hour.load
            if net_energy < 0:
                grid_import = -net_energy
                action, reason = Action.IMPORTING, Reason.ENERGY_DEFICIT
            elif net_energy > 0:
                grid_export = net_energy
                action, reason = Action.EXPORTING, Reason.EXCESS_ENERGY

        for _ in self.config.ledgers:
            record.ledgers.append(
                LedgerEntry(
                    grid_import=grid_import,
                    grid_export=grid_export,
                    import_cost=grid_import * hour.import_price,
                    export_profit=grid_export * hour.export_price,
                )
            )
        record.action = action
        record.reason = reason
