"""
Data records shared by the daily battery scheduling engine.

Contains the immutable :class:`HourlyInput` produced by scenario generation,
the per-hour :class:`AnalyzedHour` filled in by the energy flow walk, and the
zone/profile records returned by the zone scanner.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple


class Action(str, Enum):
    """Battery/grid action taken in one hour of the simulated day."""

    OPTIMAL_CHARGING = "Optimal Charging"
    OPTIMAL_DISCHARGING = "Optimal Discharging"
    IDLE = "Idle"
    IMPORTING = "Importing"
    EXPORTING = "Exporting"
    CHARGING_FROM_GRID = "Charging from grid"
    CHARGING_FROM_SOLAR = "Charging from solar"
    DISCHARGING = "Discharging"


class Reason(str, Enum):
    """
    Classification attached to an hour.

    The base reasons follow the action chosen by the simulator. The two
    arbitrage reasons override the base reason after the walk; see
    :func:`resolve_reason` for the precedence.
    """

    SCHEDULED_CHARGE = "Scheduled charging window"
    SCHEDULED_DISCHARGE = "Scheduled discharging window"
    NO_ACTION = "No action needed"
    ENERGY_DEFICIT = "Energy deficit"
    EXCESS_ENERGY = "Excess energy"
    PEAK_DISCHARGE = "Peak hour, high import price"
    PREPARE_FOR_PEAK = "Preparing for upcoming expensive period"
    GOOD_IMPORT = "Good Import"
    GOOD_EXPORT = "Good Export"


def resolve_reason(base: Reason, good_import: bool, good_export: bool) -> Reason:
    """
    Apply the arbitrage override on top of the base reason.

    Good Export outranks Good Import, which outranks the base reason.
    """
    if good_export:
        return Reason.GOOD_EXPORT
    if good_import:
        return Reason.GOOD_IMPORT
    return base


@dataclass(frozen=True)
class HourlyInput:
    """
    One hour of synthetic input data.

    Attributes:
        hour: Hour of the day (0-23).
        import_price: Grid import price per kWh.
        export_price: Grid export (feed-in) price per kWh.
        load: Household consumption in kWh.
        solar_generation: PV production in kWh.
    """
    hour: int
    import_price: float
    export_price: float
    load: float
    solar_generation: float

    @property
    def net_deficit(self) -> float:
        """Energy the household still needs after solar (never negative)."""
        return max(0.0, self.load - self.solar_generation)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hour": self.hour,
            "importPrice": self.import_price,
            "exportPrice": self.export_price,
            "load": self.load,
            "solarGeneration": self.solar_generation,
        }


@dataclass
class LedgerEntry:
    """
    Grid flows and money for one battery configuration in one hour.

    Attributes:
        efficiency: Rate-adjusted efficiency used this hour (1.0 when idle).
        grid_import: Energy drawn from the grid (kWh).
        grid_export: Energy fed to the grid (kWh).
        import_cost: grid_import times the hour's import price.
        export_profit: grid_export times the hour's export price.
    """
    efficiency: float = 1.0
    grid_import: float = 0.0
    grid_export: float = 0.0
    import_cost: float = 0.0
    export_profit: float = 0.0


@dataclass
class AnalyzedHour:
    """
    Simulated hour: the input record plus battery movement and ledgers.

    ``ledgers`` holds one :class:`LedgerEntry` per battery configuration, all
    sharing the same physical schedule. The convenience properties expose the
    first ledger, which is also the one reported without a numeric suffix.
    """
    inputs: HourlyInput
    battery_charge: float = 0.0
    battery_discharge: float = 0.0
    battery_level_start: float = 0.0
    battery_level: float = 0.0
    action: Action = Action.IDLE
    reason: Reason = Reason.NO_ACTION
    note: str = ""
    ledgers: List[LedgerEntry] = field(default_factory=list)

    @property
    def hour(self) -> int:
        return self.inputs.hour

    @property
    def grid_import(self) -> float:
        return self.ledgers[0].grid_import if self.ledgers else 0.0

    @property
    def grid_export(self) -> float:
        return self.ledgers[0].grid_export if self.ledgers else 0.0

    @property
    def import_cost(self) -> float:
        return self.ledgers[0].import_cost if self.ledgers else 0.0

    @property
    def export_profit(self) -> float:
        return self.ledgers[0].export_profit if self.ledgers else 0.0

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize to the camelCase record consumed by the presentation layer.

        Ledger values for the second and later configurations carry a numeric
        suffix (``importCost2``, ``exportProfit2`` ...). ``batteryCapacity``
        repeats the end-of-hour level under the key the dashboard charts.
        """
        data = self.inputs.to_dict()
        data.update(
            {
                "gridImport": self.grid_import,
                "gridExport": self.grid_export,
                "gridPower": self.grid_export - self.grid_import,
                "batteryCharge": self.battery_charge,
                "batteryDischarge": self.battery_discharge,
                "batteryLevelStart": self.battery_level_start,
                "batteryLevel": self.battery_level,
                "batteryCapacity": self.battery_level,
                "importCost": self.import_cost,
                "exportProfit": self.export_profit,
                "action": self.action.value,
                "decision": self.action.value,
                "reason": self.reason.value,
                "note": self.note,
            }
        )
        for idx, ledger in enumerate(self.ledgers[1:], start=2):
            data[f"gridImport{idx}"] = ledger.grid_import
            data[f"gridExport{idx}"] = ledger.grid_export
            data[f"importCost{idx}"] = ledger.import_cost
            data[f"exportProfit{idx}"] = ledger.export_profit
        return data


@dataclass(frozen=True)
class Zone:
    """
    Maximal contiguous run of hours satisfying a predicate.

    ``kind`` is only set by the mixed cheaper-tariff scan ("import"/"export").
    """
    start: int
    end: int
    kind: str | None = None

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"zone start {self.start} is after end {self.end}")

    @property
    def span(self) -> Tuple[int, int]:
        return self.start, self.end

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"start": self.start, "end": self.end}
        if self.kind is not None:
            data["type"] = self.kind
        return data


@dataclass(frozen=True)
class EnergyProfileEntry:
    """Look-ahead energy the battery should hold at ``hour``."""
    hour: int
    needed_energy: float
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hour": self.hour,
            "neededEnergy": self.needed_energy,
            "reason": self.reason,
        }
