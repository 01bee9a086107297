"""
Brute-force allocation search for one charging or discharging window.

For a window of up to six hours the optimizer ranks the hours by price,
enumerates every way of splitting at most 100% of battery capacity across
the ranked slots in 10% steps, and keeps the split with the lowest charging
cost (or highest discharging profit) under a rate-dependent efficiency
model. It is a bounded local search per fixed window, not a joint
optimization of the whole day.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple

from .battery import rate_adjusted_efficiency
from .models import HourlyInput

logger = logging.getLogger(__name__)

DISTRIBUTION_SLOTS = 6
RATE_UNITS = 10
RATE_STEP = 1.0 / RATE_UNITS
SUM_TOLERANCE = 1e-9
TIE_TOLERANCE = 1e-12

DEFAULT_CHARGING_EFFICIENCY_STEP = 0.1
DEFAULT_DISCHARGING_EFFICIENCY_STEP = 0.2

Slot = Optional[HourlyInput]
Distribution = Tuple[float, ...]


class Direction(str, Enum):
    CHARGE = "charge"
    DISCHARGE = "discharge"


@dataclass(frozen=True)
class SchedulingWindow:
    """
    Fixed block of hours optimized as one unit.

    Attributes:
        name: Identifier used in logs and reports.
        start_hour: First hour of the window.
        end_hour: Last hour of the window (inclusive).
        direction: Whether the window charges or discharges the battery.
    """
    name: str
    start_hour: int
    end_hour: int
    direction: Direction

    @property
    def hours(self) -> range:
        return range(self.start_hour, self.end_hour + 1)

    def select(self, series: Sequence[HourlyInput]) -> List[HourlyInput]:
        return [hour for hour in series if self.start_hour <= hour.hour <= self.end_hour]


CHARGING_WINDOWS = (
    SchedulingWindow("night_charge", 0, 5, Direction.CHARGE),
    SchedulingWindow("midday_charge", 10, 15, Direction.CHARGE),
)
DISCHARGING_WINDOWS = (
    SchedulingWindow("morning_discharge", 6, 9, Direction.DISCHARGE),
    SchedulingWindow("evening_discharge", 16, 21, Direction.DISCHARGE),
)


@dataclass(frozen=True)
class WindowAllocation:
    """
    Winning distribution for one window.

    Attributes:
        window: The optimized window.
        slots: Window hours in price-priority order, padded with None to
            the distribution length.
        distribution: Fraction of capacity allocated to each slot.
        objective: Charging cost or discharging profit of the distribution.
        candidates_evaluated: Number of vectors scored.
    """
    window: SchedulingWindow
    slots: Tuple[Slot, ...]
    distribution: Distribution
    objective: float
    candidates_evaluated: int

    @property
    def total_rate(self) -> float:
        return sum(self.distribution)

    def to_dict(self) -> dict:
        return {
            "window": self.window.name,
            "direction": self.window.direction.value,
            "startHour": self.window.start_hour,
            "endHour": self.window.end_hour,
            "hours": [slot.hour if slot is not None else None for slot in self.slots],
            "distribution": list(self.distribution),
            "objective": self.objective,
        }


def enumerate_distributions(
    slots: int = DISTRIBUTION_SLOTS,
    units: int = RATE_UNITS,
    active_slots: Sequence[bool] | None = None,
) -> Iterator[Tuple[int, ...]]:
    """
    Yield every vector of ``slots`` non-negative integers summing to <= ``units``.

    Depth-first over an explicit stack, so memory stays bounded by
    ``slots * (units + 1)`` pending prefixes. Vectors come out in
    lexicographic order starting with all zeros.

    Args:
        slots: Vector length.
        units: Budget shared by all entries (10 units = 100% of capacity).
        active_slots: Optional mask; inactive positions are fixed at zero.
    """
    active = list(active_slots) if active_slots is not None else [True] * slots
    if len(active) != slots:
        raise ValueError("active_slots must have one entry per slot")

    stack: List[Tuple[Tuple[int, ...], int]] = [((), units)]
    while stack:
        prefix, remaining = stack.pop()
        position = len(prefix)
        if position == slots:
            yield prefix
            continue
        limit = remaining if active[position] else 0
        for value in range(limit, -1, -1):
            stack.append((prefix + (value,), remaining - value))


def _rates_match_slots(distribution: Sequence[float], slots: Sequence[Slot]) -> bool:
    if len(distribution) != len(slots):
        logger.warning(
            "Distribution length %d does not match window length %d; scoring as 0",
            len(distribution),
            len(slots),
        )
        return False
    return True


def charging_cost(
    distribution: Sequence[float],
    slots: Sequence[Slot],
    capacity_kwh: float,
    base_efficiency: float,
    efficiency_step: float = DEFAULT_CHARGING_EFFICIENCY_STEP,
) -> float:
    """
    Grid cost of charging ``capacity * rate`` in each slot.

    cost = sum(capacity * rate / efficiency(rate) * import_price)
    """
    if not _rates_match_slots(distribution, slots):
        return 0.0
    total = 0.0
    for rate, slot in zip(distribution, slots):
        if rate <= 0.0 or slot is None:
            continue
        efficiency = rate_adjusted_efficiency(rate, base_efficiency, efficiency_step)
        total += capacity_kwh * rate / efficiency * slot.import_price
    return total


def discharging_profit(
    distribution: Sequence[float],
    slots: Sequence[Slot],
    capacity_kwh: float,
    base_efficiency: float,
    efficiency_step: float = DEFAULT_DISCHARGING_EFFICIENCY_STEP,
) -> float:
    """
    Export revenue of discharging ``capacity * rate`` in each slot.

    profit = sum(capacity * rate * efficiency(rate) * export_price)
    """
    if not _rates_match_slots(distribution, slots):
        return 0.0
    total = 0.0
    for rate, slot in zip(distribution, slots):
        if rate <= 0.0 or slot is None:
            continue
        efficiency = rate_adjusted_efficiency(rate, base_efficiency, efficiency_step)
        total += capacity_kwh * rate * efficiency * slot.export_price
    return total


def sort_window(
    hours: Sequence[HourlyInput],
    direction: Direction,
    slots: int = DISTRIBUTION_SLOTS,
) -> Tuple[Slot, ...]:
    """
    Order window hours by price priority and pad to ``slots`` entries.

    Charging puts the cheapest import first, discharging the highest export
    first; equal prices keep the earlier hour first.
    """
    if len(hours) > slots:
        raise ValueError(f"window has {len(hours)} hours, at most {slots} are supported")
    if direction is Direction.CHARGE:
        ordered = sorted(hours, key=lambda h: (h.import_price, h.hour))
    else:
        ordered = sorted(hours, key=lambda h: (-h.export_price, h.hour))
    padded: List[Slot] = list(ordered)
    padded.extend([None] * (slots - len(ordered)))
    return tuple(padded)


class DistributionOptimizer:
    """
    Exhaustive search over discretized capacity splits for one window.

    Charging candidates must allocate exactly ``charge_target`` of capacity
    (otherwise the empty allocation would always be cheapest); discharging
    candidates may allocate anything up to 100%.

    Among candidates with the same objective the one with the smallest
    single-slot rate wins; remaining ties keep the first vector enumerated.
    """

    def __init__(
        self,
        capacity_kwh: float,
        charging_efficiency: float,
        discharging_efficiency: float,
        charging_efficiency_step: float = DEFAULT_CHARGING_EFFICIENCY_STEP,
        discharging_efficiency_step: float = DEFAULT_DISCHARGING_EFFICIENCY_STEP,
        charge_target: float = 1.0,
        slots: int = DISTRIBUTION_SLOTS,
    ) -> None:
        """
        Args:
            capacity_kwh: Battery capacity the rates are fractions of.
            charging_efficiency: Base charging efficiency of the curve.
            discharging_efficiency: Base discharging efficiency of the curve.
            charging_efficiency_step: C-rate step of the charging curve.
            discharging_efficiency_step: C-rate step of the discharging curve.
            charge_target: Fraction of capacity each charging window fills.
            slots: Distribution length.
        """
        if capacity_kwh <= 0:
            raise ValueError("capacity_kwh must be positive")
        if not 0.0 <= charge_target <= 1.0:
            raise ValueError("charge_target must be in [0, 1]")
        self.capacity_kwh = capacity_kwh
        self.charging_efficiency = charging_efficiency
        self.discharging_efficiency = discharging_efficiency
        self.charging_efficiency_step = charging_efficiency_step
        self.discharging_efficiency_step = discharging_efficiency_step
        self.charge_target_units = int(round(charge_target * RATE_UNITS))
        self.slots = slots

    def score(self, distribution: Sequence[float], slots: Sequence[Slot], direction: Direction) -> float:
        """Charging cost or discharging profit of ``distribution`` over ``slots``."""
        if direction is Direction.CHARGE:
            return charging_cost(
                distribution,
                slots,
                self.capacity_kwh,
                self.charging_efficiency,
                self.charging_efficiency_step,
            )
        return discharging_profit(
            distribution,
            slots,
            self.capacity_kwh,
            self.discharging_efficiency,
            self.discharging_efficiency_step,
        )

    def optimize(self, window: SchedulingWindow, series: Sequence[HourlyInput]) -> WindowAllocation:
        """
        Find the best distribution for ``window`` within ``series``.

        Args:
            window: Window to optimize.
            series: Full day of inputs; only the window's hours are used.

        Returns:
            WindowAllocation with the winning distribution and its objective.
        """
        slots = sort_window(window.select(series), window.direction, self.slots)
        active = [slot is not None for slot in slots]
        required_units = (
            self.charge_target_units if window.direction is Direction.CHARGE else None
        )

        best: Distribution = (0.0,) * self.slots
        best_score: float | None = None
        best_peak = 0.0
        evaluated = 0

        for units in enumerate_distributions(self.slots, RATE_UNITS, active):
            if required_units is not None and sum(units) != required_units:
                continue
            distribution = tuple(u / RATE_UNITS for u in units)
            objective = self.score(distribution, slots, window.direction)
            # Minimize cost, maximize profit.
            candidate = objective if window.direction is Direction.CHARGE else -objective
            peak = max(distribution)
            evaluated += 1
            if best_score is None or candidate < best_score - TIE_TOLERANCE:
                best, best_score, best_peak = distribution, candidate, peak
            elif abs(candidate - best_score) <= TIE_TOLERANCE and peak < best_peak:
                best, best_score, best_peak = distribution, candidate, peak

        objective = self.score(best, slots, window.direction)
        logger.debug(
            "Window %s (%s): distribution=%s objective=%.4f over %d candidates",
            window.name,
            window.direction.value,
            best,
            objective,
            evaluated,
        )
        return WindowAllocation(
            window=window,
            slots=slots,
            distribution=best,
            objective=objective,
            candidates_evaluated=evaluated,
        )
