"""
Battery configuration and rate-dependent efficiency model.

Contains :class:`BatteryConfiguration`, one efficiency pair tracked as a
separate cost ledger, and :func:`rate_adjusted_efficiency`, the curve that
lowers efficiency as the charge/discharge C-rate rises.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

MIN_EFFICIENCY = 0.5
EFFICIENCY_LOSS_PER_STEP = 0.01


def rate_adjusted_efficiency(
    rate: float,
    base_efficiency: float,
    step: float,
    loss_per_step: float = EFFICIENCY_LOSS_PER_STEP,
    minimum: float = MIN_EFFICIENCY,
) -> float:
    """
    Efficiency at a given C-rate.

    efficiency = max(base - floor(rate / step) * loss_per_step, minimum)

    Args:
        rate: Charge or discharge rate as a fraction of capacity per hour.
        base_efficiency: Efficiency at rates below one step.
        step: Rate increment that costs one ``loss_per_step``.
        loss_per_step: Efficiency lost per full step.
        minimum: Lower bound, keeps divisions by efficiency finite.

    Returns:
        Efficiency in [minimum, base_efficiency].
    """
    if step <= 0:
        raise ValueError("step must be positive")
    # Rates such as 0.3 / 0.1 land just below the integer in binary floating point.
    steps = math.floor(round(rate / step, 9))
    return max(base_efficiency - steps * loss_per_step, minimum)


@dataclass(frozen=True)
class BatteryConfiguration:
    """
    Efficiency pair of one battery configuration.

    Several configurations can share one physical schedule; each keeps its
    own ledger of grid flows and money.

    Attributes:
        name: Label used in reports.
        charging_efficiency: Base charging efficiency (0-1].
        discharging_efficiency: Base discharging efficiency (0-1].
    """
    name: str
    charging_efficiency: float = 0.95
    discharging_efficiency: float = 0.95

    def __post_init__(self) -> None:
        for label, value in (
            ("charging_efficiency", self.charging_efficiency),
            ("discharging_efficiency", self.discharging_efficiency),
        ):
            if not 0.0 < value <= 1.0:
                raise ValueError(f"{label} must be in (0, 1], got {value}")

    @property
    def round_trip_efficiency(self) -> float:
        return self.charging_efficiency * self.discharging_efficiency

    def charging_efficiency_at(self, rate: float, step: float) -> float:
        return rate_adjusted_efficiency(rate, self.charging_efficiency, step)

    def discharging_efficiency_at(self, rate: float, step: float) -> float:
        return rate_adjusted_efficiency(rate, self.discharging_efficiency, step)
