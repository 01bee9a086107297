"""
Dynamic good-price thresholds derived from round-trip efficiency loss.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from .models import AnalyzedHour, HourlyInput, resolve_reason

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArbitrageThresholds:
    """
    Price bounds beyond which an hour is a favourable trade.

    margin = (max_export - min_import) * (1 - eta_charge * eta_discharge)
    good import  <= mid_price - margin
    good export  >= mid_price + margin
    """
    max_export_price: float
    min_import_price: float
    efficiency_loss_factor: float
    margin: float
    mid_price: float
    good_import_threshold: float
    good_export_threshold: float

    def is_good_import(self, hour: HourlyInput) -> bool:
        return hour.import_price <= self.good_import_threshold

    def is_good_export(self, hour: HourlyInput) -> bool:
        return hour.export_price >= self.good_export_threshold


def compute_thresholds(
    series: Sequence[HourlyInput],
    charging_efficiency: float,
    discharging_efficiency: float,
) -> ArbitrageThresholds:
    if not series:
        raise ValueError("cannot compute arbitrage thresholds of an empty series")
    max_export = max(hour.export_price for hour in series)
    min_import = min(hour.import_price for hour in series)
    loss_factor = 1.0 - charging_efficiency * discharging_efficiency
    margin = (max_export - min_import) * loss_factor
    mid_price = (max_export + min_import) / 2.0
    thresholds = ArbitrageThresholds(
        max_export_price=max_export,
        min_import_price=min_import,
        efficiency_loss_factor=loss_factor,
        margin=margin,
        mid_price=mid_price,
        good_import_threshold=mid_price - margin,
        good_export_threshold=mid_price + margin,
    )
    logger.debug(
        "Arbitrage thresholds: import <= %.4f, export >= %.4f (margin %.4f)",
        thresholds.good_import_threshold,
        thresholds.good_export_threshold,
        margin,
    )
    return thresholds


class ArbitrageClassifier:
    """Relabels simulated hours that fall beyond the arbitrage thresholds."""

    def __init__(self, charging_efficiency: float, discharging_efficiency: float) -> None:
        self.charging_efficiency = charging_efficiency
        self.discharging_efficiency = discharging_efficiency

    def classify(self, hours: Sequence[AnalyzedHour]) -> ArbitrageThresholds:
        """
        Override the reason of every good-import and good-export hour in place.

        Returns:
            The thresholds that were applied.
        """
        thresholds = compute_thresholds(
            [record.inputs for record in hours],
            self.charging_efficiency,
            self.discharging_efficiency,
        )
        for record in hours:
            record.reason = resolve_reason(
                record.reason,
                good_import=thresholds.is_good_import(record.inputs),
                good_export=thresholds.is_good_export(record.inputs),
            )
        return thresholds
