from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence

from .reporting import generate_report
from .scenario_setup import (
    AnalysisSettings,
    build_energy_config,
    build_pricing,
    build_rng,
    build_scenario,
    parse_settings,
    resolve_seed,
)
from .simulation import DailyScheduleAnalyzer, DayAnalysis, HourlyInput, generate_scenario_data

logger = logging.getLogger(__name__)

# Literal placeholder for an empty zone/profile list, expected by consumers.
NO_ZONES_SENTINEL = "None"

SettingsSource = AnalysisSettings | Mapping[str, Any] | str | Path | None


def _round2(value: float | None) -> float:
    return round(float(value or 0.0), 2)


def _list_or_sentinel(items: Sequence[Any]) -> List[Dict[str, Any]] | str:
    if not items:
        return NO_ZONES_SENTINEL
    return [item.to_dict() for item in items]


def _ledger_key(name: str, index: int) -> str:
    return name if index == 0 else f"{name}{index + 1}"


def build_summary(analysis: DayAnalysis, capacity_kwh: float) -> Dict[str, Any]:
    """
    Aggregate the simulated day into the summary record.

    Args:
        analysis: Output of DailyScheduleAnalyzer.analyze().
        capacity_kwh: Battery capacity, used for the final state-of-charge percent.

    Returns:
        Summary dictionary; money and energy totals rounded to 2 decimals,
        empty zone lists replaced by the "None" sentinel.
    """
    hours = analysis.hours
    n_ledgers = len(hours[0].ledgers) if hours else 1
    final_level = hours[-1].battery_level if hours else 0.0

    summary: Dict[str, Any] = {
        "totalLoad": _round2(sum(h.inputs.load for h in hours)),
        "totalGridImport": _round2(sum(h.grid_import for h in hours)),
        "totalGridExport": _round2(sum(h.grid_export for h in hours)),
        "totalSolarGeneration": _round2(sum(h.inputs.solar_generation for h in hours)),
    }
    for index in range(n_ledgers):
        import_cost = sum(h.ledgers[index].import_cost for h in hours)
        export_profit = sum(h.ledgers[index].export_profit for h in hours)
        summary[_ledger_key("totalImportCost", index)] = _round2(import_cost)
        summary[_ledger_key("totalExportProfit", index)] = _round2(export_profit)
        summary[_ledger_key("netCost", index)] = _round2(import_cost - export_profit)

    summary.update(
        {
            "finalBatteryCapacity": _round2(final_level),
            "finalBatteryPercent": round(final_level / capacity_kwh * 100.0, 1)
            if capacity_kwh
            else 0.0,
            "goodImportPriceThreshold": analysis.thresholds.good_import_threshold,
            "goodExportPriceThreshold": analysis.thresholds.good_export_threshold,
            "scheduleWindows": [a.to_dict() for a in analysis.allocations],
            "exportPriceZones": _list_or_sentinel(analysis.export_price_zones),
            "expensiveImportZones": _list_or_sentinel(analysis.expensive_import_zones),
            "cheaperTariffZones": _list_or_sentinel(analysis.cheaper_tariff_zones),
            "neededEnergyProfile": _list_or_sentinel(analysis.needed_energy_profile),
        }
    )
    return summary


class SimulationApplication:
    """
    High-level orchestrator used by the CLI and the FastAPI surface.
    """

    def __init__(
        self,
        *,
        save_outputs: bool = False,
        output_root: str | Path | None = None,
    ) -> None:
        """
        Args:
            save_outputs: When True, every analysis is also written to disk.
            output_root: Directory receiving the reports (default from config).
        """
        self.save_outputs = save_outputs
        self.output_root = Path(output_root) if output_root is not None else None

    def generate_series(self, settings: AnalysisSettings) -> List[HourlyInput]:
        rng = build_rng(settings)
        pricing = build_pricing(settings, rng)
        return generate_scenario_data(build_scenario(settings), pricing, rng)

    def run_analysis(self, settings_source: SettingsSource = None) -> Dict[str, Any]:
        """
        Generate the day for the configured scenario and analyze it.

        Args:
            settings_source: Settings model, raw mapping, JSON path, or None
                for the bundled default.

        Returns:
            Mapping keyed by the scenario key to {name, hourlyData, summary}.

        Raises:
            InvalidScenarioError: If the settings fail validation.
        """
        settings = parse_settings(settings_source)
        series = self.generate_series(settings)
        return self.run_series(series, settings)

    def run_series(
        self,
        series: Sequence[HourlyInput],
        settings_source: SettingsSource = None,
    ) -> Dict[str, Any]:
        """
        Analyze a given 24-hour series instead of generating one.

        Prices, load and solar come from ``series``; the settings only supply
        battery parameters and the scenario label.
        """
        settings = parse_settings(settings_source)
        scenario = build_scenario(settings)
        energy_config = build_energy_config(settings)
        analyzer = DailyScheduleAnalyzer(
            energy_config,
            charge_target=settings.charge_target,
            strategy=settings.strategy,
        )
        analysis = analyzer.analyze(series)
        logger.info(
            "Analyzed scenario %s with pricing %s: net cost %.2f",
            scenario.key,
            settings.pricing_structure,
            sum(h.import_cost - h.export_profit for h in analysis.hours),
        )

        entry: Dict[str, Any] = {
            "name": scenario.name,
            "pricingStructure": settings.pricing_structure,
            "strategy": settings.strategy.value,
            "hourlyData": [hour.to_dict() for hour in analysis.hours],
            "summary": build_summary(analysis, energy_config.capacity_kwh),
        }
        seed = resolve_seed(settings)
        if seed is not None:
            entry["seed"] = seed

        result = {scenario.key: entry}
        if self.save_outputs:
            output_dir = generate_report(result, output_root=self.output_root)
            entry["outputDir"] = str(output_dir)
        return result
