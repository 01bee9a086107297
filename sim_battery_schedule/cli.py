from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, Sequence

from .application import SimulationApplication
from .config import configure_logging
from .scenario_setup import InvalidScenarioError, load_scenario_data
from .simulation import SCENARIOS, DispatchStrategy, IdlePolicy, list_pricing_structures

# CLI option dest -> settings key (camelCase wire form).
_SETTING_OVERRIDES = {
    "capacity": "batteryCapacity",
    "charging_efficiency": "chargingEfficiency",
    "discharging_efficiency": "dischargingEfficiency",
    "charging_efficiency_2": "chargingEfficiency2",
    "discharging_efficiency_2": "dischargingEfficiency2",
    "charging_c_rate": "chargingCRate",
    "discharging_c_rate": "dischargingCRate",
    "pricing": "pricingStructure",
    "scenario": "scenario",
    "seed": "seed",
    "initial_soc": "initialSocFraction",
    "idle_policy": "idlePolicy",
    "strategy": "strategy",
}

_FLAG_OVERRIDES = {
    "high_solar": "highSolar",
    "high_load": "highLoad",
    "no_solar_and_load": "noSolarAndLoad",
}


def build_argument_parser() -> argparse.ArgumentParser:
    """
    Build the CLI argument parser used by entry points.

    Returns:
        Configured argparse.ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(description="Daily household battery schedule simulator")
    sub = parser.add_subparsers(dest="command")

    analyze = sub.add_parser("analyze", help="Simulate one day and print the result as JSON")
    analyze.add_argument(
        "--scenario-file",
        type=str,
        default=None,
        help="Path to a JSON file with analysis settings",
    )
    analyze.add_argument("--capacity", type=float, help="Battery capacity in kWh")
    analyze.add_argument("--charging-efficiency", type=float)
    analyze.add_argument("--discharging-efficiency", type=float)
    analyze.add_argument("--charging-efficiency-2", type=float, dest="charging_efficiency_2")
    analyze.add_argument("--discharging-efficiency-2", type=float, dest="discharging_efficiency_2")
    analyze.add_argument("--charging-c-rate", type=float)
    analyze.add_argument("--discharging-c-rate", type=float)
    analyze.add_argument("--pricing", type=str, help="Pricing structure key")
    analyze.add_argument("--scenario", choices=sorted(SCENARIOS), help="Explicit scenario key")
    analyze.add_argument("--high-solar", action="store_true", default=None)
    analyze.add_argument("--high-load", action="store_true", default=None)
    analyze.add_argument("--no-solar-and-load", action="store_true", default=None)
    analyze.add_argument("--seed", type=int, help="Seed for price jitter")
    analyze.add_argument("--initial-soc", type=float, help="Initial battery level (0-1)")
    analyze.add_argument(
        "--idle-policy",
        choices=[policy.value for policy in IdlePolicy],
        help="Grid handling of unscheduled hours",
    )
    analyze.add_argument(
        "--strategy",
        choices=[strategy.value for strategy in DispatchStrategy],
        help="Window optimization or the rule-based dispatcher",
    )
    analyze.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Directory receiving the report (default SIM_BATTERY_RESULTS_DIR)",
    )
    analyze.add_argument(
        "--no-save",
        action="store_true",
        help="Do not write the report to disk",
    )

    sub.add_parser("list", help="List pricing structures and scenarios")
    return parser


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, default=str, ensure_ascii=False))


def _settings_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    if args.scenario_file:
        path = Path(args.scenario_file)
        if not path.exists():
            raise SystemExit(f"File not found: {path}")
        try:
            settings = load_scenario_data(path)
        except json.JSONDecodeError as exc:
            raise SystemExit(f"Invalid JSON file ({path}): {exc}") from exc
        if not isinstance(settings, dict):
            raise SystemExit(f"Invalid settings file ({path}): expected a JSON object")
    else:
        settings = load_scenario_data()

    for dest, key in _SETTING_OVERRIDES.items():
        value = getattr(args, dest)
        if value is not None:
            settings[key] = value
    for dest, key in _FLAG_OVERRIDES.items():
        if getattr(args, dest):
            settings[key] = True
    return settings


def main(argv: Sequence[str] | None = None) -> None:
    """
    Entry point for the command-line interface.
    """
    configure_logging()
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    if args.command == "list":
        _print_json(
            {
                "pricingStructures": list_pricing_structures(),
                "scenarios": [
                    {"key": s.key, "name": s.name} for s in SCENARIOS.values()
                ],
            }
        )
        return

    if args.command == "analyze":
        app = SimulationApplication(
            save_outputs=not args.no_save,
            output_root=args.output_dir,
        )
        try:
            result = app.run_analysis(_settings_from_args(args))
        except (InvalidScenarioError, ValueError) as exc:
            parser.error(str(exc))
        _print_json(result)
        return

    parser.error("Specify a command (analyze/list).")


if __name__ == "__main__":
    main()
