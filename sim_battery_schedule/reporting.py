from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Mapping

import matplotlib.pyplot as plt
import pandas as pd

from .config import get_results_dir


def _slugify(value: str) -> str:
    return "".join(c if c.isalnum() or c in ("-", "_") else "_" for c in value.strip()).strip("_")


def _create_results_directory(scenario_name: str, base_dir: Path) -> Path:
    timestamp = datetime.now().strftime("%y%m%d_%H%M%S")
    slug = _slugify(scenario_name) or "scenario"
    output_dir = base_dir / f"{timestamp}_{slug}"
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


def hourly_dataframe(entry: Mapping[str, Any]) -> pd.DataFrame:
    """One row per simulated hour, indexed by hour."""
    df = pd.DataFrame(entry["hourlyData"])
    return df.set_index("hour")


def _plot_daily_schedule(df: pd.DataFrame, title: str, save_path: Path) -> None:
    fig, (ax_price, ax_energy) = plt.subplots(2, 1, figsize=(10, 7), sharex=True)

    ax_price.step(df.index, df["importPrice"], where="mid", label="Import price")
    ax_price.step(df.index, df["exportPrice"], where="mid", label="Export price")
    ax_price.set_ylabel("Price per kWh")
    ax_price.set_title(title)
    ax_price.grid(True, alpha=0.3)
    ax_price.legend(loc="best", fontsize=8)

    ax_energy.bar(df.index, df["gridImport"], color="#d62728", alpha=0.6, label="Grid import")
    ax_energy.bar(df.index, -df["gridExport"], color="#2ca02c", alpha=0.6, label="Grid export")
    ax_energy.plot(df.index, df["batteryLevel"], color="#1f77b4", marker="o", label="Battery level")
    ax_energy.plot(df.index, df["load"], color="#7f7f7f", linestyle="--", label="Load")
    ax_energy.plot(df.index, df["solarGeneration"], color="#ff7f0e", linestyle=":", label="Solar")
    ax_energy.set_xlabel("Hour")
    ax_energy.set_ylabel("kWh")
    ax_energy.set_xticks(range(0, 24, 2))
    ax_energy.grid(True, alpha=0.3)
    ax_energy.legend(loc="best", fontsize=8)

    fig.tight_layout()
    fig.savefig(save_path, dpi=150)
    plt.close(fig)


def generate_report(
    result: Mapping[str, Dict[str, Any]],
    output_root: Path | None = None,
) -> Path:
    """
    Write an analysis result to disk.

    Creates a timestamped directory with ``hourly.csv``, ``summary.json`` and
    ``daily_schedule.png`` for the scenario in ``result``.

    Args:
        result: Mapping returned by SimulationApplication.run_analysis().
        output_root: Parent directory (default from SIM_BATTERY_RESULTS_DIR).

    Returns:
        Path of the created directory.
    """
    scenario_key, entry = next(iter(result.items()))
    base_dir = output_root if output_root is not None else get_results_dir()
    output_dir = _create_results_directory(scenario_key, Path(base_dir))

    df = hourly_dataframe(entry)
    df.to_csv(output_dir / "hourly.csv")
    (output_dir / "summary.json").write_text(
        json.dumps(entry["summary"], indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    title = f"{entry['name']} ({entry.get('pricingStructure', '')})"
    _plot_daily_schedule(df, title, output_dir / "daily_schedule.png")
    return output_dir
