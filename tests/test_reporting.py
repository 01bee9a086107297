from __future__ import annotations

import json

import pandas as pd

from sim_battery_schedule.application import SimulationApplication
from sim_battery_schedule.reporting import generate_report, hourly_dataframe


def test_generate_report_writes_all_artifacts(tmp_path, simple_cheaper_series) -> None:
    result = SimulationApplication().run_series(simple_cheaper_series)

    output_dir = generate_report(result, output_root=tmp_path)

    assert output_dir.parent == tmp_path
    assert output_dir.name.endswith("lowSolarLowLoad")
    assert (output_dir / "daily_schedule.png").stat().st_size > 0

    hourly = pd.read_csv(output_dir / "hourly.csv", index_col="hour")
    assert list(hourly.index) == list(range(24))
    assert {"batteryLevel", "gridImport2", "reason"} <= set(hourly.columns)

    summary = json.loads((output_dir / "summary.json").read_text(encoding="utf-8"))
    assert summary == result["lowSolarLowLoad"]["summary"]


def test_hourly_dataframe_is_indexed_by_hour(flat_series) -> None:
    entry = SimulationApplication().run_series(flat_series)["lowSolarLowLoad"]
    df = hourly_dataframe(entry)
    assert df.index.name == "hour"
    assert len(df) == 24
    assert (df["batteryLevel"] >= 0).all()
