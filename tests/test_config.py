from __future__ import annotations

import logging
from pathlib import Path

import pytest

from sim_battery_schedule import config


def test_default_seed_is_none_without_env() -> None:
    assert config.get_default_seed() is None


def test_default_seed_reads_env(monkeypatch) -> None:
    monkeypatch.setenv("SIM_BATTERY_SEED", "123")
    assert config.get_default_seed() == 123


def test_invalid_seed_is_reported(monkeypatch) -> None:
    monkeypatch.setenv("SIM_BATTERY_SEED", "abc")
    with pytest.raises(ValueError, match="SIM_BATTERY_SEED"):
        config.get_default_seed()


def test_log_level_falls_back_to_info(monkeypatch) -> None:
    assert config.get_log_level() == logging.INFO
    monkeypatch.setenv("SIM_BATTERY_LOG_LEVEL", "debug")
    assert config.get_log_level() == logging.DEBUG
    monkeypatch.setenv("SIM_BATTERY_LOG_LEVEL", "chatty")
    assert config.get_log_level() == logging.INFO


def test_results_dir_from_env(monkeypatch, tmp_path) -> None:
    assert config.get_results_dir() == Path("results")
    monkeypatch.setenv("SIM_BATTERY_RESULTS_DIR", str(tmp_path))
    assert config.get_results_dir() == tmp_path


def test_dotenv_never_overrides_existing_env(monkeypatch, tmp_path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("# comment\nSIM_BATTERY_SEED=5\nSIM_BATTERY_LOG_LEVEL='DEBUG'\n")
    monkeypatch.setenv("SIM_BATTERY_SEED", "1")
    # Register the variable with monkeypatch so the loader's write is undone.
    monkeypatch.setenv("SIM_BATTERY_LOG_LEVEL", "INFO")
    monkeypatch.delenv("SIM_BATTERY_LOG_LEVEL")

    parsed = config._load_dotenv(str(env_file))

    assert parsed == {"SIM_BATTERY_SEED": "5", "SIM_BATTERY_LOG_LEVEL": "DEBUG"}
    assert config.get_default_seed() == 1
    assert config.get_log_level() == logging.DEBUG
