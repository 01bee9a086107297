from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict


def _load_dotenv(path: str = ".env") -> Dict[str, str]:
    """
    Basic .env loader to populate os.environ.
    Existing environment variables are never overridden.
    Returns a mapping of parsed key/value pairs.
    """
    env_path = Path(path)
    if not env_path.exists():
        return {}

    parsed: Dict[str, str] = {}
    for line in env_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        os.environ.setdefault(key, value)
        parsed[key] = value
    return parsed


_load_dotenv()


def get_log_level() -> int:
    """
    Log level for the CLI and API entry points.

    Returns:
        Numeric logging level from SIM_BATTERY_LOG_LEVEL (default INFO).
    """
    name = os.getenv("SIM_BATTERY_LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def get_default_seed() -> int | None:
    """
    Seed used when a request does not carry one.

    Returns:
        Integer from SIM_BATTERY_SEED, or None to draw from system entropy.
    """
    raw = os.getenv("SIM_BATTERY_SEED")
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"SIM_BATTERY_SEED must be an integer, got {raw!r}") from exc


def get_results_dir() -> Path:
    """Root directory for reports written by the CLI."""
    return Path(os.getenv("SIM_BATTERY_RESULTS_DIR", "results")).expanduser()


def configure_logging(level: int | None = None) -> None:
    """Configure the root logger for an entry point."""
    logging.basicConfig(
        level=level if level is not None else get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
