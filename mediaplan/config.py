"""
mediaplan/config.py

Environment-driven settings for the dashboard pipelines and CLI.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

DEFAULT_TOP_N = 10
DEFAULT_MATRIX_LIMIT = 15
DEFAULT_OUTPUT_DIR = "output"
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value.strip())
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


@dataclass(frozen=True)
class DashboardSettings:
    """
    Panel sizing and output locations.
    """

    top_n: int = DEFAULT_TOP_N
    matrix_limit: int = DEFAULT_MATRIX_LIMIT
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    log_level: str = DEFAULT_LOG_LEVEL


@lru_cache(maxsize=1)
def get_dashboard_settings() -> DashboardSettings:
    """
    Return cached dashboard settings from environment variables.
    """

    log_level = _get_str_env("MEDIAPLAN_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    if log_level not in LOG_LEVELS:
        log_level = DEFAULT_LOG_LEVEL
    return DashboardSettings(
        top_n=max(1, _get_int_env("MEDIAPLAN_TOP_N", DEFAULT_TOP_N)),
        matrix_limit=max(1, _get_int_env("MEDIAPLAN_MATRIX_LIMIT", DEFAULT_MATRIX_LIMIT)),
        output_dir=Path(_get_str_env("MEDIAPLAN_OUTPUT_DIR", DEFAULT_OUTPUT_DIR)),
        log_level=log_level,
    )
