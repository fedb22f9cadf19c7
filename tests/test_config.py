"""
tests/test_config.py

Environment overrides for dashboard settings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from mediaplan.config import DEFAULT_MATRIX_LIMIT, DEFAULT_TOP_N, get_dashboard_settings


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    get_dashboard_settings.cache_clear()
    yield
    get_dashboard_settings.cache_clear()


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("MEDIAPLAN_TOP_N", "MEDIAPLAN_MATRIX_LIMIT", "MEDIAPLAN_OUTPUT_DIR", "MEDIAPLAN_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    settings = get_dashboard_settings()
    assert settings.top_n == DEFAULT_TOP_N == 10
    assert settings.matrix_limit == DEFAULT_MATRIX_LIMIT == 15
    assert settings.output_dir == Path("output")
    assert settings.log_level == "INFO"


def test_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MEDIAPLAN_TOP_N", " 5 ")
    monkeypatch.setenv("MEDIAPLAN_MATRIX_LIMIT", "20")
    monkeypatch.setenv("MEDIAPLAN_OUTPUT_DIR", "relatorios")
    monkeypatch.setenv("MEDIAPLAN_LOG_LEVEL", "debug")
    settings = get_dashboard_settings()
    assert settings.top_n == 5
    assert settings.matrix_limit == 20
    assert settings.output_dir == Path("relatorios")
    assert settings.log_level == "DEBUG"


def test_bad_values_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MEDIAPLAN_TOP_N", "many")
    monkeypatch.setenv("MEDIAPLAN_MATRIX_LIMIT", "0")
    monkeypatch.setenv("MEDIAPLAN_LOG_LEVEL", "LOUD")
    settings = get_dashboard_settings()
    assert settings.top_n == DEFAULT_TOP_N
    assert settings.matrix_limit == 1
    assert settings.log_level == "INFO"
