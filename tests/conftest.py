"""Shared media plan fixtures."""

from __future__ import annotations

from typing import Any, Dict, List

import pytest

from mediaplan.config import DashboardSettings
from mediaplan.ingestion import MediaPlanSnapshot

NET = "R$ NEGOCIADO TOTAL \n(LÍQUIDO)"
GROSS = "R$ NEGOCIADO  TOTAL\n(BRUTO 20%)"
IMPACTS = "IMPACTOS                   ESTIMADOS"


def make_row(**overrides: Any) -> Dict[str, Any]:
    row: Dict[str, Any] = {
        "CAMPANHA": "Verão",
        "PRAÇA": "SP",
        "MEIO": "TV",
        "VEÍCULO": "Globo",
        "MÊS": "JAN",
        "FORMATO": "30s",
        "INS": 0,
        NET: "R$-",
        GROSS: "R$-",
        IMPACTS: 0,
        "CPM": "R$-",
        "CLIQUES": 0,
        "CPC": "R$-",
    }
    row.update(overrides)
    return row


@pytest.fixture()
def media_plan_rows() -> List[Dict[str, Any]]:
    return [
        make_row(
            **{"PRAÇA": "SP", "MEIO": "TV", "VEÍCULO": "Globo", "MÊS": "JAN", "INS": 5},
            **{NET: "R$ 8.000,00", GROSS: "R$ 10.000,00", IMPACTS: 1_000_000, "CPM": "R$ 8,00", "CLIQUES": 0},
        ),
        make_row(
            **{"PRAÇA": "SP", "MEIO": "TV", "VEÍCULO": "Globo", "MÊS": "FEV", "INS": 3},
            **{NET: "R$ 4.000,00", GROSS: "R$ 5.000,00", IMPACTS: 250_000, "CPM": "R$ 16,00"},
        ),
        make_row(
            **{"PRAÇA": "RJ", "MEIO": "Radio", "VEÍCULO": "CBN", "MÊS": "JAN", "FORMATO": "15s", "INS": 2},
            **{NET: "R$ 1.600,00", GROSS: "R$ 2.000,00", IMPACTS: 100_000, "CPM": "R$-"},
        ),
        make_row(
            **{"PRAÇA": "BH", "MEIO": "Digital", "VEÍCULO": "Meta", "MÊS": "FEV", "FORMATO": "Banner", "INS": "1"},
            **{NET: 900.0, GROSS: 1125.0, IMPACTS: "300.000", "CPM": 3.0, "CLIQUES": 1500, "CPC": "R$ 0,60"},
        ),
    ]


@pytest.fixture()
def snapshot(media_plan_rows: List[Dict[str, Any]]) -> MediaPlanSnapshot:
    return MediaPlanSnapshot.from_rows(media_plan_rows, source_name="plano.json")


@pytest.fixture()
def settings() -> DashboardSettings:
    return DashboardSettings()
