"""
tests/test_session_service.py

DashboardSession lifecycle: upload, failed upload, reset, render.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List

import pytest

from mediaplan.application.session_service import DashboardSession, render_snapshot
from mediaplan.config import DashboardSettings
from mediaplan.domain.errors import MissingFieldsError, NoDataLoadedError
from mediaplan.ingestion import MediaPlanSnapshot


def _json_bytes(payload: Any) -> bytes:
    return json.dumps(payload, ensure_ascii=False).encode("utf-8")


@pytest.fixture()
def session(settings: DashboardSettings) -> DashboardSession:
    return DashboardSession(settings=settings)


class TestDashboardSession:
    def test_starts_empty(self, session: DashboardSession) -> None:
        assert not session.is_loaded
        assert session.snapshot is None
        with pytest.raises(NoDataLoadedError):
            session.render()

    def test_upload_replaces_snapshot(self, session: DashboardSession, media_plan_rows: List[Dict[str, Any]]) -> None:
        first = session.upload(_json_bytes(media_plan_rows), filename="plano.json")
        assert session.is_loaded
        assert len(first) == 4
        assert first.source_name == "plano.json"

        second = session.upload(_json_bytes(media_plan_rows[:1]), filename="outro.json")
        assert session.snapshot is second
        assert len(session.snapshot) == 1

    def test_failed_upload_keeps_previous_snapshot(
        self, session: DashboardSession, media_plan_rows: List[Dict[str, Any]]
    ) -> None:
        loaded = session.upload(_json_bytes(media_plan_rows))
        with pytest.raises(MissingFieldsError):
            session.upload(_json_bytes([{"CAMPANHA": "X"}]))
        assert session.snapshot is loaded
        assert session.render().kpis.record_count == 4

    def test_reset(self, session: DashboardSession, media_plan_rows: List[Dict[str, Any]]) -> None:
        session.upload(_json_bytes(media_plan_rows))
        session.reset()
        assert not session.is_loaded
        with pytest.raises(NoDataLoadedError):
            session.render()

    def test_render_is_repeatable(self, session: DashboardSession, media_plan_rows: List[Dict[str, Any]]) -> None:
        session.upload(_json_bytes(media_plan_rows))
        assert session.render().to_dict() == session.render().to_dict()

    def test_settings_limit_ranked_panels(self, media_plan_rows: List[Dict[str, Any]]) -> None:
        session = DashboardSession(settings=DashboardSettings(top_n=1, matrix_limit=2))
        session.upload(_json_bytes(media_plan_rows))
        view = session.render()
        assert [e.key for e in view.investment.by_market] == ["SP"]
        assert [e.key for e in view.delivery.by_outlet] == ["TV - Globo"]
        assert len(view.performance.investment_vs_impressions) == 2


class TestRenderSnapshot:
    def test_view_sections(self, snapshot: MediaPlanSnapshot, settings: DashboardSettings) -> None:
        payload = render_snapshot(snapshot, settings).to_dict()
        assert list(payload) == ["kpis", "investment_distribution", "delivery_reach", "performance_analysis"]
        assert payload["kpis"]["record_count"] == 4
        assert payload["investment_distribution"]["by_market"][0] == {"key": "SP", "metric": 15_000.0}
