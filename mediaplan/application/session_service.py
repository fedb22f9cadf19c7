"""Dashboard session: owns the current upload and renders every panel from it."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict

from mediaplan.application.dashboard_service import (
    DeliveryReach,
    InvestmentDistribution,
    KPISummary,
    PerformanceAnalysis,
    delivery_reach,
    investment_distribution,
    kpi_summary,
    performance_analysis,
)
from mediaplan.config import DashboardSettings, get_dashboard_settings
from mediaplan.domain.errors import NoDataLoadedError
from mediaplan.ingestion import MediaPlanSnapshot, load_payload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardView:
    kpis: KPISummary
    investment: InvestmentDistribution
    delivery: DeliveryReach
    performance: PerformanceAnalysis

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kpis": self.kpis.to_dict(),
            "investment_distribution": self.investment.to_dict(),
            "delivery_reach": self.delivery.to_dict(),
            "performance_analysis": self.performance.to_dict(),
        }


def render_snapshot(snapshot: MediaPlanSnapshot, settings: DashboardSettings | None = None) -> DashboardView:
    """Run every panel over one snapshot; no state is kept between calls."""
    settings = settings or get_dashboard_settings()
    frame = snapshot.frame
    return DashboardView(
        kpis=kpi_summary(frame),
        investment=investment_distribution(frame, top_n=settings.top_n),
        delivery=delivery_reach(frame, top_n=settings.top_n),
        performance=performance_analysis(frame, top_n=settings.top_n, matrix_limit=settings.matrix_limit),
    )


class DashboardSession:
    """Holds at most one snapshot; a failed upload leaves the current one in place."""

    def __init__(self, settings: DashboardSettings | None = None) -> None:
        self.settings = settings or get_dashboard_settings()
        self._snapshot: MediaPlanSnapshot | None = None

    @property
    def snapshot(self) -> MediaPlanSnapshot | None:
        return self._snapshot

    @property
    def is_loaded(self) -> bool:
        return self._snapshot is not None

    def upload(
        self,
        data: bytes | str,
        content_type: str | None = None,
        filename: str | None = None,
    ) -> MediaPlanSnapshot:
        rows = load_payload(data, content_type=content_type, filename=filename)
        snapshot = MediaPlanSnapshot.from_rows(rows, source_name=filename)
        self._snapshot = snapshot
        logger.info("Loaded %d media plan records", len(snapshot))
        return snapshot

    def reset(self) -> None:
        self._snapshot = None
        logger.info("Dashboard reset; upload new data to continue")

    def render(self) -> DashboardView:
        snapshot = self._snapshot
        if snapshot is None:
            raise NoDataLoadedError()
        return render_snapshot(snapshot, self.settings)
