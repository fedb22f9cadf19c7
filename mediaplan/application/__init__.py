"""Application layer package."""

from .aggregation import ReductionMode, group_reduce
from .dashboard_service import (
    DeliveryReach,
    InvestmentDistribution,
    KPISummary,
    PerformanceAnalysis,
    delivery_reach,
    investment_distribution,
    kpi_summary,
    performance_analysis,
)
from .report_service import build_summary, run_dashboard_pipeline
from .session_service import DashboardSession, DashboardView, render_snapshot

__all__ = [
    "ReductionMode",
    "group_reduce",
    "InvestmentDistribution",
    "DeliveryReach",
    "PerformanceAnalysis",
    "KPISummary",
    "investment_distribution",
    "delivery_reach",
    "performance_analysis",
    "kpi_summary",
    "DashboardSession",
    "DashboardView",
    "render_snapshot",
    "build_summary",
    "run_dashboard_pipeline",
]
