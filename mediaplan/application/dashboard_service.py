"""Application service computing the media plan dashboard panels."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, List

import polars as pl

from mediaplan.application.aggregation import ReductionMode, group_reduce, total
from mediaplan.application.reporting.metrics import PER_THOUSAND, cpm
from mediaplan.application.reporting.selectors import first_matching, has_positive_pair
from mediaplan.config import DEFAULT_MATRIX_LIMIT, DEFAULT_TOP_N
from mediaplan.domain.models import AggregateEntry

OUTLET_KEY: List[str] = ["channel", "outlet"]


def _entries_to_dicts(entries: List[AggregateEntry]) -> List[Dict[str, Any]]:
    return [entry.to_dict() for entry in entries]


@dataclass(frozen=True)
class _Panel:
    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        return {item.name: _entries_to_dicts(getattr(self, item.name)) for item in fields(self)}


@dataclass(frozen=True)
class InvestmentDistribution(_Panel):
    by_market: List[AggregateEntry]
    by_month: List[AggregateEntry]
    by_campaign: List[AggregateEntry]
    by_channel: List[AggregateEntry]


@dataclass(frozen=True)
class DeliveryReach(_Panel):
    by_outlet: List[AggregateEntry]
    by_format: List[AggregateEntry]
    by_market: List[AggregateEntry]
    by_channel: List[AggregateEntry]


@dataclass(frozen=True)
class PerformanceAnalysis(_Panel):
    avg_cpm_by_outlet: List[AggregateEntry]
    avg_cpm_by_channel: List[AggregateEntry]
    avg_cpc_by_outlet: List[AggregateEntry]
    cpm_by_outlet: List[AggregateEntry]
    cpm_by_channel: List[AggregateEntry]
    investment_vs_impressions: List[AggregateEntry]


@dataclass(frozen=True)
class KPISummary:
    total_investment: float
    total_gross_investment: float
    total_impressions: float
    total_clicks: float
    total_insertions: float
    average_cpm: float
    weighted_cpm: float
    record_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {item.name: getattr(self, item.name) for item in fields(self)}


def investment_distribution(frame: pl.DataFrame, top_n: int = DEFAULT_TOP_N) -> InvestmentDistribution:
    """Gross (BRUTO 20%) investment split by market, month, campaign and channel."""
    value = "gross_investment"
    return InvestmentDistribution(
        by_market=group_reduce(frame, "market", value, sort=True, top_n=top_n),
        by_month=group_reduce(frame, "month", value),
        by_campaign=group_reduce(frame, "campaign", value, sort=True),
        by_channel=group_reduce(frame, "channel", value),
    )


def delivery_reach(frame: pl.DataFrame, top_n: int = DEFAULT_TOP_N) -> DeliveryReach:
    """Insertion totals; outlets are keyed ``"<channel> - <outlet>"``."""
    value = "insertions"
    return DeliveryReach(
        by_outlet=group_reduce(frame, OUTLET_KEY, value, sort=True, top_n=top_n),
        by_format=group_reduce(frame, "format", value),
        by_market=group_reduce(frame, "market", value, sort=True, top_n=top_n),
        by_channel=group_reduce(frame, "channel", value),
    )


def performance_analysis(
    frame: pl.DataFrame,
    top_n: int = DEFAULT_TOP_N,
    matrix_limit: int = DEFAULT_MATRIX_LIMIT,
) -> PerformanceAnalysis:
    """Cost efficiency per outlet and channel.

    ``avg_*`` panels average the CPM/CPC already stated on each line, ignoring
    lines without one. ``cpm_by_*`` panels recompute CPM from summed net
    investment and impressions, so large buys weigh more.
    """
    average = ReductionMode.AVERAGE
    ratio = ReductionMode.RATIO
    matrix = group_reduce(frame, "outlet", "net_investment", ratio, denominator="impressions", scale=PER_THOUSAND)
    return PerformanceAnalysis(
        avg_cpm_by_outlet=group_reduce(frame, "outlet", "cpm", average, positive_only=True, sort=True, top_n=top_n),
        avg_cpm_by_channel=group_reduce(frame, "channel", "cpm", average, positive_only=True),
        avg_cpc_by_outlet=group_reduce(frame, "outlet", "cpc", average, positive_only=True, sort=True, top_n=top_n),
        cpm_by_outlet=group_reduce(
            frame,
            "outlet",
            "net_investment",
            ratio,
            denominator="impressions",
            scale=PER_THOUSAND,
            positive_only=True,
            sort=True,
            top_n=top_n,
        ),
        cpm_by_channel=group_reduce(
            frame,
            "channel",
            "net_investment",
            ratio,
            denominator="impressions",
            scale=PER_THOUSAND,
            positive_only=True,
            sort=True,
        ),
        investment_vs_impressions=first_matching(matrix, has_positive_pair, limit=matrix_limit),
    )


def kpi_summary(frame: pl.DataFrame) -> KPISummary:
    """Whole-plan totals; ``average_cpm`` is the plain mean of positive line CPMs."""
    cpm_entries = group_reduce(frame, None, "cpm", ReductionMode.AVERAGE)
    total_investment = total(frame, "net_investment")
    total_impressions = total(frame, "impressions")
    return KPISummary(
        total_investment=total_investment,
        total_gross_investment=total(frame, "gross_investment"),
        total_impressions=total_impressions,
        total_clicks=total(frame, "clicks"),
        total_insertions=total(frame, "insertions"),
        average_cpm=cpm_entries[0].metric if cpm_entries else 0.0,
        weighted_cpm=cpm(total_investment, total_impressions),
        record_count=int(frame.height),
    )
