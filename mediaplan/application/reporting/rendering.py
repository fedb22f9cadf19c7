"""Text rendering helpers for the CLI summary."""

from __future__ import annotations

from typing import Callable, List, Sequence

from mediaplan.application.reporting.metrics import fmt_brl, fmt_number
from mediaplan.domain.models import AggregateEntry


def kpi_overview_comment(kpis: dict) -> str:
    return (
        f"{fmt_number(kpis.get('record_count'))} linhas | "
        f"Investimento líquido {fmt_brl(kpis.get('total_investment'))} | "
        f"Impactos {fmt_number(kpis.get('total_impressions'))} | "
        f"CPM médio {fmt_brl(kpis.get('average_cpm'))} | "
        f"Cliques {fmt_number(kpis.get('total_clicks'))}"
    )


def panel_lines(
    title: str,
    entries: Sequence[AggregateEntry],
    formatter: Callable[[float], str] = fmt_number,
    limit: int = 5,
) -> List[str]:
    if not entries:
        return [f"{title}: sem dados"]
    lines = [f"{title}:"]
    for idx, entry in enumerate(entries[:limit], start=1):
        lines.append(f"  {idx}) {entry.key or '(vazio)'}: {formatter(entry.metric)}")
    return lines
