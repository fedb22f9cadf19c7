"""Media plan dashboard report pipeline: load, render, export."""

from __future__ import annotations

from dataclasses import fields
from datetime import datetime
from pathlib import Path
from time import perf_counter
from typing import Any, Dict, List

import polars as pl

from mediaplan.application.reporting.metrics import fmt_brl, fmt_number
from mediaplan.application.reporting.rendering import kpi_overview_comment, panel_lines
from mediaplan.application.session_service import DashboardView, render_snapshot
from mediaplan.config import DashboardSettings, get_dashboard_settings
from mediaplan.domain.models import AggregateEntry
from mediaplan.infrastructure.excel_repository import load_input_snapshot, save_output_workbook
from mediaplan.infrastructure.report_exporter import save_summary_json

SUMMARY_JSON_NAME = "summary.json"
SUMMARY_EXCEL_NAME = "summary.xlsx"
ENTRY_COLUMNS: Dict[str, Any] = {
    "key": pl.Utf8,
    "metric": pl.Float64,
    "count": pl.Int64,
    "numerator": pl.Float64,
    "denominator": pl.Float64,
}


def build_summary(view: DashboardView, source_name: str | None = None) -> Dict[str, Any]:
    summary: Dict[str, Any] = {
        "source": source_name,
        "generated_at": datetime.now().isoformat(timespec="seconds"),
    }
    summary.update(view.to_dict())
    return summary


def _entries_frame(entries: List[AggregateEntry]) -> pl.DataFrame:
    columns = {
        name: [getattr(entry, name) for entry in entries]
        for name in ENTRY_COLUMNS
    }
    frame = pl.DataFrame(columns, schema=ENTRY_COLUMNS)
    # Drop optional columns no entry in this panel fills.
    keep = [name for name in frame.columns if name in ("key", "metric") or frame[name].null_count() < frame.height]
    return frame.select(keep)


def build_output_sheets(view: DashboardView) -> Dict[str, pl.DataFrame]:
    sheets: Dict[str, pl.DataFrame] = {"kpis": pl.DataFrame([view.kpis.to_dict()])}
    for prefix, panel in (
        ("inv", view.investment),
        ("ins", view.delivery),
        ("perf", view.performance),
    ):
        for item in fields(panel):
            sheets[f"{prefix}_{item.name}"] = _entries_frame(getattr(panel, item.name))
    return sheets


def summary_text(view: DashboardView) -> List[str]:
    lines = [kpi_overview_comment(view.kpis.to_dict())]
    lines.extend(panel_lines("Investimento por praça", view.investment.by_market, fmt_brl))
    lines.extend(panel_lines("Inserções por veículo", view.delivery.by_outlet, fmt_number))
    lines.extend(panel_lines("CPM médio por veículo", view.performance.avg_cpm_by_outlet, fmt_brl))
    return lines


def run_dashboard_pipeline(
    input_path: Path,
    output_dir: Path | None = None,
    settings: DashboardSettings | None = None,
) -> Dict[str, Any]:
    settings = settings or get_dashboard_settings()
    output_dir = output_dir or settings.output_dir
    pipeline_start = perf_counter()
    stage_start = pipeline_start
    stage_timings: list[tuple[str, float]] = []

    def _mark(stage_name: str) -> None:
        nonlocal stage_start
        now = perf_counter()
        stage_timings.append((stage_name, now - stage_start))
        stage_start = now

    output_json_path = output_dir / SUMMARY_JSON_NAME
    output_excel_path = output_dir / SUMMARY_EXCEL_NAME

    snapshot = load_input_snapshot(input_path)
    _mark("load_input_snapshot")
    view = render_snapshot(snapshot, settings)
    _mark("render_snapshot")

    summary = build_summary(view, source_name=snapshot.source_name)
    save_summary_json(output_json_path, summary)
    _mark("save_json")

    excel_saved, excel_error_message = save_output_workbook(output_excel_path, build_output_sheets(view))
    _mark("save_excel")
    total_elapsed = perf_counter() - pipeline_start

    for line in summary_text(view):
        print(line)
    stage_text = ", ".join([f"{name}={seconds:.3f}s" for name, seconds in stage_timings])
    print(f"Stage Timing: {stage_text}")
    print(f"Total Elapsed: {total_elapsed:.3f}s")
    print(f"Saved JSON: {output_json_path}")
    if excel_saved:
        print(f"Saved Excel: {output_excel_path}")
    else:
        print(f"Excel save skipped (file may be open/locked): {excel_error_message}")
    return summary
