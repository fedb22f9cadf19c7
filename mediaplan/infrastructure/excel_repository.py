"""Infrastructure adapter for file-based media plan input and workbook output."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any, Dict

import polars as pl

from mediaplan.ingestion import MediaPlanSnapshot, load_file

SHEET_NAME_LIMIT = 31
HEADER_FREEZE_CELL = "A2"


def load_input_snapshot(path: Path) -> MediaPlanSnapshot:
    rows = load_file(path)
    return MediaPlanSnapshot.from_rows(rows, source_name=path.name)


def _import_openpyxl_workbook() -> Any:
    try:
        from openpyxl import Workbook
    except Exception as exc:  # pragma: no cover
        raise RuntimeError("openpyxl is required for Excel fallback I/O.") from exc
    return Workbook


def _sheet_cell(value: Any) -> Any:
    # openpyxl cannot store NaN or inf.
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _sheet_title(name: str) -> str:
    return str(name)[:SHEET_NAME_LIMIT]


def _write_with_polars(path: Path, sheets: Dict[str, pl.DataFrame]) -> bool:
    if not sheets:
        return False
    try:
        import xlsxwriter
    except Exception:
        return False

    try:
        with xlsxwriter.Workbook(str(path)) as workbook:
            for sheet_name, frame in sheets.items():
                frame.write_excel(workbook=workbook, worksheet=_sheet_title(sheet_name))
        return True
    except PermissionError:
        raise
    except Exception:
        return False


def _write_with_openpyxl(path: Path, sheets: Dict[str, pl.DataFrame]) -> None:
    Workbook = _import_openpyxl_workbook()
    workbook = Workbook()
    workbook.remove(workbook.active)

    for sheet_name, frame in sheets.items():
        worksheet = workbook.create_sheet(title=_sheet_title(sheet_name))
        worksheet.append(frame.columns)
        for row in frame.rows():
            worksheet.append([_sheet_cell(value) for value in row])
        worksheet.freeze_panes = HEADER_FREEZE_CELL

    workbook.save(path)


def write_output_excel(path: str | Path, sheets: Dict[str, pl.DataFrame]) -> None:
    """One sheet per panel; xlsxwriter through polars, openpyxl when that fails."""
    excel_path = Path(path)
    excel_path.parent.mkdir(parents=True, exist_ok=True)

    if _write_with_polars(excel_path, sheets):
        return
    _write_with_openpyxl(excel_path, sheets)


def save_output_workbook(path: Path, sheets: dict[str, pl.DataFrame]) -> tuple[bool, str]:
    try:
        write_output_excel(path, sheets)
    except PermissionError as exc:
        return False, str(exc)
    return True, ""
