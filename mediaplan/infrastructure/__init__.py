"""Infrastructure layer package."""

from .excel_repository import load_input_snapshot, save_output_workbook, write_output_excel
from .report_exporter import save_summary_json

__all__ = ["load_input_snapshot", "save_output_workbook", "write_output_excel", "save_summary_json"]
