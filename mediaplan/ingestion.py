"""Media plan upload ingestion: JSON or first-sheet workbook to validated records."""

from __future__ import annotations

import io
import json
import logging
import unicodedata
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Sequence

import polars as pl

from mediaplan.domain.errors import (
    EmptyPayloadError,
    MalformedPayloadError,
    MissingFieldsError,
    ValidationError,
)
from mediaplan.domain.models import REQUIRED_FIELDS, MediaPlanRecord

logger = logging.getLogger(__name__)

FORMAT_JSON = "json"
FORMAT_SPREADSHEET = "spreadsheet"
JSON_CONTENT_TYPES = frozenset({"application/json", "text/json", "text/plain"})
SPREADSHEET_CONTENT_TYPES = frozenset(
    {
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "application/vnd.ms-excel.sheet.macroenabled.12",
        "application/vnd.ms-excel",
        "application/vnd.oasis.opendocument.spreadsheet",
    }
)
SNIFF_CONTENT_TYPES = frozenset({"", "application/octet-stream"})
JSON_EXTENSIONS = frozenset({".json"})
SPREADSHEET_EXTENSIONS = frozenset({".xlsx", ".xlsm", ".xls", ".ods"})
SPREADSHEET_SIGNATURES: tuple[bytes, ...] = (
    b"PK\x03\x04",  # zip container (xlsx/xlsm/ods)
    b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1",  # OLE2 (legacy xls)
)


def _import_openpyxl() -> Any:
    try:
        from openpyxl import load_workbook
    except Exception as exc:  # pragma: no cover
        raise RuntimeError("openpyxl is required to read spreadsheet uploads.") from exc
    return load_workbook


def _normalize_headers(raw_headers: Sequence[Any]) -> list[str]:
    headers: list[str] = []
    seen: dict[str, int] = {}
    for idx, value in enumerate(raw_headers):
        base = str(value) if value not in (None, "") else f"column_{idx + 1}"
        count = seen.get(base, 0)
        name = base if count == 0 else f"{base}_{count + 1}"
        seen[base] = count + 1
        headers.append(name)
    return headers


def _is_blank_row(values: Sequence[Any]) -> bool:
    return all(value is None or (isinstance(value, str) and not value.strip()) for value in values)


def _read_with_openpyxl(data: bytes) -> list[dict[str, Any]]:
    load_workbook = _import_openpyxl()
    workbook = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    try:
        if not workbook.worksheets:
            raise MalformedPayloadError("The workbook has no sheets.")
        worksheet = workbook.worksheets[0]
        row_iter = worksheet.iter_rows(values_only=True)
        header_row = next(row_iter, None)
        if header_row is None:
            return []

        headers = _normalize_headers(header_row)
        records: list[dict[str, Any]] = []
        for values in row_iter:
            if values is None or _is_blank_row(values):
                continue
            row_data: dict[str, Any] = {}
            for idx, name in enumerate(headers):
                row_data[name] = values[idx] if idx < len(values) else None
            records.append(row_data)
        return records
    finally:
        workbook.close()


def _read_excel_polars(source: Any, **kwargs: Any) -> Any:
    """Use larger schema sampling when supported to avoid dtype inference warnings."""
    try:
        return pl.read_excel(source, infer_schema_length=10000, **kwargs)  # type: ignore[arg-type]
    except TypeError:
        return pl.read_excel(source, **kwargs)  # type: ignore[arg-type]


def _read_with_polars(data: bytes) -> list[dict[str, Any]]:
    frame = _read_excel_polars(io.BytesIO(data), sheet_id=1)
    if isinstance(frame, dict):
        first_key = next(iter(frame.keys()), None)
        frame = frame[first_key] if first_key is not None else pl.DataFrame()
    return [row for row in frame.to_dicts() if not _is_blank_row(list(row.values()))]


def read_spreadsheet(data: bytes) -> list[dict[str, Any]]:
    """Rows of the first sheet keyed by the header row.

    openpyxl keeps each cell's own type, so a column mixing ``R$-`` text with
    numeric cells survives intact; calamine (through polars) covers the
    legacy ``.xls``/``.ods`` files openpyxl cannot open.
    """
    try:
        return _read_with_openpyxl(data)
    except MalformedPayloadError:
        raise
    except Exception as openpyxl_exc:
        logger.debug("openpyxl could not read workbook, trying polars: %s", openpyxl_exc)
        try:
            return _read_with_polars(data)
        except Exception as exc:
            raise MalformedPayloadError(f"Could not read spreadsheet: {exc}") from exc


def parse_json(data: bytes | str) -> Any:
    try:
        text = data.decode("utf-8-sig") if isinstance(data, bytes) else data.lstrip("\ufeff")
    except UnicodeDecodeError as exc:
        raise MalformedPayloadError("The file is not valid UTF-8 text.") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedPayloadError("Invalid JSON format. Please check your file structure.") from exc


def detect_format(data: bytes | str, content_type: str | None = None, filename: str | None = None) -> str:
    declared = (content_type or "").split(";")[0].strip().lower()
    if declared in JSON_CONTENT_TYPES:
        return FORMAT_JSON
    if declared in SPREADSHEET_CONTENT_TYPES:
        return FORMAT_SPREADSHEET
    if declared not in SNIFF_CONTENT_TYPES:
        raise MalformedPayloadError(f"Unsupported content type: {content_type}")

    suffix = Path(filename).suffix.lower() if filename else ""
    if suffix in JSON_EXTENSIONS:
        return FORMAT_JSON
    if suffix in SPREADSHEET_EXTENSIONS:
        return FORMAT_SPREADSHEET

    if isinstance(data, bytes) and data.startswith(SPREADSHEET_SIGNATURES):
        return FORMAT_SPREADSHEET
    return FORMAT_JSON


def _nfc(name: Any) -> str:
    return unicodedata.normalize("NFC", str(name))


def _as_rows(raw_payload: Any) -> list[Mapping[str, Any]]:
    if isinstance(raw_payload, Mapping):
        return [raw_payload]
    if isinstance(raw_payload, (list, tuple)):
        return list(raw_payload)
    raise MalformedPayloadError(
        f"Expected a JSON object or an array of objects, got {type(raw_payload).__name__}."
    )


def ingest(raw_payload: Any) -> tuple[Dict[str, Any], ...]:
    """Validate an already-decoded payload and return its records.

    Only the first record is checked, and the required fields must appear as
    exact keys (NFC aside). Numeric cells are left untouched for the parser.
    """
    rows = _as_rows(raw_payload)
    if not rows:
        raise EmptyPayloadError()

    bad_index = next((idx for idx, row in enumerate(rows) if not isinstance(row, Mapping)), None)
    if bad_index is not None:
        raise MalformedPayloadError(f"Record {bad_index + 1} is not an object.")

    present = {_nfc(name) for name in rows[0].keys()}
    missing = [name for name in REQUIRED_FIELDS if _nfc(name) not in present]
    if missing:
        raise MissingFieldsError(missing)

    return tuple(dict(row) for row in rows)


def load_payload(
    data: bytes | str,
    content_type: str | None = None,
    filename: str | None = None,
) -> tuple[Dict[str, Any], ...]:
    """Decode raw upload bytes/text and ingest them; all-or-nothing."""
    source = filename or "<memory>"
    try:
        payload_format = detect_format(data, content_type=content_type, filename=filename)
        if payload_format == FORMAT_SPREADSHEET:
            if isinstance(data, str):
                raise MalformedPayloadError("Spreadsheet uploads must be provided as bytes.")
            raw_payload: Any = read_spreadsheet(data)
        else:
            raw_payload = parse_json(data)
        rows = ingest(raw_payload)
    except ValidationError as exc:
        logger.warning("Rejected upload %s: %s", source, exc)
        raise
    logger.info("Accepted %s upload %s with %d records", payload_format, source, len(rows))
    return rows


def load_file(path: str | Path) -> tuple[Dict[str, Any], ...]:
    input_path = Path(path)
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")
    return load_payload(input_path.read_bytes(), filename=input_path.name)


def records_to_frame(records: Sequence[MediaPlanRecord]) -> pl.DataFrame:
    schema: Dict[str, Any] = {
        **{name: pl.Utf8 for name in MediaPlanRecord.dimension_names()},
        **{name: pl.Float64 for name in MediaPlanRecord.metric_names()},
    }
    columns = {name: [getattr(record, name) for record in records] for name in schema}
    return pl.DataFrame(columns, schema=schema)


@dataclass(frozen=True, eq=False)
class MediaPlanSnapshot:
    """Read-only view of one accepted upload; replaced, never mutated."""

    rows: tuple[Mapping[str, Any], ...]
    source_name: str | None = None

    @classmethod
    def from_rows(cls, rows: Sequence[Mapping[str, Any]], source_name: str | None = None) -> "MediaPlanSnapshot":
        return cls(rows=tuple(MappingProxyType(dict(row)) for row in rows), source_name=source_name)

    @cached_property
    def records(self) -> tuple[MediaPlanRecord, ...]:
        return tuple(MediaPlanRecord.from_row(row) for row in self.rows)

    @cached_property
    def frame(self) -> pl.DataFrame:
        return records_to_frame(self.records)

    def __len__(self) -> int:
        return len(self.rows)
