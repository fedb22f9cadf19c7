"""Media plan analytics package."""

from .application import DashboardSession, DashboardView, group_reduce, run_dashboard_pipeline
from .domain import (
    EmptyPayloadError,
    MalformedPayloadError,
    MissingFieldsError,
    NoDataLoadedError,
    ValidationError,
    parse_currency,
)
from .ingestion import MediaPlanSnapshot, ingest, load_file, load_payload

__all__ = [
    "DashboardSession",
    "DashboardView",
    "MediaPlanSnapshot",
    "group_reduce",
    "ingest",
    "load_file",
    "load_payload",
    "parse_currency",
    "run_dashboard_pipeline",
    "ValidationError",
    "MalformedPayloadError",
    "EmptyPayloadError",
    "MissingFieldsError",
    "NoDataLoadedError",
]
