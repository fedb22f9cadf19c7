"""Domain layer package."""

from .currency import parse_count, parse_currency
from .errors import (
    EmptyPayloadError,
    MalformedPayloadError,
    MissingFieldsError,
    NoDataLoadedError,
    ValidationError,
)
from .models import REQUIRED_FIELDS, AggregateEntry, MediaPlanRecord

__all__ = [
    "AggregateEntry",
    "MediaPlanRecord",
    "REQUIRED_FIELDS",
    "parse_currency",
    "parse_count",
    "ValidationError",
    "MalformedPayloadError",
    "EmptyPayloadError",
    "MissingFieldsError",
    "NoDataLoadedError",
]
