"""Upload validation errors surfaced to the dashboard user."""

from __future__ import annotations

from typing import Sequence


class ValidationError(ValueError):
    """Base class for payloads the dashboard refuses to load."""


class MalformedPayloadError(ValidationError):
    pass


class EmptyPayloadError(ValidationError):
    def __init__(self, message: str = "No data found in the file.") -> None:
        super().__init__(message)


class MissingFieldsError(ValidationError):
    def __init__(self, missing_fields: Sequence[str]) -> None:
        self.missing_fields = tuple(missing_fields)
        super().__init__(f"Missing required fields: {', '.join(self.missing_fields)}")


class NoDataLoadedError(ValidationError):
    def __init__(self, message: str = "No media plan loaded. Upload a file to continue.") -> None:
        super().__init__(message)
