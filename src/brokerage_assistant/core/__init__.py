"""Core utilities and shared functionality."""

from brokerage_assistant.core.timezone import (
    now_eastern,
    to_eastern,
    parse_date,
    parse_time,
    execution_datetime,
    EASTERN_TZ,
)
from brokerage_assistant.core.exceptions import (
    AppError,
    ValidationError,
    MalformedRecordError,
    SourceUnavailableError,
    NoDataError,
    ExternalFetchError,
    ClassificationAmbiguousError,
)

__all__ = [
    "now_eastern",
    "to_eastern",
    "parse_date",
    "parse_time",
    "execution_datetime",
    "EASTERN_TZ",
    "AppError",
    "ValidationError",
    "MalformedRecordError",
    "SourceUnavailableError",
    "NoDataError",
    "ExternalFetchError",
    "ClassificationAmbiguousError",
]
