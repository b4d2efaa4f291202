"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class MalformedRecordError(AppError):
    """Raised when a stored row cannot be mapped to a domain record."""

    def __init__(self, record: str, reason: str):
        super().__init__(f"Malformed {record}: {reason}", code="MALFORMED_RECORD")


class SourceUnavailableError(AppError):
    """Raised when the ledger, balance or fee store cannot be read."""

    def __init__(self, source: str, detail: str = ""):
        message = f"{source} unavailable"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, code="SOURCE_UNAVAILABLE")
        self.source = source


class NoDataError(AppError):
    """Raised when required data is missing (never silently zeroed)."""

    def __init__(self, what: str, identifier: str):
        super().__init__(f"No {what} for {identifier}", code="NO_DATA")


class ExternalFetchError(AppError):
    """Raised when the market data provider fails."""

    def __init__(self, provider: str, detail: str):
        super().__init__(f"{provider} fetch failed: {detail}", code="EXTERNAL_FETCH_FAILURE")
        self.provider = provider


class ClassificationAmbiguousError(AppError):
    """Raised when a classified intent cannot be routed as requested."""

    def __init__(self, intent: str, reason: str):
        super().__init__(
            f"Cannot route intent '{intent}': {reason}",
            code="CLASSIFICATION_AMBIGUOUS",
        )
        self.intent = intent
