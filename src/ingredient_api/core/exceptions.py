"""Exception hierarchy for the recognition pipeline.

Retryable upstream failures are exhausted inside the vision client before
they surface here. An empty recognition result is never an exception.
"""

from typing import Any


class RecognitionError(Exception):
    """Base exception for recognition failures."""

    def __init__(
        self,
        message: str,
        error_code: str = "RECOGNITION_ERROR",
        provider: str = "unknown",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.provider = provider
        self.status_code = status_code
        self.details = details or {}


class UpstreamUnavailable(RecognitionError):
    """Network failure or 5xx from an upstream service."""

    def __init__(self, message: str, provider: str = "unknown", details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            error_code="UPSTREAM_UNAVAILABLE",
            provider=provider,
            status_code=503,
            details=details,
        )


class RateLimited(RecognitionError):
    """Upstream returned 429 and the retry budget is spent."""

    def __init__(self, message: str, provider: str = "unknown", details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            error_code="RATE_LIMITED",
            provider=provider,
            status_code=429,
            details=details,
        )


class ModelNotFound(RecognitionError):
    """Upstream model or endpoint does not exist (404)."""

    def __init__(self, message: str, provider: str = "unknown", details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            error_code="MODEL_NOT_FOUND",
            provider=provider,
            status_code=502,
            details=details,
        )


class ParseError(RecognitionError):
    """Upstream response could not be turned into candidates."""

    def __init__(self, message: str, provider: str = "unknown", details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            error_code="PARSE_ERROR",
            provider=provider,
            status_code=502,
            details=details,
        )


class CatalogUnavailable(RecognitionError):
    """Reference catalog could not be loaded."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            error_code="CATALOG_UNAVAILABLE",
            provider="catalog",
            status_code=503,
            details=details,
        )


class ValidationError(RecognitionError):
    """Caller supplied unusable input."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            provider="request",
            status_code=422,
            details=details,
        )
