"""Error types for the Gemini Relay application.

Failures are classified by kind so callers and tests can tell them apart
without matching on message strings.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    UPSTREAM = "upstream"
    CONFIGURATION = "configuration"


# HTTP status reported for each kind of failure
STATUS_CODES = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.UPSTREAM: 500,
    ErrorKind.CONFIGURATION: 500,
}


class RelayError(Exception):
    """Base class for all errors raised by the relay.

    Attributes:
        kind: The ErrorKind classifying the failure.
        message: Human-readable summary returned to the caller.
        error: Optional detail captured from the underlying failure.
    """

    kind: ErrorKind = ErrorKind.UPSTREAM

    def __init__(self, message: str, error: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error = error

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]

    def __str__(self) -> str:
        if self.error:
            return f"{self.message} ({self.error})"
        return self.message


class ValidationError(RelayError):
    """The request was rejected before any call to the model."""

    kind = ErrorKind.VALIDATION


class UpstreamError(RelayError):
    """A call to the generation API failed, timed out or returned an error."""

    kind = ErrorKind.UPSTREAM

    def __init__(self, error: str, message: str = "Error processing your request with Gemini API."):
        super().__init__(message, error=error)


class ConfigurationError(RelayError):
    """Required configuration is missing; the service must not start."""

    kind = ErrorKind.CONFIGURATION
