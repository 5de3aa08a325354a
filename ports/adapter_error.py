"""Unified adapter error types."""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorCode(str, Enum):
    """Error codes carried by AdapterError."""
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    INVALID_CONTENT = "INVALID_CONTENT"
    UNSUPPORTED_OPERATION = "UNSUPPORTED_OPERATION"
    REMOTE_NOT_FOUND = "REMOTE_NOT_FOUND"
    REMOTE_FAILURE = "REMOTE_FAILURE"
    TRANSPORT_FAILURE = "TRANSPORT_FAILURE"


@dataclass
class AdapterError(Exception):
    """
    Unified error type for all adapter failures.

    Callers branch on the subclass (or on ``code``) rather than on the
    underlying HTTP library's exceptions.
    """
    code: str
    message: str
    details: Optional[Any] = None

    def __str__(self) -> str:
        if self.details:
            return f"[{self.code}] {self.message} (details: {self.details})"
        return f"[{self.code}] {self.message}"


class InvalidArgumentError(AdapterError):
    """Caller passed an argument the operation cannot accept (e.g. empty directory name)."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(ErrorCode.INVALID_ARGUMENT.value, message, details)


class InvalidContentError(AdapterError):
    """Upload payload is not a stream, a byte buffer or a path to an existing file."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(ErrorCode.INVALID_CONTENT.value, message, details)


class UnsupportedOperationError(AdapterError):
    """Filesystem operation has no remote equivalent."""

    def __init__(self, message: str = "Unsupported method call.", details: Optional[Any] = None):
        super().__init__(ErrorCode.UNSUPPORTED_OPERATION.value, message, details)


class RemoteNotFoundError(AdapterError):
    """Video or collection does not exist on the platform."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(ErrorCode.REMOTE_NOT_FOUND.value, message, details)


class RemoteFailureError(AdapterError):
    """Platform answered with a non-2xx status."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(ErrorCode.REMOTE_FAILURE.value, message, details)

    @property
    def status_code(self) -> Optional[int]:
        if isinstance(self.details, dict):
            return self.details.get("status_code")
        return None


class TransportFailureError(AdapterError):
    """Network or transport level failure (connection refused, timeout, ...)."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(ErrorCode.TRANSPORT_FAILURE.value, message, details)
