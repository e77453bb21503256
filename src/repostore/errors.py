"""Error values and exceptions for repostore.

Store operations report failures as ``ErrorResponse`` values wrapped in
``Err`` (see ``repostore.result``). The exception classes below are only
raised for configuration mistakes and misuse of results, never from a
store operation.
"""

from enum import Enum, IntEnum

from pydantic import BaseModel


class HttpCode(IntEnum):
    """HTTP-status-like codes attached to error responses."""
    BAD_REQUEST = 400
    NOT_FOUND = 404
    INTERNAL_SERVER_ERROR = 500
    INSUFFICIENT_STORAGE = 507


class ErrorKind(str, Enum):
    """Cause of a failed store operation."""
    INSUFFICIENT_STORAGE = "insufficient_storage"
    NOT_FOUND = "not_found"
    IO_FAILURE = "io_failure"


class ErrorResponse(BaseModel):
    """Structured, recoverable error returned by store operations."""
    code: HttpCode
    message: str

    @property
    def kind(self) -> ErrorKind:
        if self.code == HttpCode.INSUFFICIENT_STORAGE:
            return ErrorKind.INSUFFICIENT_STORAGE
        if self.code == HttpCode.NOT_FOUND:
            return ErrorKind.NOT_FOUND
        return ErrorKind.IO_FAILURE

    def __str__(self) -> str:
        return f"{int(self.code)} {self.code.name}: {self.message}"


class RepostoreError(RuntimeError):
    """Base class for all repostore exceptions."""
    pass


class UnwrapError(RepostoreError):
    """Value requested from a failed result."""

    def __init__(self, error: ErrorResponse):
        self.error = error
        super().__init__(f"Called unwrap() on an error result: {error}")


# Configuration Errors
class ConfigError(RepostoreError):
    """Base class for configuration errors."""
    pass


class InvalidQuotaError(ConfigError):
    """Quota description is neither a percentage nor a data size."""

    def __init__(self, quota: str, reason: str = ""):
        self.quota = quota
        detail = f" ({reason})" if reason else ""
        super().__init__(
            f"Invalid storage quota '{quota}'{detail}. "
            f"Use a percentage of the disk (e.g. '85%') or a data size (e.g. '10GB')."
        )


# Storage Errors
class SizeLimitExceededError(RepostoreError):
    """Stream delivered more bytes than it declared."""

    def __init__(self, path, limit: int):
        self.path = path
        self.limit = limit
        super().__init__(
            f"Content for {path} exceeds its declared size of {limit} bytes"
        )
