"""Success-or-error values returned by every store operation.

Store operations never raise past their own boundary. They return either
``Ok(value)`` or ``Err(error)`` and the caller branches on ``is_ok``:

    result = provider.get_file_size("a/b.jar")
    if result.is_err:
        return result.error.code
    size = result.value
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

import portalocker

from .errors import ErrorResponse, HttpCode, UnwrapError

T = TypeVar("T")
U = TypeVar("U")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""
    value: T

    @property
    def is_ok(self) -> bool:
        return True

    @property
    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: Any) -> T:
        return self.value

    def map(self, fn: Callable[[T], U]) -> "Ok[U]":
        return Ok(fn(self.value))


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying an ErrorResponse."""
    error: ErrorResponse

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def is_err(self) -> bool:
        return True

    def unwrap(self):
        raise UnwrapError(self.error)

    def unwrap_or(self, default: T) -> T:
        return default

    def map(self, fn: Callable) -> "Err":
        return self


Result = Union[Ok[T], Err]


def error_response(code: HttpCode, message: str) -> Err:
    """Build a failed result with the given code and message."""
    return Err(ErrorResponse(code=code, message=message))


def catch_io(fn: Callable[[], Any]) -> "Result":
    """Run ``fn`` and convert filesystem faults into an error result.

    ``fn`` may return a plain value (wrapped in ``Ok``) or a ready-made
    result (passed through). ``OSError``, lock failures and ``ValueError``
    (raised for invalid paths, e.g. one with an embedded NUL) become
    ``INTERNAL_SERVER_ERROR`` responses.
    """
    try:
        value = fn()
    except (OSError, ValueError, portalocker.LockException) as e:
        logger.warning("I/O failure: %s", e)
        return error_response(HttpCode.INTERNAL_SERVER_ERROR, str(e) or type(e).__name__)

    if isinstance(value, (Ok, Err)):
        return value
    return Ok(value)
