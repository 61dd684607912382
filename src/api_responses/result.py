from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Generic, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")


class ErrorKind(str, Enum):
    UNAUTHENTICATED = "Unauthenticated"
    MALFORMED_TOKEN = "MalformedToken"
    EXPIRED_TOKEN = "ExpiredToken"
    INVALID_CREDENTIALS = "InvalidCredentials"
    INVALID_URL = "InvalidUrl"
    VALIDATION_FAILED = "ValidationFailed"
    NOT_FOUND = "NotFound"
    CONFLICT = "Conflict"
    INTERNAL = "Internal"


STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.MALFORMED_TOKEN: 401,
    ErrorKind.EXPIRED_TOKEN: 401,
    ErrorKind.INVALID_CREDENTIALS: 401,
    ErrorKind.INVALID_URL: 422,
    ErrorKind.VALIDATION_FAILED: 422,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL: 500,
}


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def map(self, fn: Callable[[T], U]) -> "Ok[U]":
        return Ok(fn(self.value))


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]

    def map(self, fn: Callable[[Any], Any]) -> "Err":
        return self


Result = Union[Ok[T], Err]


class AppError(Exception):
    """Carries an `Err` out of code that cannot return one, such as a FastAPI dependency."""

    def __init__(self, err: Err):
        self.err = err
        super().__init__(err.message)
