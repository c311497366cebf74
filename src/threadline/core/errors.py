"""Project-wide error and result types.

Services never raise for expected outcomes (malformed ids, missing rows).
They return a :class:`ServiceResult` carrying either a value or a
:class:`ServiceError`; the API layer maps :class:`ErrorKind` onto an HTTP
status. Unexpected failures (driver errors, bugs) still propagate as
exceptions and are translated by ``threadline.api.errors``.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(str, enum.Enum):
    BAD_REQUEST = "BAD_REQUEST"
    NOT_FOUND = "NOT_FOUND"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.NOT_FOUND: 404,
}


@dataclass(frozen=True)
class ServiceError:
    kind: ErrorKind
    message: str
    # Short human readable label, e.g. "Thread Not Found"
    title: str


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    value: T | None = None
    error: ServiceError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T | None = None) -> "ServiceResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str, title: str) -> "ServiceResult[T]":
        return cls(error=ServiceError(kind=kind, message=message, title=title))


def bad_request(message: str, title: str = "Bad Request") -> ServiceResult:
    return ServiceResult.failure(ErrorKind.BAD_REQUEST, message, title)


def not_found(message: str, title: str = "Not Found") -> ServiceResult:
    return ServiceResult.failure(ErrorKind.NOT_FOUND, message, title)


__all__ = [
    "ErrorKind",
    "ServiceError",
    "ServiceResult",
    "bad_request",
    "not_found",
]
