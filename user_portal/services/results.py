"""
Result types returned by the service layer.

Services report "not found", validation and infrastructure failures as values
instead of raising, and the API layer maps them to HTTP in a single place
(see user_portal.api.responses).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ServiceErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass(frozen=True)
class ServiceError:
    code: ServiceErrorCode
    message: str


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """Either a value (success) or an error, never both."""

    value: Optional[T] = None
    error: Optional[ServiceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "ServiceResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, code: ServiceErrorCode, message: str) -> "ServiceResult[T]":
        return cls(error=ServiceError(code=code, message=message))
