"""Uniform success/failure wrapper returned by every service operation."""

from __future__ import annotations

from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ErrorCode(str, Enum):
    """Machine readable codes for business rule failures."""

    INVALID_TITLE = "INVALID_TITLE"
    TASK_NOT_FOUND = "TASK_NOT_FOUND"


class Result(BaseModel, Generic[T]):
    """Outcome of a service call.

    Attributes:
        success: Whether the operation succeeded
        message: Human readable summary, safe to show to the user
        data: Payload on success
        error: An ``ErrorCode`` value for business failures, or the text of
            the underlying exception for unexpected ones
    """

    success: bool
    message: str
    data: T | None = None
    error: str | None = None

    @classmethod
    def ok(cls, message: str, data: T | None = None) -> Result[T]:
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, message: str, error: ErrorCode | str | None = None) -> Result[T]:
        if isinstance(error, ErrorCode):
            error = error.value
        return cls(success=False, message=message, error=error)

    @property
    def error_code(self) -> ErrorCode | None:
        """The ``ErrorCode`` carried by this result, if any."""
        try:
            return ErrorCode(self.error) if self.error else None
        except ValueError:
            return None
