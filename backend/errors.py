"""
Error taxonomy for the jobs data layer.

Three kinds exist and callers dispatch on ``AppError.kind``:
bad requests (caller input), not-found identifiers, and store failures.
The data layer itself only raises the first two; store errors are left to
propagate and are classified by the calling layer via ``classify_error``.
"""

from enum import Enum
from typing import Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError


class ErrorKind(str, Enum):
    BAD_REQUEST = "BAD_REQUEST"
    NOT_FOUND = "NOT_FOUND"
    STORE_FAILURE = "STORE_FAILURE"


_STATUS_BY_KIND = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.STORE_FAILURE: 500,
}


class AppError(Exception):
    """
    Base error carrying a kind, a message and the matching HTTP status.

    Only the subclasses are raised; each one fixes its kind.
    """

    kind: ErrorKind

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        if type(self) is AppError:
            raise TypeError("Raise one of the AppError subclasses, not AppError itself")
        self.message = message
        self.original_error = original_error
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return _STATUS_BY_KIND[self.kind]

    def to_dict(self) -> dict:
        return {
            "error": {
                "kind": self.kind.value,
                "message": self.message,
                "status": self.status_code,
            }
        }


class BadRequestError(AppError):
    kind = ErrorKind.BAD_REQUEST


class NotFoundError(AppError):
    kind = ErrorKind.NOT_FOUND


class StoreError(AppError):
    kind = ErrorKind.STORE_FAILURE


def classify_error(exc: Exception) -> AppError:
    """
    Map an exception raised while serving a request onto the closed error set.

    Anything that is neither an AppError, a pydantic validation failure nor a
    SQLAlchemy error is re-raised unchanged.
    """
    if isinstance(exc, AppError):
        return exc
    if isinstance(exc, ValidationError):
        return BadRequestError(str(exc), original_error=exc)
    if isinstance(exc, SQLAlchemyError):
        first_line = str(exc).split("\n", 1)[0].strip()
        return StoreError(f"Database error: {first_line}", original_error=exc)
    raise exc
