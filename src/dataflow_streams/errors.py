"""Exceptions raised by the Data Flow streams SDK."""

from __future__ import annotations
from typing import Optional

from pydantic import ValidationError


class DataFlowError(Exception):
    """Base class for all SDK errors."""

    pass


class InvalidArgumentError(DataFlowError, ValueError):
    """Raised when a required argument is missing, empty or malformed."""

    pass


class DuplicateApplicationError(DataFlowError):
    """Raised when a stream already holds an application with the same type and identity."""

    pass


class RemoteOperationFailed(DataFlowError):
    """Raised when a call to the Data Flow server fails.

    Args:
        message: Description of the failed operation
        status_code: HTTP status returned by the server, None for transport errors
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def validation_message(error: ValidationError) -> str:
    """Join the messages of a pydantic ValidationError."""
    return "; ".join(str(item.get("msg", item)) for item in error.errors())
