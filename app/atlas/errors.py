"""
Error taxonomy for the decision core.

Only state-machine violations, conflicts and missing records are raised.
``INSUFFICIENT_DATA`` is expressed as an empty :class:`ReadinessResult`
and ``UNSAFE_ADJUSTMENT`` is logged, never thrown.
"""

from enum import Enum


class ErrorCode(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    INVALID_STATE = "INVALID_STATE"
    CONFLICT = "CONFLICT"
    INSUFFICIENT_DATA = "INSUFFICIENT_DATA"
    UNSAFE_ADJUSTMENT = "UNSAFE_ADJUSTMENT"


class AtlasError(Exception):
    """Base class for errors surfaced verbatim to the caller."""

    code: ErrorCode

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(AtlasError):
    code = ErrorCode.NOT_FOUND


class InvalidStateError(AtlasError):
    code = ErrorCode.INVALID_STATE


class ConflictError(AtlasError):
    code = ErrorCode.CONFLICT
