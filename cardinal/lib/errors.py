"""Error kinds raised by the cardinality estimators."""
from __future__ import annotations
from enum import Enum
from typing import Optional, Union


class ErrorKind(Enum):
    """Stable error identifiers, each mapped to a fixed label."""
    NULL_ESTIMATOR = "HLL_ERROR_HLL_NULL"
    INVALID_PRECISION = "HLL_ERROR_INVALID_PRECISION"
    UNINITIALIZED = "HLL_ERROR_HLL_UNINITIALIZED"
    ALLOCATION_FAILURE = "HLL_ERROR_ALLOCATING_MEMORY"
    PRECISION_MISMATCH = "HLL_ERROR_PRECISION_MISMATCH"


OK_LABEL = "HLL_OK"
UNKNOWN_LABEL = "HLL_ERROR_UNKNOWN"


class HLLError(Exception):
    """Base class for all estimator errors."""
    kind: ErrorKind

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.kind.value)


class NullEstimatorError(HLLError, TypeError):
    """An operation received ``None`` instead of an estimator."""
    kind = ErrorKind.NULL_ESTIMATOR


class InvalidPrecisionError(HLLError, ValueError):
    """Precision outside the supported range."""
    kind = ErrorKind.INVALID_PRECISION


class UninitializedError(HLLError, RuntimeError):
    """The estimator has no register array (released)."""
    kind = ErrorKind.UNINITIALIZED


class AllocationFailureError(HLLError, MemoryError):
    """The register array could not be allocated."""
    kind = ErrorKind.ALLOCATION_FAILURE


class PrecisionMismatchError(HLLError, ValueError):
    """Strict merge of estimators with different precisions."""
    kind = ErrorKind.PRECISION_MISMATCH


def describe_error(error: Union[ErrorKind, HLLError, None]) -> str:
    """Map an error kind (or error instance) to its human-readable label.

    Args:
        error: An ErrorKind, an HLLError instance, or None for success

    Returns:
        The label string, e.g. ``HLL_ERROR_INVALID_PRECISION``
    """
    if error is None:
        return OK_LABEL
    if isinstance(error, HLLError):
        error = error.kind
    if isinstance(error, ErrorKind):
        return error.value
    return UNKNOWN_LABEL
