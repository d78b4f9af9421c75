from .hyperloglog import HyperLogLog, HLLConfig, MIN_PRECISION, MAX_PRECISION
from .hashing import hash_string, integer_hash, xxhash_function
from .errors import (
    ErrorKind,
    HLLError,
    NullEstimatorError,
    InvalidPrecisionError,
    UninitializedError,
    AllocationFailureError,
    PrecisionMismatchError,
    describe_error,
)
from .api import initialize, insert, estimate, merge, release

__all__ = [
    'HyperLogLog',
    'HLLConfig',
    'MIN_PRECISION',
    'MAX_PRECISION',
    'hash_string',
    'integer_hash',
    'xxhash_function',
    'ErrorKind',
    'HLLError',
    'NullEstimatorError',
    'InvalidPrecisionError',
    'UninitializedError',
    'AllocationFailureError',
    'PrecisionMismatchError',
    'describe_error',
    'initialize',
    'insert',
    'estimate',
    'merge',
    'release',
]
