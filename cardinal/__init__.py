"""
cardinal - Python Library for HyperLogLog Cardinality Estimation
"""

from cardinal.lib.hyperloglog import HyperLogLog, HLLConfig
from cardinal.lib.hashing import hash_string, integer_hash, xxhash_function
from cardinal.lib.errors import (
    ErrorKind,
    HLLError,
    NullEstimatorError,
    InvalidPrecisionError,
    UninitializedError,
    AllocationFailureError,
    PrecisionMismatchError,
    describe_error,
)
from cardinal.lib.api import initialize, insert, estimate, merge, release

__version__ = '0.1.0'

__all__ = [
    'HyperLogLog',
    'HLLConfig',
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
