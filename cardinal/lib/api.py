"""Functional interface over HyperLogLog.

Each function takes the estimator explicitly and raises NullEstimatorError
when it is None, mirroring the method API otherwise.
"""
from __future__ import annotations
from dataclasses import replace
from typing import Optional
from cardinal.lib.errors import NullEstimatorError, describe_error
from cardinal.lib.hashing import Element
from cardinal.lib.hyperloglog import HLLConfig, HyperLogLog

__all__ = ['initialize', 'insert', 'estimate', 'merge', 'release', 'describe_error']


def _require(estimator: Optional[HyperLogLog], role: str = "estimator") -> HyperLogLog:
    if estimator is None:
        raise NullEstimatorError(f"No {role} given")
    return estimator


def initialize(config: Optional[HLLConfig] = None, **overrides) -> HyperLogLog:
    """Create an estimator from a configuration.

    Args:
        config: Base configuration (defaults to HLLConfig())
        **overrides: Fields replacing those of config, e.g. precision=12

    Returns:
        A new, empty HyperLogLog
    """
    config = replace(config or HLLConfig(), **overrides)
    return HyperLogLog.from_config(config)


def insert(estimator: Optional[HyperLogLog], element: Element,
           length: Optional[int] = None) -> None:
    _require(estimator).add(element, length)


def estimate(estimator: Optional[HyperLogLog]) -> int:
    return _require(estimator).estimate_cardinality()


def merge(destination: Optional[HyperLogLog], source: Optional[HyperLogLog],
          strict: bool = False) -> None:
    """Merge source into destination (pointwise register maximum)."""
    _require(destination, "destination").merge(_require(source, "source"), strict=strict)


def release(estimator: Optional[HyperLogLog]) -> None:
    _require(estimator).release()
