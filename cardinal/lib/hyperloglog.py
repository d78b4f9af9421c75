from __future__ import annotations
import math
import warnings
from dataclasses import dataclass
from typing import Optional, Tuple
import numpy as np # type: ignore
from cardinal.lib.abstractsketch import AbstractSketch
from cardinal.lib.errors import (
    AllocationFailureError,
    InvalidPrecisionError,
    NullEstimatorError,
    PrecisionMismatchError,
    UninitializedError,
)
from cardinal.lib.hashing import Element, HashFunction, hash_string

MIN_PRECISION = 4
MAX_PRECISION = 16
DEFAULT_PRECISION = 10
DEFAULT_HASH_SIZE = 32


@dataclass
class HLLConfig:
    """Construction settings for a HyperLogLog sketch.

    Attributes:
        precision: Number of bits used for the register index (4-16)
        hash_function: Callable ``(element, length) -> int``
        hash_size: Width of the hash values in bits (32 or 64)
        debug: Whether to print debug information
    """
    precision: int = DEFAULT_PRECISION
    hash_function: HashFunction = hash_string
    hash_size: int = DEFAULT_HASH_SIZE
    debug: bool = False


class HyperLogLog(AbstractSketch):
    def __init__(self,
                 precision: int = DEFAULT_PRECISION,
                 hash_function: HashFunction = hash_string,
                 hash_size: int = DEFAULT_HASH_SIZE,
                 debug: bool = False):
        """Initialize HyperLogLog sketch.

        Args:
            precision: Number of bits for register indexing (4-16).
                      The sketch holds 2^precision registers.
            hash_function: Callable mapping (element, length) to an unsigned
                      integer of hash_size bits
            hash_size: Size of hash in bits (32 or 64)
            debug: Whether to print debug information

        Raises:
            InvalidPrecisionError: If precision is outside 4-16
            ValueError: If hash_size is not 32 or 64, or differs from the
                        hash_size declared by hash_function
            AllocationFailureError: If the registers cannot be allocated
        """
        super().__init__()

        if not isinstance(precision, (int, np.integer)) or isinstance(precision, bool):
            raise InvalidPrecisionError(f"Precision must be an integer, got {precision!r}")
        if precision < MIN_PRECISION or precision > MAX_PRECISION:
            raise InvalidPrecisionError(
                f"Precision must be between {MIN_PRECISION} and {MAX_PRECISION}, got {precision}")
        if hash_size not in [32, 64]:
            raise ValueError("hash_size must be 32 or 64")
        if not callable(hash_function):
            raise TypeError("hash_function must be callable")
        declared_size = getattr(hash_function, "hash_size", None)
        if declared_size is not None and declared_size != hash_size:
            raise ValueError(
                f"hash_function produces {declared_size}-bit values but hash_size is {hash_size}")

        self._precision = int(precision)
        self.num_registers = 1 << self._precision
        self.hash_function = hash_function
        self.hash_size = hash_size
        self.debug = debug

        try:
            self.registers: Optional[np.ndarray] = np.zeros(self.num_registers, dtype=np.uint8)
        except MemoryError as e:
            raise AllocationFailureError(
                f"Could not allocate {self.num_registers} registers") from e

        # Calculate alpha_mm (bias correction factor)
        if self.num_registers == 16:
            self.alpha_mm = 0.673
        elif self.num_registers == 32:
            self.alpha_mm = 0.697
        elif self.num_registers == 64:
            self.alpha_mm = 0.709
        else:
            self.alpha_mm = 0.7213 / (1 + 1.079 / self.num_registers)

    @classmethod
    def from_config(cls, config: HLLConfig) -> 'HyperLogLog':
        """Create a sketch from an HLLConfig."""
        return cls(precision=config.precision,
                   hash_function=config.hash_function,
                   hash_size=config.hash_size,
                   debug=config.debug)

    @property
    def precision(self) -> int:
        return self._precision

    @property
    def max_rank(self) -> int:
        """Largest value a register can hold."""
        return self.hash_size - self._precision + 1

    @property
    def is_released(self) -> bool:
        return self.registers is None

    def _check_initialized(self) -> np.ndarray:
        if self.registers is None:
            raise UninitializedError("HyperLogLog registers have been released")
        return self.registers

    def release(self) -> None:
        """Free the register array.

        Raises:
            UninitializedError: If the sketch was already released
        """
        self._check_initialized()
        self.registers = None

    def _index(self, hash_val: int) -> int:
        """Register index from the top precision bits."""
        return hash_val >> (self.hash_size - self._precision)

    def _rho(self, hash_val: int) -> int:
        """Calculate position of the lowest 1-bit in the non-index bits."""
        observation = hash_val & ((1 << (self.hash_size - self._precision)) - 1)
        if observation == 0:
            return self.max_rank
        return (observation & -observation).bit_length()

    def add(self, element: Element, element_length: Optional[int] = None) -> None:
        """Add an element to the sketch.

        Args:
            element: Value to insert
            element_length: Length of the element in bytes (None for all of it)

        Raises:
            UninitializedError: If the sketch was released
        """
        registers = self._check_initialized()
        hash_val = self.hash(element, element_length)
        idx = self._index(hash_val)
        rank = self._rho(hash_val)
        if rank > registers[idx]:
            registers[idx] = rank

    def add_int(self, value: int) -> None:
        """Add a 4-byte integer to the sketch."""
        self.add(value, 4)

    def get_alpha(self) -> float:
        """Get alpha correction factor based on number of registers.

        Returns:
            0.673, 0.697 or 0.709 for 16, 32 and 64 registers,
            0.7213 / (1 + 1.079 / m) otherwise
        """
        return self.alpha_mm

    def raw_estimate(self) -> float:
        """Calculate the raw cardinality estimate before corrections.

        Returns:
            alpha_m * m^2 / sum(2^-register) over every register
        """
        registers = self._check_initialized()
        sum_inv = float(np.sum(np.exp2(-registers.astype(np.float64))))
        return self.alpha_mm * (self.num_registers * self.num_registers) / sum_inv

    def _corrected_estimate(self) -> Tuple[float, str]:
        """Apply the small and large range corrections to the raw estimate.

        Returns:
            Tuple of (estimate, regime name)
        """
        registers = self._check_initialized()
        m = float(self.num_registers)
        raw = self.raw_estimate()

        # Small range correction
        if raw <= 2.5 * m:
            zeros = int(np.count_nonzero(registers == 0))
            if zeros > 0:
                return m * math.log(m / zeros), 'linear'
            return raw, 'raw'

        hash_space = float(1 << self.hash_size)
        if raw <= hash_space / 30.0:
            return raw, 'raw'

        # Large range correction
        log_arg = 1.0 - raw / hash_space
        if log_arg <= 0.0:
            return hash_space, 'saturated'
        return -hash_space * math.log(log_arg), 'large'

    def estimate_cardinality(self) -> int:
        """Estimate the number of distinct elements.

        Returns:
            Non-negative integer estimate

        Raises:
            UninitializedError: If the sketch was released
        """
        estimate, regime = self._corrected_estimate()
        result = max(0, int(math.floor(estimate + 0.5)))
        if self.debug:
            zeros = int(np.count_nonzero(self.registers == 0))
            print(f"DEBUG: regime={regime}, raw={self.raw_estimate():.1f}, "
                  f"zeros={zeros}/{self.num_registers}, estimate={result}")
        return result

    def merge(self, other: 'HyperLogLog', strict: bool = False) -> None:
        """Merge another HLL sketch into this one.

        Takes the element-wise maximum of the registers in place. With equal
        precisions this is the exact union. With different precisions only
        the overlapping index range is reconciled, so the result does not
        represent the union of the two streams.

        Args:
            other: Another HyperLogLog sketch to merge into this one
            strict: Reject sketches with a different precision instead of
                    merging the overlapping registers

        Raises:
            NullEstimatorError: If other is None
            TypeError: If other is not a HyperLogLog sketch
            UninitializedError: If either sketch was released
            PrecisionMismatchError: If strict and the precisions differ
        """
        if other is None:
            raise NullEstimatorError("Cannot merge with a missing sketch")
        if not isinstance(other, HyperLogLog):
            raise TypeError("Can only merge with another HyperLogLog sketch")
        registers = self._check_initialized()
        other_registers = other._check_initialized()

        if self.precision != other.precision:
            if strict:
                raise PrecisionMismatchError(
                    f"Cannot merge HyperLogLog sketches with different precisions "
                    f"({self.precision} vs {other.precision})")
            warnings.warn(
                f"Merging HyperLogLog sketches with different precisions "
                f"({self.precision} vs {other.precision}); only the first "
                f"{min(self.num_registers, other.num_registers)} registers are combined "
                f"and the result is not a true union.",
                RuntimeWarning)

        n = min(len(registers), len(other_registers))
        np.maximum(registers[:n], other_registers[:n], out=registers[:n])

    def copy(self) -> 'HyperLogLog':
        """Return an independent sketch with the same settings and registers."""
        registers = self._check_initialized()
        clone = HyperLogLog(precision=self.precision,
                            hash_function=self.hash_function,
                            hash_size=self.hash_size,
                            debug=self.debug)
        clone.registers[:] = registers
        return clone

    def estimate_union(self, other: 'HyperLogLog') -> int:
        """Estimate the cardinality of the union without modifying either sketch."""
        merged = self.copy()
        merged.merge(other, strict=True)
        return merged.estimate_cardinality()

    def is_empty(self) -> bool:
        """Check if sketch is empty."""
        return bool(np.all(self._check_initialized() == 0))

    def __repr__(self) -> str:
        state = "released" if self.is_released else f"{self.num_registers} registers"
        return (f"HyperLogLog(precision={self.precision}, hash_size={self.hash_size}, "
                f"hash_function={getattr(self.hash_function, '__name__', self.hash_function)!r}, "
                f"{state})")
