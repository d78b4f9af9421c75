from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Iterable, Optional

from cardinal.lib.hashing import Element, HashFunction

class AbstractSketch(ABC):
    """Base class for cardinality sketches."""

    hash_function: HashFunction
    hash_size: int

    @abstractmethod
    def add(self, element: Element, element_length: Optional[int] = None) -> None:
        """Add a single element to the sketch."""
        pass

    @abstractmethod
    def estimate_cardinality(self) -> int:
        """Estimate the number of distinct elements added so far."""
        pass

    @abstractmethod
    def merge(self, other: 'AbstractSketch', strict: bool = False) -> None:
        """Merge another sketch into this one."""
        pass

    @abstractmethod
    def is_empty(self) -> bool:
        """Check if sketch is empty."""
        pass

    def add_string(self, s: str) -> None:
        """Add a string to the sketch."""
        self.add(s)

    def add_batch(self, elements: Iterable[Element]) -> None:
        """Add multiple elements to the sketch.

        Args:
            elements: Iterable of elements to add to the sketch
        """
        for element in elements:
            self.add(element)

    def hash(self, element: Element, element_length: Optional[int] = None) -> int:
        """Hash an element with the sketch's hash function, truncated to hash_size bits.

        Args:
            element: Value to hash
            element_length: Number of bytes to hash (None for all)

        Returns:
            Hash value as integer
        """
        return self.hash_function(element, element_length) & ((1 << self.hash_size) - 1)
