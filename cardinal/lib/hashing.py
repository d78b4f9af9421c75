"""Hash capabilities for the estimators.

A hash function is any callable taking ``(element, length)`` and returning an
unsigned integer. ``length`` is the number of bytes of the element to hash;
``None`` means the whole element. Hash functions may declare their output width in
bits as a ``hash_size`` attribute.
"""
from __future__ import annotations
from typing import Callable, Optional, Union
import xxhash # type: ignore

Element = Union[str, bytes, bytearray, memoryview, int]
HashFunction = Callable[[Element, Optional[int]], int]

MASK32 = 0xFFFFFFFF
DJB2_SEED = 5381


def to_bytes(element: Element, length: Optional[int] = None) -> bytes:
    """Convert an element to the bytes that get hashed.

    Strings are UTF-8 encoded and integers are written little-endian in
    ``length`` bytes (8 when no length is given).

    Args:
        element: Value to convert
        length: Number of bytes to keep

    Returns:
        Byte representation of the element
    """
    if isinstance(element, int):
        width = 8 if length is None else length
        return (element & ((1 << (8 * width)) - 1)).to_bytes(width, byteorder='little')
    if isinstance(element, str):
        data = element.encode('utf-8')
    else:
        data = bytes(element)
    if length is not None:
        data = data[:length]
    return data


def hash_string(element: Element, length: Optional[int] = None) -> int:
    """djb2 string hash, the default hash of every estimator.

    Starts from 5381 and folds each byte in with ``hash * 33 + byte``,
    keeping the low 32 bits.

    Args:
        element: Value to hash
        length: Number of bytes to hash

    Returns:
        32-bit hash value
    """
    h = DJB2_SEED
    for byte in to_bytes(element, length):
        h = (h * 33 + byte) & MASK32
    return h

hash_string.hash_size = 32


def integer_hash(element: int, length: Optional[int] = None) -> int:
    """Bob Jenkins' 4-byte integer hash.

    ``length`` is accepted for signature compatibility and ignored.
    """
    a = int(element) & MASK32
    a = (a ^ 61) ^ (a >> 16)
    a = (a + (a << 3)) & MASK32
    a ^= a >> 4
    a = (a * 0x27d4eb2d) & MASK32
    a ^= a >> 15
    return a

integer_hash.hash_size = 32


def xxhash_function(seed: int = 0, hash_size: int = 32) -> HashFunction:
    """Build a seeded xxhash capability.

    Args:
        seed: Random seed for hashing
        hash_size: Size of hash in bits (32 or 64)

    Returns:
        Callable ``(element, length) -> int``
    """
    if hash_size not in (32, 64):
        raise ValueError("hash_size must be 32 or 64")
    hasher_cls = xxhash.xxh32 if hash_size == 32 else xxhash.xxh64

    def _hash(element: Element, length: Optional[int] = None) -> int:
        hasher = hasher_cls(seed=seed)
        hasher.update(to_bytes(element, length))
        return hasher.intdigest()

    _hash.__name__ = f"xxh{hash_size}_seed{seed}"
    _hash.hash_size = hash_size
    return _hash
