"""Fixed-capacity packed keys for terms.

A term whose generators are encoded as positive integer codes is stored as a
fixed-width big-endian buffer of ``capacity`` slots, unused slots set to zero.
Code ``0`` is reserved for padding, so byte-wise comparison of two keys agrees
with lexicographic comparison of their code sequences and the key length can be
recovered without a separate header.

Example
>>> codec = PackedCodec(capacity=4)
>>> key = codec.pack((3, 1, 2))
>>> codec.unpack(key)
(3, 1, 2)
>>> codec.length(key)
3
"""

from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Hashable, Iterable, Sequence, final
import numpy as np


_DTYPES: dict[int, np.dtype] = {
    1: np.dtype(">u1"),
    2: np.dtype(">u2"),
    4: np.dtype(">u4"),
}


@final
@dataclass(frozen=True)
class PackedCodec:
    """Packs code sequences into ``capacity * width`` bytes."""

    capacity: int
    width: int = 2

    def __post_init__(self) -> None:
        if self.capacity <= 0:
            raise ValueError(f"capacity must be >= 1, got {self.capacity}.")
        if self.width not in _DTYPES:
            raise ValueError(f"width must be one of {sorted(_DTYPES)}, got {self.width}.")

    @property
    def dtype(self) -> np.dtype:
        return _DTYPES[self.width]

    @property
    def max_code(self) -> int:
        return int(np.iinfo(self.dtype).max)

    @property
    def num_bytes(self) -> int:
        return self.capacity * self.width

    def pack(self, codes: Sequence[int]) -> bytes:
        n = len(codes)
        if n > self.capacity:
            raise ValueError(
                f"Term of length {n} exceeds key capacity {self.capacity}: {tuple(codes)}."
            )
        buf = np.zeros((self.capacity,), dtype=self.dtype)
        if n:
            arr = np.asarray(codes, dtype=np.int64)
            if arr.min() < 1 or arr.max() > self.max_code:
                raise ValueError(
                    f"Codes must lie in [1, {self.max_code}], got {tuple(int(c) for c in codes)}."
                )
            buf[:n] = arr
        return buf.tobytes()

    def unpack(self, key: bytes) -> tuple[int, ...]:
        buf = np.frombuffer(key, dtype=self.dtype)
        n = int(np.count_nonzero(buf))
        return tuple(int(c) for c in buf[:n])

    def length(self, key: bytes) -> int:
        return int(np.count_nonzero(np.frombuffer(key, dtype=self.dtype)))

    def concat(self, lhs: bytes, rhs: bytes) -> bytes:
        """Concatenates two packed terms without decoding them."""
        n_lhs = self.length(lhs)
        n_rhs = self.length(rhs)
        if n_lhs + n_rhs > self.capacity:
            raise ValueError(
                f"Concatenation of terms of lengths {n_lhs} and {n_rhs} exceeds key "
                f"capacity {self.capacity}: {self.unpack(lhs)}, {self.unpack(rhs)}."
            )
        used = (n_lhs + n_rhs) * self.width
        return lhs[: n_lhs * self.width] + rhs[: n_rhs * self.width] + bytes(self.num_bytes - used)


def check_capacity(items: Sequence[object], capacity: int) -> None:
    """Raises if a term stored as a plain tuple key exceeds its capacity."""
    if len(items) > capacity:
        raise ValueError(f"Term of length {len(items)} exceeds capacity {capacity}: {items}.")


@final
class Alphabet:
    """Read-only bijection between a bounded generator universe and codes ``1..size``.

    Codes follow the iteration order of ``values``. The table is built once and
    never mutated afterwards; families hold a single shared instance.
    """

    __slots__ = ("_values", "_codes")

    def __init__(self, values: Iterable[Hashable]) -> None:
        values_tuple = tuple(values)
        codes: dict[Hashable, int] = {}
        for code, value in enumerate(values_tuple, start=1):
            if value in codes:
                raise ValueError(f"Duplicate alphabet entry: {value}.")
            codes[value] = code
        self._values = values_tuple
        self._codes = MappingProxyType(codes)

    @property
    def size(self) -> int:
        return len(self._values)

    def to_code(self, value: Hashable) -> int:
        try:
            return self._codes[value]
        except KeyError:
            raise ValueError(f"{value} is outside the alphabet.") from None

    def from_code(self, code: int) -> Hashable:
        if not 1 <= code <= len(self._values):
            raise ValueError(f"Unexpected alphabet code: {code}.")
        return self._values[code - 1]

    def __contains__(self, value: object) -> bool:
        return value in self._codes
