"""Compound ratios: products of differences divided by products of differences."""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
from typing import Hashable, Sequence, final, override
from symbolax.symbols.delta import Delta, delta_alphabet
from symbolax.symbols.x import X, Undefined


def _normalized(factors: Counter[Delta]) -> tuple[Delta, ...]:
    return tuple(sorted(factors.elements(), key=Delta.sort_key))


@final
@dataclass(frozen=True)
class CompoundRatio:
    """``prod(numerator) / prod(denominator)`` with common factors cancelled.

    A ratio with a nil factor is nil as a whole and is stored as a single nil
    numerator factor.
    """

    numerator: tuple[Delta, ...] = ()
    denominator: tuple[Delta, ...] = ()

    def __post_init__(self) -> None:
        numerator = tuple(self.numerator)
        denominator = tuple(self.denominator)
        if any(d.is_nil() for d in numerator + denominator):
            object.__setattr__(self, "numerator", (Delta(Undefined, Undefined),))
            object.__setattr__(self, "denominator", ())
            return
        num = Counter(numerator)
        den = Counter(denominator)
        common = num & den
        object.__setattr__(self, "numerator", _normalized(num - common))
        object.__setattr__(self, "denominator", _normalized(den - common))

    @classmethod
    def from_cross_ratio(cls, points: Sequence[X | int]) -> CompoundRatio:
        """``(a - b)(c - d) / ((b - c)(d - a))`` for points ``(a, b, c, d)``."""
        if len(points) != 4:
            raise ValueError(f"Cross ratio needs exactly 4 points, got {tuple(points)}.")
        a, b, c, d = points
        return cls((Delta(a, b), Delta(c, d)), (Delta(b, c), Delta(d, a)))

    @classmethod
    def from_key(cls, key: tuple[tuple[int, ...], tuple[int, ...]]) -> CompoundRatio:
        alphabet = delta_alphabet()
        num, den = key
        return cls(
            tuple(alphabet.from_code(c) for c in num),  # type: ignore[misc]
            tuple(alphabet.from_code(c) for c in den),  # type: ignore[misc]
        )

    def is_nil(self) -> bool:
        return any(d.is_nil() for d in self.numerator)

    def is_unity(self) -> bool:
        return not self.numerator and not self.denominator

    def inverse(self) -> CompoundRatio:
        return CompoundRatio(self.denominator, self.numerator)

    def __mul__(self, other: CompoundRatio) -> CompoundRatio:
        if not isinstance(other, CompoundRatio):
            return NotImplemented
        return CompoundRatio(
            self.numerator + other.numerator, self.denominator + other.denominator
        )

    def to_key(self) -> Hashable:
        if self.is_nil():
            raise ValueError("A nil ratio has no key.")
        alphabet = delta_alphabet()
        return (
            tuple(alphabet.to_code(d) for d in self.numerator),
            tuple(alphabet.to_code(d) for d in self.denominator),
        )

    @override
    def __str__(self) -> str:
        num = "".join(str(d) for d in self.numerator) or "1"
        if not self.denominator:
            return num
        return f"{num} / {''.join(str(d) for d in self.denominator)}"
