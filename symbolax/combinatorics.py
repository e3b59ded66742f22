"""
Small combinatorial helpers shared by the coalgebra and symbol families.

Contains sign-tracked permutation and sorting utilities (used for antisymmetrized
constructions and Lie normalization of coproducts) and word enumeration.
"""

from __future__ import annotations
import itertools
from typing import Any, Callable, Hashable, Sequence, TypeVar
from symbolax.linear.linear import Linear

T = TypeVar("T")
TLinear = TypeVar("TLinear", bound=Linear)


def unrank_base_d(index: int, num_digits: int, base: int) -> list[int]:
    """
    Represent a nonnegative integer in base ``base`` with fixed length ``num_digits``.

    The most-significant digit comes first in the returned list.
    """
    digits: list[int] = [0] * num_digits
    x = int(index)
    for k in range(num_digits - 1, -1, -1):
        digits[k] = x % base
        x //= base
    return digits


def enumerate_words(length: int, alphabet_size: int, first_letter: int = 1) -> list[tuple[int, ...]]:
    """All words of ``length`` over letters ``first_letter .. first_letter + alphabet_size - 1``.

    Words are listed in lexicographic order.
    """
    if length < 0 or alphabet_size <= 0:
        raise ValueError(f"Bad word shape: length={length}, alphabet_size={alphabet_size}.")
    return [
        tuple(first_letter + d for d in unrank_base_d(i, length, alphabet_size))
        for i in range(alphabet_size**length)
    ]


def permutation_sign(perm: Sequence[int]) -> int:
    """Sign of a permutation of ``0..n-1`` given in one-line notation."""
    if sorted(perm) != list(range(len(perm))):
        raise ValueError(f"Not a permutation: {tuple(perm)}.")
    sign = 1
    for i in range(len(perm)):
        for j in range(i + 1, len(perm)):
            if perm[i] > perm[j]:
                sign = -sign
    return sign


def permutations_with_sign(items: Sequence[T]) -> list[tuple[tuple[T, ...], int]]:
    """All orderings of ``items`` with the sign of the permutation relative to the input order.

    Signs are computed on positions, so repeated items still get distinct signs.

    >>> permutations_with_sign([1, 2])
    [((1, 2), 1), ((2, 1), -1)]
    """
    ret: list[tuple[tuple[T, ...], int]] = []
    for perm in itertools.permutations(range(len(items))):
        ret.append((tuple(items[i] for i in perm), permutation_sign(perm)))
    return ret


def sort_with_sign(
    items: Sequence[T], key: Callable[[T], Any] | None = None
) -> tuple[tuple[T, ...], int]:
    """Sorts ``items`` and returns the sign of the sorting permutation.

    The sign is ``0`` if two items have equal sort keys, which is how
    antisymmetric structures express that a repeated factor vanishes.
    """
    sort_key = key if key is not None else (lambda x: x)
    keys = [sort_key(item) for item in items]
    order = sorted(range(len(items)), key=lambda i: keys[i])
    for prev, cur in zip(order, order[1:]):
        if keys[prev] == keys[cur]:
            return tuple(items[i] for i in order), 0
    return tuple(items[i] for i in order), permutation_sign(order)


def increasing_sequences(n: int, length: int | None = None) -> list[tuple[int, ...]]:
    """Strictly increasing sequences over ``0..n-1``, shorter ones first.

    With ``length`` given, only sequences of that length are returned.
    """
    lengths = range(n + 1) if length is None else [length]
    ret: list[tuple[int, ...]] = []
    for k in lengths:
        ret.extend(itertools.combinations(range(n), k))
    return ret


def expand_over_permutations(
    points: Sequence[Hashable], builder: Callable[[tuple[Hashable, ...]], TLinear]
) -> TLinear:
    """Sums ``sign(p) * builder(p)`` over all permutations ``p`` of ``points``."""
    signed = [(perm, sign) for perm, sign in permutations_with_sign(points)]
    identity, _ = signed[0]
    ret = builder(identity).without_annotations()
    for perm, sign in signed[1:]:
        ret = ret + sign * builder(perm).without_annotations()
    return ret
