"""Lyndon words: enumeration, factorization and the Lyndon basis modulo shuffles.

A word is Lyndon if it is strictly smaller than all of its proper rotations
under a given letter order. Every word factors uniquely as a non-increasing
product of Lyndon words (Chen-Fox-Lyndon), and Lyndon words form a basis of the
shuffle algebra modulo products, which is what ``to_lyndon_basis`` computes.
"""

from __future__ import annotations
import logging
from collections import Counter, defaultdict
from math import factorial, prod
from typing import Any, Callable, Hashable, Sequence, TypeVar
import numpy as np
from symbolax.linear.linear import Linear
from symbolax.linear.shuffle import shuffle_words

logger = logging.getLogger(__name__)

TLinear = TypeVar("TLinear", bound=Linear)
Word = tuple[Hashable, ...]


def enumerate_lyndon_basis(depth: int, dim: int, first_letter: int = 0) -> list[np.ndarray]:
    """Duval's generator. Generates lists of words (integer sequences) for each level up to a specified depth.

    Entry ``level`` has shape ``[N_level, level + 1]`` and lists the Lyndon words of
    that length over letters ``first_letter .. first_letter + dim - 1`` in
    lexicographic order.
    Ref: https://www.lyndex.org/algo.php
    """
    if depth <= 0:
        raise ValueError(f"depth must be >= 1, got {depth}.")
    if dim <= 0:
        raise ValueError(f"dim must be >= 1, got {dim}.")
    if dim == 1:
        first_level_word = [np.array([[first_letter]], dtype=np.int32)]
        higher_level_empty_words = [np.empty((0, i + 1), dtype=np.int32) for i in range(1, depth)]
        return first_level_word + higher_level_empty_words

    list_of_words: dict[int, list[list[int]]] = defaultdict(list)
    word: list[int] = [-1]
    while word:
        word[-1] += 1
        m = len(word)
        list_of_words[m - 1].append(list(word))
        while len(word) < depth:
            word.append(word[-m])
        while word and word[-1] == dim - 1:
            word.pop()

    result: list[np.ndarray] = []
    for level in range(depth):
        words_level = list_of_words[level]
        if not words_level:
            result.append(np.empty((0, level + 1), dtype=np.int32))
        else:
            result.append(np.asarray(words_level, dtype=np.int32) + first_letter)

    return result


def lyndon_factorize(
    word: Sequence[Hashable], key: Callable[[Hashable], Any] | None = None
) -> list[Word]:
    """Chen-Fox-Lyndon factorization via Duval's algorithm.

    Returns Lyndon words ``l_1 >= l_2 >= ... >= l_k`` whose concatenation is ``word``.
    Letters are compared through ``key`` (identity by default).
    """
    letters = [key(x) for x in word] if key is not None else list(word)
    n = len(word)
    factors: list[Word] = []
    i = 0
    while i < n:
        j = i + 1
        k = i
        while j < n and letters[k] <= letters[j]:
            if letters[k] < letters[j]:
                k = i
            else:
                k += 1
            j += 1
        while i <= k:
            factors.append(tuple(word[i : i + j - k]))
            i += j - k
    return factors


def is_lyndon(word: Sequence[Hashable], key: Callable[[Hashable], Any] | None = None) -> bool:
    return len(word) > 0 and len(lyndon_factorize(word, key)) == 1


def to_lyndon_basis(expr: TLinear) -> TLinear:
    """Rewrites ``expr`` modulo shuffle products so that every term is a Lyndon word.

    For a non-Lyndon word ``w`` with factorization ``l_1 ... l_k``, the shuffle
    ``l_1 ш ... ш l_k`` contains ``w`` with multiplicity ``c`` (the product of
    factorials of repeated factors) and otherwise only words smaller than ``w``.
    Modulo products ``w`` is therefore replaced by ``-(1/c)`` times the rest; the
    rewriting terminates because words only decrease.
    """
    param = expr.param
    letter_key = param.lyndon_letter_key
    ret = type(expr)()
    pending = expr.without_annotations()
    rounds = 0
    while not pending.is_zero():
        rounds += 1
        nxt = type(expr)()
        for key, coeff in pending.key_items():
            word = param.key_to_vector(key)
            factors = lyndon_factorize(word, key=letter_key)
            if len(factors) <= 1:
                ret.add_key(key, coeff)
                continue
            multiplicity = prod(factorial(n) for n in Counter(factors).values())
            shuffled = shuffle_words(factors)
            self_count = shuffled.pop(word)
            if self_count != multiplicity:
                raise RuntimeError(
                    f"Word {word} appears {self_count} times in the shuffle of its Lyndon "
                    f"factors, expected {multiplicity}."
                )
            for other, count in shuffled.items():
                nxt.add_key(param.vector_to_key(other), -coeff * (count // multiplicity))
        pending = nxt
    logger.debug("to_lyndon_basis: %d terms -> %d terms in %d rounds", len(expr), len(ret), rounds)
    return ret


def lyndon_basis(
    expr_type: type[TLinear], length: int, alphabet_size: int, first_letter: int = 1
) -> list[TLinear]:
    """One single-word combination per Lyndon word of ``length``, for families of integer words."""
    if length <= 0:
        raise ValueError(f"length must be >= 1, got {length}.")
    level = enumerate_lyndon_basis(length, alphabet_size, first_letter)[length - 1]
    return [expr_type.single(tuple(int(x) for x in row)) for row in level]
