"""Shuffle product of words and of linear combinations."""

from __future__ import annotations
from collections import Counter
from functools import lru_cache
from typing import Hashable, Sequence, TypeVar
from symbolax.linear.linear import Linear

TLinear = TypeVar("TLinear", bound=Linear)
Word = tuple[Hashable, ...]


@lru_cache(maxsize=1 << 16)
def _shuffle_pair(lhs: Word, rhs: Word) -> tuple[tuple[Word, int], ...]:
    if not lhs:
        return ((rhs, 1),)
    if not rhs:
        return ((lhs, 1),)
    acc: Counter[Word] = Counter()
    for word, count in _shuffle_pair(lhs[1:], rhs):
        acc[(lhs[0],) + word] += count
    for word, count in _shuffle_pair(lhs, rhs[1:]):
        acc[(rhs[0],) + word] += count
    return tuple(acc.items())


def shuffle_words(words: Sequence[Word]) -> Counter[Word]:
    """Multiplicities of every word in the shuffle product ``w_1 ш w_2 ш ... ш w_k``.

    >>> sorted(shuffle_words([(1,), (2,)]).items())
    [((1, 2), 1), ((2, 1), 1)]
    """
    acc: Counter[Word] = Counter({(): 1})
    for word in words:
        nxt: Counter[Word] = Counter()
        for prefix, prefix_count in acc.items():
            for shuffled, count in _shuffle_pair(prefix, tuple(word)):
                nxt[shuffled] += prefix_count * count
        acc = nxt
    return acc


def shuffle_product(lhs: TLinear, rhs: TLinear) -> TLinear:
    """Bilinear shuffle product of two combinations of the same family."""
    if type(lhs) is not type(rhs):
        raise ValueError(
            f"Shuffle product operands differ: {type(lhs).__name__} and {type(rhs).__name__}."
        )
    param = lhs.param
    ret = type(lhs)()
    for lhs_key, lhs_coeff in lhs.key_items():
        lhs_word = param.key_to_vector(lhs_key)
        for rhs_key, rhs_coeff in rhs.key_items():
            rhs_word = param.key_to_vector(rhs_key)
            for word, count in _shuffle_pair(lhs_word, rhs_word):
                ret.add_key(param.vector_to_key(word), lhs_coeff * rhs_coeff * count)
    return ret


def shuffle_product_expr(exprs: Sequence[TLinear]) -> TLinear:
    if not exprs:
        raise ValueError("Shuffle product of an empty sequence is undefined.")
    ret = exprs[0].without_annotations()
    for expr in exprs[1:]:
        ret = shuffle_product(ret, expr)
    return ret
