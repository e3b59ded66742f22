"""Tests for the shuffle product of words and combinations."""

import pytest

from symbolax.linear.shuffle import shuffle_product, shuffle_product_expr, shuffle_words
from symbolax.symbols.delta import D
from symbolax.symbols.simple_vector import SV


def test_shuffle_words() -> None:
    assert shuffle_words([(1,), (2,)]) == {(1, 2): 1, (2, 1): 1}
    assert shuffle_words([(1,), (1,)]) == {(1, 1): 2}
    assert shuffle_words([]) == {(): 1}


def test_shuffle_word_count() -> None:
    """A shuffle of words of lengths m and n has binomial(m + n, m) terms with multiplicity."""
    shuffled = shuffle_words([(1, 2), (3, 4, 5)])
    assert sum(shuffled.values()) == 10
    assert all(len(word) == 5 for word in shuffled)


def test_shuffle_product() -> None:
    assert shuffle_product(SV([1]), SV([2])) == SV([1, 2]) + SV([2, 1])
    assert shuffle_product(SV([1]), SV([1])) == 2 * SV([1, 1])
    assert shuffle_product(SV([1, 2]), SV([3])) == SV([1, 2, 3]) + SV([1, 3, 2]) + SV([3, 1, 2])


def test_shuffle_product_commutative_and_bilinear() -> None:
    a = SV([1, 2]) - SV([3])
    b = 2 * SV([4]) + SV([5, 6])
    assert shuffle_product(a, b) == shuffle_product(b, a)
    assert shuffle_product(a + b, b) == shuffle_product(a, b) + shuffle_product(b, b)


def test_shuffle_product_expr() -> None:
    result = shuffle_product_expr([SV([1]), SV([2]), SV([3])])
    assert len(result) == 6
    assert all(coeff == 1 for _, coeff in result.items())
    with pytest.raises(ValueError):
        shuffle_product_expr([])


def test_shuffle_product_type_mismatch() -> None:
    with pytest.raises(ValueError):
        shuffle_product(SV([1]), D(1, 2))
