"""Tests for Lyndon words, Lyndon factorization and the Lyndon basis modulo shuffles."""

import numpy as np
import pytest

from symbolax.combinatorics import enumerate_words
from symbolax.linalg import are_linearly_independent
from symbolax.linear.lyndon import (
    enumerate_lyndon_basis,
    is_lyndon,
    lyndon_basis,
    lyndon_factorize,
    to_lyndon_basis,
)
from symbolax.linear.shuffle import shuffle_product
from symbolax.symbols.simple_vector import SV, SimpleVectorExpr


def test_enumerate_lyndon_basis_small() -> None:
    levels = enumerate_lyndon_basis(depth=3, dim=2)
    np.testing.assert_array_equal(levels[0], [[0], [1]])
    np.testing.assert_array_equal(levels[1], [[0, 1]])
    np.testing.assert_array_equal(levels[2], [[0, 0, 1], [0, 1, 1]])


def test_enumerate_lyndon_basis_first_letter() -> None:
    levels = enumerate_lyndon_basis(depth=2, dim=2, first_letter=1)
    np.testing.assert_array_equal(levels[1], [[1, 2]])


@pytest.mark.parametrize(
    "depth,dim,expected",
    [
        pytest.param(4, 2, [2, 1, 2, 3], id="dim-2"),
        pytest.param(3, 3, [3, 3, 8], id="dim-3"),
        pytest.param(3, 1, [1, 0, 0], id="dim-1"),
    ],
)
def test_enumerate_lyndon_basis_counts(depth: int, dim: int, expected: list[int]) -> None:
    """Level sizes follow Witt's necklace formula."""
    levels = enumerate_lyndon_basis(depth=depth, dim=dim)
    assert [level.shape[0] for level in levels] == expected
    for level_idx, level in enumerate(levels):
        assert level.shape[1] == level_idx + 1
        for word in level:
            assert is_lyndon(tuple(int(x) for x in word))


def test_enumerate_lyndon_basis_rejects() -> None:
    with pytest.raises(ValueError):
        enumerate_lyndon_basis(depth=0, dim=2)
    with pytest.raises(ValueError):
        enumerate_lyndon_basis(depth=2, dim=0)


@pytest.mark.parametrize(
    "word,factors",
    [
        pytest.param((1, 2, 1, 1), [(1, 2), (1,), (1,)], id="1211"),
        pytest.param((2, 1), [(2,), (1,)], id="21"),
        pytest.param((1, 1, 2), [(1, 1, 2)], id="112"),
        pytest.param((), [], id="empty"),
    ],
)
def test_lyndon_factorize(word: tuple[int, ...], factors: list[tuple[int, ...]]) -> None:
    assert lyndon_factorize(word) == factors


def test_is_lyndon() -> None:
    assert is_lyndon((1, 2))
    assert is_lyndon((1, 1, 2))
    assert not is_lyndon((2, 1))
    assert not is_lyndon((1, 1))
    assert not is_lyndon(())
    assert is_lyndon((2, 1), key=lambda x: -x)


def test_to_lyndon_basis_simple() -> None:
    assert to_lyndon_basis(SV([1, 2])) == SV([1, 2])
    assert to_lyndon_basis(SV([2, 1])) == -SV([1, 2])
    assert to_lyndon_basis(SV([1, 1])).is_zero()
    assert to_lyndon_basis(SimpleVectorExpr()).is_zero()


def test_to_lyndon_basis_reversed_word() -> None:
    """Reversing a word of length n multiplies it by (-1)^(n-1) modulo shuffles."""
    assert to_lyndon_basis(SV([4, 3, 2, 1])) == -SV([1, 2, 3, 4])
    assert to_lyndon_basis(SV([3, 2, 1])) == SV([1, 2, 3])


def test_to_lyndon_basis_kills_shuffles() -> None:
    product = shuffle_product(SV([1, 2]), SV([3]))
    assert to_lyndon_basis(product).is_zero()
    assert to_lyndon_basis(shuffle_product(SV([2]), SV([1, 1]))).is_zero()


def test_to_lyndon_basis_is_idempotent() -> None:
    expr = SV([2, 1, 3]) - 2 * SV([3, 1, 2]) + SV([2, 2, 1])
    once = to_lyndon_basis(expr)
    assert to_lyndon_basis(once) == once
    for term in once.objects():
        assert is_lyndon(term)


def test_lyndon_basis_spans_words() -> None:
    """Every word of a given length reduces into the span of the Lyndon basis."""
    basis = lyndon_basis(SimpleVectorExpr, length=3, alphabet_size=2)
    assert basis == [SV([1, 1, 2]), SV([1, 2, 2])]
    assert are_linearly_independent(basis)
    for word in enumerate_words(3, 2):
        reduced = to_lyndon_basis(SV(word))
        assert set(reduced.objects()) <= {(1, 1, 2), (1, 2, 2)}
    with pytest.raises(ValueError):
        lyndon_basis(SimpleVectorExpr, length=0, alphabet_size=2)
