import pytest

from symbolax.combinatorics import (
    enumerate_words,
    expand_over_permutations,
    increasing_sequences,
    permutation_sign,
    permutations_with_sign,
    sort_with_sign,
    unrank_base_d,
)
from symbolax.symbols.simple_vector import SV


def test_permutations_with_sign() -> None:
    assert permutations_with_sign([1, 2]) == [((1, 2), 1), ((2, 1), -1)]
    perms = permutations_with_sign([1, 2, 3])
    assert len(perms) == 6
    assert sum(sign for _, sign in perms) == 0
    assert dict(perms)[(2, 3, 1)] == 1


def test_permutation_sign() -> None:
    assert permutation_sign([1, 0, 2]) == -1
    assert permutation_sign([]) == 1
    with pytest.raises(ValueError):
        permutation_sign([0, 0])


@pytest.mark.parametrize(
    "items,expected",
    [
        pytest.param([3, 1, 2], ((1, 2, 3), 1), id="cycle"),
        pytest.param([2, 1, 3], ((1, 2, 3), -1), id="transposition"),
        pytest.param([2, 1, 2], ((1, 2, 2), 0), id="repeated"),
        pytest.param([], ((), 1), id="empty"),
    ],
)
def test_sort_with_sign(items: list[int], expected: tuple) -> None:
    assert sort_with_sign(items) == expected


def test_sort_with_sign_key() -> None:
    assert sort_with_sign(["bb", "a"], key=len) == (("a", "bb"), -1)


def test_increasing_sequences() -> None:
    assert increasing_sequences(3) == [(), (0,), (1,), (2,), (0, 1), (0, 2), (1, 2), (0, 1, 2)]
    assert increasing_sequences(4, length=3) == [(0, 1, 2), (0, 1, 3), (0, 2, 3), (1, 2, 3)]


def test_enumerate_words() -> None:
    assert enumerate_words(2, 2) == [(1, 1), (1, 2), (2, 1), (2, 2)]
    assert enumerate_words(0, 3) == [()]
    assert len(enumerate_words(3, 3, first_letter=0)) == 27
    with pytest.raises(ValueError):
        enumerate_words(2, 0)


def test_unrank_base_d() -> None:
    assert unrank_base_d(5, 3, 2) == [1, 0, 1]
    assert unrank_base_d(0, 2, 7) == [0, 0]


def test_expand_over_permutations() -> None:
    result = expand_over_permutations((1, 2), lambda points: SV(points).annotate("f"))
    assert result == SV([1, 2]) - SV([2, 1])
    assert result.annotations.is_zero()
