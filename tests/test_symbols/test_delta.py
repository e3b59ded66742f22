"""Tests for point differences and their filters.

These tests verify:
1. Normalization of ``Delta`` on construction
2. Substitution, involution and term filters
3. Weak separation of chords on plain and co-expression terms
"""

import pytest

from symbolax.coalgebra.coalgebra import coproduct
from symbolax.linear.linear import tensor_product, tensor_product_many
from symbolax.symbols.delta import (
    D,
    Delta,
    are_weakly_separated,
    count_var,
    group_by_num_distinct_variables,
    involute,
    is_totally_weakly_separated,
    is_weakly_separated,
    keep_non_weakly_separated,
    normalize_remove_consecutive,
    num_distinct_variables,
    sort_term_multiples,
    substitute_variables,
    terms_containing_only_variables,
    terms_with_connected_variable_graph,
    terms_with_min_distinct_variables,
    terms_with_nonunique_multiples,
    terms_with_num_distinct_variables,
    terms_with_unique_multiples,
    terms_without_variables,
    to_string_by_num_distinct_variables,
)
from symbolax.symbols.x import Inf, X, Zero, to_x


@pytest.mark.parametrize(
    "lhs,rhs",
    [
        pytest.param(Delta(2, 1), Delta(1, 2), id="unordered"),
        pytest.param(Delta(1, -1), Delta(1, Zero), id="sum-with-negation"),
        pytest.param(Delta(-1, Zero), Delta(1, Zero), id="both-negated"),
        pytest.param(Delta(-1, -2), Delta(1, 2), id="both-negative"),
    ],
)
def test_delta_normalization(lhs: Delta, rhs: Delta) -> None:
    assert lhs == rhs
    assert hash(lhs) == hash(rhs)


def test_delta_nil() -> None:
    assert Delta(1, 1).is_nil()
    assert Delta(1, Inf).is_nil()
    assert not Delta(1, 2).is_nil()
    assert D(3, 3).is_zero()
    assert str(Delta(2, 2)) == "<nil>"


def test_delta_to_string() -> None:
    assert str(Delta(1, 2)) == "(x1 - x2)"
    assert str(Delta(1, -2)) == "(x1 + x2)"
    assert str(Delta(1, Zero)) == "(x1)"
    assert str(D(1, 2) - D(1, 3)) == "+ (x1 - x2)\n- (x1 - x3)"


def test_points() -> None:
    assert to_x(-3) == X.var(3).negated()
    assert -X.var(3) == to_x(-3)
    assert str(to_x(-3)) == "-x3"
    with pytest.raises(ValueError):
        to_x(0)
    with pytest.raises(TypeError):
        to_x("x1")
    with pytest.raises(ValueError):
        X.var(17)
    with pytest.raises(ValueError):
        Zero.as_simple_var()


def test_substitute_variables() -> None:
    expr = D(1, 2) + D(2, 3)
    assert substitute_variables(expr, [1, 1, 3]) == D(1, 3)
    assert substitute_variables(D(1, 2), [Zero, 4]) == D(4, Zero)
    with pytest.raises(ValueError):
        substitute_variables(D(1, 5), [1, 2])


def test_involute() -> None:
    points = [1, 2, 3, 4, 5, 6]
    assert involute(D(6, 5), points) == D(6, 1) - D(1, 2) + D(2, 3) - D(3, 4) + D(4, 5)
    assert involute(D(1, 2), points) == D(1, 2)
    product = involute(tensor_product(D(6, 2), D(1, 2)), points)
    expected = tensor_product(D(6, 1) - D(1, 5) + D(5, 3) - D(3, 4) + D(4, 2), D(1, 2))
    assert product == expected
    with pytest.raises(ValueError):
        involute(D(1, 2), [1, 2, 3])


def test_sort_term_multiples() -> None:
    expr = tensor_product(D(2, 3), D(1, 2)) + tensor_product(D(1, 2), D(2, 3))
    assert sort_term_multiples(expr) == 2 * tensor_product(D(1, 2), D(2, 3))


def test_multiples_filters() -> None:
    repeated = tensor_product(D(1, 2), D(1, 2))
    distinct = tensor_product(D(1, 2), D(1, 3))
    expr = repeated + distinct
    assert terms_with_unique_multiples(expr) == distinct
    assert terms_with_nonunique_multiples(expr) == repeated


def test_distinct_variables() -> None:
    assert num_distinct_variables((Delta(1, 2), Delta(1, Zero))) == 2
    two = D(1, 2)
    four = tensor_product(D(1, 2), D(3, 4))
    expr = two + four
    assert terms_with_num_distinct_variables(expr, 4) == four
    assert terms_with_min_distinct_variables(expr, 2) == expr
    groups = group_by_num_distinct_variables(expr)
    assert sorted(groups) == [2, 4]
    assert groups[2] == two
    assert to_string_by_num_distinct_variables(expr).startswith("2 vars:")


def test_variable_filters() -> None:
    expr = D(1, 2) + D(1, 3)
    assert terms_containing_only_variables(expr, [1, 2]) == D(1, 2)
    assert terms_without_variables(expr, [1, 2]) == D(1, 3)
    assert count_var((Delta(1, 2), Delta(2, 3), Delta(3, 4)), 2) == 2


def test_connected_variable_graph() -> None:
    connected = tensor_product(D(1, 2), D(2, 3))
    disconnected = tensor_product(D(1, 2), D(3, 4))
    assert terms_with_connected_variable_graph(connected + disconnected) == connected


def test_are_weakly_separated() -> None:
    assert not are_weakly_separated(Delta(1, 3), Delta(2, 4))
    assert are_weakly_separated(Delta(1, 2), Delta(3, 4))
    assert are_weakly_separated(Delta(1, 4), Delta(2, 3))
    assert are_weakly_separated(Delta(1, 3), Delta(3, 5))


def test_weak_separation_on_expressions() -> None:
    crossing = tensor_product(D(1, 3), D(2, 4))
    nested = tensor_product(D(1, 4), D(2, 3))
    assert is_weakly_separated((Delta(1, 4), Delta(2, 3)))
    assert not is_totally_weakly_separated(crossing + nested)
    assert is_totally_weakly_separated(nested)
    assert keep_non_weakly_separated(crossing + nested) == crossing


def test_weak_separation_on_coproducts() -> None:
    assert not is_totally_weakly_separated(coproduct(D(1, 3), D(2, 4)))
    assert is_totally_weakly_separated(coproduct(D(1, 2), D(3, 4)))


def test_normalize_remove_consecutive() -> None:
    kept = tensor_product(D(1, 3), D(2, 4))
    dropped = tensor_product_many([D(1, 3), D(3, 4)])
    assert normalize_remove_consecutive(kept + dropped) == kept
