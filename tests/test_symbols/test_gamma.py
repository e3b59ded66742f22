"""Tests for Plücker coordinates and their conversions."""

import pytest

from symbolax.coalgebra.coalgebra import coproduct, expand_into_glued_pairs
from symbolax.linear.linear import tensor_product
from symbolax.symbols.delta import D
from symbolax.symbols.gamma import (
    G,
    Gamma,
    GammaACoExpr,
    GammaExpr,
    are_weakly_separated,
    delta_expr_to_gamma_expr,
    gamma_expr_to_delta_expr,
    is_totally_weakly_separated,
    normalize_remove_consecutive,
    passes_normalize_remove_consecutive,
    plucker_dual,
    project_on,
    pullback,
    substitute_variables,
)
from symbolax.symbols.x import Zero


def g(*indices: int) -> Gamma:
    return Gamma.from_vars(indices)


def test_gamma_construction() -> None:
    assert g(3, 1) == g(1, 3)
    assert g(1, 3).index_vector() == [1, 3]
    assert g(1, 2, 5).dimension == 3
    assert str(g(1, 2, 5)) == "(1,2,5)"
    assert g(1, 1).is_nil()
    assert G([1, 1]).is_zero()
    with pytest.raises(ValueError):
        G([17])
    with pytest.raises(ValueError):
        Gamma(1 << 16)


def test_mixed_dimensions_rejected() -> None:
    with pytest.raises(ValueError):
        tensor_product(G([1, 2]), G([1, 2, 3]))
    with pytest.raises(ValueError):
        coproduct(G([1, 2]), G([1, 2, 3]))
    assert tensor_product(G([1, 2]), G([3, 4])).dimension() == 2


def test_substitute_variables() -> None:
    expr = G([1, 2]) + G([2, 3])
    assert substitute_variables(expr, [1, 1, 3]) == G([1, 3])
    with pytest.raises(ValueError):
        substitute_variables(G([1, 4]), [1, 2])


def test_project_on() -> None:
    expr = G([1, 2]) + G([2, 3]) + tensor_product(G([1, 3]), G([1, 4]))
    assert project_on(1, expr) == G([2]) + tensor_product(G([3]), G([4]))


@pytest.mark.parametrize(
    "lhs,rhs,expected",
    [
        pytest.param(g(1, 3), g(2, 4), False, id="crossing"),
        pytest.param(g(1, 2), g(3, 4), True, id="blocks"),
        pytest.param(g(1, 2, 3), g(1, 2, 4), True, id="shared-columns"),
        pytest.param(g(1, 3, 5), g(2, 4, 6), False, id="alternating"),
        pytest.param(g(1, 4), g(2, 3), True, id="cyclic-blocks"),
    ],
)
def test_are_weakly_separated(lhs: Gamma, rhs: Gamma, expected: bool) -> None:
    assert are_weakly_separated(lhs, rhs) == expected
    assert are_weakly_separated(rhs, lhs) == expected


def test_is_totally_weakly_separated() -> None:
    assert not is_totally_weakly_separated(tensor_product(G([1, 3]), G([2, 4])))
    assert is_totally_weakly_separated(tensor_product(G([1, 2]), G([3, 4])))


def test_normalize_remove_consecutive() -> None:
    expr = G([1, 4]) + G([1, 3]) + G([2, 3])
    assert normalize_remove_consecutive(expr, 2, 4) == G([1, 3])
    assert normalize_remove_consecutive(expr) == G([1, 3])
    assert normalize_remove_consecutive(GammaExpr()).is_zero()
    assert passes_normalize_remove_consecutive((g(1, 4),), 2, 5)


def test_delta_gamma_conversions() -> None:
    assert delta_expr_to_gamma_expr(D(1, 2) - D(2, 3)) == G([1, 2]) - G([2, 3])
    assert gamma_expr_to_delta_expr(G([1, 2])) == D(1, 2)
    with pytest.raises(ValueError):
        gamma_expr_to_delta_expr(G([1, 2, 3]))
    with pytest.raises(ValueError):
        delta_expr_to_gamma_expr(D(1, Zero))


def test_pullback() -> None:
    assert pullback(G([1, 2]) + G([3, 4]), [4]) == G([1, 2, 4])
    assert pullback(D(1, 2), [3]) == G([1, 2, 3])
    with pytest.raises(TypeError):
        pullback("(1,2)", [3])


def test_plucker_dual() -> None:
    assert plucker_dual(G([1, 2]), [1, 2, 3, 4]) == G([3, 4])
    assert plucker_dual(D(1, 3), [1, 2, 3, 4, 5]) == G([2, 4, 5])
    with pytest.raises(ValueError):
        plucker_dual(G([5, 6]), [1, 2, 3, 4])


def test_glued_pairs() -> None:
    result = expand_into_glued_pairs(tensor_product(G([1, 2]), G([2, 3])))
    assert isinstance(result, GammaACoExpr)
    assert len(result) == 1
