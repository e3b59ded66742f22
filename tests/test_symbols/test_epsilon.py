"""Tests for epsilon symbols and polylogarithm formal symbols."""

import pytest

from symbolax.coalgebra.coalgebra import icoproduct
from symbolax.linear.linear import tensor_product
from symbolax.symbols.epsilon import (
    EComplementIndexList,
    EComplementRangeInclusive,
    EFormalSymbolPositive,
    EFormalSymbolSigned,
    EpsilonComplement,
    EpsilonExpr,
    EpsilonICoExpr,
    EUnity,
    EVar,
)
from symbolax.symbols.formal_symbols import LiParam


def test_generators_to_string() -> None:
    assert str(EVar(1)) == "+ x1"
    assert str(EComplementIndexList([2, 1])) == "+ (1 - x1x2)"
    assert str(EUnity()) == "+ 1"


def test_complements() -> None:
    assert EComplementRangeInclusive(1, 3) == EComplementIndexList([1, 2, 3])
    assert EComplementRangeInclusive(3, 2).is_zero()
    assert EpsilonComplement.from_indices([4, 2]).indices() == [2, 4]
    with pytest.raises(ValueError):
        EComplementIndexList([1, 1])
    with pytest.raises(ValueError):
        EVar(17)


def test_products() -> None:
    product = tensor_product(EVar(1), EComplementIndexList([1, 2]))
    assert product.weight() == 2
    assert EUnity().weight() == 0
    assert tensor_product(EUnity(), EVar(2)) == EVar(2)


def test_li_param() -> None:
    li = LiParam(0, (1, 2), ((1,), (2, 3)))
    assert li.total_weight == 3
    assert li.sign == 1
    assert li.function_name() == "Li0_1_2"
    assert str(li) == "Li0_1_2(x1, x2x3)"
    assert LiParam.from_key(li.to_key()) == li
    assert LiParam(1, (2,), ((1,),)).sign == -1


@pytest.mark.parametrize(
    "args",
    [
        pytest.param((-1, (1,), ((1,),)), id="negative-foreweight"),
        pytest.param((0, (), ()), id="no-weights"),
        pytest.param((0, (0,), ((1,),)), id="zero-weight"),
        pytest.param((0, (1, 1), ((1,),)), id="arity-mismatch"),
        pytest.param((0, (1,), ((),)), id="empty-group"),
    ],
)
def test_li_param_rejects(args: tuple) -> None:
    with pytest.raises(ValueError):
        LiParam(*args)


def test_formal_symbols() -> None:
    li = LiParam(1, (2,), ((1, 2),))
    positive = EFormalSymbolPositive(li)
    assert positive.objects() == [li]
    assert positive.weight() == 3
    assert EFormalSymbolSigned(li) == -positive
    assert str(positive) == "+ Li1_2(x1x2)"
    with pytest.raises(TypeError):
        tensor_product(EVar(1), positive)


def test_icoproduct() -> None:
    result = icoproduct(EVar(1), EVar(2) + EComplementIndexList([3]))
    assert isinstance(result, EpsilonICoExpr)
    assert len(result) == 2
    assert icoproduct(EVar(2), EVar(1)) != icoproduct(EVar(1), EVar(2))
    with pytest.raises(ValueError):
        icoproduct(EVar(1), EVar(2), EVar(3))
    assert EpsilonExpr.hcoexpr_type is EpsilonICoExpr
