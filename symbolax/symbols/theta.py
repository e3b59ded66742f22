"""Theta symbols: products of differences and complements ``1 - ratio``.

A ``ThetaExpr`` term is either a product whose factors are ``Delta`` or
``ThetaComplement`` generators, or a formal ``LiraParam`` symbol.
``substitute_ratios`` turns ``EpsilonExpr`` (variables stand for ratios) into
``ThetaExpr``.
"""

from __future__ import annotations
from dataclasses import dataclass
from functools import reduce
from typing import Any, Callable, Hashable, Sequence, final, override
from symbolax.coalgebra.coalgebra import icoproduct
from symbolax.coalgebra.coalgebra_types import CoParam
from symbolax.constants import THETA_TERM_CAPACITY
from symbolax.formatting import COPROD_HOPF, parens
from symbolax.linear.linear import Linear, tensor_product_many
from symbolax.linear.linear_types import PackParam, TupleVectorParam
from symbolax.linear.string_expr import StringExpr
from symbolax.symbols.delta import Delta, DeltaExpr, delta_alphabet
from symbolax.symbols.epsilon import EpsilonComplement, EpsilonExpr, EpsilonICoExpr, EpsilonVar
from symbolax.symbols.formal_symbols import LiParam, LiraParam
from symbolax.symbols.ratio import CompoundRatio

_DELTA_TAG = 0
_COMPLEMENT_TAG = 1


@final
@dataclass(frozen=True)
class ThetaComplement:
    """``1 - ratio``. Nil when the ratio is nil or identically one."""

    ratio: CompoundRatio

    def is_nil(self) -> bool:
        return self.ratio.is_nil() or self.ratio.is_unity()

    @override
    def __str__(self) -> str:
        return parens(f"1 - {self.ratio}")


Theta = Delta | ThetaComplement


@final
class ThetaProductParam(TupleVectorParam):
    capacity = THETA_TERM_CAPACITY

    @override
    def generator_to_key(self, generator: Theta) -> tuple[int, Hashable]:
        match generator:
            case Delta():
                return (_DELTA_TAG, delta_alphabet().to_code(generator))
            case ThetaComplement(ratio=ratio):
                return (_COMPLEMENT_TAG, ratio.to_key())
        raise TypeError(f"Not a theta generator: {generator!r}.")

    @override
    def key_to_generator(self, key: tuple[int, Any]) -> Theta:
        tag, payload = key
        if tag == _DELTA_TAG:
            return delta_alphabet().from_code(payload)  # type: ignore[return-value]
        if tag == _COMPLEMENT_TAG:
            return ThetaComplement(CompoundRatio.from_key(payload))
        raise ValueError(f"Unexpected theta tag {tag} in key {key}.")


@final
class ThetaPackParam(PackParam):
    product_param = ThetaProductParam()
    formal_type = LiraParam

    @override
    def key_to_formal_symbol(self, key: Hashable) -> LiraParam:
        return LiraParam.from_key(key)  # type: ignore[arg-type]


THETA_PACK_PARAM = ThetaPackParam()


class ThetaICoExpr(Linear):
    param = CoParam(THETA_PACK_PARAM, max_parts=2, is_lie_algebra=False, separator=COPROD_HOPF)


class ThetaExpr(Linear):
    param = THETA_PACK_PARAM
    icoexpr_type = ThetaICoExpr
    hcoexpr_type = ThetaICoExpr


def _as_ratio(ratio: CompoundRatio | Sequence[int]) -> CompoundRatio:
    if isinstance(ratio, CompoundRatio):
        return ratio
    return CompoundRatio.from_cross_ratio(ratio)


def TUnity() -> ThetaExpr:
    return ThetaExpr.single(())


def TRatio(ratio: CompoundRatio | Sequence[int]) -> ThetaExpr:
    """Symbol of a ratio: its numerator factors minus its denominator factors."""
    ratio = _as_ratio(ratio)
    if ratio.is_nil():
        raise ValueError(f"Cannot take the symbol of a nil ratio: {ratio}.")
    ret = ThetaExpr()
    for d in ratio.numerator:
        ret.add((d,))
    for d in ratio.denominator:
        ret.add((d,), -1)
    return ret


def TComplement(ratio: CompoundRatio | Sequence[Sequence[int]]) -> ThetaExpr:
    """``1 - ratio``; a list of point quadruples means the product of their cross ratios."""
    if not isinstance(ratio, CompoundRatio):
        ratio = reduce(
            lambda acc, points: acc * CompoundRatio.from_cross_ratio(points),
            ratio,
            CompoundRatio(),
        )
    return ThetaExpr.single((ThetaComplement(ratio),))


def TFormalSymbol(lira_param: LiraParam) -> ThetaExpr:
    return ThetaExpr.single(lira_param)


def is_unity(term: Any) -> bool:
    return isinstance(term, tuple) and not term


def delta_expr_to_theta_expr(expr: DeltaExpr) -> ThetaExpr:
    """Requires every factor to be a difference of plain variables."""

    def convert(term: tuple[Delta, ...]) -> tuple[Delta, ...]:
        for d in term:
            d.a.as_simple_var()
            d.b.as_simple_var()
        return term

    return expr.mapped(convert, result_type=ThetaExpr)


def theta_expr_to_delta_expr(expr: ThetaExpr) -> DeltaExpr:
    """Requires every term to be a product of ``Delta`` factors."""

    def convert(term: Any) -> tuple[Delta, ...]:
        if not isinstance(term, tuple):
            raise TypeError(f"Formal symbol {term} has no product form.")
        for factor in term:
            if not isinstance(factor, Delta):
                raise TypeError(f"Factor {factor} is not a difference.")
        return term

    return expr.mapped(convert, result_type=DeltaExpr)


def update_foreweight(expr: ThetaExpr, new_foreweight: int) -> ThetaExpr:
    """Sets the foreweight of every formal symbol; products are left unchanged."""
    return expr.mapped(
        lambda term: term.with_foreweight(new_foreweight) if isinstance(term, LiraParam) else term
    )


# Monsters: terms that are not a product of Plücker coordinates ------------------


def is_monster(term: Any) -> bool:
    """A formal symbol, or a product with a factor other than a difference."""
    return not isinstance(term, tuple) or not all(isinstance(f, Delta) for f in term)


def _monster_predicate(expr: Linear) -> Callable[[Any], bool]:
    if isinstance(expr, ThetaICoExpr):
        return lambda parts: any(is_monster(part) for part in parts)
    if isinstance(expr, ThetaExpr):
        return is_monster
    raise TypeError(f"Expected ThetaExpr or ThetaICoExpr, got {type(expr).__name__}.")


def without_monsters(expr: ThetaExpr | ThetaICoExpr) -> ThetaExpr | ThetaICoExpr:
    predicate = _monster_predicate(expr)
    return expr.filtered(lambda term: not predicate(term))


def keep_monsters(expr: ThetaExpr | ThetaICoExpr) -> ThetaExpr | ThetaICoExpr:
    return expr.filtered(_monster_predicate(expr))


def count_functions(expr: ThetaExpr) -> StringExpr:
    """One count per term: the function name of formal symbols, ``prod`` for products."""
    ret = StringExpr()
    for term, _ in expr.items():
        ret.add(term.function_name() if isinstance(term, LiraParam) else "prod")
    return ret


# Ratio substitution ------------------------------------------------------------


def _ratio_product(ratios: Sequence[CompoundRatio], indices: Sequence[int]) -> CompoundRatio:
    ret = CompoundRatio()
    for idx in indices:
        if not 1 <= idx <= len(ratios):
            raise ValueError(f"No ratio for variable x{idx}: only {len(ratios)} ratios given.")
        ret = ret * ratios[idx - 1]
    return ret


def _substitute_term(term: Any, ratios: Sequence[CompoundRatio]) -> ThetaExpr:
    """Image of one epsilon term; a nil substituted ratio makes the term vanish."""
    if isinstance(term, LiParam):
        args = tuple(_ratio_product(ratios, group) for group in term.points)
        if any(r.is_nil() for r in args):
            return ThetaExpr()
        return TFormalSymbol(LiraParam(term.foreweight, term.weights, args))
    if not term:
        return TUnity()
    factors = []
    for factor in term:
        match factor:
            case EpsilonVar(idx=idx):
                ratio = _ratio_product(ratios, [idx])
                if ratio.is_nil():
                    return ThetaExpr()
                factors.append(TRatio(ratio))
            case EpsilonComplement():
                factors.append(TComplement(_ratio_product(ratios, factor.indices())))
            case _:
                raise TypeError(f"Not an epsilon generator: {factor!r}.")
    return tensor_product_many(factors)


def substitute_ratios(
    expr: EpsilonExpr | EpsilonICoExpr, ratios: Sequence[CompoundRatio]
) -> ThetaExpr | ThetaICoExpr:
    """Replaces ``x_i`` by ``ratios[i - 1]``, in expressions and in co-expressions."""
    if isinstance(expr, EpsilonExpr):
        return expr.mapped_expanding(lambda term: _substitute_term(term, ratios), ThetaExpr)
    if isinstance(expr, EpsilonICoExpr):
        ret = ThetaICoExpr()
        for parts, coeff in expr.items():
            pieces = [_substitute_term(part, ratios) for part in parts]
            ret.add_expr(icoproduct(*pieces, co_type=ThetaICoExpr), coeff)
        return ret
    raise TypeError(f"Expected EpsilonExpr or EpsilonICoExpr, got {type(expr).__name__}.")
