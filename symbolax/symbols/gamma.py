"""Plücker coordinates: minors of a ``d x n`` matrix, indexed by their column sets.

``Gamma`` generalizes ``Delta`` restricted to plain variables: the minor on
columns ``{i, j}`` of a ``2 x n`` matrix is the difference ``x_i - x_j``. A
minor with a repeated column is nil.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Iterable, Sequence, final, override
from symbolax.coalgebra.coalgebra_types import CoParam
from symbolax.constants import GAMMA_TERM_CAPACITY, MAX_GAMMA_VARIABLES
from symbolax.formatting import COPROD_HOPF, COPROD_LIE, COPROD_NORMAL, parens
from symbolax.linear.keys import PackedCodec
from symbolax.linear.linear import Linear
from symbolax.linear.linear_types import PackedVectorParam
from symbolax.linear.ordering import LyndonOrder
from symbolax.symbols.delta import Delta, DeltaExpr

GammaTerm = tuple["Gamma", ...]


@final
@dataclass(frozen=True, order=True)
class Gamma:
    """Column set stored as a bitset; bit ``i - 1`` stands for column ``i``."""

    bits: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.bits < (1 << MAX_GAMMA_VARIABLES):
            raise ValueError(
                f"Gamma bitset must fit {MAX_GAMMA_VARIABLES} columns, got {self.bits:#x}."
            )

    @classmethod
    def from_vars(cls, indices: Iterable[int]) -> Gamma:
        bits = 0
        for idx in indices:
            if not 1 <= idx <= MAX_GAMMA_VARIABLES:
                raise ValueError(
                    f"Gamma column must lie in [1, {MAX_GAMMA_VARIABLES}], got {idx}."
                )
            mask = 1 << (idx - 1)
            if bits & mask:
                return cls(0)
            bits |= mask
        return cls(bits)

    def is_nil(self) -> bool:
        return self.bits == 0

    def index_vector(self) -> list[int]:
        return [i + 1 for i in range(MAX_GAMMA_VARIABLES) if self.bits >> i & 1]

    @property
    def dimension(self) -> int:
        return self.bits.bit_count()

    @override
    def __str__(self) -> str:
        return parens(",".join(str(i) for i in self.index_vector()))


@final
class GammaExprParam(PackedVectorParam):
    codec = PackedCodec(capacity=GAMMA_TERM_CAPACITY, width=2)

    @override
    def generator_to_code(self, generator: Gamma) -> int:
        return generator.bits

    @override
    def code_to_generator(self, code: int) -> Gamma:
        return Gamma(code)

    @override
    def object_to_dimension(self, obj: Sequence[Gamma]) -> int:
        if not obj:
            raise ValueError("Dimension is undefined for an empty Gamma term.")
        dimensions = {g.dimension for g in obj}
        if len(dimensions) != 1:
            raise ValueError(
                f"Minors of different sizes {sorted(dimensions)} in {self.object_to_string(obj)}."
            )
        return dimensions.pop()

    @override
    def check_compatible(self, keys: Sequence[bytes]) -> None:
        dimensions = {code.bit_count() for key in keys for code in self.codec.unpack(key)}
        if len(dimensions) > 1:
            raise ValueError(f"Cannot combine minors of different sizes {sorted(dimensions)}.")

    @override
    def monom_tensor_product(self, lhs: bytes, rhs: bytes) -> bytes:
        self.check_compatible((lhs, rhs))
        return super().monom_tensor_product(lhs, rhs)


GAMMA_EXPR_PARAM = GammaExprParam()


class GammaICoExpr(Linear):
    param = CoParam(GAMMA_EXPR_PARAM)


class GammaNCoExpr(Linear):
    param = CoParam(GAMMA_EXPR_PARAM, is_iterated=False, separator=COPROD_NORMAL)


class GammaACoExpr(Linear):
    param = CoParam(
        GAMMA_EXPR_PARAM,
        max_parts=GAMMA_TERM_CAPACITY,
        order=LyndonOrder.LIE,
        is_iterated=False,
        separator=COPROD_LIE,
    )


class GammaHCoExpr(Linear):
    param = CoParam(GAMMA_EXPR_PARAM, is_lie_algebra=False, separator=COPROD_HOPF)


class GammaExpr(Linear):
    param = GAMMA_EXPR_PARAM
    icoexpr_type = GammaICoExpr
    ncoexpr_type = GammaNCoExpr
    acoexpr_type = GammaACoExpr
    hcoexpr_type = GammaHCoExpr


def G(indices: Sequence[int]) -> GammaExpr:
    return GammaExpr.single((Gamma.from_vars(indices),))


def substitute_variables(expr: GammaExpr, new_points: Sequence[int]) -> GammaExpr:
    """Replaces column ``i`` by ``new_points[i - 1]``; minors with a repeated column vanish."""

    def substitute(g: Gamma) -> Gamma:
        indices = g.index_vector()
        if indices[-1] > len(new_points):
            raise ValueError(f"No substitution for column {indices[-1]} of {g}.")
        return Gamma.from_vars(new_points[i - 1] for i in indices)

    return expr.mapped(lambda term: tuple(substitute(g) for g in term))


def project_on(axis: int, expr: GammaExpr) -> GammaExpr:
    """Keeps terms whose every minor contains column ``axis`` and drops that column."""
    mask = 1 << (axis - 1)
    kept = expr.filtered(lambda term: all(g.bits & mask for g in term))
    return kept.mapped(lambda term: tuple(Gamma(g.bits & ~mask) for g in term))


# Weak separation ---------------------------------------------------------------


def are_weakly_separated(g1: Gamma, g2: Gamma) -> bool:
    """Going around the circle, ``g1 \\ g2`` and ``g2 \\ g1`` form at most two blocks."""
    only1 = g1.bits & ~g2.bits
    only2 = g2.bits & ~g1.bits
    labels = [
        bool(only1 >> i & 1) for i in range(MAX_GAMMA_VARIABLES) if (only1 | only2) >> i & 1
    ]
    switches = sum(1 for i in range(len(labels)) if labels[i] != labels[i - 1])
    return switches <= 2


def _flatten(term: Sequence[Any]) -> list[Gamma]:
    if term and isinstance(term[0], tuple):
        return [g for part in term for g in part]
    return list(term)


def is_weakly_separated(term: Sequence[Any]) -> bool:
    gammas = _flatten(term)
    return all(
        are_weakly_separated(gammas[i], gammas[j])
        for i in range(len(gammas))
        for j in range(i)
    )


def is_totally_weakly_separated(expr: Linear) -> bool:
    return not expr.contains(lambda term: not is_weakly_separated(term))


def keep_non_weakly_separated(expr: Linear) -> Linear:
    return expr.filtered(lambda term: not is_weakly_separated(term))


def _is_cyclic_interval(g: Gamma, dimension: int, num_points: int) -> bool:
    if g.dimension != dimension:
        return False
    indices = set(g.index_vector())
    return any(
        indices == {(start + k) % num_points + 1 for k in range(dimension)}
        for start in range(num_points)
    )


def passes_normalize_remove_consecutive(
    term: GammaTerm, dimension: int, num_points: int
) -> bool:
    """No minor is a run of ``dimension`` cyclically consecutive columns out of ``num_points``."""
    return not any(_is_cyclic_interval(g, dimension, num_points) for g in term)


def normalize_remove_consecutive(
    expr: GammaExpr, dimension: int | None = None, num_points: int | None = None
) -> GammaExpr:
    """Drops terms containing a frozen (cyclically consecutive) minor.

    Dimension and number of points are inferred from ``expr`` when omitted.
    """
    if expr.is_zero():
        return expr.copy()
    if dimension is None:
        dimension = expr.dimension()
    if num_points is None:
        num_points = max(g.index_vector()[-1] for term in expr.objects() for g in term)
    return expr.filtered(
        lambda term: passes_normalize_remove_consecutive(term, dimension, num_points)
    )


# Conversions -------------------------------------------------------------------


def delta_expr_to_gamma_expr(expr: DeltaExpr) -> GammaExpr:
    """Requires every factor to be a difference of plain variables ``x_i - x_j``."""
    return expr.mapped(
        lambda term: tuple(
            Gamma.from_vars((d.a.as_simple_var(), d.b.as_simple_var())) for d in term
        ),
        result_type=GammaExpr,
    )


def gamma_expr_to_delta_expr(expr: GammaExpr) -> DeltaExpr:
    """Requires every minor to have exactly two columns."""

    def to_delta(g: Gamma) -> Delta:
        indices = g.index_vector()
        if len(indices) != 2:
            raise ValueError(f"Only 2-column minors convert to differences, got {g}.")
        return Delta(indices[0], indices[1])

    return expr.mapped(lambda term: tuple(to_delta(g) for g in term), result_type=DeltaExpr)


def _as_gamma_expr(expr: GammaExpr | DeltaExpr) -> GammaExpr:
    if isinstance(expr, DeltaExpr):
        return delta_expr_to_gamma_expr(expr)
    if isinstance(expr, GammaExpr):
        return expr
    raise TypeError(f"Expected GammaExpr or DeltaExpr, got {type(expr).__name__}.")


def pullback(expr: GammaExpr | DeltaExpr, bonus_points: Sequence[int]) -> GammaExpr:
    """Adds ``bonus_points`` to every minor; minors already containing one of them vanish."""
    bonus = Gamma.from_vars(bonus_points)
    if bonus_points and bonus.is_nil():
        raise ValueError(f"Bonus points must be distinct, got {tuple(bonus_points)}.")
    def extend(g: Gamma) -> Gamma:
        return Gamma(0) if g.bits & bonus.bits else Gamma(g.bits | bonus.bits)

    return _as_gamma_expr(expr).mapped(lambda term: tuple(extend(g) for g in term))


def plucker_dual(expr: GammaExpr | DeltaExpr, point_universe: Sequence[int]) -> GammaExpr:
    """Replaces every minor by its complement within ``point_universe``."""
    universe = Gamma.from_vars(point_universe)
    if point_universe and universe.is_nil():
        raise ValueError(f"Point universe must be distinct, got {tuple(point_universe)}.")

    def dual(g: Gamma) -> Gamma:
        if g.bits & ~universe.bits:
            raise ValueError(f"{g} is not contained in the point universe {universe}.")
        return Gamma(universe.bits & ~g.bits)

    return _as_gamma_expr(expr).mapped(lambda term: tuple(dual(g) for g in term))
