"""Differences of points ``(x_i - x_j)`` and their linear combinations.

A ``Delta`` is normalized on construction so that equal differences compare
equal regardless of how they were written:

- the pair is unordered (a sign is never tracked, symbols live modulo torsion);
- ``(x_i + x_i)`` becomes ``(x_i)``, i.e. ``(x_i - 0)``;
- if neither point is a plain variable, both are negated;
- a pair of equal points, or a pair with an infinite or undefined point, is nil.

``DeltaExpr`` terms are tuples of ``Delta`` stored as packed alphabet codes.
"""

from __future__ import annotations
import functools
import logging
from dataclasses import dataclass
from typing import Any, Sequence, final, override
from symbolax.coalgebra.coalgebra_types import CoParam
from symbolax.constants import DELTA_TERM_CAPACITY, MAX_DIMENSION
from symbolax.formatting import COPROD_HOPF, COPROD_NORMAL, parens
from symbolax.linear.keys import Alphabet, PackedCodec
from symbolax.linear.linear import Linear, group_by, tensor_product_many, to_string_grouped
from symbolax.linear.linear_types import PackedVectorParam
from symbolax.symbols.x import X, XForm, Undefined, Zero, to_x

logger = logging.getLogger(__name__)

DeltaTerm = tuple["Delta", ...]


def _x_code(x: X) -> int:
    if x.form is XForm.VAR:
        return x.idx - 1
    if x.form is XForm.NEG_VAR:
        return MAX_DIMENSION + x.idx - 1
    if x.form is XForm.ZERO:
        return 2 * MAX_DIMENSION
    raise ValueError(f"Point {x} has no finite code.")


@final
@dataclass(frozen=True)
class Delta:
    a: X
    b: X

    def __post_init__(self) -> None:
        a = to_x(self.a)
        b = to_x(self.b)
        if a == b or any(p.form in (XForm.INFINITY, XForm.UNDEFINED) for p in (a, b)):
            a, b = Undefined, Undefined
        else:
            if a == b.negated():
                a, b = (a if a.form is XForm.VAR else b), Zero
            elif a.form is not XForm.VAR and b.form is not XForm.VAR:
                a, b = a.negated(), b.negated()
            if _x_code(a) > _x_code(b):
                a, b = b, a
        object.__setattr__(self, "a", a)
        object.__setattr__(self, "b", b)

    def is_nil(self) -> bool:
        return self.a.form is XForm.UNDEFINED

    def sort_key(self) -> tuple[int, int]:
        return (_x_code(self.b), _x_code(self.a))

    @override
    def __str__(self) -> str:
        if self.is_nil():
            return "<nil>"
        match self.b.form:
            case XForm.VAR:
                return parens(f"{self.a} - {self.b}")
            case XForm.NEG_VAR:
                return parens(f"{self.a} + {self.b.negated()}")
            case XForm.ZERO:
                return parens(str(self.a))
        raise TypeError(f"Unexpected point form in {self.a!r}, {self.b!r}.")


@functools.cache
def delta_alphabet() -> Alphabet:
    """All non-nil normalized differences over the bounded point universe, built once."""
    points = (
        [X(XForm.VAR, i) for i in range(1, MAX_DIMENSION + 1)]
        + [X(XForm.NEG_VAR, i) for i in range(1, MAX_DIMENSION + 1)]
        + [Zero]
    )
    deltas: set[Delta] = set()
    for j, b in enumerate(points):
        for a in points[:j]:
            d = Delta(a, b)
            if not d.is_nil():
                deltas.add(d)
    alphabet = Alphabet(sorted(deltas, key=Delta.sort_key))
    logger.debug("Built Delta alphabet: %d points, %d differences", len(points), alphabet.size)
    return alphabet


@final
class DeltaExprParam(PackedVectorParam):
    codec = PackedCodec(capacity=DELTA_TERM_CAPACITY, width=2)

    @override
    def generator_to_code(self, generator: Delta) -> int:
        return delta_alphabet().to_code(generator)

    @override
    def code_to_generator(self, code: int) -> Delta:
        return delta_alphabet().from_code(code)  # type: ignore[return-value]


DELTA_EXPR_PARAM = DeltaExprParam()


class DeltaICoExpr(Linear):
    param = CoParam(DELTA_EXPR_PARAM)


class DeltaNCoExpr(Linear):
    param = CoParam(DELTA_EXPR_PARAM, is_iterated=False, separator=COPROD_NORMAL)


class DeltaHCoExpr(Linear):
    param = CoParam(DELTA_EXPR_PARAM, is_lie_algebra=False, separator=COPROD_HOPF)


class DeltaExpr(Linear):
    param = DELTA_EXPR_PARAM
    icoexpr_type = DeltaICoExpr
    ncoexpr_type = DeltaNCoExpr
    hcoexpr_type = DeltaHCoExpr


def D(a: X | int, b: X | int) -> DeltaExpr:
    """Single-factor combination ``(a - b)``; empty if the difference is nil."""
    return DeltaExpr.single((Delta(a, b),))


# Substitutions -----------------------------------------------------------------


def _substituted_point(point: X, new_points: Sequence[X]) -> X:
    if point.form in (XForm.VAR, XForm.NEG_VAR):
        if point.idx > len(new_points):
            raise ValueError(
                f"No substitution for {point}: only {len(new_points)} new points given."
            )
        new = new_points[point.idx - 1]
        return new if point.form is XForm.VAR else new.negated()
    return point


def substitute_variables(expr: DeltaExpr, new_points: Sequence[X | int]) -> DeltaExpr:
    """Replaces ``x_i`` by ``new_points[i - 1]``. Terms that acquire a nil factor vanish."""
    points = [to_x(p) for p in new_points]
    return expr.mapped(
        lambda term: tuple(
            Delta(_substituted_point(d.a, points), _substituted_point(d.b, points)) for d in term
        )
    )


def involute(expr: DeltaExpr, points: Sequence[int]) -> DeltaExpr:
    """Applies the six-point involution to every factor, expanding the result multiplicatively."""
    if len(points) != 6:
        raise ValueError(f"Involution needs exactly 6 points, got {tuple(points)}.")
    p1, p2, p3, p4, p5, p6 = points

    def involute_delta(d: Delta) -> DeltaExpr:
        if d == Delta(p6, p5):
            return D(p6, p1) - D(p1, p2) + D(p2, p3) - D(p3, p4) + D(p4, p5)
        if d == Delta(p6, p4):
            return (
                D(p4, p2) + D(p3, p1) - D(p1, p5) + D(p6, p1) - D(p1, p2) - D(p3, p4) + D(p4, p5)
            )
        if d == Delta(p6, p2):
            return D(p6, p1) - D(p1, p5) + D(p5, p3) - D(p3, p4) + D(p4, p2)
        return DeltaExpr.single((d,))

    def involute_term(term: DeltaTerm) -> DeltaExpr:
        if not term:
            return DeltaExpr.single(())
        return tensor_product_many([involute_delta(d) for d in term])

    return expr.mapped_expanding(involute_term)


# Term filters ------------------------------------------------------------------


def num_distinct_variables(term: DeltaTerm) -> int:
    return len({p.idx for d in term for p in (d.a, d.b) if not p.is_constant()})


def sort_term_multiples(expr: DeltaExpr) -> DeltaExpr:
    """Sorts the factors of every term; terms that become equal are merged."""
    return expr.mapped(lambda term: tuple(sorted(term, key=Delta.sort_key)))


def terms_with_unique_multiples(expr: DeltaExpr) -> DeltaExpr:
    return expr.filtered(lambda term: len(set(term)) == len(term))


def terms_with_nonunique_multiples(expr: DeltaExpr) -> DeltaExpr:
    return expr.filtered(lambda term: len(set(term)) != len(term))


def terms_with_num_distinct_variables(expr: DeltaExpr, num_distinct: int) -> DeltaExpr:
    return expr.filtered(lambda term: num_distinct_variables(term) == num_distinct)


def terms_with_min_distinct_variables(expr: DeltaExpr, min_distinct: int) -> DeltaExpr:
    return expr.filtered(lambda term: num_distinct_variables(term) >= min_distinct)


def terms_containing_only_variables(expr: DeltaExpr, indices: Sequence[int]) -> DeltaExpr:
    """Keeps terms in which every factor has both points among ``indices``."""
    allowed = set(indices)
    return expr.filtered(lambda term: all(d.a.idx in allowed and d.b.idx in allowed for d in term))


def terms_without_variables(expr: DeltaExpr, indices: Sequence[int]) -> DeltaExpr:
    """Drops terms that contain a factor with both points among ``indices``."""
    excluded = set(indices)
    return expr.filtered(
        lambda term: not any(d.a.idx in excluded and d.b.idx in excluded for d in term)
    )


def count_var(term: DeltaTerm, var: int) -> int:
    """Number of factors of ``term`` that involve ``x_var``."""
    return sum(1 for d in term if d.a.idx == var or d.b.idx == var)


def group_by_num_distinct_variables(expr: DeltaExpr) -> dict[int, DeltaExpr]:
    return group_by(expr, num_distinct_variables)


def to_string_by_num_distinct_variables(expr: DeltaExpr) -> str:
    return to_string_grouped(expr, num_distinct_variables, lambda n: f"{n} vars")


# Weak separation ---------------------------------------------------------------


def _between(point: int, segment: tuple[int, int]) -> bool:
    a, b = sorted(segment)
    return a < point < b


def are_weakly_separated(d1: Delta, d2: Delta) -> bool:
    """Chords ``d1`` and ``d2`` of the polygon on ``x_1 .. x_n`` do not cross.

    Nil differences and chords sharing an endpoint count as separated.
    """
    if d1.is_nil() or d2.is_nil():
        return True
    x1, y1 = d1.a.as_simple_var(), d1.b.as_simple_var()
    x2, y2 = d2.a.as_simple_var(), d2.b.as_simple_var()
    if len({x1, y1, x2, y2}) < 4:
        return True
    return _between(x1, (x2, y2)) == _between(y1, (x2, y2))


def _flatten(term: Sequence[Any]) -> list[Delta]:
    # Co-expression terms are tuples of parts; plain terms are tuples of Delta.
    if term and isinstance(term[0], tuple):
        return [d for part in term for d in part]
    return list(term)


def is_weakly_separated(term: Sequence[Any]) -> bool:
    """Pairwise weak separation of all factors of a term or of a co-expression term."""
    deltas = _flatten(term)
    return all(
        are_weakly_separated(deltas[i], deltas[j])
        for i in range(len(deltas))
        for j in range(i)
    )


def is_totally_weakly_separated(expr: Linear) -> bool:
    return not expr.contains(lambda term: not is_weakly_separated(term))


def keep_non_weakly_separated(expr: Linear) -> Linear:
    return expr.filtered(lambda term: not is_weakly_separated(term))


def passes_normalize_remove_consecutive(term: DeltaTerm) -> bool:
    """No factor is a difference of neighbouring variables ``x_i - x_{i+1}``."""
    for d in term:
        a, b = sorted((d.a.as_simple_var(), d.b.as_simple_var()))
        if b == a + 1:
            return False
    return True


def normalize_remove_consecutive(expr: DeltaExpr) -> DeltaExpr:
    return expr.filtered(passes_normalize_remove_consecutive)


# Connectivity ------------------------------------------------------------------


def variable_graph_is_connected(term: DeltaTerm) -> bool:
    """Whether the edges ``x_a - x_b`` of ``term`` (constants ignored) form one component."""
    edges = [(d.a.idx, d.b.idx) for d in term if not d.a.is_constant() and not d.b.is_constant()]
    if not edges:
        return True
    nbrs: dict[int, list[int]] = {}
    for u, v in edges:
        nbrs.setdefault(u, []).append(v)
        nbrs.setdefault(v, []).append(u)
    start = edges[0][0]
    reached = {start}
    stack = [start]
    while stack:
        u = stack.pop()
        for v in nbrs[u]:
            if v not in reached:
                reached.add(v)
                stack.append(v)
    return len(reached) == len(nbrs)


def terms_with_connected_variable_graph(expr: DeltaExpr) -> DeltaExpr:
    return expr.filtered(variable_graph_is_connected)
