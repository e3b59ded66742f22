"""Coproducts, comultiplication and deconcatenation.

Every operation here produces a co-expression: a combination whose terms are
tuples of parts of one underlying family. The co-expression type is taken from
the family (``icoexpr_type``, ``ncoexpr_type``, ``acoexpr_type``,
``hcoexpr_type``) unless given explicitly.
"""

from __future__ import annotations
import itertools
import logging
from math import prod
from typing import Any, Callable, Hashable, Sequence
from symbolax.coalgebra.coalgebra_types import CoParam
from symbolax.linear.linear import Linear
from symbolax.linear.lyndon import to_lyndon_basis

logger = logging.getLogger(__name__)

Form = tuple[int, ...]


def _co_param(co_type: type[Linear]) -> CoParam:
    param = co_type.param
    if not isinstance(param, CoParam):
        raise TypeError(f"{co_type.__name__} is not a co-expression type.")
    return param


def _default_co_type(exprs: Sequence[Linear], attr: str) -> type[Linear]:
    """Co type declared by the first plain argument, else the type of the first co-expression."""
    for expr in exprs:
        if not isinstance(expr.param, CoParam):
            co_type = getattr(type(expr), attr)
            if co_type is None:
                raise ValueError(f"{type(expr).__name__} does not define {attr}.")
            return co_type
    return type(exprs[0])


def _as_parts(expr: Linear) -> tuple[Any, list[tuple[tuple[Hashable, ...], int]]]:
    """Part family of ``expr`` and its terms as tuples of part keys."""
    if isinstance(expr.param, CoParam):
        return expr.param.part_param, expr.key_items()
    return expr.param, [((key,), coeff) for key, coeff in expr.key_items()]


def _make_coproduct(co_type: type[Linear], exprs: Sequence[Linear]) -> Linear:
    co_param = _co_param(co_type)
    factors = []
    for expr in exprs:
        part_param, terms = _as_parts(expr)
        if part_param is not co_param.part_param:
            raise ValueError(
                f"Cannot build {co_type.__name__} from {type(expr).__name__}: "
                f"part families differ ({part_param} vs {co_param.part_param})."
            )
        factors.append(terms)
    ret = co_type()
    for combo in itertools.product(*factors):
        parts = tuple(itertools.chain.from_iterable(part for part, _ in combo))
        ret.add_key(co_param.vector_to_key(parts), prod(coeff for _, coeff in combo))
    return ret


def icoproduct(*exprs: Linear, co_type: type[Linear] | None = None) -> Linear:
    """Iterated coproduct ``a @ b @ ...``. Co-expression arguments contribute all their parts."""
    if len(exprs) < 2:
        raise ValueError(f"Coproduct needs at least two arguments, got {len(exprs)}.")
    target = co_type if co_type is not None else _default_co_type(exprs, "icoexpr_type")
    return _make_coproduct(target, exprs)


def ncoproduct(*exprs: Linear, co_type: type[Linear] | None = None) -> Linear:
    """Normal-shape coproduct ``a ∧ b ∧ ...``."""
    if len(exprs) < 2:
        raise ValueError(f"Coproduct needs at least two arguments, got {len(exprs)}.")
    target = co_type if co_type is not None else _default_co_type(exprs, "ncoexpr_type")
    return _make_coproduct(target, exprs)


coproduct = ncoproduct


def normalize_coproduct(expr: Linear, co_type: type[Linear]) -> Linear:
    """Re-keys a co-expression into another shape over the same part family."""
    source = _co_param(type(expr))
    target = _co_param(co_type)
    if source.part_param is not target.part_param:
        raise ValueError(
            f"Cannot normalize {type(expr).__name__} into {co_type.__name__}: part families differ."
        )
    ret = co_type()
    for key, coeff in expr.key_items():
        ret.add_key(target.vector_to_key(key), coeff)
    return ret


def deconcatenate(expr: Linear, co_type: type[Linear] | None = None) -> Linear:
    """Sum over all ``n + 1`` splittings of each word ``w`` into ``w[:i] ⊗ w[i:]``."""
    target = co_type if co_type is not None else _default_co_type([expr], "hcoexpr_type")
    co_param = _co_param(target)
    param = expr.param
    if param is not co_param.part_param:
        raise ValueError(f"Cannot deconcatenate {type(expr).__name__} into {target.__name__}.")
    ret = target()
    for key, coeff in expr.key_items():
        word = param.key_to_vector(key)
        for i in range(len(word) + 1):
            parts = (param.vector_to_key(word[:i]), param.vector_to_key(word[i:]))
            ret.add_key(co_param.vector_to_key(parts), coeff)
    return ret


def _check_form(form: Sequence[int]) -> Form:
    ret = tuple(int(size) for size in form)
    if len(ret) < 2:
        raise ValueError(f"Comultiplication form must have at least two parts, got {ret}.")
    if any(size < 1 for size in ret):
        raise ValueError(f"Comultiplication form must have positive part sizes, got {ret}.")
    return ret


def _slices(shape: Form) -> list[slice]:
    bounds = [0, *itertools.accumulate(shape)]
    return [slice(begin, end) for begin, end in zip(bounds, bounds[1:])]


def comultiply(
    expr: Linear, form: Sequence[int], co_type: type[Linear] | None = None
) -> Linear:
    """Splits every term of ``expr`` into consecutive parts of the sizes in ``form``.

    For Lie co-expression types the input is first projected to the Lyndon basis,
    every distinct arrangement of ``form`` is used, and each part is projected to
    the Lyndon basis again before the parts are antisymmetrized. For Hopf types
    the word is cut exactly at the positions given by ``form``. Terms whose
    weight differs from ``sum(form)`` contribute nothing.
    """
    form = _check_form(form)
    target = co_type if co_type is not None else _default_co_type([expr], "ncoexpr_type")
    co_param = _co_param(target)
    param = expr.param
    if param is not co_param.part_param:
        raise ValueError(f"Cannot comultiply {type(expr).__name__} into {target.__name__}.")
    total = sum(form)
    source = expr.without_annotations().filtered_keys(lambda key: param.key_to_weight(key) == total)

    make_part: Callable[[tuple[Hashable, ...]], Linear]
    if co_param.is_lie_algebra:
        source = to_lyndon_basis(source)
        shapes = sorted(set(itertools.permutations(form)))
        make_part = lambda word: to_lyndon_basis(type(expr).single_key(param.vector_to_key(word)))
    else:
        shapes = [form]
        make_part = lambda word: type(expr).single_key(param.vector_to_key(word))

    ret = target()
    for key, coeff in source.key_items():
        word = param.key_to_vector(key)
        for shape in shapes:
            parts = [make_part(word[s]) for s in _slices(shape)]
            ret.add_expr(_make_coproduct(target, parts), coeff)
    logger.debug(
        "comultiply %s by %s: %d terms -> %d terms", type(expr).__name__, form, len(expr), len(ret)
    )
    return ret


def filter_coexpr(
    expr: Linear, part_index: int, predicate: Callable[[Any], bool]
) -> Linear:
    """Keeps co-expression terms whose part at ``part_index`` satisfies ``predicate``."""
    co_param = _co_param(type(expr))
    if not -co_param.max_parts <= part_index < co_param.max_parts:
        raise ValueError(f"Part index {part_index} is out of range for {type(expr).__name__}.")
    return expr.filtered(
        lambda term: -len(term) <= part_index < len(term) and predicate(term[part_index])
    )


def expand_into_glued_pairs(expr: Linear, co_type: type[Linear] | None = None) -> Linear:
    """Sum over adjacent letter pairs: ``x1 x2 x3`` becomes ``[x1 x2],[x3] + [x1],[x2 x3]``.

    All other letters stay single-letter parts.
    """
    target = co_type if co_type is not None else _default_co_type([expr], "acoexpr_type")
    co_param = _co_param(target)
    param = expr.param
    if param is not co_param.part_param:
        raise ValueError(f"Cannot expand {type(expr).__name__} into {target.__name__}.")
    ret = target()
    for key, coeff in expr.key_items():
        word = param.key_to_vector(key)
        for i in range(len(word) - 1):
            words = [word[j : j + 1] for j in range(i)]
            words.append(word[i : i + 2])
            words.extend(word[j : j + 1] for j in range(i + 2, len(word)))
            parts = tuple(param.vector_to_key(w) for w in words)
            ret.add_key(co_param.vector_to_key(parts), coeff)
    return ret


def coproduct_part_weights(term: Sequence[Any]) -> tuple[int, ...]:
    """Weights of the parts of a co-expression term; formal symbols report their total weight."""
    return tuple(len(part) if isinstance(part, tuple) else part.total_weight for part in term)
