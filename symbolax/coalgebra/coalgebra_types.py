"""Parameterization of co-expressions: linear combinations of tuples of parts.

A co-expression term is an ordered tuple of parts, each part being a term of an
underlying family (``part_param``). The same part family supports several
shapes that differ only in policy:

- *iterated*: the tuple records how parts were produced (``a @ b @ c``);
- *normal*: the same data displayed as a plain multi-part coproduct;
- *Hopf*: no antisymmetry, parts stay in the order they were produced;
- *Lie*: parts are antisymmetric, so every term is stored with its parts sorted
  under a Lyndon order and the sign of the sorting permutation; a repeated part
  makes the term vanish.
"""

from __future__ import annotations
from typing import Any, Hashable, Sequence, final, override
from symbolax.combinatorics import sort_with_sign
from symbolax.constants import COEXPR_MAX_PARTS
from symbolax.formatting import COPROD_ITERATED, brackets
from symbolax.linear.keys import check_capacity
from symbolax.linear.linear_types import LinearParam
from symbolax.linear.ordering import LyndonOrder, lyndon_sort_key


@final
class CoParam(LinearParam):
    """Policy for co-expressions over ``part_param``."""

    def __init__(
        self,
        part_param: LinearParam,
        *,
        max_parts: int = COEXPR_MAX_PARTS,
        order: LyndonOrder = LyndonOrder.LENGTH_FIRST,
        is_lie_algebra: bool = True,
        is_iterated: bool = True,
        separator: str = COPROD_ITERATED,
    ) -> None:
        if max_parts < 1:
            raise ValueError(f"max_parts must be >= 1, got {max_parts}.")
        self.part_param = part_param
        self.max_parts = max_parts
        self.order = order
        self.is_lie_algebra = is_lie_algebra
        self.is_iterated = is_iterated
        self.separator = separator
        self.needs_canonicalization = is_lie_algebra

    @override
    def object_to_key(self, obj: Sequence[Any]) -> tuple[Hashable, ...]:
        key = tuple(self.part_param.object_to_key(part) for part in obj)
        check_capacity(key, self.max_parts)
        self.part_param.check_compatible(key)
        return key

    @override
    def key_to_object(self, key: tuple[Hashable, ...]) -> tuple[Any, ...]:
        return tuple(self.part_param.key_to_object(part) for part in key)

    @override
    def object_to_string(self, obj: Sequence[Any]) -> str:
        return self.separator.join(brackets(self.part_param.object_to_string(part)) for part in obj)

    @override
    def object_is_nil(self, obj: Sequence[Any]) -> bool:
        return any(self.part_param.object_is_nil(part) for part in obj)

    @override
    def canonicalize_key(self, key: tuple[Hashable, ...]) -> tuple[tuple[Hashable, ...], int]:
        if not self.is_lie_algebra:
            return key, 1
        return sort_with_sign(key, key=self.lyndon_letter_key)

    @override
    def object_to_weight(self, obj: Sequence[Any]) -> int:
        return sum(self.part_param.object_to_weight(part) for part in obj)

    @override
    def key_to_weight(self, key: tuple[Hashable, ...]) -> int:
        return sum(self.part_param.key_to_weight(part) for part in key)

    @override
    def object_to_dimension(self, obj: Sequence[Any]) -> int:
        if not obj:
            raise ValueError("Dimension is undefined for an empty co-expression term.")
        dimensions = [self.part_param.object_to_dimension(part) for part in obj]
        if len(set(dimensions)) != 1:
            raise ValueError(
                f"Parts have different dimensions {dimensions}: {self.object_to_string(obj)}."
            )
        return dimensions[0]

    @override
    def key_to_vector(self, key: tuple[Hashable, ...]) -> tuple[Hashable, ...]:
        return key

    @override
    def vector_to_key(self, vector: Sequence[Hashable]) -> tuple[Hashable, ...]:
        key = tuple(vector)
        check_capacity(key, self.max_parts)
        self.part_param.check_compatible(key)
        return key

    @override
    def monom_tensor_product(
        self, lhs: tuple[Hashable, ...], rhs: tuple[Hashable, ...]
    ) -> tuple[Hashable, ...]:
        return self.vector_to_key(lhs + rhs)

    @override
    def lyndon_letter_key(self, letter: Hashable) -> Any:
        return lyndon_sort_key(self.order, letter, self.part_param.key_to_weight(letter))

    def part_weights(self, key: tuple[Hashable, ...]) -> tuple[int, ...]:
        return tuple(self.part_param.key_to_weight(part) for part in key)

    @override
    def __str__(self) -> str:
        shape = "Lie" if self.is_lie_algebra else "Hopf"
        return f"CoParam[{self.part_param}, {shape}, {self.order.value}]"
