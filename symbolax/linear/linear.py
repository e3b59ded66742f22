"""Sparse integer linear combinations over a parameterized family of terms.

``Linear`` is the engine every symbol family is built on. A concrete family is a
subclass that only fixes ``param`` (a ``LinearParam``) and, where a coalgebra is
defined, the co-expression types produced by coproducts::

    class DeltaExpr(Linear):
        param = DeltaExprParam()

Terms are compressed into keys by ``param`` as they are inserted; coefficients
that cancel to zero are removed immediately, so two combinations denoting the
same sum always hold identical key-to-coefficient mappings.
"""

from __future__ import annotations
import numbers
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    ClassVar,
    Hashable,
    Iterable,
    Iterator,
    Self,
    Sequence,
    TypeVar,
    override,
)
from symbolax.formatting import coeff_to_string
from symbolax.linear.linear_types import LinearParam

if TYPE_CHECKING:
    from symbolax.linear.string_expr import StringExpr

TLinear = TypeVar("TLinear", bound="Linear")
TClass = TypeVar("TClass")


class Linear:
    """Mapping from canonical term key to non-zero integer coefficient.

    Combinations are values: arithmetic and the ``mapped``/``filtered`` family
    always return fresh objects. ``add`` is the only mutating operation and is
    meant for building a combination the caller exclusively owns.
    """

    param: ClassVar[LinearParam]

    # Co-expression shapes produced by coproducts of this family (None when the
    # family has no coalgebra structure).
    icoexpr_type: ClassVar[type[Linear] | None] = None
    ncoexpr_type: ClassVar[type[Linear] | None] = None
    acoexpr_type: ClassVar[type[Linear] | None] = None
    hcoexpr_type: ClassVar[type[Linear] | None] = None

    __slots__ = ("_data", "_annotations")

    def __init__(self) -> None:
        self._data: dict[Hashable, int] = {}
        self._annotations: dict[str, int] = {}

    # Construction ------------------------------------------------------------

    @classmethod
    def single(cls, obj: Any) -> Self:
        ret = cls()
        ret.add(obj)
        return ret

    @classmethod
    def single_key(cls, key: Hashable) -> Self:
        ret = cls()
        ret.add_key(key)
        return ret

    @classmethod
    def from_terms(cls, terms: Iterable[tuple[Any, int]]) -> Self:
        ret = cls()
        for obj, coeff in terms:
            ret.add(obj, coeff)
        return ret

    def add(self, obj: Any, coeff: int = 1) -> None:
        """Accumulates ``coeff * obj``. Terms containing a nil generator are dropped."""
        if not isinstance(coeff, numbers.Integral):
            raise TypeError(f"Coefficients must be integers, got {coeff!r}.")
        if self.param.object_is_nil(obj):
            return
        self.add_key(self.param.object_to_key(obj), int(coeff))

    def add_key(self, key: Hashable, coeff: int = 1) -> None:
        if self.param.needs_canonicalization:
            key, sign = self.param.canonicalize_key(key)
            coeff *= sign
        self._accumulate(key, coeff)

    def _accumulate(self, key: Hashable, coeff: int) -> None:
        if coeff == 0:
            return
        total = self._data.get(key, 0) + coeff
        if total:
            self._data[key] = total
        else:
            del self._data[key]

    def _accumulate_scaled(self, other: Linear, scale: int) -> None:
        for key, coeff in other._data.items():
            self._accumulate(key, coeff * scale)
        for label, coeff in other._annotations.items():
            total = self._annotations.get(label, 0) + coeff * scale
            if total:
                self._annotations[label] = total
            else:
                self._annotations.pop(label, None)

    def add_expr(self, other: Linear, scale: int = 1) -> None:
        """Accumulates ``scale * other`` into this combination."""
        self._check_compatible(other)
        self._accumulate_scaled(other, scale)

    def copy(self) -> Self:
        ret = type(self)()
        ret._data = dict(self._data)
        ret._annotations = dict(self._annotations)
        return ret

    # Arithmetic --------------------------------------------------------------

    def _check_compatible(self, other: Linear) -> None:
        if type(other) is not type(self):
            raise ValueError(
                f"Cannot combine {type(self).__name__} with {type(other).__name__}."
            )

    def __add__(self, other: object) -> Self:
        if not isinstance(other, Linear):
            return NotImplemented
        self._check_compatible(other)
        ret = self.copy()
        ret._accumulate_scaled(other, 1)
        return ret

    def __sub__(self, other: object) -> Self:
        if not isinstance(other, Linear):
            return NotImplemented
        self._check_compatible(other)
        ret = self.copy()
        ret._accumulate_scaled(other, -1)
        return ret

    def __neg__(self) -> Self:
        return self * -1

    def __pos__(self) -> Self:
        return self.copy()

    def __mul__(self, scalar: object) -> Self:
        if not isinstance(scalar, numbers.Integral):
            return NotImplemented
        ret = type(self)()
        ret._accumulate_scaled(self, int(scalar))
        return ret

    def __rmul__(self, scalar: object) -> Self:
        return self.__mul__(scalar)

    def div_int(self, divisor: int) -> Self:
        """Exact division of every coefficient."""
        if divisor == 0:
            raise ValueError("Division by zero.")
        ret = type(self)()
        for key, coeff in self._data.items():
            if coeff % divisor != 0:
                raise ValueError(
                    f"Coefficient {coeff} of {self._key_to_string(key)} is not divisible by "
                    f"{divisor}."
                )
            ret._data[key] = coeff // divisor
        return ret

    # Equality is algebraic: annotations are ignored.
    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Linear):
            return NotImplemented
        return type(self) is type(other) and self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    # Inspection --------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[tuple[Any, int]]:
        return iter(self.items())

    def __getitem__(self, obj: Any) -> int:
        return self.coeff(obj)

    def is_zero(self) -> bool:
        return not self._data

    def coeff(self, obj: Any) -> int:
        if self.param.object_is_nil(obj):
            return 0
        key = self.param.object_to_key(obj)
        if self.param.needs_canonicalization:
            key, sign = self.param.canonicalize_key(key)
            return sign * self._data.get(key, 0)
        return self._data.get(key, 0)

    def key_items(self) -> list[tuple[Hashable, int]]:
        """``(key, coeff)`` pairs in canonical key order."""
        return sorted(self._data.items(), key=lambda item: item[0])

    def items(self) -> list[tuple[Any, int]]:
        """``(term, coeff)`` pairs in canonical key order."""
        return [(self.param.key_to_object(key), coeff) for key, coeff in self.key_items()]

    def objects(self) -> list[Any]:
        return [obj for obj, _ in self.items()]

    def l1_norm(self) -> int:
        return sum(abs(coeff) for coeff in self._data.values())

    def contains(self, predicate: Callable[[Any], bool]) -> bool:
        return any(predicate(self.param.key_to_object(key)) for key in self._data)

    def weight(self) -> int:
        """Common weight of all terms. Undefined (an error) for an empty combination."""
        if not self._data:
            raise ValueError(f"Weight is undefined for an empty {type(self).__name__}.")
        weights = {self.param.key_to_weight(key) for key in self._data}
        if len(weights) != 1:
            raise ValueError(
                f"Terms of {type(self).__name__} have different weights: {sorted(weights)}."
            )
        return weights.pop()

    def dimension(self) -> int:
        """Common dimension of all terms. Undefined (an error) for an empty combination."""
        if not self._data:
            raise ValueError(f"Dimension is undefined for an empty {type(self).__name__}.")
        dimensions = {
            self.param.object_to_dimension(self.param.key_to_object(key)) for key in self._data
        }
        if len(dimensions) != 1:
            raise ValueError(
                f"Terms of {type(self).__name__} have different dimensions: {sorted(dimensions)}."
            )
        return dimensions.pop()

    # Term-wise transforms ----------------------------------------------------

    def mapped(
        self, func: Callable[[Any], Any], result_type: type[TLinear] | None = None
    ) -> TLinear:
        """Applies a term-to-term transform; colliding images accumulate."""
        target = result_type if result_type is not None else type(self)
        ret = target()
        for key, coeff in self._data.items():
            ret.add(func(self.param.key_to_object(key)), coeff)
        return ret  # type: ignore[return-value]

    def mapped_expanding(
        self, func: Callable[[Any], Linear], result_type: type[TLinear] | None = None
    ) -> TLinear:
        """Applies a term-to-combination transform, scaled by each source coefficient."""
        target = result_type if result_type is not None else type(self)
        ret = target()
        for key, coeff in self._data.items():
            image = func(self.param.key_to_object(key))
            if type(image) is not target:
                raise ValueError(
                    f"Expanding map must return {target.__name__}, got {type(image).__name__}."
                )
            for image_key, image_coeff in image._data.items():
                ret._accumulate(image_key, image_coeff * coeff)
        return ret  # type: ignore[return-value]

    def filtered(self, predicate: Callable[[Any], bool]) -> Self:
        """Keeps terms satisfying ``predicate``; coefficients are unchanged."""
        ret = type(self)()
        for key, coeff in self._data.items():
            if predicate(self.param.key_to_object(key)):
                ret._data[key] = coeff
        return ret

    def filtered_keys(self, predicate: Callable[[Hashable], bool]) -> Self:
        """Like ``filtered``, but the predicate sees compressed keys."""
        ret = type(self)()
        for key, coeff in self._data.items():
            if predicate(key):
                ret._data[key] = coeff
        return ret

    def cast_to(self, target: type[TLinear]) -> TLinear:
        """Re-keys every term into another family sharing the same object type."""
        ret = target()
        for key, coeff in self._data.items():
            ret.add(self.param.key_to_object(key), coeff)
        return ret

    # Annotations -------------------------------------------------------------

    def annotate(self, label: str) -> Self:
        """Returns a copy labelled with ``label``; algebraic identity is unaffected."""
        ret = type(self)()
        ret._data = dict(self._data)
        ret._annotations = {label: 1}
        return ret

    def without_annotations(self) -> Self:
        ret = type(self)()
        ret._data = dict(self._data)
        return ret

    @property
    def annotations(self) -> StringExpr:
        from symbolax.linear.string_expr import StringExpr

        return StringExpr.from_terms(self._annotations.items())

    # Display -----------------------------------------------------------------

    def _key_to_string(self, key: Hashable) -> str:
        return self.param.object_to_string(self.param.key_to_object(key))

    @override
    def __str__(self) -> str:
        if not self._data:
            return "0"
        return "\n".join(
            f"{coeff_to_string(coeff)}{self._key_to_string(key)}" for key, coeff in self.key_items()
        )

    @override
    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self._data)} terms)"


def tensor_product(lhs: TLinear, rhs: TLinear) -> TLinear:
    """Bilinear concatenation of terms: ``(sum a_i t_i) ⊗ (sum b_j s_j)``."""
    if type(lhs) is not type(rhs):
        raise ValueError(
            f"Tensor product operands differ: {type(lhs).__name__} and {type(rhs).__name__}."
        )
    param = lhs.param
    ret = type(lhs)()
    for lhs_key, lhs_coeff in lhs._data.items():
        for rhs_key, rhs_coeff in rhs._data.items():
            ret.add_key(param.monom_tensor_product(lhs_key, rhs_key), lhs_coeff * rhs_coeff)
    return ret


def tensor_product_many(exprs: Sequence[TLinear]) -> TLinear:
    if not exprs:
        raise ValueError("Tensor product of an empty sequence is undefined.")
    ret = exprs[0].without_annotations()
    for expr in exprs[1:]:
        ret = tensor_product(ret, expr)
    return ret


def group_by(expr: TLinear, classifier: Callable[[Any], TClass]) -> dict[TClass, TLinear]:
    """Partitions terms by ``classifier``; groups are ordered by class, terms keep their order.

    The sum of all groups equals ``expr.without_annotations()``.
    """
    groups: dict[TClass, TLinear] = {}
    for key, coeff in expr.key_items():
        cls = classifier(expr.param.key_to_object(key))
        group = groups.get(cls)
        if group is None:
            group = type(expr)()
            groups[cls] = group
        group._data[key] = coeff
    return {cls: groups[cls] for cls in sorted(groups)}  # type: ignore[type-var]


def to_string_grouped(
    expr: Linear,
    classifier: Callable[[Any], TClass],
    group_title: Callable[[TClass], str] = str,
) -> str:
    if expr.is_zero():
        return "0"
    blocks = [
        f"{group_title(cls)}:\n{group}" for cls, group in group_by(expr, classifier).items()
    ]
    return "\n\n".join(blocks)
