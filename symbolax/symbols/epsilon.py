"""Epsilon symbols: variables ``x_i`` and complements ``1 - x_{i_1} ... x_{i_k}``.

An ``EpsilonExpr`` term is either a product of such generators or a formal
``LiParam`` symbol. Co-expressions are two-part Hopf tensors.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Hashable, Iterable, Sequence, final, override
from symbolax.coalgebra.coalgebra_types import CoParam
from symbolax.constants import EPSILON_TERM_CAPACITY, MAX_EPSILON_VARIABLES
from symbolax.formatting import COPROD_HOPF, parens
from symbolax.linear.keys import PackedCodec
from symbolax.linear.linear import Linear
from symbolax.linear.linear_types import PackedVectorParam, PackParam
from symbolax.symbols.formal_symbols import LiParam


@final
@dataclass(frozen=True)
class EpsilonVar:
    idx: int

    def __post_init__(self) -> None:
        if not 1 <= self.idx <= MAX_EPSILON_VARIABLES:
            raise ValueError(
                f"Epsilon variable must lie in [1, {MAX_EPSILON_VARIABLES}], got {self.idx}."
            )

    def is_nil(self) -> bool:
        return False

    @override
    def __str__(self) -> str:
        return f"x{self.idx}"


@final
@dataclass(frozen=True)
class EpsilonComplement:
    """``1 - prod(x_i for i in indices)``; the empty product makes it nil."""

    bits: int

    def __post_init__(self) -> None:
        if not 0 <= self.bits < (1 << MAX_EPSILON_VARIABLES):
            raise ValueError(
                f"Epsilon complement must fit {MAX_EPSILON_VARIABLES} variables, got {self.bits:#x}."
            )

    @classmethod
    def from_indices(cls, indices: Iterable[int]) -> EpsilonComplement:
        bits = 0
        for idx in indices:
            if not 1 <= idx <= MAX_EPSILON_VARIABLES:
                raise ValueError(
                    f"Epsilon variable must lie in [1, {MAX_EPSILON_VARIABLES}], got {idx}."
                )
            mask = 1 << (idx - 1)
            if bits & mask:
                raise ValueError(f"Repeated variable {idx} in an epsilon complement.")
            bits |= mask
        return cls(bits)

    def is_nil(self) -> bool:
        return self.bits == 0

    def indices(self) -> list[int]:
        return [i + 1 for i in range(MAX_EPSILON_VARIABLES) if self.bits >> i & 1]

    @override
    def __str__(self) -> str:
        return parens("1 - " + "".join(f"x{i}" for i in self.indices()))


Epsilon = EpsilonVar | EpsilonComplement


@final
class EpsilonProductParam(PackedVectorParam):
    # Variables take codes 1..N, complements N + bitset.
    codec = PackedCodec(capacity=EPSILON_TERM_CAPACITY, width=4)

    @override
    def generator_to_code(self, generator: Epsilon) -> int:
        match generator:
            case EpsilonVar(idx=idx):
                return idx
            case EpsilonComplement(bits=bits):
                return MAX_EPSILON_VARIABLES + bits
        raise TypeError(f"Not an epsilon generator: {generator!r}.")

    @override
    def code_to_generator(self, code: int) -> Epsilon:
        if code <= MAX_EPSILON_VARIABLES:
            return EpsilonVar(code)
        return EpsilonComplement(code - MAX_EPSILON_VARIABLES)


@final
class EpsilonPackParam(PackParam):
    product_param = EpsilonProductParam()
    formal_type = LiParam

    @override
    def key_to_formal_symbol(self, key: Hashable) -> LiParam:
        return LiParam.from_key(key)  # type: ignore[arg-type]


EPSILON_PACK_PARAM = EpsilonPackParam()


class EpsilonICoExpr(Linear):
    param = CoParam(EPSILON_PACK_PARAM, max_parts=2, is_lie_algebra=False, separator=COPROD_HOPF)


class EpsilonExpr(Linear):
    param = EPSILON_PACK_PARAM
    icoexpr_type = EpsilonICoExpr
    hcoexpr_type = EpsilonICoExpr


def EVar(idx: int) -> EpsilonExpr:
    return EpsilonExpr.single((EpsilonVar(idx),))


def EComplementIndexList(indices: Sequence[int]) -> EpsilonExpr:
    return EpsilonExpr.single((EpsilonComplement.from_indices(indices),))


def EComplementRangeInclusive(first: int, last: int) -> EpsilonExpr:
    """``1 - x_first ... x_last``; empty when the range is empty."""
    return EComplementIndexList(range(first, last + 1))


def EUnity() -> EpsilonExpr:
    return EpsilonExpr.single(())


def EFormalSymbolPositive(li_param: LiParam) -> EpsilonExpr:
    return EpsilonExpr.single(li_param)


def EFormalSymbolSigned(li_param: LiParam) -> EpsilonExpr:
    return li_param.sign * EFormalSymbolPositive(li_param)
