"""Words over positive integer letters: the reference family for coalgebra operations."""

from __future__ import annotations
from typing import Iterable, Sequence, final, override
from symbolax.coalgebra.coalgebra_types import CoParam
from symbolax.constants import SIMPLE_VECTOR_TERM_CAPACITY
from symbolax.formatting import COPROD_HOPF, COPROD_LIE, COPROD_NORMAL, parens
from symbolax.linear.keys import PackedCodec
from symbolax.linear.linear import Linear
from symbolax.linear.linear_types import PackedVectorParam
from symbolax.linear.ordering import LyndonOrder


@final
class SimpleVectorParam(PackedVectorParam):
    codec = PackedCodec(capacity=SIMPLE_VECTOR_TERM_CAPACITY, width=2)

    @override
    def generator_to_code(self, generator: int) -> int:
        return generator

    @override
    def code_to_generator(self, code: int) -> int:
        return code

    @override
    def generator_is_nil(self, generator: int) -> bool:
        return False

    @override
    def object_to_string(self, obj: Sequence[int]) -> str:
        return parens(",".join(str(x) for x in obj))


SIMPLE_VECTOR_PARAM = SimpleVectorParam()


class SimpleVectorICoExpr(Linear):
    param = CoParam(SIMPLE_VECTOR_PARAM)


class SimpleVectorCoExpr(Linear):
    param = CoParam(SIMPLE_VECTOR_PARAM, is_iterated=False, separator=COPROD_NORMAL)


class SimpleVectorACoExpr(Linear):
    param = CoParam(
        SIMPLE_VECTOR_PARAM,
        max_parts=SIMPLE_VECTOR_TERM_CAPACITY,
        order=LyndonOrder.LIE,
        is_iterated=False,
        separator=COPROD_LIE,
    )


class SimpleVectorHCoExpr(Linear):
    param = CoParam(SIMPLE_VECTOR_PARAM, is_lie_algebra=False, separator=COPROD_HOPF)


class SimpleVectorExpr(Linear):
    param = SIMPLE_VECTOR_PARAM
    icoexpr_type = SimpleVectorICoExpr
    ncoexpr_type = SimpleVectorCoExpr
    acoexpr_type = SimpleVectorACoExpr
    hcoexpr_type = SimpleVectorHCoExpr


def SV(letters: Iterable[int]) -> SimpleVectorExpr:
    return SimpleVectorExpr.single(tuple(letters))


def CoSV(*parts: Iterable[int]) -> SimpleVectorCoExpr:
    return SimpleVectorCoExpr.single(tuple(tuple(part) for part in parts))
