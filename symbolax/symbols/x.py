"""Extended points: variables ``x_i``, their negations, zero, infinity and undefined."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import override
from symbolax.constants import MAX_DIMENSION


class XForm(Enum):
    VAR = "var"
    NEG_VAR = "neg_var"
    ZERO = "zero"
    INFINITY = "infinity"
    UNDEFINED = "undefined"


@dataclass(frozen=True)
class X:
    form: XForm
    idx: int = 0

    def __post_init__(self) -> None:
        if self.form in (XForm.VAR, XForm.NEG_VAR):
            if not 1 <= self.idx <= MAX_DIMENSION:
                raise ValueError(
                    f"Variable index must lie in [1, {MAX_DIMENSION}], got {self.idx}."
                )
        elif self.idx != 0:
            raise ValueError(f"{self.form.value} point cannot carry an index, got {self.idx}.")

    @classmethod
    def var(cls, idx: int) -> X:
        return cls(XForm.VAR, idx)

    def is_constant(self) -> bool:
        return self.form not in (XForm.VAR, XForm.NEG_VAR)

    def negated(self) -> X:
        if self.form is XForm.VAR:
            return X(XForm.NEG_VAR, self.idx)
        if self.form is XForm.NEG_VAR:
            return X(XForm.VAR, self.idx)
        return self

    def __neg__(self) -> X:
        return self.negated()

    def as_simple_var(self) -> int:
        if self.form is not XForm.VAR:
            raise ValueError(f"Expected a simple variable, got {self}.")
        return self.idx

    @override
    def __str__(self) -> str:
        match self.form:
            case XForm.VAR:
                return f"x{self.idx}"
            case XForm.NEG_VAR:
                return f"-x{self.idx}"
            case XForm.ZERO:
                return "0"
            case XForm.INFINITY:
                return "Inf"
            case XForm.UNDEFINED:
                return "<?>"
        raise TypeError(f"Unexpected point form: {self.form}.")


Zero = X(XForm.ZERO)
Inf = X(XForm.INFINITY)
Undefined = X(XForm.UNDEFINED)


def to_x(point: X | int) -> X:
    """Accepts ``X`` as is; a positive int ``i`` is ``x_i`` and a negative one is ``-x_i``."""
    if isinstance(point, X):
        return point
    if isinstance(point, int) and not isinstance(point, bool):
        if point > 0:
            return X(XForm.VAR, point)
        if point < 0:
            return X(XForm.NEG_VAR, -point)
        raise ValueError("Integer point 0 is ambiguous, use Zero.")
    raise TypeError(f"Cannot interpret {point!r} as a point.")
