"""Co-expressions and the coproduct operations that build them."""

from symbolax.coalgebra.coalgebra_types import CoParam
from symbolax.coalgebra.coalgebra import (
    icoproduct,
    ncoproduct,
    coproduct,
    normalize_coproduct,
    deconcatenate,
    comultiply,
    filter_coexpr,
    expand_into_glued_pairs,
    coproduct_part_weights,
)

__all__ = [
    "CoParam",
    "icoproduct",
    "ncoproduct",
    "coproduct",
    "normalize_coproduct",
    "deconcatenate",
    "comultiply",
    "filter_coexpr",
    "expand_into_glued_pairs",
    "coproduct_part_weights",
]
