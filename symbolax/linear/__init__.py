"""Generic linear-combination engine.

Exports
- ``Linear``: sparse integer combination of terms of one parameterization.
- ``LinearParam`` and the reusable ``PackedVectorParam``/``TupleVectorParam``/``PackParam``.
- ``tensor_product``, ``shuffle_product`` and the Lyndon-basis rewriting.
"""

from symbolax.linear.linear import (
    Linear,
    tensor_product,
    tensor_product_many,
    group_by,
    to_string_grouped,
)
from symbolax.linear.linear_types import (
    LinearParam,
    PackedVectorParam,
    TupleVectorParam,
    PackParam,
    FormalSymbol,
)
from symbolax.linear.keys import PackedCodec, Alphabet
from symbolax.linear.lyndon import (
    enumerate_lyndon_basis,
    lyndon_basis,
    lyndon_factorize,
    is_lyndon,
    to_lyndon_basis,
)
from symbolax.linear.ordering import LyndonOrder, lyndon_sort_key
from symbolax.linear.shuffle import shuffle_product, shuffle_product_expr
from symbolax.linear.string_expr import StringExpr

__all__ = [
    "Linear",
    "LinearParam",
    "PackedVectorParam",
    "TupleVectorParam",
    "PackParam",
    "FormalSymbol",
    "PackedCodec",
    "Alphabet",
    "StringExpr",
    "tensor_product",
    "tensor_product_many",
    "group_by",
    "to_string_grouped",
    "enumerate_lyndon_basis",
    "lyndon_basis",
    "lyndon_factorize",
    "is_lyndon",
    "to_lyndon_basis",
    "shuffle_product",
    "shuffle_product_expr",
    "LyndonOrder",
    "lyndon_sort_key",
]
