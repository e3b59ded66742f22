"""Linear combinations of plain strings (labels, function counts)."""

from __future__ import annotations
from typing import override
from symbolax.linear.linear import Linear
from symbolax.linear.linear_types import LinearParam


class StringParam(LinearParam):
    @override
    def object_to_key(self, obj: str) -> str:
        if not isinstance(obj, str):
            raise TypeError(f"StringExpr terms must be strings, got {obj!r}.")
        return obj

    @override
    def key_to_object(self, key: str) -> str:
        return key

    @override
    def object_to_string(self, obj: str) -> str:
        return obj


class StringExpr(Linear):
    param = StringParam()
