"""Lyndon orders on letters.

Terms are deduplicated by their compressed keys, which already carry the
structural (lexicographic) order. Lyndon orders decide which of several
equivalent arrangements is canonical: they compare the letters of a word, where
for co-expressions a letter is an entire part.
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Hashable


class LyndonOrder(Enum):
    DEFAULT = "default"  # structural order of letters
    LENGTH_FIRST = "length_first"  # shorter letters first, then structural
    LIE = "lie"  # longer letters first, then structural


def lyndon_sort_key(order: LyndonOrder, letter: Hashable, length: int) -> Any:
    """Sort key of ``letter`` (of the given length) under ``order``."""
    if order is LyndonOrder.DEFAULT:
        return letter
    if order is LyndonOrder.LENGTH_FIRST:
        return (length, letter)
    if order is LyndonOrder.LIE:
        return (-length, letter)
    raise ValueError(f"Unexpected Lyndon order: {order}.")
