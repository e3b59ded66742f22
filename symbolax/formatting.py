"""Separators and small helpers shared by the display functions.

Rendering is purely cosmetic: nothing here takes part in equality or hashing.
"""

from typing import Iterable

TENSOR_PROD = " ⊗ "
COPROD_ITERATED = " @ "
COPROD_NORMAL = " ∧ "
COPROD_HOPF = " ⊗ "
COPROD_LIE = " ∧ "
UNITY = "1"


def parens(s: str) -> str:
    return f"({s})"


def brackets(s: str) -> str:
    return f"[{s}]"


def str_join(items: Iterable[object], separator: str) -> str:
    return separator.join(str(item) for item in items)


def coeff_to_string(coeff: int) -> str:
    if coeff == 1:
        return "+ "
    if coeff == -1:
        return "- "
    return f"{coeff:+d} "
