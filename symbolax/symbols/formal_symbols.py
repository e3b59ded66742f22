"""Formal symbols: polylogarithm terms kept opaque inside a combination.

``LiParam`` describes a multiple polylogarithm by its foreweight, weights and
groups of variables (each group stands for the product of its variables).
``LiraParam`` is the same function with compound ratios as arguments.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Hashable, override
from symbolax.linear.linear_types import FormalSymbol
from symbolax.symbols.ratio import CompoundRatio


def _check_shape(foreweight: int, weights: tuple[int, ...], num_args: int) -> None:
    if foreweight < 0:
        raise ValueError(f"Foreweight must be non-negative, got {foreweight}.")
    if not weights:
        raise ValueError("At least one weight is required.")
    if any(w < 1 for w in weights):
        raise ValueError(f"Weights must be positive, got {weights}.")
    if num_args != len(weights):
        raise ValueError(f"Expected {len(weights)} arguments for weights {weights}, got {num_args}.")


def _function_name(prefix: str, foreweight: int, weights: tuple[int, ...]) -> str:
    return f"{prefix}{foreweight}_{'_'.join(str(w) for w in weights)}"


@dataclass(frozen=True)
class LiParam(FormalSymbol):
    foreweight: int
    weights: tuple[int, ...]
    points: tuple[tuple[int, ...], ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "weights", tuple(self.weights))
        object.__setattr__(self, "points", tuple(tuple(group) for group in self.points))
        _check_shape(self.foreweight, self.weights, len(self.points))
        if any(not group for group in self.points):
            raise ValueError(f"Argument groups must be non-empty, got {self.points}.")

    @property
    @override
    def total_weight(self) -> int:
        return self.foreweight + sum(self.weights)

    @property
    def sign(self) -> int:
        return -1 if len(self.weights) % 2 else 1

    @override
    def to_key(self) -> Hashable:
        return (self.foreweight, self.weights, self.points)

    @classmethod
    def from_key(cls, key: tuple) -> LiParam:
        foreweight, weights, points = key
        return cls(foreweight, weights, points)

    def function_name(self) -> str:
        return _function_name("Li", self.foreweight, self.weights)

    @override
    def __str__(self) -> str:
        args = ", ".join("".join(f"x{i}" for i in group) for group in self.points)
        return f"{self.function_name()}({args})"


@dataclass(frozen=True)
class LiraParam(FormalSymbol):
    foreweight: int
    weights: tuple[int, ...]
    ratios: tuple[CompoundRatio, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "weights", tuple(self.weights))
        object.__setattr__(self, "ratios", tuple(self.ratios))
        _check_shape(self.foreweight, self.weights, len(self.ratios))

    @property
    @override
    def total_weight(self) -> int:
        return self.foreweight + sum(self.weights)

    @property
    def sign(self) -> int:
        return -1 if len(self.weights) % 2 else 1

    def with_foreweight(self, foreweight: int) -> LiraParam:
        return LiraParam(foreweight, self.weights, self.ratios)

    @override
    def to_key(self) -> Hashable:
        return (self.foreweight, self.weights, tuple(r.to_key() for r in self.ratios))

    @classmethod
    def from_key(cls, key: tuple) -> LiraParam:
        foreweight, weights, ratio_keys = key
        return cls(foreweight, weights, tuple(CompoundRatio.from_key(k) for k in ratio_keys))

    def function_name(self) -> str:
        return _function_name("Lira", self.foreweight, self.weights)

    @override
    def __str__(self) -> str:
        return f"{self.function_name()}({', '.join(str(r) for r in self.ratios)})"
