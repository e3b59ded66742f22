"""Dense matrices of linear combinations and rank computations.

Each combination becomes a row; columns are the distinct terms seen across all
rows, in order of first appearance. Coefficients are unbounded integers, so the
matrix holds Python ints and the rank is computed exactly.
"""

from __future__ import annotations
import logging
from typing import Hashable, Iterable
import numpy as np
from symbolax.linear.linear import Linear

logger = logging.getLogger(__name__)


class ExprMatrixBuilder:
    def __init__(self) -> None:
        self._rows: list[Linear] = []
        self._columns: dict[Hashable, int] = {}
        self._expr_type: type[Linear] | None = None

    def add_expr(self, expr: Linear) -> None:
        if self._expr_type is None:
            self._expr_type = type(expr)
        elif type(expr) is not self._expr_type:
            raise ValueError(
                f"Matrix rows must share a type: {self._expr_type.__name__} vs {type(expr).__name__}."
            )
        for key, _ in expr.key_items():
            self._columns.setdefault(key, len(self._columns))
        self._rows.append(expr)

    @property
    def num_rows(self) -> int:
        return len(self._rows)

    @property
    def num_columns(self) -> int:
        return len(self._columns)

    def make_matrix(self) -> np.ndarray:
        """Integer matrix with ``dtype=object``; entries never overflow."""
        matrix = np.zeros((self.num_rows, self.num_columns), dtype=object)
        for row, expr in enumerate(self._rows):
            for key, coeff in expr.key_items():
                matrix[row, self._columns[key]] = coeff
        logger.debug("Built expression matrix of shape %s", matrix.shape)
        return matrix


def matrix_rank(matrix: np.ndarray) -> int:
    """Exact rank of an integer matrix by fraction-free (Bareiss) elimination."""
    rows = [[int(x) for x in row] for row in np.asarray(matrix, dtype=object)]
    if not rows or not rows[0]:
        return 0
    num_rows, num_columns = len(rows), len(rows[0])
    rank = 0
    prev_pivot = 1
    for col in range(num_columns):
        pivot_row = next((r for r in range(rank, num_rows) if rows[r][col] != 0), None)
        if pivot_row is None:
            continue
        rows[rank], rows[pivot_row] = rows[pivot_row], rows[rank]
        pivot = rows[rank][col]
        for r in range(rank + 1, num_rows):
            factor = rows[r][col]
            rows[r] = [
                (pivot * rows[r][c] - factor * rows[rank][c]) // prev_pivot
                for c in range(num_columns)
            ]
        prev_pivot = pivot
        rank += 1
        if rank == num_rows:
            break
    return rank


def are_linearly_independent(exprs: Iterable[Linear]) -> bool:
    builder = ExprMatrixBuilder()
    for expr in exprs:
        builder.add_expr(expr)
    return matrix_rank(builder.make_matrix()) == builder.num_rows
