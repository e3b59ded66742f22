import pytest
from typing import Callable
from pytest_benchmark.fixture import BenchmarkFixture
import numpy as np

from symbolax.symbols.simple_vector import SimpleVectorExpr

BENCH_LYNDON_CASES: list = [
    pytest.param(2, 4, id="dim-2-len-4"),
    pytest.param(3, 4, id="dim-3-len-4"),
    pytest.param(3, 6, id="dim-3-len-6"),
]

BENCH_COMULTIPLY_CASES: list = [
    pytest.param(3, (2, 2), id="dim-3-form-2-2"),
    pytest.param(3, (1, 3), id="dim-3-form-1-3"),
    pytest.param(4, (2, 3), id="dim-4-form-2-3"),
]


def benchmark_wrapper(
    benchmark: BenchmarkFixture,
    func: Callable,
    *args,
    **kwargs,
):
    # Warm-up: fills the shuffle cache and lazily built alphabets
    warmed = func(*args, **kwargs)

    def run():
        func(*args, **kwargs)

    benchmark(run)
    return warmed


def random_simple_vector_expr(
    seed: int,
    num_terms: int,
    length: int,
    alphabet_size: int,
) -> SimpleVectorExpr:
    """Random combination of words of a fixed length with coefficients in [-3, 3]."""
    rng = np.random.default_rng(seed)
    ret = SimpleVectorExpr()
    for _ in range(num_terms):
        word = tuple(int(x) for x in rng.integers(1, alphabet_size + 1, size=length))
        ret.add(word, int(rng.integers(-3, 4)))
    return ret


@pytest.fixture
def simple_vector_expr_fixture(request: pytest.FixtureRequest) -> SimpleVectorExpr:
    """Random word combination for ``(alphabet_size, length)``."""
    alphabet_size, length = request.param
    return random_simple_vector_expr(42, 3 * alphabet_size, length, alphabet_size)
