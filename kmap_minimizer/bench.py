"""Timing of the minimizer over random term sets."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from .qm import minimize

MIN_BENCH_VARS = 1
MAX_BENCH_VARS = 6
DEFAULT_DENSITY = 0.28
YIELD_EVERY = 30


@dataclass(frozen=True)
class BenchmarkResult:
    nvars: int
    trials: int
    times_ms: np.ndarray

    @property
    def mean_ms(self) -> float:
        return float(self.times_ms.mean()) if self.times_ms.size else 0.0

    @property
    def max_ms(self) -> float:
        return float(self.times_ms.max()) if self.times_ms.size else 0.0


def random_terms(nvars: int, density: float, rng: np.random.Generator) -> List[int]:
    """Include each index independently with probability ``density``."""
    picks = np.flatnonzero(rng.random(1 << nvars) < density)
    return [int(m) for m in picks]


def _check_args(nvars: int, trials: int, density: float) -> None:
    if not MIN_BENCH_VARS <= nvars <= MAX_BENCH_VARS:
        raise ValueError(f"Benchmark supports {MIN_BENCH_VARS}-{MAX_BENCH_VARS} variables, got {nvars}.")
    if trials < 1:
        raise ValueError("Number of trials must be positive.")
    if not 0.0 <= density <= 1.0:
        raise ValueError("Density must be within [0, 1].")


def _time_trial(nvars: int, density: float, rng: np.random.Generator) -> float:
    terms = random_terms(nvars, density, rng)
    start = time.perf_counter()
    minimize(terms, (), nvars)
    return (time.perf_counter() - start) * 1000.0


def _over_budget(started: float, budget: Optional[float]) -> bool:
    return budget is not None and time.perf_counter() - started > budget


def run_benchmark(
    nvars: int = 4,
    trials: int = 20,
    density: float = DEFAULT_DENSITY,
    seed: Optional[int] = None,
    budget: Optional[float] = None,
) -> BenchmarkResult:
    """Minimize ``trials`` random term sets; ``budget`` is a limit in seconds."""
    _check_args(nvars, trials, density)
    rng = np.random.default_rng(seed)
    started = time.perf_counter()
    times = []
    for _ in range(trials):
        times.append(_time_trial(nvars, density, rng))
        if _over_budget(started, budget):
            raise TimeoutError(f"Benchmark exceeded {budget} s after {len(times)} trials.")
    return BenchmarkResult(nvars, trials, np.asarray(times))


async def run_benchmark_async(
    nvars: int = 4,
    trials: int = 20,
    density: float = DEFAULT_DENSITY,
    seed: Optional[int] = None,
    budget: Optional[float] = None,
) -> BenchmarkResult:
    """Same as run_benchmark, yielding to the event loop between batches of trials."""
    _check_args(nvars, trials, density)
    rng = np.random.default_rng(seed)
    started = time.perf_counter()
    times = []
    for t in range(trials):
        times.append(_time_trial(nvars, density, rng))
        if _over_budget(started, budget):
            raise TimeoutError(f"Benchmark exceeded {budget} s after {len(times)} trials.")
        if t % YIELD_EVERY == 0:
            await asyncio.sleep(0)
    return BenchmarkResult(nvars, trials, np.asarray(times))


__all__ = [
    "BenchmarkResult",
    "DEFAULT_DENSITY",
    "MAX_BENCH_VARS",
    "random_terms",
    "run_benchmark",
    "run_benchmark_async",
]
