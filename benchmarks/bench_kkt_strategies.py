"""Benchmark the range-space solve against the full KKT system."""

import time
from typing import Dict

import numpy as np

from eqqp import SolverConfig, solve_kkt


def benchmark_kkt_strategies(n: int, m: int, repeats: int = 50) -> Dict[str, float]:
    """Time both strategies on one random strictly convex QP.

    Args:
        n: Number of variables.
        m: Number of equality constraints.
        repeats: Solves per strategy.

    Returns:
        Dictionary with timing results.
    """
    rng = np.random.default_rng(0)
    root = rng.standard_normal((n, n))
    G = root @ root.T + np.eye(n)
    c = rng.standard_normal(n)
    A = rng.standard_normal((m, n))
    b = rng.standard_normal(m)
    forced = SolverConfig(force_full_kkt=True)

    # Warmup
    for _ in range(3):
        solve_kkt(G, c, A, b)
        solve_kkt(G, c, A, b, config=forced)

    start = time.perf_counter()
    for _ in range(repeats):
        solve_kkt(G, c, A, b)
    range_space = (time.perf_counter() - start) / repeats

    start = time.perf_counter()
    for _ in range(repeats):
        solve_kkt(G, c, A, b, config=forced)
    full_kkt = (time.perf_counter() - start) / repeats

    return {
        "n": n,
        "m": m,
        "range_space_sec": range_space,
        "full_kkt_sec": full_kkt,
        "speedup": full_kkt / range_space,
    }


if __name__ == "__main__":
    print("Benchmarking KKT strategies...")

    for n, m in [(50, 10), (200, 40), (500, 100)]:
        results = benchmark_kkt_strategies(n, m)
        print(f"n={n}, m={m}:")
        print(f"  Range-space: {results['range_space_sec']*1e3:.2f} ms")
        print(f"  Full KKT:    {results['full_kkt_sec']*1e3:.2f} ms")
        print(f"  Speedup:     {results['speedup']:.1f}x")
