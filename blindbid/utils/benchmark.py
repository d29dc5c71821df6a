"""
Benchmarks for blindbid core operations.

Run with: python -m blindbid.utils.benchmark
"""

import time
import statistics
from typing import Callable, List, Optional
from dataclasses import dataclass

from blindbid.crypto import DeterministicRandom, gen_rand_scalar, poseidon2
from blindbid.core.bid import commit, score
from blindbid.core.prover import prove
from blindbid.core.verifier import verify
from blindbid.utils.logger import get_logger

logger = get_logger("benchmark")


# =============================================================================
# Benchmark Framework
# =============================================================================


@dataclass
class BenchmarkResult:
    """Result of a benchmark run."""
    name: str
    iterations: int
    total_time_ms: float
    avg_time_ms: float
    min_time_ms: float
    max_time_ms: float
    ops_per_sec: float

    def __str__(self) -> str:
        return (
            f"{self.name}: {self.ops_per_sec:.1f} ops/s "
            f"(avg={self.avg_time_ms:.3f}ms, min={self.min_time_ms:.3f}ms, max={self.max_time_ms:.3f}ms)"
        )


def benchmark(
    name: str,
    func: Callable,
    iterations: int = 100,
    warmup: int = 5,
) -> BenchmarkResult:
    """
    Run a benchmark.

    Args:
        name: Benchmark name
        func: Function to benchmark (no args)
        iterations: Number of iterations
        warmup: Warmup iterations

    Returns:
        BenchmarkResult
    """
    if iterations < 1:
        raise ValueError("iterations must be >= 1")

    for _ in range(warmup):
        func()

    times = []
    for _ in range(iterations):
        start = time.perf_counter()
        func()
        end = time.perf_counter()
        times.append((end - start) * 1000)

    total = sum(times)
    avg = statistics.mean(times)

    return BenchmarkResult(
        name=name,
        iterations=iterations,
        total_time_ms=total,
        avg_time_ms=avg,
        min_time_ms=min(times),
        max_time_ms=max(times),
        ops_per_sec=1000 / avg if avg > 0 else float("inf"),
    )


# =============================================================================
# Protocol Benchmarks
# =============================================================================


def benchmark_protocol(
    iterations: int = 10,
    list_size: int = 8,
    seed: Optional[bytes] = None,
) -> List[BenchmarkResult]:
    """
    Benchmark score, commit, prove and verify.

    Args:
        iterations: Iterations per operation
        list_size: Length of the public list
        seed: Optional seed for reproducible inputs
    """
    rng = DeterministicRandom(seed) if seed is not None else None
    d = gen_rand_scalar(rng)
    k = gen_rand_scalar(rng)
    round_seed = gen_rand_scalar(rng)
    pub_list = [gen_rand_scalar(rng) for _ in range(list_size - 1)]
    pub_list.append(commit(d, k))

    output = prove(d, k, round_seed, pub_list)

    results = [
        benchmark("Poseidon2", lambda: poseidon2(12345, 67890), iterations=iterations * 10),
        benchmark("commit", lambda: commit(d, k), iterations=iterations),
        benchmark("score", lambda: score(d, k, round_seed), iterations=iterations),
        benchmark(
            f"prove (list={list_size})",
            lambda: prove(d, k, round_seed, pub_list),
            iterations=iterations,
            warmup=1,
        ),
        benchmark(
            f"verify (list={list_size})",
            lambda: verify(
                output.proof,
                round_seed.to_bytes(),
                output.pub_list,
                output.score.to_bytes(),
                output.commitment.to_bytes(),
            ),
            iterations=iterations,
            warmup=1,
        ),
    ]

    for result in results:
        logger.info(str(result))

    return results


if __name__ == "__main__":
    from blindbid.utils.logger import setup_logging

    setup_logging()
    benchmark_protocol()
