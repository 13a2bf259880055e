# Timing harness demonstrating the linear growth of KMP search

import logging
import time
from dataclasses import dataclass
from typing import Iterable, List

from config import (
    BENCHMARK_FILLER,
    BENCHMARK_REPEATS,
    GROWTH_TOLERANCE,
    PATTERN_INTERVAL,
)
from kmp import search

logger = logging.getLogger("benchmark")


@dataclass
class BenchmarkResult:
    """Outcome of timing one search."""
    size: int
    pattern: str
    matches: int
    elapsed_ns: int

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed_ns / 1_000_000


def generate_text(size: int, pattern: str, filler: str = BENCHMARK_FILLER,
                  interval: int = PATTERN_INTERVAL) -> str:
    """
    Build a synthetic text of at least `size` characters made of `filler`,
    with `pattern` followed by a space inserted roughly every `interval`
    characters.
    """
    if not filler:
        raise ValueError("filler must not be empty")
    parts: List[str] = []
    length = 0
    next_insert = interval
    while length < size:
        if length >= next_insert:
            chunk = pattern + " "
            next_insert += interval
        else:
            chunk = filler
        parts.append(chunk)
        length += len(chunk)
    return "".join(parts)


def time_search(text: str, pattern: str, repeats: int = BENCHMARK_REPEATS) -> BenchmarkResult:
    """Best-of-`repeats` wall time of a search over text."""
    best = None
    matches: List[int] = []
    for _ in range(max(1, repeats)):
        start = time.perf_counter_ns()
        matches = search(text, pattern)
        elapsed = time.perf_counter_ns() - start
        if best is None or elapsed < best:
            best = elapsed
    return BenchmarkResult(size=len(text), pattern=pattern, matches=len(matches), elapsed_ns=best)


def run_benchmark(sizes: Iterable[int], pattern: str,
                  repeats: int = BENCHMARK_REPEATS) -> List[BenchmarkResult]:
    """Time the search over one generated text per requested size."""
    results = []
    for size in sizes:
        result = time_search(generate_text(size, pattern), pattern, repeats)
        logger.info(
            f"size={result.size} pattern={pattern!r} matches={result.matches} "
            f"time_ms={result.elapsed_ms:.3f}"
        )
        results.append(result)
    return results


def _sized(results: List[BenchmarkResult]) -> List[BenchmarkResult]:
    """Results with a non-empty text; an empty text has no meaningful ratio."""
    return [result for result in results if result.size > 0]


def _growth_ratio(base: BenchmarkResult, result: BenchmarkResult) -> float:
    time_ratio = result.elapsed_ns / max(base.elapsed_ns, 1)
    size_ratio = result.size / base.size
    return time_ratio / size_ratio


def growth_ratios(results: List[BenchmarkResult]) -> List[float]:
    """
    For every result after the first, the time ratio against the first
    result divided by the size ratio. Values near 1 mean linear growth.
    Zero-size results are left out.
    """
    sized = _sized(results)
    if len(sized) < 2:
        return []
    base = sized[0]
    return [_growth_ratio(base, result) for result in sized[1:]]


def is_linear(results: List[BenchmarkResult], tolerance: float = GROWTH_TOLERANCE) -> bool:
    """True when no time ratio exceeds `tolerance` times its size ratio."""
    ratios = growth_ratios(results)
    linear = all(ratio < tolerance for ratio in ratios)
    if not linear:
        logger.warning(f"Super-linear growth detected: {ratios}")
    return linear


def format_benchmark(results: List[BenchmarkResult], tolerance: float = GROWTH_TOLERANCE) -> str:
    sized = _sized(results)
    base = sized[0] if sized else None
    lines = [
        "Text Size | Pattern | Matches | Time (ms) | Status",
        "-" * 55,
    ]
    for result in results:
        if base is None or result.size == 0:
            status = "-"
        elif _growth_ratio(base, result) < tolerance:
            status = "Fast"
        else:
            status = "Check"
        lines.append(
            f"{result.size:>9} | {result.pattern:<7} | {result.matches:>7} | "
            f"{result.elapsed_ms:>9.3f} | {status}"
        )
    return "\n".join(lines) + "\n"
