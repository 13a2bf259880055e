# Manual verification of search results against known answers

import logging
import time
from dataclasses import dataclass, field
from typing import List, Sequence

from kmp import search

logger = logging.getLogger("app")


@dataclass
class VerificationCase:
    name: str
    text: str
    pattern: str
    expected_positions: List[int] = field(default_factory=list)


@dataclass
class VerificationOutcome:
    case: VerificationCase
    observed_positions: List[int]
    elapsed_ms: float

    @property
    def passed(self) -> bool:
        return self.observed_positions == self.case.expected_positions


DEFAULT_CASES: List[VerificationCase] = [
    VerificationCase("Empty pattern", "test string", "", []),
    VerificationCase("Pattern longer than text", "short", "this is a very long pattern", []),
    VerificationCase("Pattern not found", "hello world", "xyz", []),
    VerificationCase("Single character pattern", "aaaaa", "a", [0, 1, 2, 3, 4]),
    VerificationCase("Pattern equals text", "match", "match", [0]),
    VerificationCase("Overlapping patterns", "AAAA", "AA", [0, 1, 2]),
    VerificationCase("Multiple matches", "AAABAAABAAAB", "AAAB", [0, 4, 8]),
    VerificationCase("Self-overlapping pattern", "ABABABAB", "ABAB", [0, 2, 4]),
    VerificationCase("Complex repeating pattern", "AABAACAABAABAACAABA", "AABAACAABA", [0, 9]),
]


def verify_case(case: VerificationCase) -> VerificationOutcome:
    start = time.perf_counter()
    observed = search(case.text, case.pattern)
    elapsed_ms = (time.perf_counter() - start) * 1000.0
    outcome = VerificationOutcome(case=case, observed_positions=observed, elapsed_ms=elapsed_ms)
    if not outcome.passed:
        logger.warning(
            f"Verification failed for '{case.name}': expected {case.expected_positions}, got {observed}"
        )
    return outcome


def run_verification(cases: Sequence[VerificationCase] = DEFAULT_CASES) -> List[VerificationOutcome]:
    """Run every case and report how many passed."""
    outcomes = [verify_case(case) for case in cases]
    passed = sum(1 for outcome in outcomes if outcome.passed)
    logger.info(f"Verification: {passed}/{len(outcomes)} cases passed")
    return outcomes


def format_outcome(outcome: VerificationOutcome) -> str:
    case = outcome.case
    status = "PASS" if outcome.passed else "FAIL"
    return "\n".join([
        f"{case.name}",
        f"  Text: \"{case.text}\"",
        f"  Pattern: \"{case.pattern}\"",
        f"  Result: {outcome.observed_positions}",
        f"  Expected count: {len(case.expected_positions)}, observed count: {len(outcome.observed_positions)}",
        f"  Time: {outcome.elapsed_ms:.4f} ms",
        f"  Status: {status}",
    ])
