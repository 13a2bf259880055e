# Presentation helpers for search results. Only uses the public search API.

from typing import List, Sequence

from config import BANNER_WIDTH, CONTEXT_WIDTH
from kmp import build_failure_function


def format_lps(pattern: str) -> str:
    """
    Render the pattern together with its LPS array, one column per symbol.
    """
    lps = build_failure_function(pattern)
    lines = [
        f"Pattern: {pattern!r}",
        "Index : " + " ".join(f"{i:>2}" for i in range(len(pattern))),
        "Chars : " + " ".join(f"{c:>2}" for c in pattern),
        "LPS   : " + " ".join(f"{v:>2}" for v in lps),
        f"LPS Array: {lps}",
    ]
    return "\n".join(lines) + "\n"


def context_snippet(text: str, position: int, pattern_length: int, width: int = CONTEXT_WIDTH) -> str:
    """Text around a match, clamped to the text bounds, on a single line."""
    start = max(0, position - width)
    end = min(len(text), position + pattern_length + width)
    return text[start:end].replace("\n", " ")


def format_results(text: str, pattern: str, matches: Sequence[int], elapsed_ns: int) -> str:
    """
    Build the human-readable report for one search: text and pattern sizes,
    match positions with context snippets, and the execution time.
    """
    lines = [
        "=" * BANNER_WIDTH,
        f"TEXT LENGTH: {len(text)} characters",
        f"PATTERN: \"{pattern}\" (length: {len(pattern)})",
        "-" * BANNER_WIDTH,
    ]

    if not matches:
        lines.append("No matches found.")
    else:
        lines.append(f"Found {len(matches)} match(es) at position(s): {list(matches)}")
        lines.append("")
        lines.append("Context snippets:")
        for index in matches:
            lines.append(f"  [{index}]: ...{context_snippet(text, index, len(pattern))}...")

    lines.append("")
    lines.append(f"Execution time: {elapsed_ns / 1_000_000:.4f} ms")
    lines.append("=" * BANNER_WIDTH)
    return "\n".join(lines) + "\n"


def highlight(text: str, starts: Sequence[int], m: int) -> str:
    """
    Returns a version of the text with the occurrences framed by [ ].
    Overlapping occurrences are merged into a single framed region.
    """
    if not starts or m <= 0:
        return text

    # Merge overlapping [start, end) ranges
    regions: List[List[int]] = []
    for s in starts:
        if regions and s < regions[-1][1]:
            regions[-1][1] = max(regions[-1][1], s + m)
        else:
            regions.append([s, s + m])

    parts = []
    last = 0
    for start, end in regions:
        parts.append(text[last:start])
        parts.append("[" + text[start:end] + "]")
        last = end
    parts.append(text[last:])
    return "".join(parts)
