# Implementation of Knuth–Morris–Pratt algorithm for substring search

import logging
from typing import Iterator, List, Optional, Sequence

logger = logging.getLogger("kmp")


def build_failure_function(pattern: Optional[Sequence]) -> List[int]:
    """
    Preprocess the pattern to create the longest prefix-suffix (LPS) array.
    Entry i holds the length of the longest proper prefix of pattern[0..i]
    that is also a suffix of it. The LPS array is used to skip characters
    while matching.

    An empty (or None) pattern yields an empty array.
    """
    if not pattern:
        return []

    m = len(pattern)
    lps = [0] * m
    length = 0  # Length of the previous longest prefix suffix
    i = 1

    while i < m:
        if pattern[i] == pattern[length]:
            length += 1
            lps[i] = length
            i += 1
        else:
            if length != 0:
                # Try the next shorter prefix-suffix without advancing i
                length = lps[length - 1]
            else:
                lps[i] = 0
                i += 1

    assert all(lps[k] <= k for k in range(m)), "LPS entry exceeds its prefix"
    return lps


def iter_matches(
    text: Optional[Sequence],
    pattern: Optional[Sequence],
    lps: Optional[Sequence[int]] = None
) -> Iterator[int]:
    """
    Lazily yield the start position of every occurrence of pattern in text,
    in increasing order, overlapping occurrences included.

    Args:
        text: The sequence to search.
        pattern: The sequence to look for.
        lps: Failure function of pattern, if the caller already has it.
    """
    if text is None or pattern is None:
        return
    txt_len = len(text)
    pat_len = len(pattern)
    if pat_len == 0 or pat_len > txt_len:
        return

    if lps is None:
        lps = build_failure_function(pattern)
    elif len(lps) != pat_len:
        raise ValueError(
            f"Failure function has {len(lps)} entries for a pattern of length {pat_len}"
        )

    i = 0  # Index for text
    j = 0  # Index for pattern

    while i < txt_len:
        if pattern[j] == text[i]:
            i += 1
            j += 1

        if j == pat_len:
            yield i - j
            j = lps[j - 1]

        elif i < txt_len and pattern[j] != text[i]:
            if j != 0:
                j = lps[j - 1]
            else:
                i += 1


def search(text: Optional[Sequence], pattern: Optional[Sequence]) -> List[int]:
    """
    KMP string searching algorithm.
    Returns a list of positions where pattern occurs in text.
    Missing text or pattern, an empty pattern and a pattern longer than the
    text all give an empty list.
    """
    result = list(iter_matches(text, pattern))
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "search: text_len=%s pattern_len=%s matches=%d",
            None if text is None else len(text),
            None if pattern is None else len(pattern),
            len(result),
        )
    return result


def count_matches(text: Optional[Sequence], pattern: Optional[Sequence]) -> int:
    """Number of (possibly overlapping) occurrences of pattern in text."""
    return sum(1 for _ in iter_matches(text, pattern))


def contains(text: Optional[Sequence], pattern: Optional[Sequence]) -> bool:
    """True when pattern occurs at least once in text."""
    return next(iter_matches(text, pattern), None) is not None
