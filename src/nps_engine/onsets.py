from __future__ import annotations

from bisect import bisect_left, bisect_right
from typing import Optional, Sequence


def is_sorted(onsets: Sequence[float]) -> bool:
    return all(onsets[i] <= onsets[i + 1] for i in range(len(onsets) - 1))


def as_sorted(onsets: Sequence[float]) -> Sequence[float]:
    """Return ``onsets`` itself when already ascending, else a sorted copy.

    The caller's sequence is never mutated.
    """
    if is_sorted(onsets):
        return onsets
    return sorted(onsets)


def count_in_window(onsets: Sequence[float], start_ms: float, end_ms: float, closed: bool = False) -> int:
    """Count onsets ``t`` with ``start_ms <= t < end_ms``.

    With ``closed=True`` the window has no upper bound: every onset at or
    after ``start_ms`` is counted. That is how the final window of a
    partition absorbs notes sitting exactly on the map end.
    Requires ``onsets`` ascending.
    """
    if not onsets or end_ms <= start_ms:
        return 0
    lo = bisect_left(onsets, start_ms)
    hi = len(onsets) if closed else bisect_left(onsets, end_ms)
    return hi - lo


def count_through(onsets: Sequence[float], start_ms: float, end_ms: float) -> int:
    """Count onsets with ``start_ms <= t <= end_ms`` (both ends inclusive)."""
    if not onsets or end_ms < start_ms:
        return 0
    return bisect_right(onsets, end_ms) - bisect_left(onsets, start_ms)


def play_length(onsets: Sequence[float]) -> Optional[float]:
    """Time between the first and the last onset, or None for an empty series."""
    if not onsets:
        return None
    ordered = as_sorted(onsets)
    return float(ordered[-1] - ordered[0])
