from __future__ import annotations

"""
Note-density metrics over an ordered series of onset times (milliseconds).

Every entry point returns ``None`` when the requested metric is undefined
(no notes, zero duration, zero blocks, non-positive frequency or a
degenerate window). Nothing here raises on well-formed input.
"""

import math
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .onsets import as_sorted, count_in_window, count_through, play_length
from .timebase import sampling_period_ms, to_sec
from .windows import Window, block_windows, frequency_windows

# Below this many windows the pool costs more than it saves.
PARALLEL_MIN_WINDOWS = 64


@dataclass(frozen=True)
class DensitySample:
    start_ms: float
    end_ms: float
    count: int
    nps: float


def _debug(msg: str) -> None:
    if os.environ.get("NPS_ENGINE_DEBUG"):
        print(f"[nps-debug] {msg}")


def _count_windows(onsets: Sequence[float], windows: List[Window], workers: Optional[int]) -> List[int]:
    """Count onsets per window, in window order.

    ``Executor.map`` yields results in submission order, so the chronological
    ordering holds whichever worker finishes first.
    """

    def _count(w: Window) -> int:
        return count_in_window(onsets, w.start_ms, w.end_ms, closed=w.closed)

    if workers and workers > 1 and len(windows) >= PARALLEL_MIN_WINDOWS:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(_count, windows))
    return [_count(w) for w in windows]


def _resolvable(duration_ms: float, width_ms: float) -> bool:
    """False when windows this narrow would collapse onto each other near the map end."""
    return width_ms > 0 and duration_ms - width_ms != duration_ms


def _density(onsets: Sequence[float], windows: List[Window], workers: Optional[int]) -> Optional[List[DensitySample]]:
    if not windows:
        return None
    if any(w.width_ms <= 0 for w in windows):
        _debug("degenerate zero-width window")
        return None
    counts = _count_windows(onsets, windows, workers)
    return [
        DensitySample(start_ms=w.start_ms, end_ms=w.end_ms, count=c, nps=c / w.width_s)
        for w, c in zip(windows, counts)
    ]


def calculate_avg_nps(onsets: Sequence[float], duration_ms: float) -> Optional[float]:
    """Average notes per second over the whole map."""
    if not onsets or duration_ms <= 0:
        _debug(f"avg nps undefined (notes={len(onsets)}, duration_ms={duration_ms})")
        return None
    return len(onsets) / to_sec(duration_ms)


def calculate_play_nps(onsets: Sequence[float]) -> Optional[float]:
    """Average NPS using the first-to-last onset span as the duration."""
    length = play_length(onsets)
    if length is None:
        return None
    return calculate_avg_nps(onsets, length)


def block_samples(
    onsets: Sequence[float],
    duration_ms: float,
    num_blocks: int,
    workers: Optional[int] = None,
) -> Optional[List[DensitySample]]:
    if not onsets or duration_ms <= 0 or num_blocks <= 0:
        _debug(f"block distribution undefined (notes={len(onsets)}, duration_ms={duration_ms}, blocks={num_blocks})")
        return None
    if not _resolvable(duration_ms, duration_ms / num_blocks):
        _debug(f"block width below timeline resolution (blocks={num_blocks})")
        return None
    ordered = as_sorted(onsets)
    windows = block_windows(duration_ms, num_blocks)
    _debug(f"block distribution windows={len(windows)} width_ms={duration_ms / num_blocks:.3f}")
    return _density(ordered, windows, workers)


def density_samples(
    onsets: Sequence[float],
    duration_ms: float,
    frequency_hz: float,
    workers: Optional[int] = None,
) -> Optional[List[DensitySample]]:
    """Frequency-sampled density, keyed by window start/end."""
    if not onsets or duration_ms <= 0 or not math.isfinite(frequency_hz) or frequency_hz <= 0:
        _debug(f"frequency distribution undefined (notes={len(onsets)}, duration_ms={duration_ms}, hz={frequency_hz})")
        return None
    if not _resolvable(duration_ms, sampling_period_ms(frequency_hz)):
        _debug(f"sampling period below timeline resolution (hz={frequency_hz})")
        return None
    ordered = as_sorted(onsets)
    windows = frequency_windows(duration_ms, frequency_hz)
    _debug(f"frequency distribution windows={len(windows)} hz={frequency_hz}")
    return _density(ordered, windows, workers)


def calculate_distribution(
    onsets: Sequence[float],
    duration_ms: float,
    num_blocks: int,
    workers: Optional[int] = None,
) -> Optional[List[float]]:
    """Local NPS for each of ``num_blocks`` equal slices of ``[0, duration_ms)``."""
    samples = block_samples(onsets, duration_ms, num_blocks, workers=workers)
    if samples is None:
        return None
    return [s.nps for s in samples]


def calculate_by_frequency(
    onsets: Sequence[float],
    duration_ms: float,
    frequency_hz: float,
    workers: Optional[int] = None,
) -> Optional[List[float]]:
    """Local NPS per sampling period of ``1000 / frequency_hz`` ms.

    The final period is cut at ``duration_ms`` and its density uses the
    shortened width.
    """
    samples = density_samples(onsets, duration_ms, frequency_hz, workers=workers)
    if samples is None:
        return None
    return [s.nps for s in samples]


def nps_in_range(
    onsets: Sequence[float],
    start_ms: float,
    end_ms: float,
    inclusive_end: bool = False,
) -> Optional[float]:
    """Local NPS over ``[start_ms, end_ms)`` (or ``[start_ms, end_ms]``)."""
    if end_ms <= start_ms:
        return None
    ordered = as_sorted(onsets)
    if inclusive_end:
        count = count_through(ordered, start_ms, end_ms)
    else:
        count = count_in_window(ordered, start_ms, end_ms)
    return count / to_sec(end_ms - start_ms)


def nps_between_notes(onsets: Sequence[float], first: int, last: int) -> Optional[float]:
    """NPS of the span from note ``first`` to note ``last``, both counted.

    Indices refer to the chronological order of the series.
    """
    n = len(onsets)
    if not (0 <= first < n and 0 <= last < n) or last <= first:
        return None
    ordered = as_sorted(onsets)
    span = ordered[last] - ordered[first]
    if span <= 0:
        return None
    return (last - first + 1) / to_sec(span)
