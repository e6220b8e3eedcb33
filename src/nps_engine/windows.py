from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .timebase import sampling_period_ms, samples_for_duration, to_sec


@dataclass(frozen=True)
class Window:
    """One slice of the timeline, ``[start_ms, end_ms)``.

    The last window of a partition is ``closed``: it also owns onsets at or
    beyond ``end_ms`` so nothing is dropped by boundary rounding.
    """

    index: int
    start_ms: float
    end_ms: float
    closed: bool = False

    @property
    def width_ms(self) -> float:
        return self.end_ms - self.start_ms

    @property
    def width_s(self) -> float:
        return to_sec(self.width_ms)


def block_windows(duration_ms: float, num_blocks: int) -> List[Window]:
    """Split ``[0, duration_ms)`` into ``num_blocks`` equal-width windows.

    Boundaries are computed as ``duration * i / n`` rather than by repeated
    addition, and the last upper bound is exactly ``duration_ms``.
    """
    if num_blocks <= 0 or duration_ms <= 0:
        return []
    last = num_blocks - 1
    out: List[Window] = []
    for i in range(num_blocks):
        start = duration_ms * i / num_blocks
        end = duration_ms if i == last else duration_ms * (i + 1) / num_blocks
        out.append(Window(index=i, start_ms=start, end_ms=end, closed=(i == last)))
    return out


def frequency_windows(duration_ms: float, frequency_hz: float) -> List[Window]:
    """Split ``[0, duration_ms)`` into sampling periods of ``1000/f`` ms.

    The last window is truncated to ``duration_ms`` and keeps its real width.
    """
    if frequency_hz <= 0 or duration_ms <= 0:
        return []
    period = sampling_period_ms(frequency_hz)
    count = max(1, samples_for_duration(duration_ms, frequency_hz))
    last = count - 1
    out: List[Window] = []
    for i in range(count):
        start = i * period
        end = duration_ms if i == last else min((i + 1) * period, duration_ms)
        out.append(Window(index=i, start_ms=start, end_ms=end, closed=(i == last)))
    return out
