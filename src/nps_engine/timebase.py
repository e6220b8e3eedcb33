from __future__ import annotations

"""
Timebase utilities for converting between milliseconds, seconds and MIDI ticks.

Tick conversions assume PPQ (ticks per quarter note) and BPM are provided.
"""

import math


def to_sec(ms: float) -> float:
    """Convert milliseconds to seconds."""
    return ms / 1000.0


def sampling_period_ms(frequency_hz: float) -> float:
    """Width in milliseconds of one sample at the given frequency.

    One sample lasts 1/f seconds, i.e. 1000/f milliseconds.
    """
    return 1000.0 / frequency_hz


def samples_for_duration(duration_ms: float, frequency_hz: float) -> int:
    """Number of sampling windows needed to cover ``duration_ms``.

    Drift below 1e-9 of a window is dropped so an exact multiple of the
    period never yields an extra sliver window.
    """
    exact = duration_ms * frequency_hz / 1000.0
    return int(math.ceil(round(exact, 9)))


def ticks_per_second(ppq: int, bpm: float) -> float:
    """Compute ticks per second for given PPQ and BPM.

    One quarter note lasts 60/BPM seconds. With PPQ ticks per quarter note,
    ticks per second = PPQ / (60/BPM) = PPQ * BPM / 60.
    """
    return (ppq * bpm) / 60.0


def ticks_per_ms(ppq: int, bpm: float) -> float:
    """Compute ticks per millisecond for given PPQ and BPM."""
    return ticks_per_second(ppq, bpm) / 1000.0


def ticks_to_ms(ticks: int, ppq: int, bpm: float) -> float:
    """Convert ticks to milliseconds (float)."""
    return float(ticks) / ticks_per_ms(ppq, bpm)
