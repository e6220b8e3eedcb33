#!/usr/bin/env python3
from __future__ import annotations

"""
Rough timing of the frequency distribution over a synthetic dense chart.

Sweeps the same sampling frequencies as the density benchmarks, serial and
pooled, and prints the mean time per call.

Example:
    PYTHONPATH=src python scripts/bench_density.py --notes 20000 --repeat 50
"""

import argparse
import random
import time
from typing import List, Optional

from nps_engine.density import calculate_by_frequency

FREQUENCIES = [0.001, 0.005, 0.01, 0.02, 0.05, 0.1, 0.25, 0.5, 4.0, 20.0]


def synthetic_onsets(notes: int, mean_gap_ms: float, seed: int) -> List[float]:
    rng = random.Random(seed)
    t = 0.0
    out: List[float] = []
    for _ in range(notes):
        t += rng.expovariate(1.0 / mean_gap_ms)
        out.append(round(t))
    return out


def _time_call(onsets: List[float], duration: float, hz: float, workers: Optional[int], repeat: int) -> float:
    start = time.perf_counter()
    for _ in range(repeat):
        calculate_by_frequency(onsets, duration, hz, workers=workers)
    return (time.perf_counter() - start) / repeat


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Time calculate_by_frequency across sampling rates")
    parser.add_argument("--notes", type=int, default=20000)
    parser.add_argument("--gap-ms", type=float, default=15.0, help="Mean gap between notes")
    parser.add_argument("--repeat", type=int, default=20)
    parser.add_argument("--workers", type=int, default=4)
    parser.add_argument("--seed", type=int, default=1234)
    args = parser.parse_args(argv)

    onsets = synthetic_onsets(args.notes, args.gap_ms, args.seed)
    duration = onsets[-1] + 1.0
    print(f"notes={len(onsets)} duration_ms={duration:.0f}")
    for hz in FREQUENCIES:
        serial = _time_call(onsets, duration, hz, None, args.repeat)
        pooled = _time_call(onsets, duration, hz, args.workers, args.repeat)
        print(f"hz={hz:<7g} serial={serial * 1e3:8.3f}ms pooled[{args.workers}]={pooled * 1e3:8.3f}ms")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
