from __future__ import annotations

import argparse
from typing import Any, Dict, List, Sequence

from .config import AnalysisConfig, analysis_config_from_dict, load_config
from .density import calculate_avg_nps, calculate_distribution, calculate_by_frequency
from .midi_onsets import load_midi_onsets


def parse_onsets(text: str) -> List[float]:
    """Parse a comma-separated onset list such as ``"0,500,1000"``."""
    out: List[float] = []
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            value = float(part)
        except ValueError:
            raise ValueError(f"Invalid onset value: {part!r}") from None
        if value < 0:
            raise ValueError(f"Onsets must be non-negative, got {value}")
        out.append(value)
    return out


def _format_series(values: Sequence[float]) -> str:
    return ", ".join(f"{v:.3f}" for v in values)


def render_report(onsets: Sequence[float], duration_ms: float, cfg: AnalysisConfig) -> List[str]:
    avg = calculate_avg_nps(onsets, duration_ms)
    if avg is None:
        raise SystemExit(f"Cannot compute NPS: {len(onsets)} notes over {duration_ms} ms")
    blocks = calculate_distribution(onsets, duration_ms, cfg.num_blocks, workers=cfg.workers)
    if blocks is None:
        raise SystemExit(f"Cannot compute block distribution with {cfg.num_blocks} blocks over {duration_ms} ms")
    sampled = calculate_by_frequency(onsets, duration_ms, cfg.frequency_hz, workers=cfg.workers)
    if sampled is None:
        raise SystemExit(f"Cannot compute distribution at {cfg.frequency_hz} Hz over {duration_ms} ms")
    return [
        f"notes={len(onsets)} duration_ms={duration_ms:.1f}",
        f"avg_nps={avg:.3f}",
        f"blocks[{cfg.num_blocks}]={_format_series(blocks)}",
        f"frequency[{cfg.frequency_hz:g}Hz]={_format_series(sampled)}",
    ]


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Report note density (NPS) for a chart")
    src = parser.add_mutually_exclusive_group(required=True)
    src.add_argument("--midi", default=None, help="MIDI chart to read note onsets from")
    src.add_argument("--onsets", default=None, help="Comma-separated onset times in ms, e.g. '0,500,1000'")
    parser.add_argument("--config", default=None, help="Optional JSON config with num_blocks, frequency_hz, workers, notes, duration_ms")
    parser.add_argument("--duration-ms", type=float, default=None, help="Map duration in ms (defaults to the input's own length)")
    parser.add_argument("--blocks", type=int, default=None, help="Number of equal-width blocks")
    parser.add_argument("--frequency", type=float, default=None, help="Sampling frequency in Hz")
    parser.add_argument("--workers", type=int, default=None, help="Thread pool size for window counting")
    args = parser.parse_args(argv)

    raw: Dict[str, Any] = load_config(args.config) if args.config else {}
    # Command-line flags win over the config file
    for key, value in (
        ("num_blocks", args.blocks),
        ("frequency_hz", args.frequency),
        ("workers", args.workers),
        ("duration_ms", args.duration_ms),
    ):
        if value is not None:
            raw[key] = value
    try:
        cfg = analysis_config_from_dict(raw)
    except ValueError as e:
        raise SystemExit(f"Invalid configuration: {e}")

    duration: float
    if args.midi:
        midi = load_midi_onsets(args.midi, notes=cfg.notes or None)
        onsets: List[float] = midi.onsets_ms
        duration = midi.duration_ms
    else:
        try:
            onsets = parse_onsets(args.onsets)
        except ValueError as e:
            raise SystemExit(str(e))
        duration = max(onsets) if onsets else 0.0
    if cfg.duration_ms is not None:
        duration = cfg.duration_ms

    for line in render_report(onsets, duration, cfg):
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
