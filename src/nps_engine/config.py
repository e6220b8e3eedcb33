from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class AnalysisConfig:
    num_blocks: int = 4
    frequency_hz: float = 1.0
    workers: Optional[int] = None
    # Optional MIDI note filter when onsets come from a MIDI chart
    notes: List[int] = field(default_factory=list)
    # Overrides the duration derived from the input when set
    duration_ms: Optional[float] = None


def _validate(cfg: AnalysisConfig) -> AnalysisConfig:
    if cfg.num_blocks <= 0:
        raise ValueError(f"num_blocks must be positive, got {cfg.num_blocks}")
    if cfg.frequency_hz <= 0:
        raise ValueError(f"frequency_hz must be positive, got {cfg.frequency_hz}")
    if cfg.workers is not None and cfg.workers < 1:
        raise ValueError(f"workers must be >= 1, got {cfg.workers}")
    if cfg.duration_ms is not None and cfg.duration_ms <= 0:
        raise ValueError(f"duration_ms must be positive, got {cfg.duration_ms}")
    return cfg


def analysis_config_from_dict(raw: Dict[str, Any]) -> AnalysisConfig:
    # Unknown keys are ignored
    workers = raw.get("workers")
    duration = raw.get("duration_ms")
    cfg = AnalysisConfig(
        num_blocks=int(raw.get("num_blocks", 4)),
        frequency_hz=float(raw.get("frequency_hz", 1.0)),
        workers=int(workers) if workers is not None else None,
        notes=[int(n) for n in raw.get("notes", [])],
        duration_ms=float(duration) if duration is not None else None,
    )
    return _validate(cfg)


def load_config(path: str) -> Dict[str, Any]:
    with open(path, "r") as f:
        return json.load(f)


def load_analysis_config(path: str) -> AnalysisConfig:
    return analysis_config_from_dict(load_config(path))
