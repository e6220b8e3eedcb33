from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import mido

from .timebase import ticks_to_ms

DEFAULT_TEMPO = 500_000  # microseconds per beat, i.e. 120 BPM


@dataclass
class MidiOnsets:
    """Note onsets read from a MIDI chart.

    ``duration_ms`` runs to the last message of the file (note-offs and the
    end-of-track marker included), not just to the last onset.
    """

    onsets_ms: List[float]
    duration_ms: float
    ticks_per_beat: int


def _iter_timed_messages(mf: mido.MidiFile) -> Iterable[Tuple[float, mido.Message]]:
    """Yield (absolute ms, message) over all tracks, following tempo changes."""
    ppq = mf.ticks_per_beat
    tempo = DEFAULT_TEMPO
    now_ms = 0.0
    for msg in mido.merge_tracks(mf.tracks):
        delta = int(getattr(msg, "time", 0))
        if delta:
            now_ms += ticks_to_ms(delta, ppq, mido.tempo2bpm(tempo))
        if msg.type == "set_tempo":
            tempo = msg.tempo
        yield now_ms, msg


def load_midi_onsets(path: Path | str, notes: Optional[Iterable[int]] = None) -> MidiOnsets:
    """Read note-on times (ms) from a Standard MIDI File.

    Note-ons with velocity 0 are note-offs and are skipped. ``notes``
    restricts the result to the given note numbers (e.g. one drum lane).
    """
    mf = mido.MidiFile(str(path))
    wanted = set(notes) if notes else None

    onsets: List[float] = []
    end_ms = 0.0
    for at_ms, msg in _iter_timed_messages(mf):
        end_ms = at_ms
        if msg.type != "note_on" or msg.velocity <= 0:
            continue
        if wanted is not None and msg.note not in wanted:
            continue
        onsets.append(at_ms)

    # merge_tracks emits in time order already
    return MidiOnsets(onsets_ms=onsets, duration_ms=end_ms, ticks_per_beat=mf.ticks_per_beat)
