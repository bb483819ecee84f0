from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Union

DEFAULT_TICKS_PER_SECOND = 20
DEFAULT_TEMPO = 250_000  # µs pro Viertel
DEFAULT_PITCHINT = 0

# --- Payloads (geschlossene Menge) ---

@dataclass(frozen=True)
class NoteOn:
    channel: int
    key: int
    velocity: int

@dataclass(frozen=True)
class TempoChange:
    tempo: int             # microseconds per quarter note

@dataclass(frozen=True)
class Other:
    kind: str              # mido message type, e.g. "note_off", "control_change"

Payload = Union[NoteOn, TempoChange, Other]

# --- Stufe 1: Rohereignisse aus der Datei (delta in PPQ-Ticks) ---

@dataclass(frozen=True)
class RawEvent:
    delta: int
    payload: Payload

@dataclass
class MidiTracks:
    ppq: int
    tracks: List[List[RawEvent]] = field(default_factory=list)

# --- Stufe 2: Ereignisse mit delta in Sekunden ---

@dataclass(frozen=True)
class TimedEvent:
    delta: float
    payload: Payload

# --- Ausgabe ---

@dataclass(frozen=True)
class NoteEvent:
    channel: int
    note: int
    velocity: int

@dataclass
class QuantizedSong:
    maxtick: int
    data: Dict[int, List[NoteEvent]] = field(default_factory=dict)

    @property
    def note_count(self) -> int:
        return sum(len(v) for v in self.data.values())

@dataclass
class SongDocument:
    maxtick: int
    title: str
    data: Dict[int, List[NoteEvent]] = field(default_factory=dict)
    pitchint: int = DEFAULT_PITCHINT

@dataclass(frozen=True)
class PipelineConfig:
    ticks_per_second: int = DEFAULT_TICKS_PER_SECOND
    default_tempo: int = DEFAULT_TEMPO
    pitchint: int = DEFAULT_PITCHINT
