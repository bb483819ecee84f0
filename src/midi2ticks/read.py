# src/midi2ticks/read.py
from __future__ import annotations
import logging
from pathlib import Path
from typing import Iterable, List, Union

import mido

from .errors import InputNotFoundError, MalformedMidiError
from .timeline import MidiTracks, RawEvent, NoteOn, TempoChange, Other, Payload

log = logging.getLogger(__name__)

def _payload_from_message(msg) -> Payload:
    if msg.type == "note_on" and msg.velocity > 0:
        return NoteOn(channel=msg.channel, key=msg.note, velocity=msg.velocity)
    if msg.type == "set_tempo":
        return TempoChange(tempo=msg.tempo)
    # note_on mit velocity 0 ist laut MIDI ein note_off
    if msg.type == "note_on":
        return Other("note_off")
    return Other(msg.type)

def events_from_track(track: Iterable) -> List[RawEvent]:
    return [RawEvent(delta=int(msg.time), payload=_payload_from_message(msg)) for msg in track]

def tracks_from_midifile(mid: mido.MidiFile) -> MidiTracks:
    """
    Überführt eine geladene mido.MidiFile in MidiTracks.
    SMPTE-Zeitbasis (Bit 15 gesetzt) wird nicht unterstützt.
    """
    ppq = int(mid.ticks_per_beat or 0)
    if ppq <= 0 or ppq & 0x8000:
        raise MalformedMidiError(f"Unsupported time division in header: {ppq}")
    tracks = [events_from_track(t) for t in mid.tracks]
    if not tracks:
        raise MalformedMidiError("MIDI file contains no tracks")
    log.debug("read %d track(s), ppq=%d, events=%s", len(tracks), ppq, [len(t) for t in tracks])
    return MidiTracks(ppq=ppq, tracks=tracks)

def read_midi(path: Union[str, Path]) -> MidiTracks:
    path = Path(path)
    try:
        fh = open(path, "rb")
    except OSError as e:
        raise InputNotFoundError(f"Cannot open input {path}: {e.strerror or e}") from e

    with fh:
        try:
            mid = mido.MidiFile(file=fh)
        except (OSError, EOFError, ValueError, KeyError, IndexError, TypeError) as e:
            raise MalformedMidiError(f"Not a valid MIDI file: {path} ({e})") from e
    return tracks_from_midifile(mid)
