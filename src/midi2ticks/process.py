from __future__ import annotations
import heapq
import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Sequence, Tuple, Union

from .read import read_midi
from .write import build_document
from .timeline import (
    MidiTracks, RawEvent, TimedEvent, NoteOn, TempoChange, Other,
    NoteEvent, QuantizedSong, SongDocument, PipelineConfig, DEFAULT_TEMPO,
    DEFAULT_TICKS_PER_SECOND,
)
from .util.time import ppq_to_seconds, seconds_to_tick

log = logging.getLogger(__name__)

END_OF_STREAM = "end_of_stream"

def merge_tracks(tracks: Sequence[Sequence[RawEvent]]) -> Iterator[RawEvent]:
    """
    Mischt K Tracks (deltas jeweils track-lokal) zu einem Strom.
    Gleiche absolute Position: kleinerer Track-Index zuerst.
    """
    # heap: (abs_pos, track_idx, event_idx) – pro Track höchstens ein Eintrag
    heap: List[Tuple[int, int, int]] = []
    for ti, tr in enumerate(tracks):
        if tr:
            heapq.heappush(heap, (tr[0].delta, ti, 0))

    last = 0
    while heap:
        pos, ti, ei = heapq.heappop(heap)
        ev = tracks[ti][ei]
        yield RawEvent(delta=pos - last, payload=ev.payload)
        last = pos
        nxt = ei + 1
        if nxt < len(tracks[ti]):
            heapq.heappush(heap, (pos + tracks[ti][nxt].delta, ti, nxt))

def convert_time_base(events: Iterable[RawEvent], ppq: int,
                      default_tempo: int = DEFAULT_TEMPO) -> Iterator[TimedEvent]:
    """PPQ-deltas -> Sekunden, mit dem Tempo, das *vor* dem Ereignis galt."""
    tempo = default_tempo
    for ev in events:
        yield TimedEvent(delta=ppq_to_seconds(ev.delta, tempo, ppq), payload=ev.payload)
        if isinstance(ev.payload, TempoChange):
            tempo = ev.payload.tempo

def cancel_tempo_events(events: Iterable[TimedEvent]) -> Iterator[TimedEvent]:
    pending = 0.0
    for ev in events:
        if isinstance(ev.payload, TempoChange):
            pending += ev.delta
            continue
        if pending:
            yield TimedEvent(delta=pending + ev.delta, payload=ev.payload)
            pending = 0.0
        else:
            yield ev
    # Tempo-Event am Ende: Zeit zählt, Payload nicht
    if pending:
        yield TimedEvent(delta=pending, payload=Other(END_OF_STREAM))

def quantize(events: Iterable[TimedEvent],
             ticks_per_second: int = DEFAULT_TICKS_PER_SECOND) -> QuantizedSong:
    time = 0.0
    data: Dict[int, List[NoteEvent]] = {}
    for ev in events:
        if ev.delta != 0.0:
            time += ev.delta
        tick = seconds_to_tick(time, ticks_per_second)
        p = ev.payload
        if isinstance(p, NoteOn):
            data.setdefault(tick, []).append(
                NoteEvent(channel=p.channel, note=p.key, velocity=p.velocity)
            )
    return QuantizedSong(maxtick=seconds_to_tick(time, ticks_per_second), data=data)

def run_pipeline(midi: MidiTracks, cfg: PipelineConfig = PipelineConfig()) -> QuantizedSong:
    merged = merge_tracks(midi.tracks)
    timed = convert_time_base(merged, midi.ppq, cfg.default_tempo)
    song = quantize(cancel_tempo_events(timed), cfg.ticks_per_second)
    log.debug("quantized: maxtick=%d buckets=%d notes=%d",
              song.maxtick, len(song.data), song.note_count)
    return song

def convert_file(in_path: Union[str, Path], title: str,
                 cfg: PipelineConfig = PipelineConfig()) -> SongDocument:
    midi = read_midi(in_path)
    return build_document(run_pipeline(midi, cfg), title, pitchint=cfg.pitchint)
