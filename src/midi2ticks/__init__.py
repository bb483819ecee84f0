from .errors import ConversionError, InputNotFoundError, MalformedMidiError, OutputWriteError
from .process import (
    merge_tracks, convert_time_base, cancel_tempo_events, quantize, run_pipeline, convert_file,
)
from .read import read_midi, tracks_from_midifile
from .timeline import (
    NoteOn, TempoChange, Other, RawEvent, TimedEvent, MidiTracks,
    NoteEvent, QuantizedSong, SongDocument, PipelineConfig,
)
from .write import build_document, document_to_dict, serialize_document, write_document

__version__ = "0.1.0"
