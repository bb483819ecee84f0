from __future__ import annotations
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .errors import OutputWriteError
from .timeline import QuantizedSong, SongDocument, DEFAULT_PITCHINT

log = logging.getLogger(__name__)

# ---------- interne Helfer ----------

def _current_umask() -> int:
    old = os.umask(0)
    os.umask(old)
    return old

def _note_to_dict(n) -> Dict[str, int]:
    return {"channel": n.channel, "note": n.note, "velocity": n.velocity}

# ---------- öffentliche APIs ----------

def build_document(song: QuantizedSong, title: str, pitchint: int = DEFAULT_PITCHINT) -> SongDocument:
    """Bucket-Map, Titel und maxtick zu einem Dokument; Ticks aufsteigend sortiert."""
    data = {tick: list(song.data[tick]) for tick in sorted(song.data)}
    return SongDocument(maxtick=song.maxtick, title=title, data=data, pitchint=pitchint)

def document_to_dict(doc: SongDocument) -> Dict[str, Any]:
    return {
        "maxtick": doc.maxtick,
        "pitchint": doc.pitchint,
        "title": doc.title,
        "data": {str(tick): [_note_to_dict(n) for n in doc.data[tick]] for tick in sorted(doc.data)},
    }

def serialize_document(doc: SongDocument, pretty: bool = True) -> bytes:
    """
    pretty=True: eingerückt (Entwicklung), sonst kompakt (Release).
    Inhaltlich identisch.
    """
    obj = document_to_dict(doc)
    if pretty:
        text = json.dumps(obj, indent=2, ensure_ascii=False)
    else:
        text = json.dumps(obj, separators=(",", ":"), ensure_ascii=False)
    return text.encode("utf-8")

def default_output_path(in_path: Union[str, Path], out_dir: Optional[Union[str, Path]] = None) -> Path:
    in_path = Path(in_path)
    name = in_path.stem + ".json"
    if out_dir:
        return Path(out_dir).expanduser() / name
    return in_path.with_name(name)

def write_document(doc: SongDocument, out_path: Union[str, Path], pretty: bool = True) -> Path:
    """
    Schreibt atomar: erst temporäre Datei im Zielordner, dann os.replace.
    Bei Fehlern bleibt keine (Teil-)Datei zurück.
    """
    out_path = Path(out_path)
    payload = serialize_document(doc, pretty=pretty)
    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{out_path.name}.", suffix=".tmp",
                                        dir=str(out_path.parent))
        with os.fdopen(fd, "wb") as fh:
            # mkstemp legt 0600 an; Modus wie bei normalem open()
            os.chmod(tmp_name, 0o666 & ~_current_umask())
            fh.write(payload)
        os.replace(tmp_name, out_path)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise OutputWriteError(f"Cannot write output {out_path}: {e.strerror or e}") from e
    log.debug("wrote %d bytes to %s", len(payload), out_path)
    return out_path
