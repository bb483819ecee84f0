# src/midi2ticks/config.py
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Optional
import copy
import logging
import yaml

from .timeline import PipelineConfig, DEFAULT_TICKS_PER_SECOND, DEFAULT_TEMPO, DEFAULT_PITCHINT

log = logging.getLogger(__name__)

# Paket-Root: .../src/midi2ticks
PKG_ROOT = Path(__file__).resolve().parent
DEFAULT_CFG_PATH = PKG_ROOT / "config.default.yaml"
USER_CFG_PATH = Path.home() / ".config" / "midi2ticks" / "config.yaml"

def _safe_load(path: Path) -> Dict[str, Any]:
    try:
        if path.exists():
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
            return data if isinstance(data, dict) else {}
    except (OSError, yaml.YAMLError) as e:
        # lieber leer zurückgeben als den Lauf abzubrechen
        log.warning("ignoring config %s: %s", path, e)
    return {}

def _deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(a)
    for k, v in (b or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = copy.deepcopy(v)
    return out

def load_config(
    user_path: Optional[Path] = None,
    default_path: Optional[Path] = None,
) -> Dict[str, Any]:
    """
    Lädt die Konfiguration (Default + User-Overrides) und liefert ein gemergtes Dict.
    Top-level: 'ticks_per_second', 'default_tempo', 'pitchint', 'output'.
    """
    dpath = Path(default_path) if default_path else DEFAULT_CFG_PATH
    upath = Path(user_path) if user_path else USER_CFG_PATH

    defaults = _safe_load(dpath)
    user = _safe_load(upath)
    cfg = _deep_merge(defaults, user)

    # Minimal-Defaults sicherstellen
    cfg.setdefault("ticks_per_second", DEFAULT_TICKS_PER_SECOND)
    cfg.setdefault("default_tempo", DEFAULT_TEMPO)
    cfg.setdefault("pitchint", DEFAULT_PITCHINT)
    if not isinstance(cfg.get("output"), dict):
        cfg["output"] = {}
    cfg["output"].setdefault("pretty", True)
    directory = cfg["output"].get("directory")
    if directory is not None and not isinstance(directory, str):
        log.warning("ignoring output.directory=%r (expected a path string)", directory)
        directory = None
    cfg["output"]["directory"] = directory or None

    return cfg

def _int_or(value: Any, fallback: int) -> int:
    try:
        v = int(value)
    except (TypeError, ValueError):
        return fallback
    return v if v > 0 else fallback

def pipeline_config(cfg: Dict[str, Any]) -> PipelineConfig:
    try:
        pitchint = int(cfg.get("pitchint", DEFAULT_PITCHINT))
    except (TypeError, ValueError):
        pitchint = DEFAULT_PITCHINT
    return PipelineConfig(
        ticks_per_second=_int_or(cfg.get("ticks_per_second"), DEFAULT_TICKS_PER_SECOND),
        default_tempo=_int_or(cfg.get("default_tempo"), DEFAULT_TEMPO),
        pitchint=pitchint,
    )

def get_pretty(cfg: Dict[str, Any]) -> bool:
    """Bequemer Accessor."""
    return bool((cfg.get("output") or {}).get("pretty", True))
