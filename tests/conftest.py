from __future__ import annotations

import mido
import pytest

from midi2ticks import config


@pytest.fixture(autouse=True)
def _no_user_config(monkeypatch, tmp_path):
    # echte ~/.config-Dateien dürfen Tests nicht beeinflussen
    monkeypatch.setattr(config, "USER_CFG_PATH", tmp_path / "no-user-config.yaml")


def build_midi(tracks, ppq=96):
    """tracks: list of lists of mido messages (time = delta ticks)."""
    mid = mido.MidiFile(ticks_per_beat=ppq)
    for msgs in tracks:
        tr = mido.MidiTrack()
        tr.extend(msgs)
        mid.tracks.append(tr)
    return mid


@pytest.fixture
def simple_midi_path(tmp_path):
    """1 Track, PPQ=96, 120 BPM, zwei Noten im Abstand einer Achtel."""
    mid = build_midi([[
        mido.MetaMessage("set_tempo", tempo=500000, time=0),
        mido.Message("note_on", channel=0, note=60, velocity=100, time=0),
        mido.Message("note_on", channel=0, note=64, velocity=100, time=48),
    ]], ppq=96)
    path = tmp_path / "simple.mid"
    mid.save(str(path))
    return path
