from __future__ import annotations

import json

import pytest

from midi2ticks.cli import main


def test_end_to_end(simple_midi_path, capsys):
    main([str(simple_midi_path), "--title", "Simple"])
    out = simple_midi_path.with_suffix(".json")
    doc = json.loads(out.read_text(encoding="utf-8"))
    # 48/96 Viertel bei 0.5 s/Viertel = 0.25 s -> Tick 5
    assert doc == {
        "maxtick": 5,
        "pitchint": 0,
        "title": "Simple",
        "data": {
            "0": [{"channel": 0, "note": 60, "velocity": 100}],
            "5": [{"channel": 0, "note": 64, "velocity": 100}],
        },
    }
    stdout = capsys.readouterr().out
    assert "[cli] Done." in stdout
    assert "maxtick=5" in stdout


def test_explicit_out_and_compact(simple_midi_path, tmp_path):
    out = tmp_path / "custom.json"
    main([str(simple_midi_path), "-t", "T", "--out", str(out), "--compact"])
    text = out.read_text(encoding="utf-8")
    assert "\n" not in text
    assert json.loads(text)["title"] == "T"


def test_config_output_directory(simple_midi_path, tmp_path):
    out_dir = tmp_path / "json"
    out_dir.mkdir()
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text(f"output:\n  directory: '{out_dir.as_posix()}'\n  pretty: false\n", encoding="utf-8")
    main([str(simple_midi_path), "-t", "T", "--config", str(cfg)])
    text = (out_dir / "simple.json").read_text(encoding="utf-8")
    assert "\n" not in text
    assert json.loads(text)["maxtick"] == 5


def test_pretty_flag_overrides_config(simple_midi_path, tmp_path):
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("output:\n  pretty: false\n", encoding="utf-8")
    out = tmp_path / "pretty.json"
    main([str(simple_midi_path), "-t", "T", "--config", str(cfg), "--out", str(out), "--pretty"])
    text = out.read_text(encoding="utf-8")
    assert "\n" in text
    assert json.loads(text)["title"] == "T"


def test_non_string_output_directory_falls_back(simple_midi_path, tmp_path):
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("output:\n  directory: 5\n", encoding="utf-8")
    main([str(simple_midi_path), "-t", "T", "--config", str(cfg)])
    assert simple_midi_path.with_suffix(".json").exists()


def test_title_is_required(simple_midi_path):
    with pytest.raises(SystemExit) as exc:
        main([str(simple_midi_path)])
    assert exc.value.code == 2


def test_missing_input_exit_code(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / "nope.mid"), "-t", "x"])
    assert exc.value.code == 1
    assert "[cli] ERROR" in capsys.readouterr().err


def test_malformed_input_exit_code(tmp_path):
    bad = tmp_path / "bad.mid"
    bad.write_bytes(b"garbage")
    with pytest.raises(SystemExit) as exc:
        main([str(bad), "-t", "x"])
    assert exc.value.code == 2
    assert not (tmp_path / "bad.json").exists()


def test_unwritable_output_exit_code(simple_midi_path, tmp_path):
    with pytest.raises(SystemExit) as exc:
        main([str(simple_midi_path), "-t", "x", "--out", str(tmp_path / "no" / "dir" / "o.json")])
    assert exc.value.code == 3
