from __future__ import annotations
import argparse, logging, pathlib, sys
from . import process, write
from .config import load_config, pipeline_config, get_pretty
from .errors import ConversionError, InputNotFoundError
from .read import read_midi

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

def _init_logging(verbose: bool):
    if logging.getLogger().handlers:
        return
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)

def main(argv=None):
    p = argparse.ArgumentParser(prog="midi2ticks", description="MIDI -> tick-grid JSON converter")
    p.add_argument("midi_file", metavar="MIDI_FILE", help="Path to the MIDI file to convert")
    p.add_argument("-t", "--title", dest="title", required=True, help="Title stored in the converted JSON")
    p.add_argument("--out", dest="outfile", default=None, help="Output JSON file (default: <stem>.json)")
    p.add_argument("--config", dest="config", default=None, help="YAML config (defaults applied if omitted)")
    fmt = p.add_mutually_exclusive_group()
    fmt.add_argument("--pretty", dest="pretty", action="store_true", default=None, help="Indented JSON")
    fmt.add_argument("--compact", dest="pretty", action="store_false", help="Compact JSON")
    p.add_argument("-v", "--verbose", action="store_true", help="Log pipeline details")

    args = p.parse_args(argv)
    _init_logging(args.verbose)

    in_path = pathlib.Path(args.midi_file).expanduser().resolve()
    cfg = load_config(args.config)
    pcfg = pipeline_config(cfg)
    pretty = get_pretty(cfg) if args.pretty is None else args.pretty
    print(f"[cli] infile = {in_path}")

    if args.outfile:
        out_path = pathlib.Path(args.outfile).expanduser().resolve()
    else:
        out_path = write.default_output_path(in_path, cfg["output"].get("directory"))

    try:
        if not in_path.is_file():
            raise InputNotFoundError(f"Input not found: {in_path}")
        midi = read_midi(in_path)
        song = process.run_pipeline(midi, pcfg)
        doc = write.build_document(song, args.title, pitchint=pcfg.pitchint)
        write.write_document(doc, out_path, pretty=pretty)
    except ConversionError as e:
        print(f"[cli] ERROR: {e}", file=sys.stderr)
        sys.exit(e.exit_code)

    print(f"[cli] json      -> {out_path}")
    print(f"[cli] Done. tracks={len(midi.tracks)} notes={song.note_count} "
          f"maxtick={song.maxtick} ppq={midi.ppq}")

if __name__ == "__main__":
    main()
