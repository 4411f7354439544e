#!/usr/bin/env python3
"""
Import OBD interchange file(s) into a catalogue pair.

Usage:
    python scripts/import_obd.py <objects_file> <sprites_file> thing.obd           # Append one
    python scripts/import_obd.py <objects_file> <sprites_file> obd_folder/         # Append all
    python scripts/import_obd.py <objects_file> <sprites_file> thing.obd --replace 120
"""

import sys
import argparse
from pathlib import Path

# Add parent directory to path for imports
script_dir = Path(__file__).parent
if str(script_dir.parent) not in sys.path:
    sys.path.insert(0, str(script_dir.parent))

from workflows import import_obd_process, load_settings


def main():
    parser = argparse.ArgumentParser(description="Import OBD file(s) into a catalogue")
    parser.add_argument("objects", help="Object definitions file")
    parser.add_argument("sprites", help="Sprite container file")
    parser.add_argument(
        "paths",
        nargs="+",
        help="OBD file(s) or folder containing OBD files",
    )
    parser.add_argument(
        "--replace",
        type=int,
        help="Overwrite this thing ID instead of appending",
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Output folder (default: overwrite the input files)",
    )
    parser.add_argument(
        "--settings",
        help="JSON settings file (compress_sprites)",
    )

    args = parser.parse_args()

    settings = load_settings(Path(args.settings) if args.settings else None)
    output_dir = Path(args.output).resolve() if args.output else None

    success = import_obd_process(
        Path(args.objects).resolve(),
        Path(args.sprites).resolve(),
        [Path(p).resolve() for p in args.paths],
        output_dir=output_dir,
        replace_id=args.replace,
        compress_sprites=settings["compress_sprites"],
    )
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
