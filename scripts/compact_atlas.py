#!/usr/bin/env python3
"""
Remove unreferenced and blank sprites and renumber the rest.

Usage:
    python scripts/compact_atlas.py <objects_file> <sprites_file>             # Overwrite inputs
    python scripts/compact_atlas.py <objects_file> <sprites_file> -o out/     # Write to folder
    python scripts/compact_atlas.py <objects_file> <sprites_file> --settings settings.json
"""

import sys
import argparse
from pathlib import Path

# Add parent directory to path for imports
script_dir = Path(__file__).parent
if str(script_dir.parent) not in sys.path:
    sys.path.insert(0, str(script_dir.parent))

from workflows import compact_atlas_process, load_settings


def main():
    parser = argparse.ArgumentParser(description="Compact a sprite atlas")
    parser.add_argument("objects", help="Object definitions file")
    parser.add_argument("sprites", help="Sprite container file")
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

    success = compact_atlas_process(
        Path(args.objects).resolve(),
        Path(args.sprites).resolve(),
        output_dir=output_dir,
        compress_sprites=settings["compress_sprites"],
    )
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
