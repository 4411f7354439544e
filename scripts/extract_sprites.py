#!/usr/bin/env python3
"""
Extract the sprites of thing(s) to PNG files.

Usage:
    python scripts/extract_sprites.py <objects_file> <sprites_file> 100            # Single thing
    python scripts/extract_sprites.py <objects_file> <sprites_file> 100-120 -o png/
    python scripts/extract_sprites.py <objects_file> <sprites_file> 100 --preview  # Also render groups
"""

import sys
import argparse
from pathlib import Path

# Add parent directory to path for imports
script_dir = Path(__file__).parent
if str(script_dir.parent) not in sys.path:
    sys.path.insert(0, str(script_dir.parent))

from workflows import extract_sprites_process, parse_id_list


def main():
    parser = argparse.ArgumentParser(description="Extract thing sprites to PNG")
    parser.add_argument("objects", help="Object definitions file")
    parser.add_argument("sprites", help="Sprite container file")
    parser.add_argument(
        "ids",
        nargs="+",
        help="Thing IDs or inclusive ranges (e.g. 100 or 100-120)",
    )
    parser.add_argument(
        "-o",
        "--output",
        default="sprites_export",
        help="Output folder (default: ./sprites_export)",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Also render the first frame of every frame group",
    )

    args = parser.parse_args()

    try:
        thing_ids = parse_id_list(args.ids)
    except ValueError as e:
        print(f"[ERROR] {e}")
        sys.exit(1)

    success = extract_sprites_process(
        Path(args.objects).resolve(),
        Path(args.sprites).resolve(),
        thing_ids,
        Path(args.output).resolve(),
        with_preview=args.preview,
    )
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
