#!/usr/bin/env python3
"""
Print version, category ranges and sprite counts of a catalogue pair.

Usage:
    python scripts/catalogue_info.py <objects_file> <sprites_file>
"""

import sys
import argparse
from pathlib import Path

# Add parent directory to path for imports
script_dir = Path(__file__).parent
if str(script_dir.parent) not in sys.path:
    sys.path.insert(0, str(script_dir.parent))

from workflows import catalogue_info_process


def main():
    parser = argparse.ArgumentParser(
        description="Print catalogue and sprite container information"
    )
    parser.add_argument("objects", help="Object definitions file")
    parser.add_argument("sprites", help="Sprite container file")

    args = parser.parse_args()

    success = catalogue_info_process(
        Path(args.objects).resolve(), Path(args.sprites).resolve()
    )
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
