#!/usr/bin/env python3
"""
Export thing(s) as OBD interchange files.

Usage:
    python scripts/export_obd.py <objects_file> <sprites_file> 100           # Single thing
    python scripts/export_obd.py <objects_file> <sprites_file> 100 105-110   # IDs and ranges
    python scripts/export_obd.py <objects_file> <sprites_file> 100 -o out/ --client-version 1098
"""

import sys
import argparse
from pathlib import Path

# Add parent directory to path for imports
script_dir = Path(__file__).parent
if str(script_dir.parent) not in sys.path:
    sys.path.insert(0, str(script_dir.parent))

from workflows import export_obd_process, load_settings, parse_id_list


def main():
    parser = argparse.ArgumentParser(description="Export thing(s) as OBD files")
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
        default="obd_export",
        help="Output folder (default: ./obd_export)",
    )
    parser.add_argument(
        "--client-version",
        type=int,
        help="Client version written into the OBD header",
    )
    parser.add_argument(
        "--settings",
        help="JSON settings file (client_version)",
    )

    args = parser.parse_args()

    settings = load_settings(Path(args.settings) if args.settings else None)
    client_version = args.client_version or settings["client_version"]

    try:
        thing_ids = parse_id_list(args.ids)
    except ValueError as e:
        print(f"[ERROR] {e}")
        sys.exit(1)

    success = export_obd_process(
        Path(args.objects).resolve(),
        Path(args.sprites).resolve(),
        thing_ids,
        Path(args.output).resolve(),
        client_version=client_version,
    )
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
