from pathlib import Path
from typing import Any, Dict, List, Optional

from data import (
    DEFAULT_CLIENT_VERSION,
    SEPARATOR_LINE_LENGTH,
    read_json_file,
)

DEFAULT_SETTINGS: Dict[str, Any] = {
    "client_version": DEFAULT_CLIENT_VERSION,
    "compress_sprites": None,
}


def load_settings(settings_path: Optional[Path]) -> Dict[str, Any]:
    """Merge an optional JSON settings file over the defaults."""
    settings = dict(DEFAULT_SETTINGS)
    if settings_path is None:
        return settings

    loaded = read_json_file(settings_path)
    if loaded is None:
        print(f"[WARNING] Could not read settings file, using defaults: {settings_path}")
        return settings

    for key, value in loaded.items():
        if key not in DEFAULT_SETTINGS:
            print(f"[WARNING] Ignoring unknown setting: {key}")
            continue
        settings[key] = value

    return settings


def print_banner(*lines: str) -> None:
    print("=" * SEPARATOR_LINE_LENGTH)
    for line in lines:
        print(f"[INFO] {line}")
    print("=" * SEPARATOR_LINE_LENGTH)
    print()


def print_summary(total: int, success_count: int, failed_items: List[str]) -> None:
    print()
    print("=" * SEPARATOR_LINE_LENGTH)
    print("[SUMMARY] PROCESSING SUMMARY")
    print("=" * SEPARATOR_LINE_LENGTH)
    print(f"[INFO] Total: {total}")
    print(f"[INFO] Successful: {success_count}")
    print(f"[INFO] Failed: {len(failed_items)}")

    if failed_items:
        print("\n[ERROR] Failed items:")
        for item in failed_items:
            print(f"   - {item}")
