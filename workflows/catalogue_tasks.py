from pathlib import Path
from typing import Optional

from data import CATEGORY_ORDER, AssetError
from asset_files import category_range
from editor import EditSession
from .utils import print_banner


def catalogue_info_process(objects_path: Path, sprites_path: Path) -> bool:
    """Print version, category ranges and sprite counts of a catalogue pair.

    Returns:
        True if both containers parsed, False otherwise
    """
    print_banner(f"Catalogue: {objects_path}", f"Sprites: {sprites_path}")

    try:
        session = EditSession.load(objects_path, sprites_path)
    except (AssetError, OSError) as e:
        print(f"[ERROR] Failed to load: {e}")
        return False

    object_data = session.object_data
    sprite_data = session.sprite_data
    print(f"[INFO] Catalogue version: {object_data.version}")
    for category in CATEGORY_ORDER:
        start, end = category_range(object_data, category)
        count = max(0, end - start + 1)
        print(f"[INFO] {category:<9} {count:>6} thing(s)  IDs {start}-{end}")

    print(f"[INFO] Sprite version: {sprite_data.version}")
    print(f"[INFO] Sprites: {sprite_data.sprite_count} ({len(sprite_data.addresses)} non-empty)")
    if sprite_data.compressed:
        print("[INFO] Sprite container is gzip compressed")
    return True


def compact_atlas_process(
    objects_path: Path,
    sprites_path: Path,
    output_dir: Optional[Path] = None,
    compress_sprites: Optional[bool] = None,
) -> bool:
    """Compact the sprite atlas of a catalogue pair and write both containers.

    Args:
        objects_path: Catalogue file
        sprites_path: Sprite container file
        output_dir: Output folder; defaults to overwriting the inputs
        compress_sprites: Force gzip on or off; None keeps the source layout

    Returns:
        True if successful, False otherwise
    """
    print_banner(f"Catalogue: {objects_path}", f"Sprites: {sprites_path}", "Operation: Compact atlas")

    try:
        session = EditSession.load(objects_path, sprites_path)

        print("[START] Compacting sprite atlas...")
        result = session.compact_atlas()
        if result.removed_count == 0:
            return True

        if output_dir is None:
            out_objects, out_sprites = objects_path, sprites_path
        else:
            out_objects = output_dir / objects_path.name
            out_sprites = output_dir / sprites_path.name

        session.save(out_objects, out_sprites, compress_sprites=compress_sprites)
        print(f"\n[OK] Catalogue written to: {out_objects}")
        print(f"[OK] Sprites written to: {out_sprites}")
        return True

    except Exception as e:
        print(f"[ERROR] Error during processing: {str(e)}")
        return False
