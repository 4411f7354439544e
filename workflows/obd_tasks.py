from pathlib import Path
from typing import List, Optional

from data import DEFAULT_CLIENT_VERSION, validate_path_exists_and_is_dir
from editor import EditSession
from obd_files import OBD_EXTENSION, read_obd
from .utils import print_banner, print_summary


def export_obd_process(
    objects_path: Path,
    sprites_path: Path,
    thing_ids: List[int],
    output_dir: Path,
    client_version: int = DEFAULT_CLIENT_VERSION,
) -> bool:
    """Export things as interchange files named ``{thing_id}.obd``.

    Returns:
        True if every thing was exported, False otherwise
    """
    print_banner(
        f"Catalogue: {objects_path}",
        f"Things: {', '.join(str(t) for t in thing_ids)}",
        "Operation: Export OBD",
    )

    try:
        session = EditSession.load(objects_path, sprites_path)
    except Exception as e:
        print(f"[ERROR] Failed to load: {str(e)}")
        return False

    output_dir.mkdir(parents=True, exist_ok=True)
    failed_items = []
    for thing_id in thing_ids:
        try:
            obd_bytes = session.export_thing(thing_id, client_version)
            output_path = output_dir / f"{thing_id}{OBD_EXTENSION}"
            output_path.write_bytes(obd_bytes)
            print(f"[OK] Exported thing {thing_id} to: {output_path}")
        except Exception as e:
            print(f"[ERROR] Thing {thing_id}: {str(e)}")
            failed_items.append(str(thing_id))

    print_summary(len(thing_ids), len(thing_ids) - len(failed_items), failed_items)
    return not failed_items


def _collect_obd_files(paths: List[Path]) -> List[Path]:
    files = []
    for path in paths:
        if path.is_dir():
            if validate_path_exists_and_is_dir(path, "OBD folder"):
                files.extend(sorted(path.glob(f"*{OBD_EXTENSION}")))
        elif path.exists():
            files.append(path)
        else:
            print(f"[ERROR] Path does not exist: {path}")
    return files


def import_obd_process(
    objects_path: Path,
    sprites_path: Path,
    obd_paths: List[Path],
    output_dir: Optional[Path] = None,
    replace_id: Optional[int] = None,
    compress_sprites: Optional[bool] = None,
) -> bool:
    """Import interchange files into a catalogue pair and save it.

    With ``replace_id`` exactly one file is expected and it overwrites that
    thing; otherwise every file is appended to its own category.

    Returns:
        True if every file was imported, False otherwise
    """
    obd_files = _collect_obd_files(obd_paths)
    if not obd_files:
        print("[ERROR] No OBD files found")
        return False
    if replace_id is not None and len(obd_files) != 1:
        print("[ERROR] --replace needs exactly one OBD file")
        return False

    print_banner(f"Catalogue: {objects_path}", f"Found {len(obd_files)} OBD file(s)")

    try:
        session = EditSession.load(objects_path, sprites_path)
    except Exception as e:
        print(f"[ERROR] Failed to load: {str(e)}")
        return False

    failed_items = []
    for obd_path in obd_files:
        try:
            obd_thing = read_obd(obd_path)
            if replace_id is not None:
                session.replace_thing(
                    replace_id, obd_thing.flags, obd_thing.frame_groups, obd_thing.sprite_pixels
                )
                thing_id = replace_id
            else:
                thing_id = session.import_thing(
                    obd_thing.category,
                    obd_thing.flags,
                    obd_thing.frame_groups,
                    obd_thing.sprite_pixels,
                )
            print(
                f"[OK] {obd_path.name}: {obd_thing.category} {session.display_id(thing_id)} "
                f"(ID {thing_id}, {len(obd_thing.sprite_pixels)} sprite(s))"
            )
        except Exception as e:
            print(f"[ERROR] {obd_path.name}: {str(e)}")
            failed_items.append(obd_path.name)

    success_count = len(obd_files) - len(failed_items)
    if success_count:
        if output_dir is None:
            out_objects, out_sprites = objects_path, sprites_path
        else:
            out_objects = output_dir / objects_path.name
            out_sprites = output_dir / sprites_path.name
        try:
            session.save(out_objects, out_sprites, compress_sprites=compress_sprites)
        except Exception as e:
            print(f"[ERROR] Failed to save: {str(e)}")
            return False

    print_summary(len(obd_files), success_count, failed_items)
    return not failed_items
