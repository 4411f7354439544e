from pathlib import Path
from typing import List

from data import string_value_to_int
from editor import EditSession
from external_files import compose_frame, export_thing_sprites
from .utils import print_banner, print_summary


def extract_sprites_process(
    objects_path: Path,
    sprites_path: Path,
    thing_ids: List[int],
    output_dir: Path,
    with_preview: bool = False,
) -> bool:
    """Write the sprites of each thing as PNG files into ``output_dir``.

    With ``with_preview`` the first frame of every group is also rendered
    as ``{thing_id}_group{index}.png``.

    Returns:
        True if every thing was extracted, False otherwise
    """
    print_banner(f"Catalogue: {objects_path}", f"Output: {output_dir}", "Operation: Extract sprites")

    try:
        session = EditSession.load(objects_path, sprites_path)
    except Exception as e:
        print(f"[ERROR] Failed to load: {str(e)}")
        return False

    output_dir.mkdir(parents=True, exist_ok=True)
    failed_items = []
    for thing_id in thing_ids:
        try:
            thing = session.get_thing(thing_id)
            written = export_thing_sprites(thing, session.get_sprite, output_dir)

            if with_preview:
                for index, group in enumerate(thing.frame_groups):
                    preview = compose_frame(group, session.get_sprite)
                    preview_path = output_dir / f"{thing_id}_group{index}.png"
                    preview.save(preview_path, "PNG")
                    written.append(preview_path)

            print(f"[OK] Thing {thing_id}: {len(written)} image(s)")
        except Exception as e:
            print(f"[ERROR] Thing {thing_id}: {str(e)}")
            failed_items.append(str(thing_id))

    print_summary(len(thing_ids), len(thing_ids) - len(failed_items), failed_items)
    return not failed_items


def parse_id_list(values: List[str]) -> List[int]:
    """Parse IDs and inclusive ranges such as ``100`` or ``100-120``."""
    ids: List[int] = []
    for value in values:
        if "-" in value:
            start_text, end_text = value.split("-", 1)
            start, end = string_value_to_int(start_text), string_value_to_int(end_text)
            ids.extend(range(start, end + 1))
        else:
            ids.append(string_value_to_int(value))
    return ids
