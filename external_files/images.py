"""
PNG export and import for sprites and thing appearances.
"""

from pathlib import Path
from typing import Callable, List, Optional

import numpy as np
from PIL import Image

from data import SPRITE_SIZE, sanitize_file_name
from asset_files import Thing, FrameGroup, blank_bitmap, validate_bitmap, sprite_grid

SpriteLookup = Callable[[int], Optional[np.ndarray]]


def sprite_to_image(bitmap: np.ndarray) -> Image.Image:
    return Image.fromarray(validate_bitmap(bitmap))


def image_to_bitmap(img: Image.Image) -> np.ndarray:
    """Convert any image to a 32x32 RGBA bitmap, resizing with nearest neighbour."""
    if img.mode != "RGBA":
        img = img.convert("RGBA")
    if img.size != (SPRITE_SIZE, SPRITE_SIZE):
        img = img.resize((SPRITE_SIZE, SPRITE_SIZE), Image.NEAREST)
    return np.array(img, dtype=np.uint8)


def export_sprite_png(bitmap: np.ndarray, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    sprite_to_image(bitmap).save(output_path, "PNG")


def import_sprite_png(input_path: Path) -> np.ndarray:
    with Image.open(input_path) as img:
        return image_to_bitmap(img)


def export_thing_sprites(
    thing: Thing,
    sprite_lookup: SpriteLookup,
    output_dir: Path,
    prefix: Optional[str] = None,
) -> List[Path]:
    """
    Write every distinct non-blank sprite of a thing as its own PNG.

    A thing with a single sprite is written as ``{prefix}.png``, otherwise
    each file is ``{prefix}_spr{sprite_id}.png``.

    Returns:
        Paths written, in first-reference order
    """
    sprite_ids = []
    for sprite_id in thing.sprite_ids():
        if sprite_id != 0 and sprite_id not in sprite_ids:
            sprite_ids.append(sprite_id)

    prefix = sanitize_file_name(prefix) if prefix else str(thing.id)
    written = []
    for sprite_id in sprite_ids:
        bitmap = sprite_lookup(sprite_id)
        if bitmap is None:
            continue
        if len(sprite_ids) == 1:
            path = output_dir / f"{prefix}.png"
        else:
            path = output_dir / f"{prefix}_spr{sprite_id}.png"
        export_sprite_png(bitmap, path)
        written.append(path)

    return written


def compose_frame(
    group: FrameGroup,
    sprite_lookup: SpriteLookup,
    frame: int = 0,
    pattern_x: int = 0,
    pattern_y: int = 0,
    pattern_z: int = 0,
) -> Image.Image:
    """
    Render one frame of a group with all layers stacked.

    Tile (0, 0) is the bottom-right tile; further tiles extend up and left.
    """
    grid = sprite_grid(group)
    height_px = group.height * SPRITE_SIZE
    width_px = group.width * SPRITE_SIZE
    canvas = Image.new("RGBA", (width_px, height_px), (0, 0, 0, 0))

    for layer in range(group.layers):
        for tile_y in range(group.height):
            for tile_x in range(group.width):
                sprite_id = int(grid[frame, pattern_z, pattern_y, pattern_x, layer, tile_y, tile_x])
                bitmap = sprite_lookup(sprite_id) if sprite_id else None
                if bitmap is None:
                    bitmap = blank_bitmap()
                left = (group.width - 1 - tile_x) * SPRITE_SIZE
                top = (group.height - 1 - tile_y) * SPRITE_SIZE
                tile = sprite_to_image(bitmap)
                canvas.alpha_composite(tile, (left, top))

    return canvas
