"""Common builders for synthetic catalogue and sprite containers."""

from typing import Dict, Optional, Sequence

import numpy as np

from data import THING_ID_BASE, SPRITE_SIZE
from asset_files import (
    ContainerHeader,
    FileType,
    FrameGroup,
    ObjectData,
    SpriteData,
    Thing,
    ThingFlags,
    assemble_object_data,
    assemble_sprite_data,
    blank_bitmap,
)

LEGACY_OBJECT_SIGNATURE_1098 = 0x000042A3
LEGACY_SPRITE_SIGNATURE_1098 = 0x57BBD603


def solid_bitmap(red: int, green: int = 0, blue: int = 0, alpha: int = 255) -> np.ndarray:
    bitmap = np.empty((SPRITE_SIZE, SPRITE_SIZE, 4), dtype=np.uint8)
    bitmap[...] = (red, green, blue, alpha)
    return bitmap


def dotted_bitmap(index: int, color=(10, 20, 30, 255)) -> np.ndarray:
    """Transparent bitmap with one opaque pixel at a flat pixel index."""
    bitmap = blank_bitmap()
    bitmap.reshape(-1, 4)[index] = color
    return bitmap


def animated_group(sprites: Sequence[int]) -> FrameGroup:
    """1x1 group with one frame per sprite ID."""
    sprites = list(sprites) or [0]
    return FrameGroup(animation_length=len(sprites), sprites=sprites)


def build_object_data(
    version: int = 1098,
    items: Sequence[Sequence[int]] = ((1,),),
    outfits: Sequence[Sequence[int]] = (),
    effects: Sequence[Sequence[int]] = (),
    distances: Sequence[Sequence[int]] = (),
    wrapped: bool = True,
) -> ObjectData:
    """
    Build an in-memory catalogue. Each entry is the sprite list of one
    thing with a single 1x1 group.
    """
    object_data = ObjectData(version=version)
    if wrapped:
        object_data.header = ContainerHeader(
            file_type=FileType.OBJECT_DEFS, content_version=version
        )
    else:
        object_data.header = ContainerHeader(
            file_type=FileType.OBJECT_DEFS,
            content_version=version,
            wrapped=False,
            signature=LEGACY_OBJECT_SIGNATURE_1098,
        )

    object_data.item_count = THING_ID_BASE - 1 + len(items)
    object_data.outfit_count = len(outfits)
    object_data.effect_count = len(effects)
    object_data.distance_count = len(distances)

    thing_id = THING_ID_BASE
    for category, entries in (
        ("item", items),
        ("outfit", outfits),
        ("effect", effects),
        ("distance", distances),
    ):
        for sprites in entries:
            object_data.things[thing_id] = Thing(
                id=thing_id,
                category=category,
                flags=ThingFlags(),
                frame_groups=[animated_group(sprites)],
            )
            thing_id += 1

    return object_data


def build_catalogue_bytes(**kwargs) -> bytes:
    return assemble_object_data(build_object_data(**kwargs))


def build_sprite_data(
    bitmaps: Sequence[Optional[np.ndarray]],
    version: int = 1098,
    wrapped: bool = True,
) -> SpriteData:
    if wrapped:
        header = ContainerHeader(file_type=FileType.SPRITE_DATA, content_version=version)
    else:
        header = ContainerHeader(
            file_type=FileType.SPRITE_DATA,
            content_version=version,
            wrapped=False,
            signature=LEGACY_SPRITE_SIGNATURE_1098,
        )
    return SpriteData(version=version, sprite_count=len(bitmaps), header=header)


def build_sprite_bytes(
    bitmaps: Sequence[Optional[np.ndarray]],
    version: int = 1098,
    wrapped: bool = True,
) -> bytes:
    """
    Encode a sprite container; ``None`` entries are stored as empty slots.
    """
    sprite_data = build_sprite_data(bitmaps, version, wrapped)
    overrides: Dict[int, np.ndarray] = {
        sprite_id: bitmap
        for sprite_id, bitmap in enumerate(bitmaps, start=1)
        if bitmap is not None
    }
    return assemble_sprite_data(sprite_data, overrides)
