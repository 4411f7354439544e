"""
Interchange codec: one thing plus the pixels of every sprite it references.

Layout after decompression (version 3):
    u16 version tag (300), u16 client version, u8 category,
    u32 offset of the frame group section,
    flag tag stream terminated by 0xFF,
    [outfits] u8 group count, then per group:
        [outfits] u8 group type,
        frame group header,
        per sprite slot: u32 sprite ID, u32 pixel length, ARGB pixels.

Version 2 has no group count, no group type and fixed 4096-byte pixel
records without a length. Version 1 is detected and rejected.
The whole buffer is LZMA compressed.
"""

import lzma
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

import numpy as np

from data import (
    DEBUG,
    DEFAULT_CLIENT_VERSION,
    OBD_COMPRESSION_PRESET,
    ByteReader,
    CompressionError,
    FormatError,
    UnsupportedVersionError,
    write_uint8,
    write_uint16,
    write_uint32,
    CATEGORY_CODES,
    CATEGORY_FROM_CODE,
)
from asset_files import (
    FrameGroup,
    FrameGroupLayout,
    Thing,
    ThingFlags,
    OBD_FLAG_LAYOUT,
    read_flags,
    write_flags,
    read_frame_group_header,
    write_frame_group_header,
    rgba_to_argb,
    argb_to_rgba,
)
from .constants import ObdFormat, SPRITE_PIXEL_SIZE


@dataclass
class ObdThing:
    category: str
    client_version: int
    flags: ThingFlags
    frame_groups: List[FrameGroup]
    # Source sprite ID -> RGBA bitmap; IDs refer to the exporting catalogue
    sprite_pixels: Dict[int, np.ndarray] = field(default_factory=dict)
    obd_version: int = ObdFormat.VERSION_3


def _group_layout(is_outfit: bool, obd_version: int) -> FrameGroupLayout:
    return FrameGroupLayout(
        has_group_type=is_outfit and obd_version == ObdFormat.VERSION_3,
        has_pattern_z=True,
        has_durations=True,
        signed_loop_count=True,
        signed_start_frame=False,
        default_exact_size=ObdFormat.EXACT_SIZE,
        normalize_pattern_z=True,
    )


def encode_obd(
    thing: Thing,
    pixels: Mapping[int, np.ndarray],
    client_version: int = DEFAULT_CLIENT_VERSION,
) -> bytes:
    """
    Encode a thing and its sprite pixels into a compressed version 3 file.

    Args:
        thing: The thing to export
        pixels: Sprite ID -> RGBA bitmap; IDs missing here export as blank
        client_version: Client version recorded in the header

    Returns:
        LZMA compressed .obd bytes
    """
    result = bytearray()
    result.extend(write_uint16(ObdFormat.VERSION_3))
    result.extend(write_uint16(client_version))
    result.extend(write_uint8(CATEGORY_CODES.get(thing.category, 1)))
    result.extend(write_uint32(0))

    result.extend(write_flags(thing.flags, OBD_FLAG_LAYOUT))
    result[ObdFormat.SPRITES_OFFSET_POS : ObdFormat.SPRITES_OFFSET_POS + 4] = write_uint32(
        len(result)
    )

    is_outfit = thing.category == "outfit"
    layout = _group_layout(is_outfit, ObdFormat.VERSION_3)
    group_count = len(thing.frame_groups)
    if is_outfit:
        result.extend(write_uint8(group_count))

    blank = bytes(SPRITE_PIXEL_SIZE)
    for index, group in enumerate(thing.frame_groups):
        group_type = 1 if group_count < 2 else index
        result.extend(write_frame_group_header(group, layout, group_type=group_type))

        for sprite_id in group.sprites:
            result.extend(write_uint32(sprite_id))
            bitmap = pixels.get(sprite_id) if sprite_id else None
            data = rgba_to_argb(bitmap) if bitmap is not None else blank
            result.extend(write_uint32(len(data)))
            result.extend(data)

    if DEBUG:
        print(f"[DEBUG] Encoded interchange thing {thing.id}: {len(result)} bytes before compression")

    return lzma.compress(
        bytes(result), format=lzma.FORMAT_ALONE, preset=OBD_COMPRESSION_PRESET
    )


def decompress_obd(compressed: bytes) -> bytes:
    try:
        return lzma.decompress(compressed, format=lzma.FORMAT_AUTO)
    except lzma.LZMAError as e:
        raise CompressionError(
            f"Failed to decompress interchange file, not a valid .obd file: {e}",
            "obd",
        ) from e


def _read_version(reader: ByteReader) -> int:
    tag = reader.u16()
    if tag in (ObdFormat.VERSION_3, ObdFormat.VERSION_2):
        return tag
    if tag >= ObdFormat.VERSION_1_MIN_CLIENT:
        raise UnsupportedVersionError(
            f"This is an OBD version 1 file (client {tag}). Version 1 is not "
            "supported, re-export it as version 2 or 3."
        )
    raise FormatError(f"Unrecognised OBD header: 0x{tag:04x} ({tag}), not a valid .obd file")


def decode_obd(compressed: bytes) -> ObdThing:
    """
    Decode a compressed interchange file.

    Raises:
        CompressionError: if the buffer does not decompress.
        UnsupportedVersionError: for version 1 files.
        FormatError: for truncated data, unknown headers, categories or flags.
    """
    raw = decompress_obd(compressed)
    if len(raw) < 2:
        raise FormatError(f"OBD file too small: {len(raw)} bytes")

    reader = ByteReader(raw, context="obd file")
    # Version 1 files are reported as such even when truncated
    obd_version = _read_version(reader)
    if len(raw) < ObdFormat.MIN_LENGTH:
        raise FormatError(f"OBD file too small: {len(raw)} bytes")
    client_version = reader.u16()

    category_code = reader.u8()
    category = CATEGORY_FROM_CODE.get(category_code)
    if category is None:
        raise FormatError(f"Invalid OBD category byte: {category_code}")

    reader.u32()  # sprites offset, the groups follow the flags directly

    flags = read_flags(reader, OBD_FLAG_LAYOUT)

    is_outfit = category == "outfit"
    layout = _group_layout(is_outfit, obd_version)
    group_count = reader.u8() if layout.has_group_type else 1

    frame_groups = []
    sprite_pixels: Dict[int, np.ndarray] = {}
    for index in range(group_count):
        group = read_frame_group_header(reader, layout)
        group.group_type = index

        for _ in range(group.sprite_count):
            sprite_id = reader.u32()
            group.sprites.append(sprite_id)

            if obd_version == ObdFormat.VERSION_3:
                data = reader.bytes(reader.u32())
            else:
                data = reader.bytes(SPRITE_PIXEL_SIZE)

            if sprite_id == 0 or sprite_id in sprite_pixels:
                continue
            if len(data) != SPRITE_PIXEL_SIZE:
                raise FormatError(
                    f"Sprite {sprite_id} pixel record is {len(data)} bytes, "
                    f"expected {SPRITE_PIXEL_SIZE}"
                )
            sprite_pixels[sprite_id] = argb_to_rgba(data)

        frame_groups.append(group)

    if DEBUG:
        print(
            f"[DEBUG] Decoded OBD v{obd_version // 100}: {category}, client {client_version}, "
            f"{len(frame_groups)} group(s), {len(sprite_pixels)} sprite(s)"
        )

    return ObdThing(
        category=category,
        client_version=client_version,
        flags=flags,
        frame_groups=frame_groups,
        sprite_pixels=sprite_pixels,
        obd_version=obd_version,
    )


def thing_from_obd(obd_thing: ObdThing, thing_id: int = 0) -> Thing:
    """Build a detached Thing from a decoded file, keeping source sprite IDs."""
    return Thing(
        id=thing_id,
        category=obd_thing.category,
        flags=obd_thing.flags.copy(),
        frame_groups=[group.copy() for group in obd_thing.frame_groups],
    )


def pixels_for_thing(thing: Thing, sprite_lookup) -> Dict[int, np.ndarray]:
    """Collect the bitmaps a thing references through ``sprite_lookup(id)``."""
    pixels = {}
    for sprite_id in thing.sprite_ids():
        if sprite_id == 0 or sprite_id in pixels:
            continue
        bitmap: Optional[np.ndarray] = sprite_lookup(sprite_id)
        if bitmap is not None:
            pixels[sprite_id] = bitmap
    return pixels
