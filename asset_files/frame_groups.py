"""
Frame group header codec shared by the catalogue and interchange formats.

Only the per-group metadata is handled here. Sprite references follow the
header in both formats but are stored differently (bare IDs in the
catalogue, ID plus pixel record in interchange files), so callers read and
write them.
"""

from dataclasses import dataclass
from typing import Optional

from data import ByteReader, write_uint8, write_uint32, write_int8, write_int32
from .constants import Versions
from .things import FrameDuration, FrameGroup

DEFAULT_FRAME_DURATION = 100


@dataclass(frozen=True)
class FrameGroupLayout:
    has_group_type: bool = False
    has_pattern_z: bool = True
    # Durations present for every animated group; otherwise never
    has_durations: bool = True
    signed_loop_count: bool = False
    signed_start_frame: bool = True
    default_exact_size: Optional[int] = None
    # Treat a stored pattern Z of 0 as 1
    normalize_pattern_z: bool = False


def _wrap_signed(value: int, bits: int) -> int:
    half = 1 << (bits - 1)
    return ((value + half) % (1 << bits)) - half


def catalogue_group_layout(version: int, is_outfit: bool) -> FrameGroupLayout:
    return FrameGroupLayout(
        has_group_type=is_outfit and version >= Versions.FRAME_GROUPS,
        has_pattern_z=version >= Versions.PATTERN_Z,
        has_durations=version >= Versions.FRAME_GROUPS,
    )


def read_frame_group_header(
    reader: ByteReader, layout: FrameGroupLayout, group_type: int = 0
) -> FrameGroup:
    """Read one group's metadata; ``sprites`` is left empty."""
    group = FrameGroup(group_type=group_type)
    if layout.has_group_type:
        group.group_type = reader.u8()

    group.width = reader.u8()
    group.height = reader.u8()
    if group.width > 1 or group.height > 1:
        group.exact_size = reader.u8()

    group.layers = reader.u8()
    group.pattern_x = reader.u8()
    group.pattern_y = reader.u8()
    if layout.has_pattern_z:
        group.pattern_z = reader.u8()
        if layout.normalize_pattern_z:
            group.pattern_z = group.pattern_z or 1
    group.animation_length = reader.u8()

    if group.animation_length > 1 and layout.has_durations:
        group.asynchronous = reader.u8()
        group.loop_count = reader.i32() if layout.signed_loop_count else reader.u32()
        group.start_frame = reader.i8() if layout.signed_start_frame else reader.u8()
        for _ in range(group.animation_length):
            minimum = reader.u32()
            maximum = reader.u32()
            group.durations.append(FrameDuration(minimum, maximum))

    return group


def write_frame_group_header(
    group: FrameGroup, layout: FrameGroupLayout, group_type: Optional[int] = None
) -> bytes:
    """Write one group's metadata. ``group_type`` overrides the stored type."""
    result = bytearray()
    if layout.has_group_type:
        result.extend(write_uint8(group.group_type if group_type is None else group_type))

    result.extend(write_uint8(group.width))
    result.extend(write_uint8(group.height))
    if group.width > 1 or group.height > 1:
        exact_size = group.exact_size
        if exact_size is None:
            exact_size = layout.default_exact_size or max(group.width, group.height)
        result.extend(write_uint8(exact_size))

    result.extend(write_uint8(group.layers))
    result.extend(write_uint8(group.pattern_x))
    result.extend(write_uint8(group.pattern_y))
    if layout.has_pattern_z:
        pattern_z = group.pattern_z
        if layout.normalize_pattern_z:
            pattern_z = pattern_z or 1
        result.extend(write_uint8(pattern_z))
    result.extend(write_uint8(group.animation_length))

    if group.animation_length > 1 and layout.has_durations:
        result.extend(write_uint8(group.asynchronous))
        if layout.signed_loop_count:
            result.extend(write_int32(_wrap_signed(group.loop_count, 32)))
        else:
            result.extend(write_uint32(group.loop_count & 0xFFFFFFFF))
        if layout.signed_start_frame:
            result.extend(write_int8(_wrap_signed(group.start_frame, 8)))
        else:
            result.extend(write_uint8(group.start_frame & 0xFF))
        for frame in range(group.animation_length):
            if frame < len(group.durations):
                duration = group.durations[frame]
            else:
                duration = FrameDuration(DEFAULT_FRAME_DURATION, DEFAULT_FRAME_DURATION)
            result.extend(write_uint32(duration.minimum))
            result.extend(write_uint32(duration.maximum))

    return bytes(result)
