#!/usr/bin/env python3
"""
Tests for catalogue and sprite container parsing and assembly.

Usage:
    pytest tests/test_containers.py
"""

import sys
from pathlib import Path

import numpy as np
import pytest

script_dir = Path(__file__).parent
if str(script_dir.parent) not in sys.path:
    sys.path.insert(0, str(script_dir.parent))

from data import (
    CompressionError,
    FormatError,
    UnsupportedVersionError,
    write_uint16,
    write_uint32,
)
from asset_files import (
    Attr,
    ContainerHeader,
    FileType,
    FrameDuration,
    FrameGroup,
    Light,
    WrapperFormat,
    assemble_object_data,
    assemble_sprite_data,
    category_range,
    compress_buffer,
    decode_sprite,
    derive_feature_flags,
    display_id,
    load_object_data,
    parse_object_data,
    parse_sprite_data,
    save_object_data,
    save_sprite_data,
)
from asset_files.constants import GZIP_MAGIC
from utils import (
    build_catalogue_bytes,
    build_object_data,
    build_sprite_bytes,
    dotted_bitmap,
    solid_bitmap,
)


def _sample_catalogue(**kwargs) -> bytes:
    return build_catalogue_bytes(
        items=[[1], [2, 3]],
        outfits=[[4]],
        effects=[[5]],
        distances=[[0]],
        **kwargs,
    )


def test_parse_counts_and_categories():
    object_data = parse_object_data(_sample_catalogue())

    assert object_data.version == 1098
    assert object_data.item_count == 101
    assert object_data.total_count == 104
    assert [object_data.things[i].category for i in range(100, 105)] == [
        "item", "item", "outfit", "effect", "distance",
    ]
    assert object_data.things[101].frame_groups[0].sprites == [2, 3]
    assert object_data.things[101].frame_groups[0].durations == [
        FrameDuration(100, 100), FrameDuration(100, 100),
    ]


def test_category_ranges_and_display_ids():
    object_data = parse_object_data(_sample_catalogue())

    assert category_range(object_data, "item") == (100, 101)
    assert category_range(object_data, "outfit") == (102, 102)
    assert category_range(object_data, "distance") == (104, 104)
    assert display_id(object_data, 101) == 101
    assert display_id(object_data, 103) == 1


def test_empty_category_range():
    object_data = build_object_data(items=[[1]])

    start, end = category_range(object_data, "effect")
    assert end == start - 1


def test_unmodified_catalogue_is_byte_identical():
    original = _sample_catalogue()

    assert assemble_object_data(parse_object_data(original)) == original


def test_stale_feature_flags_are_patched():
    original = bytearray(_sample_catalogue())
    original[WrapperFormat.FLAGS_OFFSET] = 0

    output = assemble_object_data(parse_object_data(bytes(original)))

    assert output[WrapperFormat.FLAGS_OFFSET] == derive_feature_flags(1098)
    assert output[: WrapperFormat.FLAGS_OFFSET] == original[: WrapperFormat.FLAGS_OFFSET]
    assert output[WrapperFormat.FLAGS_OFFSET + 1 :] == original[WrapperFormat.FLAGS_OFFSET + 1 :]


def test_dirty_thing_is_rewritten_and_others_copied():
    object_data = parse_object_data(_sample_catalogue())
    untouched = object_data.things[103].raw_bytes
    object_data.things[100].flags.set(Attr.LIGHT, Light(2, 180))
    object_data.things[100].invalidate_raw()

    reparsed = parse_object_data(assemble_object_data(object_data, {100}))

    assert reparsed.things[100].flags.get(Attr.LIGHT) == Light(2, 180)
    assert reparsed.things[103].raw_bytes == untouched


def test_outfit_frame_groups_round_trip():
    object_data = build_object_data(items=[[1]], outfits=[[2]])
    outfit = object_data.things[101]
    outfit.frame_groups = [
        FrameGroup(group_type=0, width=2, height=2, exact_size=64, sprites=[1, 2, 3, 4]),
        FrameGroup(
            group_type=1,
            animation_length=2,
            loop_count=3,
            start_frame=1,
            durations=[FrameDuration(50, 80), FrameDuration(60, 90)],
            sprites=[5, 6],
        ),
    ]

    reparsed = parse_object_data(assemble_object_data(object_data))
    groups = reparsed.things[101].frame_groups

    assert len(groups) == 2
    assert groups[0].exact_size == 64
    assert groups[0].sprites == [1, 2, 3, 4]
    assert groups[1].group_type == 1
    assert groups[1].loop_count == 3
    assert groups[1].durations == [FrameDuration(50, 80), FrameDuration(60, 90)]


def test_missing_thing_gets_blank_record():
    object_data = build_object_data(items=[[1], [2]], outfits=[[3]])
    del object_data.things[101]
    del object_data.things[102]

    reparsed = parse_object_data(assemble_object_data(object_data))

    assert reparsed.things[101].sprite_ids() == [0]
    assert len(reparsed.things[101].flags) == 0
    assert reparsed.things[102].category == "outfit"
    assert reparsed.things[102].sprite_ids() == [0]


def test_old_version_without_pattern_z():
    original = build_catalogue_bytes(version=740, items=[[1], [2]])
    object_data = parse_object_data(original)

    assert object_data.version == 740
    assert object_data.things[101].sprite_ids() == [2]
    assert assemble_object_data(object_data, {100}) == original


def test_legacy_catalogue():
    original = _sample_catalogue(wrapped=False)
    object_data = parse_object_data(original)

    assert not object_data.header.wrapped
    assert object_data.version == 1098
    assert assemble_object_data(object_data) == original
    # A rebuild keeps the legacy signature
    rebuilt = assemble_object_data(object_data, {100})
    assert rebuilt[:4] == original[:4]
    assert rebuilt == original


def test_gzip_catalogue():
    plain = _sample_catalogue()
    object_data = parse_object_data(compress_buffer(plain))

    assert object_data.compressed
    assert len(object_data.things) == 5

    saved = save_object_data(object_data, compress=True)
    assert saved[:2] == GZIP_MAGIC
    assert parse_object_data(saved).things[101].sprite_ids() == [2, 3]


def test_corrupt_gzip_raises_compression_error():
    with pytest.raises(CompressionError):
        parse_object_data(GZIP_MAGIC + b"not really gzip")


def test_wrong_file_type_raises():
    sprites = build_sprite_bytes([solid_bitmap(1)])

    with pytest.raises(FormatError, match="Expected object definitions"):
        parse_object_data(sprites)


def test_unknown_signature_raises():
    with pytest.raises(FormatError, match="Unknown object definitions file format"):
        parse_object_data(b"\x01\x02\x03\x04" + bytes(8))


def test_too_old_version_raises():
    header = ContainerHeader(file_type=FileType.OBJECT_DEFS, content_version=700)
    data = header.to_bytes() + write_uint16(99) + bytes(6)

    with pytest.raises(UnsupportedVersionError):
        parse_object_data(data)


def test_truncated_thing_reports_id():
    original = _sample_catalogue()

    with pytest.raises(FormatError, match="Thing 104"):
        parse_object_data(original[:-3])


def test_load_from_path(tmp_path):
    path = tmp_path / "things.dat"
    path.write_bytes(_sample_catalogue())

    assert load_object_data(path).total_count == 104


def test_sprite_container_parse_and_decode():
    red = solid_bitmap(255)
    dot = dotted_bitmap(33)
    sprite_data = parse_sprite_data(build_sprite_bytes([red, None, dot]))

    assert sprite_data.sprite_count == 3
    assert sorted(sprite_data.addresses) == [1, 3]
    assert np.array_equal(decode_sprite(sprite_data.buffer, sprite_data.addresses[1]), red)
    assert np.array_equal(decode_sprite(sprite_data.buffer, sprite_data.addresses[3]), dot)


def test_unmodified_sprites_are_byte_identical():
    original = build_sprite_bytes([solid_bitmap(1), None, dotted_bitmap(2)])

    assert assemble_sprite_data(parse_sprite_data(original)) == original


def test_sprite_override_rebuild():
    original = build_sprite_bytes([solid_bitmap(1), solid_bitmap(2), None])
    sprite_data = parse_sprite_data(original)
    replacement = dotted_bitmap(500)

    rebuilt = parse_sprite_data(assemble_sprite_data(sprite_data, {2: replacement}))

    assert rebuilt.sprite_count == 3
    assert np.array_equal(decode_sprite(rebuilt.buffer, rebuilt.addresses[1]), solid_bitmap(1))
    assert np.array_equal(decode_sprite(rebuilt.buffer, rebuilt.addresses[2]), replacement)
    assert 3 not in rebuilt.addresses


def test_short_sprite_count_version():
    original = build_sprite_bytes([solid_bitmap(3)], version=760)
    sprite_data = parse_sprite_data(original)

    assert sprite_data.sprite_count == 1
    assert original[WrapperFormat.HEADER_LEN : WrapperFormat.HEADER_LEN + 2] == write_uint16(1)


def test_legacy_sprite_container():
    original = build_sprite_bytes([solid_bitmap(5), None], wrapped=False)
    sprite_data = parse_sprite_data(original)

    assert not sprite_data.header.wrapped
    assert np.array_equal(decode_sprite(sprite_data.buffer, sprite_data.addresses[1]), solid_bitmap(5))
    assert assemble_sprite_data(sprite_data, dirty_ids={1}) == original


def test_sprite_address_out_of_range_raises():
    header = ContainerHeader(file_type=FileType.SPRITE_DATA, content_version=1098)
    data = header.to_bytes() + write_uint32(1) + write_uint32(0xFFFF)

    with pytest.raises(FormatError):
        parse_sprite_data(data)


def test_gzip_sprites_round_trip():
    original = build_sprite_bytes([solid_bitmap(7)])
    sprite_data = parse_sprite_data(compress_buffer(original))

    assert sprite_data.compressed
    assert save_sprite_data(sprite_data) == original


def test_sprite_address_inside_table_raises():
    header = ContainerHeader(file_type=FileType.SPRITE_DATA, content_version=1098)
    # Sprite 1 points at the second address slot
    address = WrapperFormat.HEADER_LEN + 4 + 4
    data = header.to_bytes() + write_uint32(2) + write_uint32(address) + write_uint32(0) + bytes(5)

    with pytest.raises(FormatError, match="outside the sprite data"):
        parse_sprite_data(data)


def test_changed_counters_force_rebuild():
    object_data = parse_object_data(_sample_catalogue())
    del object_data.things[104]
    object_data.distance_count -= 1

    assert object_data.counts_changed
    reparsed = parse_object_data(assemble_object_data(object_data))

    assert reparsed.total_count == 103
    assert reparsed.distance_count == 0
    assert not reparsed.counts_changed
