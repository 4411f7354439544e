#!/usr/bin/env python3
"""
Tests for the run-length sprite codec and pixel order helpers.

Usage:
    pytest tests/test_sprite_codec.py
"""

import sys
from pathlib import Path

import numpy as np
import pytest

script_dir = Path(__file__).parent
if str(script_dir.parent) not in sys.path:
    sys.path.insert(0, str(script_dir.parent))

from data import FormatError, ValidationError, TRANSPARENCY_KEY, write_uint16
from asset_files import (
    argb_to_rgba,
    blank_bitmap,
    decode_sprite,
    encode_sprite,
    is_blank,
    rgba_to_argb,
    validate_bitmap,
)
from utils import dotted_bitmap, solid_bitmap


def test_blank_sprite_encodes_to_empty_stream():
    blob = encode_sprite(blank_bitmap())

    assert blob == TRANSPARENCY_KEY + b"\x00\x00"
    assert is_blank(decode_sprite(blob))


def test_single_pixel_run_layout():
    blob = encode_sprite(dotted_bitmap(5, (1, 2, 3, 255)))

    # skip 5, run 1, one RGBA pixel; trailing transparency is not stored
    assert blob[3:5] == write_uint16(8)
    assert blob[5:] == write_uint16(5) + write_uint16(1) + bytes((1, 2, 3, 255))


def test_round_trip_keeps_partial_alpha_and_gaps():
    bitmap = blank_bitmap()
    bitmap[0, :4] = (200, 10, 10, 128)
    bitmap[10, 3:20] = (0, 255, 0, 255)
    bitmap[31, 31] = (9, 9, 9, 1)

    decoded = decode_sprite(encode_sprite(bitmap))

    assert np.array_equal(decoded, bitmap)


def test_fully_opaque_sprite_is_one_run():
    bitmap = solid_bitmap(40, 50, 60)
    blob = encode_sprite(bitmap)

    assert len(blob) == 5 + 4 + 1024 * 4
    assert np.array_equal(decode_sprite(blob), bitmap)


def test_decode_at_offset():
    blob = encode_sprite(dotted_bitmap(100))
    payload = b"\xaa" * 7 + blob

    assert np.array_equal(decode_sprite(payload, 7), dotted_bitmap(100))


def test_run_overflow_raises():
    stream = write_uint16(1024) + write_uint16(1) + b"\x01\x02\x03\xff"
    blob = TRANSPARENCY_KEY + write_uint16(len(stream)) + stream

    with pytest.raises(FormatError):
        decode_sprite(blob)


def test_truncated_blob_raises():
    blob = TRANSPARENCY_KEY + write_uint16(20) + b"\x00\x00"

    with pytest.raises(FormatError):
        decode_sprite(blob)


def test_truncated_run_raises():
    stream = write_uint16(0) + write_uint16(3) + b"\x01\x02\x03\xff"
    blob = TRANSPARENCY_KEY + write_uint16(len(stream)) + stream

    with pytest.raises(FormatError):
        decode_sprite(blob)


def test_validate_bitmap_shapes():
    flat = np.zeros(4096, dtype=np.uint8)
    assert validate_bitmap(flat).shape == (32, 32, 4)

    with pytest.raises(ValidationError):
        validate_bitmap(np.zeros((16, 16, 4), dtype=np.uint8))


def test_argb_conversion():
    bitmap = solid_bitmap(1, 2, 3, 4)
    argb = rgba_to_argb(bitmap)

    assert argb[:4] == bytes((4, 1, 2, 3))
    assert np.array_equal(argb_to_rgba(argb), bitmap)

    with pytest.raises(FormatError):
        argb_to_rgba(b"\x00" * 100)
