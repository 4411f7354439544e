#!/usr/bin/env python3
"""
Tests for PNG export/import and frame composition.

Usage:
    pytest tests/test_images.py
"""

import sys
from pathlib import Path

import numpy as np
from PIL import Image

script_dir = Path(__file__).parent
if str(script_dir.parent) not in sys.path:
    sys.path.insert(0, str(script_dir.parent))

from asset_files import FrameGroup, Thing
from external_files import (
    compose_frame,
    export_sprite_png,
    export_thing_sprites,
    image_to_bitmap,
    import_sprite_png,
    sprite_to_image,
)
from utils import dotted_bitmap, solid_bitmap


def test_sprite_to_image():
    img = sprite_to_image(solid_bitmap(10, 20, 30))

    assert img.size == (32, 32)
    assert img.mode == "RGBA"
    assert img.getpixel((5, 5)) == (10, 20, 30, 255)


def test_png_round_trip(tmp_path):
    bitmap = dotted_bitmap(77, (1, 2, 3, 200))
    path = tmp_path / "sprite.png"

    export_sprite_png(bitmap, path)

    assert np.array_equal(import_sprite_png(path), bitmap)


def test_image_to_bitmap_converts_and_resizes():
    img = Image.new("RGB", (64, 64), (200, 100, 50))

    bitmap = image_to_bitmap(img)

    assert bitmap.shape == (32, 32, 4)
    assert tuple(bitmap[0, 0]) == (200, 100, 50, 255)


def test_export_thing_sprites(tmp_path):
    thing = Thing(id=100, category="item", frame_groups=[FrameGroup(width=2, sprites=[3, 0])])
    lookup = {3: solid_bitmap(3)}.get

    written = export_thing_sprites(thing, lookup, tmp_path)

    assert written == [tmp_path / "100.png"]
    assert written[0].exists()


def test_export_thing_sprites_multiple(tmp_path):
    thing = Thing(
        id=101,
        category="item",
        frame_groups=[FrameGroup(animation_length=3, sprites=[4, 5, 4])],
    )
    lookup = {4: solid_bitmap(4), 5: solid_bitmap(5)}.get

    written = export_thing_sprites(thing, lookup, tmp_path, prefix="sword big")

    assert [p.name for p in written] == ["sword_big_spr4.png", "sword_big_spr5.png"]


def test_compose_frame_places_first_tile_bottom_right():
    group = FrameGroup(width=2, height=1, sprites=[1, 2])
    lookup = {1: solid_bitmap(255), 2: solid_bitmap(0, 255)}.get

    canvas = compose_frame(group, lookup)

    assert canvas.size == (64, 32)
    assert canvas.getpixel((40, 10)) == (255, 0, 0, 255)
    assert canvas.getpixel((10, 10)) == (0, 255, 0, 255)


def test_compose_frame_stacks_layers():
    group = FrameGroup(layers=2, sprites=[1, 2])
    lookup = {1: solid_bitmap(255), 2: dotted_bitmap(0, (0, 0, 255, 255))}.get

    canvas = compose_frame(group, lookup)

    assert canvas.getpixel((0, 0)) == (0, 0, 255, 255)
    assert canvas.getpixel((5, 5)) == (255, 0, 0, 255)
