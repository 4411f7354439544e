#!/usr/bin/env python3
"""
Tests for thing ID allocation and removal.

Usage:
    pytest tests/test_id_space.py
"""

import sys
from pathlib import Path

import pytest

script_dir = Path(__file__).parent
if str(script_dir.parent) not in sys.path:
    sys.path.insert(0, str(script_dir.parent))

from data import ValidationError
from asset_files import SpriteData, category_of, category_range
from editor import EditContext, allocate, remove
from utils import build_object_data


def _context() -> EditContext:
    object_data = build_object_data(
        items=[[1], [2]], outfits=[[3]], effects=[[4]], distances=[[5]]
    )
    return EditContext(object_data=object_data, sprite_data=SpriteData(version=1098))


def test_allocate_item_shifts_later_categories():
    context = _context()
    outfit = context.object_data.things[102]
    distance = context.object_data.things[104]

    new_id = allocate(context, "item")

    assert new_id == 102
    assert context.object_data.item_count == 102
    assert context.object_data.things[103] is outfit
    assert outfit.id == 103
    assert context.object_data.things[105] is distance
    assert 102 not in context.object_data.things
    assert category_of(context.object_data, 103) == "outfit"
    assert context.dirty_ids == {102}


def test_allocate_last_category_does_not_shift():
    context = _context()
    before = dict(context.object_data.things)

    new_id = allocate(context, "distance")

    assert new_id == 105
    assert category_range(context.object_data, "distance") == (104, 105)
    for thing_id, thing in before.items():
        assert context.object_data.things[thing_id] is thing


def test_dirty_ids_follow_shifted_things():
    context = _context()
    context.dirty_ids = {100, 103}

    allocate(context, "outfit")

    assert context.dirty_ids == {100, 103, 104}


def test_allocate_then_remove_restores_state():
    context = _context()
    context.dirty_ids = {101, 104}
    before = dict(context.object_data.things)
    counters = (
        context.object_data.item_count,
        context.object_data.outfit_count,
        context.object_data.effect_count,
        context.object_data.distance_count,
    )

    new_id = allocate(context, "outfit")
    category = remove(context, new_id)

    assert category == "outfit"
    assert (
        context.object_data.item_count,
        context.object_data.outfit_count,
        context.object_data.effect_count,
        context.object_data.distance_count,
    ) == counters
    assert context.object_data.things == before
    assert all(thing.id == thing_id for thing_id, thing in context.object_data.things.items())
    assert context.dirty_ids == {101, 104}


def test_remove_only_last_of_category():
    context = _context()

    with pytest.raises(ValidationError):
        remove(context, 100)


def test_remove_shifts_down():
    context = _context()
    effect = context.object_data.things[103]

    remove(context, 102)

    assert context.object_data.outfit_count == 0
    assert context.object_data.things[102] is effect
    assert effect.id == 102
    assert context.object_data.total_count == 103
    assert 104 not in context.object_data.things


def test_allocate_unknown_category():
    with pytest.raises(ValidationError):
        allocate(_context(), "monster")
