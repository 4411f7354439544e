"""
Sprite atlas compaction.

Unreferenced sprites without pixel data are dropped and the survivors are
renumbered sequentially from 1, keeping their relative order. Every sprite
reference, pending override and address is moved into the new ID space.
"""

from dataclasses import dataclass
from typing import Dict, Set

from data import DEBUG
from asset_files import is_blank
from .context import EditContext


@dataclass
class CompactResult:
    removed_count: int
    old_count: int
    new_count: int


def referenced_sprite_ids(context: EditContext) -> Set[int]:
    referenced = set()
    for thing in context.object_data.things.values():
        for group in thing.frame_groups:
            referenced.update(sid for sid in group.sprites if sid > 0)
    return referenced


def _kept_sprite_ids(context: EditContext, referenced: Set[int]) -> Set[int]:
    sprite_data = context.sprite_data
    kept = set()
    for sprite_id in range(1, sprite_data.sprite_count + 1):
        if sprite_id in referenced:
            kept.add(sprite_id)
            continue
        override = context.sprite_overrides.get(sprite_id)
        if override is not None:
            if not is_blank(override):
                kept.add(sprite_id)
        elif sprite_id in sprite_data.addresses:
            kept.add(sprite_id)
    return kept


def build_remap(sprite_count: int, kept: Set[int]) -> Dict[int, int]:
    remap = {}
    next_id = 1
    for sprite_id in range(1, sprite_count + 1):
        if sprite_id in kept:
            remap[sprite_id] = next_id
            next_id += 1
    return remap


def compact(context: EditContext) -> CompactResult:
    """
    Garbage-collect and renumber the sprite atlas.

    A call that removes nothing and finds no reference past the last
    sprite leaves every piece of state untouched.
    """
    sprite_data = context.sprite_data
    old_count = sprite_data.sprite_count

    referenced = referenced_sprite_ids(context)
    kept = _kept_sprite_ids(context, referenced)
    removed_count = old_count - len(kept)
    # References past the end of the atlas are zeroed by the remap below
    dangling = any(sprite_id > old_count for sprite_id in referenced)
    if removed_count == 0 and not dangling:
        return CompactResult(0, old_count, old_count)

    remap = build_remap(old_count, kept)
    new_count = len(remap)

    for thing in context.object_data.things.values():
        changed = False
        for group in thing.frame_groups:
            for index, old_id in enumerate(group.sprites):
                if old_id == 0:
                    continue
                new_id = remap.get(old_id, 0)
                if new_id != old_id:
                    group.sprites[index] = new_id
                    changed = True
        if changed:
            context.mark_thing_dirty(thing.id)

    context.sprite_overrides = {
        remap[old_id]: bitmap
        for old_id, bitmap in context.sprite_overrides.items()
        if old_id in remap
    }
    dirty_sprites = {remap[old_id] for old_id in context.dirty_sprite_ids if old_id in remap}
    # Old blob offsets no longer line up with the new IDs
    dirty_sprites.update(range(1, new_count + 1))
    context.dirty_sprite_ids = dirty_sprites

    sprite_data.addresses = {
        remap[old_id]: address
        for old_id, address in sprite_data.addresses.items()
        if old_id in remap
    }
    sprite_data.sprite_count = new_count
    context.sprite_cache.clear()

    if DEBUG:
        print(f"[DEBUG] Sprite remap covers {new_count} surviving sprite(s)")

    return CompactResult(removed_count, old_count, new_count)
