"""
Editing session over one catalogue and its sprite container.

The session owns the parsed containers, pending sprite overrides, dirty
sets and flag undo history. Every mutation goes through it.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

import numpy as np
import xxhash

from data import (
    DEFAULT_CLIENT_VERSION,
    ValidationError,
)
from asset_files import (
    FrameGroup,
    ObjectData,
    SpriteData,
    Thing,
    ThingFlags,
    blank_bitmap,
    validate_bitmap,
    category_range,
    display_id,
    things_in_category,
    load_object_data,
    load_sprite_data,
    parse_object_data,
    parse_sprite_data,
    save_object_data,
    save_sprite_data,
)
from obd_files import ObdThing, decode_obd, encode_obd, pixels_for_thing
from .atlas import CompactResult, compact
from .context import EditContext
from .id_space import allocate, remove


@dataclass
class FlagEdit:
    thing_id: int
    old_flags: ThingFlags
    new_flags: ThingFlags


class EditSession:
    def __init__(self, object_data: ObjectData, sprite_data: SpriteData):
        self.context = EditContext(object_data=object_data, sprite_data=sprite_data)
        self.undo_stack: List[FlagEdit] = []
        self.redo_stack: List[FlagEdit] = []

    @classmethod
    def load(
        cls, objects: Union[Path, bytes], sprites: Union[Path, bytes]
    ) -> "EditSession":
        return cls(load_object_data(objects), load_sprite_data(sprites))

    @property
    def object_data(self) -> ObjectData:
        return self.context.object_data

    @property
    def sprite_data(self) -> SpriteData:
        return self.context.sprite_data

    @property
    def is_dirty(self) -> bool:
        return self.context.is_dirty

    def _get_thing(self, thing_id: int) -> Thing:
        thing = self.object_data.things.get(thing_id)
        if thing is None:
            raise ValidationError(f"No thing with ID {thing_id}")
        return thing

    # Queries

    def get_thing(self, thing_id: int) -> Thing:
        return self._get_thing(thing_id)

    def get_sprite(self, sprite_id: int) -> Optional[np.ndarray]:
        if sprite_id <= 0 or sprite_id > self.sprite_data.sprite_count:
            return None
        return self.context.get_sprite(sprite_id)

    def category_range(self, category: str) -> Tuple[int, int]:
        return category_range(self.object_data, category)

    def display_id(self, thing_id: int) -> int:
        return display_id(self.object_data, thing_id)

    def things_in_category(self, category: str) -> List[Thing]:
        return things_in_category(self.object_data, category)

    # Flag edits

    def update_flags(self, thing_id: int, flags: ThingFlags) -> None:
        thing = self._get_thing(thing_id)
        edit = FlagEdit(thing_id, thing.flags.copy(), flags.copy())
        thing.flags = flags.copy()
        self.context.mark_thing_dirty(thing_id)
        self.undo_stack.append(edit)
        self.redo_stack.clear()

    def _apply_flags(self, thing_id: int, flags: ThingFlags) -> None:
        thing = self.object_data.things.get(thing_id)
        if thing is not None:
            thing.flags = flags.copy()
            self.context.mark_thing_dirty(thing_id)

    def undo(self) -> bool:
        if not self.undo_stack:
            return False
        edit = self.undo_stack.pop()
        self._apply_flags(edit.thing_id, edit.old_flags)
        self.redo_stack.append(edit)
        return True

    def redo(self) -> bool:
        if not self.redo_stack:
            return False
        edit = self.redo_stack.pop()
        self._apply_flags(edit.thing_id, edit.new_flags)
        self.undo_stack.append(edit)
        return True

    # Sprite edits

    def _check_sprite_id(self, sprite_id: int) -> None:
        if sprite_id <= 0 or sprite_id > self.sprite_data.sprite_count:
            raise ValidationError(
                f"Sprite ID {sprite_id} out of range [1, {self.sprite_data.sprite_count}]"
            )

    def replace_sprite(self, sprite_id: int, bitmap: np.ndarray) -> None:
        self._check_sprite_id(sprite_id)
        self.context.set_override(sprite_id, validate_bitmap(bitmap).copy())

    def add_sprite(self, bitmap: np.ndarray) -> int:
        pixels = validate_bitmap(bitmap).copy()
        self.sprite_data.sprite_count += 1
        sprite_id = self.sprite_data.sprite_count
        self.context.set_override(sprite_id, pixels)
        return sprite_id

    def delete_sprite(self, sprite_id: int) -> None:
        """Blank a sprite. Its ID stays allocated until the atlas is compacted."""
        self._check_sprite_id(sprite_id)
        self.context.set_override(sprite_id, blank_bitmap())

    def delete_sprites(self, sprite_ids: Iterable[int]) -> int:
        sprite_ids = [sprite_id for sprite_id in sprite_ids if sprite_id > 0]
        for sprite_id in sprite_ids:
            self._check_sprite_id(sprite_id)
        for sprite_id in sprite_ids:
            self.context.set_override(sprite_id, blank_bitmap())
        return len(sprite_ids)

    def compact_atlas(self) -> CompactResult:
        result = compact(self.context)
        if result.removed_count:
            print(
                f"[OK] Compacted sprite atlas: {result.old_count} -> {result.new_count} "
                f"(removed {result.removed_count})"
            )
        else:
            print("[INFO] Sprite atlas already compact")
        return result

    # Thing edits

    def _allocate(self, category: str) -> int:
        thing_id = allocate(self.context, category)
        # Flag history refers to IDs that may have shifted
        self.undo_stack.clear()
        self.redo_stack.clear()
        return thing_id

    def add_thing(self, category: str) -> int:
        thing_id = self._allocate(category)
        self.object_data.things[thing_id] = Thing(
            id=thing_id,
            category=category,
            flags=ThingFlags(),
            frame_groups=[FrameGroup(sprites=[0])],
        )
        return thing_id

    def remove_thing(self, thing_id: int) -> None:
        self._get_thing(thing_id)
        remove(self.context, thing_id)
        self.undo_stack.clear()
        self.redo_stack.clear()

    @staticmethod
    def _validate_incoming(
        frame_groups: List[FrameGroup], sprite_pixels: Mapping[int, np.ndarray]
    ) -> Dict[int, np.ndarray]:
        """Check an incoming thing before anything is allocated for it."""
        for index, group in enumerate(frame_groups):
            if len(group.sprites) != group.sprite_count:
                raise ValidationError(
                    f"Frame group {index} has {len(group.sprites)} sprite(s), "
                    f"expected {group.sprite_count}"
                )
        return {
            source_id: validate_bitmap(bitmap)
            for source_id, bitmap in sprite_pixels.items()
            if source_id != 0
        }

    def _store_incoming_sprites(self, sprite_pixels: Dict[int, np.ndarray]) -> Dict[int, int]:
        """
        Give every incoming sprite a fresh ID after the current count.

        Bitmaps with identical content share one new ID.
        """
        remap: Dict[int, int] = {}
        by_digest: Dict[int, int] = {}
        for source_id, pixels in sprite_pixels.items():
            if source_id in remap:
                continue
            digest = xxhash.xxh3_64(pixels.tobytes()).intdigest()
            existing = by_digest.get(digest)
            if existing is not None and np.array_equal(
                self.context.sprite_overrides[existing], pixels
            ):
                remap[source_id] = existing
                continue
            sprite_id = self.add_sprite(pixels)
            by_digest[digest] = sprite_id
            remap[source_id] = sprite_id
        return remap

    @staticmethod
    def _remap_groups(frame_groups: List[FrameGroup], remap: Dict[int, int]) -> List[FrameGroup]:
        groups = []
        for index, source in enumerate(frame_groups):
            group = source.copy()
            group.group_type = index
            # Source IDs without incoming pixels become blank slots
            group.sprites = [remap.get(sid, 0) for sid in group.sprites]
            groups.append(group)
        return groups

    def import_thing(
        self,
        category: str,
        flags: ThingFlags,
        frame_groups: List[FrameGroup],
        sprite_pixels: Mapping[int, np.ndarray],
    ) -> int:
        """Append a thing to a category with its sprites stored as new sprites."""
        pixels = self._validate_incoming(frame_groups, sprite_pixels)
        thing_id = self._allocate(category)
        remap = self._store_incoming_sprites(pixels)
        self.object_data.things[thing_id] = Thing(
            id=thing_id,
            category=category,
            flags=flags.copy(),
            frame_groups=self._remap_groups(frame_groups, remap),
        )
        self.context.sprite_cache.clear()
        return thing_id

    def replace_thing(
        self,
        thing_id: int,
        flags: ThingFlags,
        frame_groups: List[FrameGroup],
        sprite_pixels: Mapping[int, np.ndarray],
    ) -> None:
        """Overwrite a thing in place, keeping its ID and category."""
        existing = self._get_thing(thing_id)
        pixels = self._validate_incoming(frame_groups, sprite_pixels)
        remap = self._store_incoming_sprites(pixels)
        self.object_data.things[thing_id] = Thing(
            id=thing_id,
            category=existing.category,
            flags=flags.copy(),
            frame_groups=self._remap_groups(frame_groups, remap),
        )
        self.context.dirty_ids.add(thing_id)
        self.context.sprite_cache.clear()
        # The flag history belongs to the replaced thing
        self.undo_stack.clear()
        self.redo_stack.clear()

    # Interchange

    def export_thing(
        self, thing_id: int, client_version: int = DEFAULT_CLIENT_VERSION
    ) -> bytes:
        thing = self._get_thing(thing_id)
        pixels = pixels_for_thing(thing, self.get_sprite)
        return encode_obd(thing, pixels, client_version)

    def import_obd(self, obd_bytes: bytes, replace_id: Optional[int] = None) -> int:
        """
        Import an interchange file as a new thing, or over ``replace_id``.

        Returns:
            The ID of the imported thing
        """
        obd_thing: ObdThing = decode_obd(obd_bytes)
        if replace_id is not None:
            self.replace_thing(
                replace_id, obd_thing.flags, obd_thing.frame_groups, obd_thing.sprite_pixels
            )
            return replace_id
        return self.import_thing(
            obd_thing.category,
            obd_thing.flags,
            obd_thing.frame_groups,
            obd_thing.sprite_pixels,
        )

    # Persistence

    def save(
        self,
        objects_path: Optional[Path] = None,
        sprites_path: Optional[Path] = None,
        compress_sprites: Optional[bool] = None,
    ) -> Tuple[bytes, bytes]:
        """
        Assemble both containers, optionally write them, and start a clean
        state from the assembled bytes.

        Returns:
            Tuple of (catalogue_bytes, sprite_bytes) as written
        """
        context = self.context
        if compress_sprites is None:
            compress_sprites = self.sprite_data.compressed

        object_bytes = save_object_data(
            self.object_data,
            objects_path,
            dirty_ids=context.dirty_ids,
            compress=self.object_data.compressed,
        )
        sprite_bytes = save_sprite_data(
            self.sprite_data,
            sprites_path,
            overrides=context.sprite_overrides,
            dirty_ids=context.dirty_sprite_ids,
            compress=compress_sprites,
        )

        context.object_data = parse_object_data(object_bytes)
        context.sprite_data = parse_sprite_data(sprite_bytes)
        self.mark_clean()

        print(
            f"[OK] Saved {len(self.object_data.things)} thing(s), "
            f"{self.sprite_data.sprite_count} sprite(s)"
        )
        return object_bytes, sprite_bytes

    def mark_clean(self) -> None:
        """Drop pending edits; the containers are taken as saved."""
        self.context.dirty_ids = set()
        self.context.dirty_sprite_ids = set()
        self.context.sprite_overrides = {}
        self.context.sprite_cache.clear()
