"""
Editing state shared by the ID-space, atlas and session operations.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Set

import numpy as np

from asset_files import ObjectData, SpriteData, decode_sprite


@dataclass
class EditContext:
    """
    Everything one editing session owns.

    ``sprite_overrides`` holds bitmaps not yet encoded into the sprite
    container; a fully transparent override marks a deleted sprite.
    """

    object_data: ObjectData
    sprite_data: SpriteData
    sprite_overrides: Dict[int, np.ndarray] = field(default_factory=dict)
    dirty_ids: Set[int] = field(default_factory=set)
    dirty_sprite_ids: Set[int] = field(default_factory=set)
    sprite_cache: Dict[int, np.ndarray] = field(default_factory=dict)

    def get_sprite(self, sprite_id: int) -> Optional[np.ndarray]:
        """Current bitmap of a sprite: pending override, else decoded blob."""
        override = self.sprite_overrides.get(sprite_id)
        if override is not None:
            return override

        cached = self.sprite_cache.get(sprite_id)
        if cached is not None:
            return cached

        address = self.sprite_data.addresses.get(sprite_id)
        if address is None:
            return None

        bitmap = decode_sprite(self.sprite_data.buffer, address)
        self.sprite_cache[sprite_id] = bitmap
        return bitmap

    def set_override(self, sprite_id: int, bitmap: np.ndarray) -> None:
        self.sprite_overrides[sprite_id] = bitmap
        self.dirty_sprite_ids.add(sprite_id)
        self.sprite_cache.pop(sprite_id, None)

    def mark_thing_dirty(self, thing_id: int) -> None:
        thing = self.object_data.things.get(thing_id)
        if thing is not None:
            thing.invalidate_raw()
        self.dirty_ids.add(thing_id)

    @property
    def is_dirty(self) -> bool:
        return bool(
            self.dirty_ids
            or self.dirty_sprite_ids
            or self.sprite_overrides
            or self.object_data.counts_changed
            or self.sprite_data.count_changed
        )
