"""
In-memory object model: things, frame groups, and the category ranges
derived from the four category counters.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np

from data import ValidationError, THING_ID_BASE, CATEGORY_ORDER
from .flags import ThingFlags
from .header import ContainerHeader


@dataclass
class FrameDuration:
    minimum: int = 0
    maximum: int = 0


@dataclass
class FrameGroup:
    """One appearance variant of a thing and its sprite grid."""

    group_type: int = 0
    width: int = 1
    height: int = 1
    exact_size: Optional[int] = None
    layers: int = 1
    pattern_x: int = 1
    pattern_y: int = 1
    pattern_z: int = 1
    animation_length: int = 1
    asynchronous: int = 0
    loop_count: int = 0
    start_frame: int = 0
    durations: List[FrameDuration] = field(default_factory=list)
    sprites: List[int] = field(default_factory=list)

    @property
    def sprite_count(self) -> int:
        return (
            self.width
            * self.height
            * self.layers
            * self.pattern_x
            * self.pattern_y
            * self.pattern_z
            * self.animation_length
        )

    def sprite_index(
        self,
        tile_x: int = 0,
        tile_y: int = 0,
        layer: int = 0,
        pattern_x: int = 0,
        pattern_y: int = 0,
        pattern_z: int = 0,
        frame: int = 0,
    ) -> int:
        """
        Index into ``sprites`` for one grid cell.

        Nesting order from outermost to innermost: frame, pattern Z,
        pattern Y, pattern X, layer, tile Y, tile X.
        """
        coords = (
            (frame, self.animation_length, "frame"),
            (pattern_z, self.pattern_z, "pattern_z"),
            (pattern_y, self.pattern_y, "pattern_y"),
            (pattern_x, self.pattern_x, "pattern_x"),
            (layer, self.layers, "layer"),
            (tile_y, self.height, "tile_y"),
            (tile_x, self.width, "tile_x"),
        )
        index = 0
        for value, size, name in coords:
            if not 0 <= value < size:
                raise ValidationError(f"{name} {value} out of range [0, {size})")
            index = index * size + value
        return index

    def copy(self) -> "FrameGroup":
        return FrameGroup(
            group_type=self.group_type,
            width=self.width,
            height=self.height,
            exact_size=self.exact_size,
            layers=self.layers,
            pattern_x=self.pattern_x,
            pattern_y=self.pattern_y,
            pattern_z=self.pattern_z,
            animation_length=self.animation_length,
            asynchronous=self.asynchronous,
            loop_count=self.loop_count,
            start_frame=self.start_frame,
            durations=[FrameDuration(d.minimum, d.maximum) for d in self.durations],
            sprites=list(self.sprites),
        )


@dataclass
class Thing:
    id: int
    category: str
    flags: ThingFlags = field(default_factory=ThingFlags)
    frame_groups: List[FrameGroup] = field(default_factory=list)
    # Exact source bytes of this record, kept only while it is unmodified
    raw_bytes: Optional[bytes] = None

    def invalidate_raw(self) -> None:
        self.raw_bytes = None

    def sprite_ids(self) -> List[int]:
        return [sid for group in self.frame_groups for sid in group.sprites]


@dataclass
class ObjectData:
    version: int
    item_count: int = 0
    outfit_count: int = 0
    effect_count: int = 0
    distance_count: int = 0
    things: Dict[int, Thing] = field(default_factory=dict)
    original_buffer: bytes = b""
    header: Optional[ContainerHeader] = None
    compressed: bool = False
    # Counters as read from ``original_buffer``
    source_counts: Optional[Tuple[int, int, int, int]] = None

    @property
    def total_count(self) -> int:
        return self.item_count + self.outfit_count + self.effect_count + self.distance_count

    @property
    def counts(self) -> Tuple[int, int, int, int]:
        return (self.item_count, self.outfit_count, self.effect_count, self.distance_count)

    @property
    def counts_changed(self) -> bool:
        """True when things were added or removed since the buffer was read."""
        return self.source_counts is not None and self.counts != self.source_counts

    def get_counter(self, category: str) -> int:
        return getattr(self, f"{_check_category(category)}_count")

    def set_counter(self, category: str, value: int) -> None:
        setattr(self, f"{_check_category(category)}_count", value)


@dataclass
class SpriteData:
    version: int
    sprite_count: int = 0
    # Sprite ID -> offset of its blob within ``buffer`` (payload-relative)
    addresses: Dict[int, int] = field(default_factory=dict)
    buffer: bytes = b""
    original_buffer: bytes = b""
    header: Optional[ContainerHeader] = None
    compressed: bool = False
    source_count: Optional[int] = None

    @property
    def count_changed(self) -> bool:
        return self.source_count is not None and self.sprite_count != self.source_count


def _check_category(category: str) -> str:
    if category not in CATEGORY_ORDER:
        raise ValidationError(f"Unknown category: {category}")
    return category


def category_range(object_data: ObjectData, category: str) -> Tuple[int, int]:
    """
    Inclusive [start, end] ID range of a category.

    Items start at the fixed base and end at the item counter; every other
    category starts right after the previous one. An empty category has
    end == start - 1.
    """
    _check_category(category)
    end = object_data.item_count
    start = THING_ID_BASE
    if category == "item":
        return start, end

    for name in CATEGORY_ORDER[1:]:
        start = end + 1
        end = end + object_data.get_counter(name)
        if name == category:
            break
    return start, end


def category_of(object_data: ObjectData, thing_id: int) -> str:
    if thing_id < THING_ID_BASE or thing_id > object_data.total_count:
        raise ValidationError(f"Thing ID {thing_id} out of range")
    for name in CATEGORY_ORDER:
        start, end = category_range(object_data, name)
        if start <= thing_id <= end:
            return name
    raise ValidationError(f"Thing ID {thing_id} out of range")


def display_id(object_data: ObjectData, thing_id: int) -> int:
    """
    ID shown to metadata layers: items keep their raw ID, the other
    categories are numbered from 1 within their range.
    """
    category = category_of(object_data, thing_id)
    if category == "item":
        return thing_id
    start, _ = category_range(object_data, category)
    return thing_id - start + 1


def things_in_category(object_data: ObjectData, category: str) -> List[Thing]:
    start, end = category_range(object_data, category)
    return [
        object_data.things[thing_id]
        for thing_id in range(start, end + 1)
        if thing_id in object_data.things
    ]


def sprite_grid(group: FrameGroup) -> np.ndarray:
    """Sprite IDs of a group shaped by the nesting order, outermost first."""
    return np.asarray(group.sprites, dtype=np.uint32).reshape(
        group.animation_length,
        group.pattern_z,
        group.pattern_y,
        group.pattern_x,
        group.layers,
        group.height,
        group.width,
    )
