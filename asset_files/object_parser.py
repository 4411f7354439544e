"""
Catalogue parser for object definition containers.
"""

from typing import List, Optional

from data import (
    DEBUG,
    ByteReader,
    FormatError,
    THING_ID_BASE,
)
from .constants import FileType, Versions
from .flags import flag_layout_for_version, read_flags
from .frame_groups import catalogue_group_layout, read_frame_group_header
from .header import ContainerHeader, read_container_header
from .things import FrameGroup, ObjectData, Thing


class ObjectParser:
    """Parser for catalogue files. Expects an already decompressed buffer."""

    def __init__(self, data: bytes):
        self.data = bytes(data)
        self.header: Optional[ContainerHeader] = None
        self.reader: Optional[ByteReader] = None

    def _read_header(self) -> ContainerHeader:
        self.header = read_container_header(self.data, FileType.OBJECT_DEFS)
        self.reader = ByteReader(
            self.data, self.header.payload_offset, context="object definitions"
        )
        return self.header

    def _read_sprite_ids(self, group: FrameGroup, version: int) -> List[int]:
        read_id = self.reader.u32 if version >= Versions.EXTENDED else self.reader.u16
        return [read_id() for _ in range(group.sprite_count)]

    def _read_thing(self, thing_id: int, category: str, version: int) -> Thing:
        start = self.reader.pos
        try:
            flags = read_flags(self.reader, flag_layout_for_version(version))

            is_outfit = category == "outfit"
            group_layout = catalogue_group_layout(version, is_outfit)
            group_count = self.reader.u8() if group_layout.has_group_type else 1

            frame_groups = []
            for _ in range(group_count):
                group = read_frame_group_header(self.reader, group_layout)
                group.sprites = self._read_sprite_ids(group, version)
                frame_groups.append(group)
        except FormatError as e:
            raise FormatError(f"Thing {thing_id} ({category}): {e}") from e

        raw_bytes = self.data[start : self.reader.pos]
        return Thing(
            id=thing_id,
            category=category,
            flags=flags,
            frame_groups=frame_groups,
            raw_bytes=raw_bytes,
        )

    def parse(self) -> ObjectData:
        header = self._read_header()
        version = header.content_version

        object_data = ObjectData(version=version, header=header, original_buffer=self.data)
        object_data.item_count = self.reader.u16()
        object_data.outfit_count = self.reader.u16()
        object_data.effect_count = self.reader.u16()
        object_data.distance_count = self.reader.u16()
        object_data.source_counts = object_data.counts

        item_end = object_data.item_count
        outfit_end = item_end + object_data.outfit_count
        effect_end = outfit_end + object_data.effect_count

        for thing_id in range(THING_ID_BASE, object_data.total_count + 1):
            if thing_id <= item_end:
                category = "item"
            elif thing_id <= outfit_end:
                category = "outfit"
            elif thing_id <= effect_end:
                category = "effect"
            else:
                category = "distance"
            object_data.things[thing_id] = self._read_thing(thing_id, category, version)

        if DEBUG:
            print(
                f"[DEBUG] Parsed {len(object_data.things)} things: "
                f"items={object_data.item_count} outfits={object_data.outfit_count} "
                f"effects={object_data.effect_count} distances={object_data.distance_count}"
            )

        return object_data
