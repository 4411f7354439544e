"""
Catalogue writer.

Clean things are copied from their source bytes, dirty things are
re-serialized, IDs with no thing get a minimal blank record.
"""

from typing import AbstractSet, Optional

from data import DEBUG, write_uint8, write_uint16, write_uint32, THING_ID_BASE
from .constants import FileType, LAST_FLAG, Versions, WrapperFormat
from .flags import flag_layout_for_version, write_flags
from .frame_groups import catalogue_group_layout, write_frame_group_header
from .header import ContainerHeader, patch_header_flags
from .things import FrameGroup, ObjectData, Thing, category_of


class ObjectWriter:
    def __init__(self, object_data: ObjectData, dirty_ids: Optional[AbstractSet[int]] = None):
        self.object_data = object_data
        self.dirty_ids = set(dirty_ids or ())
        self.version = object_data.version

    def _header(self) -> ContainerHeader:
        header = self.object_data.header
        if header is None:
            header = ContainerHeader(
                file_type=FileType.OBJECT_DEFS,
                content_version=self.version,
                format_version=WrapperFormat.FORMAT_VERSION,
            )
        return header

    def _write_sprite_ids(self, group: FrameGroup) -> bytes:
        write_id = write_uint32 if self.version >= Versions.EXTENDED else write_uint16
        return b"".join(write_id(sprite_id) for sprite_id in group.sprites)

    def _write_blank_record(self, thing_id: int) -> bytes:
        category = category_of(self.object_data, thing_id)
        group_layout = catalogue_group_layout(self.version, category == "outfit")

        result = bytearray(write_uint8(LAST_FLAG))
        if group_layout.has_group_type:
            result.extend(write_uint8(1))
        blank = FrameGroup(sprites=[0])
        result.extend(write_frame_group_header(blank, group_layout))
        result.extend(self._write_sprite_ids(blank))
        return bytes(result)

    def write_thing(self, thing: Thing) -> bytes:
        """Serialize one thing record from its parsed fields."""
        result = bytearray()
        result.extend(write_flags(thing.flags, flag_layout_for_version(self.version)))

        group_layout = catalogue_group_layout(self.version, thing.category == "outfit")
        if group_layout.has_group_type:
            result.extend(write_uint8(len(thing.frame_groups)))

        for group in thing.frame_groups:
            result.extend(write_frame_group_header(group, group_layout))
            result.extend(self._write_sprite_ids(group))
        return bytes(result)

    def write(self) -> bytes:
        object_data = self.object_data
        if (
            not self.dirty_ids
            and not object_data.counts_changed
            and object_data.original_buffer
        ):
            if DEBUG:
                print("[DEBUG] Catalogue unchanged, returning original buffer")
            return patch_header_flags(object_data.original_buffer, self.version)

        if DEBUG:
            print(f"[DEBUG] Rebuilding catalogue with {len(self.dirty_ids)} dirty thing(s)")

        result = bytearray()
        result.extend(self._header().to_bytes())
        result.extend(write_uint16(object_data.item_count))
        result.extend(write_uint16(object_data.outfit_count))
        result.extend(write_uint16(object_data.effect_count))
        result.extend(write_uint16(object_data.distance_count))

        for thing_id in range(THING_ID_BASE, object_data.total_count + 1):
            thing = object_data.things.get(thing_id)
            if thing is None:
                result.extend(self._write_blank_record(thing_id))
            elif thing.raw_bytes is not None and thing_id not in self.dirty_ids:
                result.extend(thing.raw_bytes)
            else:
                result.extend(self.write_thing(thing))

        return bytes(result)
