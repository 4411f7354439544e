"""
Sprite container parser: header, sprite count and address table.

Blobs are decoded on demand through ``sprite_codec.decode_sprite``.
"""

from typing import Optional

from data import DEBUG, ByteReader, FormatError
from .constants import FileType, Versions
from .header import ContainerHeader, read_container_header
from .sprite_codec import blob_size
from .things import SpriteData


class SpriteParser:
    """Parser for sprite containers. Expects an already decompressed buffer."""

    def __init__(self, data: bytes):
        self.data = bytes(data)
        self.header: Optional[ContainerHeader] = None

    def parse(self) -> SpriteData:
        self.header = read_container_header(self.data, FileType.SPRITE_DATA)
        version = self.header.content_version
        payload_offset = self.header.payload_offset

        payload = self.data[payload_offset:]
        reader = ByteReader(payload, context="sprite data")

        if version > Versions.LONG_SPRITE_COUNT:
            sprite_count = reader.u32()
        else:
            sprite_count = reader.u16()

        # Blobs start after the address table
        table_end = reader.pos + sprite_count * 4
        addresses = {}
        for sprite_id in range(1, sprite_count + 1):
            address = reader.u32()
            if address == 0:
                continue
            relative = address - payload_offset
            if relative < table_end or relative + blob_size(payload, relative) > len(payload):
                raise FormatError(
                    f"Sprite {sprite_id} address 0x{address:x} is outside the sprite data"
                )
            addresses[sprite_id] = relative

        if DEBUG:
            print(
                f"[DEBUG] Parsed sprite index: {sprite_count} sprites, "
                f"{len(addresses)} non-empty"
            )

        return SpriteData(
            version=version,
            sprite_count=sprite_count,
            addresses=addresses,
            buffer=payload,
            original_buffer=self.data,
            header=self.header,
            source_count=sprite_count,
        )
