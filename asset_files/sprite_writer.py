"""
Sprite container writer.
"""

from typing import AbstractSet, Dict, Mapping, Optional

import numpy as np

from data import DEBUG, write_uint16, write_uint32
from .constants import FileType, Versions
from .header import ContainerHeader, patch_header_flags
from .sprite_codec import encode_sprite, sprite_blob
from .things import SpriteData


class SpriteWriter:
    """
    Assemble a sprite container.

    With no overrides and no dirty sprites the source buffer is returned
    unchanged apart from the feature flags byte. Otherwise overridden
    sprites are re-encoded, every other blob is copied verbatim, and the
    address table is laid out again from the start of the data section.
    """

    def __init__(
        self,
        sprite_data: SpriteData,
        overrides: Optional[Mapping[int, np.ndarray]] = None,
        dirty_ids: Optional[AbstractSet[int]] = None,
    ):
        self.sprite_data = sprite_data
        self.overrides = dict(overrides or {})
        self.dirty_ids = set(dirty_ids or ())
        self.version = sprite_data.version

    def _header(self) -> ContainerHeader:
        header = self.sprite_data.header
        if header is None:
            header = ContainerHeader(
                file_type=FileType.SPRITE_DATA, content_version=self.version
            )
        return header

    def _collect_blobs(self) -> Dict[int, bytes]:
        sprite_data = self.sprite_data
        blobs = {}
        for sprite_id in range(1, sprite_data.sprite_count + 1):
            override = self.overrides.get(sprite_id)
            if override is not None:
                blobs[sprite_id] = encode_sprite(override)
                continue
            address = sprite_data.addresses.get(sprite_id)
            if address is not None:
                blobs[sprite_id] = sprite_blob(sprite_data.buffer, address)
        return blobs

    def write(self) -> bytes:
        sprite_data = self.sprite_data
        if (
            not self.overrides
            and not self.dirty_ids
            and not sprite_data.count_changed
            and sprite_data.original_buffer
        ):
            if DEBUG:
                print("[DEBUG] Sprite data unchanged, returning original buffer")
            return patch_header_flags(sprite_data.original_buffer, self.version)

        if DEBUG:
            print(
                f"[DEBUG] Rebuilding sprite data: {len(self.overrides)} override(s), "
                f"{len(self.dirty_ids)} dirty sprite(s)"
            )

        blobs = self._collect_blobs()

        header_bytes = self._header().to_bytes()
        if self.version > Versions.LONG_SPRITE_COUNT:
            count_bytes = write_uint32(sprite_data.sprite_count)
        else:
            count_bytes = write_uint16(sprite_data.sprite_count)
        data_start = len(header_bytes) + len(count_bytes) + sprite_data.sprite_count * 4

        result = bytearray()
        result.extend(header_bytes)
        result.extend(count_bytes)

        current = data_start
        for sprite_id in range(1, sprite_data.sprite_count + 1):
            blob = blobs.get(sprite_id)
            if blob is None:
                result.extend(write_uint32(0))
            else:
                result.extend(write_uint32(current))
                current += len(blob)

        for sprite_id in range(1, sprite_data.sprite_count + 1):
            blob = blobs.get(sprite_id)
            if blob is not None:
                result.extend(blob)

        return bytes(result)
