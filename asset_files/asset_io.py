"""
Container I/O: parse and assemble catalogue and sprite containers from
file paths or raw bytes.
"""

from pathlib import Path
from typing import AbstractSet, Mapping, Optional, Union

import numpy as np

from data import read_file_to_bytes, write_bytes_to_file
from .header import compress_buffer, maybe_decompress
from .object_parser import ObjectParser
from .object_writer import ObjectWriter
from .sprite_parser import SpriteParser
from .sprite_writer import SpriteWriter
from .things import ObjectData, SpriteData


def _read_input(source: Union[Path, bytes]) -> bytes:
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    return read_file_to_bytes(Path(source))


def parse_object_data(data: bytes) -> ObjectData:
    """Parse a catalogue buffer, gunzipping it first when needed."""
    plain, compressed = maybe_decompress(data, context="object definitions")
    object_data = ObjectParser(plain).parse()
    object_data.compressed = compressed
    return object_data


def parse_sprite_data(data: bytes) -> SpriteData:
    """Parse a sprite container buffer, gunzipping it first when needed."""
    plain, compressed = maybe_decompress(data, context="sprite data")
    sprite_data = SpriteParser(plain).parse()
    sprite_data.compressed = compressed
    return sprite_data


def assemble_object_data(
    object_data: ObjectData, dirty_ids: Optional[AbstractSet[int]] = None
) -> bytes:
    return ObjectWriter(object_data, dirty_ids).write()


def assemble_sprite_data(
    sprite_data: SpriteData,
    overrides: Optional[Mapping[int, np.ndarray]] = None,
    dirty_ids: Optional[AbstractSet[int]] = None,
) -> bytes:
    return SpriteWriter(sprite_data, overrides, dirty_ids).write()


def load_object_data(source: Union[Path, bytes]) -> ObjectData:
    return parse_object_data(_read_input(source))


def load_sprite_data(source: Union[Path, bytes]) -> SpriteData:
    return parse_sprite_data(_read_input(source))


def save_object_data(
    object_data: ObjectData,
    output_path: Optional[Path] = None,
    dirty_ids: Optional[AbstractSet[int]] = None,
    compress: bool = False,
) -> bytes:
    """
    Assemble the catalogue and optionally write it.

    Returns:
        The bytes written (gzip compressed when ``compress`` is set)
    """
    data = assemble_object_data(object_data, dirty_ids)
    if compress:
        data = compress_buffer(data)

    if output_path is not None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        write_bytes_to_file(output_path, data)

    return data


def save_sprite_data(
    sprite_data: SpriteData,
    output_path: Optional[Path] = None,
    overrides: Optional[Mapping[int, np.ndarray]] = None,
    dirty_ids: Optional[AbstractSet[int]] = None,
    compress: bool = False,
) -> bytes:
    data = assemble_sprite_data(sprite_data, overrides, dirty_ids)
    if compress:
        data = compress_buffer(data)

    if output_path is not None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        write_bytes_to_file(output_path, data)

    return data
