"""
Container header reading and writing.

Containers come in two layouts: the wrapped layout starts with a fixed
20-byte header (magic, file type, format version, content version, feature
flags, reserved bytes); the legacy layout starts with a 4-byte signature
whose value identifies the content version. Either may be whole-buffer
gzip compressed.
"""

import gzip
import zlib
from dataclasses import dataclass
from typing import Tuple

from data import (
    DEBUG,
    GZIP_COMPRESSION_LEVEL,
    CompressionError,
    FormatError,
    UnsupportedVersionError,
    read_uint8,
    read_uint16,
    read_uint32,
    write_uint8,
    write_uint16,
    write_uint32,
)
from .constants import (
    WrapperFormat,
    FileType,
    FeatureFlags,
    Versions,
    LEGACY_SIGNATURE_LEN,
    LEGACY_SPRITE_SIGNATURES,
    LEGACY_OBJECT_SIGNATURES,
    GZIP_MAGIC,
)

_FILE_TYPE_NAMES = {
    FileType.SPRITE_DATA: "sprite data",
    FileType.OBJECT_DEFS: "object definitions",
}


@dataclass
class ContainerHeader:
    file_type: int
    content_version: int
    wrapped: bool = True
    format_version: int = WrapperFormat.FORMAT_VERSION
    flags: int = 0
    reserved: int = 0
    signature: int = 0

    @property
    def payload_offset(self) -> int:
        return WrapperFormat.HEADER_LEN if self.wrapped else LEGACY_SIGNATURE_LEN

    def to_bytes(self) -> bytes:
        """Serialize the header, re-deriving the feature flags."""
        if not self.wrapped:
            return write_uint32(self.signature)

        result = bytearray()
        result.extend(WrapperFormat.MAGIC)
        result.extend(write_uint8(self.file_type))
        result.extend(write_uint16(self.format_version))
        result.extend(write_uint32(self.content_version))
        result.extend(write_uint8(derive_feature_flags(self.content_version)))
        result.extend(write_uint32(self.reserved))
        return bytes(result)


def derive_feature_flags(version: int) -> int:
    flags = 0
    if version >= Versions.EXTENDED:
        flags |= FeatureFlags.EXTENDED | FeatureFlags.TRANSPARENCY
    if version >= Versions.FRAME_GROUPS:
        flags |= FeatureFlags.FRAME_GROUPS | FeatureFlags.FRAME_DURATIONS
    return flags


def is_wrapped_format(data: bytes) -> bool:
    return (
        len(data) >= WrapperFormat.HEADER_LEN
        and data[: len(WrapperFormat.MAGIC)] == WrapperFormat.MAGIC
    )


def read_container_header(data: bytes, file_type: int) -> ContainerHeader:
    """
    Read and validate the header of a sprite or catalogue container.

    Raises:
        FormatError: for a wrong file type or an unknown legacy signature.
        UnsupportedVersionError: for content versions older than the oldest
            supported layout.
    """
    type_name = _FILE_TYPE_NAMES[file_type]

    if is_wrapped_format(data):
        stored_type = read_uint8(data, WrapperFormat.FILE_TYPE_OFFSET)
        if stored_type != file_type:
            raise FormatError(
                f"Expected {type_name} (0x{file_type:02x}), got 0x{stored_type:02x}"
            )
        header = ContainerHeader(
            file_type=stored_type,
            content_version=read_uint32(data, WrapperFormat.CONTENT_VERSION_OFFSET),
            wrapped=True,
            format_version=read_uint16(data, WrapperFormat.FORMAT_VERSION_OFFSET),
            flags=read_uint8(data, WrapperFormat.FLAGS_OFFSET),
            reserved=read_uint32(data, WrapperFormat.RESERVED_OFFSET),
        )
    else:
        if len(data) < LEGACY_SIGNATURE_LEN:
            raise FormatError(f"Unknown {type_name} file format: buffer too small")
        signatures = (
            LEGACY_SPRITE_SIGNATURES
            if file_type == FileType.SPRITE_DATA
            else LEGACY_OBJECT_SIGNATURES
        )
        signature = read_uint32(data, 0)
        if signature not in signatures:
            raise FormatError(
                f"Unknown {type_name} file format (signature 0x{signature:08X})"
            )
        header = ContainerHeader(
            file_type=file_type,
            content_version=signatures[signature],
            wrapped=False,
            signature=signature,
        )

    if header.content_version < Versions.MINIMUM:
        raise UnsupportedVersionError(
            f"Content version {header.content_version} is older than the "
            f"oldest supported version {Versions.MINIMUM}"
        )

    if DEBUG:
        layout = "wrapped" if header.wrapped else "legacy"
        print(
            f"[DEBUG] {type_name} header: {layout}, version {header.content_version}, "
            f"flags 0x{header.flags:02x}"
        )

    return header


def patch_header_flags(data: bytes, version: int) -> bytes:
    """Return data with the wrapper flags byte re-derived from version."""
    if not is_wrapped_format(data):
        return bytes(data)

    expected = derive_feature_flags(version)
    if data[WrapperFormat.FLAGS_OFFSET] == expected:
        return bytes(data)

    patched = bytearray(data)
    patched[WrapperFormat.FLAGS_OFFSET] = expected
    return bytes(patched)


def is_gzip_compressed(data: bytes) -> bool:
    return data[: len(GZIP_MAGIC)] == GZIP_MAGIC


def maybe_decompress(data: bytes, context: str = "container") -> Tuple[bytes, bool]:
    """
    Transparently gunzip a whole buffer.

    Returns:
        Tuple of (plain_bytes, was_compressed)
    """
    if not is_gzip_compressed(data):
        return bytes(data), False

    try:
        plain = gzip.decompress(data)
    except (OSError, EOFError, zlib.error) as e:
        raise CompressionError(f"gzip decompression failed: {e}", context) from e

    if DEBUG:
        print(f"[DEBUG] Decompressed {context}: {len(data)} -> {len(plain)} bytes")

    return plain, True


def compress_buffer(data: bytes, level: int = GZIP_COMPRESSION_LEVEL) -> bytes:
    return gzip.compress(data, compresslevel=level)
