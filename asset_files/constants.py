"""
Catalogue and sprite container format constants.
"""


class WrapperFormat:
    MAGIC = b"EMPERIA\x00"
    HEADER_LEN = 20
    FILE_TYPE_OFFSET = 0x08
    FORMAT_VERSION_OFFSET = 0x09
    CONTENT_VERSION_OFFSET = 0x0B
    FLAGS_OFFSET = 0x0F
    RESERVED_OFFSET = 0x10
    FORMAT_VERSION = 1


class FileType:
    SPRITE_DATA = 0x01
    OBJECT_DEFS = 0x02


class FeatureFlags:
    EXTENDED = 0x01
    TRANSPARENCY = 0x02
    FRAME_GROUPS = 0x04
    FRAME_DURATIONS = 0x08


class Versions:
    """Content version thresholds that change the binary layout."""

    MINIMUM = 740
    PATTERN_Z = 755
    LONG_SPRITE_COUNT = 760  # sprite count is u32 above this version
    EXTENDED = 960  # u32 sprite IDs, transparency
    MODERN_FLAGS = 1000
    FRAME_GROUPS = 1050  # outfit frame groups and frame durations


LEGACY_SIGNATURE_LEN = 4

LEGACY_SPRITE_SIGNATURES = {
    0x57BBD603: 1098,
}

LEGACY_OBJECT_SIGNATURES = {
    0x41BF619C: 740,
    0x439D5A33: 760,
    0x000042A3: 1098,
}

GZIP_MAGIC = b"\x1f\x8b"

SPRITE_BLOB_HEADER_LEN = 5  # transparency key + u16 compressed size

LAST_FLAG = 0xFF
