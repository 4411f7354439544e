"""
Core configuration, constants, errors and utils
"""

from .config import (
    DEBUG,
    CURRENT_VERSION,
    DEFAULT_CLIENT_VERSION,
    OBD_COMPRESSION_PRESET,
    GZIP_COMPRESSION_LEVEL,
)

from .errors import (
    AssetError,
    FormatError,
    UnsupportedVersionError,
    CompressionError,
    ValidationError,
)

from .utils import (
    read_uint32,
    read_uint16,
    read_uint8,
    read_int8,
    read_int16,
    read_int32,
    write_uint32,
    write_uint16,
    write_uint8,
    write_int8,
    write_int16,
    write_int32,
    write_string,
    ByteReader,
    read_file_to_bytes,
    write_bytes_to_file,
    string_value_to_int,
    read_json_file,
    write_json_file,
    validate_path_exists_and_is_dir,
    sanitize_file_name,
)

from .constants import (
    SEPARATOR_LINE_LENGTH,
    SPRITE_SIZE,
    SPRITE_PIXELS,
    SPRITE_CHANNELS,
    SPRITE_BYTES,
    TRANSPARENCY_KEY,
    THING_ID_BASE,
    CATEGORY_ORDER,
    CATEGORY_CODES,
    CATEGORY_FROM_CODE,
)

__all__ = [
    # Config
    "DEBUG",
    "CURRENT_VERSION",
    "DEFAULT_CLIENT_VERSION",
    "OBD_COMPRESSION_PRESET",
    "GZIP_COMPRESSION_LEVEL",
    # Errors
    "AssetError",
    "FormatError",
    "UnsupportedVersionError",
    "CompressionError",
    "ValidationError",
    # Utils
    "read_uint32",
    "read_uint16",
    "read_uint8",
    "read_int8",
    "read_int16",
    "read_int32",
    "write_uint32",
    "write_uint16",
    "write_uint8",
    "write_int8",
    "write_int16",
    "write_int32",
    "write_string",
    "ByteReader",
    "read_file_to_bytes",
    "write_bytes_to_file",
    "string_value_to_int",
    "read_json_file",
    "write_json_file",
    "validate_path_exists_and_is_dir",
    "sanitize_file_name",
    # Constants
    "SEPARATOR_LINE_LENGTH",
    "SPRITE_SIZE",
    "SPRITE_PIXELS",
    "SPRITE_CHANNELS",
    "SPRITE_BYTES",
    "TRANSPARENCY_KEY",
    "THING_ID_BASE",
    "CATEGORY_ORDER",
    "CATEGORY_CODES",
    "CATEGORY_FROM_CODE",
]
