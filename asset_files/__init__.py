"""
Catalogue and sprite container formats
"""

from .constants import (
    WrapperFormat,
    FileType,
    FeatureFlags,
    Versions,
)

from .flags import (
    Attr,
    Light,
    Offset,
    Market,
    PAYLOAD_KINDS,
    ThingFlags,
    FlagLayout,
    MODERN_FLAG_LAYOUT,
    OBD_FLAG_LAYOUT,
    flag_layout_for_version,
    read_flags,
    write_flags,
)

from .sprite_codec import (
    blank_bitmap,
    is_blank,
    validate_bitmap,
    decode_sprite,
    encode_sprite,
    sprite_blob,
    rgba_to_argb,
    argb_to_rgba,
)

from .header import (
    ContainerHeader,
    derive_feature_flags,
    read_container_header,
    patch_header_flags,
    is_wrapped_format,
    maybe_decompress,
    compress_buffer,
)

from .things import (
    FrameDuration,
    FrameGroup,
    Thing,
    ObjectData,
    SpriteData,
    category_range,
    category_of,
    display_id,
    things_in_category,
    sprite_grid,
)

from .frame_groups import (
    FrameGroupLayout,
    catalogue_group_layout,
    read_frame_group_header,
    write_frame_group_header,
)

from .object_parser import ObjectParser
from .object_writer import ObjectWriter
from .sprite_parser import SpriteParser
from .sprite_writer import SpriteWriter

from .asset_io import (
    parse_object_data,
    parse_sprite_data,
    assemble_object_data,
    assemble_sprite_data,
    load_object_data,
    load_sprite_data,
    save_object_data,
    save_sprite_data,
)

__all__ = [
    # Constants
    "WrapperFormat",
    "FileType",
    "FeatureFlags",
    "Versions",
    # Flags
    "Attr",
    "Light",
    "Offset",
    "Market",
    "PAYLOAD_KINDS",
    "ThingFlags",
    "FlagLayout",
    "MODERN_FLAG_LAYOUT",
    "OBD_FLAG_LAYOUT",
    "flag_layout_for_version",
    "read_flags",
    "write_flags",
    # Sprite codec
    "blank_bitmap",
    "is_blank",
    "validate_bitmap",
    "decode_sprite",
    "encode_sprite",
    "sprite_blob",
    "rgba_to_argb",
    "argb_to_rgba",
    # Header
    "ContainerHeader",
    "derive_feature_flags",
    "read_container_header",
    "patch_header_flags",
    "is_wrapped_format",
    "maybe_decompress",
    "compress_buffer",
    # Object model
    "FrameDuration",
    "FrameGroup",
    "Thing",
    "ObjectData",
    "SpriteData",
    "category_range",
    "category_of",
    "display_id",
    "things_in_category",
    "sprite_grid",
    # Frame groups
    "FrameGroupLayout",
    "catalogue_group_layout",
    "read_frame_group_header",
    "write_frame_group_header",
    # Parsers and writers
    "ObjectParser",
    "ObjectWriter",
    "SpriteParser",
    "SpriteWriter",
    # I/O
    "parse_object_data",
    "parse_sprite_data",
    "assemble_object_data",
    "assemble_sprite_data",
    "load_object_data",
    "load_sprite_data",
    "save_object_data",
    "save_sprite_data",
]
