"""
Interchange (.obd) format for moving one thing between catalogues
"""

from .constants import ObdFormat, SPRITE_PIXEL_SIZE, OBD_EXTENSION

from .obd_codec import (
    ObdThing,
    encode_obd,
    decode_obd,
    decompress_obd,
    thing_from_obd,
    pixels_for_thing,
)

from .obd_io import read_obd, write_obd

__all__ = [
    # Constants
    "ObdFormat",
    "SPRITE_PIXEL_SIZE",
    "OBD_EXTENSION",
    # Codec
    "ObdThing",
    "encode_obd",
    "decode_obd",
    "decompress_obd",
    "thing_from_obd",
    "pixels_for_thing",
    # I/O
    "read_obd",
    "write_obd",
]
