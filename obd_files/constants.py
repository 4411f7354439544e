"""
Interchange (.obd) file format constants.
"""

from data import SPRITE_BYTES


class ObdFormat:
    VERSION_3 = 300
    VERSION_2 = 200
    # Version 1 files start with the client version itself
    VERSION_1_MIN_CLIENT = 710
    MIN_LENGTH = 9  # version tag + client version + category + sprites offset
    SPRITES_OFFSET_POS = 5
    EXACT_SIZE = 32


SPRITE_PIXEL_SIZE = SPRITE_BYTES  # 32 * 32 ARGB

OBD_EXTENSION = ".obd"
