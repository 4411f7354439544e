"""
Constants shared by the container, editor and interchange modules.
"""

SEPARATOR_LINE_LENGTH = 60

SPRITE_SIZE = 32
SPRITE_PIXELS = SPRITE_SIZE * SPRITE_SIZE
SPRITE_CHANNELS = 4
SPRITE_BYTES = SPRITE_PIXELS * SPRITE_CHANNELS

# Magenta, written in front of every encoded sprite and ignored on read
TRANSPARENCY_KEY = b"\xff\x00\xff"

# First thing ID of the catalogue; items occupy [THING_ID_BASE, item counter]
THING_ID_BASE = 100

CATEGORY_ORDER = ("item", "outfit", "effect", "distance")

CATEGORY_CODES = {
    "item": 1,
    "outfit": 2,
    "effect": 3,
    "distance": 4,
}

CATEGORY_FROM_CODE = {v: k for k, v in CATEGORY_CODES.items()}
