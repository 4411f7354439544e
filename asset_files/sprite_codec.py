"""
Run-length sprite codec.

A sprite blob is the 3-byte transparency key, a u16 length of the run stream,
then repeated (u16 skip, u16 run, run * RGBA) chunks covering the 32x32 pixels
in row-major order. Trailing transparent pixels are not stored.
"""

import numpy as np

from data import (
    ByteReader,
    FormatError,
    ValidationError,
    read_uint16,
    write_uint16,
    SPRITE_SIZE,
    SPRITE_PIXELS,
    SPRITE_CHANNELS,
    TRANSPARENCY_KEY,
)
from .constants import SPRITE_BLOB_HEADER_LEN


def blank_bitmap() -> np.ndarray:
    return np.zeros((SPRITE_SIZE, SPRITE_SIZE, SPRITE_CHANNELS), dtype=np.uint8)


def is_blank(bitmap: np.ndarray) -> bool:
    """True when no pixel has a non-zero alpha."""
    return not np.any(bitmap[..., 3])


def validate_bitmap(bitmap: np.ndarray) -> np.ndarray:
    """Return the bitmap as a contiguous (32, 32, 4) uint8 array."""
    array = np.asarray(bitmap)
    if array.shape == (SPRITE_PIXELS * SPRITE_CHANNELS,):
        array = array.reshape(SPRITE_SIZE, SPRITE_SIZE, SPRITE_CHANNELS)
    if array.shape != (SPRITE_SIZE, SPRITE_SIZE, SPRITE_CHANNELS):
        raise ValidationError(
            f"Sprite bitmap must be {SPRITE_SIZE}x{SPRITE_SIZE} RGBA, got shape {array.shape}"
        )
    return np.ascontiguousarray(array, dtype=np.uint8)


def blob_size(payload: bytes, offset: int) -> int:
    """Total size of the blob at offset, header included."""
    if offset < 0 or offset + SPRITE_BLOB_HEADER_LEN > len(payload):
        raise FormatError(f"Sprite blob header out of range at offset {offset}")
    return SPRITE_BLOB_HEADER_LEN + read_uint16(payload, offset + 3)


def sprite_blob(payload: bytes, offset: int) -> bytes:
    """Slice the encoded blob at offset verbatim."""
    size = blob_size(payload, offset)
    if offset + size > len(payload):
        raise FormatError(
            f"Truncated sprite blob at offset {offset}: declared {size} bytes, "
            f"only {len(payload) - offset} left"
        )
    return bytes(payload[offset : offset + size])


def decode_sprite(payload: bytes, offset: int = 0) -> np.ndarray:
    """
    Decode the sprite blob starting at offset into a (32, 32, 4) RGBA array.

    Raises:
        FormatError: if the blob is truncated or its runs overflow the sprite.
    """
    blob = sprite_blob(payload, offset)
    reader = ByteReader(blob, SPRITE_BLOB_HEADER_LEN, context="sprite blob")

    pixels = np.zeros((SPRITE_PIXELS, SPRITE_CHANNELS), dtype=np.uint8)
    ptr = 0
    while reader.remaining() > 0:
        skip = reader.u16()
        run = reader.u16()
        ptr += skip
        if ptr + run > SPRITE_PIXELS:
            raise FormatError(
                f"Sprite run overflows {SPRITE_PIXELS} pixels at offset {offset}"
            )
        if run:
            chunk = reader.bytes(run * SPRITE_CHANNELS)
            pixels[ptr : ptr + run] = np.frombuffer(chunk, dtype=np.uint8).reshape(
                run, SPRITE_CHANNELS
            )
        ptr += run

    return pixels.reshape(SPRITE_SIZE, SPRITE_SIZE, SPRITE_CHANNELS)


def encode_sprite(bitmap: np.ndarray) -> bytes:
    """Encode a (32, 32, 4) RGBA bitmap into a sprite blob."""
    pixels = validate_bitmap(bitmap).reshape(SPRITE_PIXELS, SPRITE_CHANNELS)
    opaque = pixels[:, 3] != 0

    # Run boundaries: starts where alpha becomes non-zero, ends where it drops
    edges = np.diff(np.concatenate(([0], opaque.view(np.int8), [0])))
    starts = np.flatnonzero(edges == 1)
    ends = np.flatnonzero(edges == -1)

    stream = bytearray()
    ptr = 0
    for start, end in zip(starts, ends):
        start, end = int(start), int(end)
        stream.extend(write_uint16(start - ptr))
        stream.extend(write_uint16(end - start))
        stream.extend(pixels[start:end].tobytes())
        ptr = end

    return TRANSPARENCY_KEY + write_uint16(len(stream)) + bytes(stream)


def rgba_to_argb(bitmap: np.ndarray) -> bytes:
    """Reorder RGBA pixels to the big-endian ARGB byte order."""
    pixels = validate_bitmap(bitmap)
    return pixels[..., [3, 0, 1, 2]].tobytes()


def argb_to_rgba(data: bytes) -> np.ndarray:
    pixels = np.frombuffer(data, dtype=np.uint8)
    if pixels.size != SPRITE_PIXELS * SPRITE_CHANNELS:
        raise FormatError(
            f"ARGB sprite must be {SPRITE_PIXELS * SPRITE_CHANNELS} bytes, got {pixels.size}"
        )
    pixels = pixels.reshape(SPRITE_SIZE, SPRITE_SIZE, SPRITE_CHANNELS)
    return np.ascontiguousarray(pixels[..., [1, 2, 3, 0]])
