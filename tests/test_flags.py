#!/usr/bin/env python3
"""
Tests for thing flags and the tagged flag byte stream.

Usage:
    pytest tests/test_flags.py
"""

import sys
from pathlib import Path

import pytest

script_dir = Path(__file__).parent
if str(script_dir.parent) not in sys.path:
    sys.path.insert(0, str(script_dir.parent))

from data import ByteReader, FormatError, ValidationError, write_int16
from asset_files import (
    Attr,
    Light,
    Market,
    Offset,
    ThingFlags,
    MODERN_FLAG_LAYOUT,
    OBD_FLAG_LAYOUT,
    flag_layout_for_version,
    read_flags,
    write_flags,
)
from asset_files.flags import FLAG_LAYOUT_740, FLAG_LAYOUT_755


def _read(data, layout):
    return read_flags(ByteReader(data), layout)


def test_set_uses_default_payload():
    flags = ThingFlags()
    flags.set(Attr.LIGHT)
    flags.set(Attr.STACKABLE)

    assert flags.get(Attr.LIGHT) == Light()
    assert flags.get(Attr.STACKABLE) is None
    assert Attr.STACKABLE in flags
    assert len(flags) == 2


def test_set_rejects_bad_payload():
    flags = ThingFlags()

    with pytest.raises(ValidationError):
        flags.set(Attr.GROUND, "fast")
    with pytest.raises(ValidationError):
        flags.set(Attr.GROUND, 70000)
    with pytest.raises(ValidationError):
        flags.set(Attr.LIGHT, Offset())


def test_copy_is_independent():
    flags = ThingFlags({Attr.LIGHT: Light(3, 215)})
    copied = flags.copy()
    copied.get(Attr.LIGHT).level = 7

    assert flags.get(Attr.LIGHT).level == 3
    assert flags != copied


def test_modern_round_trip():
    flags = ThingFlags(
        {
            Attr.GROUND: 150,
            Attr.LIGHT: Light(level=4, color=215),
            Attr.DISPLACEMENT: Offset(x=8, y=8),
            Attr.MARKET: Market(
                category=3, trade_as=2400, show_as=2400, name="Sword",
                restrict_vocation=1, required_level=20,
            ),
            Attr.DEFAULT_ACTION: 3,
            Attr.NO_MOVE_ANIMATION: None,
            Attr.USABLE: None,
            Attr.OPACITY: None,
        }
    )

    data = write_flags(flags, MODERN_FLAG_LAYOUT)

    assert data[-1] == 0xFF
    assert _read(data, MODERN_FLAG_LAYOUT) == flags


def test_modern_tag_bytes():
    assert write_flags(ThingFlags({Attr.NO_MOVE_ANIMATION: None}), MODERN_FLAG_LAYOUT) == b"\x10\xff"
    assert write_flags(ThingFlags({Attr.CHARGEABLE: None}), MODERN_FLAG_LAYOUT) == b"\xfc\xff"
    # Light shifts by one after the move-animation tag
    light = write_flags(ThingFlags({Attr.LIGHT: Light(1, 2)}), MODERN_FLAG_LAYOUT)
    assert light[0] == 0x16


def test_written_in_tag_order():
    flags = ThingFlags({Attr.USABLE: None, Attr.GROUND: 100, Attr.STACKABLE: None})
    data = write_flags(flags, MODERN_FLAG_LAYOUT)

    assert data == b"\x00" + b"\x64\x00" + b"\x05" + b"\xfe" + b"\xff"


def test_unknown_flag_raises():
    with pytest.raises(FormatError, match="Unknown flag 0x50"):
        _read(b"\x50\xff", MODERN_FLAG_LAYOUT)


def test_missing_terminator_raises():
    with pytest.raises(FormatError):
        _read(b"\x05", MODERN_FLAG_LAYOUT)


def test_layout_selection():
    assert flag_layout_for_version(1098) is MODERN_FLAG_LAYOUT
    assert flag_layout_for_version(860) is FLAG_LAYOUT_755
    assert flag_layout_for_version(740) is FLAG_LAYOUT_740


def test_740_layout():
    assert _read(b"\x05\xff", FLAG_LAYOUT_740) == ThingFlags({Attr.MULTI_USE: None})
    assert write_flags(ThingFlags({Attr.ON_BOTTOM: None}), FLAG_LAYOUT_740) == b"\x01\xff"

    # Displacement carries no payload in this layout
    flags = _read(b"\x14\xff", FLAG_LAYOUT_740)
    assert flags.get(Attr.DISPLACEMENT) == Offset()


def test_755_layout_floor_change():
    flags = ThingFlags({Attr.FLOOR_CHANGE: None})
    data = write_flags(flags, FLAG_LAYOUT_755)

    assert data == b"\x17\xff"
    assert _read(data, FLAG_LAYOUT_755) == flags

    with pytest.raises(FormatError):
        write_flags(ThingFlags({Attr.TRANSLUCENT: None}), FLAG_LAYOUT_755)


def test_obd_layout_clamps_negative_offsets():
    data = b"\x19" + write_int16(-5) + write_int16(7) + b"\xff"

    flags = _read(data, OBD_FLAG_LAYOUT)

    assert flags.get(Attr.DISPLACEMENT) == Offset(x=0, y=7)


def test_obd_layout_latin1_market_name():
    flags = ThingFlags({Attr.MARKET: Market(name="Épée")})
    data = write_flags(flags, OBD_FLAG_LAYOUT)

    assert "Épée".encode("latin-1") in data
    assert _read(data, OBD_FLAG_LAYOUT) == flags
