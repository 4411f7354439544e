"""
Thing flags and the tagged flag byte stream shared by the catalogue and
interchange formats.

Flags are keyed by a canonical ``Attr`` value. Each attribute has one payload
kind; the wire byte for an attribute depends on the layout (catalogue content
version or interchange file), so every layout carries its own tag table.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Iterator, Optional, Tuple

from data import (
    ByteReader,
    FormatError,
    ValidationError,
    write_uint8,
    write_uint16,
    write_int16,
    write_string,
)
from .constants import LAST_FLAG, Versions


class Attr(IntEnum):
    GROUND = 0
    GROUND_BORDER = 1
    ON_BOTTOM = 2
    ON_TOP = 3
    CONTAINER = 4
    STACKABLE = 5
    FORCE_USE = 6
    MULTI_USE = 7
    WRITABLE = 8
    WRITABLE_ONCE = 9
    FLUID_CONTAINER = 10
    SPLASH = 11
    NOT_WALKABLE = 12
    NOT_MOVEABLE = 13
    BLOCK_PROJECTILE = 14
    NOT_PATHABLE = 15
    PICKUPABLE = 16
    HANGABLE = 17
    HOOK_SOUTH = 18
    HOOK_EAST = 19
    ROTATEABLE = 20
    LIGHT = 21
    DONT_HIDE = 22
    TRANSLUCENT = 23
    DISPLACEMENT = 24
    ELEVATION = 25
    LYING_CORPSE = 26
    ANIMATE_ALWAYS = 27
    MINIMAP_COLOR = 28
    LENS_HELP = 29
    FULL_GROUND = 30
    LOOK = 31
    CLOTH = 32
    MARKET = 33
    DEFAULT_ACTION = 34
    WRAPABLE = 35
    UNWRAPABLE = 36
    TOP_EFFECT = 37
    OPACITY = 100
    NOT_PRE_WALKABLE = 101
    USABLE = 102
    FLOOR_CHANGE = 252
    NO_MOVE_ANIMATION = 253
    CHARGEABLE = 254


@dataclass
class Light:
    level: int = 0
    color: int = 0


@dataclass
class Offset:
    x: int = 0
    y: int = 0


@dataclass
class Market:
    category: int = 0
    trade_as: int = 0
    show_as: int = 0
    name: str = ""
    restrict_vocation: int = 0
    required_level: int = 0


class Payload:
    NONE = "none"
    U16 = "u16"
    LIGHT = "light"
    OFFSET = "offset"
    MARKET = "market"


PAYLOAD_KINDS: Dict[Attr, str] = {attr: Payload.NONE for attr in Attr}
PAYLOAD_KINDS.update(
    {
        Attr.GROUND: Payload.U16,  # ground speed
        Attr.WRITABLE: Payload.U16,  # max text length
        Attr.WRITABLE_ONCE: Payload.U16,
        Attr.ELEVATION: Payload.U16,
        Attr.MINIMAP_COLOR: Payload.U16,
        Attr.LENS_HELP: Payload.U16,
        Attr.CLOTH: Payload.U16,  # slot
        Attr.DEFAULT_ACTION: Payload.U16,  # action id
        Attr.LIGHT: Payload.LIGHT,
        Attr.DISPLACEMENT: Payload.OFFSET,
        Attr.MARKET: Payload.MARKET,
    }
)

_PAYLOAD_TYPES = {
    Payload.NONE: type(None),
    Payload.U16: int,
    Payload.LIGHT: Light,
    Payload.OFFSET: Offset,
    Payload.MARKET: Market,
}


def _default_payload(attr: Attr) -> Any:
    kind = PAYLOAD_KINDS[attr]
    if kind == Payload.U16:
        return 0
    if kind == Payload.LIGHT:
        return Light()
    if kind == Payload.OFFSET:
        return Offset()
    if kind == Payload.MARKET:
        return Market()
    return None


class ThingFlags:
    """Set of active flags, each with the payload its attribute carries."""

    def __init__(self, values: Optional[Dict[Attr, Any]] = None):
        self._values: Dict[Attr, Any] = {}
        for attr, value in (values or {}).items():
            self.set(attr, value)

    def has(self, attr: Attr) -> bool:
        return attr in self._values

    def get(self, attr: Attr, default: Any = None) -> Any:
        return self._values.get(attr, default)

    def set(self, attr: Attr, value: Any = None) -> None:
        """Activate a flag. A missing payload gets the attribute's default."""
        attr = Attr(attr)
        if value is None:
            value = _default_payload(attr)
        expected = _PAYLOAD_TYPES[PAYLOAD_KINDS[attr]]
        if not isinstance(value, expected) or isinstance(value, bool):
            raise ValidationError(
                f"Flag {attr.name} expects {expected.__name__}, got {type(value).__name__}"
            )
        if PAYLOAD_KINDS[attr] == Payload.U16 and not 0 <= value <= 0xFFFF:
            raise ValidationError(f"Flag {attr.name} value out of range: {value}")
        self._values[attr] = value

    def clear(self, attr: Attr) -> None:
        self._values.pop(attr, None)

    def items(self) -> Iterator[Tuple[Attr, Any]]:
        for attr in sorted(self._values):
            yield attr, self._values[attr]

    def copy(self) -> "ThingFlags":
        copied = ThingFlags()
        for attr, value in self._values.items():
            if isinstance(value, (Light, Offset, Market)):
                value = type(value)(**vars(value))
            copied._values[attr] = value
        return copied

    def __iter__(self) -> Iterator[Attr]:
        return iter(sorted(self._values))

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, attr: object) -> bool:
        return attr in self._values

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ThingFlags):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        active = ", ".join(attr.name.lower() for attr in self)
        return f"ThingFlags({active})"


@dataclass(frozen=True)
class FlagLayout:
    """Wire mapping for one flavour of the flag byte stream."""

    name: str
    decode_table: Dict[int, Attr] = field(hash=False)
    has_offset_payload: bool = True
    signed_offset: bool = False
    string_encoding: str = "utf-8"

    @property
    def encode_table(self) -> Dict[Attr, int]:
        table: Dict[Attr, int] = {}
        for raw in sorted(self.decode_table):
            table.setdefault(self.decode_table[raw], raw)
        return table


def _modern_table() -> Dict[int, Attr]:
    table = {raw: Attr(raw) for raw in range(16)}
    table[0x10] = Attr.NO_MOVE_ANIMATION
    for raw in range(0x11, 0x27):
        table[raw] = Attr(raw - 1)
    table[0xFC] = Attr.CHARGEABLE
    table[0xFD] = Attr.FLOOR_CHANGE
    table[0xFE] = Attr.USABLE
    return table


def _identity_table() -> Dict[int, Attr]:
    return {int(attr): attr for attr in Attr if attr != Attr.USABLE}


def _table_755() -> Dict[int, Attr]:
    table = _identity_table()
    table[23] = Attr.FLOOR_CHANGE
    return table


def _table_740() -> Dict[int, Attr]:
    table = _identity_table()
    for raw in range(1, 16):
        table[raw] = Attr(raw + 1)
    table[5] = Attr.MULTI_USE
    table[6] = Attr.FORCE_USE
    table.update(
        {
            16: Attr.LIGHT,
            17: Attr.FLOOR_CHANGE,
            18: Attr.FULL_GROUND,
            19: Attr.ELEVATION,
            20: Attr.DISPLACEMENT,
            22: Attr.MINIMAP_COLOR,
            23: Attr.ROTATEABLE,
            24: Attr.LYING_CORPSE,
            25: Attr.HANGABLE,
            26: Attr.HOOK_SOUTH,
            27: Attr.HOOK_EAST,
            28: Attr.ANIMATE_ALWAYS,
        }
    )
    return table


def _catalogue_modern_table() -> Dict[int, Attr]:
    table = _modern_table()
    table[0x65] = Attr.OPACITY
    table[0x66] = Attr.NOT_PRE_WALKABLE
    return table


MODERN_FLAG_LAYOUT = FlagLayout("modern", _catalogue_modern_table())
FLAG_LAYOUT_755 = FlagLayout("755", _table_755())
FLAG_LAYOUT_740 = FlagLayout("740", _table_740(), has_offset_payload=False)

OBD_FLAG_LAYOUT = FlagLayout(
    "obd", _modern_table(), signed_offset=True, string_encoding="latin-1"
)


def flag_layout_for_version(version: int) -> FlagLayout:
    if version >= Versions.MODERN_FLAGS:
        return MODERN_FLAG_LAYOUT
    if version >= Versions.PATTERN_Z:
        return FLAG_LAYOUT_755
    return FLAG_LAYOUT_740


def read_flags(reader: ByteReader, layout: FlagLayout) -> ThingFlags:
    """Read tagged flag bytes up to and including the terminator."""
    flags = ThingFlags()
    while True:
        tag_pos = reader.pos
        raw = reader.u8()
        if raw == LAST_FLAG:
            return flags

        attr = layout.decode_table.get(raw)
        if attr is None:
            raise FormatError(
                f"Unknown flag 0x{raw:02x} at offset {tag_pos} ({layout.name} layout)"
            )

        kind = PAYLOAD_KINDS[attr]
        if kind == Payload.NONE:
            value = None
        elif kind == Payload.U16:
            value = reader.u16()
        elif kind == Payload.LIGHT:
            value = Light(level=reader.u16(), color=reader.u16())
        elif kind == Payload.OFFSET:
            if not layout.has_offset_payload:
                value = Offset()
            elif layout.signed_offset:
                value = Offset(x=max(0, reader.i16()), y=max(0, reader.i16()))
            else:
                value = Offset(x=reader.u16(), y=reader.u16())
        else:
            value = Market(
                category=reader.u16(),
                trade_as=reader.u16(),
                show_as=reader.u16(),
                name=reader.string(layout.string_encoding),
                restrict_vocation=reader.u16(),
                required_level=reader.u16(),
            )
        flags.set(attr, value)


def _write_offset_component(value: int, signed: bool) -> bytes:
    if signed:
        return write_int16(min(value, 0x7FFF))
    return write_uint16(value & 0xFFFF)


def write_flags(flags: ThingFlags, layout: FlagLayout) -> bytes:
    """Write active flags ordered by wire tag, followed by the terminator."""
    encode_table = layout.encode_table
    tagged = []
    for attr, value in flags.items():
        raw = encode_table.get(attr)
        if raw is None:
            raise FormatError(
                f"Flag {attr.name} cannot be written in the {layout.name} layout"
            )
        tagged.append((raw, attr, value))

    result = bytearray()
    for raw, attr, value in sorted(tagged, key=lambda t: t[0]):
        result.extend(write_uint8(raw))
        kind = PAYLOAD_KINDS[attr]
        if kind == Payload.U16:
            result.extend(write_uint16(value))
        elif kind == Payload.LIGHT:
            result.extend(write_uint16(value.level))
            result.extend(write_uint16(value.color))
        elif kind == Payload.OFFSET:
            if layout.has_offset_payload:
                result.extend(_write_offset_component(value.x, layout.signed_offset))
                result.extend(_write_offset_component(value.y, layout.signed_offset))
        elif kind == Payload.MARKET:
            result.extend(write_uint16(value.category))
            result.extend(write_uint16(value.trade_as))
            result.extend(write_uint16(value.show_as))
            result.extend(write_string(value.name, layout.string_encoding))
            result.extend(write_uint16(value.restrict_vocation))
            result.extend(write_uint16(value.required_level))

    result.extend(write_uint8(LAST_FLAG))
    return bytes(result)
