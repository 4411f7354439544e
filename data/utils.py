import json
import struct
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import FormatError


def read_uint32(data: bytes, offset: int, little_endian: bool = True) -> int:
    fmt = "<I" if little_endian else ">I"
    return struct.unpack_from(fmt, data, offset)[0]


def read_uint16(data: bytes, offset: int, little_endian: bool = True) -> int:
    fmt = "<H" if little_endian else ">H"
    return struct.unpack_from(fmt, data, offset)[0]


def read_uint8(data: bytes, offset: int) -> int:
    return data[offset]


def read_int8(data: bytes, offset: int) -> int:
    return struct.unpack_from("b", data, offset)[0]


def read_int16(data: bytes, offset: int, little_endian: bool = True) -> int:
    fmt = "<h" if little_endian else ">h"
    return struct.unpack_from(fmt, data, offset)[0]


def read_int32(data: bytes, offset: int, little_endian: bool = True) -> int:
    fmt = "<i" if little_endian else ">i"
    return struct.unpack_from(fmt, data, offset)[0]


def write_uint32(value: int, little_endian: bool = True) -> bytes:
    fmt = "<I" if little_endian else ">I"
    return struct.pack(fmt, value)


def write_uint16(value: int, little_endian: bool = True) -> bytes:
    fmt = "<H" if little_endian else ">H"
    return struct.pack(fmt, value)


def write_uint8(value: int) -> bytes:
    return struct.pack("B", value)


def write_int8(value: int) -> bytes:
    return struct.pack("b", value)


def write_int16(value: int, little_endian: bool = True) -> bytes:
    fmt = "<h" if little_endian else ">h"
    return struct.pack(fmt, value)


def write_int32(value: int, little_endian: bool = True) -> bytes:
    fmt = "<i" if little_endian else ">i"
    return struct.pack(fmt, value)


class ByteReader:
    """Sequential little-endian reader that raises FormatError on truncation."""

    def __init__(self, data: bytes, offset: int = 0, context: str = "buffer"):
        self.data = data
        self.pos = offset
        self.context = context

    def remaining(self) -> int:
        return len(self.data) - self.pos

    def _require(self, size: int) -> None:
        if size < 0 or self.pos + size > len(self.data):
            raise FormatError(
                f"Truncated {self.context}: need {size} byte(s) at offset {self.pos}, "
                f"only {max(0, len(self.data) - self.pos)} left"
            )

    def u8(self) -> int:
        self._require(1)
        value = read_uint8(self.data, self.pos)
        self.pos += 1
        return value

    def i8(self) -> int:
        self._require(1)
        value = read_int8(self.data, self.pos)
        self.pos += 1
        return value

    def u16(self) -> int:
        self._require(2)
        value = read_uint16(self.data, self.pos)
        self.pos += 2
        return value

    def i16(self) -> int:
        self._require(2)
        value = read_int16(self.data, self.pos)
        self.pos += 2
        return value

    def u32(self) -> int:
        self._require(4)
        value = read_uint32(self.data, self.pos)
        self.pos += 4
        return value

    def i32(self) -> int:
        self._require(4)
        value = read_int32(self.data, self.pos)
        self.pos += 4
        return value

    def bytes(self, size: int) -> bytes:
        self._require(size)
        value = bytes(self.data[self.pos : self.pos + size])
        self.pos += size
        return value

    def string(self, encoding: str = "utf-8") -> str:
        """Read a u16 length-prefixed string."""
        length = self.u16()
        raw = self.bytes(length)
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError as e:
            raise FormatError(f"Invalid string in {self.context}: {e}") from e


def write_string(value: str, encoding: str = "utf-8") -> bytes:
    raw = value.encode(encoding)
    return write_uint16(len(raw)) + raw


def read_file_to_bytes(filepath: Path) -> bytes:
    with open(filepath, "rb") as f:
        return f.read()


def write_bytes_to_file(filepath: Path, data: bytes) -> None:
    with open(filepath, "wb") as f:
        f.write(data)


def string_value_to_int(value: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"Could not parse value '{value}': {e}")


def read_json_file(filepath: Path) -> Optional[Dict[str, Any]]:
    if not filepath.exists():
        return None

    try:
        with open(filepath, "r", encoding="utf-8") as f:
            return json.load(f)
    except (json.JSONDecodeError, IOError, OSError):
        return None


def write_json_file(filepath: Path, data: Dict[str, Any], indent: int = 4) -> None:
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent, ensure_ascii=False)


def validate_path_exists_and_is_dir(path: Path, path_description: str = "Path") -> bool:
    if not path.exists():
        print(f"[ERROR] {path_description} does not exist: {path}\n")
        return False

    if not path.is_dir():
        print(f"[ERROR] Path is not a directory: {path}\n")
        return False

    return True


def sanitize_file_name(name: str) -> str:
    return "".join(c if c.isalnum() or c in "_-" else "_" for c in name)
