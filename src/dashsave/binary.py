"""Primitive readers and writers for the binary save record.

The record is a flat little-endian stream with no field tags:

- int32: 4 bytes, signed
- float32: 4 bytes, IEEE-754 single precision
- bool: 1 byte (0 = false, anything else = true)
- string: UTF-8 bytes prefixed by their length as a 7-bit variable-length
  integer (low groups first, high bit set on every byte but the last)

Fields carry no length information beyond what these encodings provide, so
a reader that runs out of bytes cannot recover and raises MalformedRecord.
"""
from __future__ import annotations

import struct
from typing import List

from .errors import MalformedRecord, SaveValidationError

_INT32 = struct.Struct("<i")
_FLOAT32 = struct.Struct("<f")

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

# Lowest finite float32; used as the "never set" marker for audio gains.
FLOAT32_LOWEST = -3.4028234663852886e38

_MAX_VARINT_BYTES = 5


def as_float32(value: float) -> float:
    """Round ``value`` to the nearest float32, as it would read back from disk."""
    try:
        return _FLOAT32.unpack(_FLOAT32.pack(float(value)))[0]
    except (OverflowError, struct.error) as e:
        raise SaveValidationError(f"{value!r} does not fit in a float32") from e


class RecordWriter:
    """Accumulates primitive values into a record buffer."""

    def __init__(self) -> None:
        self._chunks: List[bytes] = []

    def write_int32(self, value: int) -> None:
        if not isinstance(value, int) or isinstance(value, bool):
            raise SaveValidationError(f"Expected int, got {type(value).__name__}")
        if value < INT32_MIN or value > INT32_MAX:
            raise SaveValidationError(f"{value} does not fit in an int32")
        self._chunks.append(_INT32.pack(value))

    def write_float32(self, value: float) -> None:
        try:
            self._chunks.append(_FLOAT32.pack(float(value)))
        except (OverflowError, struct.error) as e:
            raise SaveValidationError(f"{value!r} does not fit in a float32") from e

    def write_bool(self, value: bool) -> None:
        self._chunks.append(b"\x01" if value else b"\x00")

    def write_string(self, value: str) -> None:
        if not isinstance(value, str):
            raise SaveValidationError(f"Expected str, got {type(value).__name__}")
        data = value.encode("utf-8")
        self._write_varint(len(data))
        self._chunks.append(data)

    def write_count(self, count: int) -> None:
        """Write a collection length prefix."""
        self.write_int32(count)

    def _write_varint(self, value: int) -> None:
        out = bytearray()
        while value >= 0x80:
            out.append((value & 0x7F) | 0x80)
            value >>= 7
        out.append(value)
        self._chunks.append(bytes(out))

    def getvalue(self) -> bytes:
        return b"".join(self._chunks)


class RecordReader:
    """Sequential reader over a record buffer.

    Every read checks that enough bytes remain and raises MalformedRecord
    (with the failing offset) otherwise.
    """

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    @property
    def offset(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def _take(self, size: int, what: str) -> bytes:
        if self.remaining < size:
            raise MalformedRecord(
                f"Record truncated reading {what} at offset {self._pos} "
                f"({self.remaining} of {size} bytes left)"
            )
        chunk = self._data[self._pos : self._pos + size]
        self._pos += size
        return chunk

    def read_int32(self) -> int:
        return _INT32.unpack(self._take(4, "int32"))[0]

    def read_float32(self) -> float:
        return _FLOAT32.unpack(self._take(4, "float32"))[0]

    def read_bool(self) -> bool:
        return self._take(1, "bool") != b"\x00"

    def read_string(self) -> str:
        length = self._read_varint()
        raw = self._take(length, "string")
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedRecord(f"Invalid UTF-8 string ending at offset {self._pos}") from e

    def read_count(self, what: str) -> int:
        """Read a collection length prefix; negative lengths are malformed."""
        count = self.read_int32()
        if count < 0:
            raise MalformedRecord(f"Negative {what} count {count} at offset {self._pos - 4}")
        return count

    def _read_varint(self) -> int:
        result = 0
        for i in range(_MAX_VARINT_BYTES):
            byte = self._take(1, "string length")[0]
            result |= (byte & 0x7F) << (7 * i)
            if not byte & 0x80:
                return result
        raise MalformedRecord(f"String length prefix too long at offset {self._pos}")
