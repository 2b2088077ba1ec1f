"""In-memory byte streams that can also be read and written one bit at a time.

Bits are packed into bytes starting from the least significant bit. Bit
operations and byte operations may be mixed: after any byte-level read or
write, the next bit operation starts on a fresh byte.
"""

from __future__ import annotations

import re

_BITS_IN_BYTE = 8
_INTEGER = re.compile(rb"\s*([+-]?\d+)")


class BitReader:
    """Reads bytes, whitespace-separated integers and single bits from data."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0
        self._cur_byte = 0
        self._bit_pos = _BITS_IN_BYTE
        self._last_tell = 0

    def read_bit(self) -> int:
        """Return the next bit, 0 or 1; raise EOFError when the data is exhausted."""
        if self._last_tell != self._pos or self._bit_pos == _BITS_IN_BYTE:
            if self._pos >= len(self._data):
                raise EOFError("no more bits to read")
            self._cur_byte = self._data[self._pos]
            self._pos += 1
            self._bit_pos = 0
            self._last_tell = self._pos
        bit = (self._cur_byte >> self._bit_pos) & 1
        self._bit_pos += 1
        return bit

    def read_byte(self) -> int:
        """Return the next whole byte; raise EOFError at the end of the data."""
        if self._pos >= len(self._data):
            raise EOFError("no more bytes to read")
        value = self._data[self._pos]
        self._pos += 1
        return value

    def read_int(self) -> int:
        """Skip whitespace and read a signed decimal integer.

        The character following the digits is left unread. Raises EOFError
        if only whitespace remains and ValueError if no integer follows.
        """
        match = _INTEGER.match(self._data, self._pos)
        if match is None:
            if not self._data[self._pos:].strip():
                raise EOFError("no integer to read before end of data")
            raise ValueError(f"expected an integer at offset {self._pos}")
        self._pos = match.end()
        return int(match.group(1))

    def rewind(self) -> None:
        """Start reading again from the beginning of the data."""
        self._pos = 0
        self._cur_byte = 0
        self._bit_pos = _BITS_IN_BYTE
        self._last_tell = 0

    def size(self) -> int:
        """Return the length of the data in bytes."""
        return len(self._data)


class BitWriter:
    """Collects bytes and single bits into an in-memory buffer."""

    def __init__(self) -> None:
        self._buffer = bytearray()
        self._bit_pos = _BITS_IN_BYTE
        self._last_tell = 0

    def write_bit(self, bit: int) -> None:
        """Append one bit; raise ValueError unless it is 0 or 1."""
        if bit not in (0, 1):
            raise ValueError("write_bit expects 0 or 1")
        if self._last_tell != len(self._buffer) or self._bit_pos == _BITS_IN_BYTE:
            self._buffer.append(0)
            self._bit_pos = 0
        if bit:
            self._buffer[-1] |= 1 << self._bit_pos
        self._bit_pos += 1
        self._last_tell = len(self._buffer)

    def write_bytes(self, data: bytes) -> None:
        """Append whole bytes; any following bits start on a new byte."""
        self._buffer.extend(data)

    def getvalue(self) -> bytes:
        """Return everything written so far."""
        return bytes(self._buffer)

    def size(self) -> int:
        """Return the number of bytes written so far."""
        return len(self._buffer)