"""Huffman compression with a frequency header scrambled by a password.

The header holds the number of table entries as a 32-bit integer, then
each character as 8 bits and its frequency as a 32-bit integer, most
significant bit first. Every header bit is XORed with a pseudo-random
bit drawn from a generator seeded by the password. The Huffman-coded
data follows straight after, in the same bit stream.
"""

from __future__ import annotations

import hashlib
from typing import Dict, Mapping

from huffpack.bitstream import BitReader, BitWriter
from huffpack.encoding import (
    build_encoding_tree,
    decode,
    encode,
    get_frequency_table,
)
from huffpack.tree import PSEUDO_EOF

_MODULUS = 2**31 - 1
_MULTIPLIER = 16807
_INT_BITS = 32
_CHAR_BITS = 8
_INT_MIN = -(2 ** (_INT_BITS - 1))
_INT_MAX = 2 ** (_INT_BITS - 1) - 1


def _seed_from_password(password: str) -> int:
    digest = hashlib.sha256(password.encode("utf-8")).digest()
    seed = int.from_bytes(digest[:8], "big") % _MODULUS
    return seed or 1


class PasswordStream:
    """A keystream of pseudo-random bits derived from a password.

    The same password always yields the same sequence of bits.
    """

    def __init__(self, password: str) -> None:
        self._state = _seed_from_password(password)

    def _next_value(self) -> int:
        self._state = (self._state * _MULTIPLIER) % _MODULUS
        return self._state

    def next_bit(self, bit: int) -> int:
        """Return ``bit`` XORed with the next bit of the keystream."""
        return (int(bit) ^ self._next_value()) & 1


def _write_value(writer: BitWriter, stream: PasswordStream, value: int, width: int) -> None:
    for shift in range(width - 1, -1, -1):
        writer.write_bit(stream.next_bit((value >> shift) & 1))


def _read_unsigned(reader: BitReader, stream: PasswordStream, width: int) -> int:
    value = 0
    for _ in range(width):
        value = (value << 1) | stream.next_bit(reader.read_bit())
    return value


def _read_int(reader: BitReader, stream: PasswordStream) -> int:
    value = _read_unsigned(reader, stream, _INT_BITS)
    if value > _INT_MAX:
        value -= 2**_INT_BITS
    return value


def _check_int(value: int, what: str) -> None:
    if not _INT_MIN <= value <= _INT_MAX:
        raise ValueError(f"{what} {value} does not fit in 32 bits")


def write_encrypted_header(
    writer: BitWriter, frequencies: Mapping[int, int], password: str
) -> None:
    """Write the frequency table, scrambled with ``password``.

    Raises ValueError if PSEUDO_EOF is missing, a character is not a byte
    value or a number does not fit in 32 bits.
    """
    if PSEUDO_EOF not in frequencies:
        raise ValueError("No PSEUDO_EOF defined.")
    stream = PasswordStream(password)
    size = len(frequencies) - 1
    _check_int(size, "table size")
    _write_value(writer, stream, size, _INT_BITS)
    for character, frequency in sorted(frequencies.items()):
        if character == PSEUDO_EOF:
            continue
        if not 0 <= character <= 255:
            raise ValueError(f"character {character} cannot be written to a header")
        _check_int(frequency, "frequency")
        _write_value(writer, stream, character, _CHAR_BITS)
        _write_value(writer, stream, frequency, _INT_BITS)


def read_encrypted_header(reader: BitReader, password: str) -> Dict[int, int]:
    """Read a table written by :func:`write_encrypted_header` and add PSEUDO_EOF.

    With the wrong password the table read back is garbage. Raises
    EOFError if the data ends inside the header.
    """
    stream = PasswordStream(password)
    result: Dict[int, int] = {}
    entries = _read_int(reader, stream)
    for _ in range(entries):
        character = _read_unsigned(reader, stream, _CHAR_BITS)
        result[character] = _read_int(reader, stream)
    result[PSEUDO_EOF] = 1
    return dict(sorted(result.items()))


def compress(data: bytes, password: str) -> bytes:
    """Compress ``data`` behind a header scrambled with ``password``."""
    frequencies = get_frequency_table(data)
    tree = build_encoding_tree(frequencies)
    writer = BitWriter()
    write_encrypted_header(writer, frequencies, password)
    encode(data, tree, writer)
    return writer.getvalue()


def decompress(data: bytes, password: str) -> bytes:
    """Recover the original bytes from the output of :func:`compress`."""
    reader = BitReader(data)
    frequencies = read_encrypted_header(reader, password)
    tree = build_encoding_tree(frequencies)
    return decode(reader, tree)