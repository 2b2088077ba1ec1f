"""Huffman compression: frequency tables, encoding trees, headers and bit coding."""

from __future__ import annotations

import heapq
from collections import Counter
from itertools import count
from typing import Dict, Iterator, Mapping, Tuple

from huffpack.bitstream import BitReader, BitWriter
from huffpack.tree import NOT_A_CHAR, PSEUDO_EOF, Node


def get_frequency_table(data: bytes) -> Dict[int, int]:
    """Count each byte of ``data`` and add one occurrence of PSEUDO_EOF.

    The returned mapping is ordered by character value.
    """
    counts = Counter(bytes(data))
    counts[PSEUDO_EOF] = 1
    return dict(sorted(counts.items()))


def build_encoding_tree(frequencies: Mapping[int, int]) -> Node:
    """Build a Huffman tree from a character-to-frequency mapping.

    Leaves are queued in order of character value; among nodes of equal
    weight the one queued first is merged first, so the tree is the same
    every time for the same frequencies.
    """
    if not frequencies:
        raise ValueError("cannot build an encoding tree from no frequencies")
    order = count()
    queue: list[Tuple[int, int, Node]] = []
    for character, weight in sorted(frequencies.items()):
        heapq.heappush(queue, (weight, next(order), Node(character, weight)))
    while len(queue) > 1:
        _, _, zero = heapq.heappop(queue)
        _, _, one = heapq.heappop(queue)
        parent = Node(NOT_A_CHAR, zero.weight + one.weight, zero, one)
        heapq.heappush(queue, (parent.weight, next(order), parent))
    return queue[0][2]


def _leaf_paths(node: Node | None, path: str) -> Iterator[Tuple[int, str]]:
    if node is None:
        return
    if node.is_leaf():
        yield node.character, path
        return
    yield from _leaf_paths(node.zero, path + "0")
    yield from _leaf_paths(node.one, path + "1")


def encoding_table(tree: Node) -> Dict[int, str]:
    """Map every character in ``tree`` to its code, a string of '0' and '1'."""
    return dict(_leaf_paths(tree, ""))


def _write_code(writer: BitWriter, code: str) -> None:
    for digit in code:
        writer.write_bit(digit == "1")


def encode(data: bytes, tree: Node, writer: BitWriter) -> None:
    """Write the code of every byte of ``data``, then the PSEUDO_EOF code."""
    table = encoding_table(tree)
    for byte in bytes(data):
        try:
            code = table[byte]
        except KeyError:
            raise ValueError(f"byte {byte} has no code in the encoding tree") from None
        _write_code(writer, code)
    try:
        _write_code(writer, table[PSEUDO_EOF])
    except KeyError:
        raise ValueError("the encoding tree has no PSEUDO_EOF") from None


def decode(reader: BitReader, tree: Node) -> bytes:
    """Read bits and walk ``tree`` until PSEUDO_EOF; return the decoded bytes.

    Raises EOFError if the bits run out before PSEUDO_EOF is reached.
    """
    output = bytearray()
    current = tree
    while True:
        if current.is_leaf():
            if current.character == PSEUDO_EOF:
                break
            output.append(current.character)
            current = tree
            continue
        nxt = current.one if reader.read_bit() else current.zero
        if nxt is None:
            raise ValueError("malformed encoding tree: missing child")
        current = nxt
    return bytes(output)


def write_header(writer: BitWriter, frequencies: Mapping[int, int]) -> None:
    """Write the frequency table as text ahead of the encoded bits.

    The format is the number of entries followed by a space, then for each
    character other than PSEUDO_EOF the character byte, its frequency in
    decimal and a space. Raises ValueError if PSEUDO_EOF is missing.
    """
    if PSEUDO_EOF not in frequencies:
        raise ValueError("No PSEUDO_EOF defined.")
    parts = [f"{len(frequencies) - 1} ".encode("ascii")]
    for character, frequency in sorted(frequencies.items()):
        if character == PSEUDO_EOF:
            continue
        if not 0 <= character <= 255:
            raise ValueError(f"character {character} cannot be written to a header")
        parts.append(bytes([character]) + f"{frequency} ".encode("ascii"))
    writer.write_bytes(b"".join(parts))


def read_header(reader: BitReader) -> Dict[int, int]:
    """Read a table written by :func:`write_header` and add PSEUDO_EOF."""
    result: Dict[int, int] = {}
    entries = reader.read_int()
    reader.read_byte()
    for _ in range(entries):
        character = reader.read_byte()
        frequency = reader.read_int()
        reader.read_byte()
        result[character] = frequency
    result[PSEUDO_EOF] = 1
    return dict(sorted(result.items()))


def compress(data: bytes) -> bytes:
    """Compress ``data`` into a header followed by Huffman-coded bits."""
    frequencies = get_frequency_table(data)
    tree = build_encoding_tree(frequencies)
    writer = BitWriter()
    write_header(writer, frequencies)
    encode(data, tree, writer)
    return writer.getvalue()


def decompress(data: bytes) -> bytes:
    """Recover the original bytes from the output of :func:`compress`."""
    reader = BitReader(data)
    frequencies = read_header(reader)
    tree = build_encoding_tree(frequencies)
    return decode(reader, tree)