"""Tools for inspecting encoding trees, codes and compressed data."""

from __future__ import annotations

from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from huffpack.bitstream import BitReader
from huffpack.tree import NOT_A_CHAR, PSEUDO_EOF, Node

_WHITESPACE_NAMES = {
    ord(" "): '" "',
    ord("\t"): "\\t",
    ord("\n"): "\\n",
    ord("\r"): "\\r",
}


def representation_of(ch: int) -> str:
    """Return a short printable name for an extended character."""
    if ch == PSEUDO_EOF:
        return "EOF"
    if ch == NOT_A_CHAR:
        return "NAC"
    byte = ch & 0xFF
    if 0x21 <= byte <= 0x7E:
        return chr(byte)
    if byte in _WHITESPACE_NAMES:
        return _WHITESPACE_NAMES[byte]
    return f"0x{byte:02x}"


def tree_cost(root: Node) -> int:
    """Return the number of bits needed to encode every character the tree counts.

    Each leaf contributes its weight times its depth. Raises ValueError if
    the tree or one of its subtrees is missing.
    """
    if root is None:
        raise ValueError("cannot compute the cost of an empty tree")
    total = 0
    stack: List[Tuple[Node, int]] = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        if node.is_leaf():
            total += node.weight * depth
            continue
        for child in (node.zero, node.one):
            if child is None:
                raise ValueError("internal node is missing a child")
            stack.append((child, depth + 1))
    return total


def _codes(node: Optional[Node], code: str) -> Iterator[Tuple[int, str]]:
    if node is None:
        return
    if node.character != NOT_A_CHAR:
        yield node.character, code
        return
    yield from _codes(node.zero, code + "0")
    yield from _codes(node.one, code + "1")


def encodings(root: Optional[Node]) -> Dict[int, str]:
    """Map each character held in the tree to its code, zero branches first."""
    return dict(_codes(root, ""))


def format_bits(data: bytes, max_bits: int) -> str:
    """Return up to ``max_bits`` bits of ``data`` as a string of '0' and '1'."""
    reader = BitReader(data)
    bits = []
    for _ in range(max_bits):
        try:
            bits.append(str(reader.read_bit()))
        except EOFError:
            break
    return "".join(bits)


def compare_bytes(first: bytes, second: bytes) -> str:
    """Describe whether two byte strings match and, if not, where they differ."""
    if len(first) != len(second):
        return (
            "Files differ!\n"
            f"File one has length {len(first)}.\n"
            f"File two has length {len(second)}."
        )
    for offset, (a, b) in enumerate(zip(first, second)):
        if a != b:
            return (
                "Files differ!\n"
                f"Bytes differ at offset {offset}.\n"
                f"File one has value {representation_of(a)}\n"
                f"File two has value {representation_of(b)}"
            )
    return "Files match!"


def check_tree(root: Optional[Node], frequencies: Mapping[int, int]) -> List[str]:
    """Check an encoding tree against its frequency table.

    Returns the problems found, each as a message; an empty list means the
    tree is structurally sound and holds every character of the table
    exactly once with its frequency.
    """
    remaining = dict(frequencies)
    problems: List[str] = []

    def report(message: str) -> None:
        if message not in problems:
            problems.append(message)

    def visit(node: Optional[Node]) -> None:
        if node is None:
            report("Encoding tree should be non-empty.")
            return
        has_zero = node.zero is not None
        has_one = node.one is not None
        if has_zero != has_one:
            report("All nodes should either have 0 or 2 children.")
        if (node.character == NOT_A_CHAR) != (has_zero and has_one):
            report("All internal nodes should not store characters.")
        if has_zero and node.zero is node.one:
            report("No internal node should have the same children on both sides.")
        if has_zero and has_one and node.weight != node.zero.weight + node.one.weight:
            report("Each internal node should have weight equal to the sum of its children.")
        if node.character != NOT_A_CHAR:
            if node.character not in remaining:
                report(
                    "Character not present in the frequency table is in the encoding tree: "
                    + representation_of(node.character)
                )
            elif remaining[node.character] != node.weight:
                report(
                    "Weight in the tree should match weight in the table for "
                    + representation_of(node.character)
                )
            remaining.pop(node.character, None)
        if has_zero:
            visit(node.zero)
        if has_one:
            visit(node.one)

    visit(root)
    if root is not None and remaining:
        missing = ", ".join(representation_of(ch) for ch in sorted(remaining))
        report("Characters missing from the encoding tree: " + missing)
    return problems


def trees_equal(first: Optional[Node], second: Optional[Node]) -> bool:
    """Return True when both trees have the same shape, characters and weights."""
    if first is None or second is None:
        return first is None and second is None
    if first.weight != second.weight or first.character != second.character:
        return False
    return trees_equal(first.zero, second.zero) and trees_equal(first.one, second.one)