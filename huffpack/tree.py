"""Huffman encoding tree nodes and the extended character values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

PSEUDO_EOF = 256
"""Extended character marking the end of the encoded data."""

NOT_A_CHAR = 257
"""Extended character held by internal nodes, which stand for no character."""


@dataclass
class Node:
    """A node in a Huffman encoding tree.

    ``character`` is a byte value, ``PSEUDO_EOF`` or, for internal nodes,
    ``NOT_A_CHAR``. ``weight`` is the combined frequency of every character
    at or below this node. ``zero`` and ``one`` are the subtrees reached by
    a 0 bit and a 1 bit.
    """

    character: int
    weight: int
    zero: Optional[Node] = None
    one: Optional[Node] = None

    def is_leaf(self) -> bool:
        """Return True when the node has no children."""
        return self.zero is None and self.one is None