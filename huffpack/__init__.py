"""Huffman compression of byte streams, with bit-level I/O, a password-scrambled
header variant, inspection helpers and a command-line front end."""

__version__ = "0.1.0"
__all__ = ["bitstream", "cli", "diagnostics", "encoding", "encrypted", "tree"]