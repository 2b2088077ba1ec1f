# huffpack

A small Huffman compressor for arbitrary bytes. It counts how often each
byte occurs, builds a Huffman tree with an extra end-of-data symbol
(`huffpack.tree.PSEUDO_EOF`), stores the frequency table at the front of the
output and then writes the data as prefix codes, one bit at a time. Bits are
packed into bytes starting from the least significant bit.

Two container formats are provided:

- `huffpack.encoding` writes the frequency table as text: the number of
  entries, a space, then for each byte the byte itself, its count in decimal
  and a space.
- `huffpack.encrypted` writes the table as fixed-width binary fields
  (a 32-bit entry count, then an 8-bit byte value and a 32-bit count per
  entry, most significant bit first), each bit XOR-ed with a pseudo-random
  bit stream seeded from a password. With the wrong password the table read
  back is garbage, so the data cannot be recovered. This is scrambling, not
  strong encryption; the coded data after the header is not scrambled.

## Installation

```
pip install .
```

No third-party libraries are needed at run time.

## Library use

```python
from huffpack import encoding

packed = encoding.compress(b"ABBCCCCDDDDDDDD")
assert encoding.decompress(packed) == b"ABBCCCCDDDDDDDD"
```

With a password-scrambled header:

```python
from huffpack import encrypted

password = "password"
packed = encrypted.compress(b"some bytes", password)
assert encrypted.decompress(packed, password) == b"some bytes"
```

The building blocks can be used on their own:

```python
from huffpack.bitstream import BitReader, BitWriter
from huffpack.encoding import (
    build_encoding_tree, decode, encode, encoding_table, get_frequency_table,
)

data = b"0123AABBCCDD"
frequencies = get_frequency_table(data)   # byte -> count, plus PSEUDO_EOF -> 1
tree = build_encoding_tree(frequencies)   # root huffpack.tree.Node
codes = encoding_table(tree)              # symbol -> "0101..." code string

writer = BitWriter()
encode(data, tree, writer)
assert decode(BitReader(writer.getvalue()), tree) == data
```

`build_encoding_tree` is deterministic: the same frequencies always give
the same tree. `write_header` / `read_header` and
`write_encrypted_header` / `read_encrypted_header` handle the two table
formats. Reading past the end of the data raises `EOFError`; malformed
input raises `ValueError`.

`huffpack.diagnostics` has helpers for inspecting trees and output:

- `tree_cost(root)` – total bits the tree needs for its own frequencies
- `encodings(root)` – each character's code, zero branches first
- `check_tree(root, frequencies)` – a list of structural problems (empty if none)
- `trees_equal(first, second)` – same shape, characters and weights
- `format_bits(data, max_bits)` – the first bits of some bytes as `"0101..."`
- `representation_of(ch)` – a printable name such as `EOF`, `\n` or `0x00`
- `compare_bytes(first, second)` – a report of where two byte strings differ

## Command line

Installing the package provides the `huffpack` command.

```
huffpack compress SOURCE TARGET
huffpack decompress SOURCE TARGET
huffpack compare FIRST SECOND
```

`compress` prints the original size, the new size and the compression
ratio. `compare` prints `Files match!` or where the files first differ, and
exits with status 1 when they differ. Errors are reported on standard error
with exit status 1. As a safeguard, output files ending in `.cpp`, `.h`,
`.hh` or `.cc` are refused.

Run with no arguments:

```
huffpack
```

it opens an interactive menu to show the frequency table, the prefix codes
or the encoded bits of text you type, to compress or decompress a file, or
to compare two files.

## What it does not do

- The command line and the menu use only the plain-header format of
  `huffpack.encoding`; password-scrambled files can be made and read only
  through `huffpack.encrypted` in Python.
- Whole files are read into memory; there is no streaming interface.
- The menu has no automatic self-tests; run the test suite instead.

## Running the tests

```
pip install ".[test]"
pytest
```