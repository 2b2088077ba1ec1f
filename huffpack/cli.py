"""Command-line front end: compress, decompress and compare files, or run the menu."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import BinaryIO, Callable, Optional, Sequence, Tuple, Union

from huffpack.bitstream import BitReader, BitWriter
from huffpack.diagnostics import (
    compare_bytes,
    encodings,
    format_bits,
    representation_of,
    tree_cost,
)
from huffpack.encoding import (
    build_encoding_tree,
    compress,
    decode,
    decompress,
    encode,
    get_frequency_table,
)

PathLike = Union[str, "os.PathLike[str]"]
ReadLine = Callable[[str], str]
Write = Callable[[str], object]

_REFUSED_SUFFIXES = (".cpp", ".h", ".hh", ".cc")

MANUAL_FREQUENCY_TESTS = 1
MANUAL_TREE_TESTS = 3
MANUAL_ENCODING_TESTS = 5
COMPRESS = 8
DECOMPRESS = 9
COMPARE = 10
QUIT = 11

_MENU = (
    (MANUAL_FREQUENCY_TESTS, "Manually test get_frequency_table"),
    (MANUAL_TREE_TESTS, "Manually test build_encoding_tree"),
    (MANUAL_ENCODING_TESTS, "Manually test encode/decode"),
    (COMPRESS, "Compress a file"),
    (DECOMPRESS, "Decompress a compressed file"),
    (COMPARE, "Compare two files for equality"),
    (QUIT, "Quit"),
)

_TEXT_PROMPT = "Text (enter to stop test): "
_CONTINUE_PROMPT = "Press ENTER to continue..."


def _open_output(target: PathLike) -> BinaryIO:
    name = os.fsdecode(os.fspath(target))
    if name.endswith(_REFUSED_SUFFIXES):
        raise ValueError(
            f"It is potentially extremely dangerous to write to file {name}, "
            "because that might be your own source code. "
            "Please choose a different filename."
        )
    return open(name, "wb")


def compress_file(source: PathLike, target: PathLike) -> Tuple[int, int]:
    """Compress ``source`` into ``target``; return the original and new sizes.

    Raises ValueError if ``target`` looks like a source code file.
    """
    data = Path(source).read_bytes()
    compressed = compress(data)
    with _open_output(target) as handle:
        handle.write(compressed)
    return len(data), len(compressed)


def decompress_file(source: PathLike, target: PathLike) -> int:
    """Decompress ``source`` into ``target``; return the number of bytes written.

    Raises ValueError if ``target`` looks like a source code file.
    """
    restored = decompress(Path(source).read_bytes())
    with _open_output(target) as handle:
        handle.write(restored)
    return len(restored)


def compare_files(first: PathLike, second: PathLike) -> str:
    """Describe whether two files hold the same bytes."""
    return compare_bytes(Path(first).read_bytes(), Path(second).read_bytes())


def _read_integer(read_line: ReadLine, write: Write, prompt: str) -> int:
    while True:
        line = read_line(prompt)
        try:
            return int(line.strip())
        except ValueError:
            write("Illegal integer format. Try again.\n")


def _begin(write: Write, name: str) -> None:
    write(f"================== BEGIN: {name}==================\n")


def _check(write: Write, passed: bool, reason: str) -> None:
    if passed:
        write(f"   PASS: {reason}\n")
    else:
        write(f"! FAIL: {reason}\n")


def _ask_input(read_line: ReadLine, write: Write, prompt: str) -> bytes:
    while True:
        name = read_line(prompt)
        try:
            return Path(name).read_bytes()
        except OSError:
            write("Sorry, I couldn't open that file.\n")


def _ask_output(read_line: ReadLine, write: Write, prompt: str) -> BinaryIO:
    while True:
        name = read_line(prompt)
        try:
            return _open_output(name)
        except ValueError as error:
            write(f"{error}\n")
        except OSError:
            pass
        write("Sorry, I couldn't open that file.\n")


def _manual_frequency(read_line: ReadLine, write: Write) -> None:
    _begin(write, "Manual get_frequency_table Test")
    write("Enter strings below to see the frequency table constructed by\n")
    write("get_frequency_table. Enter the empty string to quit.\n")
    while True:
        text = read_line(_TEXT_PROMPT)
        if text == "":
            break
        for character, frequency in get_frequency_table(text.encode("utf-8")).items():
            write(f"{representation_of(character):>4}: {frequency}\n")


def _manual_tree(read_line: ReadLine, write: Write) -> None:
    _begin(write, "Manual build_encoding_tree Tests")
    write("You can enter strings below to call build_encoding_tree on them.\n")
    write("We will display the generated prefix code for the text you've entered.\n")
    while True:
        text = read_line(_TEXT_PROMPT)
        if text == "":
            break
        tree = build_encoding_tree(get_frequency_table(text.encode("utf-8")))
        for character, code in encodings(tree).items():
            write(f"{representation_of(character):>4}: {code}\n")


def _manual_encode(read_line: ReadLine, write: Write) -> None:
    _begin(write, "Manual encode / decode Tests")
    write("Enter text for us to encode and then decode\n")
    while True:
        text = read_line(_TEXT_PROMPT)
        if text == "":
            break
        data = text.encode("utf-8")
        tree = build_encoding_tree(get_frequency_table(data))
        writer = BitWriter()
        encode(data, tree, writer)
        compressed = writer.getvalue()
        write("Compressed representation: \n")
        write(format_bits(compressed, tree_cost(tree)) + "\n")
        unpacked = decode(BitReader(compressed), tree)
        _check(
            write,
            unpacked == data,
            "Result of compressing and decompressing should be the original input.",
        )


def _run_compress(read_line: ReadLine, write: Write) -> None:
    data = _ask_input(read_line, write, "File to compress: ")
    with _ask_output(read_line, write, "Filename for compressed output: ") as handle:
        write("Compressing... ")
        compressed = compress(data)
        handle.write(compressed)
    write("done!\n\n")
    ratio = len(compressed) / len(data) if data else float("inf")
    write(f"Original file size: {len(data)}B\n")
    write(f"New file size:      {len(compressed)}B\n")
    write(f"Compression ratio:  {ratio:g}\n\n")
    read_line(_CONTINUE_PROMPT)


def _run_decompress(read_line: ReadLine, write: Write) -> None:
    data = _ask_input(read_line, write, "File to decompress: ")
    with _ask_output(read_line, write, "Name of file to write result: ") as handle:
        try:
            handle.write(decompress(data))
        except (EOFError, ValueError) as error:
            write(f"Could not decompress: {error}\n")
        else:
            write("Decompressed file written!\n")
    read_line(_CONTINUE_PROMPT)


def _run_compare(read_line: ReadLine, write: Write) -> None:
    first = _ask_input(read_line, write, "First file to compare:  ")
    second = _ask_input(read_line, write, "Second file to compare: ")
    write(compare_bytes(first, second) + "\n")
    read_line(_CONTINUE_PROMPT)


def _display_menu(write: Write) -> None:
    write("Huffman Encoding Harness\n")
    write("=====================================\n")
    for number, label in _MENU:
        write(f"{number:>2}: {label}\n")


def run_menu(read_line: ReadLine, write: Write) -> None:
    """Run the interactive menu until Quit is chosen or input runs out.

    ``read_line`` is called with a prompt and returns one line of input
    without its newline; it may raise EOFError. ``write`` receives output text.
    """
    actions = {
        MANUAL_FREQUENCY_TESTS: _manual_frequency,
        MANUAL_TREE_TESTS: _manual_tree,
        MANUAL_ENCODING_TESTS: _manual_encode,
        COMPRESS: _run_compress,
        DECOMPRESS: _run_decompress,
        COMPARE: _run_compare,
    }
    try:
        while True:
            _display_menu(write)
            choice = _read_integer(read_line, write, "Enter choice: ")
            if choice == QUIT:
                return
            action = actions.get(choice)
            if action is None:
                write("Sorry, but I don't know how to do that.\n")
            else:
                action(read_line, write)
    except EOFError:
        return


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="huffpack",
        description="Huffman compression. With no arguments, runs an interactive menu.",
    )
    commands = parser.add_subparsers(dest="command", required=True)
    for name, help_text in (
        ("compress", "compress SOURCE into TARGET"),
        ("decompress", "decompress SOURCE into TARGET"),
    ):
        command = commands.add_parser(name, help=help_text)
        command.add_argument("source")
        command.add_argument("target")
    compare = commands.add_parser("compare", help="compare two files byte by byte")
    compare.add_argument("first")
    compare.add_argument("second")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command line; return the exit status."""
    args_list = sys.argv[1:] if argv is None else list(argv)
    if not args_list:
        run_menu(input, sys.stdout.write)
        return 0
    args = _build_parser().parse_args(args_list)
    try:
        if args.command == "compress":
            original, new = compress_file(args.source, args.target)
            ratio = new / original if original else float("inf")
            print(f"Original file size: {original}B")
            print(f"New file size:      {new}B")
            print(f"Compression ratio:  {ratio:g}")
            return 0
        if args.command == "decompress":
            decompress_file(args.source, args.target)
            print("Decompressed file written!")
            return 0
        report = compare_files(args.first, args.second)
        print(report)
        return 0 if report == "Files match!" else 1
    except (OSError, ValueError, EOFError) as error:
        print(f"huffpack: {error}", file=sys.stderr)
        return 1