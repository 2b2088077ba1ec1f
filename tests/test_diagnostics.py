import pytest
from hypothesis import given, strategies as st

from huffpack.bitstream import BitWriter
from huffpack.diagnostics import (
    check_tree,
    compare_bytes,
    encodings,
    format_bits,
    representation_of,
    tree_cost,
    trees_equal,
)
from huffpack.encoding import (
    build_encoding_tree,
    encode,
    encoding_table,
    get_frequency_table,
)
from huffpack.tree import NOT_A_CHAR, PSEUDO_EOF, Node

SAMPLES = [
    b"a",
    b"aaaaaaa",
    b"The quick brown fox jumps over the lazy dog",
    b"#66FF33, #CC0099; #FFFF33. #eaa6ea! #c0f7fe?",
    b"ABBCCCCDDDDDDDDEEEEEEEEEEEEEEEE",
    b"ABBCCCDDDDDEEEEEEEEFFFFFFFFFFFFF",
    b"0123AABBCCDD",
]


@pytest.mark.parametrize(
    "ch, expected",
    [
        (PSEUDO_EOF, "EOF"),
        (NOT_A_CHAR, "NAC"),
        (ord("A"), "A"),
        (ord(" "), '" "'),
        (ord("\t"), "\\t"),
        (ord("\n"), "\\n"),
        (ord("\r"), "\\r"),
        (0, "0x00"),
        (255, "0xff"),
    ],
)
def test_representation_of(ch, expected):
    assert representation_of(ch) == expected


def test_tree_cost_single_letter_tree():
    tree = build_encoding_tree({PSEUDO_EOF: 1, ord("A"): 1})
    assert tree_cost(tree) == 2


def test_tree_cost_of_lone_leaf_is_zero():
    assert tree_cost(Node(PSEUDO_EOF, 1)) == 0


def test_tree_cost_rejects_missing_tree():
    with pytest.raises(ValueError):
        tree_cost(None)


@pytest.mark.parametrize("data", SAMPLES)
def test_tree_cost_predicts_encoded_size(data):
    tree = build_encoding_tree(get_frequency_table(data))
    writer = BitWriter()
    encode(data, tree, writer)
    assert writer.size() == (tree_cost(tree) + 7) // 8


@pytest.mark.parametrize("data", SAMPLES)
def test_encodings_match_encoding_table(data):
    frequencies = get_frequency_table(data)
    tree = build_encoding_tree(frequencies)
    codes = encodings(tree)
    assert codes == encoding_table(tree)
    assert set(codes) == set(frequencies)


def test_encodings_are_prefix_free():
    tree = build_encoding_tree(get_frequency_table(SAMPLES[2]))
    codes = list(encodings(tree).values())
    for a in codes:
        for b in codes:
            if a is not b:
                assert not b.startswith(a)


def test_encodings_of_empty_tree():
    assert encodings(None) == {}


def test_format_bits_least_significant_first():
    assert format_bits(b"\x01", 8) == "10000000"
    assert format_bits(b"\x01", 3) == "100"


def test_format_bits_stops_at_end_of_data():
    assert format_bits(b"", 10) == ""
    assert len(format_bits(b"ab", 100)) == 16


@given(st.lists(st.integers(0, 1), max_size=64))
def test_format_bits_round_trip(bits):
    writer = BitWriter()
    for bit in bits:
        writer.write_bit(bit)
    assert format_bits(writer.getvalue(), len(bits)) == "".join(map(str, bits))


def test_compare_bytes_match():
    assert compare_bytes(b"same", b"same") == "Files match!"


def test_compare_bytes_length_differs():
    report = compare_bytes(b"abc", b"ab")
    assert report.splitlines() == [
        "Files differ!",
        "File one has length 3.",
        "File two has length 2.",
    ]


def test_compare_bytes_content_differs():
    report = compare_bytes(b"abc", b"abd")
    assert report.splitlines() == [
        "Files differ!",
        "Bytes differ at offset 2.",
        "File one has value c",
        "File two has value d",
    ]


@pytest.mark.parametrize("data", SAMPLES)
def test_check_tree_accepts_built_trees(data):
    frequencies = get_frequency_table(data)
    assert check_tree(build_encoding_tree(frequencies), frequencies) == []


def test_check_tree_does_not_change_table():
    frequencies = get_frequency_table(b"hello")
    before = dict(frequencies)
    check_tree(build_encoding_tree(frequencies), frequencies)
    assert frequencies == before


def test_check_tree_reports_missing_tree():
    assert check_tree(None, {PSEUDO_EOF: 1}) == ["Encoding tree should be non-empty."]


def test_check_tree_reports_one_child():
    leaf = Node(PSEUDO_EOF, 1)
    root = Node(NOT_A_CHAR, 1, leaf, None)
    problems = check_tree(root, {PSEUDO_EOF: 1})
    assert "All nodes should either have 0 or 2 children." in problems


def test_check_tree_reports_bad_weight():
    root = Node(NOT_A_CHAR, 5, Node(PSEUDO_EOF, 1), Node(ord("A"), 1))
    problems = check_tree(root, {PSEUDO_EOF: 1, ord("A"): 1})
    assert problems == [
        "Each internal node should have weight equal to the sum of its children."
    ]


def test_check_tree_reports_shared_children():
    leaf = Node(PSEUDO_EOF, 1)
    root = Node(NOT_A_CHAR, 2, leaf, leaf)
    problems = check_tree(root, {PSEUDO_EOF: 1})
    assert "No internal node should have the same children on both sides." in problems


def test_check_tree_reports_character_on_internal_node():
    root = Node(ord("A"), 2, Node(PSEUDO_EOF, 1), Node(ord("B"), 1))
    problems = check_tree(root, {PSEUDO_EOF: 1, ord("B"): 1})
    assert "All internal nodes should not store characters." in problems


def test_check_tree_reports_missing_characters():
    tree = build_encoding_tree({PSEUDO_EOF: 1, ord("A"): 1})
    problems = check_tree(tree, {PSEUDO_EOF: 1, ord("A"): 1, ord("Z"): 4})
    assert problems == ["Characters missing from the encoding tree: Z"]


def test_check_tree_reports_wrong_leaf_weight():
    tree = build_encoding_tree({PSEUDO_EOF: 1, ord("A"): 1})
    problems = check_tree(tree, {PSEUDO_EOF: 1, ord("A"): 3})
    assert problems == ["Weight in the tree should match weight in the table for A"]


@given(st.binary(max_size=300))
def test_check_tree_and_cost_on_random_data(data):
    frequencies = get_frequency_table(data)
    tree = build_encoding_tree(frequencies)
    assert check_tree(tree, frequencies) == []
    writer = BitWriter()
    encode(data, tree, writer)
    assert writer.size() == (tree_cost(tree) + 7) // 8


def test_trees_equal_for_repeated_builds():
    frequencies = get_frequency_table(b"0123AABBCCDD")
    first = build_encoding_tree(frequencies)
    second = build_encoding_tree(frequencies)
    third = build_encoding_tree(frequencies)
    assert trees_equal(first, second)
    assert trees_equal(second, third)
    assert trees_equal(third, first)


def test_trees_equal_detects_differences():
    first = build_encoding_tree(get_frequency_table(b"aab"))
    second = build_encoding_tree(get_frequency_table(b"abb"))
    assert not trees_equal(first, second)
    assert not trees_equal(first, None)
    assert trees_equal(None, None)


def test_trees_equal_detects_swapped_children():
    a, b = Node(ord("A"), 1), Node(PSEUDO_EOF, 1)
    assert not trees_equal(Node(NOT_A_CHAR, 2, a, b), Node(NOT_A_CHAR, 2, b, a))