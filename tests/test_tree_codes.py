from __future__ import annotations

import random

import pytest

from huffpack.core.codes import average_code_length, build_code_table, is_prefix_free
from huffpack.core.frequency import count_frequencies
from huffpack.core.tree import (
    HuffmanNode,
    build_huffman_tree,
    count_internal_nodes,
    count_leaves,
    iter_nodes,
)
from huffpack.errors import DataError


def _freq(data: bytes) -> tuple[int, ...]:
    return count_frequencies([data])


def test_aab_tree_shape() -> None:
    root = build_huffman_tree(_freq(b"aab"))
    assert root.freq == 3
    assert root.symbol is None
    assert root.left is not None and root.right is not None
    assert (root.left.symbol, root.left.freq) == (ord("b"), 1)
    assert (root.right.symbol, root.right.freq) == (ord("a"), 2)


def test_aab_codes() -> None:
    codes = build_code_table(build_huffman_tree(_freq(b"aab")))
    assert codes == {ord("b"): "0", ord("a"): "1"}


def test_single_symbol_tree_is_one_leaf() -> None:
    root = build_huffman_tree(_freq(b"x" * 100))
    assert root.is_leaf
    assert root.symbol == ord("x")
    assert root.freq == 100
    assert count_internal_nodes(root) == 0
    assert build_code_table(root) == {ord("x"): "0"}


def test_equal_frequencies_break_ties_by_symbol_then_creation_order() -> None:
    codes = build_code_table(build_huffman_tree(_freq(b"dcba")))
    assert codes == {ord("a"): "00", ord("b"): "01", ord("c"): "10", ord("d"): "11"}


def test_leaf_wins_tie_against_internal_node() -> None:
    # a+b merge into an internal node of weight 2, which ties with leaf c
    codes = build_code_table(build_huffman_tree(_freq(b"abcc")))
    assert codes == {ord("c"): "0", ord("a"): "10", ord("b"): "11"}


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_tree_invariants_random(seed: int) -> None:
    rnd = random.Random(seed)
    data = bytes(rnd.choice(b"abcdefghij\x00\xff") for _ in range(rnd.randint(20, 500)))
    freq = _freq(data)
    k = sum(1 for f in freq if f)
    root = build_huffman_tree(freq)

    assert count_leaves(root) == k
    assert count_internal_nodes(root) == k - 1
    assert root.freq == len(data)
    for node in iter_nodes(root):
        if not node.is_leaf:
            assert node.left is not None and node.right is not None
            assert node.freq == node.left.freq + node.right.freq

    codes = build_code_table(root)
    assert set(codes) == {s for s, f in enumerate(freq) if f}
    assert is_prefix_free(codes)


def test_full_alphabet_depth_and_counts() -> None:
    freq = _freq(bytes(range(256)))
    root = build_huffman_tree(freq)
    assert count_internal_nodes(root) == 255
    codes = build_code_table(root)
    assert {len(c) for c in codes.values()} == {8}


def test_frequent_symbols_get_shorter_codes() -> None:
    codes = build_code_table(build_huffman_tree(_freq(b"a" * 50 + b"b" * 10 + b"c" * 3 + b"d")))
    assert len(codes[ord("a")]) <= len(codes[ord("b")]) <= len(codes[ord("c")])


def test_empty_table_is_data_error() -> None:
    with pytest.raises(DataError):
        build_huffman_tree([0] * 256)


def test_null_tree_is_data_error() -> None:
    with pytest.raises(DataError):
        build_code_table(None)


def test_leaf_without_symbol_is_data_error() -> None:
    with pytest.raises(DataError):
        build_code_table(HuffmanNode(freq=1))


def test_is_prefix_free() -> None:
    assert is_prefix_free({1: "0", 2: "10", 3: "11"})
    assert not is_prefix_free({1: "0", 2: "01"})
    assert not is_prefix_free({1: "10", 2: "10"})


def test_average_code_length() -> None:
    freq = _freq(b"aab")
    codes = build_code_table(build_huffman_tree(freq))
    assert average_code_length(codes, freq) == pytest.approx(1.0)
