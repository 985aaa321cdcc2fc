from __future__ import annotations

from typing import Dict, Optional

from huffpack.core.tree import HuffmanNode
from huffpack.errors import DataError

# byte value -> bit string ("0"/"1")
CodeTable = Dict[int, str]


def build_code_table(root: Optional[HuffmanNode]) -> CodeTable:
    """Assign "0" on every left edge and "1" on every right edge.

    A single-symbol tree gets the one-bit code "0"; an empty path could not
    be encoded.
    """
    if root is None:
        raise DataError("null Huffman tree")

    codes: CodeTable = {}
    stack: list[tuple[HuffmanNode, str]] = [(root, "")]
    while stack:
        node, path = stack.pop()
        if node.is_leaf:
            if node.symbol is None:
                raise DataError("Huffman leaf without symbol")
            codes[node.symbol] = path
            continue
        if node.right is not None:
            stack.append((node.right, path + "1"))
        if node.left is not None:
            stack.append((node.left, path + "0"))

    if not codes:
        raise DataError("Huffman code generation failed")
    if len(codes) == 1:
        (only,) = codes
        codes[only] = "0"
    return codes


def is_prefix_free(codes: CodeTable) -> bool:
    # after sorting, a code that prefixes another is immediately followed by
    # one of its extensions
    ordered = sorted(codes.values())
    for a, b in zip(ordered, ordered[1:]):
        if b.startswith(a):
            return False
    return True


def average_code_length(codes: CodeTable, freq: tuple[int, ...] | list[int]) -> float:
    """Expected bits per input byte."""
    total = sum(freq)
    if total == 0:
        return 0.0
    bits = sum(len(code) * freq[sym] for sym, code in codes.items())
    return bits / total
