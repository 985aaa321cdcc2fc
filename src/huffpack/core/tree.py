from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass
from typing import Optional

from huffpack.errors import DataError

# -------------------
# Huffman tree
# -------------------

# Heap ordering: (freq, kind, tiebreak).
# Leaves sort before internal nodes at equal freq; leaves among themselves by
# symbol value, internal nodes by creation order. The order is total, so the
# tree (and every code derived from it) is reproducible.
_KIND_LEAF = 0
_KIND_INTERNAL = 1


@dataclass
class HuffmanNode:
    freq: int
    symbol: Optional[int] = None  # 0-255 for leaves, None for internal nodes
    left: Optional["HuffmanNode"] = None
    right: Optional["HuffmanNode"] = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


def build_huffman_tree(freq: tuple[int, ...] | list[int]) -> HuffmanNode:
    """Build the Huffman tree for a frequency table and return its root.

    A single-symbol table yields a lone leaf (no dummy sibling).
    """
    heap: list[tuple[int, int, int, HuffmanNode]] = []
    for sym, f in enumerate(freq):
        if f > 0:
            heap.append((f, _KIND_LEAF, sym, HuffmanNode(freq=f, symbol=sym)))

    if not heap:
        raise DataError("frequency table has no symbols")

    heapq.heapify(heap)
    counter = itertools.count()

    while len(heap) > 1:
        f1, _, _, n1 = heapq.heappop(heap)
        f2, _, _, n2 = heapq.heappop(heap)
        parent = HuffmanNode(freq=f1 + f2, symbol=None, left=n1, right=n2)
        heapq.heappush(heap, (parent.freq, _KIND_INTERNAL, next(counter), parent))

    return heap[0][3]


def iter_nodes(root: HuffmanNode):
    """Pre-order walk with an explicit stack."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        if node.right is not None:
            stack.append(node.right)
        if node.left is not None:
            stack.append(node.left)


def count_leaves(root: HuffmanNode) -> int:
    return sum(1 for n in iter_nodes(root) if n.is_leaf)


def count_internal_nodes(root: HuffmanNode) -> int:
    return sum(1 for n in iter_nodes(root) if not n.is_leaf)
