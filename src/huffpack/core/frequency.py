from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from huffpack.errors import DataError
from huffpack.io import iter_file_chunks

ALPHABET_SIZE = 256

# Frequency table: index = byte value, value = occurrence count.
FrequencyTable = tuple[int, ...]


def count_frequencies(chunks: Iterable[bytes]) -> FrequencyTable:
    """Count byte values over a sequence of chunks.

    Raises DataError when no byte at all was seen.
    """
    freq = [0] * ALPHABET_SIZE
    for chunk in chunks:
        for b in chunk:
            freq[b] += 1
    if not any(freq):
        raise DataError("file is empty")
    return tuple(freq)


def count_file_frequencies(path: Path, chunk_size: int) -> FrequencyTable:
    return count_frequencies(iter_file_chunks(path, chunk_size))


def used_symbols(freq: FrequencyTable) -> list[tuple[int, int]]:
    """(symbol, count) pairs with count > 0, ascending by symbol."""
    return [(sym, f) for sym, f in enumerate(freq) if f > 0]


def freq_from_used(used: Iterable[tuple[int, int]]) -> FrequencyTable:
    freq = [0] * ALPHABET_SIZE
    for sym, f in used:
        if sym < 0 or sym >= ALPHABET_SIZE:
            raise ValueError(f"symbol out of range: {sym}")
        freq[sym] = f
    return tuple(freq)
