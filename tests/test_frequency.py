from __future__ import annotations

from pathlib import Path

import pytest

from huffpack.core.frequency import (
    count_file_frequencies,
    count_frequencies,
    freq_from_used,
    used_symbols,
)
from huffpack.errors import DataError, FileError


def test_counts_every_byte_value() -> None:
    freq = count_frequencies([b"aab"])
    assert len(freq) == 256
    assert freq[ord("a")] == 2
    assert freq[ord("b")] == 1
    assert sum(freq) == 3


def test_chunk_boundaries_do_not_matter() -> None:
    assert count_frequencies([b"ab", b"", b"ba"]) == count_frequencies([b"abba"])


def test_full_byte_range() -> None:
    freq = count_frequencies([bytes(range(256)) * 2])
    assert set(freq) == {2}


def test_empty_input_is_data_error() -> None:
    with pytest.raises(DataError):
        count_frequencies([])
    with pytest.raises(DataError):
        count_frequencies([b"", b""])


def test_file_small_chunks(tmp_path: Path) -> None:
    p = tmp_path / "in.bin"
    data = b"\x00\xff" * 1000 + b"hello"
    p.write_bytes(data)
    assert count_file_frequencies(p, 3) == count_frequencies([data])


def test_missing_file_is_file_error(tmp_path: Path) -> None:
    with pytest.raises(FileError):
        count_file_frequencies(tmp_path / "nope.bin", 1024)


def test_empty_file_is_data_error(tmp_path: Path) -> None:
    p = tmp_path / "empty.bin"
    p.write_bytes(b"")
    with pytest.raises(DataError):
        count_file_frequencies(p, 1024)


def test_used_symbols_roundtrip() -> None:
    freq = count_frequencies([b"zzya"])
    used = used_symbols(freq)
    assert used == [(ord("a"), 1), (ord("y"), 1), (ord("z"), 2)]
    assert freq_from_used(used) == freq


def test_freq_from_used_rejects_out_of_range() -> None:
    with pytest.raises(ValueError):
        freq_from_used([(256, 1)])
