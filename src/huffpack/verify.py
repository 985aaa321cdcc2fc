"""Verification of HPK container files.

  - light: header parses, frequency total matches N, bitstream length is plausible
  - full:  the whole bitstream decodes to exactly N bytes

Raw outputs have nothing to verify against and are rejected with BadMagic.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from huffpack.container import decode_container, unpack_container
from huffpack.core.codes import build_code_table
from huffpack.core.frequency import used_symbols
from huffpack.core.tree import build_huffman_tree
from huffpack.errors import CorruptContainer
from huffpack.io import read_file


@dataclass(frozen=True)
class VerifyResult:
    path: Path
    n_symbols: int
    distinct_symbols: int
    padding: int
    payload_bytes: int
    full: bool


def verify_container_file(path: Path, *, full: bool = True) -> VerifyResult:
    path = Path(path)
    blob = read_file(path)
    c = unpack_container(blob)

    codes = build_code_table(build_huffman_tree(c.freq))
    expected_bits = sum(len(codes[sym]) * f for sym, f in used_symbols(c.freq))
    if c.packed.bit_length != expected_bits:
        raise CorruptContainer(
            f"bitstream holds {c.packed.bit_length} bits, header implies {expected_bits}"
        )

    if full:
        decode_container(blob)

    return VerifyResult(
        path=path,
        n_symbols=c.packed.n_symbols,
        distinct_symbols=len(codes),
        padding=c.packed.padding,
        payload_bytes=len(c.packed.data),
        full=full,
    )
