from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from huffpack.core.codes import CodeTable
from huffpack.core.tree import HuffmanNode
from huffpack.errors import DataError
from huffpack.io import iter_file_chunks


@dataclass(frozen=True)
class PackedOutput:
    """
    Bitstream MSB-first.
    padding = number of zero filler bits at the low end of the last byte (0..7).
    n_symbols = number of input bytes that were encoded.
    """

    data: bytes
    padding: int
    n_symbols: int

    @property
    def bit_length(self) -> int:
        return len(self.data) * 8 - self.padding


class BitWriter:
    """Bit buffer: bits go in MSB-first, whole bytes come out."""

    def __init__(self) -> None:
        self._out = bytearray()
        self._acc = 0
        self._nbits = 0

    def write(self, value: int, nbits: int) -> None:
        self._acc = (self._acc << nbits) | value
        self._nbits += nbits
        while self._nbits >= 8:
            self._nbits -= 8
            self._out.append((self._acc >> self._nbits) & 0xFF)
        self._acc &= (1 << self._nbits) - 1

    def finish(self) -> Tuple[bytes, int]:
        """Flush the 1..7 leftover bits (zero-padded) and return (data, padding)."""
        padding = 0
        if self._nbits > 0:
            padding = 8 - self._nbits
            self._out.append((self._acc << padding) & 0xFF)
            self._acc = 0
            self._nbits = 0
        return bytes(self._out), padding


def _compile_codes(codes: CodeTable) -> List[Optional[Tuple[int, int]]]:
    table: List[Optional[Tuple[int, int]]] = [None] * 256
    for sym, code in codes.items():
        if not code or any(c not in "01" for c in code):
            raise DataError(f"invalid code for byte 0x{sym:02x}: {code!r}")
        table[sym] = (int(code, 2), len(code))
    return table


def encode_chunks(chunks: Iterable[bytes], codes: CodeTable) -> PackedOutput:
    """data chunks -> PackedOutput

    A byte with no code means the input changed since the frequencies were
    counted: that is a hard error, never a skip.
    """
    table = _compile_codes(codes)
    writer = BitWriter()
    n = 0
    for chunk in chunks:
        for b in chunk:
            entry = table[b]
            if entry is None:
                raise DataError(f"missing code for byte 0x{b:02x}")
            writer.write(*entry)
        n += len(chunk)
    data, padding = writer.finish()
    return PackedOutput(data=data, padding=padding, n_symbols=n)


def encode_bytes(data: bytes, codes: CodeTable) -> PackedOutput:
    return encode_chunks([data], codes)


def encode_file(path: Path, codes: CodeTable, chunk_size: int) -> PackedOutput:
    return encode_chunks(iter_file_chunks(path, chunk_size), codes)


def decode_bits(packed: PackedOutput, root: HuffmanNode) -> bytes:
    """Walk the tree bit by bit, ignoring the trailing padding bits.

    A lone-leaf tree maps every 0 bit to its symbol; its only code is "0",
    so a 1 bit is an error.
    """
    if not 0 <= packed.padding <= 7:
        raise DataError(f"invalid padding: {packed.padding}")
    if packed.padding and not packed.data:
        raise DataError("padding set on an empty bitstream")

    total_bits = packed.bit_length
    out = bytearray()

    if root.is_leaf:
        full, rest = divmod(total_bits, 8)
        if any(packed.data[:full]) or (rest and packed.data[full] >> (8 - rest)):
            raise DataError("invalid bit for single-symbol code")
        out.extend(bytes([root.symbol]) * total_bits)  # type: ignore[list-item]
        return bytes(out)

    node = root
    seen = 0
    for byte in packed.data:
        for bit_index in range(8):
            if seen == total_bits:
                break
            seen += 1
            bit = (byte >> (7 - bit_index)) & 1
            node = node.left if bit == 0 else node.right  # type: ignore[assignment]
            if node.is_leaf:
                out.append(node.symbol)  # type: ignore[arg-type]
                node = root

    if node is not root:
        raise DataError("bitstream ends in the middle of a code")
    return bytes(out)
