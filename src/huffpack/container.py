"""HPK v1: opt-in self-describing container.

The default ``raw`` output is just the packed bitstream and cannot be decoded
on its own. HPK prepends what a decoder needs:

  [ MAGIC(3)="HPK" | VERSION(1)=1 | N varint | NUM_SYMS varint
    | (SYMBOL u8 + FREQ varint) * NUM_SYMS
    | PADDING u8
    | DATA(...) = Huffman bitstream, MSB-first ]

The tree is rebuilt from the stored frequencies; the tie-break in
``build_huffman_tree`` is total, so the decoder gets the encoder's exact tree.
"""

from __future__ import annotations

from dataclasses import dataclass

from huffpack.core.bitpack import PackedOutput, decode_bits
from huffpack.core.frequency import FrequencyTable, freq_from_used, used_symbols
from huffpack.core.tree import build_huffman_tree
from huffpack.errors import BadMagic, CorruptContainer, DataError, UnsupportedVersion

MAGIC = b"HPK"
VERSION_V1 = 1


def _enc_varint(x: int) -> bytes:
    if x < 0:
        raise ValueError("negative varint not supported")
    out = bytearray()
    while True:
        b = x & 0x7F
        x >>= 7
        if x:
            out.append(0x80 | b)
        else:
            out.append(b)
            break
    return bytes(out)


def _dec_varint(buf: bytes, idx: int) -> tuple[int, int]:
    shift = 0
    x = 0
    while True:
        if idx >= len(buf):
            raise CorruptContainer("truncated varint")
        b = buf[idx]
        idx += 1
        x |= (b & 0x7F) << shift
        if (b & 0x80) == 0:
            break
        shift += 7
        if shift > 63:
            raise CorruptContainer("varint too large")
    return x, idx


def is_container(blob: bytes) -> bool:
    return len(blob) >= 4 and blob[:3] == MAGIC


@dataclass(frozen=True)
class ContainerV1:
    freq: FrequencyTable
    packed: PackedOutput


def pack_container(freq: FrequencyTable, packed: PackedOutput) -> bytes:
    used = used_symbols(freq)
    if sum(f for _, f in used) != packed.n_symbols:
        raise DataError(
            f"frequency total {sum(f for _, f in used)} does not match {packed.n_symbols} encoded bytes"
        )

    out = bytearray()
    out += MAGIC
    out.append(VERSION_V1)
    out += _enc_varint(packed.n_symbols)
    out += _enc_varint(len(used))
    for sym, f in used:
        out.append(sym)
        out += _enc_varint(f)
    out.append(packed.padding)
    out += packed.data
    return bytes(out)


def unpack_container(blob: bytes) -> ContainerV1:
    if len(blob) < 4:
        raise CorruptContainer("container too short (header)")
    if blob[:3] != MAGIC:
        raise BadMagic("invalid magic number (not an HPK container)")
    version = blob[3]
    if version != VERSION_V1:
        raise UnsupportedVersion(f"unsupported HPK version: {version}")

    idx = 4
    n, idx = _dec_varint(blob, idx)
    num_syms, idx = _dec_varint(blob, idx)
    if num_syms > 256:
        raise CorruptContainer(f"too many symbols: {num_syms}")

    used: list[tuple[int, int]] = []
    seen: set[int] = set()
    for _ in range(num_syms):
        if idx >= len(blob):
            raise CorruptContainer("truncated frequency table")
        sym = blob[idx]
        idx += 1
        f, idx = _dec_varint(blob, idx)
        if sym in seen or f == 0:
            raise CorruptContainer(f"bad frequency entry for byte 0x{sym:02x}")
        seen.add(sym)
        used.append((sym, f))

    if idx >= len(blob):
        raise CorruptContainer("truncated header (missing padding)")
    padding = blob[idx]
    idx += 1
    if padding > 7:
        raise CorruptContainer(f"invalid padding: {padding}")

    freq = freq_from_used(used)
    if sum(freq) != n:
        raise CorruptContainer(f"frequency total {sum(freq)} != N {n}")
    if n == 0:
        raise CorruptContainer("container holds no symbols")

    data = blob[idx:]
    return ContainerV1(freq=freq, packed=PackedOutput(data=data, padding=padding, n_symbols=n))


def decode_container(blob: bytes) -> bytes:
    c = unpack_container(blob)
    root = build_huffman_tree(c.freq)
    try:
        out = decode_bits(c.packed, root)
    except DataError as err:
        raise CorruptContainer(str(err)) from err
    if len(out) != c.packed.n_symbols:
        raise CorruptContainer(f"expected {c.packed.n_symbols} bytes, decoded {len(out)}")
    return out
