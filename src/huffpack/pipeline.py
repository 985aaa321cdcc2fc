"""One compression run: count -> tree -> codes -> encode -> write.

The input is read twice (frequencies must be complete before any code is
assigned). Both passes stream the file in bounded chunks.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from huffpack.container import decode_container, is_container, pack_container
from huffpack.core.bitpack import PackedOutput, encode_bytes, encode_file
from huffpack.core.codes import CodeTable, build_code_table
from huffpack.core.frequency import FrequencyTable, count_file_frequencies, count_frequencies
from huffpack.core.tree import HuffmanNode, build_huffman_tree
from huffpack.errors import BadMagic
from huffpack.io import CHUNK_SIZE_DEFAULT, read_file, write_output

StageCallback = Callable[[str], None]

STAGE_FREQUENCIES = "frequencies"
STAGE_TREE = "tree"
STAGE_CODES = "codes"
STAGE_ENCODE = "encode"
STAGE_WRITE = "write"


@dataclass(frozen=True)
class CompressResult:
    input_path: Path
    output_path: Path
    format: str
    freq: FrequencyTable
    codes: CodeTable
    packed: PackedOutput
    output_size: int

    @property
    def input_size(self) -> int:
        return self.packed.n_symbols


def _emit(cb: StageCallback | None, stage: str) -> None:
    if cb is not None:
        cb(stage)


def _serialize(fmt: str, freq: FrequencyTable, packed: PackedOutput) -> bytes:
    if fmt == "raw":
        # Bitstream only: no table, no N, no padding. Not decodable alone.
        return packed.data
    if fmt == "container":
        return pack_container(freq, packed)
    raise ValueError(f"unsupported format: {fmt!r}")


def build_codes(freq: FrequencyTable) -> tuple[HuffmanNode, CodeTable]:
    root = build_huffman_tree(freq)
    return root, build_code_table(root)


def compress_bytes(data: bytes, *, fmt: str = "raw") -> bytes:
    """In-memory variant of compress_file (single buffer, same stages)."""
    freq = count_frequencies([data])
    _root, codes = build_codes(freq)
    packed = encode_bytes(data, codes)
    return _serialize(fmt, freq, packed)


def compress_file(
    input_path: Path,
    output_path: Path,
    *,
    fmt: str = "raw",
    chunk_size: int = CHUNK_SIZE_DEFAULT,
    on_stage: StageCallback | None = None,
) -> CompressResult:
    input_path = Path(input_path)
    output_path = Path(output_path)

    freq = count_file_frequencies(input_path, chunk_size)
    _emit(on_stage, STAGE_FREQUENCIES)

    root = build_huffman_tree(freq)
    _emit(on_stage, STAGE_TREE)

    codes = build_code_table(root)
    _emit(on_stage, STAGE_CODES)

    packed = encode_file(input_path, codes, chunk_size)
    _emit(on_stage, STAGE_ENCODE)

    blob = _serialize(fmt, freq, packed)
    write_output(output_path, blob)
    _emit(on_stage, STAGE_WRITE)

    return CompressResult(
        input_path=input_path,
        output_path=output_path,
        format=fmt,
        freq=freq,
        codes=codes,
        packed=packed,
        output_size=len(blob),
    )


def decompress_file(input_path: Path, output_path: Path) -> Path:
    """Decode an HPK container. Raw outputs are rejected (nothing to decode with)."""
    blob = read_file(Path(input_path))
    if not is_container(blob):
        raise BadMagic(
            f"{input_path} is not an HPK container; raw outputs carry no code table and cannot be decoded"
        )
    data = decode_container(blob)
    return write_output(Path(output_path), data)

