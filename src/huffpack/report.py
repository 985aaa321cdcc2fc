"""Run report for `huffpack compress`.

The JSON form is deterministic given the same input content and options:
no timestamps, paths are reported as given.
"""

from __future__ import annotations

import json
import math
import zlib
from dataclasses import asdict, dataclass, field
from typing import Any

from huffpack.core.codes import average_code_length
from huffpack.io import read_file
from huffpack.pipeline import CompressResult

try:
    import zstandard as zstd  # type: ignore
except Exception:  # pragma: no cover
    zstd = None

ZLIB_LEVEL = 9
ZSTD_LEVEL = 19


def shannon_entropy(freq: tuple[int, ...] | list[int]) -> float:
    """Bits per symbol lower bound for a memoryless source."""
    total = sum(freq)
    if total == 0:
        return 0.0
    h = 0.0
    for f in freq:
        if f:
            p = f / total
            h -= p * math.log2(p)
    return h


def baseline_sizes(data: bytes) -> dict[str, int]:
    """Compressed size of the same input with general purpose codecs.

    zstd is reported only when the 'zstandard' module is importable.
    """
    out: dict[str, int] = {"zlib": len(zlib.compress(data, ZLIB_LEVEL))}
    if zstd is not None:
        out["zstd"] = len(zstd.ZstdCompressor(level=ZSTD_LEVEL).compress(data))
    return out


@dataclass(frozen=True)
class CompressReport:
    input: str
    output: str
    format: str
    input_size: int
    output_size: int
    distinct_symbols: int
    padding: int
    ratio: float
    avg_code_length: float
    entropy: float
    baselines: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)

    def render_text(self) -> str:
        lines = [
            "=== huffpack ===",
            f"Format         : {self.format}",
            f"Input file     : {self.input} ({self.input_size} bytes)",
            f"Output file    : {self.output} ({self.output_size} bytes)",
            f"Symbols        : {self.distinct_symbols} distinct, padding {self.padding} bits",
            f"Ratio          : {self.ratio:.3f} (1.0 = no compression)",
            f"Avg code length: {self.avg_code_length:.3f} bits/byte (entropy {self.entropy:.3f})",
        ]
        for name in sorted(self.baselines):
            lines.append(f"Baseline {name:<6}: {self.baselines[name]} bytes")
        lines.append("================")
        return "\n".join(lines)


def build_report(result: CompressResult, *, compare: bool = False) -> CompressReport:
    n = result.input_size
    baselines = baseline_sizes(read_file(result.input_path)) if compare else {}
    return CompressReport(
        input=str(result.input_path),
        output=str(result.output_path),
        format=result.format,
        input_size=n,
        output_size=result.output_size,
        distinct_symbols=len(result.codes),
        padding=result.packed.padding,
        ratio=round(result.output_size / n, 6) if n else 0.0,
        avg_code_length=round(average_code_length(result.codes, result.freq), 6),
        entropy=round(shannon_entropy(result.freq), 6),
        baselines=baselines,
    )


def render_frequency_table(freq: tuple[int, ...] | list[int]) -> str:
    return "\n".join(f"Key: {sym}\tValue: {f}" for sym, f in enumerate(freq) if f > 0)


def render_code_table(codes: dict[int, str]) -> str:
    return "\n".join(f"0x{sym:02x}\t{codes[sym]}" for sym in sorted(codes))
