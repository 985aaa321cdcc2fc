"""huffpack CLI.

This is the stable CLI entrypoint (console-script: ``huffpack``).

UX policy:
  - ``compress`` takes exactly one input; a bare file name is looked up in the
    default input directory, output goes to ``<output_dir>/<stem>.bin``.
  - The default format is ``raw`` (bitstream only, not decodable on its own).
    ``--format container`` writes a self-describing HPK file instead.
  - Errors print ``[huffpack] <category>: <message>`` on stderr and map to the
    exit codes in ``huffpack.errors``.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from huffpack import __version__
from huffpack.config import FORMATS, ConfigError, RunConfig, load_config
from huffpack.errors import EXIT_GENERIC, EXIT_OK, EXIT_USAGE, HuffpackError, UsageError

_STAGE_MESSAGES = {
    "frequencies": "Successfully counted frequencies...",
    "tree": "Successfully built Huffman tree...",
    "codes": "Code generation successful...",
    "encode": "Encoding successful...",
    "write": "Output written...",
}


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--debug", action="store_true", help="Show stack traces on errors")


def _resolve_config(ns: argparse.Namespace) -> RunConfig:
    cfg = load_config(ns.config)
    # precedence: CLI flag > config > default
    return RunConfig(
        input_dir=ns.input_dir if ns.input_dir is not None else cfg.input_dir,
        output_dir=ns.output_dir if ns.output_dir is not None else cfg.output_dir,
        chunk_size=int(ns.chunk_size) if ns.chunk_size is not None else cfg.chunk_size,
        format=ns.format if ns.format is not None else cfg.format,
    )


def _cmd_compress(ns: argparse.Namespace) -> int:
    from huffpack.pipeline import compress_file
    from huffpack.report import build_report, render_code_table, render_frequency_table

    cfg = _resolve_config(ns)
    if cfg.chunk_size <= 0:
        raise UsageError(f"--chunk-size must be > 0, got {cfg.chunk_size}")

    input_path = cfg.resolve_input(ns.input)
    if not input_path.is_file():
        raise UsageError(f"file does not exist: {input_path}")
    output_path = ns.output if ns.output is not None else cfg.output_for(input_path)

    quiet = bool(ns.json)
    if not quiet:
        print(f"File path (input) : {input_path}")
        print(f"File name (compressed) : {input_path.stem}")

    def on_stage(stage: str) -> None:
        if not quiet:
            print(_STAGE_MESSAGES.get(stage, stage))

    result = compress_file(
        input_path,
        output_path,
        fmt=cfg.format,
        chunk_size=cfg.chunk_size,
        on_stage=on_stage,
    )
    report = build_report(result, compare=bool(ns.compare))

    if quiet:
        print(report.to_json())
        return EXIT_OK

    if ns.verbose:
        print(render_frequency_table(result.freq))
        print(render_code_table(result.codes))
    print(report.render_text())
    if cfg.format == "raw":
        print(
            "note: raw output stores no code table/padding; use --format container to make it decodable"
        )
    return EXIT_OK


def _cmd_decompress(ns: argparse.Namespace) -> int:
    from huffpack.pipeline import decompress_file

    out = decompress_file(ns.input, ns.output)
    print(f"Decompressed: {out}")
    return EXIT_OK


def _cmd_verify(ns: argparse.Namespace) -> int:
    from huffpack.verify import verify_container_file

    verify_container_file(ns.input, full=not bool(ns.light))
    print("OK")
    return EXIT_OK


def _cmd_config_validate(ns: argparse.Namespace) -> int:
    # load is the validation
    load_config(str(ns.config))
    print("OK")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="huffpack", description="Byte-level Huffman file compressor")
    p.add_argument("--version", action="version", version=f"huffpack {__version__}")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_c = sub.add_parser("compress", help="Compress one file")
    p_c.add_argument(
        "input",
        help="Input file. A bare name (no directory part) is resolved against the input directory.",
    )
    p_c.add_argument("--output", type=Path, default=None, help="Explicit output path")
    p_c.add_argument(
        "--output-dir", type=Path, default=None, help="Output directory (default: Storage/Compressed)"
    )
    p_c.add_argument(
        "--input-dir", type=Path, default=None, help="Input directory (default: Storage/Uncompressed)"
    )
    p_c.add_argument("--format", choices=list(FORMATS), default=None, help="Output format (default: raw)")
    p_c.add_argument("--chunk-size", type=int, default=None, help="Read chunk size in bytes (default: 1 MiB)")
    p_c.add_argument(
        "--config",
        default=None,
        help="Config spec (JSON). Use '@file.json' to load from file, or pass JSON inline.",
    )
    p_c.add_argument("--compare", action="store_true", help="Report zlib/zstd baseline sizes")
    p_c.add_argument("--json", action="store_true", help="Print the run report as JSON only")
    p_c.add_argument("-v", "--verbose", action="store_true", help="Dump frequency and code tables")
    _add_common_args(p_c)

    p_d = sub.add_parser("decompress", help="Decompress an HPK container")
    p_d.add_argument("input", type=Path)
    p_d.add_argument("output", type=Path)
    _add_common_args(p_d)

    p_v = sub.add_parser("verify", help="Verify an HPK container")
    p_v.add_argument("input", type=Path)
    p_v.add_argument("--light", action="store_true", help="Header checks only, skip the full decode")
    _add_common_args(p_v)

    p_cv = sub.add_parser("config-validate", help="Validate a config spec (v1)")
    p_cv.add_argument("config", help="Config spec JSON (@file.json or inline JSON)")
    _add_common_args(p_cv)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    p = build_parser()
    ns = p.parse_args(argv)

    try:
        if ns.cmd == "compress":
            return _cmd_compress(ns)
        if ns.cmd == "decompress":
            return _cmd_decompress(ns)
        if ns.cmd == "verify":
            return _cmd_verify(ns)
        # subparsers are required: the only command left is config-validate
        return _cmd_config_validate(ns)

    except SystemExit:
        raise
    except ConfigError as e:
        # Treat as usage/config error.
        if getattr(ns, "debug", False):
            raise
        print(f"[huffpack] {UsageError.category}: {e}", file=sys.stderr)
        return EXIT_USAGE
    except HuffpackError as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[huffpack] {e.category}: {e}", file=sys.stderr)
        return int(getattr(e, "exit_code", EXIT_GENERIC) or EXIT_GENERIC)
    except Exception as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[huffpack] unexpected error: {e}", file=sys.stderr)
        return EXIT_GENERIC


if __name__ == "__main__":
    raise SystemExit(main())
