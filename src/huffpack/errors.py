"""Typed errors for huffpack.

Single source of truth for exit codes lives here.

Policy:
- Errors are small and boring.
- Errors are raised where they are detected; nothing retries.
- The CLI maps errors to stable exit codes (see EXIT_* constants).
- docs/exit_codes.md is generated from this module (scripts/gen_exit_codes_md.py).
"""

from __future__ import annotations

from dataclasses import dataclass

# -------------------------
# Exit codes (single source)
# -------------------------

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_GENERIC = 10
EXIT_FILE = 11
EXIT_DATA = 12
EXIT_UNSUPPORTED_VERSION = 13
EXIT_CORRUPT = 14


@dataclass(frozen=True, slots=True)
class ExitCodeInfo:
    code: int
    name: str
    description: str


EXIT_CODES: tuple[ExitCodeInfo, ...] = (
    ExitCodeInfo(EXIT_OK, "OK", "Success"),
    ExitCodeInfo(EXIT_USAGE, "USAGE", "Usage/config error (invalid args, missing input, bad config spec)"),
    ExitCodeInfo(EXIT_GENERIC, "GENERIC", "Unexpected error"),
    ExitCodeInfo(EXIT_FILE, "FILE", "I/O failure (cannot open/read input, cannot create/write output)"),
    ExitCodeInfo(EXIT_DATA, "DATA", "Data failure (empty input, empty tree, missing code during encoding)"),
    ExitCodeInfo(EXIT_UNSUPPORTED_VERSION, "UNSUPPORTED_VERSION", "Unsupported container version"),
    ExitCodeInfo(EXIT_CORRUPT, "CORRUPT", "Corrupt or truncated container"),
)

_EXIT_CODE_BY_CODE: dict[int, ExitCodeInfo] = {e.code: e for e in EXIT_CODES}


def exit_code_info(code: int) -> ExitCodeInfo | None:
    return _EXIT_CODE_BY_CODE.get(int(code))


def render_exit_codes_markdown() -> str:
    """Render docs/exit_codes.md content."""
    lines: list[str] = []
    lines.append("# Exit codes\n")
    lines.append("> GENERATED FILE - do not edit manually.\n")
    lines.append("> Source of truth: `src/huffpack/errors.py` (EXIT_CODES).\n")
    lines.append("> Regenerate: `python scripts/gen_exit_codes_md.py`.\n\n")
    lines.append("These are the CLI exit codes you can rely on.\n\n")
    lines.append("| Code | Name | Meaning |\n")
    lines.append("|---:|---|---|\n")
    for e in sorted(EXIT_CODES, key=lambda x: x.code):
        lines.append(f"| {e.code} | `{e.name}` | {e.description} |\n")
    lines.append("\n## Notes\n")
    lines.append("- Internal errors extend `HuffpackError` and carry an `exit_code`.\n")
    lines.append("- Errors are printed on stderr as `[huffpack] <category>: <message>`.\n")
    lines.append("- `--debug` re-raises errors to show full stack traces.\n")
    return "".join(lines)


# ---------------
# Typed exceptions
# ---------------


class HuffpackError(Exception):
    """Base error for huffpack."""

    exit_code: int = EXIT_GENERIC
    category: str = "error"


class UsageError(HuffpackError):
    exit_code = EXIT_USAGE
    category = "usage error"


class FileError(HuffpackError):
    """I/O failure: open, read, create, write or flush."""

    exit_code = EXIT_FILE
    category = "file error"


class DataError(HuffpackError):
    """Logical failure: empty input, empty tree, missing code."""

    exit_code = EXIT_DATA
    category = "data error"


class CorruptContainer(HuffpackError):
    exit_code = EXIT_CORRUPT
    category = "corrupt container"


class BadMagic(CorruptContainer):
    pass


class UnsupportedVersion(HuffpackError):
    exit_code = EXIT_UNSUPPORTED_VERSION
    category = "unsupported version"
