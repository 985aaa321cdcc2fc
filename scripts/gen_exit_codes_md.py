#!/usr/bin/env python3
"""Regenerate docs/exit_codes.md, the table of exit codes returned by `huffpack`.

The table comes from huffpack.errors.EXIT_CODES; tests/test_errors.py fails
when the committed file drifts from it.

Usage:
  python scripts/gen_exit_codes_md.py [--check]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

REPO = Path(__file__).resolve().parents[1]
DOC = REPO / "docs" / "exit_codes.md"


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="gen_exit_codes_md.py", description=__doc__.splitlines()[0])
    ap.add_argument("--check", action="store_true", help="Only report whether the doc is up to date")
    ns = ap.parse_args(argv)

    sys.path.insert(0, str(REPO / "src"))
    from huffpack.errors import EXIT_CODES, render_exit_codes_markdown  # noqa: E402

    content = render_exit_codes_markdown()
    if ns.check:
        current = DOC.read_text(encoding="utf-8") if DOC.is_file() else ""
        if current != content:
            print(f"huffpack exit code doc is stale: {DOC}", file=sys.stderr)
            return 1
        print(f"huffpack exit code doc up to date ({len(EXIT_CODES)} codes)")
        return 0

    DOC.parent.mkdir(parents=True, exist_ok=True)
    DOC.write_text(content, encoding="utf-8")
    print(f"huffpack: wrote {len(EXIT_CODES)} exit codes to {DOC.relative_to(REPO)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
