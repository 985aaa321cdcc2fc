from __future__ import annotations

import ast
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

# Orchestrator modules: wire the pipeline stages together, print, read config.
# The pipeline stages (core/*, io, container, errors, config) must NEVER import these.
ORCH_PREFIXES: tuple[str, ...] = (
    "huffpack.cli",
    "huffpack.__main__",
    "huffpack.pipeline",
    "huffpack.report",
    "huffpack.verify",
)

PACKAGE_ROOT = "huffpack"


@dataclass(frozen=True)
class ImportEdge:
    src: str
    dst: str
    file: Path
    lineno: int


def _is_orch(mod: str) -> bool:
    return any(mod == p or mod.startswith(p + ".") for p in ORCH_PREFIXES)


def _module_name_from_path(src_dir: Path, py_file: Path) -> str | None:
    parts = list(py_file.relative_to(src_dir).parts)
    if not parts or parts[0] != PACKAGE_ROOT:
        return None
    if py_file.name == "__init__.py":
        parts = parts[:-1]
    else:
        parts[-1] = py_file.stem
    return ".".join(parts) if parts else None


def _iter_import_edges(src_dir: Path) -> Iterable[ImportEdge]:
    for py in src_dir.rglob("*.py"):
        mod = _module_name_from_path(src_dir, py)
        if not mod:
            continue

        tree = ast.parse(py.read_text(encoding="utf-8"), filename=str(py))
        for node in ast.walk(tree):
            names: list[str] = []
            if isinstance(node, ast.Import):
                names = [alias.name for alias in node.names]
            elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
                names = [node.module]
            for name in names:
                if name == PACKAGE_ROOT or name.startswith(PACKAGE_ROOT + "."):
                    yield ImportEdge(src=mod, dst=name, file=py, lineno=getattr(node, "lineno", 0))


def test_no_relative_imports() -> None:
    src_dir = Path(__file__).resolve().parents[1] / "src"
    offenders = []
    for py in src_dir.rglob("*.py"):
        tree = ast.parse(py.read_text(encoding="utf-8"), filename=str(py))
        for node in ast.walk(tree):
            if isinstance(node, ast.ImportFrom) and node.level > 0:
                offenders.append(f"{py}:{node.lineno}")
    assert not offenders, offenders


def test_pipeline_stages_do_not_import_orchestrators() -> None:
    """
    Hard dependency direction:
      ORCH   -> may depend on stages
      stages -> must NOT depend on ORCH
    """
    src_dir = Path(__file__).resolve().parents[1] / "src"
    if not src_dir.is_dir():
        raise AssertionError(f"Expected src/ directory at: {src_dir}")

    violations = [
        e
        for e in _iter_import_edges(src_dir)
        if e.src != e.dst and not _is_orch(e.src) and _is_orch(e.dst)
    ]

    if violations:
        lines = ["Forbidden imports detected (stage -> ORCH):"]
        for v in sorted(violations, key=lambda e: (str(e.file), e.lineno, e.src, e.dst)):
            lines.append(f"  {v.file}:{v.lineno}  {v.src}  ->  {v.dst}")
        raise AssertionError("\n".join(lines))
