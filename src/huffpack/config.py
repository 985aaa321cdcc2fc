"""Run configuration (v1) for huffpack.

This module intentionally stays *small* and strict:
  - JSON only
  - explicit schema id
  - unknown keys are rejected

Precedence is resolved by the caller: CLI flag > config > default.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from huffpack.io import CHUNK_SIZE_DEFAULT

SPEC_ID_V1 = "huffpack.config.v1"

FORMATS = ("raw", "container")

DEFAULT_INPUT_DIR = Path("Storage") / "Uncompressed"
DEFAULT_OUTPUT_DIR = Path("Storage") / "Compressed"


class ConfigError(ValueError):
    pass


def _load_json_arg(config_arg: str) -> dict[str, Any]:
    s = config_arg.strip()
    if not s:
        raise ConfigError("config: empty argument")

    if s.startswith("@"):
        p = Path(s[1:]).expanduser()
        if not p.exists() or not p.is_file():
            raise ConfigError(f"config: file not found: {p}")
        raw = p.read_text(encoding="utf-8")
        try:
            obj = json.loads(raw)
        except Exception as e:
            raise ConfigError(f"config: invalid JSON in {p}: {e}") from e
        if not isinstance(obj, dict):
            raise ConfigError(f"config: JSON in {p} must be an object")
        return obj

    try:
        obj = json.loads(s)
    except Exception as e:
        raise ConfigError(f"config: invalid inline JSON: {e}") from e
    if not isinstance(obj, dict):
        raise ConfigError("config: inline JSON must be an object")
    return obj


def _optional_path(obj: dict[str, Any], key: str) -> Path | None:
    if key not in obj or obj[key] is None:
        return None
    v = obj[key]
    if not isinstance(v, str) or not v.strip():
        raise ConfigError(f"config: field '{key}' must be a non-empty string")
    return Path(v.strip()).expanduser()


def _optional_chunk_size(obj: dict[str, Any]) -> int | None:
    if "chunk_size" not in obj or obj["chunk_size"] is None:
        return None
    v = obj["chunk_size"]
    # bool is an int subclass
    if isinstance(v, bool) or not isinstance(v, int) or v <= 0:
        raise ConfigError("config: field 'chunk_size' must be a positive integer")
    return v


def _optional_format(obj: dict[str, Any]) -> str | None:
    if "format" not in obj or obj["format"] is None:
        return None
    v = obj["format"]
    if not isinstance(v, str) or v.strip() not in FORMATS:
        raise ConfigError(f"config: field 'format' must be one of {', '.join(FORMATS)}")
    return v.strip()


@dataclass(frozen=True)
class RunConfig:
    input_dir: Path = DEFAULT_INPUT_DIR
    output_dir: Path = DEFAULT_OUTPUT_DIR
    chunk_size: int = CHUNK_SIZE_DEFAULT
    format: str = "raw"

    def resolve_input(self, arg: str | Path) -> Path:
        """A bare file name (no directory part) is looked up in input_dir."""
        s = str(arg)
        if os.sep in s or (os.altsep and os.altsep in s):
            return Path(s)
        return self.input_dir / s

    def output_for(self, input_path: Path) -> Path:
        return self.output_dir / f"{Path(input_path).stem}.bin"


def load_config(config_arg: str | None) -> RunConfig:
    """Load and validate a config spec.

    config_arg:
      - None -> built-in defaults
      - '@file.json'
      - inline JSON object
    """
    if config_arg is None:
        return RunConfig()

    obj = _load_json_arg(config_arg)

    allowed = {"spec", "input_dir", "output_dir", "chunk_size", "format"}
    extra = sorted(set(obj.keys()) - allowed)
    if extra:
        raise ConfigError(f"config: unsupported keys: {', '.join(extra)}")

    spec_id = obj.get("spec")
    if spec_id != SPEC_ID_V1:
        raise ConfigError(f"config: unsupported spec: {spec_id!r} (expected {SPEC_ID_V1!r})")

    base = RunConfig()
    input_dir = _optional_path(obj, "input_dir")
    output_dir = _optional_path(obj, "output_dir")
    chunk_size = _optional_chunk_size(obj)
    fmt = _optional_format(obj)

    return RunConfig(
        input_dir=input_dir if input_dir is not None else base.input_dir,
        output_dir=output_dir if output_dir is not None else base.output_dir,
        chunk_size=chunk_size if chunk_size is not None else base.chunk_size,
        format=fmt if fmt is not None else base.format,
    )
