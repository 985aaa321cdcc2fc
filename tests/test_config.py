from __future__ import annotations

import json
from pathlib import Path

import pytest

from huffpack.config import (
    DEFAULT_INPUT_DIR,
    DEFAULT_OUTPUT_DIR,
    ConfigError,
    RunConfig,
    load_config,
)
from huffpack.io import CHUNK_SIZE_DEFAULT


def test_defaults_without_config() -> None:
    cfg = load_config(None)
    assert cfg.input_dir == DEFAULT_INPUT_DIR
    assert cfg.output_dir == DEFAULT_OUTPUT_DIR
    assert cfg.chunk_size == CHUNK_SIZE_DEFAULT
    assert cfg.format == "raw"


def test_inline_minimal() -> None:
    cfg = load_config(json.dumps({"spec": "huffpack.config.v1"}))
    assert cfg == RunConfig()


def test_inline_full() -> None:
    obj = {
        "spec": "huffpack.config.v1",
        "input_dir": "in",
        "output_dir": "out",
        "chunk_size": 4096,
        "format": "container",
    }
    cfg = load_config(json.dumps(obj))
    assert cfg.input_dir == Path("in")
    assert cfg.output_dir == Path("out")
    assert cfg.chunk_size == 4096
    assert cfg.format == "container"


def test_from_file(tmp_path: Path) -> None:
    p = tmp_path / "c.json"
    p.write_text(json.dumps({"spec": "huffpack.config.v1", "format": "container"}), encoding="utf-8")
    assert load_config("@" + str(p)).format == "container"


@pytest.mark.parametrize(
    "obj",
    [
        {},
        {"spec": "huffpack.config.v2"},
        {"spec": "huffpack.config.v1", "wat": 1},
        {"spec": "huffpack.config.v1", "chunk_size": 0},
        {"spec": "huffpack.config.v1", "chunk_size": True},
        {"spec": "huffpack.config.v1", "format": "zip"},
        {"spec": "huffpack.config.v1", "output_dir": ""},
    ],
)
def test_invalid_specs_rejected(obj: dict) -> None:
    with pytest.raises(ConfigError):
        load_config(json.dumps(obj))


def test_bad_json_and_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config("{not json")
    with pytest.raises(ConfigError):
        load_config("[1, 2]")
    with pytest.raises(ConfigError):
        load_config("@" + str(tmp_path / "missing.json"))
    with pytest.raises(ConfigError):
        load_config("   ")


def test_resolve_input_bare_name_uses_input_dir() -> None:
    cfg = RunConfig(input_dir=Path("data"))
    assert cfg.resolve_input("notes.txt") == Path("data") / "notes.txt"
    assert cfg.resolve_input("./notes.txt") == Path("./notes.txt")
    assert cfg.resolve_input("sub/notes.txt") == Path("sub/notes.txt")


def test_output_for_uses_stem() -> None:
    cfg = RunConfig(output_dir=Path("out"))
    assert cfg.output_for(Path("a/b/photo.raw.bmp")) == Path("out") / "photo.raw.bin"


def test_cli_config_validate_in_process(capsys: pytest.CaptureFixture[str]) -> None:
    from huffpack.cli import main

    assert main(["config-validate", json.dumps({"spec": "huffpack.config.v1"})]) == 0
    assert "OK" in capsys.readouterr().out
    assert main(["config-validate", json.dumps({"spec": "nope"})]) == 2
