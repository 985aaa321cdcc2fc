"""File I/O boundary.

Every OSError is turned into FileError here; the rest of the package never
touches the filesystem directly.
"""

from __future__ import annotations

import os
import tempfile
from collections.abc import Iterator
from pathlib import Path

from huffpack.errors import FileError

CHUNK_SIZE_DEFAULT = 1 << 20  # 1 MiB


def iter_file_chunks(path: Path, chunk_size: int = CHUNK_SIZE_DEFAULT) -> Iterator[bytes]:
    """Yield the file content in chunks of at most ``chunk_size`` bytes.

    Existence is checked eagerly, so a missing input fails on call and not on
    first iteration.
    """
    path = Path(path)
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be > 0, got {chunk_size}")
    if not path.is_file():
        raise FileError(f"the input file does not exist: {path}")
    return _read_chunks(path, chunk_size)


def _read_chunks(path: Path, chunk_size: int) -> Iterator[bytes]:
    try:
        fp = path.open("rb")
    except OSError as err:
        raise FileError(f"unable to read the file (permission denied or locked): {path}") from err
    with fp:
        while True:
            try:
                chunk = fp.read(chunk_size)
            except OSError as err:
                raise FileError(f"error while reading file: {path}") from err
            if not chunk:
                break
            yield chunk


def read_file(path: Path) -> bytes:
    path = Path(path)
    if not path.is_file():
        raise FileError(f"the input file does not exist: {path}")
    try:
        return path.read_bytes()
    except OSError as err:
        raise FileError(f"error while reading file: {path}") from err


def write_output(path: Path, data: bytes) -> Path:
    """Write ``data`` to ``path`` atomically.

    Parent directories are created as needed. Bytes go to a temp file in the
    same directory which is fsynced and then renamed over the target; on any
    failure the temp file is removed and the target is left untouched.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        raise FileError(f"failed to create output directory: {path.parent}") from err

    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    except OSError as err:
        raise FileError(f"failed to open output file: {path}") from err

    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as fp:
            fp.write(data)
            fp.flush()
            os.fsync(fp.fileno())
        os.replace(tmp, path)
    except OSError as err:
        tmp.unlink(missing_ok=True)
        raise FileError(f"write failed: {path}") from err
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
    return path
