"""Path handling, the game data directory and binary file helpers."""

from __future__ import annotations

import mmap
import os
import threading
from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, os.PathLike]
BytesLike = Union[bytes, bytearray, memoryview]

READ_BYTES_AUTO_THRESHOLD = 1 * 1024 * 1024

_game_path: Optional[Path] = None
_game_path_lock = threading.Lock()


class MMapFile:
    """A read-only memory mapping of a whole file, released on close."""

    def __init__(self) -> None:
        self._file = None
        self._map: Optional[mmap.mmap] = None

    @property
    def data(self) -> Optional[mmap.mmap]:
        """The mapped bytes, or None when nothing is mapped."""
        return self._map

    @property
    def size(self) -> int:
        return len(self._map) if self._map is not None else 0

    def open(self, filepath: PathLike) -> bool:
        """Map ``filepath``; returns False if it cannot be opened or mapped."""
        self.release()
        try:
            handle = open(filepath, "rb")
        except OSError:
            return False
        try:
            mapping = mmap.mmap(handle.fileno(), 0, access=mmap.ACCESS_READ)
        except (OSError, ValueError):
            handle.close()
            return False
        self._file = handle
        self._map = mapping
        return True

    def release(self) -> None:
        """Unmap the file and close it; safe to call more than once."""
        if self._map is not None:
            self._map.close()
            self._map = None
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "MMapFile":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.release()
        return False

    def __del__(self) -> None:
        try:
            self.release()
        except Exception:
            pass


def normalize_path(path: PathLike) -> Path:
    """Make ``path`` absolute and resolve '.', '..' and symlinks where they exist."""
    try:
        return Path(path).resolve(strict=False)
    except (OSError, RuntimeError):
        return Path(path)


def set_game_path(path: PathLike) -> None:
    global _game_path
    normalized = normalize_path(path)
    with _game_path_lock:
        _game_path = normalized


def get_game_path() -> Optional[Path]:
    """The stored game directory, or None if it was never set."""
    with _game_path_lock:
        return _game_path


def read_bytes(path: PathLike) -> bytes:
    """Read a whole file into memory."""
    file = normalize_path(path)
    try:
        with open(file, "rb") as handle:
            return handle.read()
    except OSError as exc:
        raise OSError(f"Failed to open file: {file}") from exc


def read_bytes_auto(path: PathLike) -> memoryview:
    """Read a file, memory-mapping it when it is larger than the threshold."""
    file = normalize_path(path)
    size = file.stat().st_size
    if size <= READ_BYTES_AUTO_THRESHOLD:
        return memoryview(read_bytes(file))
    try:
        with open(file, "rb") as handle:
            mapping = mmap.mmap(handle.fileno(), 0, access=mmap.ACCESS_READ)
    except (OSError, ValueError) as exc:
        raise OSError(f"Failed to mmap file: {file}") from exc
    return memoryview(mapping)


def write_bytes(path: PathLike, data: BytesLike, append: bool = False) -> None:
    """Write ``data`` to ``path``, creating parent directories as needed."""
    file = normalize_path(path)
    file.parent.mkdir(parents=True, exist_ok=True)
    try:
        with open(file, "ab" if append else "wb") as handle:
            handle.write(bytes(data))
    except OSError as exc:
        raise OSError(f"Failed to open file for writing: {file}") from exc


def file_exists(path: PathLike) -> bool:
    """True if ``path`` names a regular file."""
    try:
        return normalize_path(path).is_file()
    except OSError:
        return False


def delete_file_safe(path: PathLike) -> bool:
    """Delete a regular file; returns whether it was removed."""
    file = normalize_path(path)
    try:
        if not file.is_file():
            return False
        file.unlink()
    except OSError:
        return False
    return True