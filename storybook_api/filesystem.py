"""File-system access used by the source parsers."""

from __future__ import annotations

import os
from pathlib import Path, PurePath
from typing import Dict, Mapping, Protocol, Union

PathLike = Union[str, PurePath]


class FileSystem(Protocol):
    """Read-only view of source files consumed by the parsers."""

    def exists(self, path: PathLike) -> bool:
        """Return True when a regular file exists at ``path``."""

    def read_text(self, path: PathLike) -> str:
        """Return the UTF-8 decoded contents of ``path``."""


class LocalFileSystem:
    """Reads files from the local disk."""

    def exists(self, path: PathLike) -> bool:
        return Path(path).is_file()

    def read_text(self, path: PathLike) -> str:
        return Path(path).read_text(encoding="utf-8")


class MemoryFileSystem:
    """Holds ``absolute path -> contents`` pairs in memory."""

    def __init__(self, files: Mapping[str, str] | None = None) -> None:
        self._files: Dict[str, str] = {}
        for path, content in (files or {}).items():
            self.write(path, content)

    def write(self, path: PathLike, content: str) -> None:
        self._files[normalize_path(path)] = content

    def exists(self, path: PathLike) -> bool:
        return normalize_path(path) in self._files

    def read_text(self, path: PathLike) -> str:
        try:
            return self._files[normalize_path(path)]
        except KeyError as exc:
            raise FileNotFoundError(str(path)) from exc


def normalize_path(path: PathLike) -> str:
    """Return an absolute, normalised path string without touching the disk."""
    return os.path.abspath(os.fspath(path))


def resolve_relative(base_file: PathLike, reference: str) -> str:
    """Resolve ``reference`` against the directory containing ``base_file``."""
    directory = os.path.dirname(normalize_path(base_file))
    return normalize_path(os.path.join(directory, reference))


DEFAULT_FILESYSTEM: FileSystem = LocalFileSystem()


__all__ = [
    "DEFAULT_FILESYSTEM",
    "FileSystem",
    "LocalFileSystem",
    "MemoryFileSystem",
    "PathLike",
    "normalize_path",
    "resolve_relative",
]
