# SPDX-License-Identifier: MIT
"""Filesystem queries used during emission.

The emitter never writes to disk; it only needs to test for files
and to manipulate paths. Paths are returned with forward slashes,
which CMake accepts on every platform.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for the filesystem-query capability."""

    def is_file(self, path: str | Path) -> bool:
        """Return True if path names an existing regular file."""
        ...

    def join(self, base: str | Path, *parts: str) -> str:
        """Join path components."""
        ...

    def absolute(self, path: str | Path) -> str:
        """Make path absolute against the working directory."""
        ...

    def relative(self, path: str | Path, base: str | Path) -> str:
        """Express path relative to base."""
        ...


class LocalFileSystem:
    """FileSystem backed by the real disk.

    Args:
        cwd: Directory relative paths are resolved against.
            Defaults to the process working directory at call time.
    """

    def __init__(self, cwd: Path | str | None = None) -> None:
        self._cwd = Path(cwd) if cwd is not None else None

    @property
    def cwd(self) -> Path:
        return self._cwd if self._cwd is not None else Path.cwd()

    def is_file(self, path: str | Path) -> bool:
        try:
            return Path(self.absolute(path)).is_file()
        except OSError:
            return False

    def join(self, base: str | Path, *parts: str) -> str:
        return Path(base).joinpath(*parts).as_posix()

    def absolute(self, path: str | Path) -> str:
        joined = self.cwd / Path(path)
        return Path(os.path.normpath(joined)).as_posix()

    def relative(self, path: str | Path, base: str | Path) -> str:
        abs_path = self.absolute(path)
        abs_base = self.absolute(base)
        try:
            rel = os.path.relpath(abs_path, abs_base)
        except ValueError:
            # On Windows, relpath fails across drive letters
            return abs_path
        return Path(rel).as_posix()
