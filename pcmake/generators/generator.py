# SPDX-License-Identifier: MIT
"""Generator protocol for build file generation.

Generators take resolved projects and produce build system files.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pcmake.core.model import Project


@runtime_checkable
class Generator(Protocol):
    """Protocol for build file generators."""

    @property
    def name(self) -> str:
        """Generator name (e.g., 'cmake')."""
        ...

    def generate(self, projects: list[Project], output_dir: Path) -> list[Path]:
        """Generate build files for projects.

        Args:
            projects: Resolved projects to generate for.
            output_dir: Directory to write output files to.

        Returns:
            The files written.
        """
        ...


class BaseGenerator:
    """Base class for generators with common functionality."""

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def generate(self, projects: list[Project], output_dir: Path) -> list[Path]:
        """Generate build files. Subclasses must implement."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"
