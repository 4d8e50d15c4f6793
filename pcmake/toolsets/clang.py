# SPDX-License-Identifier: MIT
"""Clang toolset implementation.

Clang accepts the GCC driver flags; it differs on macOS where shared
libraries are .dylib files linked with -dynamiclib.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pcmake.toolsets.gcc import GccToolset

if TYPE_CHECKING:
    from pcmake.core.model import Configuration, Project


class ClangToolset(GccToolset):
    """Clang toolset."""

    def __init__(self) -> None:
        super().__init__("clang")

    def _shared_suffix(self, cfg: Configuration) -> str:
        if cfg.system.lower() == "macosx":
            return ".dylib"
        return ".so"

    def _shared_library_flags(self, project: Project, cfg: Configuration) -> list[str]:
        if cfg.system.lower() == "macosx":
            libname = self.get_library_name(project, cfg)
            return ["-dynamiclib", f"-Wl,-install_name,@rpath/{libname}"]
        return super()._shared_library_flags(project, cfg)


# =============================================================================
# Registration
# =============================================================================

from pcmake.tools.toolset import toolset_registry  # noqa: E402

toolset_registry.register(ClangToolset, aliases=["clang", "llvm"])
