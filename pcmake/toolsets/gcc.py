# SPDX-License-Identifier: MIT
"""GCC toolset implementation.

Library naming and linker flags for GCC and compatible drivers:
- Static libraries: lib<name>.a
- Shared libraries: lib<name>.so
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pcmake.core.model import ProjectKind
from pcmake.tools.toolset import BaseToolset

if TYPE_CHECKING:
    from pcmake.core.model import Configuration, Project


class GccToolset(BaseToolset):
    """GCC toolset.

    Linker flags derived from a configuration:
        architecture x86 / x86_64  ->  -m32 / -m64
        symbols off                ->  -s
        link_time_optimization     ->  -flto
        shared library             ->  -shared -Wl,-soname=lib<name>.so
    """

    ARCHITECTURE_FLAGS: dict[str, str] = {
        "x86": "-m32",
        "x86_64": "-m64",
    }

    def __init__(self, name: str = "gcc") -> None:
        super().__init__(name)

    def get_library_name(self, project: Project, cfg: Configuration) -> str:
        if project.kind == ProjectKind.SHARED_LIBRARY:
            return f"lib{project.name}{self._shared_suffix(cfg)}"
        return f"lib{project.name}.a"

    def _shared_suffix(self, cfg: Configuration) -> str:
        return ".so"

    def get_ldflags(self, cfg: Configuration) -> list[str]:
        flags: list[str] = []

        arch_flag = self.ARCHITECTURE_FLAGS.get(cfg.architecture.lower())
        if arch_flag:
            flags.append(arch_flag)

        if cfg.symbols is False:
            flags.append("-s")

        if cfg.link_time_optimization:
            flags.append("-flto")

        project = cfg.project
        if project is not None and project.kind == ProjectKind.SHARED_LIBRARY:
            flags.extend(self._shared_library_flags(project, cfg))

        return flags

    def _shared_library_flags(self, project: Project, cfg: Configuration) -> list[str]:
        return ["-shared", f"-Wl,-soname={self.get_library_name(project, cfg)}"]


# =============================================================================
# Registration
# =============================================================================

from pcmake.tools.toolset import toolset_registry  # noqa: E402

toolset_registry.register(GccToolset, aliases=["gcc", "gnu"])
