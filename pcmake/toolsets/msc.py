# SPDX-License-Identifier: MIT
"""Microsoft C/C++ toolset implementation.

MSVC links against .lib files: static libraries and DLL import
libraries share the <name>.lib naming.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from pcmake.core.model import ProjectKind
from pcmake.tools.toolset import BaseToolset

if TYPE_CHECKING:
    from pcmake.core.model import Configuration, Project


class MscToolset(BaseToolset):
    """MSVC toolset.

    Linker flags derived from a configuration:
        always                     ->  /NOLOGO
        symbols on                 ->  /DEBUG
        architecture               ->  /MACHINE:X86 | X64 | ARM64
        link_time_optimization     ->  /LTCG
        shared library             ->  /DLL
    """

    MACHINE_FLAGS: dict[str, str] = {
        "x86": "/MACHINE:X86",
        "x86_64": "/MACHINE:X64",
        "arm64": "/MACHINE:ARM64",
    }

    def __init__(self) -> None:
        super().__init__("msc")

    def get_library_name(self, project: Project, cfg: Configuration) -> str:
        return f"{project.name}.lib"

    def _system_link(self, link: str) -> str:
        # System libraries are named without extension in project files
        _, ext = os.path.splitext(link)
        if not ext:
            return f"{link}.lib"
        return link

    def get_ldflags(self, cfg: Configuration) -> list[str]:
        flags = ["/NOLOGO"]

        if cfg.symbols:
            flags.append("/DEBUG")

        machine = self.MACHINE_FLAGS.get(cfg.architecture.lower())
        if machine:
            flags.append(machine)

        if cfg.link_time_optimization:
            flags.append("/LTCG")

        if cfg.project is not None and cfg.project.kind == ProjectKind.SHARED_LIBRARY:
            flags.append("/DLL")

        return flags


# =============================================================================
# Registration
# =============================================================================

from pcmake.tools.toolset import toolset_registry  # noqa: E402

toolset_registry.register(MscToolset, aliases=["msc", "msvc", "vs"])
