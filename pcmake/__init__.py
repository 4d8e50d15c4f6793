# SPDX-License-Identifier: MIT
"""
Pcmake: translate resolved build-project models into CMake scripts.

Every configuration of a project lives in one script: list settings
are guarded with $<$<CONFIG:name>:...> generator expressions and
target properties with if(CMAKE_BUILD_TYPE STREQUAL name) blocks.
"""

from __future__ import annotations

__version__ = "0.1.0"

# Re-export commonly used classes for convenient imports
from pcmake.core.errors import (  # noqa: E402
    GenerateError,
    ModelError,
    PcmakeError,
    UnknownToolsetError,
    UnmappedDialectError,
)
from pcmake.core.loader import Workspace, load_workspace  # noqa: E402
from pcmake.core.model import (  # noqa: E402
    Configuration,
    PicMode,
    Project,
    ProjectKind,
)
from pcmake.generators.cmake import CMakeGenerator  # noqa: E402

# Public API exports
__all__ = [
    # Version
    "__version__",
    # Model
    "Configuration",
    "PicMode",
    "Project",
    "ProjectKind",
    "Workspace",
    "load_workspace",
    # Generators
    "CMakeGenerator",
    # Errors
    "GenerateError",
    "ModelError",
    "PcmakeError",
    "UnknownToolsetError",
    "UnmappedDialectError",
]
