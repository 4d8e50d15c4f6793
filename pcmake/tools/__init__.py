# SPDX-License-Identifier: MIT
"""Toolset abstraction and registry."""

from pcmake.tools.toolset import (
    DEFAULT_TOOLSET,
    BaseToolset,
    Toolset,
    ToolsetRegistry,
    resolve_toolset,
    toolset_registry,
)

__all__ = [
    "DEFAULT_TOOLSET",
    "BaseToolset",
    "Toolset",
    "ToolsetRegistry",
    "resolve_toolset",
    "toolset_registry",
]
