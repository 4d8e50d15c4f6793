# SPDX-License-Identifier: MIT
"""Toolset definitions (GCC, Clang, MSVC).

Importing this package registers every toolset with
pcmake.tools.toolset.toolset_registry.
"""

from pcmake.toolsets.clang import ClangToolset
from pcmake.toolsets.gcc import GccToolset
from pcmake.toolsets.msc import MscToolset

__all__ = [
    "ClangToolset",
    "GccToolset",
    "MscToolset",
]
