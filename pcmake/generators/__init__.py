# SPDX-License-Identifier: MIT
"""Build file generators for pcmake."""

from pcmake.generators.cmake import CMakeGenerator, CMakeProjectWriter
from pcmake.generators.generator import BaseGenerator, Generator

__all__ = [
    "BaseGenerator",
    "CMakeGenerator",
    "CMakeProjectWriter",
    "Generator",
]
