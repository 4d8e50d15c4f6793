# SPDX-License-Identifier: MIT
"""C++ dialect to CMake standard mapping.

Maps a dialect label such as "C++17" or "gnu++14" plus the
position-independent-code tri-state onto the values of the
CXX_STANDARD, CXX_STANDARD_REQUIRED, CXX_EXTENSIONS and
POSITION_INDEPENDENT_CODE target properties.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pcmake.core.errors import UnmappedDialectError
from pcmake.core.model import PicMode


class CppDialect(Enum):
    """Supported dialect labels.

    Each value is (label, standard level, GNU extensions).
    """

    CPP98 = ("C++98", 98, False)
    CPP11 = ("C++11", 11, False)
    CPP14 = ("C++14", 14, False)
    CPP17 = ("C++17", 17, False)
    CPP20 = ("C++20", 20, False)
    GNUCPP98 = ("gnu++98", 98, True)
    GNUCPP11 = ("gnu++11", 11, True)
    GNUCPP14 = ("gnu++14", 14, True)
    GNUCPP17 = ("gnu++17", 17, True)
    GNUCPP20 = ("gnu++20", 20, True)

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def standard(self) -> int:
        return self.value[1]

    @property
    def extensions(self) -> bool:
        return self.value[2]

    @classmethod
    def from_label(cls, label: str, context: str | None = None) -> CppDialect:
        """Look up a dialect by its label.

        Raises:
            UnmappedDialectError: If the label is not in the table.
        """
        for dialect in cls:
            if dialect.label == label:
                return dialect
        raise UnmappedDialectError(label, context)


@dataclass(frozen=True)
class StandardSettings:
    """Values for the standard properties block.

    Attributes:
        standard: CXX_STANDARD level (98, 11, 14, 17, 20).
        required: CXX_STANDARD_REQUIRED; always True when emitted.
        extensions: CXX_EXTENSIONS, True for gnu++ dialects.
        pic: POSITION_INDEPENDENT_CODE.
    """

    standard: int
    required: bool
    extensions: bool
    pic: bool


def map_standard(
    dialect: str,
    pic: PicMode,
    context: str | None = None,
) -> StandardSettings | None:
    """Map a dialect label and PIC mode to standard settings.

    Args:
        dialect: Dialect label. An empty label means "not specified".
        pic: PIC tri-state; only PicMode.ON enables it.
        context: Error context for unmapped labels.

    Returns:
        The settings, or None when no dialect is specified.

    Raises:
        UnmappedDialectError: If the label is not a known dialect.
    """
    if not dialect:
        return None

    entry = CppDialect.from_label(dialect, context)
    return StandardSettings(
        standard=entry.standard,
        required=True,
        extensions=entry.extensions,
        pic=pic is PicMode.ON,
    )
