# SPDX-License-Identifier: MIT
"""Custom exceptions for pcmake.

All pcmake exceptions inherit from PcmakeError, which includes
optional context (usually the project/configuration being emitted)
for better error messages.
"""

from __future__ import annotations


class PcmakeError(Exception):
    """Base class for all pcmake exceptions.

    Attributes:
        message: The error message.
        context: Optional description of where the error occurred,
            e.g. "project 'core', configuration 'Debug'".
    """

    def __init__(
        self,
        message: str,
        context: str | None = None,
    ) -> None:
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.context:
            return f"{self.context}: {self.message}"
        return self.message


class ModelError(PcmakeError):
    """The project model is invalid.

    Raised when loading a model file fails or when the model
    violates an invariant (duplicate configuration names,
    unknown dependencies, bad enum labels).
    """


class GenerateError(PcmakeError):
    """Error during CMake script emission.

    Any GenerateError is fatal for the project being emitted.
    """


class UnknownToolsetError(GenerateError):
    """Toolset identifier is not registered.

    Attributes:
        toolset: The identifier that could not be resolved.
    """

    def __init__(
        self,
        toolset: str,
        context: str | None = None,
    ) -> None:
        self.toolset = toolset
        super().__init__(f"invalid toolset '{toolset}'", context)


class UnmappedDialectError(GenerateError):
    """Language dialect label has no entry in the standard table.

    Attributes:
        dialect: The unrecognized dialect label.
    """

    def __init__(
        self,
        dialect: str,
        context: str | None = None,
    ) -> None:
        self.dialect = dialect
        super().__init__(f"unmapped language dialect '{dialect}'", context)
