# SPDX-License-Identifier: MIT
"""Toolset protocol, base implementation and registry.

A Toolset captures the link conventions of a compiler/linker family
(GCC, Clang, MSVC): how libraries are named and which linker flags
follow from a configuration's settings.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pcmake.core.errors import UnknownToolsetError

if TYPE_CHECKING:
    from pcmake.core.model import Configuration, Project

logger = logging.getLogger(__name__)

# Used when neither an override nor the configuration names a toolset
DEFAULT_TOOLSET = "clang"


@runtime_checkable
class Toolset(Protocol):
    """Protocol for toolsets."""

    @property
    def name(self) -> str:
        """Toolset name (e.g., 'gcc', 'clang', 'msc')."""
        ...

    def get_links(self, cfg: Configuration) -> list[str]:
        """Ordered link targets for a configuration."""
        ...

    def get_ldflags(self, cfg: Configuration) -> list[str]:
        """Ordered linker flags for a configuration."""
        ...


class BaseToolset(ABC):
    """Abstract base class for toolsets.

    Resolves link entries that name a library dependency of the
    project ("siblings") into the path of that project's output
    file, relative to the project location. Subclasses provide the
    library file names and the flag mapping.
    """

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def get_links(self, cfg: Configuration) -> list[str]:
        project = cfg.project
        links: list[str] = []
        for link in cfg.links:
            sibling = project.get_dependency(link) if project is not None else None
            if sibling is not None and sibling.kind.is_library:
                links.append(self._sibling_path(cfg, sibling))
            else:
                links.append(self._system_link(link))
        return links

    @abstractmethod
    def get_ldflags(self, cfg: Configuration) -> list[str]:
        ...

    @abstractmethod
    def get_library_name(self, project: Project, cfg: Configuration) -> str:
        """File name of the library a project produces."""
        ...

    def _system_link(self, link: str) -> str:
        """Format a non-sibling link entry. Override if needed."""
        return link

    def _sibling_path(self, cfg: Configuration, sibling: Project) -> str:
        """Path of a sibling's library, relative to cfg's project location."""
        if cfg.project is None:
            raise ValueError(
                f"configuration '{cfg.name}' is not attached to a project"
            )
        # Prefer the sibling configuration with the same name
        sibling_cfg = sibling.get_configuration(cfg.name)
        if sibling_cfg is None and sibling.configurations:
            sibling_cfg = sibling.configurations[0]
        output_dir = sibling_cfg.output_dir if sibling_cfg is not None else ""
        libname = self.get_library_name(sibling, sibling_cfg or cfg)

        target = Path(sibling.location) / output_dir / libname
        try:
            rel = os.path.relpath(target, cfg.project.location)
        except ValueError:
            # On Windows, relpath fails across drive letters
            return Path(target).absolute().as_posix()
        rel = Path(rel).as_posix()
        if "/" not in rel:
            rel = f"./{rel}"
        return rel

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"


class ToolsetRegistry:
    """Registry of toolset classes keyed by identifier.

    Example:
        toolset_registry.register(GccToolset, aliases=["gcc", "gnu"])
        toolset = toolset_registry.get("gnu")
    """

    def __init__(self) -> None:
        self._classes: dict[str, type[BaseToolset]] = {}
        self._aliases: dict[str, str] = {}

    def register(
        self,
        toolset_class: type[BaseToolset],
        *,
        aliases: list[str],
    ) -> None:
        """Register a toolset class.

        Args:
            toolset_class: Class to instantiate on lookup.
            aliases: Identifiers that select it; the first is canonical.
        """
        if not aliases:
            raise ValueError("at least one alias is required")
        canonical = aliases[0]
        self._classes[canonical] = toolset_class
        for alias in aliases:
            self._aliases[alias.lower()] = canonical

    def __contains__(self, identifier: object) -> bool:
        return isinstance(identifier, str) and identifier.lower() in self._aliases

    def names(self) -> list[str]:
        """Canonical names of registered toolsets."""
        return sorted(self._classes)

    def aliases_for(self, name: str) -> list[str]:
        return sorted(alias for alias, canon in self._aliases.items() if canon == name)

    def get(self, identifier: str, context: str | None = None) -> BaseToolset:
        """Instantiate the toolset registered under identifier.

        Raises:
            UnknownToolsetError: If identifier is not registered.
        """
        canonical = self._aliases.get(identifier.lower())
        if canonical is None:
            raise UnknownToolsetError(identifier, context)
        return self._classes[canonical]()


toolset_registry = ToolsetRegistry()


def resolve_toolset(
    cfg: Configuration,
    override: str | None = None,
    registry: ToolsetRegistry | None = None,
) -> BaseToolset:
    """Select the toolset for a configuration.

    Priority: explicit override, then the configuration's toolset,
    then DEFAULT_TOOLSET.

    Raises:
        UnknownToolsetError: If the chosen identifier is not registered.
    """
    if registry is None:
        # Importing the toolsets package registers the built-in toolsets
        import pcmake.toolsets  # noqa: F401

        registry = toolset_registry

    identifier = override or cfg.toolset or DEFAULT_TOOLSET
    toolset = registry.get(identifier, cfg.describe())
    logger.debug("Using toolset %s for %s", toolset.name, cfg.describe())
    return toolset
