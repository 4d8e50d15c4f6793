# SPDX-License-Identifier: MIT
"""Resolved project model consumed by the CMake emitter.

The model is produced by an external resolver: every configuration
already carries its flattened settings, so the emitter only reads it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from pcmake.core.errors import ModelError

# Names CMake accepts in $<CONFIG:...> and as CMAKE_BUILD_TYPE values
CONFIG_NAME_PATTERN = re.compile(r"[A-Za-z0-9_]+")


class ProjectKind(Enum):
    """Kind of target a project builds."""

    STATIC_LIBRARY = "StaticLibrary"
    SHARED_LIBRARY = "SharedLibrary"
    EXECUTABLE = "Executable"

    @classmethod
    def from_label(cls, label: str) -> ProjectKind:
        """Map a kind label to a ProjectKind.

        Accepts both the long names and the short premake-style ones
        (StaticLib, SharedLib). Anything that is not a library kind
        (ConsoleApp, WindowedApp, ...) is an executable.
        """
        if label in ("StaticLibrary", "StaticLib"):
            return cls.STATIC_LIBRARY
        if label in ("SharedLibrary", "SharedLib"):
            return cls.SHARED_LIBRARY
        return cls.EXECUTABLE

    @property
    def is_library(self) -> bool:
        return self in (ProjectKind.STATIC_LIBRARY, ProjectKind.SHARED_LIBRARY)


class PicMode(Enum):
    """Position-independent-code tri-state."""

    UNSET = "Unset"
    ON = "On"
    OFF = "Off"

    @classmethod
    def from_label(cls, label: str | None) -> PicMode:
        if label is None or label == "":
            return cls.UNSET
        if not isinstance(label, str):
            raise ModelError(f"invalid pic value {label!r} (expected On or Off)")
        for mode in cls:
            if mode.value.lower() == label.lower():
                return mode
        raise ModelError(f"invalid pic value '{label}' (expected On or Off)")


@dataclass
class Configuration:
    """Flattened build settings for one named configuration.

    Attributes:
        name: Configuration name, used as the generator-expression guard.
        output_dir: Directory for archives, libraries and executables.
        include_dirs: Include directories, in order.
        defines: Preprocessor definitions (raw, may contain spaces).
        lib_dirs: Library search directories.
        links: Raw link entries: sibling project names, system library
            names or library paths. Toolsets turn them into link targets.
        link_options: Extra linker options.
        dialect: Language dialect label ("C++17", "gnu++14", ...);
            empty means no standard properties are emitted.
        pic: Position-independent-code tri-state.
        pch: False when precompiled headers are disabled.
        pch_header: Precompiled header file name.
        toolset: Toolset identifier, or None for the default.
        architecture: Target architecture ("x86", "x86_64", "ARM64").
        symbols: Debug symbols: None (toolset default), True or False.
        link_time_optimization: Enable LTO at link time.
        system: Target operating system ("linux", "macosx", "windows").
        project: Owning project, set by Project.add_configuration().
    """

    name: str
    output_dir: str = ""
    include_dirs: list[str] = field(default_factory=list)
    defines: list[str] = field(default_factory=list)
    lib_dirs: list[str] = field(default_factory=list)
    links: list[str] = field(default_factory=list)
    link_options: list[str] = field(default_factory=list)
    dialect: str = ""
    pic: PicMode = PicMode.UNSET
    pch: bool = True
    pch_header: str | None = None
    toolset: str | None = None
    architecture: str = ""
    symbols: bool | None = None
    link_time_optimization: bool = False
    system: str = ""
    project: Project | None = field(default=None, repr=False, compare=False)

    def describe(self) -> str:
        """Context string for error messages."""
        if self.project is not None:
            return f"project '{self.project.name}', configuration '{self.name}'"
        return f"configuration '{self.name}'"


class Project:
    """A resolved project: one CMake target with its configurations.

    Example:
        core = Project("core", ProjectKind.STATIC_LIBRARY, base_dir="src")
        core.files.append("core.cpp")
        core.add_configuration(Configuration("Debug", output_dir="bin/Debug"))

        app = Project("app", ProjectKind.EXECUTABLE, base_dir="src")
        app.add_dependency(core)

    Attributes:
        name: Project name, unique within the workspace.
        kind: Target kind.
        base_dir: Directory the project was defined in.
        location: Directory the generated file is written to. Source
            files are relative to it. Defaults to base_dir.
        files: Source files relative to location.
        dependencies: Projects this one depends on, in insertion order.
        configurations: Configurations in declared order.
    """

    __slots__ = (
        "name",
        "kind",
        "base_dir",
        "location",
        "files",
        "_dependencies",
        "_configurations",
    )

    def __init__(
        self,
        name: str,
        kind: ProjectKind = ProjectKind.EXECUTABLE,
        *,
        base_dir: Path | str = ".",
        location: Path | str | None = None,
        files: list[str] | None = None,
    ) -> None:
        self.name = name
        self.kind = kind
        self.base_dir = Path(base_dir)
        self.location = Path(location) if location is not None else self.base_dir
        self.files: list[str] = list(files) if files else []
        self._dependencies: list[Project] = []
        self._configurations: list[Configuration] = []

    @property
    def dependencies(self) -> list[Project]:
        return list(self._dependencies)

    @property
    def configurations(self) -> list[Configuration]:
        return list(self._configurations)

    def add_dependency(self, project: Project) -> None:
        """Append a dependency. Order is preserved in the output."""
        self._dependencies.append(project)

    def add_configuration(self, cfg: Configuration) -> Configuration:
        """Attach a configuration to this project.

        Raises:
            ModelError: If the name can't be used as a CMake configuration
                name, or a configuration with the same name exists.
        """
        if not CONFIG_NAME_PATTERN.fullmatch(cfg.name):
            raise ModelError(
                f"invalid configuration name '{cfg.name}' "
                "(letters, digits and '_' only)",
                f"project '{self.name}'",
            )
        if self.get_configuration(cfg.name) is not None:
            raise ModelError(
                f"duplicate configuration '{cfg.name}'", f"project '{self.name}'"
            )
        cfg.project = self
        self._configurations.append(cfg)
        return cfg

    def get_configuration(self, name: str) -> Configuration | None:
        for cfg in self._configurations:
            if cfg.name == name:
                return cfg
        return None

    def get_dependency(self, name: str) -> Project | None:
        for dep in self._dependencies:
            if dep.name == name:
                return dep
        return None

    def __repr__(self) -> str:
        return f"Project({self.name!r}, {self.kind.value})"
