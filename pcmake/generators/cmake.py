# SPDX-License-Identifier: MIT
"""CMake script generator.

Translates resolved projects into CMake scripts. A single script
carries every configuration of a project: list-valued settings are
wrapped in $<$<CONFIG:name>:...> generator expressions, and target
properties that can't be guarded that way are wrapped in
if(CMAKE_BUILD_TYPE STREQUAL name) blocks.

Example output:
    add_library("core"
        "src/core.cpp"
    )
    set_target_properties("core" PROPERTIES
        ARCHIVE_OUTPUT_DIRECTORY "bin/Debug"
        LIBRARY_OUTPUT_DIRECTORY "bin/Debug"
        RUNTIME_OUTPUT_DIRECTORY "bin/Debug"
    )
    target_compile_definitions("core" PUBLIC
        $<$<CONFIG:Debug>:DEBUG>
    )
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from pcmake.core.dialect import StandardSettings, map_standard
from pcmake.core.escape import config_guard, escape_argument, escape_genex_value, quote
from pcmake.core.filesystem import LocalFileSystem
from pcmake.core.links import resolve_link_options, resolve_links
from pcmake.core.model import ProjectKind
from pcmake.core.pch import locate_pch
from pcmake.generators.generator import BaseGenerator
from pcmake.tools.toolset import resolve_toolset

if TYPE_CHECKING:
    from pcmake.core.filesystem import FileSystem
    from pcmake.core.model import Configuration, Project
    from pcmake.tools.toolset import ToolsetRegistry

logger = logging.getLogger(__name__)

# target_precompile_headers() needs CMake 3.16
CMAKE_MINIMUM_VERSION = "3.16"

OUTPUT_DIRECTORY_PROPERTIES = (
    "ARCHIVE_OUTPUT_DIRECTORY",
    "LIBRARY_OUTPUT_DIRECTORY",
    "RUNTIME_OUTPUT_DIRECTORY",
)


def _yes_no(value: bool) -> str:
    return "YES" if value else "NO"


class CMakeProjectWriter:
    """Writes the CMake statements for one project to a stream.

    Args:
        f: Output stream.
        fs: Filesystem used to locate precompiled headers and to make
            link paths absolute.
        toolset: Toolset identifier overriding every configuration's.
        registry: Toolset registry (defaults to the global one).
    """

    INDENT = "\t"

    def __init__(
        self,
        f: TextIO,
        *,
        fs: FileSystem | None = None,
        toolset: str | None = None,
        registry: ToolsetRegistry | None = None,
    ) -> None:
        self._f = f
        self._fs = fs if fs is not None else LocalFileSystem()
        self._toolset = toolset
        self._registry = registry

    def _line(self, depth: int, text: str) -> None:
        self._f.write(f"{self.INDENT * depth}{text}\n")

    def write(self, project: Project) -> None:
        """Write the whole project: declaration, dependencies, configurations."""
        self.write_declaration(project)
        self.write_dependencies(project)
        for cfg in project.configurations:
            self.write_configuration(project, cfg)

    def write_declaration(self, project: Project) -> None:
        """Write the add_library()/add_executable() statement."""
        name = quote(project.name)
        if project.kind == ProjectKind.STATIC_LIBRARY:
            self._line(0, f"add_library({name}")
        elif project.kind == ProjectKind.SHARED_LIBRARY:
            self._line(0, f"add_library({name} SHARED")
        else:
            self._line(0, f"add_executable({name}")
        for path in project.files:
            self._line(1, quote(path))
        self._line(0, ")")

    def write_dependencies(self, project: Project) -> None:
        dependencies = project.dependencies
        if not dependencies:
            return
        self._line(0, f"add_dependencies({quote(project.name)}")
        for dependency in dependencies:
            self._line(1, quote(dependency.name))
        self._line(0, ")")

    def write_configuration(self, project: Project, cfg: Configuration) -> None:
        """Write every block for one configuration.

        Everything that can fail is resolved before the first line
        is written.
        """
        context = cfg.describe()
        toolset = resolve_toolset(cfg, self._toolset, self._registry)
        standard = map_standard(cfg.dialect, cfg.pic, context)
        links = resolve_links(cfg, toolset, self._fs)
        link_options = resolve_link_options(cfg, toolset)
        pch = locate_pch(cfg, self._fs)

        name = quote(project.name)
        self._write_output_directories(name, cfg)
        self._write_guarded("target_include_directories", name, cfg, cfg.include_dirs)
        self._write_guarded("target_compile_definitions", name, cfg, cfg.defines)
        self._write_guarded("target_link_directories", name, cfg, cfg.lib_dirs)
        self._write_guarded("target_link_libraries", name, cfg, links)
        self._write_guarded("target_link_options", name, cfg, link_options)
        if standard is not None:
            self._write_standard(name, cfg, standard)
        if pch is not None:
            self._write_pch(name, cfg, pch)

    def _write_output_directories(self, name: str, cfg: Configuration) -> None:
        self._line(0, f"set_target_properties({name} PROPERTIES")
        for prop in OUTPUT_DIRECTORY_PROPERTIES:
            self._line(1, f"{prop} {quote(cfg.output_dir)}")
        self._line(0, ")")

    def _write_guarded(
        self,
        command: str,
        name: str,
        cfg: Configuration,
        values: list[str],
    ) -> None:
        """Write command(name PUBLIC ...) with each value guarded by cfg."""
        if not values:
            return
        self._line(0, f"{command}({name} PUBLIC")
        for value in values:
            self._line(1, config_guard(cfg.name, escape_genex_value(value)))
        self._line(0, ")")

    def _write_standard(
        self, name: str, cfg: Configuration, standard: StandardSettings
    ) -> None:
        self._line(0, f"if(CMAKE_BUILD_TYPE STREQUAL {cfg.name})")
        self._line(1, f"set_target_properties({name} PROPERTIES")
        self._line(2, f"CXX_STANDARD {standard.standard}")
        self._line(2, f"CXX_STANDARD_REQUIRED {_yes_no(standard.required)}")
        self._line(2, f"CXX_EXTENSIONS {_yes_no(standard.extensions)}")
        self._line(2, f"POSITION_INDEPENDENT_CODE {standard.pic}")
        self._line(1, ")")
        self._line(0, "endif()")

    def _write_pch(self, name: str, cfg: Configuration, pch: str) -> None:
        self._line(0, f"if(CMAKE_BUILD_TYPE STREQUAL {cfg.name})")
        self._line(1, f"target_precompile_headers({name} PUBLIC {escape_argument(pch)})")
        self._line(0, "endif()")


class CMakeGenerator(BaseGenerator):
    """Generator that writes one <project>.cmake file per project.

    Each project is rendered in memory first, so a fatal error while
    emitting a project leaves no partial file behind. A CMakeLists.txt
    that includes the project files in order is written last.

    Usage:
        generator = CMakeGenerator(workspace="demo", toolset="gcc")
        generator.generate([core, app], Path("build"))
        # Creates build/core.cmake, build/app.cmake, build/CMakeLists.txt
    """

    def __init__(
        self,
        *,
        workspace: str | None = None,
        toolset: str | None = None,
        fs: FileSystem | None = None,
        registry: ToolsetRegistry | None = None,
        write_workspace: bool = True,
    ) -> None:
        """Initialize the CMake generator.

        Args:
            workspace: Name for the project() call in CMakeLists.txt.
                Defaults to the first project's name.
            toolset: Toolset identifier overriding every configuration's.
            fs: Filesystem to probe (defaults to the local disk).
            registry: Toolset registry (defaults to the global one).
            write_workspace: If False, only the project files are written.
        """
        super().__init__("cmake")
        self._workspace = workspace
        self._toolset = toolset
        self._fs = fs
        self._registry = registry
        self._write_workspace = write_workspace

    def render_project(self, project: Project) -> str:
        """Render a project's CMake script to a string."""
        buffer = io.StringIO()
        writer = CMakeProjectWriter(
            buffer, fs=self._fs, toolset=self._toolset, registry=self._registry
        )
        writer.write(project)
        return buffer.getvalue()

    def render_workspace(self, projects: list[Project]) -> str:
        workspace = self._workspace
        if workspace is None:
            workspace = projects[0].name if projects else "workspace"
        lines = [
            f"cmake_minimum_required(VERSION {CMAKE_MINIMUM_VERSION})",
            f"project({quote(workspace)})",
        ]
        for project in projects:
            lines.append(f"include({quote(project.name + '.cmake')})")
        return "\n".join(lines) + "\n"

    def generate(self, projects: list[Project], output_dir: Path) -> list[Path]:
        """Generate the CMake files.

        Args:
            projects: Resolved projects, in the order to include them.
            output_dir: Directory to write the files to.

        Returns:
            The files written.

        Raises:
            GenerateError: If a project can't be emitted. Files for
                projects emitted before it are kept.
        """
        output_dir.mkdir(parents=True, exist_ok=True)
        written: list[Path] = []

        for project in projects:
            logger.debug("Generating %s", project.name)
            text = self.render_project(project)
            output_file = output_dir / f"{project.name}.cmake"
            output_file.write_text(text, encoding="utf-8")
            logger.info("Wrote %s", output_file)
            written.append(output_file)

        if self._write_workspace:
            output_file = output_dir / "CMakeLists.txt"
            output_file.write_text(self.render_workspace(projects), encoding="utf-8")
            logger.info("Wrote %s", output_file)
            written.append(output_file)

        return written
