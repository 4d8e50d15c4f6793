# SPDX-License-Identifier: MIT
"""Load a resolved project model from a TOML file.

The file describes projects whose configurations are already
flattened:

    workspace = "demo"

    [[project]]
    name = "core"
    kind = "StaticLib"
    files = ["src/core.cpp"]

    [[project.configuration]]
    name = "Debug"
    output_dir = "bin/Debug"
    defines = ["DEBUG"]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pcmake.core.errors import ModelError
from pcmake.core.model import Configuration, PicMode, Project, ProjectKind

# Try to import tomllib (Python 3.11+) or tomli as fallback
try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore[import-not-found, no-redef]

logger = logging.getLogger(__name__)

_LIST_FIELDS = (
    "include_dirs",
    "defines",
    "lib_dirs",
    "links",
    "link_options",
)


@dataclass
class Workspace:
    """Projects loaded from one model file.

    Attributes:
        name: Workspace name (defaults to the file stem).
        projects: Projects in file order.
    """

    name: str
    projects: list[Project] = field(default_factory=list)

    def get_project(self, name: str) -> Project | None:
        for project in self.projects:
            if project.name == name:
                return project
        return None


def load_workspace(path: Path | str) -> Workspace:
    """Load a workspace from a TOML model file.

    Relative base_dir and location values are resolved against the
    directory containing the file.

    Raises:
        ModelError: If the file can't be read or is invalid.
    """
    path = Path(path)
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ModelError(f"cannot read model: {e}", str(path)) from e
    except tomllib.TOMLDecodeError as e:
        raise ModelError(f"invalid TOML: {e}", str(path)) from e

    return parse_workspace(data, root_dir=path.parent, default_name=path.stem)


def parse_workspace(
    data: dict[str, Any],
    *,
    root_dir: Path | str = ".",
    default_name: str = "workspace",
) -> Workspace:
    """Build a Workspace from already-decoded model data."""
    root_dir = Path(root_dir)
    workspace = Workspace(str(data.get("workspace", default_name)))

    entries = data.get("project", [])
    if not isinstance(entries, list):
        raise ModelError("'project' must be an array of tables")

    pending_deps: list[tuple[Project, list[str]]] = []
    for entry in entries:
        project = _parse_project(entry, root_dir)
        if workspace.get_project(project.name) is not None:
            raise ModelError(f"duplicate project '{project.name}'")
        workspace.projects.append(project)
        pending_deps.append(
            (project, _string_list(entry, "dependencies", f"project '{project.name}'"))
        )

    # Dependencies may refer to projects defined later in the file
    for project, dep_names in pending_deps:
        for dep_name in dep_names:
            dependency = workspace.get_project(dep_name)
            if dependency is None:
                raise ModelError(
                    f"unknown dependency '{dep_name}'", f"project '{project.name}'"
                )
            project.add_dependency(dependency)

    logger.debug(
        "Loaded workspace %s with %d project(s)", workspace.name, len(workspace.projects)
    )
    return workspace


def _parse_project(entry: Any, root_dir: Path) -> Project:
    if not isinstance(entry, dict) or "name" not in entry:
        raise ModelError("every [[project]] needs a name")

    name = str(entry["name"])
    context = f"project '{name}'"
    base_dir = root_dir / (_string_field(entry, "base_dir", context) or ".")
    location = _string_field(entry, "location", context)
    project = Project(
        name,
        ProjectKind.from_label(str(entry.get("kind", "ConsoleApp"))),
        base_dir=base_dir,
        location=root_dir / location if location is not None else None,
        files=_string_list(entry, "files", context),
    )

    for cfg_entry in entry.get("configuration", []):
        project.add_configuration(_parse_configuration(cfg_entry, name))
    return project


def _parse_configuration(entry: Any, project_name: str) -> Configuration:
    if not isinstance(entry, dict) or "name" not in entry:
        raise ModelError("every configuration needs a name", f"project '{project_name}'")

    name = str(entry["name"])
    context = f"project '{project_name}', configuration '{name}'"
    try:
        pic = PicMode.from_label(_string_field(entry, "pic", context))
    except ModelError as e:
        raise ModelError(e.message, context) from e

    lists = {key: _string_list(entry, key, context) for key in _LIST_FIELDS}
    symbols = entry.get("symbols")
    return Configuration(
        name=name,
        output_dir=_string_field(entry, "output_dir", context) or "",
        dialect=_string_field(entry, "dialect", context) or "",
        pic=pic,
        pch=bool(entry.get("pch", True)),
        pch_header=_string_field(entry, "pch_header", context),
        toolset=_string_field(entry, "toolset", context),
        architecture=_string_field(entry, "architecture", context) or "",
        symbols=bool(symbols) if symbols is not None else None,
        link_time_optimization=bool(entry.get("link_time_optimization", False)),
        system=_string_field(entry, "system", context) or "",
        **lists,
    )


def _string_list(entry: dict[str, Any], key: str, context: str) -> list[str]:
    value = entry.get(key, [])
    if not isinstance(value, list):
        raise ModelError(f"'{key}' must be a list", context)
    return [str(item) for item in value]


def _string_field(entry: dict[str, Any], key: str, context: str) -> str | None:
    value = entry.get(key)
    if value is not None and not isinstance(value, str):
        raise ModelError(f"'{key}' must be a string, got {value!r}", context)
    return value
