# SPDX-License-Identifier: MIT
"""Link library and link option resolution.

CMake can't handle relative library paths, so any link entry that
looks like a path is made absolute against the project location.
Bare names are system or package libraries and pass through.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pcmake.core.filesystem import FileSystem
    from pcmake.core.model import Configuration
    from pcmake.tools.toolset import Toolset

logger = logging.getLogger(__name__)

PATH_SEPARATORS = ("/", "\\")


def is_path_reference(link: str) -> bool:
    """Return True if a link entry names a file rather than a library."""
    return any(sep in link for sep in PATH_SEPARATORS)


def resolve_links(cfg: Configuration, toolset: Toolset, fs: FileSystem) -> list[str]:
    """Get the link targets to emit for a configuration.

    Order is preserved and duplicates are kept.
    """
    project = cfg.project
    if project is None:
        raise ValueError(f"configuration '{cfg.name}' is not attached to a project")

    result: list[str] = []
    for link in toolset.get_links(cfg):
        if is_path_reference(link):
            resolved = fs.absolute(fs.join(project.location, link))
            logger.debug("Link %s -> %s", link, resolved)
            result.append(resolved)
        else:
            result.append(link)
    return result


def resolve_link_options(cfg: Configuration, toolset: Toolset) -> list[str]:
    """Explicit link options first, then the toolset's linker flags."""
    return [*cfg.link_options, *toolset.get_ldflags(cfg)]
