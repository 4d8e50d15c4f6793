# SPDX-License-Identifier: MIT
"""Precompiled header location.

The header named in a configuration is usually given relative to
one of the include directories. Search the project directory first
(the most likely location), then each include directory in order.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pcmake.core.filesystem import FileSystem
    from pcmake.core.model import Configuration

logger = logging.getLogger(__name__)


def locate_pch(cfg: Configuration, fs: FileSystem) -> str | None:
    """Compute the header path to emit for target_precompile_headers.

    Args:
        cfg: Configuration with an owning project.
        fs: Filesystem to probe.

    Returns:
        The header path relative to the project base directory when the
        file was found, the absolute path of the header name otherwise,
        or None when precompiled headers are disabled or unset.
    """
    if not cfg.pch or not cfg.pch_header:
        return None

    project = cfg.project
    if project is None:
        raise ValueError(f"configuration '{cfg.name}' is not attached to a project")

    pch = cfg.pch_header
    base_dir = project.base_dir

    # Include directories relative to the base directory are anchored there
    search_dirs = [str(base_dir)]
    search_dirs.extend(fs.join(base_dir, incdir) for incdir in cfg.include_dirs)

    for directory in search_dirs:
        candidate = fs.join(directory, pch)
        try:
            found = fs.is_file(candidate)
        except OSError as e:
            logger.debug("Probe of %s failed: %s", candidate, e)
            found = False
        if found:
            result = fs.relative(candidate, base_dir)
            logger.debug("Found precompiled header %s as %s", pch, result)
            return result

    result = fs.absolute(pch)
    logger.debug(
        "Precompiled header %s not found in %s; using %s",
        pch,
        cfg.describe(),
        result,
    )
    return result
