# SPDX-License-Identifier: MIT
"""Command-line interface for pcmake."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from pcmake.core.errors import PcmakeError
from pcmake.core.loader import load_workspace
from pcmake.generators.cmake import CMakeGenerator

# Set up logging
logger = logging.getLogger("pcmake")

# Environment variable consulted when --cc is not given
TOOLSET_ENV_VAR = "PCMAKE_CC"


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity level."""
    if debug:
        level = logging.DEBUG
        fmt = "%(levelname)s: %(name)s: %(message)s"
    elif verbose:
        level = logging.INFO
        fmt = "%(levelname)s: %(message)s"
    else:
        level = logging.WARNING
        fmt = "%(levelname)s: %(message)s"

    logging.basicConfig(level=level, format=fmt)


def get_toolset_override(cli_value: str | None) -> str | None:
    """Get the toolset override.

    Precedence (highest to lowest):
        1. Command line: pcmake generate --cc=gcc
        2. Environment variable: PCMAKE_CC=gcc pcmake generate

    Returns:
        The toolset identifier, or None to use each configuration's.
    """
    return cli_value or os.environ.get(TOOLSET_ENV_VAR) or None


def cmd_generate(args: argparse.Namespace) -> int:
    """Generate CMake files from a model file."""
    setup_logging(args.verbose, args.debug)

    model = Path(args.model)
    if not model.exists():
        logger.error("Model file not found: %s", model)
        return 1

    toolset = get_toolset_override(args.cc)
    if toolset:
        logger.info("Using toolset override %s", toolset)

    try:
        workspace = load_workspace(model)
        generator = CMakeGenerator(workspace=workspace.name, toolset=toolset)
        written = generator.generate(workspace.projects, Path(args.output_dir))
    except PcmakeError as e:
        logger.error("%s", e)
        return 1
    except OSError as e:
        logger.error("Failed to write output: %s", e)
        return 1

    for path in written:
        print(f"Generated {path}")
    return 0


def cmd_info(args: argparse.Namespace) -> int:
    """Show the projects and configurations in a model file."""
    setup_logging(args.verbose, args.debug)

    try:
        workspace = load_workspace(args.model)
    except PcmakeError as e:
        logger.error("%s", e)
        return 1

    print(f"Workspace: {workspace.name}")
    for project in workspace.projects:
        print(f"  {project.name} ({project.kind.value})")
        if project.dependencies:
            deps = ", ".join(dep.name for dep in project.dependencies)
            print(f"    depends on: {deps}")
        for cfg in project.configurations:
            toolset = cfg.toolset or "(default)"
            print(f"    {cfg.name}: toolset={toolset} dialect={cfg.dialect or '-'}")
    return 0


def cmd_toolsets(args: argparse.Namespace) -> int:
    """List registered toolsets."""
    setup_logging(args.verbose, args.debug)

    import pcmake.toolsets  # noqa: F401
    from pcmake.tools.toolset import DEFAULT_TOOLSET, toolset_registry

    for name in toolset_registry.names():
        aliases = ", ".join(toolset_registry.aliases_for(name))
        marker = " (default)" if name == DEFAULT_TOOLSET else ""
        print(f"{name}{marker}: {aliases}")
    return 0


def add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add common arguments to a parser."""
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--debug", action="store_true", help="Debug output")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the pcmake CLI."""
    parser = argparse.ArgumentParser(
        prog="pcmake",
        description="Generate CMake scripts from resolved project models.",
        epilog="Run 'pcmake <command> --help' for command-specific help.",
    )
    from pcmake import __version__

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # pcmake generate
    gen_parser = subparsers.add_parser(
        "generate", help="Generate CMake files from a model file"
    )
    add_common_args(gen_parser)
    gen_parser.add_argument("model", help="Path to the TOML model file")
    gen_parser.add_argument(
        "-B", "--output-dir", default="build", help="Output directory (default: build)"
    )
    gen_parser.add_argument(
        "--cc",
        metavar="TOOLSET",
        help=f"Toolset for every configuration (default: ${TOOLSET_ENV_VAR})",
    )
    gen_parser.set_defaults(func=cmd_generate)

    # pcmake info
    info_parser = subparsers.add_parser("info", help="Show projects in a model file")
    add_common_args(info_parser)
    info_parser.add_argument("model", help="Path to the TOML model file")
    info_parser.set_defaults(func=cmd_info)

    # pcmake toolsets
    toolsets_parser = subparsers.add_parser("toolsets", help="List known toolsets")
    add_common_args(toolsets_parser)
    toolsets_parser.set_defaults(func=cmd_toolsets)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    result: int = args.func(args)
    return result


if __name__ == "__main__":
    sys.exit(main())
