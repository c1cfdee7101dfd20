"""Command-line interface for bargo.

WHY: Users drive everything from the terminal inside a project folder:
scaffold it, declare dependencies, build, clean, and try the result in
the emulator.

HOW: argparse with one subcommand per action. Each subcommand handler
calls into builder/project/emulator and reports progress on stderr.
BargoError is caught at the top and printed as "Error: <message>".

RULES:
- Status output goes to stderr (not stdout)
- Any BargoError → message on stderr, exit status 1
- No subcommand → usage on stdout, exit status 0
- --verbose turns on DEBUG logging; otherwise only warnings are shown
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from bargo import __version__
from bargo.builder import build_project, clean_project
from bargo.emulator import run_emulator
from bargo.errors import BargoError
from bargo.project import add_dependency, create_project, remove_dependency


def _status(msg: str) -> None:
    """Print a status message to stderr."""
    print("\t{}".format(msg), file=sys.stderr, flush=True)


def _cmd_add(args: argparse.Namespace) -> None:
    _status("Adding {} dependency".format(args.dependency))
    add_dependency(args.dependency, url=args.url)
    _status("Finished")


def _cmd_remove(args: argparse.Namespace) -> None:
    _status("Removing {} dependency".format(args.dependency))
    remove_dependency(args.dependency)
    _status("Finished")


def _cmd_build(args: argparse.Namespace) -> None:
    build_project(on_status=_status)


def _cmd_clean(args: argparse.Namespace) -> None:
    clean_project(on_status=_status)


def _cmd_emu(args: argparse.Namespace) -> None:
    run_emulator()


def _cmd_new(args: argparse.Namespace) -> None:
    create_project(args.name, on_status=_status)


def _cmd_init(args: argparse.Namespace) -> None:
    create_project(None, on_status=_status)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    Separate from main() so tests can inspect the parser without running
    any command.
    """
    parser = argparse.ArgumentParser(
        prog="bargo",
        description="BASIC build system and package manager",
    )
    parser.add_argument("--version", action="version", version="%(prog)s " + __version__)
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging.",
    )

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    add = sub.add_parser("add", help="Add dependencies to this package")
    add.add_argument("dependency", help="Dependency name (file stem under src/).")
    add.add_argument("--url", default=None, help="Download the dependency from this URL on build.")
    add.set_defaults(handler=_cmd_add)

    build = sub.add_parser("build", help="Build the current package")
    build.set_defaults(handler=_cmd_build)

    clean = sub.add_parser("clean", help="Remove the generated file")
    clean.set_defaults(handler=_cmd_clean)

    emu = sub.add_parser("emu", aliases=["emulator"], help="Run the code inside an emulator")
    emu.set_defaults(handler=_cmd_emu)

    init = sub.add_parser("init", help="Create a new Bargo package in an existing directory")
    init.set_defaults(handler=_cmd_init)

    new = sub.add_parser("new", help="Create a new Bargo package")
    new.add_argument("name", help="Package and directory name.")
    new.set_defaults(handler=_cmd_new)

    remove = sub.add_parser("remove", help="Remove dependencies from this package")
    remove.add_argument("dependency", help="Dependency name to remove.")
    remove.set_defaults(handler=_cmd_remove)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the CLI.

    argv=None means use sys.argv; an explicit list is for testing.
    Returns the process exit status.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 0

    try:
        handler(args)
    except BargoError as e:
        print("Error: {}".format(e), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
