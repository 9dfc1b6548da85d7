# SPDX-License-Identifier: MIT
"""Command-line interface for rcons."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rcons.configure.config import load_action
from rcons.core.action import InvocationKind
from rcons.core.builder import build_command
from rcons.core.errors import RconsError

# Set up logging
logger = logging.getLogger("rcons")

SUBCOMMAND_KINDS: dict[str, InvocationKind] = {
    "compile": InvocationKind.COMPILE,
    "doc": InvocationKind.DOC,
    "doctest": InvocationKind.DOC_TEST,
}


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


def parse_variables(args: list[str]) -> tuple[dict[str, str], list[str]]:
    """Parse KEY=value arguments from a list.

    Args:
        args: List of arguments.

    Returns:
        Tuple of (variables dict, remaining args).
    """
    variables: dict[str, str] = {}
    remaining: list[str] = []

    for arg in args:
        if "=" in arg and not arg.startswith("-"):
            key, _, value = arg.partition("=")
            if key:  # Valid KEY=value
                variables[key] = value
            else:
                remaining.append(arg)
        else:
            remaining.append(arg)

    return variables, remaining


def write_output(text: str, output: Path | None, executable: bool = False) -> None:
    """Write a command to a file, or to stdout when output is None."""
    if output is None:
        sys.stdout.write(text if text.endswith("\n") else text + "\n")
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text)
    if executable:
        output.chmod(0o755)
    logger.info("Wrote %s", output)


def cmd_build(args: argparse.Namespace) -> int:
    """Build the command for an action file."""
    setup_logging(args.verbose, args.debug)

    if args.variables:
        from rcons import set_cli_vars

        set_cli_vars(args.variables)

    kind = SUBCOMMAND_KINDS[args.command]
    try:
        action = load_action(args.action, kind=kind)
        command = build_command(action)
    except (FileNotFoundError, RconsError) as e:
        logger.error("%s", e)
        return 1

    output = Path(args.output) if args.output else None
    write_output(command, output, executable=kind is InvocationKind.DOC_TEST)
    return 0


def add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add common arguments to a parser."""
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--debug", action="store_true", help="Debug output")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the rcons CLI."""
    parser = argparse.ArgumentParser(
        prog="rcons",
        description="Synthesize rustc and rustdoc commands for build actions.",
        epilog="Run 'rcons <command> --help' for command-specific help.",
    )
    from rcons import __version__

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    command_help = {
        "compile": "Print the rustc command for a crate",
        "doc": "Print the rustdoc command that archives a crate's docs",
        "doctest": "Print the script that runs a crate's doc tests",
    }
    for name, help_text in command_help.items():
        sub = subparsers.add_parser(name, help=help_text)
        add_common_args(sub)
        sub.add_argument("action", help="Action description file (JSON)")
        sub.add_argument("-o", "--output", help="Write to a file instead of stdout")
        sub.add_argument(
            "extra",
            nargs="*",
            help="Build variables (KEY=value)",
        )
        sub.set_defaults(func=cmd_build)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    variables, remaining = parse_variables(args.extra)
    if remaining:
        parser.error(f"unrecognized arguments: {' '.join(remaining)}")
    args.variables = variables

    # Run the specified command
    result: int = args.func(args)
    return result


if __name__ == "__main__":
    sys.exit(main())
