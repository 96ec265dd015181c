"""Command-line entry point for linelog.

Implements a Docker-style two-pass argument parser:
  1. First pass: extract global flags (--level, --file, --no-color, --config)
  2. Second pass: dispatch to subcommand

Global flags can appear before OR after the subcommand:
  linelog --level DEBUG emit DEBUG hello     # works
  linelog emit DEBUG hello --level DEBUG     # also works

Subcommands self-register via register(subparsers, parents) convention.
"""

import argparse
import sys

from linelog._version import BASE_VERSION, VERSION


# ---------------------------------------------------------------------------
# Global flags (Docker-style: can precede the subcommand)
# ---------------------------------------------------------------------------
GLOBAL_FLAGS = {
    "--level": {"aliases": ["-l"], "metavar": "LEVEL", "default": None,
                "help": "Console threshold (default: INFO, or from config)"},
    "--file": {"aliases": ["-f"], "action": "append", "metavar": "PATH[:LEVEL]",
               "default": None,
               "help": "Also append to a log file (repeatable)"},
    "--no-console": {"action": "store_true", "default": False,
                     "help": "Do not log to the console"},
    "--no-color": {"action": "store_true", "default": False,
                   "help": "Disable colored console output"},
    "--config": {"metavar": "PATH", "default": None,
                 "help": "Path to config file (default: nearest .linelog.json)"},
}


def _add_global_flags(parser):
    for flag, kwargs in GLOBAL_FLAGS.items():
        kw = {k: v for k, v in kwargs.items() if k != "aliases"}
        parser.add_argument(flag, *kwargs.get("aliases", []), **kw)


def _extract_global_flags(argv):
    """Two-pass parse: pull global flags from anywhere in argv.

    Returns (global_namespace, remaining_argv).
    """
    global_parser = argparse.ArgumentParser(add_help=False)
    _add_global_flags(global_parser)
    global_args, remaining = global_parser.parse_known_args(argv)
    return global_args, remaining


# ---------------------------------------------------------------------------
# Subcommand discovery and registration
# ---------------------------------------------------------------------------
def _discover_commands():
    """Import and return all command modules.

    Each module in linelog.commands must export:
      register(subparsers, parents) — add itself to the subparser
      run(args) — execute the command
    """
    from linelog.commands import emit, list_levels
    return [emit, list_levels]


def _build_parser(commands):
    """Build the main argparse parser with subcommand dispatch."""
    parser = argparse.ArgumentParser(
        prog="linelog",
        description="linelog — multi-destination line logger",
        epilog=(
            "Run 'linelog <command> --help' for details on a specific command.\n"
            "\n"
            "Global flags (--level, --file, --no-color, --config) can appear\n"
            "before or after the subcommand."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"linelog {BASE_VERSION} ({VERSION})",
    )

    # Add global flags to main parser too (for --help display)
    _add_global_flags(parser)

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    for cmd_module in commands:
        cmd_module.register(subparsers, parents=[])

    return parser


def _configure_logging(global_args, manager):
    """Register destinations from config files, environment and flags."""
    from linelog.config import apply_config, resolve_config

    config = resolve_config(
        console=global_args.level,
        color=False if global_args.no_color else None,
        files=global_args.file,
        config_path=global_args.config,
    )
    if global_args.no_console:
        config.console = None
    apply_config(config, manager)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def main(argv=None):
    """Main entry point for linelog CLI.

    Args:
        argv: Command-line arguments. None means sys.argv[1:].

    Returns:
        Exit code (0 = success, 2 = bad level or usage).
    """
    if argv is None:
        argv = sys.argv[1:]

    # Pass 1: extract global flags from anywhere in the arg list
    global_args, remaining = _extract_global_flags(argv)

    # Pass 2: parse subcommand + specific args
    commands = _discover_commands()
    parser = _build_parser(commands)

    if not remaining:
        parser.print_help()
        return 0

    args = parser.parse_args(remaining)

    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    # Merge global args into the namespace for convenience
    for key, value in vars(global_args).items():
        if key not in vars(args) or getattr(args, key) is None:
            setattr(args, key, value)

    from linelog.manager import logging_session

    with logging_session() as manager:
        try:
            _configure_logging(global_args, manager)
        except ValueError as e:
            print(f"  ERROR: {e}", file=sys.stderr)
            return 2
        try:
            return args.func(args) or 0
        except KeyboardInterrupt:
            print("\nInterrupted.")
            return 130
        except SystemExit as e:
            return e.code if isinstance(e.code, int) else 1


if __name__ == "__main__":
    sys.exit(main())
