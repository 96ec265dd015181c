"""linelog emit — write one log line to every configured destination.

Lets shell scripts share a log file (and its format) with Python
processes::

    linelog --file logs/deploy.log:DEBUG emit WARNING disk at 91%
    linelog emit INFO "step 1 done" --location deploy.sh:42 --func main
"""

import sys

from linelog.levels import parse_level
from linelog.line import Line, log


def register(subparsers, parents):
    """Register the 'emit' subcommand."""
    p = subparsers.add_parser(
        "emit",
        parents=parents,
        help="Log one line at the given level",
        description=(
            "Log MESSAGE at LEVEL to the console and every configured file.\n"
            "Message words are joined with single spaces; use \\n inside a\n"
            "quoted message for continuation lines."
        ),
        formatter_class=__import__("argparse").RawDescriptionHelpFormatter,
    )
    p.add_argument("level", metavar="LEVEL",
                   help="CRITICAL, ERROR, WARNING, INFO, DEBUG or TRACE")
    p.add_argument("message", nargs="+", metavar="MESSAGE",
                   help="Message text")
    p.add_argument("--location", metavar="FILE:LINE", default=None,
                   help="Source location to report (default: this command)")
    p.add_argument("--func", dest="func_name", metavar="NAME", default="main",
                   help="Function name to report with --location (default: main)")

    p.set_defaults(func=run)


def _parse_location(spec):
    """Split FILE:LINE; a missing or non-numeric line becomes 0."""
    file, sep, lineno = spec.rpartition(":")
    if sep and lineno.isdigit():
        return file, int(lineno)
    return spec, 0


def run(args):
    """Execute the emit command."""
    try:
        level = parse_level(args.level)
    except ValueError as e:
        print(f"  ERROR: {e}", file=sys.stderr)
        return 2

    text = " ".join(args.message).replace("\\n", "\n")
    if args.location:
        file, lineno = _parse_location(args.location)
        line = Line(level, file, lineno, args.func_name)
    else:
        line = log(level)
    with line:
        line << text
    return 0
