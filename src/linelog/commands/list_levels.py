"""linelog levels — list the severity levels."""

from linelog.levels import format_level_list


def register(subparsers, parents):
    """Register the 'levels' subcommand."""
    p = subparsers.add_parser(
        "levels",
        parents=parents,
        help="List severity levels, most urgent first",
    )
    p.set_defaults(func=run)


def run(args):
    """Execute the levels command."""
    print(format_level_list())
    return 0
