"""Argument parsing functionality for disttags."""

import argparse
from constants import Constants

def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="disttags",
        description=(
            "disttags - Show which published versions a dependency request "
            "satisfies, the latest release and available pre-release channels"
        ),
        add_help=True,
    )

    parser.add_argument("-r", "--requested",
                        dest="REQUESTED",
                        help="Requested version expression, i.e: ^1.2.0, 1.x, 2.0.0-beta.1",
                        action="store", type=str,
                        required=True)

    input_group = parser.add_mutually_exclusive_group(required=True)
    input_group.add_argument("-l", "--load_list",
                        dest="LIST_FROM_FILE",
                        help="Load published versions (newest first) from a file: one per line or a JSON array",
                        action="store", type=str)
    input_group.add_argument("-v", "--version",
                        dest="VERSIONS",
                        help="A published version; repeat newest first",
                        action="append", type=str)

    parser.add_argument("-t", "--tag",
                        dest="TAG_FILTER",
                        help="Only show tags with this name (case-insensitive, can be used multiple times)",
                        action="append",
                        type=str,
                        default=[])
    parser.add_argument("--keep-synthetic",
                        dest="KEEP_SYNTHETIC",
                        help="Always keep the satisfies and latest tags when filtering.",
                        action="store_true",
                        default=None)
    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Path to JSON output file (default: stdout)",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=Constants.LOG_LEVELS,
                        default=Constants.DEFAULT_LOG_LEVEL)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)

    # Config file (general)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)

    return parser.parse_args(argv)
