"""Argument parsing functionality for gomodrules."""

import argparse
from constants import Constants

def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="gomodrules",
        description=(
            "gomodrules - Import Go module dependencies as repository rules"
        ),
        add_help=True,
    )

    parser.add_argument("-m", "--from-file",
                        dest="MANIFEST",
                        help="Path to the go.mod file (default: ./go.mod)",
                        action="store", type=str,
                        default=Constants.GO_MOD_FILE)
    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Path to output file (JSON or CSV). Rules are printed to stdout if omitted.",
                        action="store",
                        type=str)
    parser.add_argument("-f", "--format",
                        dest="OUTPUT_FORMAT",
                        help="Output format (json or csv). If not specified, inferred from --output extension; defaults to json.",
                        action="store",
                        type=str.lower,
                        choices=Constants.SUPPORTED_FORMATS)
    parser.add_argument("--goroot",
                        dest="GOROOT",
                        help="Go SDK root used to locate the go tool (overrides GOROOT)",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=Constants.LOG_LEVELS)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Do not print rules to the console.",
                        action="store_true")
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)

    return parser.parse_args(argv)
