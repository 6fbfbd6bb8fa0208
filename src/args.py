"""Argument parsing functionality for latestpin."""

import argparse
import sys

from constants import Constants, ExitCodes


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser whose usage errors exit with ExitCodes.FAILURE."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(ExitCodes.FAILURE.value, f"{self.prog}: error: {message}\n")


def build_parser():
    """Build the argument parser."""
    parser = _ArgumentParser(
        prog=Constants.PROG,
        description=(
            "Resolve an npm: or jsr: package specifier to its latest version"
        ),
        add_help=True,
    )

    parser.add_argument("SPECIFIER",
                        help="Package specifier, e.g. npm:lodash/fp or jsr:@scope/pkg/mod. "
                             "Use '-' to read it from standard input.",
                        nargs="?",
                        type=str)
    parser.add_argument("--strict",
                        dest="STRICT",
                        help="Reject specifiers without an npm: or jsr: prefix "
                             "instead of assuming npm.",
                        action="store_true")
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--npm-registry",
                        dest="NPM_REGISTRY",
                        help=f"npm registry base URL (default: {Constants.REGISTRY_URL_NPM})",
                        action="store",
                        type=str)
    parser.add_argument("--jsr-registry",
                        dest="JSR_REGISTRY",
                        help=f"JSR registry base URL (default: {Constants.REGISTRY_URL_JSR})",
                        action="store",
                        type=str)
    parser.add_argument("--timeout",
                        dest="TIMEOUT",
                        help=f"HTTP timeout in seconds (default: {Constants.REQUEST_TIMEOUT})",
                        action="store",
                        type=float)
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
    parser.add_argument("--version",
                        action="version",
                        version=f"%(prog)s {Constants.VERSION}")
    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
