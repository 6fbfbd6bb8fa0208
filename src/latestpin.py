"""latestpin - pin an npm:/jsr: package specifier to its latest version

    Returns:
        int: Exit code
"""
import logging
import sys

from constants import ExitCodes, Constants
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from args import build_parser
import cli_config
from versioning.errors import UsageError
from versioning.parser import parse_cli_token
from versioning.service import resolve_latest

logger = logging.getLogger(__name__)


def read_specifier(value):
    """Return the raw specifier token; '-' reads all of standard input."""
    if value == Constants.STDIN_TOKEN:
        try:
            return sys.stdin.read()
        except UnicodeDecodeError as exc:
            raise UsageError(f"standard input is not valid text: {exc}") from exc
    return value


def _usage_error(parser, message):
    sys.stderr.write(parser.format_usage())
    sys.stderr.write(f"Error: {message}\n")
    return ExitCodes.FAILURE.value


def run(argv=None):
    """Resolve one specifier and print it; returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        configure_logging(args.LOG_LEVEL, args.LOG_FILE)
    except OSError as exc:
        return _usage_error(parser, f"cannot open log file: {exc}")

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    try:
        cli_config.configure(args)
    except UsageError as exc:
        return _usage_error(parser, exc)

    if args.SPECIFIER is None:
        return _usage_error(parser, "no package specifier supplied")

    try:
        req = parse_cli_token(read_specifier(args.SPECIFIER), strict=Constants.STRICT_PREFIX)
    except UsageError as exc:
        return _usage_error(parser, exc)

    if not req.tagged:
        logger.info("No registry prefix on '%s'; assuming npm.", req.package_path)

    result = resolve_latest(req)
    if not result.ok:
        sys.stderr.write(
            f"Error: Failed to get {result.registry.tag} version for "
            f"{result.package_path}: {result.error}\n"
        )
        if is_debug_enabled(logger):
            logger.debug(
                "CLI finished",
                extra=extra_context(
                    event="function_exit",
                    component="cli",
                    action="main",
                    outcome=result.error_kind.value if result.error_kind else "error"
                )
            )
        return ExitCodes.FAILURE.value

    print(result.specifier)
    return ExitCodes.SUCCESS.value


def main():
    """Main function of the program."""
    sys.exit(run())


if __name__ == "__main__":
    main()
