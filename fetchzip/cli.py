"""
Command Line Interface for fetchzip.

Wraps the fetch, extract and find operations; all logging configuration and
exit-code mapping happens here, never in the core.
"""

import argparse
import sys
from typing import List, Optional

from ._version import __version__
from .cli_commands import COMMANDS
from .common.config import FetchzipSettings
from .common.constants import ExitCodes
from .common.logging_config import configure_logging, get_logger


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='fetchzip',
        description='Download zip archives, unpack them safely and search the result'
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')
    for command in COMMANDS:
        command.add_parser(subparsers)

    return parser


def main(args: Optional[List[str]] = None) -> None:
    """
    Main entry point for the CLI.

    Args:
        args: Command line arguments (uses sys.argv if None)
    """
    settings = FetchzipSettings.from_env()
    configure_logging(settings.log_level)
    logger = get_logger(__name__)
    parser = create_parser()

    if args is None:
        args = sys.argv[1:]

    if not args:
        parser.print_help()
        sys.exit(ExitCodes.OK)

    parsed_args = parser.parse_args(args)
    parsed_args.settings = settings
    logger.debug("Using settings: %s", settings)

    if hasattr(parsed_args, 'func'):
        parsed_args.func(parsed_args)
    else:
        parser.print_help()
        sys.exit(ExitCodes.OK)


if __name__ == '__main__':
    main()
