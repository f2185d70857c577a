"""Extraction command handling for the fetchzip CLI."""

from fetchzip.cli_helpers import fail
from fetchzip.common.errors import FetchzipError
from fetchzip.common.logging_config import get_logger
from fetchzip.core.extractor import extract

from ._settings import settings_from_args


class ExtractCommand:
    """Unpacks a local zip archive."""

    @staticmethod
    def add_parser(subparsers) -> None:
        """Add extract command parser to subparsers."""
        parser = subparsers.add_parser('extract', help='Safely unpack a local zip archive')
        parser.add_argument('archive', help='Path to the zip archive')
        parser.add_argument('destination', help='Directory to unpack into')
        parser.set_defaults(func=ExtractCommand.execute)

    @staticmethod
    def execute(args) -> None:
        settings = settings_from_args(args)
        try:
            count = extract(args.archive, args.destination, chunk_size=settings.chunk_size)
        except FetchzipError as exc:
            get_logger(__name__).debug("extract failed", exc_info=True)
            fail(exc)
            return
        print(f"Extracted {count} entries into {args.destination}")
