"""Download command handling for the fetchzip CLI."""

from fetchzip.cli_helpers import fail
from fetchzip.common.errors import FetchzipError
from fetchzip.common.logging_config import get_logger
from fetchzip.core.fetcher import fetch
from fetchzip.core.http import UrllibHttpClient
from fetchzip.core.pipeline import fetch_and_extract

from ._settings import settings_from_args


class FetchCommand:
    """Downloads an archive into the staging area, optionally unpacking it."""

    @staticmethod
    def add_parser(subparsers) -> None:
        """Add fetch command parser to subparsers."""
        parser = subparsers.add_parser('fetch', help='Download a zip archive into the staging area')
        parser.add_argument('url', help='URL of the archive to download')
        parser.add_argument('--extract-to', dest='extract_to', metavar='DIR',
                            help='Unpack the downloaded archive into DIR')
        parser.add_argument('--keep-archive', action='store_true',
                            help='Keep the staged archive after --extract-to')
        parser.set_defaults(func=FetchCommand.execute)

    @staticmethod
    def execute(args) -> None:
        """Download the archive and print the staging file path."""
        settings = settings_from_args(args)
        log = get_logger(__name__)
        http = UrllibHttpClient(timeout=settings.http_timeout)
        try:
            if args.extract_to:
                log.info("Fetching %s into %s", args.url, args.extract_to)
                identifier = fetch_and_extract(
                    args.url,
                    args.extract_to,
                    keep_archive=args.keep_archive,
                    settings=settings,
                    http=http,
                )
                if args.keep_archive:
                    print(settings.staging_path(identifier))
                return
            log.info("Fetching %s", args.url)
            identifier = fetch(
                args.url,
                http=http,
                staging_dir=settings.staging_dir,
                chunk_size=settings.chunk_size,
            )
            print(settings.staging_path(identifier))
        except FetchzipError as exc:
            log.debug("fetch failed", exc_info=True)
            fail(exc)
