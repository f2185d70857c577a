"""Search command handling for the fetchzip CLI."""

from fetchzip.cli_helpers import fail
from fetchzip.common.errors import FetchzipError
from fetchzip.core.finder import find_files


class FindCommand:
    """Prints every path whose base name matches a regular expression."""

    @staticmethod
    def add_parser(subparsers) -> None:
        parser = subparsers.add_parser('find', help='Recursively search for files by name pattern')
        parser.add_argument('root', help='Directory to search')
        parser.add_argument('pattern', help=r'Regular expression matched against base names, e.g. "(.*)\.txt"')
        parser.set_defaults(func=FindCommand.execute)

    @staticmethod
    def execute(args) -> None:
        try:
            files = find_files(args.root, args.pattern)
        except FetchzipError as exc:
            fail(exc)
            return
        for path in files:
            print(path)
