"""Registry for CLI subcommands."""

from .extract_command import ExtractCommand
from .fetch_command import FetchCommand
from .find_command import FindCommand

COMMANDS = (
    FetchCommand,
    ExtractCommand,
    FindCommand,
)

__all__ = ["COMMANDS", "FetchCommand", "ExtractCommand", "FindCommand"]
