"""
Constants and exit codes for fetchzip.
"""

DEFAULT_STAGING_DIR = '/tmp'
STAGING_SUFFIX = '.zip'

DEFAULT_HTTP_TIMEOUT = 30
DEFAULT_CHUNK_SIZE = 1024 * 1024

# Mode applied to entries recorded without Unix permission bits (umask still applies).
DEFAULT_FILE_MODE = 0o666


class ExitCodes:
    """Exit codes for different error conditions."""
    OK = 0
    TRANSPORT_FAILED = 1
    REMOTE_FETCH_FAILED = 2
    STORAGE_FAILED = 3
    ARCHIVE_OPEN_FAILED = 4
    PATH_TRAVERSAL = 5
    INVALID_PATTERN = 6
    WALK_FAILED = 7
    UNEXPECTED_ERROR = 10
