"""Settings lookup shared by the CLI commands."""

from fetchzip.common.config import FetchzipSettings


def settings_from_args(args) -> FetchzipSettings:
    settings = getattr(args, "settings", None)
    if not isinstance(settings, FetchzipSettings):
        settings = FetchzipSettings.from_env()
    return settings
