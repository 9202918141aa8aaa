import logging

from ..config import get_settings


LOG_FORMAT = '%(levelname)s:%(name)s: %(message)s'


def configure_logging(level: str | int | None = None, force: bool = False) -> None:
    """
    Configure root logging for an editor process.

    Library modules only call logging.getLogger(__name__); hosts call this
    once at startup. The level defaults to RICHVIEW_LOG_LEVEL.
    """
    if level is None:
        level = get_settings().log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, force=force)
