import logging

from newsletter.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Route all package loggers to a single stderr handler."""
    lvl = (level or settings.log_level or "WARNING").upper()

    logging.root.handlers.clear()
    logging.basicConfig(level=lvl, format=LOG_FORMAT)
    # httpx logs every request at INFO; keep it quiet unless debugging.
    logging.getLogger("httpx").setLevel(logging.DEBUG if lvl == "DEBUG" else logging.WARNING)
