import logging

from .config import Settings

# Third-party loggers that follow the application level.
_ALIGNED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

# Chatty at DEBUG; kept at WARNING unless explicitly debugging SQL.
_QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite")


def setup_logging(settings: Settings) -> None:
    """Configure application-wide logging based on settings.

    The format includes timestamp, log level, logger name, and message.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    for logger_name in _ALIGNED_LOGGERS:
        logging.getLogger(logger_name).setLevel(level)
    for logger_name in _QUIET_LOGGERS:
        logging.getLogger(logger_name).setLevel(max(level, logging.WARNING))

    logging.getLogger(__name__).debug(
        "Logging configured: level=%s env=%s", logging.getLevelName(level), settings.env
    )
