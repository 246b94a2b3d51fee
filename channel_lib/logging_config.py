from __future__ import annotations
import logging

LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s]: %(message)s'

# Third-party loggers that are chatty at INFO
QUIET_LOGGERS = ('multipart', 'python_multipart', 'uvicorn.access', 'httpx')


def configure_logging(level: str = 'WARNING') -> logging.Logger:
    """Configure root logging for the server at `level` (a level name).

    Unknown names fall back to WARNING. Returns a module logger for the caller.
    """
    numeric = logging.getLevelName(str(level).upper())
    if not isinstance(numeric, int):
        numeric = logging.WARNING
    logging.basicConfig(level=numeric, format=LOG_FORMAT, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info("Log level set to %s", logging.getLevelName(numeric))
    return logger
