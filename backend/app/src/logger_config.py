"""Console logging for the API and the watchlist client."""

import logging
import sys
from typing import IO, Optional

from uvicorn.logging import DefaultFormatter

from configs import settings

ROOT_LOGGER = "price_watch"
LOG_FORMAT = "%(levelprefix)s %(asctime)s %(name)s: %(message)s"
DATE_FORMAT = "%d.%m.%Y %H:%M:%S"


def get_logger(
    name: str = ROOT_LOGGER,
    level: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """Return a logger under the ``price_watch`` namespace.

    Names outside the namespace are nested under it, so ``"api"`` becomes
    ``price_watch.api``. The console handler is attached once per logger;
    later calls only update the level.
    """
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    level = (level or settings.LOG_LEVEL).upper()

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        target = stream or sys.stderr
        handler = logging.StreamHandler(target)
        handler.setFormatter(
            DefaultFormatter(
                LOG_FORMAT,
                datefmt=DATE_FORMAT,
                use_colors=target.isatty() if hasattr(target, "isatty") else False,
            )
        )
        logger.addHandler(handler)
        logger.propagate = False

    for handler in logger.handlers:
        handler.setLevel(level)
    return logger
