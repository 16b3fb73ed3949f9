"""Console logging for the StoreTrack API, levelled by settings.LOG_LEVEL."""

import logging

from app.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Logger:

    @staticmethod
    def get_logger(name: str, level: str | int | None = None) -> logging.Logger:
        """Named logger with one console handler; repeat calls reuse it."""
        level = level or settings.LOG_LEVEL
        logger = logging.getLogger(name)
        logger.setLevel(level)

        if not logger.handlers:
            handler = logging.StreamHandler()
            handler.setLevel(level)
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(handler)

        return logger
