"""Logger setup shared by the API, the CLI and the stream processing core."""

import logging
import os
from typing import Optional


LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


def setup_logger(name: str = __name__,
                 log_file: Optional[str] = None,
                 level: Optional[int] = None) -> logging.Logger:
    """
    Get a module logger with console (and optional file) output attached.

    Level and file default to the LOG_LEVEL and LOG_FILE environment
    variables. Handlers are only attached once per logger name.
    """
    if level is None:
        level = logging.getLevelName(os.getenv('LOG_LEVEL', 'INFO').upper())
        if not isinstance(level, int):
            level = logging.INFO
    if log_file is None:
        log_file = os.getenv('LOG_FILE') or None

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        formatter = logging.Formatter(LOG_FORMAT)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
