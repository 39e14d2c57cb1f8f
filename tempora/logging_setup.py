"""Logging configuration for the tempora logger tree."""
import logging
import os

from .config import DEBUG_MODE, DEBUG_LOG_PATH

LOGGER_NAME = "tempora"


def setup_logging(debug: bool = DEBUG_MODE, debug_log_path: str = DEBUG_LOG_PATH) -> logging.Logger:
    """
    Attach console (and, in debug mode, file) handlers to the package logger.

    Safe to call more than once: handlers are only added the first time.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    if logger.handlers:
        return logger

    fmt = logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s")

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(fmt)
    logger.addHandler(console_handler)

    if debug:
        os.makedirs(os.path.dirname(debug_log_path), exist_ok=True)
        file_handler = logging.FileHandler(debug_log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(fmt)
        logger.addHandler(file_handler)
        logger.debug("=" * 60)
        logger.debug("Tempora started in DEBUG mode, logging to %s", debug_log_path)

    return logger
