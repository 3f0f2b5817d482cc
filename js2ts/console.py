import logging
import sys
from pathlib import Path

# ANSI escape codes for colors
RED = '\033[0;31m'
GREEN = '\033[0;32m'
YELLOW = '\033[1;33m'
BLUE = '\033[0;34m'
RESET = '\033[0m'

LOGGER_NAME = 'js2ts'
LOG_FORMAT = '[%(asctime)s] %(message)s'
LOG_DATEFMT = '%Y-%m-%d %H:%M:%S'


def print_color(text, color, file=None):
    print(f"{color}{text}{RESET}", file=file or sys.stdout)


def configure_logging(log_path: Path, verbose: bool = False) -> logging.Logger:
    """
    Attach the append-only log file handler to the package logger.

    The log file is for human diagnosis only; console status lines are
    printed separately with print_color. With verbose=True the same records
    are also echoed to stderr.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    # Re-configuring (e.g. from tests) must not stack handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    file_handler = logging.FileHandler(log_path, mode='a', encoding='utf-8')
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
    logger.addHandler(file_handler)

    if verbose:
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        logger.addHandler(stream_handler)

    logger.propagate = False
    return logger


def close_logging():
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
