"""
logging_config.py — Centralized Logging Configuration for License Checkout

Configures unified logging for every module of the package:
    • Combined console and file logging output
    • Process ID tagging for multi-process visibility
    • Reduced verbosity for the HTTP client libraries (httpx, httpcore)
"""

import logging
import sys

from .config import LOG_FILE, LOG_LEVEL


def setup_logging(log_file: str = LOG_FILE, level: str = LOG_LEVEL):
    """
    Configures the global logging system.

    Args:
        log_file (str): Path of the persistent log file.
        level (str): Root log level name, e.g. 'INFO'.
    """
    log_format = '%(asctime)s - %(levelname)s - [PID:%(process)d] - %(name)s - %(message)s'

    logging.basicConfig(
        level=level,
        format=log_format,
        handlers=[
            logging.FileHandler(log_file),
            # stdout, Docker-compatible
            logging.StreamHandler(sys.stdout)
        ]
    )

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name):
    """
    Returns a logger for a module or component name, typically `__name__`.
    """
    return logging.getLogger(name)
