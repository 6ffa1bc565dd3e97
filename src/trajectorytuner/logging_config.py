"""
Logging Configuration
Sets up the package logger for the tuner and its command line front end.

The report and the vehicle command are printed to stdout so they can be piped
on; log records therefore go to stderr (and optionally a file).
"""
import logging
import sys
from typing import Optional, TextIO

PACKAGE_LOGGER = "trajectorytuner"

# Format: Time - Module - Level - Message
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def _reset_handlers(logger: logging.Logger) -> None:
    # Repeated CLI runs in one process would otherwise stack handlers and leak files
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Configures the logger for the 'trajectorytuner' namespace.

    Args:
        level: Logging level of the console (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file. The file always
            receives DEBUG records, whatever the console level.
        stream: Console stream; stderr when omitted.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    _reset_handlers(logger)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    # 1. Console Handler (stderr)
    console_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # 2. File Handler (Optional, full detail)
    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.setLevel(min(h.level for h in logger.handlers))
    logger.debug(f"Logging initialized (console level {logging.getLevelName(level)}).")
    return logger
