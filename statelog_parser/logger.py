"""
Logging configuration for the State Log Parser.
"""

import logging
import sys
from typing import Optional, TextIO, Union

LOGGER_NAME = "statelog_parser"


def setup_logger(
    name: str = LOGGER_NAME,
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Set up and return a logger instance.

    Calling this again on an already configured logger only updates its level.

    Args:
        name: Logger name
        level: Logging level, as a number or a name such as "DEBUG"
        log_file: Optional file path for logging
        stream: Console stream (default: stdout)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger.setLevel(level)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    # Format: timestamp - module - level - message
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Console handler
    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler (if specified)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_module_logger(module_name: str) -> logging.Logger:
    """
    Get a child logger for a specific module.

    Child loggers (e.g. "statelog_parser.recovery") propagate to the package
    logger, so the stage that produced a message shows up in its name.

    Args:
        module_name: Name of the module (e.g., 'recovery', 'classifier')

    Returns:
        Child logger instance
    """
    return logging.getLogger(f"{LOGGER_NAME}.{module_name}")
