"""
Logging utilities

This module configures the logging system shared by the bundle search.
"""

import logging
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(name: str, log_file: Optional[str] = None,
                 level: Union[int, str] = logging.INFO) -> logging.Logger:
    """
    Set up a logger with console and optional file output

    Args:
        name: Logger name
        log_file: Optional log file path
        level: Logging level, as a number or a name such as 'DEBUG'

    Returns:
        Configured logger instance
    """
    if isinstance(level, str):
        name_level = logging.getLevelName(level.upper())
        if not isinstance(name_level, int):
            raise ValueError(f"Unknown logging level: {level}")
        level = name_level

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Clear existing handlers to avoid duplicate messages
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
