"""
Centralized logging configuration for the ScummVM batch file creator.
"""

import logging
import sys


def setup_logging(level: int = logging.INFO) -> None:
    """
    Set up console logging for the application.

    Args:
        level: Logging level
    """
    # Avoid duplicate handlers if already configured
    if logging.getLogger().handlers:
        return

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    # Reduce noise from external libraries
    logging.getLogger('requests').setLevel(logging.WARNING)
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('werkzeug').setLevel(logging.WARNING)
