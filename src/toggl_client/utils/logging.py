"""Logging configuration for the toggl-client command-line tool."""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "toggl_client"


def setup_logging(log_level: int = logging.INFO, log_file: Path | None = None) -> logging.Logger:
    """Attach handlers to the ``toggl_client`` logger.

    Handlers of the root logger and of other libraries are left alone;
    calling this again replaces the handlers installed by the previous call.

    Args:
        log_level: Logging level (e.g., logging.INFO, logging.DEBUG).
        log_file: File receiving the full log. No file is written if None.

    Returns:
        The package logger.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(log_level)

    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        package_logger.addHandler(file_handler)

    # stderr keeps the tables on stdout clean
    console_handler = RichHandler(console=Console(stderr=True), show_path=False)
    console_handler.setLevel(log_level)
    package_logger.addHandler(console_handler)

    return package_logger
