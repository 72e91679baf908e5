"""Logging for Tresor.

Every module logs through a child of the ``tresor`` logger. Records go to
stderr, so a value printed by ``tresor get`` can be piped without log noise,
and optionally to a file kept at DEBUG for troubleshooting.

Only bucket and key names appear in records. Values, ciphertexts and
passwords are never logged.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


ROOT_LOGGER = "tresor"

# Stderr console shared by log handlers
log_console = Console(stderr=True)

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "%(message)s"


def setup_logging(
    level: str = "WARNING",
    log_file: Optional[Path] = None,
    rich_output: bool = True,
) -> logging.Logger:
    """
    Attach handlers to the ``tresor`` logger, replacing any from a previous call.

    Args:
        level: Console threshold (DEBUG, INFO, WARNING, ERROR); unknown names fall back to WARNING
        log_file: File receiving every record at DEBUG
        rich_output: Render console records with Rich instead of plain text

    Returns:
        The ``tresor`` logger
    """
    console_level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger(ROOT_LOGGER)
    # The file handler needs DEBUG records even when the console does not
    logger.setLevel(logging.DEBUG if log_file else console_level)
    logger.handlers.clear()

    if rich_output:
        console_handler = RichHandler(
            console=log_console,
            show_time=True,
            show_path=False,
            rich_tracebacks=True,
        )
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(FILE_FORMAT))

    console_handler.setLevel(console_level)
    logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        file_handler.setLevel(logging.DEBUG)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, e.g. ``get_logger(__name__)`` in ``tresor.storage.sqlite``."""
    return logging.getLogger(name)
