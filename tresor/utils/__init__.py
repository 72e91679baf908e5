"""Utility modules for Tresor."""

from .logging import (
    get_logger,
    log_console,
    setup_logging,
)


__all__ = [
    "setup_logging",
    "get_logger",
    "log_console",
]
