"""Application-wide logging helpers for walletbook.

Modules call ``get_logger(__name__)``. Output goes through a rich handler on
stderr, configured once so repeated CLI invocations in one process (tests) do
not stack handlers.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

_CONFIGURED = False


def configure_logging(level: int | str = logging.WARNING) -> None:
    """Configure the walletbook logger with a rich handler.

    Args:
        level: Logging level name or number. Later calls only adjust the level.
    """
    global _CONFIGURED

    logger = logging.getLogger("walletbook")
    logger.setLevel(level if isinstance(level, int) else level.upper())

    if _CONFIGURED:
        return

    handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)
    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a module-specific logger."""
    return logging.getLogger(name)
