"""Logging setup shared by the generator, the CLI and the stream runtime."""

import logging

from rich.logging import RichHandler

PACKAGE_LOGGER = "event_codegen"

_configured = False


def setup_logging(level: str | int = "WARNING", rich_tracebacks: bool = True) -> None:
    """Attach a rich handler to the package logger.

    Calling it again only changes the level.

    Args:
        level: Logging level name or number.
        rich_tracebacks: Render exception tracebacks with rich.
    """
    global _configured

    logger = logging.getLogger(PACKAGE_LOGGER)
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)

    if _configured:
        return

    handler = RichHandler(
        rich_tracebacks=rich_tracebacks,
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the package logger."""
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
