"""Logging setup shared by every typegen module.

Library modules only call :func:`get_logger`; the CLI decides where the
records go by calling :func:`setup_logging` once at startup.
"""

import logging

from rich.logging import RichHandler

LOGGER_NAME = "typegen"
DEFAULT_FORMAT = "%(message)s"
PLAIN_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under the typegen package.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        A standard library logger.
    """
    if name != LOGGER_NAME and not name.startswith(f"{LOGGER_NAME}."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def setup_logging(level: int | str = logging.WARNING, use_rich: bool = True) -> None:
    """Configure the package logger.

    Calling this more than once only updates the level.

    Args:
        level: Logging level (name or number).
        use_rich: Render records with a rich handler instead of plain text.
    """
    global _configured

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if _configured:
        return

    if use_rich:
        handler: logging.Handler = RichHandler(
            rich_tracebacks=True, show_path=False, markup=False
        )
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt="[%X]"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))

    logger.addHandler(handler)
    logger.propagate = False
    _configured = True
