"""Logging configuration for schema-codegen.

Modules obtain their logger through :func:`get_logger`; the CLI calls
:func:`setup_logging` once to attach a rich console handler.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "schema_codegen"


def get_logger(name: str) -> logging.Logger:
    """Return a logger living under the package logger hierarchy.

    Args:
        name: Module name, usually ``__name__``.

    Returns:
        The named logger.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Configure package logging with a rich handler.

    Args:
        verbose: Log at DEBUG level instead of INFO.
        console: Console to log to (defaults to stderr).
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=verbose,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
