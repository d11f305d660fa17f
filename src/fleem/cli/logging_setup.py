"""Logging configuration for the CLI.

Library modules log through ``logging.getLogger(__name__)`` under the
``fleem`` namespace and never configure handlers themselves; the CLI
entry point calls :func:`configure_logging` once per invocation.
"""

from __future__ import annotations

import logging
import sys

from fleem.cli.console import get_rich_console
from fleem.exceptions import EnvironmentError

LOGGER_NAME = "fleem"

_HANDLER_MARKER = "_fleem_handler"


def _build_handler() -> logging.Handler:
    """Return a Rich handler, or a plain stderr handler when Rich is absent."""
    try:
        from rich.logging import RichHandler

        rich_console = get_rich_console()
    except (ModuleNotFoundError, EnvironmentError):
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        return handler

    return RichHandler(
        console=rich_console,
        show_time=False,
        show_path=False,
        markup=False,
    )


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a single handler to the ``fleem`` logger.

    Safe to call multiple times; the handler is replaced, never
    duplicated.  Level is ``DEBUG`` with *verbose*, else ``WARNING``.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for existing in list(logger.handlers):
        if getattr(existing, _HANDLER_MARKER, False):
            logger.removeHandler(existing)

    handler = _build_handler()
    setattr(handler, _HANDLER_MARKER, True)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger
