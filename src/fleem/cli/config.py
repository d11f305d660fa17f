"""Runtime configuration read from the environment.

Only the CLI layer reads the environment; resolved values are passed
into core functions as plain arguments.
"""

from __future__ import annotations

import logging
import os
import shlex

from fleem.core.step_planner import DEFAULT_EDITOR

logger = logging.getLogger(__name__)

EDITOR_ENV_VAR: str = "FLEEM_EDITOR"
"""Command used to open the finished project (default ``code``)."""


def configured_editor() -> str:
    """Editor command from ``$FLEEM_EDITOR``, defaulting to ``code``.

    A value that cannot be split into arguments is ignored with a
    warning.
    """
    editor = os.environ.get(EDITOR_ENV_VAR, "").strip()
    if not editor:
        return DEFAULT_EDITOR
    try:
        shlex.split(editor)
    except ValueError as exc:
        logger.warning(
            "Ignoring %s=%r (%s); using %s", EDITOR_ENV_VAR, editor, exc, DEFAULT_EDITOR,
        )
        return DEFAULT_EDITOR
    return editor
