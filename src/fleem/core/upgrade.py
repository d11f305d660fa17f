"""Self-upgrade — reinstall fleem at its latest published version.

Independent of the provisioning pipeline: a single pip invocation
through the same :class:`~fleem.core.protocols.CommandRunner`.
"""

from __future__ import annotations

import sys
from pathlib import Path

from fleem.core.models import Command
from fleem.core.protocols import CommandRunner
from fleem.exceptions import UpgradeError

PACKAGE_NAME: str = "fleem"


def upgrade_command(python: str | None = None) -> Command:
    """Return ``<python> -m pip install --upgrade fleem``."""
    interpreter = python or sys.executable
    return Command(interpreter, ("-m", "pip", "install", "--upgrade", PACKAGE_NAME))


def run_upgrade(runner: CommandRunner, cwd: Path, *, python: str | None = None) -> None:
    """Run the upgrade command.

    Raises
    ------
    UpgradeError
        If pip exits non-zero.
    """
    command = upgrade_command(python)
    result = runner.run(command, cwd=cwd)
    if result.ok:
        return

    detail = result.stderr.strip().splitlines()
    message = "Failed to upgrade fleem."
    if detail:
        message = f"{message} {detail[-1]}"
    raise UpgradeError(
        message,
        hint=f"Try upgrading manually:\n    {command}",
    )
