"""Infrastructure: blocking external command execution.

This module is the **only** place in the codebase that spawns
processes.  Commands run with an argument list (never ``shell=True``),
with output captured and returned opaque to the caller.  Output is
decoded as UTF-8; undecodable bytes are replaced, never raised.

No timeout is applied: package installs legitimately run for minutes.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from fleem.core.models import Command, CommandResult

COMMAND_NOT_FOUND: int = 127
"""Exit status reported when the binary is missing (POSIX shell convention)."""


class SubprocessCommandRunner:
    """Concrete :class:`~fleem.core.protocols.CommandRunner` backed by :mod:`subprocess`."""

    def run(self, command: Command, *, cwd: Path) -> CommandResult:
        """Run *command* in *cwd* and return its exit status and output."""
        try:
            completed = subprocess.run(
                command.argv,
                cwd=cwd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except FileNotFoundError:
            return CommandResult(
                returncode=COMMAND_NOT_FOUND,
                stderr=f"{command.program}: command not found",
            )
        return CommandResult(
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
