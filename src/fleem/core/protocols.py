"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters and the CLI
progress display must satisfy.  Core code depends ONLY on these
protocols — never on concrete implementations — preserving the
dependency inversion principle.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from fleem.core.models import Command, CommandResult, ProvisioningStep


class CommandRunner(Protocol):
    """Contract for blocking external command execution."""

    def run(self, command: Command, *, cwd: Path) -> CommandResult:
        """Run *command* with *cwd* as its working directory.

        Output is captured, never parsed; callers inspect only the
        exit status.  A missing binary must be reported as a non-zero
        :class:`CommandResult`, not raised.
        """
        ...  # pragma: no cover


class FileWriter(Protocol):
    """Contract for writing generated files."""

    def write(self, path: Path, contents: str) -> None:
        """Write *contents* to *path*, creating parent directories.

        Raises
        ------
        OSError
            When the file cannot be written.
        """
        ...  # pragma: no cover


class DirectoryLifecycle(Protocol):
    """Contract for creating and rolling back the target directory."""

    def create_target(self, path: Path) -> None:
        """Create *path*.

        Raises
        ------
        DirectoryExistsError
            When *path* already exists.
        """
        ...  # pragma: no cover

    def remove_target(self, path: Path) -> bool:
        """Best-effort removal of a directory this manager created.

        Never raises; returns whether the directory is gone afterwards.
        """
        ...  # pragma: no cover


class ProgressReporter(Protocol):
    """Receives real step-completion events from the Executor.

    Purely cosmetic — implementations must not raise.
    """

    def step_started(self, step: ProvisioningStep, index: int, total: int) -> None:
        ...  # pragma: no cover

    def step_succeeded(self, step: ProvisioningStep) -> None:
        ...  # pragma: no cover

    def step_warned(self, step: ProvisioningStep, cause: str) -> None:
        ...  # pragma: no cover

    def step_failed(self, step: ProvisioningStep, cause: str) -> None:
        ...  # pragma: no cover

    def rollback_started(self, path: Path) -> None:
        ...  # pragma: no cover

    def rollback_finished(self, path: Path, removed: bool) -> None:
        ...  # pragma: no cover


class NullProgressReporter:
    """:class:`ProgressReporter` that ignores every event."""

    def step_started(self, step: ProvisioningStep, index: int, total: int) -> None:
        pass

    def step_succeeded(self, step: ProvisioningStep) -> None:
        pass

    def step_warned(self, step: ProvisioningStep, cause: str) -> None:
        pass

    def step_failed(self, step: ProvisioningStep, cause: str) -> None:
        pass

    def rollback_started(self, path: Path) -> None:
        pass

    def rollback_finished(self, path: Path, removed: bool) -> None:
        pass
