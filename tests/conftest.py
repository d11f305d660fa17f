"""Shared pytest fixtures and configuration for the fleem test suite.

Guidelines
----------
* No external binaries (npx, npm, git, editors) are ever executed.
* ``CommandRunner`` / ``FileWriter`` are replaced by in-memory fakes.
* Core tests must be pure — no side effects.
* Directory tests use ``tmp_path`` only.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from fleem.core.models import Command, CommandResult, ProvisioningStep


class FakeRunner:
    """Records every command; fails those listed in ``failures``."""

    def __init__(
        self,
        failures: dict[str, CommandResult] | None = None,
        on_run: Callable[[Command, Path], None] | None = None,
    ) -> None:
        self.failures: dict[str, CommandResult] = failures or {}
        self.calls: list[tuple[Command, Path]] = []
        self._on_run = on_run

    def run(self, command: Command, *, cwd: Path) -> CommandResult:
        self.calls.append((command, cwd))
        if self._on_run is not None:
            self._on_run(command, cwd)
        return self.failures.get(str(command), CommandResult(returncode=0))

    @property
    def commands(self) -> list[str]:
        return [str(command) for command, _ in self.calls]


class FakeWriter:
    """Records writes instead of touching the disk unless ``real`` is set."""

    def __init__(self, *, real: bool = False, error: OSError | None = None) -> None:
        self.writes: list[tuple[Path, str]] = []
        self._real = real
        self._error = error

    def write(self, path: Path, contents: str) -> None:
        if self._error is not None:
            raise self._error
        self.writes.append((path, contents))
        if self._real:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(contents, encoding="utf-8")


class RecordingReporter:
    """ProgressReporter that records events as ``(event, detail)`` tuples."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str]] = []

    def step_started(self, step: ProvisioningStep, index: int, total: int) -> None:
        self.events.append(("started", f"{step.name} {index}/{total}"))

    def step_succeeded(self, step: ProvisioningStep) -> None:
        self.events.append(("succeeded", step.name))

    def step_warned(self, step: ProvisioningStep, cause: str) -> None:
        self.events.append(("warned", step.name))

    def step_failed(self, step: ProvisioningStep, cause: str) -> None:
        self.events.append(("failed", step.name))

    def rollback_started(self, path: Path) -> None:
        self.events.append(("rollback_started", str(path)))

    def rollback_finished(self, path: Path, removed: bool) -> None:
        self.events.append(("rollback_finished", str(removed)))


@pytest.fixture()
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture()
def fake_writer() -> FakeWriter:
    return FakeWriter(real=True)


@pytest.fixture()
def reporter() -> RecordingReporter:
    return RecordingReporter()
