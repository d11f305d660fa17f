"""Rich-based progress display driven by Executor step events.

This module implements :class:`~fleem.core.protocols.ProgressReporter`
with a Rich :class:`~rich.progress.Progress` bar.  Progress advances
only when a real step finishes; there is no simulated percentage.

Design
------
* The :class:`RichStepReporter` manages a Rich Progress context.
* Warnings, the failing step and rollback notices are printed above
  the live bar through the progress console.
* Shutdown-safe: if the progress bar is already stopped, calls are
  silently ignored.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from fleem.cli.console import get_rich_console
from fleem.core.models import ProvisioningStep
from fleem.exceptions import EnvironmentError


class RichStepReporter:
    """Step-event reporter rendering a spinner, bar and step counter.

    Usage::

        with RichStepReporter() as reporter:
            Executor(runner, writer, directories, reporter).execute(steps, target)
    """

    def __init__(self) -> None:
        try:
            from rich.progress import (
                BarColumn,
                MofNCompleteColumn,
                Progress,
                SpinnerColumn,
                TextColumn,
                TimeElapsedColumn,
            )
        except ModuleNotFoundError as exc:
            raise EnvironmentError(
                "rich is not installed. Install with: pip install rich",
            ) from exc

        self._progress: Any = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=get_rich_console(),
            transient=False,
        )
        self._task_id: Any = None
        self._started: bool = False

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> RichStepReporter:
        self.start()
        return self

    def __exit__(self, *_args: object) -> None:
        self.stop()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the Rich progress display."""
        if not self._started:
            self._progress.start()
            self._started = True

    def stop(self) -> None:
        """Stop the Rich progress display (idempotent)."""
        if self._started:
            self._progress.stop()
            self._started = False

    # ------------------------------------------------------------------
    # ProgressReporter events
    # ------------------------------------------------------------------

    def step_started(self, step: ProvisioningStep, index: int, total: int) -> None:
        if not self._started:
            return
        if self._task_id is None:
            self._task_id = self._progress.add_task(step.name, total=total)
        self._progress.update(self._task_id, description=f"{step.name}...")

    def step_succeeded(self, step: ProvisioningStep) -> None:
        if not self._started or self._task_id is None:
            return
        self._progress.advance(self._task_id)
        self._print(f"[green]✔[/green] {step.name}")

    def step_warned(self, step: ProvisioningStep, cause: str) -> None:
        if not self._started or self._task_id is None:
            return
        self._progress.advance(self._task_id)
        self._print(f"[yellow]⚠ {step.name} skipped:[/yellow] {cause}")

    def step_failed(self, step: ProvisioningStep, cause: str) -> None:
        if not self._started:
            return
        if self._task_id is not None:
            self._progress.update(self._task_id, description=f"[red]{step.name} failed")
        self._print("[bold red]An error occurred:[/bold red]")
        self._print(f"[red]{step.name}: {cause}[/red]")

    def rollback_started(self, path: Path) -> None:
        if self._started:
            self._print("[yellow]Cleaning up...[/yellow]")

    def rollback_finished(self, path: Path, removed: bool) -> None:
        if not self._started:
            return
        if removed:
            self._print("[yellow]Cleanup complete. Please try again.[/yellow]")
        else:
            self._print(f"[yellow]Cleanup incomplete; remove {path} manually.[/yellow]")

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _print(self, message: str) -> None:
        self._progress.console.print(message)
