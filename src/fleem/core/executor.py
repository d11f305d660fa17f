"""Executor — run provisioning steps against the target directory.

The executor creates the target directory, runs every step strictly in
sequence with the directory as working directory, and on the first
fatal failure stops and rolls the whole directory back.  Non-fatal
failures are recorded as warnings and the run continues.

There is no step-level undo; the only recovery is whole-run rollback
through the :class:`~fleem.core.protocols.DirectoryLifecycle`.
Rollback is best-effort and never raises.

Guarantees
----------
* No ``print()`` — progress goes to the injected reporter.
* The process working directory is never changed.
* Step outputs are opaque; only exit status is inspected.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from fleem.core.models import (
    Command,
    ExecutionState,
    FileWrite,
    ProvisioningStep,
    RunResult,
    StepFailure,
)
from fleem.core.protocols import (
    CommandRunner,
    DirectoryLifecycle,
    FileWriter,
    NullProgressReporter,
    ProgressReporter,
)

logger = logging.getLogger(__name__)

_STDERR_TAIL_LINES = 5


def _describe_exit(command: Command, returncode: int, stderr: str) -> str:
    """Build a one-paragraph failure cause from a command's exit status."""
    cause = f"`{command}` exited with status {returncode}"
    tail = [line for line in stderr.strip().splitlines() if line.strip()]
    if tail:
        cause += ": " + " | ".join(tail[-_STDERR_TAIL_LINES:])
    return cause


class Executor:
    """Sequential step runner with whole-run rollback.

    Parameters
    ----------
    runner:
        Executes :class:`Command` payloads.
    writer:
        Writes :class:`FileWrite` payloads.
    directories:
        Owns creation and removal of the target directory.
    reporter:
        Receives progress events; defaults to a no-op reporter.
    """

    def __init__(
        self,
        runner: CommandRunner,
        writer: FileWriter,
        directories: DirectoryLifecycle,
        reporter: ProgressReporter | None = None,
    ) -> None:
        self._runner = runner
        self._writer = writer
        self._directories = directories
        self._reporter: ProgressReporter = reporter or NullProgressReporter()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def execute(
        self,
        steps: Sequence[ProvisioningStep],
        target_directory: Path,
    ) -> RunResult:
        """Create *target_directory* and run *steps* inside it.

        Returns
        -------
        RunResult
            ``success`` when every fatal step passed (warnings allowed);
            otherwise the failing step, with the directory rolled back.

        Raises
        ------
        DirectoryExistsError
            If *target_directory* already exists.  No step runs and the
            directory is left untouched.
        BaseException
            Anything a step raises besides :class:`OSError` (including
            ``KeyboardInterrupt``) is re-raised after rollback.
        """
        state = ExecutionState(target_directory=Path(target_directory))

        self._directories.create_target(state.target_directory)
        state.directory_created = True
        logger.debug("Created %s", state.target_directory)

        total = len(steps)
        for index, step in enumerate(steps, start=1):
            self._reporter.step_started(step, index, total)
            try:
                cause = self._run_step(step, state.target_directory)
            except BaseException as exc:
                cause = (
                    "interrupted by user" if isinstance(exc, KeyboardInterrupt)
                    else f"{type(exc).__name__}: {exc}"
                )
                state.failure = StepFailure(step.name, cause)
                self._reporter.step_failed(step, cause)
                self._rollback(state)
                raise

            if cause is None:
                state.completed_steps.append(step.name)
                self._reporter.step_succeeded(step)
                continue

            if not step.fatal:
                logger.warning("%s failed (continuing): %s", step.name, cause)
                state.warnings.append(StepFailure(step.name, cause))
                self._reporter.step_warned(step, cause)
                continue

            state.failure = StepFailure(step.name, cause)
            self._reporter.step_failed(step, cause)
            self._rollback(state)
            break

        return RunResult.from_state(state)

    # ------------------------------------------------------------------
    # Step dispatch
    # ------------------------------------------------------------------

    def _run_step(self, step: ProvisioningStep, cwd: Path) -> str | None:
        """Run one step; return ``None`` on success, else a failure cause."""
        payload = step.payload
        if isinstance(payload, FileWrite):
            logger.debug("Writing %s", payload.path)
            try:
                self._writer.write(cwd / payload.path, payload.contents)
            except OSError as exc:
                return f"could not write {payload.path}: {exc}"
            return None

        logger.debug("Running %s", payload)
        try:
            result = self._runner.run(payload, cwd=cwd)
        except OSError as exc:
            return f"`{payload}` could not be started: {exc}"
        if result.ok:
            return None
        return _describe_exit(payload, result.returncode, result.stderr)

    # ------------------------------------------------------------------
    # Rollback
    # ------------------------------------------------------------------

    def _rollback(self, state: ExecutionState) -> None:
        """Remove the target directory exactly once, if this run created it."""
        if not state.directory_created or state.rolled_back:
            return
        self._reporter.rollback_started(state.target_directory)
        removed = self._directories.remove_target(state.target_directory)
        state.rolled_back = True
        self._reporter.rollback_finished(state.target_directory, removed)
