"""Domain models for fleem.

Option enums and the provisioning value objects are **frozen**
dataclasses — immutable values with no behaviour beyond data access.
The single exception is :class:`ExecutionState`, which is owned by one
:class:`~fleem.core.executor.Executor` run and mutated only there.
"""

from __future__ import annotations

import enum
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from fleem.exceptions import FatalStepError


# ---------------------------------------------------------------------------
# Option enums
# ---------------------------------------------------------------------------

class TestingFramework(enum.Enum):
    """Testing framework installed as a dev dependency."""

    __test__ = False  # not a pytest test class

    NONE = "none"
    JEST = "jest"
    MOCHA = "mocha"
    CHAI = "chai"


class CssStrategy(enum.Enum):
    """How the generated project handles styling."""

    PLAIN = "plain"
    SCSS = "scss"
    LESS = "less"
    TAILWIND = "tailwind"


class StateManagement(enum.Enum):
    """State management library installed as a runtime dependency."""

    NONE = "none"
    REDUX = "redux"
    MOBX = "mobx"
    ZUSTAND = "zustand"


class PackageManager(enum.Enum):
    """Package manager binary used for every install step."""

    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"


class StepAction(enum.Enum):
    """Kind of external action a :class:`ProvisioningStep` performs."""

    SCAFFOLD_BASE = "scaffold_base"
    INSTALL_DEV_DEPENDENCY = "install_dev_dependency"
    INSTALL_RUNTIME_DEPENDENCY = "install_runtime_dependency"
    RUN_INITIALIZER = "run_initializer"
    WRITE_FILE = "write_file"
    INIT_VERSION_CONTROL = "init_version_control"
    LAUNCH_EDITOR = "launch_editor"


# ---------------------------------------------------------------------------
# Option sources
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ProjectOptions:
    """A complete set of option values (everything but the project name)."""

    use_typescript: bool = False
    testing_framework: TestingFramework = TestingFramework.NONE
    use_prettier: bool = False
    css_strategy: CssStrategy = CssStrategy.PLAIN
    use_routing: bool = False
    state_management: StateManagement = StateManagement.NONE
    init_git: bool = True
    package_manager: PackageManager = PackageManager.NPM


DEFAULT_OPTIONS = ProjectOptions()
"""Built-in defaults used for every field not set by a flag or answer."""


@dataclass(frozen=True, slots=True)
class OptionFlags:
    """Explicit command-line flags; ``None`` means the flag was not given."""

    use_typescript: bool | None = None
    testing_framework: TestingFramework | None = None
    use_prettier: bool | None = None
    css_strategy: CssStrategy | None = None
    use_routing: bool | None = None
    state_management: StateManagement | None = None
    init_git: bool | None = None
    package_manager: PackageManager | None = None


@dataclass(frozen=True, slots=True)
class BuildPlan:
    """Fully resolved provisioning choices for one run."""

    project_name: str
    use_typescript: bool
    testing_framework: TestingFramework
    use_prettier: bool
    css_strategy: CssStrategy
    use_routing: bool
    state_management: StateManagement
    init_git: bool
    package_manager: PackageManager


# ---------------------------------------------------------------------------
# Interactive question descriptors
# ---------------------------------------------------------------------------

class QuestionKind(enum.Enum):
    CONFIRM = "confirm"
    SELECT = "select"


@dataclass(frozen=True, slots=True)
class QuestionChoice:
    title: str
    value: Any


@dataclass(frozen=True, slots=True)
class Question:
    """Prompt-engine-neutral description of one interactive question."""

    name: str
    """Key under which the answer is returned (an option field name)."""

    kind: QuestionKind
    message: str
    default: Any
    choices: tuple[QuestionChoice, ...] = ()


# ---------------------------------------------------------------------------
# Provisioning steps
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Command:
    """A structured external command: binary plus argument list."""

    program: str
    args: tuple[str, ...] = ()

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def __str__(self) -> str:
        return shlex.join(self.argv)


@dataclass(frozen=True, slots=True)
class FileWrite:
    """A file to write, relative to the target directory."""

    path: str
    contents: str


StepPayload = Command | FileWrite


@dataclass(frozen=True, slots=True)
class ProvisioningStep:
    """One discrete external action with a fatality flag."""

    name: str
    """Human-readable label used in progress reporting."""

    action: StepAction
    payload: StepPayload

    fatal: bool = True
    """Whether failure aborts the whole run and triggers rollback."""


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Exit status and captured output of one external command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


# ---------------------------------------------------------------------------
# Execution
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class StepFailure:
    """Which step failed and why (used for fatal failures and soft warnings)."""

    step_name: str
    cause: str


@dataclass(slots=True)
class ExecutionState:
    """Mutable progress of one run, owned solely by the Executor."""

    target_directory: Path
    directory_created: bool = False
    completed_steps: list[str] = field(default_factory=list)
    warnings: list[StepFailure] = field(default_factory=list)
    failure: StepFailure | None = None
    rolled_back: bool = False


@dataclass(frozen=True, slots=True)
class RunResult:
    """Immutable outcome of :meth:`Executor.execute`.

    A run either succeeds (possibly with warnings) or fails and is
    rolled back — there is no partial-success status.
    """

    target_directory: Path
    completed_steps: tuple[str, ...]
    warnings: tuple[StepFailure, ...]
    failure: StepFailure | None
    rolled_back: bool

    @property
    def success(self) -> bool:
        return self.failure is None

    @classmethod
    def from_state(cls, state: ExecutionState) -> RunResult:
        return cls(
            target_directory=state.target_directory,
            completed_steps=tuple(state.completed_steps),
            warnings=tuple(state.warnings),
            failure=state.failure,
            rolled_back=state.rolled_back,
        )

    def raise_for_failure(self) -> None:
        """Raise :class:`~fleem.exceptions.FatalStepError` if the run failed."""
        if self.failure is None:
            return
        raise FatalStepError(
            f"Step '{self.failure.step_name}' failed: {self.failure.cause}",
            step_name=self.failure.step_name,
            hint="Fix the problem reported above and run fleem again.",
        )
