"""Custom exception hierarchy for fleem.

All exceptions that cross layer boundaries must inherit from
:class:`FleemError`.  Raw ``OSError`` / ``subprocess`` failures must
NEVER propagate beyond the infrastructure layer — they are either
reported as a failed step or re-raised as a typed subclass defined
here.

Hierarchy
---------
FleemError
├── InvalidProjectNameError
├── OptionResolutionError
├── PromptCancelledError
├── PreconditionError
│   ├── DirectoryExistsError
│   └── ToolNotFoundError
├── FatalStepError
├── UpgradeError
└── EnvironmentError
"""

from __future__ import annotations


class FleemError(Exception):
    """Base exception for all fleem errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Option resolution -----------------------------------------------------

class InvalidProjectNameError(FleemError):
    """Raised when the project name is empty or not a single path segment."""


class OptionResolutionError(FleemError):
    """Raised when an interactive answer is missing or unrecognised."""


class PromptCancelledError(FleemError):
    """Raised when the user cancels an interactive prompt (Esc / None)."""


# --- Preconditions (raised before any mutation) ----------------------------

class PreconditionError(FleemError):
    """Raised when a run cannot start; nothing has been touched yet."""


class DirectoryExistsError(PreconditionError):
    """Raised when the target project directory already exists."""


class ToolNotFoundError(PreconditionError):
    """Raised when a required external binary is not on PATH."""


# --- Provisioning ----------------------------------------------------------

class FatalStepError(FleemError):
    """Raised when a required provisioning step failed and the run was rolled back."""

    def __init__(
        self,
        message: str,
        *,
        step_name: str,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.step_name: str = step_name


class UpgradeError(FleemError):
    """Raised when the self-upgrade command exits non-zero."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(FleemError):
    """Raised when a required runtime dependency is not available."""
