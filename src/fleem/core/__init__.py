"""Core / service layer — option resolution, step planning, execution.

Rules
-----
* No ``print()`` calls.
* No direct subprocess or filesystem calls; those arrive through
  the protocols in :mod:`fleem.core.protocols`.
* No imports from ``cli`` or ``infra``.
"""

from fleem.core.executor import Executor
from fleem.core.models import (
    DEFAULT_OPTIONS,
    BuildPlan,
    OptionFlags,
    ProvisioningStep,
    RunResult,
)
from fleem.core.option_resolver import build_questions, resolve
from fleem.core.step_planner import plan_steps

__all__: list[str] = [
    "DEFAULT_OPTIONS",
    "BuildPlan",
    "Executor",
    "OptionFlags",
    "ProvisioningStep",
    "RunResult",
    "build_questions",
    "plan_steps",
    "resolve",
]
