"""Option resolution — flags, interactive answers and defaults to a BuildPlan.

Three sources feed every option field:

* explicit command-line flags (:class:`OptionFlags`),
* interactive answers (a mapping from option field name to value),
* built-in defaults (:data:`DEFAULT_OPTIONS`).

With the ``--default`` shortcut, answers are never consulted: each
field is its flag when one was given, else the default.  Without it,
every field needs an answer; the question's pre-filled default is the
flag (else the built-in default) so the answer is final.

Guarantees
----------
* Pure — no I/O, no prompting, no ``print()``.
* Every :class:`BuildPlan` field is concretely set on return.
"""

from __future__ import annotations

import enum
import os
from collections.abc import Mapping
from dataclasses import fields
from typing import Any

from fleem.core.models import (
    DEFAULT_OPTIONS,
    BuildPlan,
    CssStrategy,
    OptionFlags,
    PackageManager,
    ProjectOptions,
    Question,
    QuestionChoice,
    QuestionKind,
    StateManagement,
    TestingFramework,
)
from fleem.exceptions import InvalidProjectNameError, OptionResolutionError


_OPTION_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(ProjectOptions))

_ENUM_FIELDS: dict[str, type[enum.Enum]] = {
    "testing_framework": TestingFramework,
    "css_strategy": CssStrategy,
    "state_management": StateManagement,
    "package_manager": PackageManager,
}


# ---------------------------------------------------------------------------
# Project name
# ---------------------------------------------------------------------------

def validate_project_name(name: str) -> str:
    """Return the stripped *name* or raise :class:`InvalidProjectNameError`.

    The name must be a single, non-empty filesystem path segment.
    """
    stripped = name.strip()
    if not stripped:
        raise InvalidProjectNameError("Project name must not be empty.")
    if "\x00" in stripped:
        raise InvalidProjectNameError(
            "Project name must not contain NUL characters.",
            hint="Use a single directory name of printable characters.",
        )
    separators = {"/", "\\", os.sep}
    if os.altsep:
        separators.add(os.altsep)
    if any(sep in stripped for sep in separators):
        raise InvalidProjectNameError(
            f"Invalid project name: {stripped}",
            hint="Use a single directory name without path separators.",
        )
    if stripped in (".", ".."):
        raise InvalidProjectNameError(
            f"Invalid project name: {stripped}",
            hint="Choose a name for a new directory.",
        )
    return stripped


# ---------------------------------------------------------------------------
# Question descriptors
# ---------------------------------------------------------------------------

def _prefill(flags: OptionFlags, defaults: ProjectOptions, name: str) -> Any:
    flag = getattr(flags, name)
    return flag if flag is not None else getattr(defaults, name)


def build_questions(
    flags: OptionFlags,
    defaults: ProjectOptions = DEFAULT_OPTIONS,
) -> tuple[Question, ...]:
    """Return the ordered interactive questions for every option field.

    Each question's default is the flag value when present, else the
    built-in default.
    """

    def confirm(name: str, message: str) -> Question:
        return Question(
            name=name,
            kind=QuestionKind.CONFIRM,
            message=message,
            default=_prefill(flags, defaults, name),
        )

    def select(name: str, message: str, choices: tuple[QuestionChoice, ...]) -> Question:
        return Question(
            name=name,
            kind=QuestionKind.SELECT,
            message=message,
            default=_prefill(flags, defaults, name),
            choices=choices,
        )

    return (
        confirm("use_typescript", "Use TypeScript?"),
        select(
            "testing_framework",
            "Testing framework?",
            (
                QuestionChoice("Jest (Recommended)", TestingFramework.JEST),
                QuestionChoice("Mocha", TestingFramework.MOCHA),
                QuestionChoice("Chai", TestingFramework.CHAI),
                QuestionChoice("None", TestingFramework.NONE),
            ),
        ),
        confirm("use_prettier", "Add Prettier for code formatting?"),
        select(
            "css_strategy",
            "CSS solution?",
            (
                QuestionChoice("Plain CSS", CssStrategy.PLAIN),
                QuestionChoice("SCSS", CssStrategy.SCSS),
                QuestionChoice("LESS", CssStrategy.LESS),
                QuestionChoice("Tailwind CSS", CssStrategy.TAILWIND),
            ),
        ),
        confirm("use_routing", "Add routing?"),
        select(
            "state_management",
            "State management tool?",
            (
                QuestionChoice("None", StateManagement.NONE),
                QuestionChoice("Redux", StateManagement.REDUX),
                QuestionChoice("MobX", StateManagement.MOBX),
                QuestionChoice("Zustand", StateManagement.ZUSTAND),
            ),
        ),
        confirm("init_git", "Initialize Git repository?"),
        select(
            "package_manager",
            "Package manager?",
            tuple(QuestionChoice(pm.value, pm) for pm in PackageManager),
        ),
    )


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

def _coerce(name: str, value: Any) -> Any:
    """Normalise an answer or flag value to the field's concrete type."""
    enum_cls = _ENUM_FIELDS.get(name)
    if enum_cls is None:
        if isinstance(value, bool):
            return value
        raise OptionResolutionError(
            f"Expected yes/no for '{name}', got {value!r}.",
        )

    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        for member in enum_cls:
            if lowered in (member.value, member.name.lower()):
                return member
    valid = ", ".join(member.value for member in enum_cls)
    raise OptionResolutionError(
        f"Unrecognised value {value!r} for '{name}'.",
        hint=f"Valid values: {valid}",
    )


def resolve(
    project_name: str,
    flags: OptionFlags,
    answers: Mapping[str, Any] | None,
    defaults: ProjectOptions = DEFAULT_OPTIONS,
    *,
    use_defaults: bool = False,
) -> BuildPlan:
    """Merge flags, answers and defaults into one immutable :class:`BuildPlan`.

    Raises
    ------
    InvalidProjectNameError
        If *project_name* is empty or not a single path segment.
    OptionResolutionError
        If prompting was used and an answer is missing or invalid.
    """
    name = validate_project_name(project_name)
    answers = answers or {}

    resolved: dict[str, Any] = {}
    for field_name in _OPTION_FIELDS:
        if use_defaults:
            value = _prefill(flags, defaults, field_name)
        else:
            if field_name not in answers:
                raise OptionResolutionError(
                    f"No answer given for '{field_name}'.",
                    hint="Re-run and answer every question, or pass --default.",
                )
            value = answers[field_name]
        resolved[field_name] = _coerce(field_name, value)

    return BuildPlan(project_name=name, **resolved)
