"""Interactive option prompts for the CLI layer.

This module is responsible for:

* Rendering core :class:`~fleem.core.models.Question` descriptors
  with questionary (confirm and arrow-key select).
* Returning a mapping from question name to chosen value.

All display-related logic lives here — no option merging, no
planning, no subprocess calls.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from fleem.core.models import Question, QuestionKind
from fleem.exceptions import EnvironmentError, PromptCancelledError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive prompting."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def _build_prompt(questionary: Any, question: Question) -> Any:
    """Translate one descriptor into an un-asked questionary prompt."""
    if question.kind is QuestionKind.CONFIRM:
        return questionary.confirm(question.message, default=bool(question.default))

    choices = [
        questionary.Choice(title=choice.title, value=choice.value)
        for choice in question.choices
    ]
    default = next(
        (choice for choice in choices if choice.value == question.default),
        None,
    )
    return questionary.select(
        question.message,
        choices=choices,
        default=default,
        use_arrow_keys=True,
        use_shortcuts=False,
    )


def ask_questions(questions: Sequence[Question]) -> dict[str, Any]:
    """Ask every question in order and collect the answers.

    Returns
    -------
    dict[str, Any]
        Question name → chosen value (``bool`` or an option enum).

    Raises
    ------
    PromptCancelledError
        If the user cancels any prompt (Ctrl+C / Esc, ``None`` return).
    EnvironmentError
        If questionary is not installed.
    """
    questionary = _import_questionary()

    answers: dict[str, Any] = {}
    for question in questions:
        value = _build_prompt(questionary, question).ask()  # None on Ctrl+C / Esc
        if value is None:
            raise PromptCancelledError(
                "Project setup cancelled.",
                hint="Re-run and answer every question, or pass --default.",
            )
        answers[question.name] = value
    return answers
