"""Argument parsing, command routing and the process exit boundary.

``fleem <name>`` scaffolds a project; ``upgrade`` and ``doctor`` are
reserved names handled before project-name validation.

Handlers import their collaborators lazily so ``--help``, ``--version``
and ``doctor`` never touch questionary or the provisioning stack.  A
rolled-back run surfaces as :class:`~fleem.exceptions.FatalStepError`
through :meth:`~fleem.core.models.RunResult.raise_for_failure`, after the
reporter has already printed the failing step and the cleanup notices.
Everything that escapes a handler is rendered by :func:`cli`.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from fleem.cli import exit_codes
from fleem.cli.console import console
from fleem.cli.logging_setup import configure_logging
from fleem.core.models import (
    CssStrategy,
    OptionFlags,
    PackageManager,
    StateManagement,
    TestingFramework,
)
from fleem.exceptions import FleemError
from fleem.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    The CLI supports:
    * ``fleem <project-name> [options]`` — scaffold a React project
    * ``fleem upgrade``  — upgrade fleem to the latest version
    * ``fleem doctor``   — environment diagnostics
    * ``fleem --version``
    """
    parser = argparse.ArgumentParser(
        prog="fleem",
        description="Fleem - The Ultimate React Project Generator.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "target",
        nargs="?",
        default=None,
        help="Name of the project directory to create, 'upgrade', or 'doctor'.",
    )
    parser.add_argument(
        "-d",
        "--default",
        action="store_true",
        help="Use default options for quick setup (skip prompts).",
    )

    overrides = parser.add_argument_group("overrides")
    overrides.add_argument(
        "--typescript", action="store_true", default=None,
        help="Use TypeScript (overrides default).",
    )
    overrides.add_argument(
        "--jest", action="store_true", default=None,
        help="Add Jest for testing (overrides default).",
    )
    overrides.add_argument(
        "--prettier", action="store_true", default=None,
        help="Add Prettier for code formatting (overrides default).",
    )
    overrides.add_argument(
        "--scss", action="store_true", default=None,
        help="Use SCSS for styling (overrides default).",
    )
    overrides.add_argument(
        "--routing", action="store_true", default=None,
        help="Add React Router for routing (overrides default).",
    )
    overrides.add_argument(
        "--state-management",
        metavar="TOOL",
        choices=[s.value for s in StateManagement if s is not StateManagement.NONE],
        default=None,
        help="State management tool: redux, mobx, or zustand (overrides default).",
    )
    overrides.add_argument(
        "--package-manager",
        metavar="MANAGER",
        choices=[pm.value for pm in PackageManager],
        default=None,
        help="Package manager: npm, yarn, or pnpm (overrides default).",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every command as it runs.",
    )
    return parser


def _flags_from_args(args: argparse.Namespace) -> OptionFlags:
    """Translate parsed arguments into explicit :class:`OptionFlags`."""
    return OptionFlags(
        use_typescript=args.typescript,
        testing_framework=TestingFramework.JEST if args.jest else None,
        use_prettier=args.prettier,
        css_strategy=CssStrategy.SCSS if args.scss else None,
        use_routing=args.routing,
        state_management=(
            StateManagement(args.state_management) if args.state_management else None
        ),
        package_manager=(
            PackageManager(args.package_manager) if args.package_manager else None
        ),
    )


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_create(args: argparse.Namespace) -> int:
    """Scaffold a new project.

    Flow:
    1. Validate the project name (before any prompt or I/O).
    2. Ask the option questions, unless ``--default`` was given.
    3. Resolve flags, answers and defaults into a build plan.
    4. Check every required external tool is on PATH.
    5. Plan the steps and execute them with live progress.
    """
    from fleem.cli.config import configured_editor
    from fleem.cli.progress import RichStepReporter
    from fleem.cli.prompts import ask_questions
    from fleem.core.executor import Executor
    from fleem.core.option_resolver import build_questions, resolve, validate_project_name
    from fleem.core.step_planner import plan_steps
    from fleem.infra.directory_manager import DirectoryLifecycleManager
    from fleem.infra.file_writer import LocalFileWriter
    from fleem.infra.subprocess_runner import SubprocessCommandRunner
    from fleem.infra.tool_detector import require_tools

    project_name = validate_project_name(args.target)
    flags = _flags_from_args(args)

    console.print(
        "\n[cyan]🛠️  Welcome to Fleem Project Generator! "
        "Let's set up your project.[/cyan]\n"
    )

    answers = None if args.default else ask_questions(build_questions(flags))
    plan = resolve(project_name, flags, answers, use_defaults=args.default)

    require_tools(plan)

    steps = plan_steps(plan, editor=configured_editor())
    target = Path.cwd() / plan.project_name

    with RichStepReporter() as reporter:
        executor = Executor(
            SubprocessCommandRunner(),
            LocalFileWriter(),
            DirectoryLifecycleManager(),
            reporter,
        )
        result = executor.execute(steps, target)

    result.raise_for_failure()

    if result.warnings:
        console.print(
            f"[yellow]Completed with {len(result.warnings)} warning(s); "
            "see the skipped steps above.[/yellow]"
        )

    console.print(f"\n[green]📁 Project created at:[/green] [cyan]{target}[/cyan]")
    console.print(
        f"[green]🎉 Fleem has successfully set up your project: "
        f"[cyan]{plan.project_name}[/cyan]. Happy coding![/green]\n"
    )
    return exit_codes.SUCCESS


def _handle_upgrade() -> int:
    """Dispatch the ``upgrade`` command."""
    from fleem.core.upgrade import run_upgrade
    from fleem.infra.subprocess_runner import SubprocessCommandRunner

    console.print("[bold]Upgrading fleem…[/bold]")
    run_upgrade(SubprocessCommandRunner(), Path.cwd())
    console.print(
        "[bold green]fleem has been successfully upgraded to the latest version.[/bold green]"
    )
    return exit_codes.SUCCESS


def _handle_doctor() -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from fleem.cli.doctor import run_doctor

    return run_doctor()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Parse *argv* (``sys.argv[1:]`` when ``None``) and dispatch.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.target is None:
        parser.print_help()
        return exit_codes.SUCCESS

    configure_logging(verbose=args.verbose)

    target: str = args.target
    command = target.lower()

    if command == "doctor":
        return _handle_doctor()

    if command == "upgrade":
        return _handle_upgrade()

    return _handle_create(args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Console-script entry point: run :func:`main` and map errors to exit codes."""
    try:
        code = main()
        sys.exit(code)
    except FleemError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
