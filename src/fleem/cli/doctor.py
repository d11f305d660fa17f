"""``fleem doctor`` — report whether the Node toolchain fleem drives is usable.

Each probe produces a :class:`Check` row.  Rows are rendered as a Rich
table when Rich is importable, otherwise as fixed-width plain text on
stderr.  Missing tools are followed by their install guidance.

node, npx and npm are hard requirements (every project starts with
``npx create-react-app``).  Alternative package managers, git and the
editor only warn: a project can be created without them.
"""

from __future__ import annotations

import platform
import sys
from typing import NamedTuple

from fleem.cli import exit_codes
from fleem.cli.config import configured_editor
from fleem.cli.console import console
from fleem.core.step_planner import editor_command
from fleem.infra.tool_detector import ToolStatus, detect_tool
from fleem.version import __version__

OK, WARN, FAIL = "OK", "WARN", "FAIL"

_STATUS_STYLE: dict[str, str] = {OK: "green", WARN: "yellow", FAIL: "red"}

_REQUIRED_TOOLS: tuple[str, ...] = ("node", "npx", "npm")
_OPTIONAL_TOOLS: tuple[str, ...] = ("yarn", "pnpm", "git")

_MIN_PYTHON: tuple[int, int] = (3, 10)

_SYSTEM_NAMES: dict[str, str] = {"Darwin": "macOS"}


class Check(NamedTuple):
    """One row of the doctor report."""

    label: str
    value: str
    status: str


# ---------------------------------------------------------------------------
# Probes
# ---------------------------------------------------------------------------

def _fleem_version_check() -> Check:
    return Check("fleem", __version__, OK)


def _python_version_check() -> Check:
    supported = sys.version_info[:2] >= _MIN_PYTHON
    return Check("Python", platform.python_version(), OK if supported else FAIL)


def _tool_check(status: ToolStatus, *, required: bool) -> Check:
    if status.found:
        return Check(status.name, str(status.path) if status.path else "found", OK)
    return Check(status.name, "not found", FAIL if required else WARN)


def _os_check() -> Check:
    system = platform.system()
    name = _SYSTEM_NAMES.get(system, system)
    return Check("OS", f"{name} {platform.release()} ({platform.machine()})", OK)


def _probe_tools() -> list[tuple[ToolStatus, bool]]:
    """Detect every tool, paired with whether it is required."""
    editor = editor_command(configured_editor()).program
    probes = [(name, True) for name in _REQUIRED_TOOLS]
    probes += [(name, False) for name in (*_OPTIONAL_TOOLS, editor)]
    return [(detect_tool(name), required) for name, required in probes]


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _render_rich(checks: list[Check]) -> bool:
    """Print *checks* as a Rich table; ``False`` when Rich is unavailable."""
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        return False

    table = Table(title="fleem doctor", header_style="bold cyan", border_style="dim")
    table.add_column("Component", style="bold")
    table.add_column("Value")
    table.add_column("Status", justify="center")
    for check in checks:
        style = _STATUS_STYLE[check.status]
        table.add_row(check.label, check.value, f"[{style}]{check.status}[/{style}]")

    console.print()
    console.print(table)
    console.print()
    return True


def _render_plain(checks: list[Check]) -> None:
    rule = "-" * 60
    lines = ["", "fleem doctor", rule]
    lines += [f"{c.label:<10} {c.value:<40} {c.status}" for c in checks]
    lines.append(rule)
    print("\n".join(lines), file=sys.stderr)


def _print_guidance(missing: list[ToolStatus]) -> None:
    for status in missing:
        if not status.install_commands:
            continue
        console.print(f"[yellow]{status.name} was not found.[/yellow] Try one of:")
        for command in status.install_commands:
            console.print(f"    [bold]{command}[/bold]")


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor() -> int:
    """Run every probe, print the report and return the exit code.

    Returns
    -------
    int
        :data:`exit_codes.GENERAL_ERROR` if any row is ``FAIL``,
        otherwise :data:`exit_codes.SUCCESS` (warnings allowed).
    """
    tools = _probe_tools()
    checks = [
        _fleem_version_check(),
        _python_version_check(),
        *(_tool_check(status, required=required) for status, required in tools),
        _os_check(),
    ]

    if not _render_rich(checks):
        _render_plain(checks)

    _print_guidance([status for status, _ in tools if not status.found])

    if any(check.status == FAIL for check in checks):
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
