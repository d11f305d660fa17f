"""Infrastructure: external tool detection and platform guidance.

This module locates the binaries the provisioning pipeline shells out
to (node, npx, the package manager, git, the editor) and provides
platform-specific installation guidance when one is missing.

Rules
-----
* Detection via :func:`shutil.which` only — no subprocess.
* No permanent PATH modification.
* No automatic installation.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import platform
import shutil
from dataclasses import dataclass
from pathlib import Path

from fleem.core.models import BuildPlan
from fleem.exceptions import ToolNotFoundError


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ToolStatus:
    """Result of a single tool detection probe.

    Attributes
    ----------
    name : str
        Binary name that was probed (e.g. ``"npx"``).
    found : bool
        Whether the binary was located on PATH.
    path : Path | None
        Absolute path to the binary, or ``None``.
    install_commands : tuple[str, ...]
        Suggested shell commands for installing the tool on the current
        platform.  Empty when the tool is already present.
    """

    name: str
    found: bool
    path: Path | None
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_tool(name: str) -> ToolStatus:
    """Probe the system for *name*.

    Returns a :class:`ToolStatus` regardless of whether the tool is
    present — the caller decides whether to abort or merely warn.
    """
    result = shutil.which(name)

    if result is not None:
        return ToolStatus(
            name=name,
            found=True,
            path=Path(result).resolve(),
            install_commands=(),
        )

    return ToolStatus(
        name=name,
        found=False,
        path=None,
        install_commands=_platform_install_commands(name),
    )


def require_tool(name: str) -> Path:
    """Locate *name* or raise :class:`ToolNotFoundError`."""
    status = detect_tool(name)
    if not status.found or status.path is None:
        hint_lines: list[str] = []
        if status.install_commands:
            hint_lines.append(f"Install {name} using one of:")
            hint_lines.extend(f"  {cmd}" for cmd in status.install_commands)
        raise ToolNotFoundError(
            f"{name} is not installed or not on PATH.",
            hint="\n".join(hint_lines) if hint_lines else None,
        )
    return status.path


def required_tools(plan: BuildPlan) -> tuple[str, ...]:
    """Binaries whose absence would fail a fatal step of *plan*.

    The editor is never required — its launch is non-fatal.
    """
    tools = ["npx", plan.package_manager.value]
    if plan.init_git:
        tools.append("git")
    return tuple(dict.fromkeys(tools))


def require_tools(plan: BuildPlan) -> None:
    """Raise :class:`ToolNotFoundError` for the first missing required tool."""
    for name in required_tools(plan):
        require_tool(name)


# ---------------------------------------------------------------------------
# Platform-specific install guidance
# ---------------------------------------------------------------------------

_NODE_TOOLS = frozenset({"node", "npm", "npx"})


def _platform_install_commands(name: str) -> tuple[str, ...]:
    """Return install commands for *name* appropriate for the current OS."""
    if name in ("yarn", "pnpm"):
        return (f"npm install -g {name}", "corepack enable")
    if name == "code":
        return ("Install Visual Studio Code from https://code.visualstudio.com/",)

    package = "nodejs" if name in _NODE_TOOLS else name
    system = platform.system().lower()
    if system == "windows":
        winget_id = "OpenJS.NodeJS.LTS" if name in _NODE_TOOLS else "Git.Git"
        return (
            f"winget install {winget_id}",
            f"choco install {package}",
        )
    if system == "linux":
        return (
            f"sudo apt install {package}",
            f"sudo dnf install {package}",
            f"sudo pacman -S {package}",
        )
    if system == "darwin":
        return (f"brew install {'node' if name in _NODE_TOOLS else name}",)
    # Unknown platform.
    if name in _NODE_TOOLS:
        return ("Please install Node.js from https://nodejs.org/",)
    return (f"Please install {name} from https://git-scm.com/downloads",)
