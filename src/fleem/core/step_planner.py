"""Step planning — expand a :class:`BuildPlan` into ordered provisioning steps.

Fixed order, each step conditional on its plan field:

1. scaffold the base app (always)
2. testing framework (dev)
3. Prettier (dev)
4. CSS strategy (Tailwind: install, init, two file writes;
   SCSS/LESS: one dev install; plain: nothing)
5. routing (runtime)
6. state management (runtime)
7. git init, stage all, commit (commit is non-fatal)
8. editor launch (non-fatal)

Installs follow scaffolding so a ``package.json`` exists, and precede
version control so the initial commit captures the full tree.

Guarantees
----------
* Pure and deterministic — identical plans give identical step tuples.
* Total — every :class:`BuildPlan` has a plan.
"""

from __future__ import annotations

import shlex
from collections.abc import Sequence

from fleem.core.models import (
    BuildPlan,
    Command,
    CssStrategy,
    FileWrite,
    PackageManager,
    ProvisioningStep,
    StateManagement,
    StepAction,
    TestingFramework,
)


DEFAULT_EDITOR: str = "code"

TAILWIND_PACKAGES: tuple[str, ...] = (
    "tailwindcss@latest",
    "postcss@latest",
    "autoprefixer@latest",
)

TAILWIND_CONFIG_PATH: str = "tailwind.config.js"
TAILWIND_CONFIG: str = (
    "module.exports = {\n"
    '  content: ["./src/**/*.{js,jsx,ts,tsx}"],\n'
    "  theme: {\n"
    "    extend: {},\n"
    "  },\n"
    "  plugins: [],\n"
    "}\n"
)

TAILWIND_CSS_ENTRY_PATH: str = "src/index.css"
TAILWIND_CSS_ENTRY: str = (
    "@tailwind base;\n"
    "@tailwind components;\n"
    "@tailwind utilities;\n"
)

_TESTING_PACKAGES: dict[TestingFramework, str] = {
    TestingFramework.JEST: "jest",
    TestingFramework.MOCHA: "mocha",
    TestingFramework.CHAI: "chai",
}

_PREPROCESSOR_PACKAGES: dict[CssStrategy, str] = {
    CssStrategy.SCSS: "sass",
    CssStrategy.LESS: "less",
}

_STATE_PACKAGES: dict[StateManagement, str] = {
    StateManagement.REDUX: "redux",
    StateManagement.MOBX: "mobx",
    StateManagement.ZUSTAND: "zustand",
}

ROUTING_PACKAGE: str = "react-router-dom"


# ---------------------------------------------------------------------------
# Command construction (pure)
# ---------------------------------------------------------------------------

def install_command(
    package_manager: PackageManager,
    packages: Sequence[str],
    *,
    dev: bool,
) -> Command:
    """Build the install command for *packages* with *package_manager*.

    ``npm install [--save-dev] …`` or ``yarn|pnpm add [-D] …``.
    """
    if package_manager is PackageManager.NPM:
        verb: tuple[str, ...] = ("install", "--save-dev") if dev else ("install",)
    else:
        verb = ("add", "-D") if dev else ("add",)
    return Command(package_manager.value, (*verb, *packages))


def scaffold_command(use_typescript: bool) -> Command:
    args: tuple[str, ...] = ("create-react-app", ".")
    if use_typescript:
        args += ("--template", "typescript")
    return Command("npx", args)


def editor_command(editor: str) -> Command:
    """Open the current directory with *editor* (may carry its own flags).

    Unbalanced quoting falls back to whitespace splitting.
    """
    try:
        argv = shlex.split(editor)
    except ValueError:
        argv = editor.split()
    argv = argv or [DEFAULT_EDITOR]
    return Command(argv[0], (*argv[1:], "."))


def _install_step(
    name: str,
    plan: BuildPlan,
    packages: Sequence[str],
    *,
    dev: bool,
) -> ProvisioningStep:
    action = (
        StepAction.INSTALL_DEV_DEPENDENCY if dev
        else StepAction.INSTALL_RUNTIME_DEPENDENCY
    )
    return ProvisioningStep(
        name=name,
        action=action,
        payload=install_command(plan.package_manager, packages, dev=dev),
    )


# ---------------------------------------------------------------------------
# Per-section planners
# ---------------------------------------------------------------------------

def _css_steps(plan: BuildPlan) -> list[ProvisioningStep]:
    if plan.css_strategy is CssStrategy.TAILWIND:
        return [
            _install_step("Installing Tailwind CSS", plan, TAILWIND_PACKAGES, dev=True),
            ProvisioningStep(
                name="Initializing Tailwind CSS",
                action=StepAction.RUN_INITIALIZER,
                payload=Command("npx", ("tailwindcss", "init", "-p")),
            ),
            ProvisioningStep(
                name=f"Writing {TAILWIND_CONFIG_PATH}",
                action=StepAction.WRITE_FILE,
                payload=FileWrite(TAILWIND_CONFIG_PATH, TAILWIND_CONFIG),
            ),
            ProvisioningStep(
                name=f"Writing {TAILWIND_CSS_ENTRY_PATH}",
                action=StepAction.WRITE_FILE,
                payload=FileWrite(TAILWIND_CSS_ENTRY_PATH, TAILWIND_CSS_ENTRY),
            ),
        ]

    package = _PREPROCESSOR_PACKAGES.get(plan.css_strategy)
    if package is None:
        return []
    return [_install_step(f"Installing {package}", plan, (package,), dev=True)]


def _git_steps() -> list[ProvisioningStep]:
    return [
        ProvisioningStep(
            name="Initializing Git repository",
            action=StepAction.INIT_VERSION_CONTROL,
            payload=Command("git", ("init",)),
        ),
        ProvisioningStep(
            name="Staging project files",
            action=StepAction.INIT_VERSION_CONTROL,
            payload=Command("git", ("add", ".")),
        ),
        # Empty tree or missing git identity: warning only.
        ProvisioningStep(
            name="Creating initial commit",
            action=StepAction.INIT_VERSION_CONTROL,
            payload=Command("git", ("commit", "-m", "Initial commit")),
            fatal=False,
        ),
    ]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def plan_steps(plan: BuildPlan, *, editor: str = DEFAULT_EDITOR) -> tuple[ProvisioningStep, ...]:
    """Expand *plan* into the ordered, immutable provisioning sequence."""
    template = "TypeScript" if plan.use_typescript else "JavaScript"
    steps: list[ProvisioningStep] = [
        ProvisioningStep(
            name=f"Creating React app ({template})",
            action=StepAction.SCAFFOLD_BASE,
            payload=scaffold_command(plan.use_typescript),
        ),
    ]

    testing = _TESTING_PACKAGES.get(plan.testing_framework)
    if testing is not None:
        steps.append(_install_step(f"Installing {testing}", plan, (testing,), dev=True))

    if plan.use_prettier:
        steps.append(_install_step("Installing prettier", plan, ("prettier",), dev=True))

    steps.extend(_css_steps(plan))

    if plan.use_routing:
        steps.append(
            _install_step(f"Installing {ROUTING_PACKAGE}", plan, (ROUTING_PACKAGE,), dev=False),
        )

    state = _STATE_PACKAGES.get(plan.state_management)
    if state is not None:
        steps.append(_install_step(f"Installing {state}", plan, (state,), dev=False))

    if plan.init_git:
        steps.extend(_git_steps())

    steps.append(
        ProvisioningStep(
            name="Opening project in editor",
            action=StepAction.LAUNCH_EDITOR,
            payload=editor_command(editor),
            fatal=False,
        ),
    )
    return tuple(steps)
