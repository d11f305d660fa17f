"""End-to-end tests for ``fleem <project-name>`` (cli/app.py create flow).

Subprocesses, tool detection and prompts are mocked; the directory
lifecycle, file writes and executor run for real inside ``tmp_path``.

Coverage:
* ``--default`` run creates the project with flag overrides applied.
* Interactive answers drive the plan.
* Fatal step failure exits non-zero and removes the directory.
* Pre-existing directory aborts before any command runs.
* Invalid names are rejected before prompting.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from conftest import FakeRunner
from fleem.cli import exit_codes
from fleem.cli.app import main
from fleem.core.models import CommandResult, CssStrategy, PackageManager, StateManagement, TestingFramework
from fleem.exceptions import (
    DirectoryExistsError,
    FatalStepError,
    InvalidProjectNameError,
    ToolNotFoundError,
)


@pytest.fixture()
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("FLEEM_EDITOR", raising=False)
    return tmp_path


def _answers(**overrides: Any) -> dict[str, Any]:
    answers: dict[str, Any] = {
        "use_typescript": False,
        "testing_framework": TestingFramework.NONE,
        "use_prettier": False,
        "css_strategy": CssStrategy.PLAIN,
        "use_routing": False,
        "state_management": StateManagement.NONE,
        "init_git": True,
        "package_manager": PackageManager.NPM,
    }
    answers.update(overrides)
    return answers


def _run(argv: list[str], runner: FakeRunner) -> int:
    with (
        patch("fleem.infra.tool_detector.require_tools"),
        patch("fleem.infra.subprocess_runner.SubprocessCommandRunner", return_value=runner),
    ):
        return main(argv)


# ---------------------------------------------------------------------------
# Defaults mode
# ---------------------------------------------------------------------------

class TestDefaultMode:
    def test_creates_project(
        self, workspace: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        runner = FakeRunner()
        with patch("fleem.cli.prompts.ask_questions") as mock_ask:
            code = _run(["demo", "--default"], runner)

        assert code == exit_codes.SUCCESS
        mock_ask.assert_not_called()
        assert (workspace / "demo").is_dir()
        assert runner.commands == [
            "npx create-react-app .",
            "git init",
            "git add .",
            "git commit -m 'Initial commit'",
            "code .",
        ]
        assert all(cwd == workspace / "demo" for _, cwd in runner.calls)
        assert "Happy coding" in capsys.readouterr().err

    def test_flags_override_defaults(self, workspace: Path) -> None:
        runner = FakeRunner()
        code = _run(
            ["demo", "-d", "--typescript", "--scss", "--package-manager", "yarn"],
            runner,
        )

        assert code == exit_codes.SUCCESS
        assert runner.commands[:2] == [
            "npx create-react-app . --template typescript",
            "yarn add -D sass",
        ]

    def test_configured_editor(self, workspace: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FLEEM_EDITOR", "subl -n")
        runner = FakeRunner()
        _run(["demo", "--default"], runner)
        assert runner.commands[-1] == "subl -n ."


# ---------------------------------------------------------------------------
# Interactive mode
# ---------------------------------------------------------------------------

class TestInteractiveMode:
    def test_answers_drive_plan(self, workspace: Path) -> None:
        runner = FakeRunner()
        answers = _answers(
            use_typescript=True,
            css_strategy=CssStrategy.TAILWIND,
            init_git=False,
            package_manager=PackageManager.PNPM,
        )
        with patch("fleem.cli.prompts.ask_questions", return_value=answers) as mock_ask:
            code = _run(["demo", "--jest"], runner)

        assert code == exit_codes.SUCCESS
        questions = mock_ask.call_args.args[0]
        prefilled = {q.name: q.default for q in questions}
        assert prefilled["testing_framework"] is TestingFramework.JEST

        # The answer (no testing framework) is final over the pre-filled flag.
        assert "pnpm add -D jest" not in runner.commands
        assert runner.commands[1] == (
            "pnpm add -D tailwindcss@latest postcss@latest autoprefixer@latest"
        )
        assert (workspace / "demo" / "tailwind.config.js").is_file()
        assert not any(cmd.startswith("git") for cmd in runner.commands)


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------

class TestCreateFailures:
    def test_fatal_step_rolls_back(
        self, workspace: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        runner = FakeRunner(
            failures={"npm install --save-dev jest": CommandResult(1, stderr="npm ERR! 404")},
        )
        with pytest.raises(FatalStepError) as exc_info:
            _run(["demo", "--default", "--jest"], runner)

        assert exc_info.value.step_name == "Installing jest"
        assert "npm ERR! 404" in str(exc_info.value)
        assert not (workspace / "demo").exists()
        assert runner.commands == [
            "npx create-react-app .",
            "npm install --save-dev jest",
        ]
        err = capsys.readouterr().err
        assert "Cleaning up..." in err
        assert "Cleanup complete. Please try again." in err

    def test_fatal_step_exits_with_general_error(
        self, workspace: Path, monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        from fleem.cli.app import cli

        runner = FakeRunner(failures={"npx create-react-app .": CommandResult(1)})
        monkeypatch.setattr("sys.argv", ["fleem", "demo", "--default"])
        with (
            patch("fleem.infra.tool_detector.require_tools"),
            patch("fleem.infra.subprocess_runner.SubprocessCommandRunner", return_value=runner),
        ):
            with pytest.raises(SystemExit) as exc_info:
                cli()

        assert exc_info.value.code == exit_codes.GENERAL_ERROR
        assert not (workspace / "demo").exists()
        assert "Creating React app (JavaScript)" in capsys.readouterr().err

    def test_existing_directory(self, workspace: Path) -> None:
        (workspace / "demo").mkdir()
        (workspace / "demo" / "package.json").write_text("{}")
        runner = FakeRunner()

        with pytest.raises(DirectoryExistsError):
            _run(["demo", "--default"], runner)

        assert runner.calls == []
        assert (workspace / "demo" / "package.json").read_text() == "{}"

    def test_nul_byte_in_name_rejected(self, workspace: Path) -> None:
        runner = FakeRunner()
        with pytest.raises(InvalidProjectNameError):
            _run(["de\x00mo", "--default"], runner)
        assert runner.calls == []

    def test_invalid_name_rejected_before_prompting(self, workspace: Path) -> None:
        with patch("fleem.cli.prompts.ask_questions") as mock_ask:
            with pytest.raises(InvalidProjectNameError):
                _run(["../escape"], FakeRunner())
        mock_ask.assert_not_called()
        assert not (workspace.parent / "escape").exists()

    def test_missing_tool_aborts_before_directory_creation(self, workspace: Path) -> None:
        runner = FakeRunner()
        with (
            patch(
                "fleem.infra.tool_detector.require_tools",
                side_effect=ToolNotFoundError("npx is not installed or not on PATH."),
            ),
            patch("fleem.infra.subprocess_runner.SubprocessCommandRunner", return_value=runner),
        ):
            with pytest.raises(ToolNotFoundError):
                main(["demo", "--default"])

        assert not (workspace / "demo").exists()
        assert runner.calls == []

    def test_warnings_reported(
        self, workspace: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        runner = FakeRunner(failures={"code .": CommandResult(127, stderr="code: command not found")})
        code = _run(["demo", "--default"], runner)

        assert code == exit_codes.SUCCESS
        assert (workspace / "demo").is_dir()
        assert "1 warning" in capsys.readouterr().err


class TestUpgradeCommand:
    def test_upgrade_success(self, workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
        runner = FakeRunner()
        code = _run(["upgrade"], runner)

        assert code == exit_codes.SUCCESS
        assert runner.calls[0][0].args == ("-m", "pip", "install", "--upgrade", "fleem")
        assert "successfully upgraded" in capsys.readouterr().err

    def test_upgrade_ignores_project_flags(self, workspace: Path) -> None:
        mock_runner = MagicMock()
        mock_runner.run.return_value = CommandResult(0)
        with patch("fleem.infra.subprocess_runner.SubprocessCommandRunner", return_value=mock_runner):
            assert main(["upgrade", "--typescript"]) == exit_codes.SUCCESS
        mock_runner.run.assert_called_once()
