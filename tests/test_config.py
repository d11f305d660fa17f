"""Tests for environment-driven configuration (cli/config.py)."""

from __future__ import annotations

import logging

import pytest

from fleem.cli.config import EDITOR_ENV_VAR, configured_editor


class TestConfiguredEditor:
    def test_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(EDITOR_ENV_VAR, raising=False)
        assert configured_editor() == "code"

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(EDITOR_ENV_VAR, "  idea  ")
        assert configured_editor() == "idea"

    def test_blank_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(EDITOR_ENV_VAR, "   ")
        assert configured_editor() == "code"

    def test_unbalanced_quote_falls_back_with_warning(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture,
    ) -> None:
        monkeypatch.setenv(EDITOR_ENV_VAR, 'code "')
        with caplog.at_level(logging.WARNING, logger="fleem.cli.config"):
            assert configured_editor() == "code"
        assert "Ignoring FLEEM_EDITOR" in caplog.text
