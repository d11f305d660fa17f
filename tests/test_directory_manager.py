"""Tests for the directory lifecycle manager (infra/directory_manager.py)."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from unittest.mock import patch

import pytest

from fleem.exceptions import DirectoryExistsError, PreconditionError
from fleem.infra.directory_manager import DirectoryLifecycleManager


class TestCreateTarget:
    def test_creates_directory(self, tmp_path: Path) -> None:
        target = tmp_path / "demo"
        DirectoryLifecycleManager().create_target(target)
        assert target.is_dir()

    def test_existing_directory_rejected(self, tmp_path: Path) -> None:
        target = tmp_path / "demo"
        target.mkdir()
        with pytest.raises(DirectoryExistsError) as exc_info:
            DirectoryLifecycleManager().create_target(target)
        assert "already exists" in str(exc_info.value)
        assert exc_info.value.hint is not None

    def test_missing_parent_is_precondition_error(self, tmp_path: Path) -> None:
        with pytest.raises(PreconditionError):
            DirectoryLifecycleManager().create_target(tmp_path / "nope" / "demo")


    def test_nul_byte_is_precondition_error(self, tmp_path: Path) -> None:
        with pytest.raises(PreconditionError):
            DirectoryLifecycleManager().create_target(tmp_path / "de\x00mo")


class TestRemoveTarget:
    def test_removes_created_tree(self, tmp_path: Path) -> None:
        target = tmp_path / "demo"
        manager = DirectoryLifecycleManager()
        manager.create_target(target)
        (target / "src").mkdir()
        (target / "src" / "index.js").write_text("x")

        assert manager.remove_target(target) is True
        assert not target.exists()

    def test_refuses_foreign_directory(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture,
    ) -> None:
        target = tmp_path / "demo"
        target.mkdir()

        with caplog.at_level(logging.WARNING):
            removed = DirectoryLifecycleManager().remove_target(target)

        assert removed is False
        assert target.is_dir()
        assert "Refusing to remove" in caplog.text

    def test_removes_at_most_once(self, tmp_path: Path) -> None:
        target = tmp_path / "demo"
        manager = DirectoryLifecycleManager()
        manager.create_target(target)
        assert manager.remove_target(target) is True

        # Someone recreates the path afterwards; it is no longer ours.
        target.mkdir()
        assert manager.remove_target(target) is False
        assert target.is_dir()

    def test_already_gone(self, tmp_path: Path) -> None:
        target = tmp_path / "demo"
        manager = DirectoryLifecycleManager()
        manager.create_target(target)
        shutil.rmtree(target)
        assert manager.remove_target(target) is True

    def test_removal_error_is_swallowed(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture,
    ) -> None:
        target = tmp_path / "demo"
        manager = DirectoryLifecycleManager()
        manager.create_target(target)

        with (
            patch("fleem.infra.directory_manager.shutil.rmtree", side_effect=PermissionError("busy")),
            caplog.at_level(logging.WARNING),
        ):
            removed = manager.remove_target(target)

        assert removed is False
        assert "Could not remove" in caplog.text
