"""Infrastructure: target directory creation and rollback.

The manager is the only component allowed to delete a project tree.
It deletes only directories it created itself, at most once each, and
never raises from removal — rollback is best-effort and non-blocking.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from fleem.exceptions import DirectoryExistsError, PreconditionError

logger = logging.getLogger(__name__)


class DirectoryLifecycleManager:
    """Concrete :class:`~fleem.core.protocols.DirectoryLifecycle` on the local disk."""

    def __init__(self) -> None:
        self._created: set[Path] = set()

    def create_target(self, path: Path) -> None:
        """Create *path* (its parent must already exist).

        Raises
        ------
        DirectoryExistsError
            If anything already exists at *path*.
        """
        if path.exists():
            raise DirectoryExistsError(
                f"Directory {path} already exists.",
                hint="Choose a different project name or remove the existing directory.",
            )
        try:
            path.mkdir()
        except FileExistsError as exc:
            raise DirectoryExistsError(f"Directory {path} already exists.") from exc
        except (OSError, ValueError) as exc:
            raise PreconditionError(f"Could not create {path}: {exc}") from exc
        self._created.add(path.resolve())

    def remove_target(self, path: Path) -> bool:
        """Delete *path* if this manager created it.

        Returns ``True`` when the directory no longer exists afterwards.
        Failures are logged, never raised.
        """
        key = path.resolve()
        if key not in self._created:
            logger.warning("Refusing to remove %s: not created by this run", path)
            return not path.exists()
        self._created.discard(key)

        try:
            shutil.rmtree(path)
        except FileNotFoundError:
            return True
        except OSError as exc:
            logger.warning("Could not remove %s: %s", path, exc)
            return not path.exists()
        return True
