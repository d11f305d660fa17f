"""Infrastructure: UTF-8 file writes for generated config files."""

from __future__ import annotations

from pathlib import Path


class LocalFileWriter:
    """Concrete :class:`~fleem.core.protocols.FileWriter` on the local disk."""

    def write(self, path: Path, contents: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(contents, encoding="utf-8")
