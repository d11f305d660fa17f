"""Infrastructure layer — external system integration.

This layer wraps all interaction with the operating system: spawning
processes, writing files, creating and removing the target directory,
and probing PATH for tools.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from fleem.infra.directory_manager import DirectoryLifecycleManager
from fleem.infra.file_writer import LocalFileWriter
from fleem.infra.subprocess_runner import SubprocessCommandRunner
from fleem.infra.tool_detector import ToolStatus, detect_tool, require_tool, require_tools

__all__: list[str] = [
    "DirectoryLifecycleManager",
    "LocalFileWriter",
    "SubprocessCommandRunner",
    "ToolStatus",
    "detect_tool",
    "require_tool",
    "require_tools",
]
