"""fleem — interactive React project scaffolder.

Wraps create-react-app and the chosen package manager with a strict
layered architecture: resolve options, plan steps, execute, roll back.
"""

from fleem.version import __version__

__all__: list[str] = ["__version__"]
