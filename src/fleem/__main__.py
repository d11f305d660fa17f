"""Allow ``python -m fleem`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m fleem`` behaves identically to the ``fleem`` console
script.
"""

from __future__ import annotations

from fleem.cli.app import cli

if __name__ == "__main__":
    cli()
