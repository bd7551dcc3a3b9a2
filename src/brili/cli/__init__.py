"""CLI entrypoint for brili.

Invoked via the ``pyproject.toml`` console script::

    brili -f prog.json 5 -3
    bril2json < prog.bril | brili --profile
    brili --text --check -f prog.bril

Keep this module thin: argument parsing + calling into library code.
"""

from __future__ import annotations

__all__ = ["cli"]

from brili.cli.main import cli
