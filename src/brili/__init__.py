"""brili: command-line front end for Bril IR interpreters.

This package is intentionally small. It owns how a single invocation is
described (flags, source location, program arguments) and hands the result to
an external engine that checks and executes the program.

- `brili.invocation` parses argv into an immutable `InvocationConfig`
- `brili.runner` loads the program source and drives the engine
- `brili.cli` is the `brili` console script
"""

from __future__ import annotations

from brili._version import __version__
from brili.invocation import InvocationConfig, ParseError, ParseErrorKind, parse

__all__ = ["InvocationConfig", "ParseError", "ParseErrorKind", "__version__", "parse"]
