"""Runtime contracts between the front end and the engine.

Keep this file small: it defines what crosses the boundary.

- `Source` is what the loader produces and the engine consumes.
- `Engine` is the checker + interpreter. brili never interprets Bril itself.

**Engine contract**

  check(source)                 raises ProgramRejected if the program is invalid
  execute(source, args, out=)   runs ``main`` with `args`, writes program output
                                to `out`, returns the dynamic instruction count;
                                raises ExecutionError on a runtime failure

`check` is always called before `execute`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, TextIO, runtime_checkable


class SourceForm(str, Enum):
    """Encoding of the program text."""

    JSON = "json"
    TEXT = "text"


@dataclass(frozen=True)
class Source:
    """A loaded program.

    `program` holds the decoded JSON document for the JSON form and is None for
    the text form; turning Bril text into a program is the engine's job.
    """

    form: SourceForm
    text: str
    path: str | None = None
    program: dict[str, Any] | None = None

    @property
    def origin(self) -> str:
        """Human-readable location for messages."""
        return self.path if self.path is not None else "<stdin>"


@runtime_checkable
class Engine(Protocol):
    """Checker and interpreter for Bril programs."""

    def check(self, source: Source) -> None: ...

    def execute(self, source: Source, args: Sequence[str], *, out: TextIO) -> int: ...
