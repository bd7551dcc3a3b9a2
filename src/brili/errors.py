"""Errors surfaced by the run routine.

These are user-facing: the message is printed as ``error: <message>`` without
a traceback.
"""

from __future__ import annotations


class BriliError(Exception):
    """Base class for failures reported to the user by `brili.runner.run`."""


class SourceError(BriliError):
    """The program text could not be read or decoded."""


class ProgramRejected(BriliError):
    """The engine's checker rejected the program."""


class ExecutionError(BriliError):
    """The program failed at run time."""


class EngineLoadError(BriliError):
    """The configured engine could not be imported or is not an engine."""
