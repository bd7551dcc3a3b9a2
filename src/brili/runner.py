"""Top-level run routine.

Control flow for one invocation:

  InvocationConfig -> read_source -> engine.check -> engine.execute -> exit code

Only the check runs when ``--check`` is given. Program output goes to stdout;
diagnostics and the ``--profile`` report go to stderr so they never mix with
what the program prints.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import TextIO

from brili.errors import BriliError, SourceError
from brili.invocation import InvocationConfig
from brili.types import Engine, Source, SourceForm

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 2

PROFILE_KEY = "total_dyn_inst"


def read_source(cfg: InvocationConfig, stdin: TextIO | None = None) -> Source:
    """Load the program named by `cfg`.

    :param InvocationConfig cfg: Invocation record.
    :param stdin: Stream used when `cfg.file` is unset (default: sys.stdin).
    :raises SourceError: If the source cannot be read, is not UTF-8, or the JSON is malformed.
    :return Source: Loaded program.
    """
    origin = "<stdin>" if cfg.reads_stdin else cfg.file
    try:
        if cfg.reads_stdin:
            stream = stdin if stdin is not None else sys.stdin
            text = stream.read()
        else:
            with open(cfg.file, encoding="utf-8") as f:  # type: ignore[arg-type]
                text = f.read()
    except UnicodeDecodeError as e:
        raise SourceError(f"{origin} is not valid UTF-8: {e.reason} at byte {e.start}") from e
    except OSError as e:
        raise SourceError(f"cannot read {origin}: {e.strerror or e}") from e

    logger.debug("Read %d characters from %s", len(text), origin)

    if cfg.text:
        return Source(form=SourceForm.TEXT, text=text, path=cfg.file)

    try:
        program = json.loads(text)
    except json.JSONDecodeError as e:
        raise SourceError(
            f"{origin} is not valid JSON (line {e.lineno}, column {e.colno}): {e.msg}. "
            "Pass --text for programs in Bril's text form."
        ) from e
    if not isinstance(program, dict):
        raise SourceError(
            f"{origin} must contain a JSON object, got {type(program).__name__}"
        )
    return Source(form=SourceForm.JSON, text=text, path=cfg.file, program=program)


def run(
    cfg: InvocationConfig,
    engine: Engine,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Check and (unless check-only) execute the program described by `cfg`.

    :param InvocationConfig cfg: Invocation record.
    :param Engine engine: Checker + interpreter.
    :param stdin: Program source stream when no file is given.
    :param stdout: Stream for program output.
    :param stderr: Stream for errors and the profile report.
    :return int: Process exit status (0 on success, 2 on any failure).
    """
    out = stdout if stdout is not None else sys.stdout
    err = stderr if stderr is not None else sys.stderr
    logger.debug("Invocation: %s", cfg.to_dict())

    try:
        source = read_source(cfg, stdin)
        engine.check(source)
        if cfg.check:
            logger.info("Checked %s", source.origin)
            return EXIT_OK
        count = engine.execute(source, cfg.args, out=out)
    except BriliError as e:
        logger.debug("Run failed", exc_info=True)
        out.flush()
        err.write(f"error: {e}\n")
        return EXIT_FAILURE

    out.flush()
    if cfg.profile:
        err.write(f"{PROFILE_KEY}: {count}\n")
    return EXIT_OK
