"""Invocation model for the brili command line.

Rule #1: **one record per process.**
Everything the front end needs to know about a run lives in `InvocationConfig`.
Downstream code (source loader, checker, interpreter) reads it and never looks
at argv again.

Parsing is done by click so that the CLI and `parse()` share one definition of
the option surface. Two behaviours are layered on top of click's parser:

- negative numeric literals (``-5``, ``-2.5``) are program arguments, not flags
- everything after ``--`` is forwarded verbatim, including tokens such as
  ``--bogus`` that would otherwise be rejected

Any other option-shaped token that click does not recognise is an error.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, TypeVar

import click

PROG_NAME = "brili"
END_OF_OPTIONS = "--"

# Options that consume the following token.
_VALUE_OPTION_NAMES = frozenset({"-f", "--file"})

_NEGATIVE_NUMBER_RE = re.compile(r"-(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?")

F = TypeVar("F", bound=Callable[..., Any])


@dataclass(frozen=True)
class InvocationConfig:
    """What a single brili run should do.

    `args` keeps command-line order: values bind positionally to the
    parameters of the program's entry function.
    """

    profile: bool = False
    file: str | None = None
    check: bool = False
    text: bool = False
    args: tuple[str, ...] = ()

    @property
    def reads_stdin(self) -> bool:
        """True when the program text comes from standard input."""
        return self.file is None

    @classmethod
    def from_params(cls, params: dict[str, Any]) -> InvocationConfig:
        """Build a config from the parameter mapping of a parsed click context.

        :param dict[str, Any] params: ``ctx.params`` of an invocation command.
        :return InvocationConfig: Immutable invocation record.
        """
        return cls(
            profile=bool(params.get("profile", False)),
            file=params.get("file"),
            check=bool(params.get("check", False)),
            text=bool(params.get("text", False)),
            args=tuple(params.get("args") or ()),
        )

    def to_argv(self) -> list[str]:
        """Serialize back to canonical long-flag form.

        ``parse(cfg.to_argv()) == cfg`` for every config. Program arguments are
        always placed after ``--`` so hyphen-prefixed values survive.

        :return list[str]: Argument vector without the program name.
        """
        argv: list[str] = []
        if self.profile:
            argv.append("--profile")
        if self.file is not None:
            # Attached form, so a path spelled "--" is never mistaken for the separator.
            argv.append(f"--file={self.file}")
        if self.check:
            argv.append("--check")
        if self.text:
            argv.append("--text")
        if self.args:
            argv.append(END_OF_OPTIONS)
            argv.extend(self.args)
        return argv

    def to_dict(self) -> dict[str, Any]:
        """Return a plain dict view of the config.

        :return dict[str, Any]: Field name to value mapping.
        """
        return asdict(self)


class ParseErrorKind(str, Enum):
    """Ways an argument vector can fail to describe an invocation."""

    UNRECOGNIZED_OPTION = "unrecognized_option"
    MISSING_VALUE = "missing_value"


_DEFAULT_MESSAGES = {
    ParseErrorKind.UNRECOGNIZED_OPTION: "unrecognized option {token!r}",
    ParseErrorKind.MISSING_VALUE: "option {token!r} requires a value",
}


class ParseError(click.UsageError):
    """Argument vector rejected while building an `InvocationConfig`.

    Subclasses `click.UsageError` so the CLI prints usage and exits with 2.
    """

    def __init__(
        self,
        kind: ParseErrorKind,
        token: str,
        message: str | None = None,
        ctx: click.Context | None = None,
    ) -> None:
        """Initialize the error.

        :param ParseErrorKind kind: Failure category.
        :param str token: Argument that triggered the failure.
        :param message: Optional message overriding the default for `kind`.
        :param ctx: Click context, used for the usage line.
        """
        self.kind = kind
        self.token = token
        super().__init__(message or _DEFAULT_MESSAGES[kind].format(token=token), ctx=ctx)


def is_negative_number(token: str) -> bool:
    """Return True if `token` spells a negative int or float literal."""
    return _NEGATIVE_NUMBER_RE.fullmatch(token) is not None


def is_option_like(token: str) -> bool:
    """Return True if `token` would be read as an option rather than a value.

    A lone ``-`` and negative numbers are values.
    """
    return token.startswith("-") and token != "-" and not is_negative_number(token)


def split_passthrough(args: Sequence[str]) -> tuple[list[str], tuple[str, ...]]:
    """Split argv at the first ``--``.

    :param Sequence[str] args: Raw argument vector.
    :return tuple[list[str], tuple[str, ...]]: (tokens to parse, verbatim tail).
    """
    args = list(args)
    if END_OF_OPTIONS not in args:
        return args, ()
    cut = args.index(END_OF_OPTIONS)
    return args[:cut], tuple(args[cut + 1 :])


class InvocationCommand(click.Command):
    """click command with brili's positional passthrough rules.

    Every option-shaped token ahead of ``--`` is checked against the command's
    own options before click sees it; a short bundle is accepted only if each
    character is a known flag, or it reaches a value option that takes the rest.
    Unknown options are then let through by click (``ignore_unknown_options``)
    so that negative numbers land in ``args`` whole.
    """

    def _option_table(self, ctx: click.Context) -> dict[str, bool]:
        """Map every option spelling to whether it consumes a value."""
        table: dict[str, bool] = {}
        for param in self.get_params(ctx):
            if isinstance(param, click.Option):
                for name in (*param.opts, *param.secondary_opts):
                    table[name] = not param.is_flag and not param.count
        return table

    def _find_unrecognized(self, ctx: click.Context, tokens: Sequence[str]) -> str | None:
        """Return the first token that is not a recognised option form, if any."""
        table = self._option_table(ctx)
        expect_value = False
        for token in tokens:
            if expect_value:
                expect_value = False
                continue
            if not is_option_like(token):
                continue
            if token.startswith("--"):
                name, eq, _value = token.partition("=")
                if name not in table:
                    return token
                # Flags given "=value" are reported by click as bad usage.
                expect_value = table[name] and not eq
                continue
            for i, ch in enumerate(token[1:], start=2):
                takes_value = table.get(f"-{ch}")
                if takes_value is None:
                    return token
                if takes_value:
                    expect_value = i == len(token)
                    break
        return None

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        options, passthrough = split_passthrough(args)
        unknown = self._find_unrecognized(ctx, options)
        if unknown is not None:
            raise ParseError(ParseErrorKind.UNRECOGNIZED_OPTION, unknown, ctx=ctx)
        try:
            remaining = super().parse_args(ctx, options)
        except click.BadOptionUsage as exc:
            raise _from_option_usage(exc, ctx) from exc

        ctx.params["args"] = tuple(ctx.params.get("args") or ()) + passthrough
        return remaining


def _from_option_usage(exc: click.BadOptionUsage, ctx: click.Context) -> ParseError:
    """Translate click's option usage errors into the two brili error kinds."""
    name = exc.option_name
    if name in _VALUE_OPTION_NAMES:
        return ParseError(ParseErrorKind.MISSING_VALUE, name, ctx=ctx)
    # A boolean flag given an attached value, e.g. --profile=1.
    return ParseError(
        ParseErrorKind.UNRECOGNIZED_OPTION,
        name,
        message=f"option {name!r} does not take a value",
        ctx=ctx,
    )


CONTEXT_SETTINGS: dict[str, Any] = {
    "ignore_unknown_options": True,
    "help_option_names": ["-h", "--help"],
}


def invocation_options(func: F) -> F:
    """Attach the invocation flags and the ``args`` argument to a command.

    :param func: Command callback to decorate.
    :return: The same callback with click parameters registered.
    """
    decorators = [
        click.option(
            "-p",
            "--profile",
            is_flag=True,
            help="Print the total number of dynamic instructions after the run.",
        ),
        click.option(
            "-f",
            "--file",
            "file",
            type=str,
            default=None,
            metavar="PATH",
            help="The Bril file to run. stdin is read if no file is given.",
        ),
        click.option(
            "-c",
            "--check",
            is_flag=True,
            help="Only typecheck/validate the program; do not run it.",
        ),
        click.option(
            "-t",
            "--text",
            is_flag=True,
            help="The program is in Bril's text form rather than JSON.",
        ),
        click.argument("args", nargs=-1, type=click.UNPROCESSED),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


@click.command(
    PROG_NAME,
    cls=InvocationCommand,
    add_help_option=False,
    context_settings=CONTEXT_SETTINGS,
)
@invocation_options
def _parse_only(**_params: Any) -> None:
    """Parse-only twin of the CLI command: same options, no help or version."""


def parse(argv: Sequence[str]) -> InvocationConfig:
    """Parse an argument vector into an `InvocationConfig`.

    Pure: no file, stdin, or environment access and no output.

    :param Sequence[str] argv: Process arguments without the program name.
    :raises ParseError: On an unrecognized option or a missing option value.
    :return InvocationConfig: Validated invocation record.
    """
    ctx = _parse_only.make_context(PROG_NAME, list(argv))
    return InvocationConfig.from_params(ctx.params)
