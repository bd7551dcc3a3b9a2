"""Main CLI entry point.

Defines the ``brili`` click command. The option surface is shared with
`brili.invocation.parse` through `invocation_options`.
"""

from __future__ import annotations

import click

from brili._version import __version__
from brili.config import CONFIG_ENV, ENGINE_ENV, load_settings
from brili.errors import EngineLoadError
from brili.invocation import (
    CONTEXT_SETTINGS,
    PROG_NAME,
    InvocationCommand,
    InvocationConfig,
    invocation_options,
)
from brili.runner import run
from brili.types import Engine
from brili.utils.engines import load_engine
from brili.utils.io import setup_python_logging


def resolve_engine(ctx: click.Context, engine_path: str | None) -> Engine:
    """Return the engine for this run.

    An engine placed on the context object (``cli.main(obj=engine)``) wins over
    the configured import path.

    :param click.Context ctx: Current click context.
    :param engine_path: ``module:attribute`` path from settings, if any.
    :raises click.ClickException: If no engine is available or it fails to load.
    :return Engine: Engine to drive.
    """
    if ctx.obj is not None:
        return ctx.obj
    if engine_path is None:
        raise click.ClickException(
            f"No engine configured. Set ${ENGINE_ENV} or 'engine' in the file named by "
            f"${CONFIG_ENV}."
        )
    try:
        return load_engine(engine_path)
    except EngineLoadError as e:
        raise click.ClickException(str(e)) from e


@click.command(PROG_NAME, cls=InvocationCommand, context_settings=CONTEXT_SETTINGS)
@invocation_options
@click.version_option(__version__, "-V", "--version", prog_name=PROG_NAME)
@click.pass_context
def cli(
    ctx: click.Context,
    profile: bool,
    file: str | None,
    check: bool,
    text: bool,
    args: tuple[str, ...],
) -> None:
    """Run or check a Bril program.

    ARGS are passed to the program's main function in order. Negative numbers
    are accepted as-is; put other dash-prefixed values after --.
    """
    invocation = InvocationConfig(profile=profile, file=file, check=check, text=text, args=args)

    try:
        settings = load_settings()
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    # Logging first so engine import errors are readable
    setup_python_logging(settings.logging.level, use_rich=settings.logging.console_use_rich)

    engine = resolve_engine(ctx, settings.engine)
    ctx.exit(run(invocation, engine))
