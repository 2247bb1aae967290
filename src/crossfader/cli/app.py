# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring global options and subcommands."""

from __future__ import annotations

from pathlib import Path

import typer

from .. import __version__
from ..config import CrossfaderSettings, build_version
from ..constants import DEFAULT_GEMSET, DEFAULT_HOME, DEFAULT_RUBY, PROG_NAME
from ..environment import snapshot_environment
from ._options import DEBUG_OPTION, GEMSET_OPTION, HOME_OPTION, RUBY_OPTION, VERSION_OPTION
from .commands import register_commands
from .shared import CLIState, build_cli_logger, reporting_errors

HELP_TEXT = """\
Run commands against a selected ruby version and gemset.

Quick start: add this line to your shell initialization scripts.

\b
    eval "$(/opt/crossfader/bin/crossfader shellinit)"

To install a gem into a specific gemset:

\b
    crossfader --gemset=puppet exec gem install puppet

Options that list an environment variable take their default value from it,
which avoids repeating them on every command line.
"""

app = typer.Typer(
    name=PROG_NAME,
    help=HELP_TEXT,
    invoke_without_command=True,
    no_args_is_help=False,
    add_completion=False,
    rich_markup_mode=None,
)


@app.callback()
def main(
    ctx: typer.Context,
    ruby: RUBY_OPTION = DEFAULT_RUBY,
    gemset: GEMSET_OPTION = DEFAULT_GEMSET,
    home: HOME_OPTION = Path(DEFAULT_HOME),
    debug: DEBUG_OPTION = False,
    version: VERSION_OPTION = False,
) -> None:
    """Select the ruby and gemset; global options must precede COMMAND."""

    logger = build_cli_logger(debug=debug)
    inherited = snapshot_environment()
    with reporting_errors(logger):
        settings = CrossfaderSettings.from_environment(
            inherited,
            home=home,
            ruby=ruby,
            gemset=gemset,
            debug=debug,
        )

    if version:
        logger.echo(f"{PROG_NAME} {__version__} (build {build_version(settings.home)})")
        raise typer.Exit(code=0)

    state = CLIState(settings=settings, inherited=inherited, logger=logger)
    if ctx.invoked_subcommand is None:
        with reporting_errors(logger):
            state.build_dispatcher().dispatch([])

    ctx.obj = state


register_commands(app)


def run() -> None:
    """Console-script entry point."""

    app(prog_name=PROG_NAME)


__all__ = ["app", "run"]
