# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``exec``: replace crossfader with a command running in the selected environment."""

from __future__ import annotations

from typing import Annotated

import typer

from ...dispatcher import EXEC_COMMAND
from ..shared import get_state, reporting_errors

# Everything after the command name belongs to the command, options included.
EXEC_CONTEXT_SETTINGS = {
    "allow_interspersed_args": False,
    "ignore_unknown_options": True,
}

ARGV_ARGUMENT = Annotated[
    list[str] | None,
    typer.Argument(metavar="COMMAND [ARGS]...", help="Command to execute, e.g. `exec puppet --version`."),
]


def exec_command(ctx: typer.Context, argv: ARGV_ARGUMENT = None) -> None:
    """Execute a system command (exec puppet --version)."""

    state = get_state(ctx)
    with reporting_errors(state.logger):
        state.build_dispatcher().exec(argv or [])


def register(app: typer.Typer) -> None:
    app.command(EXEC_COMMAND, context_settings=EXEC_CONTEXT_SETTINGS)(exec_command)


__all__ = ["exec_command", "register"]
