# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``shellinit``: print Bourne shell exports for the selected environment."""

from __future__ import annotations

import typer

from ...dispatcher import SHELLINIT_COMMAND
from ..shared import get_state, reporting_errors


def shellinit_command(ctx: typer.Context) -> None:
    """Generate bourne shell environment on stdout."""

    state = get_state(ctx)
    with reporting_errors(state.logger):
        script = state.build_dispatcher().shellinit()
    state.logger.echo(script)


def register(app: typer.Typer) -> None:
    app.command(SHELLINIT_COMMAND)(shellinit_command)


__all__ = ["register", "shellinit_command"]
