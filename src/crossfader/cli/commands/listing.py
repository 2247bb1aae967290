# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``list``: print installed ruby versions and their gemsets as JSON."""

from __future__ import annotations

import typer

from ...dispatcher import LIST_COMMAND
from ..shared import get_state, reporting_errors


def list_command(ctx: typer.Context) -> None:
    """List available ruby versions and gemsets."""

    state = get_state(ctx)
    with reporting_errors(state.logger):
        payload = state.build_dispatcher().list()
    state.logger.echo(payload)


def register(app: typer.Typer) -> None:
    app.command(LIST_COMMAND)(list_command)


__all__ = ["list_command", "register"]
