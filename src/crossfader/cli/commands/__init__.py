# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command registry."""

from __future__ import annotations

import typer

from . import execute, listing, shellinit

__all__ = ["register_commands"]


def register_commands(app: typer.Typer) -> None:
    """Register the ``exec``, ``list`` and ``shellinit`` subcommands on ``app``."""

    execute.register(app)
    listing.register(app)
    shellinit.register(app)
