# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Global option declarations shared by the crossfader CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ..constants import GEMSET_ENV, HOME_ENV, RUBY_ENV

RUBY_OPTION = Annotated[
    str,
    typer.Option(
        "--ruby",
        "-r",
        envvar=RUBY_ENV,
        show_envvar=True,
        help="Ruby version to use.",
    ),
]
GEMSET_OPTION = Annotated[
    str,
    typer.Option(
        "--gemset",
        "-g",
        envvar=GEMSET_ENV,
        show_envvar=True,
        help="Gemset to use.",
    ),
]
HOME_OPTION = Annotated[
    Path,
    typer.Option(
        "--home",
        envvar=HOME_ENV,
        show_envvar=True,
        file_okay=False,
        help="Directory holding crossfader's ruby installations.",
    ),
]
DEBUG_OPTION = Annotated[
    bool,
    typer.Option("--debug", "-d", help="Enable debug messages on stderr."),
]
VERSION_OPTION = Annotated[
    bool,
    typer.Option("--version", "-v", help="Print version and exit."),
]

__all__ = [
    "DEBUG_OPTION",
    "GEMSET_OPTION",
    "HOME_OPTION",
    "RUBY_OPTION",
    "VERSION_OPTION",
]
