# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (logging, errors, invocation state)."""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass

import typer
from rich.console import Console
from rich.text import Text

from ..config import CrossfaderSettings
from ..dispatcher import CommandDispatcher
from ..errors import CrossfaderError, UsageError
from ..logging import fail as core_fail
from ..logging import get_console

USAGE_EXIT_CODE = 2
DEBUG_PREFIX = "Crossfader Debug: "


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code

    @classmethod
    def from_error(cls, exc: CrossfaderError) -> CLIError:
        """Map a library failure to the exit status reported by the CLI."""

        exit_code = USAGE_EXIT_CODE if isinstance(exc, UsageError) else 1
        return cls(str(exc), exit_code=exit_code)


@dataclass(slots=True)
class CLILogger:
    """Adapter around the stderr logging helpers honouring ``--debug``."""

    console: Console
    use_emoji: bool = False
    debug_enabled: bool = False
    _key_value_re: re.Pattern[str] = re.compile(r"([\w-]+)=('.*?'|\S+)")

    def fail(self, message: str) -> None:
        core_fail(message, use_emoji=self.use_emoji)

    def echo(self, message: str) -> None:
        """Write ``message`` to stdout using Typer's echo helper."""

        typer.echo(message)

    def debug(self, message: str) -> None:
        """Emit ``message`` on stderr when debug logging is enabled.

        ``key=value`` pairs are highlighted so long path lists stay readable.
        """

        if not self.debug_enabled:
            return
        text = Text(DEBUG_PREFIX, style="bold cyan")
        cursor = 0
        for match in self._key_value_re.finditer(message):
            start, end = match.span()
            if start > cursor:
                text.append(message[cursor:start], style="dim")
            text.append(match.group(1), style="bold magenta")
            text.append("=", style="dim")
            text.append(match.group(2), style="bold green")
            cursor = end
        if cursor < len(message):
            text.append(message[cursor:], style="dim")
        self.console.print(text)


def build_cli_logger(*, debug: bool = False, emoji: bool = False) -> CLILogger:
    """Return a ``CLILogger`` bound to the shared stderr console."""

    console = get_console(color=True, emoji=emoji)
    return CLILogger(console=console, use_emoji=emoji, debug_enabled=debug)


@dataclass(slots=True)
class CLIState:
    """Per-invocation state handed from the global callback to subcommands."""

    settings: CrossfaderSettings
    inherited: Mapping[str, str]
    logger: CLILogger

    def build_dispatcher(self) -> CommandDispatcher:
        return CommandDispatcher(
            self.settings,
            inherited=self.inherited,
            trace=self.logger.debug,
        )


def get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise CLIError("crossfader global options were not initialised")
    return state


@contextmanager
def reporting_errors(logger: CLILogger) -> Iterator[None]:
    """Report crossfader failures on stderr and exit with the matching status."""

    try:
        yield
    except CrossfaderError as exc:
        error = CLIError.from_error(exc)
        logger.fail(str(error))
        raise typer.Exit(code=error.exit_code) from exc


__all__ = [
    "CLIError",
    "CLILogger",
    "CLIState",
    "build_cli_logger",
    "get_state",
    "reporting_errors",
]
