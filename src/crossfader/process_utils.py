# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shell-free wrappers around ``subprocess`` used to interrogate interpreters."""

from __future__ import annotations

import shutil

# Bandit: interpreters are invoked with argument lists only, never via a shell.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from subprocess import CompletedProcess as _CompletedProcess  # nosec B404


class SubprocessExecutionError(RuntimeError):
    """Raised when a subprocess exits with a non-zero status while ``check`` is true."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        stdout: str | None,
        stderr: str | None,
    ) -> None:
        super().__init__(
            f"Command '{command[0]}' exited with status {returncode}. stderr: {stderr or '<none>'}",
        )
        self.command = tuple(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


def resolve_executable(head: str, *, search_path: str | None = None) -> str | None:
    """Return an absolute executable for ``head`` or ``None`` when it cannot be found.

    Names containing a path separator are taken as given; bare names are looked
    up on ``search_path`` (``PATH`` of the current process when omitted).
    """

    if Path(head).is_absolute() or "/" in head:
        return head
    return shutil.which(head, path=search_path)


def _normalize_args(args: Sequence[str]) -> list[str]:
    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    resolved = resolve_executable(head)
    if resolved is None:
        msg = f"Executable '{head}' was not found on PATH"
        raise FileNotFoundError(msg)
    return [resolved, *rest]


def run_command(
    args: Sequence[str],
    *,
    env: Mapping[str, str] | None = None,
    check: bool = True,
    capture_output: bool = False,
    text: bool = True,
) -> _CompletedProcess[str]:
    """Execute *args* after normalising the executable path.

    No timeout is applied; a hung interpreter blocks the caller.
    """

    normalized = _normalize_args(args)
    # Bandit: argument lists are passed straight through without shell expansion.
    completed: _CompletedProcess[str] = subprocess.run(  # nosec B603
        normalized,
        env=dict(env) if env is not None else None,
        check=False,
        capture_output=capture_output,
        text=text,
        stdin=subprocess.DEVNULL,
    )

    if check and completed.returncode != 0:
        raise SubprocessExecutionError(
            normalized,
            completed.returncode,
            completed.stdout if isinstance(completed.stdout, str) else None,
            completed.stderr if isinstance(completed.stderr, str) else None,
        )

    return completed


__all__ = ["SubprocessExecutionError", "resolve_executable", "run_command"]
