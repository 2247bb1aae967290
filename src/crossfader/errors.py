# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Custom exceptions raised while resolving and activating an environment."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class CrossfaderError(RuntimeError):
    """Base class for failures that terminate a crossfader invocation."""


class UsageError(CrossfaderError):
    """Raised when the command line does not name a usable subcommand."""


class RuntimeUnavailableError(CrossfaderError):
    """Raised when the selected ruby cannot be executed or answer a probe."""

    def __init__(self, executable: Path, reason: str, *, stderr: str | None = None) -> None:
        """Record the executable that failed and why.

        Args:
            executable: Interpreter path that was probed.
            reason: Short description of the failure.
            stderr: Diagnostic output captured from the interpreter, if any.
        """

        detail = f"ruby runtime unavailable at {executable}: {reason}"
        if stderr:
            detail = f"{detail} ({stderr.strip()})"
        super().__init__(detail)
        self.executable = executable
        self.reason = reason
        self.stderr = stderr


class ExecLaunchError(CrossfaderError):
    """Raised when ``exec`` cannot replace the process with the requested command."""

    def __init__(self, argv: Sequence[str], reason: str) -> None:
        command = argv[0] if argv else ""
        super().__init__(f"unable to exec `{command}`: {reason}")
        self.argv = tuple(argv)
        self.reason = reason


__all__ = [
    "CrossfaderError",
    "ExecLaunchError",
    "RuntimeUnavailableError",
    "UsageError",
]
