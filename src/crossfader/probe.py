# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Ask the selected ruby interpreter for its engine and ABI version."""

from __future__ import annotations

import os
from abc import abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Protocol, runtime_checkable

from .constants import FALLBACK_ENGINE
from .errors import RuntimeUnavailableError
from .process_utils import SubprocessExecutionError, run_command

ENGINE_SCRIPT: Final[str] = f"puts defined?(RUBY_ENGINE) ? RUBY_ENGINE : %{{{FALLBACK_ENGINE}}}"
ABI_VERSION_SCRIPT: Final[str] = 'puts RbConfig::CONFIG["ruby_version"]'


@dataclass(frozen=True, slots=True)
class RuntimeIdentity:
    """Engine family and binary-compatibility version reported by an interpreter."""

    engine: str
    abi_version: str


@runtime_checkable
class RuntimeProbe(Protocol):
    """Capability that identifies an installed interpreter."""

    @abstractmethod
    def identify(self, executable: Path) -> RuntimeIdentity:
        """Return the identity of the interpreter at ``executable``.

        Raises:
            RuntimeUnavailableError: If the interpreter is missing or fails to answer.
        """
        raise NotImplementedError


class RubyRuntimeProbe(RuntimeProbe):
    """Identify a ruby by running two one-line scripts through it.

    Each answer is cached per executable after the first successful call.
    """

    def __init__(self) -> None:
        self._engines: dict[Path, str] = {}
        self._abi_versions: dict[Path, str] = {}

    def identify(self, executable: Path) -> RuntimeIdentity:
        return RuntimeIdentity(
            engine=self.engine(executable),
            abi_version=self.abi_version(executable),
        )

    def engine(self, executable: Path) -> str:
        """Return ``RUBY_ENGINE``, or ``ruby`` for interpreters that lack it."""

        if executable not in self._engines:
            self._engines[executable] = self._capture(executable, ("-e", ENGINE_SCRIPT))
        return self._engines[executable]

    def abi_version(self, executable: Path) -> str:
        """Return ``RbConfig::CONFIG["ruby_version"]`` (``1.9.1`` for a 1.9.3 ruby)."""

        if executable not in self._abi_versions:
            self._abi_versions[executable] = self._capture(
                executable,
                ("-rrbconfig", "-e", ABI_VERSION_SCRIPT),
            )
        return self._abi_versions[executable]

    @staticmethod
    def _capture(executable: Path, args: Sequence[str]) -> str:
        if not executable.is_file():
            raise RuntimeUnavailableError(executable, "executable not found")
        if not os.access(executable, os.X_OK):
            raise RuntimeUnavailableError(executable, "executable is not runnable")
        try:
            completed = run_command([str(executable), *args], capture_output=True)
        except SubprocessExecutionError as exc:
            raise RuntimeUnavailableError(
                executable,
                f"probe exited with status {exc.returncode}",
                stderr=exc.stderr,
            ) from exc
        except OSError as exc:
            raise RuntimeUnavailableError(executable, str(exc)) from exc
        except ValueError as exc:
            raise RuntimeUnavailableError(executable, "unreadable probe output") from exc

        output = (completed.stdout or "").strip()
        if not output:
            raise RuntimeUnavailableError(executable, "probe produced no output", stderr=completed.stderr)
        return output


__all__ = [
    "ABI_VERSION_SCRIPT",
    "ENGINE_SCRIPT",
    "RubyRuntimeProbe",
    "RuntimeIdentity",
    "RuntimeProbe",
]
