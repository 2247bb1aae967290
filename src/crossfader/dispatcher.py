# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Top-level control flow for the ``shellinit``, ``list`` and ``exec`` operations."""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping, Sequence
from typing import Final, NoReturn

from .catalog import InstallationCatalog, render_catalog
from .config import CrossfaderSettings
from .environment import EnvironmentGuard, EnvironmentStore, ProcessEnvironment
from .errors import ExecLaunchError, UsageError
from .probe import RubyRuntimeProbe, RuntimeProbe
from .process_utils import resolve_executable
from .resolver import DerivedPaths, ResolutionSession
from .shell import activation_values, render_shellinit

Tracer = Callable[[str], None]
ExecFunction = Callable[[str, Sequence[str]], object]

SHELLINIT_COMMAND: Final[str] = "shellinit"
LIST_COMMAND: Final[str] = "list"
EXEC_COMMAND: Final[str] = "exec"


def _no_trace(_message: str) -> None:
    return None


class CommandDispatcher:
    """Run one crossfader operation against an injected environment and probe.

    ``inherited`` is the environment as it was when the process started;
    ``store`` is where writes land (``os.environ`` by
    default).
    """

    def __init__(
        self,
        settings: CrossfaderSettings,
        *,
        inherited: Mapping[str, str],
        store: EnvironmentStore | None = None,
        probe: RuntimeProbe | None = None,
        execv: ExecFunction | None = None,
        trace: Tracer | None = None,
    ) -> None:
        self._settings = settings
        self._inherited = inherited
        self._store = store if store is not None else ProcessEnvironment()
        self._guard = EnvironmentGuard(self._store)
        self._session = ResolutionSession(settings, inherited, probe or RubyRuntimeProbe())
        self._execv = execv or os.execv
        self._trace_sink = trace or _no_trace

    @property
    def session(self) -> ResolutionSession:
        return self._session

    def dispatch(self, argv: Sequence[str]) -> str:
        """Run the subcommand named by ``argv[0]`` and return its stdout payload.

        Entry point for callers holding a raw argument vector; the CLI routes
        an invocation without a subcommand here. ``exec`` does not return on
        success.

        Raises:
            UsageError: If ``argv`` is empty or names an unknown subcommand.
        """

        command = argv[0] if argv else ""
        rest = list(argv[1:])
        if command == SHELLINIT_COMMAND:
            return self.shellinit()
        if command == LIST_COMMAND:
            return self.list()
        if command == EXEC_COMMAND:
            self.exec(rest)
        raise UsageError(f"unknown crossfader subcommand `{command}`")

    def shellinit(self) -> str:
        """Return ``export`` statements activating the selected ruby and gemset."""

        paths = self._resolve()
        self._guard.preserve(self._inherited)
        for key, value in activation_values(paths, ruby=self._settings.ruby, gemset=self._settings.gemset).items():
            self._trace(f"{key}='{value}'")
        return render_shellinit(
            paths,
            ruby=self._settings.ruby,
            gemset=self._settings.gemset,
            shadows=self._guard.shadows(),
        )

    def list(self) -> str:
        """Return the installed rubies and gemsets as pretty-printed JSON."""

        catalog = InstallationCatalog(self._settings.home)
        self._trace(f"catalog={catalog.versions_dir}")
        return render_catalog(catalog.list())

    def exec(self, argv: Sequence[str]) -> NoReturn:
        """Replace the current process with ``argv`` inside the resolved environment.

        The five variables are written to the real environment before the
        launch is attempted and stay written if it fails.

        Raises:
            ExecLaunchError: If ``argv`` is empty or the command cannot be executed.
            RuntimeUnavailableError: If the selected ruby cannot be probed.
        """

        args = list(argv)
        if not args:
            raise ExecLaunchError(args, "no command given")

        paths = self._resolve()
        self._guard.preserve(self._inherited)
        for key, value in activation_values(paths, ruby=self._settings.ruby, gemset=self._settings.gemset).items():
            self._store.set(key, value)
            self._trace(f"{key}='{value}'")

        self._trace(f"Executing: {args!r}")
        executable = resolve_executable(args[0], search_path=paths.path)
        if executable is None:
            raise ExecLaunchError(args, "command not found on PATH")
        try:
            self._execv(executable, args)
        except OSError as exc:
            raise ExecLaunchError(args, exc.strerror or str(exc)) from exc
        raise ExecLaunchError(args, "process image was not replaced")

    def _resolve(self) -> DerivedPaths:
        paths = self._session.resolve()
        self._trace(f"prefix={paths.prefix}")
        self._trace(f"ruby={paths.runtime_executable}")
        identity = self._session.identity
        self._trace(f"engine={identity.engine} abi_version={identity.abi_version}")
        return paths

    def _trace(self, message: str) -> None:
        # Tracing is best-effort: a closed or broken stderr must not change the outcome.
        try:
            self._trace_sink(message)
        except (OSError, ValueError):
            return


__all__ = [
    "CommandDispatcher",
    "EXEC_COMMAND",
    "ExecFunction",
    "LIST_COMMAND",
    "SHELLINIT_COMMAND",
    "Tracer",
]
