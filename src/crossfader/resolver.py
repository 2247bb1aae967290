# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Derive the ruby prefix, gem directories and composed environment values.

Every value is built by plain string concatenation from the selected home,
ruby version, gemset and the identity reported by the interpreter. The
functions at module level are pure; :class:`ResolutionSession` ties them to
one invocation and memoizes each result after its first computation.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from .config import CrossfaderSettings
from .constants import (
    GLOBAL_GEMSET,
    PATH_ENV,
    RUNTIME_EXECUTABLE,
    RUNTIME_FAMILY,
    USER_HOME_ENV,
    shadow_key,
)
from .probe import RuntimeIdentity, RuntimeProbe


class DerivedPaths(BaseModel):
    """Resolved locations and environment values for one ruby/gemset selection."""

    model_config = ConfigDict(frozen=True)

    prefix: str
    gem_system_dir: str
    runtime_executable: str
    path: str
    gem_home: str
    gem_path: str


def join_path_list(entries: Iterable[str]) -> str:
    """Join ``entries`` with the platform path-list separator."""

    return os.pathsep.join(entries)


def prefix_for(home: Path | str, version: str) -> str:
    """Return the installation prefix of ruby ``version`` under ``home``."""

    return f"{home}/versions/{RUNTIME_FAMILY}/{version}"


def runtime_executable_for(prefix: str) -> str:
    return f"{prefix}/bin/{RUNTIME_EXECUTABLE}"


def gemset_dir_for(prefix: str, gemset: str) -> str:
    """Return the gemset root, suitable for ``bundle install --path``.

    Not usable as ``GEM_HOME``: bundler appends ``<engine>/<abi>`` itself.
    """

    return f"{prefix}/gemsets/{gemset}"


def gem_dir_for(prefix: str, gemset: str, identity: RuntimeIdentity) -> str:
    """Return the ABI-qualified gem directory of ``gemset``."""

    return f"{gemset_dir_for(prefix, gemset)}/{identity.engine}/{identity.abi_version}"


def gem_system_dir_for(prefix: str, identity: RuntimeIdentity) -> str:
    """Return where the interpreter keeps its bundled gems (bigdecimal, json, ...)."""

    return f"{prefix}/lib/{identity.engine}/gems/{identity.abi_version}"


def user_gem_dir_for(user_home: str, identity: RuntimeIdentity) -> str:
    return f"{user_home}/.gem/{identity.engine}/{identity.abi_version}"


def compose_gem_path(prefix: str, identity: RuntimeIdentity, user_home: str | None) -> str:
    """Return ``GEM_PATH``: global gemset, system gems, then the per-user cache."""

    entries = [gem_dir_for(prefix, GLOBAL_GEMSET, identity), gem_system_dir_for(prefix, identity)]
    if user_home:
        entries.append(user_gem_dir_for(user_home, identity))
    return join_path_list(entries)


def compose_search_path(
    home: Path | str,
    prefix: str,
    gem_home: str,
    identity: RuntimeIdentity,
    original_path: str | None,
) -> str:
    """Return ``PATH`` with crossfader locations ahead of the original search path.

    Order: crossfader's own ``bin``, the selected gemset, the global gemset,
    the ruby prefix, then ``original_path``.
    """

    entries = [
        f"{home}/bin",
        f"{gem_home}/bin",
        f"{gem_dir_for(prefix, GLOBAL_GEMSET, identity)}/bin",
        f"{prefix}/bin",
    ]
    if original_path:
        entries.append(original_path)
    return join_path_list(entries)


def original_search_path(inherited: Mapping[str, str]) -> str | None:
    """Return the pre-crossfader ``PATH``: its shadow when present, else ``PATH``."""

    shadowed = inherited.get(shadow_key(PATH_ENV))
    if shadowed is not None:
        return shadowed
    return inherited.get(PATH_ENV)


class ResolutionSession:
    """Lazily resolved view of one invocation's ruby/gemset selection.

    ``inherited`` is never modified; the interpreter is probed at most once.
    """

    def __init__(
        self,
        settings: CrossfaderSettings,
        inherited: Mapping[str, str],
        probe: RuntimeProbe,
    ) -> None:
        self._settings = settings
        self._inherited = inherited
        self._probe = probe
        self._prefix: str | None = None
        self._identity: RuntimeIdentity | None = None
        self._gem_home: str | None = None
        self._gem_path: str | None = None
        self._search_path: str | None = None
        self._paths: DerivedPaths | None = None

    @property
    def settings(self) -> CrossfaderSettings:
        return self._settings

    @property
    def inherited(self) -> Mapping[str, str]:
        return self._inherited

    @property
    def prefix(self) -> str:
        if self._prefix is None:
            self._prefix = prefix_for(self._settings.home, self._settings.ruby)
        return self._prefix

    @property
    def runtime_executable(self) -> str:
        return runtime_executable_for(self.prefix)

    @property
    def identity(self) -> RuntimeIdentity:
        """Return the interpreter identity, probing on first access.

        Raises:
            RuntimeUnavailableError: If the selected ruby cannot be probed.
        """

        if self._identity is None:
            self._identity = self._probe.identify(Path(self.runtime_executable))
        return self._identity

    def gemset_dir(self, gemset: str) -> str:
        return gemset_dir_for(self.prefix, gemset)

    def gem_dir(self, gemset: str) -> str:
        return gem_dir_for(self.prefix, gemset, self.identity)

    @property
    def gem_system_dir(self) -> str:
        return gem_system_dir_for(self.prefix, self.identity)

    @property
    def gem_home(self) -> str:
        if self._gem_home is None:
            self._gem_home = self.gem_dir(self._settings.gemset)
        return self._gem_home

    @property
    def gem_path(self) -> str:
        if self._gem_path is None:
            self._gem_path = compose_gem_path(
                self.prefix,
                self.identity,
                self._inherited.get(USER_HOME_ENV),
            )
        return self._gem_path

    @property
    def search_path(self) -> str:
        if self._search_path is None:
            self._search_path = compose_search_path(
                self._settings.home,
                self.prefix,
                self.gem_home,
                self.identity,
                original_search_path(self._inherited),
            )
        return self._search_path

    def resolve(self) -> DerivedPaths:
        """Return every derived value, probing the interpreter if needed."""

        if self._paths is None:
            self._paths = DerivedPaths(
                prefix=self.prefix,
                gem_system_dir=self.gem_system_dir,
                runtime_executable=self.runtime_executable,
                path=self.search_path,
                gem_home=self.gem_home,
                gem_path=self.gem_path,
            )
        return self._paths


__all__ = [
    "DerivedPaths",
    "ResolutionSession",
    "compose_gem_path",
    "compose_search_path",
    "gem_dir_for",
    "gem_system_dir_for",
    "gemset_dir_for",
    "join_path_list",
    "original_search_path",
    "prefix_for",
    "runtime_executable_for",
    "user_gem_dir_for",
]
