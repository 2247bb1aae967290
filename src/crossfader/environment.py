# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Process environment access and preservation of pre-crossfader values."""

from __future__ import annotations

import os
from abc import abstractmethod
from collections.abc import Mapping, MutableMapping
from types import MappingProxyType
from typing import Protocol, runtime_checkable

from .constants import MANAGED_KEYS, shadow_key


@runtime_checkable
class EnvironmentStore(Protocol):
    """Key/value view of the environment inherited by child processes."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the value stored for ``key`` or ``None`` when unset."""
        raise NotImplementedError

    @abstractmethod
    def set_if_absent(self, key: str, value: str) -> bool:
        """Store ``value`` under ``key`` unless already present.

        Returns:
            bool: ``True`` when the value was written.
        """
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key`` unconditionally."""
        raise NotImplementedError


class MappingEnvironment(EnvironmentStore):
    """Environment store backed by an arbitrary mutable mapping."""

    def __init__(self, backing: MutableMapping[str, str] | None = None) -> None:
        self._backing: MutableMapping[str, str] = backing if backing is not None else {}

    @property
    def backing(self) -> MutableMapping[str, str]:
        """Return the mapping receiving writes."""

        return self._backing

    def get(self, key: str) -> str | None:
        return self._backing.get(key)

    def set_if_absent(self, key: str, value: str) -> bool:
        if key in self._backing:
            return False
        self._backing[key] = value
        return True

    def set(self, key: str, value: str) -> None:
        self._backing[key] = value


class ProcessEnvironment(MappingEnvironment):
    """Environment store writing to :data:`os.environ` so values reach children."""

    def __init__(self) -> None:
        super().__init__(os.environ)


def snapshot_environment(source: Mapping[str, str] | None = None) -> Mapping[str, str]:
    """Return a read-only copy of ``source`` (``os.environ`` when omitted)."""

    return MappingProxyType(dict(os.environ if source is None else source))


class EnvironmentGuard:
    """Record the original PATH, GEM_HOME and GEM_PATH under shadow names.

    Shadows are written on first exposure only. A nested invocation finds the
    shadow already present and leaves it alone, so the outermost process in an
    ``exec`` chain decides what "original" means for every descendant.
    """

    def __init__(self, store: EnvironmentStore) -> None:
        self._store = store

    def preserve(self, inherited: Mapping[str, str]) -> tuple[str, ...]:
        """Shadow each managed variable present in ``inherited``.

        Args:
            inherited: Environment snapshot captured when the process started.

        Returns:
            tuple[str, ...]: Shadow variable names written by this call.
        """

        written: list[str] = []
        for key in MANAGED_KEYS:
            value = inherited.get(key)
            if value is None:
                continue
            shadow = shadow_key(key)
            if self._store.set_if_absent(shadow, value):
                written.append(shadow)
        return tuple(written)

    def shadows(self) -> dict[str, str]:
        """Return shadow variables currently present in the store, in managed-key order."""

        present: dict[str, str] = {}
        for key in MANAGED_KEYS:
            shadow = shadow_key(key)
            value = self._store.get(shadow)
            if value is not None:
                present[shadow] = value
        return present


__all__ = [
    "EnvironmentGuard",
    "EnvironmentStore",
    "MappingEnvironment",
    "ProcessEnvironment",
    "snapshot_environment",
]
