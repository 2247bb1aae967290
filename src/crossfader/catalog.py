# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Discover installed ruby versions and the gemsets available for each."""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from .constants import RUNTIME_FAMILY


class CatalogEntry(BaseModel):
    """One installed ruby version and its gemsets, both sorted."""

    model_config = ConfigDict(frozen=True)

    version: str
    gemsets: tuple[str, ...] = ()


def _child_directories(parent: Path) -> list[str]:
    """Return sorted names of visible subdirectories, or ``[]`` when ``parent`` is absent."""

    try:
        children = list(parent.iterdir())
    except (FileNotFoundError, NotADirectoryError):
        return []
    return sorted(child.name for child in children if child.is_dir() and not child.name.startswith("."))


class InstallationCatalog:
    """Read-only scan of ``<home>/versions/ruby``; every call re-reads the disk."""

    def __init__(self, home: Path) -> None:
        self._home = home

    @property
    def versions_dir(self) -> Path:
        return self._home / "versions" / RUNTIME_FAMILY

    def versions(self) -> list[str]:
        """Return installed ruby versions usable with ``--ruby``."""

        return _child_directories(self.versions_dir)

    def gemsets(self, version: str) -> list[str]:
        return _child_directories(self.versions_dir / version / "gemsets")

    def list(self) -> tuple[CatalogEntry, ...]:
        """Return every installed version with its gemsets, sorted at both levels."""

        return tuple(CatalogEntry(version=version, gemsets=tuple(self.gemsets(version))) for version in self.versions())


def catalog_payload(entries: Iterable[CatalogEntry]) -> dict[str, dict[str, dict[str, list[str]]]]:
    """Return the ``{"ruby": {version: {"gemsets": [...]}}}`` document."""

    return {RUNTIME_FAMILY: {entry.version: {"gemsets": list(entry.gemsets)} for entry in entries}}


def render_catalog(entries: Iterable[CatalogEntry]) -> str:
    return json.dumps(catalog_payload(entries), indent=2)


__all__ = ["CatalogEntry", "InstallationCatalog", "catalog_payload", "render_catalog"]
