# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render resolved environments as Bourne shell ``export`` statements.

The output is meant to be evaluated by the caller's shell, for example
``eval "$(crossfader shellinit)"``.
"""

from __future__ import annotations

import shlex
from collections.abc import Iterable, Mapping

from .constants import GEM_HOME_ENV, GEM_PATH_ENV, GEMSET_ENV, PATH_ENV, RUBY_ENV
from .resolver import DerivedPaths


def activation_values(paths: DerivedPaths, *, ruby: str, gemset: str) -> dict[str, str]:
    """Return the five variables crossfader sets, in the order they are applied."""

    return {
        RUBY_ENV: ruby,
        GEMSET_ENV: gemset,
        PATH_ENV: paths.path,
        GEM_HOME_ENV: paths.gem_home,
        GEM_PATH_ENV: paths.gem_path,
    }


def export_line(key: str, value: str) -> str:
    return f"export {key}={shlex.quote(value)}"


def render_exports(items: Iterable[tuple[str, str]]) -> str:
    return "\n".join(export_line(key, value) for key, value in items)


def render_shellinit(
    paths: DerivedPaths,
    *,
    ruby: str,
    gemset: str,
    shadows: Mapping[str, str],
) -> str:
    """Return the shellinit script: shadows first, then managed and selection variables."""

    values = activation_values(paths, ruby=ruby, gemset=gemset)
    ordered = [
        *shadows.items(),
        (PATH_ENV, values[PATH_ENV]),
        (GEM_HOME_ENV, values[GEM_HOME_ENV]),
        (GEM_PATH_ENV, values[GEM_PATH_ENV]),
        (RUBY_ENV, values[RUBY_ENV]),
        (GEMSET_ENV, values[GEMSET_ENV]),
    ]
    return render_exports(ordered)


__all__ = ["activation_values", "export_line", "render_exports", "render_shellinit"]
