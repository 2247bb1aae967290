# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Names and defaults shared across the crossfader package."""

from __future__ import annotations

from typing import Final

PROG_NAME: Final[str] = "crossfader"

DEFAULT_HOME: Final[str] = "/opt/crossfader"
DEFAULT_RUBY: Final[str] = "1.9.3-p448"
DEFAULT_GEMSET: Final[str] = "crossfader"
GLOBAL_GEMSET: Final[str] = "global"
UNKNOWN_BUILD: Final[str] = "UNKNOWN"
VERSION_FILENAME: Final[str] = "version.txt"

RUNTIME_FAMILY: Final[str] = "ruby"
RUNTIME_EXECUTABLE: Final[str] = "ruby"
# Interpreters that predate RUBY_ENGINE (1.8.7) report this engine.
FALLBACK_ENGINE: Final[str] = "ruby"

HOME_ENV: Final[str] = "CROSSFADER_HOME"
RUBY_ENV: Final[str] = "CROSSFADER_RUBY"
GEMSET_ENV: Final[str] = "CROSSFADER_GEMSET"
USER_HOME_ENV: Final[str] = "HOME"

PATH_ENV: Final[str] = "PATH"
GEM_HOME_ENV: Final[str] = "GEM_HOME"
GEM_PATH_ENV: Final[str] = "GEM_PATH"
MANAGED_KEYS: Final[tuple[str, ...]] = (PATH_ENV, GEM_HOME_ENV, GEM_PATH_ENV)
SELECTION_KEYS: Final[tuple[str, ...]] = (RUBY_ENV, GEMSET_ENV)


def shadow_key(key: str) -> str:
    """Return the variable that records the pre-crossfader value of ``key``."""

    return f"XFADE_{key}_ORIG"


SHADOW_KEYS: Final[tuple[str, ...]] = tuple(shadow_key(key) for key in MANAGED_KEYS)

__all__ = [
    "DEFAULT_GEMSET",
    "DEFAULT_HOME",
    "DEFAULT_RUBY",
    "FALLBACK_ENGINE",
    "GEMSET_ENV",
    "GEM_HOME_ENV",
    "GEM_PATH_ENV",
    "GLOBAL_GEMSET",
    "HOME_ENV",
    "MANAGED_KEYS",
    "PATH_ENV",
    "PROG_NAME",
    "RUBY_ENV",
    "RUNTIME_EXECUTABLE",
    "RUNTIME_FAMILY",
    "SELECTION_KEYS",
    "SHADOW_KEYS",
    "UNKNOWN_BUILD",
    "USER_HOME_ENV",
    "VERSION_FILENAME",
    "shadow_key",
]
