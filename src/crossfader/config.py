# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Invocation settings and build metadata for crossfader."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .constants import (
    DEFAULT_GEMSET,
    DEFAULT_HOME,
    DEFAULT_RUBY,
    GEMSET_ENV,
    HOME_ENV,
    RUBY_ENV,
    UNKNOWN_BUILD,
    VERSION_FILENAME,
)
from .errors import UsageError


class CrossfaderSettings(BaseModel):
    """Selections made for one invocation: where rubies live and which to use."""

    model_config = ConfigDict(frozen=True)

    home: Path = Field(default=Path(DEFAULT_HOME))
    ruby: str = DEFAULT_RUBY
    gemset: str = DEFAULT_GEMSET
    debug: bool = False

    @field_validator("ruby", "gemset")
    @classmethod
    def _reject_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        if "/" in value:
            raise ValueError("must be a single path component")
        return value

    @classmethod
    def from_environment(
        cls,
        env: Mapping[str, str],
        *,
        home: Path | str | None = None,
        ruby: str | None = None,
        gemset: str | None = None,
        debug: bool = False,
    ) -> CrossfaderSettings:
        """Build settings preferring explicit values, then ``env``, then defaults.

        Raises:
            UsageError: If a selection is blank or not a plain directory name.
        """

        try:
            return cls(
                home=Path(home if home is not None else env.get(HOME_ENV) or DEFAULT_HOME),
                ruby=ruby if ruby is not None else env.get(RUBY_ENV) or DEFAULT_RUBY,
                gemset=gemset if gemset is not None else env.get(GEMSET_ENV) or DEFAULT_GEMSET,
                debug=debug,
            )
        except ValidationError as exc:
            raise UsageError(_describe_validation_error(exc)) from exc


def _describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error["loc"]) or "settings"
        parts.append(f"--{location}: {error['msg']}")
    return "; ".join(parts)


def build_version(home: Path) -> str:
    """Return the first line of ``<home>/version.txt`` or ``UNKNOWN``."""

    version_file = home / VERSION_FILENAME
    try:
        with version_file.open(encoding="utf-8") as handle:
            first_line = handle.readline().rstrip("\r\n")
    except FileNotFoundError:
        return UNKNOWN_BUILD
    return first_line or UNKNOWN_BUILD


__all__ = ["CrossfaderSettings", "build_version"]
