# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Select a ruby version and gemset and run commands inside that environment."""

from __future__ import annotations

from .catalog import CatalogEntry, InstallationCatalog
from .config import CrossfaderSettings, build_version
from .dispatcher import CommandDispatcher
from .environment import EnvironmentGuard, EnvironmentStore, MappingEnvironment, ProcessEnvironment
from .errors import CrossfaderError, ExecLaunchError, RuntimeUnavailableError, UsageError
from .probe import RubyRuntimeProbe, RuntimeIdentity, RuntimeProbe
from .resolver import DerivedPaths, ResolutionSession

__version__ = "0.4.0"

__all__ = [
    "CatalogEntry",
    "CommandDispatcher",
    "CrossfaderError",
    "CrossfaderSettings",
    "DerivedPaths",
    "EnvironmentGuard",
    "EnvironmentStore",
    "ExecLaunchError",
    "InstallationCatalog",
    "MappingEnvironment",
    "ProcessEnvironment",
    "ResolutionSession",
    "RubyRuntimeProbe",
    "RuntimeIdentity",
    "RuntimeProbe",
    "RuntimeUnavailableError",
    "UsageError",
    "__version__",
    "build_version",
]
