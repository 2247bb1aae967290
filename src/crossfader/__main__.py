# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Allow ``python -m crossfader``."""

from __future__ import annotations

from .cli.app import run

run()
