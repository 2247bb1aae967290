# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from crossfader.constants import MANAGED_KEYS, SELECTION_KEYS, SHADOW_KEYS, HOME_ENV
from crossfader.probe import RuntimeIdentity

RUBY_VERSION = "1.9.3-p448"
FAKE_RUBY = """#!/bin/sh
echo "$*" >> "{log}"
case "$1" in
  -rrbconfig) echo {abi} ;;
  *) echo {engine} ;;
esac
"""


@dataclass
class FakeProbe:
    """Probe returning a canned identity and recording every call."""

    identity: RuntimeIdentity = field(default_factory=lambda: RuntimeIdentity(engine="ruby", abi_version="1.9.1"))
    calls: list[Path] = field(default_factory=list)

    def identify(self, executable: Path) -> RuntimeIdentity:
        self.calls.append(executable)
        return self.identity


@dataclass
class RubyHome:
    """On-disk crossfader home with one installed ruby."""

    root: Path
    version: str
    probe_log: Path

    @property
    def prefix(self) -> Path:
        return self.root / "versions" / "ruby" / self.version

    @property
    def ruby(self) -> Path:
        return self.prefix / "bin" / "ruby"

    def probe_calls(self) -> list[str]:
        if not self.probe_log.exists():
            return []
        return self.probe_log.read_text(encoding="utf-8").splitlines()

    def add_executable(self, name: str, body: str = "exit 0\n") -> Path:
        target = self.prefix / "bin" / name
        target.write_text(f"#!/bin/sh\n{body}", encoding="utf-8")
        target.chmod(0o755)
        return target


def write_fake_ruby(target: Path, *, log: Path, engine: str = "ruby", abi: str = "1.9.1") -> Path:
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(FAKE_RUBY.format(log=log, engine=engine, abi=abi), encoding="utf-8")
    target.chmod(0o755)
    return target


@pytest.fixture
def fake_probe() -> FakeProbe:
    return FakeProbe()


@pytest.fixture
def ruby_home(tmp_path: Path) -> RubyHome:
    """Return a home with ruby 1.9.3-p448 whose interpreter is a shell script."""

    home = RubyHome(root=tmp_path / "crossfader", version=RUBY_VERSION, probe_log=tmp_path / "probe.log")
    write_fake_ruby(home.ruby, log=home.probe_log)
    (home.prefix / "gemsets" / "global").mkdir(parents=True)
    (home.prefix / "gemsets" / "crossfader").mkdir(parents=True)
    return home


@pytest.fixture
def isolated_environ(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Give the process a known PATH/HOME and restore every crossfader variable afterwards."""

    for key in (*MANAGED_KEYS, *SELECTION_KEYS, *SHADOW_KEYS, HOME_ENV):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("PATH", "/usr/bin:/bin")
    monkeypatch.setenv("HOME", "/home/tester")
    return {"PATH": "/usr/bin:/bin", "HOME": "/home/tester"}


@pytest.fixture
def make_fake_ruby():
    """Return a factory writing interpreter stand-ins at arbitrary paths."""

    return write_fake_ruby
