# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the shellinit/list/exec control flow."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

import pytest

from crossfader.config import CrossfaderSettings
from crossfader.dispatcher import CommandDispatcher
from crossfader.environment import MappingEnvironment
from crossfader.errors import ExecLaunchError, RuntimeUnavailableError, UsageError


class Replaced(Exception):
    """Raised by the fake exec to stand in for a replaced process image."""

    def __init__(self, path: str, argv: Sequence[str]) -> None:
        super().__init__(path)
        self.path = path
        self.argv = list(argv)


def fake_execv(path: str, argv: Sequence[str]) -> None:
    raise Replaced(path, argv)


def _dispatcher(ruby_home, inherited, store, **kwargs) -> CommandDispatcher:
    settings = CrossfaderSettings(home=ruby_home.root, ruby=ruby_home.version, gemset="crossfader")
    return CommandDispatcher(settings, inherited=inherited, store=store, **kwargs)


def test_exec_sets_environment_then_replaces_process(ruby_home) -> None:
    puppet = ruby_home.add_executable("puppet")
    inherited = {"PATH": "/usr/bin:/bin", "HOME": "/home/tester"}
    store = MappingEnvironment(dict(inherited))
    dispatcher = _dispatcher(ruby_home, inherited, store, execv=fake_execv)

    with pytest.raises(Replaced) as excinfo:
        dispatcher.exec(["puppet", "--version"])

    paths = dispatcher.session.resolve()
    assert excinfo.value.path == str(puppet)
    assert excinfo.value.argv == ["puppet", "--version"]
    assert store.get("PATH") == paths.path
    assert store.get("GEM_HOME") == paths.gem_home
    assert store.get("GEM_PATH") == paths.gem_path
    assert store.get("CROSSFADER_RUBY") == ruby_home.version
    assert store.get("CROSSFADER_GEMSET") == "crossfader"
    assert store.get("XFADE_PATH_ORIG") == "/usr/bin:/bin"


def test_exec_failure_leaves_environment_written(ruby_home) -> None:
    ruby_home.add_executable("broken")
    store = MappingEnvironment()

    def refusing_execv(path: str, argv: Sequence[str]) -> None:
        raise PermissionError(13, "Permission denied")

    dispatcher = _dispatcher(ruby_home, {"PATH": "/usr/bin"}, store, execv=refusing_execv)

    with pytest.raises(ExecLaunchError, match="Permission denied") as excinfo:
        dispatcher.exec(["broken"])

    assert excinfo.value.argv == ("broken",)
    assert store.get("GEM_HOME") is not None
    assert store.get("PATH") == dispatcher.session.search_path


def test_exec_unknown_command(ruby_home) -> None:
    store = MappingEnvironment()
    dispatcher = _dispatcher(ruby_home, {"PATH": str(ruby_home.root / "empty")}, store, execv=fake_execv)

    with pytest.raises(ExecLaunchError, match="not found"):
        dispatcher.exec(["definitely-not-installed-anywhere"])

    assert store.get("CROSSFADER_RUBY") == ruby_home.version


def test_exec_without_command_mutates_nothing(ruby_home) -> None:
    store = MappingEnvironment()

    with pytest.raises(ExecLaunchError, match="no command"):
        _dispatcher(ruby_home, {"PATH": "/usr/bin"}, store, execv=fake_execv).exec([])

    assert store.backing == {}
    assert ruby_home.probe_calls() == []


def test_missing_runtime_aborts_before_any_write(tmp_path: Path) -> None:
    store = MappingEnvironment()
    settings = CrossfaderSettings(home=tmp_path, ruby="1.9.3-p448")
    dispatcher = CommandDispatcher(settings, inherited={"PATH": "/usr/bin"}, store=store, execv=fake_execv)

    with pytest.raises(RuntimeUnavailableError):
        dispatcher.exec(["true"])
    with pytest.raises(RuntimeUnavailableError):
        dispatcher.shellinit()

    assert store.backing == {}


def test_nested_exec_does_not_grow_path(ruby_home) -> None:
    ruby_home.add_executable("puppet")
    outer_inherited = {"PATH": "/usr/bin:/bin"}
    outer_store = MappingEnvironment(dict(outer_inherited))
    with pytest.raises(Replaced):
        _dispatcher(ruby_home, outer_inherited, outer_store, execv=fake_execv).exec(["puppet"])

    inner_inherited = dict(outer_store.backing)
    inner_store = MappingEnvironment(dict(inner_inherited))
    with pytest.raises(Replaced):
        _dispatcher(ruby_home, inner_inherited, inner_store, execv=fake_execv).exec(["puppet"])

    assert inner_store.get("PATH") == outer_store.get("PATH")
    assert inner_store.get("XFADE_PATH_ORIG") == "/usr/bin:/bin"


def test_shellinit_preserves_shadows_but_not_managed_values(ruby_home) -> None:
    inherited = {"PATH": "/usr/bin", "GEM_HOME": "/old/gems"}
    store = MappingEnvironment(dict(inherited))

    script = _dispatcher(ruby_home, inherited, store).shellinit()

    assert store.backing == {
        "PATH": "/usr/bin",
        "GEM_HOME": "/old/gems",
        "XFADE_PATH_ORIG": "/usr/bin",
        "XFADE_GEM_HOME_ORIG": "/old/gems",
    }
    lines = script.splitlines()
    assert lines[0] == "export XFADE_PATH_ORIG=/usr/bin"
    assert lines[1] == "export XFADE_GEM_HOME_ORIG=/old/gems"
    assert lines[2].startswith(f"export PATH={ruby_home.root}/bin:")


def test_list_reports_installed_versions(ruby_home) -> None:
    payload = _dispatcher(ruby_home, {}, MappingEnvironment()).list()

    assert json.loads(payload) == {"ruby": {ruby_home.version: {"gemsets": ["crossfader", "global"]}}}
    assert ruby_home.probe_calls() == []


@pytest.mark.parametrize("argv", [[], ["bogus"], ["Shellinit"]])
def test_dispatch_rejects_unknown_subcommands(ruby_home, argv: list[str]) -> None:
    store = MappingEnvironment()

    with pytest.raises(UsageError, match="unknown crossfader subcommand"):
        _dispatcher(ruby_home, {"PATH": "/usr/bin"}, store).dispatch(argv)

    assert store.backing == {}


def test_dispatch_routes_to_operations(ruby_home) -> None:
    ruby_home.add_executable("rake")
    dispatcher = _dispatcher(ruby_home, {"PATH": "/usr/bin"}, MappingEnvironment(), execv=fake_execv)

    assert dispatcher.dispatch(["shellinit"]).startswith("export ")
    assert json.loads(dispatcher.dispatch(["list"]))["ruby"]
    with pytest.raises(Replaced) as excinfo:
        dispatcher.dispatch(["exec", "rake", "-T"])
    assert excinfo.value.argv == ["rake", "-T"]


def test_trace_receives_resolved_values(ruby_home) -> None:
    ruby_home.add_executable("gem")
    messages: list[str] = []
    dispatcher = _dispatcher(
        ruby_home,
        {"PATH": "/usr/bin"},
        MappingEnvironment(),
        execv=fake_execv,
        trace=messages.append,
    )

    with pytest.raises(Replaced):
        dispatcher.exec(["gem", "list"])

    assert f"CROSSFADER_RUBY='{ruby_home.version}'" in messages
    assert any(message.startswith("GEM_HOME=") for message in messages)
    assert messages[-1] == "Executing: ['gem', 'list']"


def test_broken_trace_sink_does_not_change_outcome(ruby_home) -> None:
    def broken_sink(message: str) -> None:
        raise BrokenPipeError(32, "Broken pipe")

    dispatcher = _dispatcher(ruby_home, {"PATH": "/usr/bin"}, MappingEnvironment(), trace=broken_sink)

    assert "export GEM_HOME=" in dispatcher.shellinit()
