# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

import pytest

from suitecheck.config import BranchChanges, ProjectSettings, RunConfig
from suitecheck.logging import Logger
from suitecheck.scope import ScopeResolver
from suitecheck.suites.base import SuiteContext


def git_subcommand(cmd: Sequence[str]) -> str:
    """Return the git subcommand of ``cmd``, skipping ``-c key=value`` options."""

    args = list(cmd[1:])
    while args and args[0] == "-c":
        args = args[2:]
    return args[0] if args else ""


class FakeGit:
    """Git runner answering ``merge-base`` and ``diff`` from canned data."""

    def __init__(self, changed: Iterable[str] = (), *, merge_base: str = "abc123") -> None:
        self.changed = list(changed)
        self.merge_base = merge_base
        self.calls: list[tuple[str, ...]] = []

    def __call__(self, cmd: Sequence[str], root: Path) -> list[str]:
        self.calls.append(tuple(cmd))
        subcommand = git_subcommand(cmd)
        if subcommand == "merge-base":
            return [self.merge_base]
        if subcommand == "diff":
            return list(self.changed)
        return []

    @property
    def diff_calls(self) -> list[tuple[str, ...]]:
        return [call for call in self.calls if git_subcommand(call) == "diff"]


class FakeTools:
    """Checker runner that records invocations and returns scripted statuses.

    ``fail_on`` maps a token to the exit statuses returned, in order, for
    commands containing that token; the last status repeats.
    """

    def __init__(self, fail_on: dict[str, list[int]] | None = None) -> None:
        self.fail_on = {token: list(codes) for token, codes in (fail_on or {}).items()}
        self.calls: list[tuple[tuple[str, ...], Path]] = []

    def __call__(self, args: Sequence[str], cwd: Path) -> int:
        self.calls.append((tuple(args), cwd))
        for token, codes in self.fail_on.items():
            if token in args:
                return codes.pop(0) if len(codes) > 1 else codes[0]
        return 0

    @property
    def commands(self) -> list[tuple[str, ...]]:
        return [args for args, _ in self.calls]


ContextFactory = Callable[..., SuiteContext]


@pytest.fixture
def settings(tmp_path: Path) -> ProjectSettings:
    return ProjectSettings(root=tmp_path)


@pytest.fixture
def fake_git() -> type[FakeGit]:
    return FakeGit


@pytest.fixture
def fake_tools() -> type[FakeTools]:
    return FakeTools


@pytest.fixture
def make_context(settings: ProjectSettings) -> ContextFactory:
    """Return a factory building a :class:`SuiteContext` around fakes."""

    def _factory(
        config: RunConfig | None = None,
        *,
        changed: Iterable[str] = (),
        tools: FakeTools | None = None,
        git: FakeGit | None = None,
        node_version: str | None = "v20.11.1",
    ) -> SuiteContext:
        run_config = config or RunConfig(mode=BranchChanges())
        git_runner = git or FakeGit(changed)
        scope = ScopeResolver(
            run_config.mode,
            root=settings.root,
            base_branch=settings.base_branch,
            runner=git_runner,
        )
        return SuiteContext(
            config=run_config,
            settings=settings,
            scope=scope,
            logger=Logger(use_emoji=False, use_color=False),
            runner=tools or FakeTools(),
            node_probe=lambda: node_version,
        )

    return _factory
