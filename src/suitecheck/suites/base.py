# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared types used by every suite implementation."""

from __future__ import annotations

import shlex
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from ..config import ProjectSettings, RunConfig
from ..logging import Logger
from ..process import CommandOptions, run_command
from ..runtime import VersionProbe, node_version_probe
from ..scope import ScopeResolver

ToolRunner = Callable[[Sequence[str], Path], int]


def default_tool_runner(args: Sequence[str], cwd: Path) -> int:
    """Run a checker with inherited stdio and return its exit status."""

    return run_command(args, options=CommandOptions(cwd=cwd)).returncode


@dataclass(frozen=True, slots=True)
class SuiteOutcome:
    """Pass/fail verdict of a single suite.

    Attributes:
        passed: Whether the suite succeeded.
        detail: Optional explanation shown in the summary.
        skipped: ``True`` when the suite passed because it had nothing to do.
    """

    passed: bool
    detail: str = ""
    skipped: bool = False

    @classmethod
    def success(cls, detail: str = "") -> SuiteOutcome:
        return cls(passed=True, detail=detail)

    @classmethod
    def nothing_to_do(cls, detail: str) -> SuiteOutcome:
        return cls(passed=True, detail=detail, skipped=True)

    @classmethod
    def failure(cls, detail: str) -> SuiteOutcome:
        return cls(passed=False, detail=detail)

    @classmethod
    def from_returncode(cls, returncode: int, *, failure: str, success: str = "") -> SuiteOutcome:
        if returncode == 0:
            return cls.success(success)
        return cls.failure(f"{failure} (exit status {returncode})")


@dataclass(slots=True)
class SuiteContext:
    """Everything a suite needs to decide what to run and to run it."""

    config: RunConfig
    settings: ProjectSettings
    scope: ScopeResolver
    logger: Logger = field(default_factory=Logger)
    runner: ToolRunner = default_tool_runner
    node_probe: VersionProbe = field(default_factory=node_version_probe)

    @property
    def root(self) -> Path:
        return self.settings.root

    def invoke(self, args: Sequence[str], *, cwd: Path | None = None) -> int:
        """Echo and run a checker command, returning its exit status."""

        self.logger.info(f"$ {shlex.join(args)}")
        return self.runner(list(args), cwd or self.root)


SuiteFunction = Callable[[SuiteContext], SuiteOutcome]


@dataclass(frozen=True, slots=True)
class Suite:
    """A named check bound to the function that executes it.

    Attributes:
        name: Unique suite identifier used on the command line.
        run: Callable executing the suite.
        description: One-line summary for help output.
        default: Whether the suite runs when no suites are requested.
    """

    name: str
    run: SuiteFunction
    description: str = ""
    default: bool = True


__all__ = [
    "Suite",
    "SuiteContext",
    "SuiteFunction",
    "SuiteOutcome",
    "ToolRunner",
    "default_tool_runner",
]
