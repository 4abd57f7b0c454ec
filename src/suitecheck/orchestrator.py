# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Wire configuration, scope resolution, dispatch and reporting together."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .config import ProjectSettings, RunConfig
from .dispatch import RunResult, run_suites
from .logging import Logger
from .runtime import VersionProbe, node_version_probe
from .scope import GitRunner, ScopeResolver, default_git_runner
from .suites import REGISTRY, select_suites
from .suites.base import Suite, SuiteContext, ToolRunner, default_tool_runner


@dataclass(slots=True)
class Collaborators:
    """External command runners used by a run; replaced in tests."""

    tools: ToolRunner = default_tool_runner
    git: GitRunner = default_git_runner
    node_probe: VersionProbe = field(default_factory=node_version_probe)


def run_checks(
    config: RunConfig,
    settings: ProjectSettings,
    *,
    logger: Logger | None = None,
    collaborators: Collaborators | None = None,
    registry: Sequence[Suite] = REGISTRY,
) -> RunResult:
    """Attempt every selected suite once and collect their outcomes.

    Args:
        config: Per-run options.
        settings: Repository layout and checker commands.
        logger: Output adapter; a default colour/emoji logger when omitted.
        collaborators: Command runners for checkers, git and Node.js.
        registry: Suites available for selection.

    Returns:
        RunResult: Outcomes for exactly the selected suites.

    Raises:
        UnknownSuiteError: If ``config.suites`` names an unregistered suite.
    """

    suites = select_suites(config.suites, registry)
    active_logger = logger or Logger()
    runners = collaborators or Collaborators()
    scope = ScopeResolver(
        config.mode,
        root=settings.root,
        base_branch=settings.base_branch,
        runner=runners.git,
    )
    context = SuiteContext(
        config=config,
        settings=settings,
        scope=scope,
        logger=active_logger,
        runner=runners.tools,
        node_probe=runners.node_probe,
    )
    active_logger.info(
        f"Checking {config.mode.describe()} for platform '{config.platform}': "
        f"{', '.join(suite.name for suite in suites)}",
    )
    return run_suites(suites, context)


__all__ = ["Collaborators", "run_checks"]
