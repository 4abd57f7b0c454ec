# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Test-run suite: JavaScript unit tests scoped by selection mode and platform."""

from __future__ import annotations

from ..config import AllFiles, BranchChanges, DiffAgainst
from ..platforms import platforms_for
from ..runtime import check_runtime_version
from .base import Suite, SuiteContext, SuiteOutcome

SUITE_NAME = "test-run"


def build_test_arguments(context: SuiteContext) -> list[str] | None:
    """Return the test runner command for the run, or ``None`` when nothing is related.

    The selection mode is interpreted here rather than through a file list:
    all files run everything, branch mode delegates change detection to the
    runner, and diff mode asks for tests related to the changed sources.
    """

    settings = context.settings
    config = context.config
    platforms = platforms_for(SUITE_NAME, config.platform)
    args = [*settings.test_command, "--selectProjects", *platforms]
    if config.coverage and not isinstance(config.mode, AllFiles):
        context.logger.warn("Coverage is only collected with --all-files; ignoring --coverage.")

    match config.mode:
        case AllFiles():
            if config.coverage:
                args.append("--coverage")
        case BranchChanges():
            base = context.scope.base_ref()
            args.extend(["--passWithNoTests", "--changedSince", str(base)])
        case DiffAgainst():
            related = context.scope.relevant_files(settings.source_dir, settings.source_extensions)
            if related.is_empty:
                return None
            args.extend(["--passWithNoTests", "--findRelatedTests", *related.arguments()])
    return args


def run_test_run(context: SuiteContext) -> SuiteOutcome:
    """Run the unit tests after verifying the Node.js version."""

    args = build_test_arguments(context)
    if args is None:
        return SuiteOutcome.nothing_to_do("no changed source files have related tests")
    precondition = check_runtime_version(context.node_probe, context.settings.node_specifier)
    if not precondition.satisfied:
        return SuiteOutcome.failure(precondition.message)
    return SuiteOutcome.from_returncode(context.invoke(args), failure="tests failed")


SUITE = Suite(name=SUITE_NAME, run=run_test_run, description="Run unit tests for the selected platforms.")

__all__ = ["SUITE", "build_test_arguments", "run_test_run"]
