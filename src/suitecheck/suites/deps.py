# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Dependency suite: detect lockfile entries that could be deduplicated."""

from __future__ import annotations

import shlex

from .base import Suite, SuiteContext, SuiteOutcome


def run_deps(context: SuiteContext) -> SuiteOutcome:
    """Fail when the lockfile contains duplicate-resolvable entries.

    Skipped unless the manifest or the lockfile changed.
    """

    settings = context.settings
    if not context.scope.intersects(settings.manifest, settings.lockfile):
        return SuiteOutcome.nothing_to_do(f"{settings.manifest} and {settings.lockfile} are unchanged")
    args = [*settings.dedupe_command, "--list", "--fail", settings.lockfile]
    if context.invoke(args) == 0:
        return SuiteOutcome.success()
    fix_command = shlex.join([*settings.dedupe_command, settings.lockfile])
    guidance = (
        f"{settings.lockfile} contains duplicate entries. "
        f"Run `{fix_command}` and reinstall dependencies, then commit the updated lockfile."
    )
    return SuiteOutcome.failure(guidance)


SUITE = Suite(name="deps", run=run_deps, description="Check the lockfile for duplicate entries.")

__all__ = ["SUITE", "run_deps"]
