# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lint suite: zero-tolerance linting of changed source files."""

from __future__ import annotations

from .base import Suite, SuiteContext, SuiteOutcome


def run_lint(context: SuiteContext) -> SuiteOutcome:
    """Lint the source files in scope, failing on any warning."""

    settings = context.settings
    files = context.scope.relevant_files(settings.source_dir, settings.source_extensions)
    if files.is_empty:
        return SuiteOutcome.nothing_to_do("no changed source files to lint")
    args = [*settings.lint_command, "--max-warnings=0"]
    if context.config.fix:
        args.append("--fix")
    args.extend(files.arguments())
    return SuiteOutcome.from_returncode(context.invoke(args), failure="linter reported problems")


SUITE = Suite(name="lint", run=run_lint, description="Lint source files; any warning fails.")

__all__ = ["SUITE", "run_lint"]
