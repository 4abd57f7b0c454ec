# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Formatting suite: report (or rewrite) files whose formatting is stale."""

from __future__ import annotations

from .base import Suite, SuiteContext, SuiteOutcome


def run_formatting(context: SuiteContext) -> SuiteOutcome:
    """Check formatting of the files in scope.

    Without ``--fix`` the formatter lists files whose formatted output differs
    from disk and any listed file fails the suite. With ``--fix`` the files are
    rewritten in place and only a formatter error fails the suite.
    """

    settings = context.settings
    files = context.scope.relevant_files(settings.source_dir, settings.format_extensions)
    if files.is_empty:
        return SuiteOutcome.nothing_to_do("no changed files to format")
    mode_flag = "--write" if context.config.fix else "--list-different"
    args = [*settings.format_command, mode_flag, *files.arguments()]
    failure = "formatter failed" if context.config.fix else "files are not formatted; re-run with --fix"
    return SuiteOutcome.from_returncode(context.invoke(args), failure=failure)


SUITE = Suite(name="formatting", run=run_formatting, description="Check source formatting.")

__all__ = ["SUITE", "run_formatting"]
