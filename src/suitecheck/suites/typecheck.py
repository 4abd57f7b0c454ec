# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Type-check suite: whole-project static type checking."""

from __future__ import annotations

from .base import Suite, SuiteContext, SuiteOutcome


def run_type_check(context: SuiteContext) -> SuiteOutcome:
    """Type-check the entire project; file selection does not apply."""

    returncode = context.invoke(list(context.settings.type_check_command))
    return SuiteOutcome.from_returncode(returncode, failure="type checker reported errors")


SUITE = Suite(name="type-check", run=run_type_check, description="Type-check the whole project.")

__all__ = ["SUITE", "run_type_check"]
