# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Sequential suite dispatch with per-suite failure isolation."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .config import ConfigError
from .process import SubprocessExecutionError, ToolInvocationError
from .suites.base import Suite, SuiteContext, SuiteOutcome

# Collaborator failures that count against the suite that raised them.
SUITE_ERRORS = (ToolInvocationError, SubprocessExecutionError, ConfigError, OSError, ValueError)


@dataclass(frozen=True, slots=True)
class SuiteRecord:
    """Outcome recorded for one attempted suite."""

    name: str
    outcome: SuiteOutcome

    @property
    def passed(self) -> bool:
        return self.outcome.passed


@dataclass(slots=True)
class RunResult:
    """Ordered outcomes of every suite attempted in a run."""

    records: list[SuiteRecord] = field(default_factory=list)

    def add(self, name: str, outcome: SuiteOutcome) -> None:
        self.records.append(SuiteRecord(name=name, outcome=outcome))

    @property
    def attempted(self) -> list[str]:
        return [record.name for record in self.records]

    @property
    def failed(self) -> list[str]:
        return [record.name for record in self.records if not record.passed]

    @property
    def ok(self) -> bool:
        return not self.failed

    def exit_code(self) -> int:
        return 0 if self.ok else 1


def run_suite(suite: Suite, context: SuiteContext) -> SuiteOutcome:
    """Run ``suite`` and convert collaborator errors into a failed outcome."""

    try:
        return suite.run(context)
    except SUITE_ERRORS as exc:
        return SuiteOutcome.failure(str(exc))


def run_suites(suites: Sequence[Suite], context: SuiteContext) -> RunResult:
    """Attempt every suite in order, continuing past failures.

    Args:
        suites: Suites to attempt, in execution order.
        context: Shared run context handed to each suite.

    Returns:
        RunResult: One record per suite in ``suites``.
    """

    result = RunResult()
    for suite in suites:
        context.logger.section(suite.name)
        outcome = run_suite(suite, context)
        context.logger.suite_outcome(suite.name, outcome)
        result.add(suite.name, outcome)
    return result


__all__ = ["RunResult", "SUITE_ERRORS", "SuiteRecord", "run_suite", "run_suites"]
