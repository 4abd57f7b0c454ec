# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console output for suite progress and the end-of-run summary."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from rich.console import Console
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

if TYPE_CHECKING:
    from .dispatch import SuiteRecord
    from .suites.base import SuiteOutcome

# level -> (emoji prefix, style)
_LEVELS: Final = MappingProxyType(
    {
        "info": ("ℹ️ ", "cyan"),
        "ok": ("✅ ", "green"),
        "skip": ("➖ ", "dim"),
        "warn": ("⚠️ ", "yellow"),
        "fail": ("❌ ", "red"),
    },
)


def _outcome_level(outcome: SuiteOutcome) -> str:
    if not outcome.passed:
        return "fail"
    return "skip" if outcome.skipped else "ok"


@dataclass(slots=True)
class Logger:
    """Console writer carrying the run's colour and emoji preferences.

    The Rich console is built once per logger. It writes to whatever
    ``sys.stdout`` is current at print time, so captured streams in tests and
    the CLI runner see its output.
    """

    use_emoji: bool = True
    use_color: bool = True
    console: Console = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.console = Console(
            color_system="auto" if self.use_color else None,
            no_color=not self.use_color,
            emoji=self.use_emoji,
            highlight=False,
            soft_wrap=True,
        )

    def _emit(self, level: str, message: str) -> None:
        prefix, style = _LEVELS[level]
        text = Text(f"{prefix}{message}" if self.use_emoji else message)
        if self.use_color:
            text.stylize(style)
        self.console.print(text)

    def section(self, title: str) -> None:
        if self.use_color and self.console.is_terminal:
            self.console.print()
            self.console.print(Rule(title))
        else:
            self.console.print(Text(f"\n--- {title} ---"))

    def info(self, message: str) -> None:
        self._emit("info", message)

    def ok(self, message: str) -> None:
        self._emit("ok", message)

    def warn(self, message: str) -> None:
        self._emit("warn", message)

    def fail(self, message: str) -> None:
        self._emit("fail", message)

    def suite_outcome(self, name: str, outcome: SuiteOutcome) -> None:
        """Print the one-line verdict for a finished suite."""

        level = _outcome_level(outcome)
        if level == "skip":
            self._emit("ok", f"{name}: nothing to do ({outcome.detail})")
        elif level == "ok":
            self._emit("ok", f"{name} passed")
        else:
            self._emit("fail", f"{name} failed: {outcome.detail}")

    def summary(self, records: Iterable[SuiteRecord]) -> None:
        """Print a table with one row per attempted suite."""

        labels = {"ok": "passed", "skip": "skipped", "fail": "failed"}
        table = Table(title="Suite summary", show_lines=False)
        table.add_column("Suite", style="bold")
        table.add_column("Result")
        table.add_column("Detail", overflow="fold")
        for record in records:
            level = _outcome_level(record.outcome)
            prefix = _LEVELS[level][0] if self.use_emoji else ""
            table.add_row(Text(record.name), Text(f"{prefix}{labels[level]}"), Text(record.outcome.detail))
        self.console.print()
        self.console.print(table)


__all__ = ["Logger"]
