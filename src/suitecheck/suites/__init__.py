# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Suite registry in execution and report order."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Final

from . import deps, formatting, lint, native, testrun, typecheck
from .base import Suite, SuiteContext, SuiteOutcome


class UnknownSuiteError(ValueError):
    """Raised when a requested suite name is not registered."""

    def __init__(self, names: Sequence[str], available: Iterable[str]) -> None:
        self.names = tuple(names)
        self.available = tuple(available)
        super().__init__(f"Unknown suite(s): {', '.join(self.names)}. Choose from: {', '.join(self.available)}")


REGISTRY: Final[tuple[Suite, ...]] = (
    native.SUITE,
    typecheck.SUITE,
    lint.SUITE,
    testrun.SUITE,
    formatting.SUITE,
    deps.SUITE,
)


def suite_names(registry: Sequence[Suite] = REGISTRY) -> tuple[str, ...]:
    return tuple(suite.name for suite in registry)


def default_suites(registry: Sequence[Suite] = REGISTRY) -> tuple[Suite, ...]:
    """Return the suites that run when none are requested explicitly."""

    return tuple(suite for suite in registry if suite.default)


def select_suites(requested: Sequence[str], registry: Sequence[Suite] = REGISTRY) -> tuple[Suite, ...]:
    """Return the suites to attempt for ``requested`` names.

    Args:
        requested: Suite names in request order; duplicates are ignored and an
            empty sequence selects the default suites.
        registry: Suites available for selection.

    Returns:
        tuple[Suite, ...]: Exactly the requested suites, in request order.

    Raises:
        UnknownSuiteError: If any requested name is not registered.
    """

    if not requested:
        return default_suites(registry)
    by_name = {suite.name: suite for suite in registry}
    unknown = [name for name in requested if name not in by_name]
    if unknown:
        raise UnknownSuiteError(unknown, by_name)
    return tuple(by_name[name] for name in dict.fromkeys(requested))


__all__ = [
    "REGISTRY",
    "Suite",
    "SuiteContext",
    "SuiteOutcome",
    "UnknownSuiteError",
    "default_suites",
    "select_suites",
    "suite_names",
]
