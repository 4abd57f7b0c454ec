# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Runtime version preconditions checked before launching a checker."""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from packaging.specifiers import SpecifierSet
from packaging.version import InvalidVersion, Version

from .process import CommandOptions, run_command

VersionProbe = Callable[[], str | None]

_VERSION_PATTERN = re.compile(r"(\d+(?:\.\d+)+)")


@dataclass(frozen=True, slots=True)
class PreconditionResult:
    """Outcome of a runtime version check."""

    satisfied: bool
    message: str


def normalize_version(raw: str | None) -> Version | None:
    """Return the version embedded in ``raw`` (``v20.11.1`` → ``20.11.1``)."""

    if not raw:
        return None
    match = _VERSION_PATTERN.search(raw)
    candidate = match.group(1) if match else raw.strip()
    try:
        return Version(candidate)
    except InvalidVersion:
        return None


def node_version_probe(command: Sequence[str] = ("node", "--version")) -> VersionProbe:
    """Return a probe reporting the first line printed by ``command``."""

    def _probe() -> str | None:
        completed = run_command(command, options=CommandOptions(capture_output=True))
        if completed.returncode != 0:
            return None
        output = (completed.stdout or "").strip()
        return output.splitlines()[0] if output else None

    return _probe


def check_runtime_version(
    probe: VersionProbe,
    required: SpecifierSet,
    *,
    runtime: str = "Node.js",
) -> PreconditionResult:
    """Verify the runtime reported by ``probe`` satisfies ``required``.

    Args:
        probe: Callable returning the raw version string of the runtime.
        required: Specifier set the version must match.
        runtime: Display name used in messages.

    Returns:
        PreconditionResult: Whether the precondition holds, with an
        actionable message either way.
    """

    raw = probe()
    version = normalize_version(raw)
    if version is None:
        return PreconditionResult(
            satisfied=False,
            message=f"Could not determine the {runtime} version (got {raw!r}); {runtime} {required} is required.",
        )
    if not required.contains(version, prereleases=True):
        return PreconditionResult(
            satisfied=False,
            message=(
                f"{runtime} {version} does not satisfy the required version {required}. "
                f"Switch to a matching {runtime} release before running the tests."
            ),
        )
    return PreconditionResult(satisfied=True, message=f"{runtime} {version} satisfies {required}")


__all__ = [
    "PreconditionResult",
    "VersionProbe",
    "check_runtime_version",
    "node_version_probe",
    "normalize_version",
]
