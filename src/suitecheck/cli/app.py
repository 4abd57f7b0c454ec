# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command-line entry point for suitecheck."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ..config import (
    AllFiles,
    BranchChanges,
    ConfigError,
    DiffAgainst,
    PlatformTarget,
    RunConfig,
    SelectionMode,
    load_settings,
)
from ..logging import Logger
from ..orchestrator import Collaborators, run_checks
from ..reporting import report
from ..suites import REGISTRY, UnknownSuiteError, suite_names

USAGE_EXIT_CODE = 2

_SUITE_HELP = "Suites to run (default: all). One or more of: " + ", ".join(suite.name for suite in REGISTRY)


app = typer.Typer(
    name="suitecheck",
    help="Run the repository's check suites against changed or all files.",
    add_completion=False,
    no_args_is_help=False,
    pretty_exceptions_enable=False,
)


def _validate_suites(values: list[str] | None) -> list[str]:
    requested = list(values or [])
    unknown = [name for name in requested if name not in suite_names()]
    if unknown:
        raise typer.BadParameter(str(UnknownSuiteError(unknown, suite_names())))
    return requested


def resolve_mode(*, all_files: bool, diff: str | None) -> SelectionMode:
    """Map the file-selection flags onto a :data:`SelectionMode`."""

    if diff is not None:
        if all_files:
            raise typer.BadParameter("--diff cannot be combined with --all-files or --all", param_hint="--diff")
        if not diff.strip():
            raise typer.BadParameter("expected a commit-ish", param_hint="--diff")
        return DiffAgainst(diff.strip())
    if all_files:
        return AllFiles()
    return BranchChanges()


def resolve_platform(*, everything: bool, platform: PlatformTarget | None) -> PlatformTarget:
    """Return the platform target, honouring the ``--all`` shorthand."""

    if everything:
        if platform not in (None, PlatformTarget.BOTH):
            raise typer.BadParameter("--all implies --platform both", param_hint="--platform")
        return PlatformTarget.BOTH
    return platform or PlatformTarget.SLOPPY


def build_run_config(
    *,
    suites: list[str],
    all_files: bool,
    everything: bool,
    diff: str | None,
    platform: PlatformTarget | None,
    fix: bool,
    coverage: bool,
) -> RunConfig:
    """Assemble the immutable :class:`RunConfig` from parsed CLI values."""

    return RunConfig(
        mode=resolve_mode(all_files=all_files or everything, diff=diff),
        platform=resolve_platform(everything=everything, platform=platform),
        fix=fix,
        coverage=coverage,
        suites=tuple(dict.fromkeys(suites)),
    )


@app.command()
def main(
    suites: Annotated[
        list[str] | None,
        typer.Argument(metavar="[SUITES]...", help=_SUITE_HELP, callback=_validate_suites),
    ] = None,
    all_files: Annotated[
        bool,
        typer.Option("--all-files", help="Check every file instead of files changed on this branch."),
    ] = False,
    diff: Annotated[
        str | None,
        typer.Option("--diff", metavar="COMMITISH", help="Check files changed since COMMITISH."),
    ] = None,
    platform: Annotated[
        PlatformTarget | None,
        typer.Option(
            "--platform",
            case_sensitive=False,
            help="Platform to check: ios, android, both, or sloppy (cheapest coverage). [default: sloppy]",
            show_default=False,
        ),
    ] = None,
    everything: Annotated[
        bool,
        typer.Option("--all", help="Shorthand for --all-files --platform both."),
    ] = False,
    fix: Annotated[bool, typer.Option("--fix", help="Let lint and formatting fix problems in place.")] = False,
    coverage: Annotated[
        bool,
        typer.Option("--coverage", help="Collect test coverage (only with --all-files)."),
    ] = False,
    root: Annotated[
        Path,
        typer.Option("--root", "-r", help="Repository root.", file_okay=False, exists=True),
    ] = Path("."),
    emoji: Annotated[bool, typer.Option("--emoji/--no-emoji", help="Toggle emoji in output.")] = True,
    color: Annotated[bool, typer.Option("--color/--no-color", help="Toggle colour in output.")] = True,
) -> None:
    """Run check suites and exit 0 when all pass, 1 when any fail, 2 on usage errors."""

    config = build_run_config(
        suites=suites or [],
        all_files=all_files,
        everything=everything,
        diff=diff,
        platform=platform,
        fix=fix,
        coverage=coverage,
    )
    logger = Logger(use_emoji=emoji, use_color=color)
    try:
        settings = load_settings(root)
    except ConfigError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=USAGE_EXIT_CODE) from exc
    result = run_checks(config, settings, logger=logger, collaborators=Collaborators())
    raise typer.Exit(code=report(result, logger))


__all__ = ["USAGE_EXIT_CODE", "app", "build_run_config", "main", "resolve_mode", "resolve_platform"]
