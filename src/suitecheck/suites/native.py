# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Native suite: per-platform build and unit-test checks."""

from __future__ import annotations

from ..platforms import Platform, platforms_for
from .base import Suite, SuiteContext, SuiteOutcome

SUITE_NAME = "native"


def check_android(context: SuiteContext) -> bool:
    """Build the debug variant and run its unit tests.

    The unit tests first run with ``--quiet``. When they fail, they are run
    again with ``--info`` to surface the diagnostics the quiet run hid; the
    second run's status decides the result.
    """

    settings = context.settings
    if not context.scope.intersects(settings.android_dir):
        context.logger.info(f"No changes under {settings.android_dir}/; skipping Android checks.")
        return True
    cwd = context.root / settings.android_dir
    gradle = list(settings.gradle_command)
    if context.invoke([*gradle, "assembleDebug"], cwd=cwd) != 0:
        context.logger.fail("Android debug build failed.")
        return False
    if context.invoke([*gradle, "testDebugUnitTest", "--quiet"], cwd=cwd) == 0:
        return True
    context.logger.warn("Android unit tests failed; re-running with --info for diagnostics.")
    if context.invoke([*gradle, "testDebugUnitTest", "--info"], cwd=cwd) == 0:
        return True
    context.logger.fail("Android unit tests failed.")
    return False


def check_ios(context: SuiteContext) -> bool:
    """Placeholder for iOS native checks; never fails."""

    settings = context.settings
    if not context.scope.intersects(settings.ios_dir):
        context.logger.info(f"No changes under {settings.ios_dir}/; skipping iOS checks.")
        return True
    context.logger.info("iOS native checks are not implemented yet.")
    return True


_CHECKS = {
    Platform.ANDROID: check_android,
    Platform.IOS: check_ios,
}


def run_native(context: SuiteContext) -> SuiteOutcome:
    """Run every platform sub-check selected for the run's platform target."""

    failed = [
        str(platform)
        for platform in platforms_for(SUITE_NAME, context.config.platform)
        if not _CHECKS[platform](context)
    ]
    if failed:
        return SuiteOutcome.failure(f"native checks failed for: {', '.join(failed)}")
    return SuiteOutcome.success()


SUITE = Suite(name=SUITE_NAME, run=run_native, description="Build and unit-test the native projects.")

__all__ = ["SUITE", "check_android", "check_ios", "run_native"]
