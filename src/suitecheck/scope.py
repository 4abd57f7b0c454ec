# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve which files a run covers for the active selection mode."""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from .config import AllFiles, BranchChanges, DiffAgainst, SelectionMode
from .process import CommandOptions, SubprocessExecutionError, run_command

GitRunner = Callable[[Sequence[str], Path], list[str]]


def default_git_runner(cmd: Sequence[str], root: Path) -> list[str]:
    """Execute ``cmd`` in ``root`` and return its output records.

    Output of commands passing ``-z`` is split on NUL bytes, everything else
    on line breaks.

    Args:
        cmd: Git command to execute.
        root: Repository root directory.

    Returns:
        list[str]: Raw records produced by the command.

    Raises:
        SubprocessExecutionError: If git exits with a non-zero status.
    """

    completed = run_command(cmd, options=CommandOptions(cwd=root, capture_output=True, check=True))
    stdout = completed.stdout or ""
    if "-z" in cmd:
        return [record for record in stdout.split("\0") if record]
    return stdout.splitlines()


def _normalise_subtree(subtree: str | PurePosixPath) -> PurePosixPath:
    path = PurePosixPath(subtree)
    return PurePosixPath() if str(path) in {"", "."} else path


def _is_under(candidate: PurePosixPath, parent: PurePosixPath) -> bool:
    if parent == PurePosixPath():
        return True
    return candidate == parent or candidate.is_relative_to(parent)


@dataclass(frozen=True, slots=True)
class ScopedFiles:
    """Files a checker should examine within one subtree.

    ``paths`` is ``None`` when the whole subtree is in scope; checkers then
    receive the directory itself instead of an enumerated file list.
    """

    subtree: str
    paths: tuple[str, ...] | None = None

    @classmethod
    def whole(cls, subtree: str) -> ScopedFiles:
        return cls(subtree=subtree, paths=None)

    @property
    def is_whole(self) -> bool:
        return self.paths is None

    @property
    def is_empty(self) -> bool:
        return self.paths is not None and not self.paths

    def arguments(self) -> list[str]:
        """Return command-line arguments naming the scoped files."""

        if self.paths is None:
            return [self.subtree]
        return list(self.paths)


class ScopeResolver:
    """Answer file-scope questions for a single run.

    The diff backing :meth:`relevant_files` and :meth:`intersects` is computed
    at most once, on first use, so every suite in a run sees the same set.
    """

    def __init__(
        self,
        mode: SelectionMode,
        *,
        root: Path,
        base_branch: str = "origin/main",
        runner: GitRunner | None = None,
    ) -> None:
        """Create a resolver bound to ``mode``.

        Args:
            mode: Active selection mode.
            root: Repository root where git commands run.
            base_branch: Branch whose merge-base defines branch changes.
            runner: Optional git command runner, mainly for tests.
        """

        self.mode = mode
        self.root = root
        self.base_branch = base_branch
        self._runner = runner or default_git_runner
        self._base_ref: str | None = None
        self._changed: tuple[PurePosixPath, ...] | None = None

    def base_ref(self) -> str | None:
        """Return the commit-ish diffs are taken against, or ``None`` for all files."""

        match self.mode:
            case AllFiles():
                return None
            case DiffAgainst(ref=ref):
                return ref
            case BranchChanges():
                if self._base_ref is None:
                    self._base_ref = self._merge_base()
                return self._base_ref
        raise TypeError(f"Unsupported selection mode: {self.mode!r}")

    def changed_files(self) -> tuple[PurePosixPath, ...]:
        """Return repository-relative paths changed since :meth:`base_ref`.

        Returns an empty tuple under :class:`AllFiles`, where no diff exists.
        """

        if self._changed is None:
            ref = self.base_ref()
            if ref is None:
                self._changed = ()
            else:
                self._changed = tuple(self._diff_names(ref))
        return self._changed

    def relevant_files(self, subtree: str, extensions: Collection[str] | None = None) -> ScopedFiles:
        """Return the files under ``subtree`` a checker should examine.

        Args:
            subtree: Repository-relative directory bounding the result.
            extensions: Optional suffixes a file must carry to be included.

        Returns:
            ScopedFiles: The whole-subtree marker under :class:`AllFiles`,
            otherwise the matching changed files (possibly none).
        """

        if isinstance(self.mode, AllFiles):
            return ScopedFiles.whole(subtree)
        parent = _normalise_subtree(subtree)
        suffixes = {ext.lower() for ext in extensions} if extensions else None
        matches = tuple(
            str(path)
            for path in self.changed_files()
            if _is_under(path, parent) and (suffixes is None or path.suffix.lower() in suffixes)
        )
        return ScopedFiles(subtree=subtree, paths=matches)

    def intersects(self, *paths: str) -> bool:
        """Return whether the diff touches any of ``paths``.

        Always ``True`` under :class:`AllFiles`.
        """

        if isinstance(self.mode, AllFiles):
            return True
        targets = [_normalise_subtree(path) for path in paths]
        return any(_is_under(changed, target) for changed in self.changed_files() for target in targets)

    def _merge_base(self) -> str:
        """Return the fork point of ``HEAD`` from the base branch."""

        try:
            output = self._runner(["git", "merge-base", "HEAD", self.base_branch], self.root)
        except SubprocessExecutionError:
            return self.base_branch
        for line in output:
            if line.strip():
                return line.strip()
        return self.base_branch

    def _diff_names(self, ref: str) -> Iterator[PurePosixPath]:
        # Unquoted, NUL-separated names keep non-ASCII and whitespace paths intact.
        cmd = ["git", "-c", "core.quotePath=false", "diff", "--name-only", "-z", "--diff-filter=d", ref, "--"]
        for raw in self._runner(cmd, self.root):
            name = raw.strip("\n")
            if name:
                yield PurePosixPath(name)


__all__ = ["GitRunner", "ScopeResolver", "ScopedFiles", "default_git_runner"]
