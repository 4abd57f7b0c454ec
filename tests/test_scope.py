# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for selection-mode scope resolution."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

from suitecheck import scope as scope_module
from suitecheck.config import AllFiles, BranchChanges, DiffAgainst
from suitecheck.process import SubprocessExecutionError
from suitecheck.scope import ScopedFiles, ScopeResolver, default_git_runner

SOURCE_EXTENSIONS = (".js", ".ts", ".tsx")


def test_all_files_returns_whole_subtree_marker(tmp_path: Path, fake_git) -> None:
    git = fake_git(["src/app.ts"])
    resolver = ScopeResolver(AllFiles(), root=tmp_path, runner=git)

    scoped = resolver.relevant_files("src", SOURCE_EXTENSIONS)

    assert scoped.is_whole
    assert not scoped.is_empty
    assert scoped.arguments() == ["src"]
    assert git.calls == []


def test_all_files_intersects_everything_without_git(tmp_path: Path, fake_git) -> None:
    git = fake_git()
    resolver = ScopeResolver(AllFiles(), root=tmp_path, runner=git)

    assert resolver.intersects("android")
    assert resolver.intersects("package.json", "yarn.lock")
    assert resolver.base_ref() is None
    assert git.calls == []


def test_branch_mode_diffs_against_merge_base(tmp_path: Path, fake_git) -> None:
    git = fake_git(["src/app.ts", "src/styles.css", "docs/readme.md", "src/nested/view.tsx"], merge_base="f00d")
    resolver = ScopeResolver(BranchChanges(), root=tmp_path, base_branch="origin/develop", runner=git)

    scoped = resolver.relevant_files("src", SOURCE_EXTENSIONS)

    assert scoped.paths == ("src/app.ts", "src/nested/view.tsx")
    assert ("git", "merge-base", "HEAD", "origin/develop") in git.calls
    assert git.diff_calls == [
        ("git", "-c", "core.quotePath=false", "diff", "--name-only", "-z", "--diff-filter=d", "f00d", "--"),
    ]


def test_branch_mode_falls_back_to_branch_name_when_merge_base_fails(tmp_path: Path) -> None:
    calls: list[tuple[str, ...]] = []

    def runner(cmd, root):
        calls.append(tuple(cmd))
        if cmd[1] == "merge-base":
            raise SubprocessExecutionError(cmd, 1, "", "fatal: no merge base")
        return []

    resolver = ScopeResolver(BranchChanges(), root=tmp_path, base_branch="origin/main", runner=runner)

    assert resolver.base_ref() == "origin/main"


def test_diff_mode_uses_reference_and_returns_empty_on_no_matches(tmp_path: Path, fake_git) -> None:
    git = fake_git(["android/app/build.gradle"])
    resolver = ScopeResolver(DiffAgainst("HEAD~1"), root=tmp_path, runner=git)

    scoped = resolver.relevant_files("src", SOURCE_EXTENSIONS)

    assert scoped.is_empty
    assert scoped.arguments() == []
    assert resolver.base_ref() == "HEAD~1"
    assert git.diff_calls[0][-2] == "HEAD~1"


def test_intersects_matches_files_and_directories(tmp_path: Path, fake_git) -> None:
    resolver = ScopeResolver(
        DiffAgainst("main"),
        root=tmp_path,
        runner=fake_git(["android/app/src/Main.kt", "yarn.lock"]),
    )

    assert resolver.intersects("android")
    assert resolver.intersects("package.json", "yarn.lock")
    assert not resolver.intersects("ios")
    assert not resolver.intersects("package.json")
    assert not resolver.intersects("android-tools")


def test_diff_is_computed_once_per_run(tmp_path: Path, fake_git) -> None:
    git = fake_git(["src/a.js", "yarn.lock"])
    resolver = ScopeResolver(BranchChanges(), root=tmp_path, runner=git)

    first = resolver.relevant_files("src", SOURCE_EXTENSIONS)
    resolver.intersects("yarn.lock")
    git.changed.append("src/b.js")
    second = resolver.relevant_files("src", SOURCE_EXTENSIONS)

    assert first == second
    assert len(git.diff_calls) == 1


def test_extension_filter_is_optional_and_case_insensitive(tmp_path: Path, fake_git) -> None:
    resolver = ScopeResolver(DiffAgainst("main"), root=tmp_path, runner=fake_git(["src/A.JS", "src/data.bin"]))

    assert resolver.relevant_files("src", (".js",)).paths == ("src/A.JS",)
    assert resolver.relevant_files("src").paths == ("src/A.JS", "src/data.bin")
    assert resolver.relevant_files(".", (".bin",)).paths == ("src/data.bin",)


def test_whole_subtree_marker_is_not_a_file_count() -> None:
    whole = ScopedFiles.whole("src")

    assert whole.arguments() == ["src"]
    assert whole.paths is None
    with pytest.raises(TypeError):
        len(whole)  # type: ignore[arg-type]
    assert ScopedFiles("src", ("src/a.js",)).arguments() == ["src/a.js"]
    assert ScopedFiles("src", ()).is_empty


def test_default_git_runner_splits_nul_separated_output(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    outputs = {True: "src/caf\u00e9.ts\0src/with space.ts\0", False: "abc123\n"}

    def fake_run(cmd, *, options):
        return subprocess.CompletedProcess(cmd, 0, stdout=outputs["-z" in cmd], stderr="")

    monkeypatch.setattr(scope_module, "run_command", fake_run)

    assert default_git_runner(["git", "diff", "--name-only", "-z"], tmp_path) == ["src/caf\u00e9.ts", "src/with space.ts"]
    assert default_git_runner(["git", "merge-base", "HEAD", "main"], tmp_path) == ["abc123"]


def _git(repo: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=repo, check=True, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)


@pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")
def test_diff_mode_against_real_repository(tmp_path: Path) -> None:
    repo = tmp_path / "repo"
    (repo / "src").mkdir(parents=True)
    (repo / "docs").mkdir()
    (repo / "src" / "keep.ts").write_text("export const a = 1;\n", encoding="utf-8")
    (repo / "src" / "gone.ts").write_text("export const b = 1;\n", encoding="utf-8")
    (repo / "docs" / "notes.md").write_text("v1\n", encoding="utf-8")

    _git(repo, "init")
    _git(repo, "config", "user.name", "SuitecheckTest")
    _git(repo, "config", "user.email", "suitecheck@example.com")
    _git(repo, "add", ".")
    _git(repo, "commit", "-m", "initial")

    (repo / "src" / "keep.ts").write_text("export const a = 2;\n", encoding="utf-8")
    (repo / "src" / "gone.ts").unlink()
    (repo / "docs" / "notes.md").write_text("v2\n", encoding="utf-8")

    resolver = ScopeResolver(DiffAgainst("HEAD"), root=repo)

    assert resolver.relevant_files("src", SOURCE_EXTENSIONS).paths == ("src/keep.ts",)
    assert resolver.intersects("docs")
    assert not resolver.intersects("android")


@pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")
def test_diff_mode_keeps_non_ascii_and_spaced_names(tmp_path: Path) -> None:
    repo = tmp_path / "repo"
    (repo / "src").mkdir(parents=True)
    accented = repo / "src" / "café.ts"
    spaced = repo / "src" / "with space.ts"
    accented.write_text("export const a = 1;\n", encoding="utf-8")
    spaced.write_text("export const b = 1;\n", encoding="utf-8")

    _git(repo, "init")
    _git(repo, "config", "user.name", "SuitecheckTest")
    _git(repo, "config", "user.email", "suitecheck@example.com")
    _git(repo, "add", ".")
    _git(repo, "commit", "-m", "initial")

    accented.write_text("export const a = 2;\n", encoding="utf-8")
    spaced.write_text("export const b = 2;\n", encoding="utf-8")

    resolver = ScopeResolver(DiffAgainst("HEAD"), root=repo)

    assert resolver.relevant_files("src", SOURCE_EXTENSIONS).paths == ("src/café.ts", "src/with space.ts")
    assert resolver.intersects("src/café.ts")
