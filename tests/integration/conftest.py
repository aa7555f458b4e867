"""Pytest configuration for integration tests."""

import os
import shutil
import subprocess
from pathlib import Path

import pytest

from .utils import GitRunner


@pytest.fixture(autouse=True)
def require_git() -> None:
    """Skip integration tests when no git executable is available."""
    if shutil.which("git") is None:
        pytest.skip("git executable not found")


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Create an empty repository on branch main with a deterministic identity."""
    repo = tmp_path / "repo"
    repo.mkdir()
    subprocess.run(["git", "init", "-q", "-b", "main"], cwd=repo, check=True)
    return repo


@pytest.fixture
def git(git_repo: Path) -> GitRunner:
    """Return a helper running git in the test repository.

    The `date` keyword sets both author and committer dates, which is the
    creator date of lightweight tags pointing at the commit.
    """

    def run(*args: str, date: str | None = None) -> str:
        env = {
            **os.environ,
            "GIT_AUTHOR_NAME": "Lore Tester",
            "GIT_AUTHOR_EMAIL": "lore@example.com",
            "GIT_COMMITTER_NAME": "Lore Tester",
            "GIT_COMMITTER_EMAIL": "lore@example.com",
        }
        if date is not None:
            env["GIT_AUTHOR_DATE"] = date
            env["GIT_COMMITTER_DATE"] = date
        result = subprocess.run(["git", *args], cwd=git_repo, env=env, check=True, capture_output=True, text=True)
        return result.stdout.strip()

    return run
