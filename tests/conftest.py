"""Shared fixtures: throwaway git repositories."""

import shutil
import subprocess
from pathlib import Path

import pytest


class GitTesting:
    """Small driver for a scratch git repository."""

    def __init__(self, root: Path):
        self.root = root
        self.git("init", "-q")

    def git(self, *args: str) -> str:
        proc = subprocess.run(
            [
                "git",
                "-c", "user.email=test@example.com",
                "-c", "user.name=Test User",
                "-c", "commit.gpgsign=false",
                *args,
            ],
            cwd=self.root,
            capture_output=True,
            text=True,
            check=True,
        )
        return proc.stdout.strip()

    def create_file(self, path: str, contents: str) -> None:
        target = self.root / path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(contents)

    def append_file(self, path: str, contents: str) -> None:
        with open(self.root / path, "a") as f:
            f.write(contents)

    def add(self, pattern: str = ".") -> None:
        self.git("add", pattern)

    def add_and_commit(self, pattern: str, message: str) -> None:
        self.add(pattern)
        self.git("commit", "-q", "-m", message)

    def setup_baseline(self, *names: str) -> None:
        for name in names:
            self.create_file(name, "hello world\n")
        self.add_and_commit(".", "baseline")

    def earliest_commit(self) -> str:
        return self.git("rev-list", "--max-parents=0", "HEAD").splitlines()[0]

    def latest_commit(self) -> str:
        return self.git("rev-parse", "HEAD")


@pytest.fixture
def git_repo(tmp_path, monkeypatch):
    if shutil.which("git") is None:
        pytest.skip("git not installed")
    repo = GitTesting(tmp_path)
    monkeypatch.chdir(tmp_path)
    return repo
