"""Collect additions from a git repository for the hook modes."""

from __future__ import annotations
import logging
import os
import subprocess
from dataclasses import dataclass
from typing import Dict, Iterable, List

from secretgate.core.additions import Addition
from secretgate.core.exceptions import GitError

logger = logging.getLogger(__name__)

ZERO_SHA = "0" * 40


@dataclass(frozen=True)
class PushRef:
    """One line of git's pre-push stdin."""

    local_ref: str
    local_sha: str
    remote_ref: str
    remote_sha: str

    @property
    def is_delete(self) -> bool:
        return self.local_sha == ZERO_SHA

    @property
    def is_new_branch(self) -> bool:
        return self.remote_sha == ZERO_SHA


def parse_pre_push_input(lines: Iterable[str]) -> List[PushRef]:
    """
    Parse ``<local ref> <local sha> <remote ref> <remote sha>`` lines.

    Blank lines and branch deletions are skipped.
    """
    refs = []
    for line in lines:
        parts = line.split()
        if not parts:
            continue
        if len(parts) != 4:
            logger.warning("Ignoring malformed pre-push line: %r", line)
            continue
        ref = PushRef(*parts)
        if ref.is_delete:
            logger.debug("Skipping deletion of %s", ref.remote_ref)
            continue
        refs.append(ref)
    return refs


class GitRepo:
    """Thin wrapper over the ``git`` executable rooted at *root*."""

    def __init__(self, root: str = ".") -> None:
        self.root = root

    def _run(self, *args: str) -> subprocess.CompletedProcess:
        cmd = ["git", *args]
        try:
            return subprocess.run(cmd, cwd=self.root, capture_output=True)
        except OSError as e:
            raise GitError(f"Unable to run git: {e}", command=cmd)

    def _git(self, *args: str) -> bytes:
        proc = self._run(*args)
        if proc.returncode != 0:
            stderr = proc.stderr.decode("utf-8", errors="replace").strip()
            raise GitError(stderr or f"git exited with {proc.returncode}", command=["git", *args])
        return proc.stdout

    def _paths(self, command: str, *args: str) -> List[str]:
        out = self._git(command, "-z", *args)
        return [p.decode("utf-8") for p in out.split(b"\0") if p]

    def _lines(self, *args: str) -> List[str]:
        return self._git(*args).decode("utf-8").split()

    def _exists_at(self, revision: str, path: str) -> bool:
        return self._run("cat-file", "-e", f"{revision}:{path}").returncode == 0

    # -- pre-push -----------------------------------------------------
    def additions_between(self, old: str, new: str) -> List[Addition]:
        """
        Files added or modified by the commits in ``old..new``.

        Content is taken at *new*. When *old* is the zero sha (a new branch)
        the range is every commit of *new* not yet on a remote.
        """
        if old == ZERO_SHA:
            rev_range = [new, "--not", "--remotes"]
        else:
            rev_range = [f"{old}..{new}"]
        commits = self._lines("rev-list", "--reverse", *rev_range)

        commits_by_path: Dict[str, List[str]] = {}
        for commit in commits:
            changed = self._paths(
                "diff-tree", "--no-commit-id", "--name-only", "-r", "--root",
                "--diff-filter=ACM", commit,
            )
            for path in changed:
                commits_by_path.setdefault(path, []).append(commit)

        additions = []
        for path in sorted(commits_by_path):
            if not self._exists_at(new, path):
                continue
            content = self._git("show", f"{new}:{path}")
            additions.append(Addition.from_content(path, content, commits_by_path[path]))

        logger.debug("%d commit(s), %d file(s) between %s and %s", len(commits), len(additions), old, new)
        return additions

    # -- pre-commit ---------------------------------------------------
    def staged_additions(self) -> List[Addition]:
        """
        Staged files, with content limited to the lines the index adds.

        Binary files carry their whole staged blob.
        """
        additions = []
        for path in self._paths("diff", "--cached", "--name-only", "--diff-filter=ACM"):
            patch = self._git("diff", "--cached", "--unified=0", "--no-color", "--", path)
            if b"\nBinary files " in patch:
                content = self._git("show", f":{path}")
            else:
                added = _added_lines(patch)
                content = b"\n".join(added) + b"\n" if added else b""
            additions.append(Addition.from_content(path, content))
        return additions

    # -- scan ---------------------------------------------------------
    def tracked_additions(self) -> List[Addition]:
        """Every tracked file with its working-tree content."""
        additions = []
        for path in self._paths("ls-files"):
            full_path = os.path.join(self.root, path)
            if not os.path.isfile(full_path):
                continue
            with open(full_path, "rb") as f:
                additions.append(Addition.from_content(path, f.read()))
        return additions


def _added_lines(patch: bytes) -> List[bytes]:
    """Lines a zero-context patch adds; the ``+++`` file header precedes the first hunk."""
    added = []
    in_hunk = False
    for line in patch.splitlines():
        if line.startswith(b"@@"):
            in_hunk = True
        elif in_hunk and line.startswith(b"+"):
            added.append(line[1:])
    return added
