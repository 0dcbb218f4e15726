"""Addition data structure and filesystem helpers for secretgate."""

from __future__ import annotations
import glob
import logging
import os
from dataclasses import dataclass
from typing import List, Sequence, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Addition:
    """A changed file as of the revision under test."""

    path: str  # repo-relative file path
    content: bytes  # raw bytes at the revision under test
    commits: Tuple[str, ...] = ()  # commits that introduced this content, if known

    @classmethod
    def from_content(
        cls,
        path: str,
        content: bytes,
        commits: Sequence[str] = (),
    ) -> "Addition":
        """Create an Addition, normalising the path to forward slashes."""
        return cls(
            path=path.replace(os.sep, "/"),
            content=content,
            commits=tuple(commits),
        )

    @property
    def name(self) -> str:
        """Base name of the file, used by name-based detectors."""
        return self.path.rsplit("/", 1)[-1]

    @property
    def size(self) -> int:
        return len(self.content)

    def text(self) -> str:
        return self.content.decode("utf-8", errors="ignore")


def additions_from_glob(pattern: str, root: str = ".") -> List[Addition]:
    """
    Read every regular file under *root* matching *pattern*.

    ``**`` matches any number of directories. Paths are reported relative
    to *root*. No commit attribution is available in this mode.
    """
    root = os.path.abspath(root)
    matches = glob.glob(os.path.join(root, pattern), recursive=True)

    additions = []
    for match in sorted(set(os.path.normpath(m) for m in matches)):
        if not os.path.isfile(match):
            continue
        rel_path = os.path.relpath(match, root)
        with open(match, "rb") as f:
            content = f.read()
        additions.append(Addition.from_content(rel_path, content))

    logger.debug("Pattern %s matched %d file(s) under %s", pattern, len(additions), root)
    return additions
