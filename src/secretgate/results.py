# SPDX-License-Identifier: MIT
"""
Detection results: the collecting parameter handed to every detector.

Failures are grouped by file, then by failure message, then by the commits
that introduced the message. Ignores record which detectors skipped a file
because of a suppression entry.
"""
from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from rich.console import Console
from rich.table import Table
from rich.text import Text

from secretgate.core.checksum import collective_hash
from secretgate.ignores.loader import DEFAULT_IGNORE_FILE, SECTION, entries_to_yaml

MESSAGE_WRAP_WIDTH = 150
REPORT_WIDTH = 220


@dataclass
class FailureData:
    """Failures recorded against one file."""

    failures_in_commits: Dict[str, List[str]] = field(default_factory=dict)

    def messages(self) -> List[str]:
        return list(self.failures_in_commits)


class DetectionResults:
    """Run-wide aggregation of detector observations."""

    def __init__(self) -> None:
        self.failures: Dict[str, FailureData] = {}
        self.ignores: Dict[str, List[str]] = {}

    def fail(self, path: str, message: str, commits: Optional[Sequence[str]] = None) -> None:
        """
        Mark *path* as failing for *message*.

        Repeated calls for the same message append their commits to the ones
        already recorded; duplicates are kept.
        """
        failure = self.failures.get(path)
        if failure is None:
            failure = self.failures[path] = FailureData()

        existing = failure.failures_in_commits.get(message)
        if existing is None:
            failure.failures_in_commits[message] = list(commits or [])
        else:
            existing.extend(commits or [])

    def ignore(self, path: str, detector: str) -> None:
        """Record that *detector* skipped *path* because it is suppressed."""
        self.ignores.setdefault(path, []).append(detector)

    def has_failures(self) -> bool:
        return len(self.failures) > 0

    def has_ignores(self) -> bool:
        return len(self.ignores) > 0

    def successful(self) -> bool:
        """True when no detector failed any file; ignores do not count."""
        return not self.has_failures()

    def get_failures(self, path: str) -> Optional[FailureData]:
        return self.failures.get(path)

    def report_file_failures(self, path: str) -> List[Tuple[str, str]]:
        """Rows of (file, message) for every message recorded against *path*."""
        failure = self.failures.get(path)
        if failure is None:
            return []
        rows = []
        for message in failure.failures_in_commits:
            if len(message) > MESSAGE_WRAP_WIDTH:
                message = message[:MESSAGE_WRAP_WIDTH] + "\n" + message[MESSAGE_WRAP_WIDTH:]
            rows.append((path, message))
        return rows

    def reported_paths(self) -> List[str]:
        """Sorted, de-duplicated paths that failed or were ignored."""
        return sorted(set(self.failures) | set(self.ignores))

    def report(self) -> str:
        """
        Render the failure table followed by a suggested suppression snippet.

        Returns:
            The report text, or an empty string when nothing failed
        """
        if not self.failures:
            return ""

        buf = io.StringIO()
        console = Console(file=buf, width=REPORT_WIDTH, color_system=None, highlight=False)

        table = Table(show_lines=True)
        table.add_column("File", overflow="fold")
        table.add_column("Errors", overflow="fold")
        for path in sorted(self.failures):
            for file_path, message in self.report_file_failures(path):
                table.add_row(Text(file_path), Text(message))

        console.print()
        console.print(Text("Report:", style="bold red"))
        console.print(table)
        console.print()
        console.print(
            Text(
                "If you are absolutely sure that you want to ignore the above files from "
                "secretgate detectors, consider pasting the following format in the "
                f"{DEFAULT_IGNORE_FILE} file in the project root",
                style="yellow",
            )
        )
        return buf.getvalue() + self.suggest_suppressions(self.reported_paths()) + "\n"

    def suggest_suppressions(self, paths: Iterable[str]) -> str:
        """
        Build a suppression snippet covering *paths* with fresh checksums.

        Every entry suppresses all detectors; users are expected to narrow
        ``ignore_detectors`` by hand.
        """
        entries = []
        for path in paths:
            entries.append(
                {
                    "filename": path,
                    "checksum": collective_hash([path]),
                    "ignore_detectors": [],
                }
            )
        return entries_to_yaml({SECTION: entries})
