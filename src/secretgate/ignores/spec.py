# SPDX-License-Identifier: MIT
"""
Checksum-pinned suppression rules.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Set, Union

from secretgate.core.checksum import collective_hash
from secretgate.detectors.base import DetectorKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SuppressionEntry:
    """One ``fileignoreconfig`` item of the suppression file."""

    filename: str
    checksum: str
    ignore_detectors: FrozenSet[DetectorKind] = field(default_factory=frozenset)

    def matches_checksum(self) -> bool:
        """True while the stored checksum still matches the file it names."""
        return collective_hash([self.filename]) == self.checksum

    def covers(self, detector: DetectorKind) -> bool:
        """True if this entry silences *detector*; an empty set silences all."""
        return not self.ignore_detectors or detector in self.ignore_detectors

    def to_dict(self) -> Dict[str, object]:
        return {
            "filename": self.filename,
            "checksum": self.checksum,
            "ignore_detectors": sorted(d.value for d in self.ignore_detectors),
        }


class SuppressionSpec:
    """Ordered collection of suppression entries loaded for one run."""

    def __init__(self, entries: Optional[Iterable[SuppressionEntry]] = None):
        self.entries: List[SuppressionEntry] = list(entries or [])
        self._stale_reported: Set[str] = set()

        seen: Set[str] = set()
        for entry in self.entries:
            if entry.filename in seen:
                logger.warning(
                    "Duplicate suppression entry for %s; only the first one is used",
                    entry.filename,
                )
            seen.add(entry.filename)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[SuppressionEntry]:
        return iter(self.entries)

    def find(self, path: str) -> Optional[SuppressionEntry]:
        """Return the first entry naming *path* exactly, if any."""
        for entry in self.entries:
            if entry.filename == path:
                return entry
        return None

    def deny(self, path: str, detector: Union[DetectorKind, str]) -> bool:
        """
        Check whether *detector* is suppressed for *path*.

        Args:
            path: Repo-relative file path
            detector: Detector kind or its suppression-file name

        Returns:
            True if a current (checksum-matching) entry for *path* covers *detector*
        """
        if isinstance(detector, str):
            detector = DetectorKind.parse(detector)

        entry = self.find(path)
        if entry is None:
            return False

        if not entry.matches_checksum():
            self._report_stale(entry)
            return False

        return entry.covers(detector)

    def _report_stale(self, entry: SuppressionEntry) -> None:
        if entry.filename in self._stale_reported:
            return
        self._stale_reported.add(entry.filename)
        logger.warning(
            "Suppression for %s has a stale checksum (%s, expected %s); the file will be checked",
            entry.filename,
            entry.checksum,
            collective_hash([entry.filename]),
        )


def is_ignored(path: str, detector: Union[DetectorKind, str], spec: SuppressionSpec) -> bool:
    """Functional form of :meth:`SuppressionSpec.deny`."""
    return spec.deny(path, detector)
