from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Sequence

from secretgate.core.additions import Addition

if TYPE_CHECKING:
    from secretgate.ignores import SuppressionSpec
    from secretgate.results import DetectionResults

logger = logging.getLogger(__name__)


class DetectorKind(Enum):
    """Known detector identities, as named in the suppression file."""

    FILENAME = "filename"
    FILECONTENT = "filecontent"
    FILESIZE = "filesize"

    @classmethod
    def parse(cls, name: str) -> "DetectorKind":
        """Map a suppression-file detector name to a kind.

        Raises:
            ValueError: If *name* is not a known detector
        """
        try:
            return cls(name.strip().lower())
        except ValueError:
            known = ", ".join(k.value for k in cls)
            raise ValueError(f"Unknown detector '{name}' (expected one of: {known})")


class Detector(ABC):
    """Base class for all detectors."""

    @property
    @abstractmethod
    def kind(self) -> DetectorKind:
        """Identity used for suppression lookups and ignore records."""

    @property
    def name(self) -> str:
        return self.kind.value

    @abstractmethod
    def check(self, addition: Addition) -> Iterable[str]:
        """Inspect one addition and yield a failure message per problem found."""

    def test(
        self,
        additions: Sequence[Addition],
        spec: "SuppressionSpec",
        results: "DetectionResults",
    ) -> None:
        """Run this detector over *additions*, recording outcomes in *results*."""
        for addition in additions:
            if spec.deny(addition.path, self.kind):
                logger.info("%s detector ignoring %s as it is suppressed", self.name, addition.path)
                results.ignore(addition.path, self.name)
                continue
            for message in self.check(addition):
                logger.info("%s detector failing %s", self.name, addition.path)
                results.fail(addition.path, message, list(addition.commits))
