from __future__ import annotations
import logging
from typing import List, Sequence, TYPE_CHECKING

from secretgate.core.additions import Addition
from .base import Detector
from .filename import FileNameDetector
from .filesize import FileSizeDetector
from .pattern import PatternDetector

if TYPE_CHECKING:
    from secretgate.ignores import SuppressionSpec
    from secretgate.results import DetectionResults

logger = logging.getLogger(__name__)


class DetectorChain:
    """Ordered container of detectors run against the same additions."""

    def __init__(self) -> None:
        self._detectors: List[Detector] = []

    # -- registration -------------------------------------------------
    def register(self, detector: Detector) -> "DetectorChain":
        """Append *detector* to the chain.

        Two detectors of the same kind would make suppression entries
        ambiguous, so a duplicate kind is rejected.
        """

        if any(d.kind == detector.kind for d in self._detectors):
            raise ValueError(f"Duplicate detector: {detector.name}")
        self._detectors.append(detector)
        return self

    # -- access helpers ----------------------------------------------
    def detectors(self) -> List[Detector]:
        """Return a copy of the registered detectors, in run order."""

        return list(self._detectors)

    def __len__(self) -> int:
        return len(self._detectors)

    # -- detection ----------------------------------------------------
    def run(
        self,
        additions: Sequence[Addition],
        spec: "SuppressionSpec",
        results: "DetectionResults",
    ) -> None:
        """Run every registered detector over *additions*.

        Each detector sees the full batch; one detector failing a file never
        stops the others from running.
        """

        for detector in self._detectors:
            logger.debug("Running %s detector over %d addition(s)", detector.name, len(additions))
            detector.test(additions, spec, results)


def default_chain() -> DetectorChain:
    """Create the chain with the built-in detectors."""

    return (
        DetectorChain()
        .register(FileNameDetector())
        .register(PatternDetector())
        .register(FileSizeDetector())
    )
