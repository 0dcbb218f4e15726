from __future__ import annotations
from typing import Iterable

from secretgate.core.additions import Addition
from .base import Detector, DetectorKind

DEFAULT_MAX_SIZE = 1024 * 1024  # 1 MiB


class FileSizeDetector(Detector):
    """Fails additions larger than ``max_size`` bytes.

    Large blobs are usually binaries, dumps or archives, none of which the
    content patterns can see into.
    """

    def __init__(self, max_size: int = DEFAULT_MAX_SIZE) -> None:
        self.max_size = max_size

    @property
    def kind(self) -> DetectorKind:
        return DetectorKind.FILESIZE

    def check(self, addition: Addition) -> Iterable[str]:
        if addition.size > self.max_size:
            return [
                f'The file name "{addition.path}" with file size {addition.size} '
                f"is larger than {self.max_size} (bytes)"
            ]
        return []
