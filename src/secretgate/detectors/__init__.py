"""Detectors and the detector chain for secretgate."""

from .base import Detector, DetectorKind
from .filename import FileNameDetector
from .filesize import FileSizeDetector
from .pattern import PatternDetector
from .registry import DetectorChain, default_chain

__all__ = [
    "Detector",
    "DetectorKind",
    "DetectorChain",
    "FileNameDetector",
    "FileSizeDetector",
    "PatternDetector",
    "default_chain",
]
