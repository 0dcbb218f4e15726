"""
Sensitive file name detector.

Flags files whose base name looks like key material, credential stores or
shell history, regardless of their content.
"""
from __future__ import annotations
import re
from typing import Iterable, List, Optional

from secretgate.core.additions import Addition
from .base import Detector, DetectorKind

FILENAME_PATTERNS = [
    r"^.+_rsa$",
    r"^.+_dsa.*$",
    r"^.+_ed25519$",
    r"^.+_ecdsa$",
    r"^\.\w+_history$",
    r"^\.?sh_history$",
    r"^.+\.pem$",
    r"^.+\.ppk$",
    r"^.+\.key(pair)?$",
    r"^.+\.pkcs12$",
    r"^.+\.pfx$",
    r"^.+\.p12$",
    r"^.+\.asc$",
    r"^\.?htpasswd$",
    r"^\.?netrc$",
    r"^.*\.tblk$",
    r"^.*\.ovpn$",
    r"^.*\.kdb$",
    r"^.*\.agilekeychain$",
    r"^.*\.keychain$",
    r"^.*\.key(store|ring)$",
    r"^jenkins\.plugins\.publish_over_ssh\.BapSshPublisherPlugin\.xml$",
    r"^credentials\.xml$",
    r"^.*\.pubxml(\.user)?$",
    r"^\.?s3cfg$",
    r"^\.gitrobrc$",
    r"^secret_token\.rb$",
    r"^omniauth\.rb$",
    r"^carrierwave\.rb$",
    r"^database\.yml$",
    r"^\.?muttrc$",
    r"^.*\.sqlite3?$",
]


class FileNameDetector(Detector):
    """Fails additions whose base name matches a sensitive file pattern."""

    def __init__(self, patterns: Optional[List[str]] = None) -> None:
        self._patterns = [
            re.compile(p) for p in (FILENAME_PATTERNS if patterns is None else patterns)
        ]

    @property
    def kind(self) -> DetectorKind:
        return DetectorKind.FILENAME

    def check(self, addition: Addition) -> Iterable[str]:
        name = addition.name
        for pattern in self._patterns:
            if pattern.search(name):
                # one failure per file is enough
                return [
                    f'The file name "{addition.path}" failed checks against the pattern {pattern.pattern}'
                ]
        return []
