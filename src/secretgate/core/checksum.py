# SPDX-License-Identifier: MIT
"""
Collective checksum used to pin suppression entries.

The checksum of a set of files is the SHA-256 of their paths, sorted and
concatenated. Sorting makes the digest independent of input order.
"""

from __future__ import annotations
import hashlib
from typing import Iterable


def collective_hash(paths: Iterable[str]) -> str:
    """
    Compute the collective checksum for *paths*.

    Args:
        paths: File paths (repo-relative) to hash together

    Returns:
        Hex-encoded SHA-256 digest
    """
    digest = hashlib.sha256()
    digest.update("".join(sorted(paths)).encode("utf-8"))
    return digest.hexdigest()
