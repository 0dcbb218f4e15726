"""Suppression file handling for secretgate."""

from .loader import DEFAULT_IGNORE_FILE, load_suppressions, parse_suppressions
from .spec import SuppressionEntry, SuppressionSpec, is_ignored

__all__ = [
    "DEFAULT_IGNORE_FILE",
    "SuppressionEntry",
    "SuppressionSpec",
    "is_ignored",
    "load_suppressions",
    "parse_suppressions",
]
