# SPDX-License-Identifier: MIT
"""
Suppression file loader for secretgate.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from secretgate.core.exceptions import SecretGateConfigError
from secretgate.detectors.base import DetectorKind
from .spec import SuppressionEntry, SuppressionSpec

logger = logging.getLogger(__name__)

DEFAULT_IGNORE_FILE = ".secretgaterc"
SECTION = "fileignoreconfig"


def load_suppressions(ignore_file: Optional[str] = None, repo_root: str = ".") -> SuppressionSpec:
    """
    Load the suppression spec following the search order.

    Args:
        ignore_file: Explicit path from the --ignore-file CLI flag
        repo_root: Repository root searched for .secretgaterc

    Returns:
        The parsed SuppressionSpec (empty if no file is present)

    Raises:
        SecretGateConfigError: If the file is malformed or an explicit file is missing
    """
    # 1. Explicit file must exist
    if ignore_file:
        path = Path(ignore_file).resolve()
        if not path.exists():
            raise SecretGateConfigError(
                f"Specified suppression file not found: {path}",
                config_path=str(path),
            )
        return _load_file(path)

    # 2. .secretgaterc at the repo root
    path = Path(repo_root).resolve() / DEFAULT_IGNORE_FILE
    if path.exists():
        return _load_file(path)

    # 3. Nothing suppressed
    logger.debug("No %s found in %s", DEFAULT_IGNORE_FILE, path.parent)
    return SuppressionSpec()


def _load_file(path: Path) -> SuppressionSpec:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SecretGateConfigError(
            f"Failed to read suppression file: {e}",
            config_path=str(path),
        )
    spec = parse_suppressions(text, source=str(path))
    logger.debug("Loaded %d suppression entr(ies) from %s", len(spec), path)
    return spec


def parse_suppressions(text: str, source: Optional[str] = None) -> SuppressionSpec:
    """
    Parse suppression file text.

    Raises:
        SecretGateConfigError: If the YAML or its structure is invalid
    """
    try:
        config = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise SecretGateConfigError(
            f"Failed to parse suppression file: {e}",
            config_path=source,
        )

    if config is None:
        return SuppressionSpec()

    if not isinstance(config, dict):
        raise SecretGateConfigError(
            "Suppression file must be a mapping",
            config_path=source,
        )

    raw_entries = config.get(SECTION)
    if raw_entries is None:
        return SuppressionSpec()

    if not isinstance(raw_entries, list):
        raise SecretGateConfigError(
            f"{SECTION} must be a list",
            config_path=source,
            section=SECTION,
        )

    entries = [_parse_entry(raw, i, source) for i, raw in enumerate(raw_entries)]
    return SuppressionSpec(entries)


def _parse_entry(raw: Any, index: int, source: Optional[str]) -> SuppressionEntry:
    """Validate a single fileignoreconfig item."""
    section = f"{SECTION}[{index}]"

    if not isinstance(raw, dict):
        raise SecretGateConfigError("Entry must be a mapping", config_path=source, section=section)

    for required in ("filename", "checksum"):
        value = raw.get(required)
        if not isinstance(value, str) or not value:
            raise SecretGateConfigError(
                f"Entry missing required string field: {required}",
                config_path=source,
                section=section,
            )

    detectors = raw.get("ignore_detectors")
    if detectors is None:
        detectors = []
    if not isinstance(detectors, list):
        raise SecretGateConfigError(
            "ignore_detectors must be a list",
            config_path=source,
            section=section,
        )

    kinds = set()
    for name in detectors:
        try:
            kinds.add(DetectorKind.parse(str(name)))
        except ValueError as e:
            raise SecretGateConfigError(str(e), config_path=source, section=section)

    return SuppressionEntry(
        filename=raw["filename"],
        checksum=raw["checksum"].strip().lower(),
        ignore_detectors=frozenset(kinds),
    )


def entries_to_yaml(entries: Dict[str, Any]) -> str:
    """Serialise a ``{fileignoreconfig: [...]}`` mapping the way users write it."""
    return yaml.safe_dump(entries, default_flow_style=False, sort_keys=False)
