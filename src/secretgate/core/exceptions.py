# SPDX-License-Identifier: MIT
"""secretgate custom exceptions."""

from __future__ import annotations

from typing import Optional, Sequence


class SecretGateConfigError(Exception):
    """Raised when the suppression file is missing or invalid."""

    def __init__(self, message: str, config_path: str = None, section: str = None):
        self.config_path = config_path
        self.section = section
        super().__init__(message)

    def __str__(self):
        msg = super().__str__()
        if self.config_path:
            msg += f" (config: {self.config_path})"
        if self.section:
            msg += f" (section: {self.section})"
        return msg


class GitError(Exception):
    """Raised when a git command needed to collect additions fails."""

    def __init__(self, message: str, command: Optional[Sequence[str]] = None):
        self.command = list(command) if command else None
        super().__init__(message)

    def __str__(self):
        msg = super().__str__()
        if self.command:
            msg += f" (command: {' '.join(self.command)})"
        return msg
