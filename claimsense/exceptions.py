"""
Exception hierarchy for the claim decision support system.

The analytical core is total over its inputs and never raises; these errors
are reserved for configuration-time problems such as unreadable data tables.
"""

from pathlib import Path
from typing import Optional


class ClaimSenseError(Exception):
    """Base exception for all claimsense errors."""


class StoreLoadError(ClaimSenseError):
    """Raised when a knowledge or decision history table cannot be loaded."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        if path is not None:
            message = f"{message} ({path})"
        super().__init__(message)
