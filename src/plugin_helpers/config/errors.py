"""Exception types for configuration file handling."""

from __future__ import annotations

from pathlib import Path
from typing import Union


class ConfigurationError(RuntimeError):
    """Raised when a configuration file exists but cannot be used."""

    def __init__(self, message: str, *, path: str = "") -> None:
        super().__init__(message)
        self.path = path

    @classmethod
    def unreadable_file(cls, path: Union[str, Path], reason: str = "") -> "ConfigurationError":
        """Create error for a file that exists but could not be read or decoded."""
        msg = f"Cannot read configuration file {path}"
        if reason:
            msg += f": {reason}"
        return cls(msg, path=str(path))


__all__ = ["ConfigurationError"]
