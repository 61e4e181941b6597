"""Dotenv file loading utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable

from ..errors import ConfigurationError


class DotenvLoader:
    """Loads configuration from .env-style files."""

    @staticmethod
    def load_from_file(path: Path) -> Dict[str, str]:
        """
        Load key-value pairs from a .env file.

        Args:
            path: Path to .env file

        Returns:
            Dictionary of variables; empty when the file does not exist

        Raises:
            ConfigurationError: If the file exists but cannot be read or decoded
        """
        if not path.exists():
            return {}

        values: Dict[str, str] = {}
        try:
            for line in path.read_text(encoding="utf-8").splitlines():
                stripped = line.strip()
                if DotenvLoader._should_skip_line(stripped):
                    continue

                key, value = DotenvLoader._parse_env_line(stripped)
                if key:
                    values[key] = value

        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigurationError.unreadable_file(path, str(exc)) from exc

        return values

    @staticmethod
    def load_from_files(paths: Iterable[Path]) -> Dict[str, str]:
        """Merge several .env files; earlier files take precedence."""
        merged: Dict[str, str] = {}
        for path in paths:
            for key, value in DotenvLoader.load_from_file(path).items():
                merged.setdefault(key, value)
        return merged

    @staticmethod
    def _should_skip_line(line: str) -> bool:
        """Check if line should be skipped."""
        return not line or line.startswith("#") or "=" not in line

    @staticmethod
    def _parse_env_line(line: str) -> tuple[str, str]:
        """Parse a single env line into key and value."""
        key, raw_value = line.split("=", 1)
        key = key.strip()
        if key.startswith("export "):
            key = key[len("export ") :].strip()
        value = raw_value.strip().strip("'").strip('"')
        return key, value
