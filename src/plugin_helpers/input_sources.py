"""
Sources of raw external input for the ``validate_*_input`` helpers.

A web request exposes several key/value collections (query string, posted
form fields, cookies, server variables, environment). Validation never reads
them implicitly; it asks an ``InputSource`` for the raw text of one variable.
"""

from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Protocol, runtime_checkable

from plugin_helpers.config.runtime_helpers import DotenvLoader

logger = logging.getLogger(__name__)


class InputType(Enum):
    """Kind of external collection a variable is read from."""

    GET = "get"
    POST = "post"
    COOKIE = "cookie"
    SERVER = "server"
    ENV = "env"


@runtime_checkable
class InputSource(Protocol):
    def fetch(self, input_type: InputType, name: str) -> Optional[str]:
        """Return the raw text of *name* in the *input_type* collection, or None if absent."""
        ...


def _raw_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, (list, tuple)):
        # Repeated query parameters: the last occurrence wins.
        return _raw_text(value[-1]) if value else None
    return str(value)


class MappingInputSource:
    """Input source backed by one mapping per input kind."""

    def __init__(self, mappings: Optional[Mapping[InputType, Mapping[str, Any]]] = None, **by_name: Mapping[str, Any]) -> None:
        self._mappings: dict[InputType, Mapping[str, Any]] = dict(mappings or {})
        for kind_name, mapping in by_name.items():
            self._mappings[InputType[kind_name.upper()]] = mapping

    def fetch(self, input_type: InputType, name: str) -> Optional[str]:
        mapping = self._mappings.get(input_type)
        if mapping is None or name not in mapping:
            return None
        return _raw_text(mapping[name])


class EnvironmentInputSource:
    """Serves ENV and SERVER variables from the process environment and .env files."""

    _SUPPORTED = (InputType.ENV, InputType.SERVER)

    def __init__(self, environ: Optional[Mapping[str, str]] = None, dotenv_paths: Iterable[Path] = ()) -> None:
        self._environ = environ if environ is not None else os.environ
        self._dotenv_paths = tuple(dotenv_paths)
        self._dotenv_values: Optional[dict[str, str]] = None

    def _fallback_values(self) -> dict[str, str]:
        if self._dotenv_values is None:
            self._dotenv_values = DotenvLoader.load_from_files(self._dotenv_paths)
        return self._dotenv_values

    def fetch(self, input_type: InputType, name: str) -> Optional[str]:
        if input_type not in self._SUPPORTED:
            logger.debug("Environment input source cannot serve %s variable %r", input_type.name, name)
            return None
        value = self._environ.get(name)
        if value is not None:
            return value
        return self._fallback_values().get(name)


def default_input_source() -> InputSource:
    """Input source used when a validation helper is given none."""
    return EnvironmentInputSource()


__all__ = [
    "EnvironmentInputSource",
    "InputSource",
    "InputType",
    "MappingInputSource",
    "default_input_source",
]
