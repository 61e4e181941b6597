"""Configuration file helpers backing the environment input source."""

from .errors import ConfigurationError
from .runtime_helpers import DotenvLoader

__all__ = ["ConfigurationError", "DotenvLoader"]
