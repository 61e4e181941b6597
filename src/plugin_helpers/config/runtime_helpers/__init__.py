""".env file parsing."""

from .dotenv_loader import DotenvLoader

__all__ = ["DotenvLoader"]
