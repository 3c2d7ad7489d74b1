"""Command-line tools for generating Eclipse encoding preferences."""

from .generate import main

__all__ = ["main"]
