"""Command line interface for modlens."""

from .main import main

__all__ = ["main"]
