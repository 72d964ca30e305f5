"""Recursive one-way and two-way directory synchronization with per-directory filters."""

__version__ = "0.0.0"
__all__ = ["__version__"]