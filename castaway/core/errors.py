from __future__ import annotations


class LoadError(ValueError):
    """Raised when a world description cannot be turned into a World."""
