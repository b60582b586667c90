"""Domain port definitions for adapters."""

from __future__ import annotations

from .directory import DirectoryClient, DirectoryError

__all__ = ["DirectoryClient", "DirectoryError"]
