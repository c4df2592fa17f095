"""Existing-data lookups."""

from seedgraph.backends.memory import MemoryBackend

__all__ = ["MemoryBackend"]
