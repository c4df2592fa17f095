"""Memory backend - in-memory existing data for tests without a database."""

from __future__ import annotations

from typing import Any


class MemoryBackend:
    """
    In-memory store of already-persisted objects.

    Use as the existing-data lookup when a test wants to simulate rows that
    are already in the database (reference data, a previous seeding step).
    Objects are grouped by their runtime type.

    Example:
        >>> backend = MemoryBackend()
        >>> backend.add(Country("NL"), Country("BE"))
        >>> len(backend(Country))
        2
    """

    def __init__(self):
        """Initialize memory backend with empty state."""
        self._data: dict[type, list[Any]] = {}

    def add(self, *objects: Any) -> MemoryBackend:
        """
        Store objects, grouped by type(obj).

        Returns:
            Self for chaining
        """
        for obj in objects:
            self._data.setdefault(type(obj), []).append(obj)
        return self

    def __call__(self, entity_type: type) -> list[Any]:
        """
        Get stored objects of a type.

        Args:
            entity_type: Entity class

        Returns:
            Copy of the stored objects (empty list when none)
        """
        return list(self._data.get(entity_type, []))

    def clear(self) -> None:
        """Clear all in-memory data."""
        self._data.clear()
