"""Data models for generated output."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any


class Batches(Mapping[type, list[Any]]):
    """
    Generated objects grouped by runtime type.

    One batch per concrete class, suitable for one bulk insert per type.
    Batches keep the order in which each type was first seen.

    Allows accessing batches by class or by class name:
        batches[Customer]   # List of Customer objects
        batches.Customer    # Same list
    """

    def __init__(self, groups: Mapping[type, list[Any]] | None = None):
        self._groups: dict[type, list[Any]] = dict(groups or {})

    @classmethod
    def from_objects(cls, objects: Iterable[Any]) -> Batches:
        """
        Group objects by type(obj).

        Args:
            objects: Any iterable of generated objects

        Returns:
            Batches with one entry per concrete type
        """
        groups: dict[type, list[Any]] = {}
        for obj in objects:
            groups.setdefault(type(obj), []).append(obj)
        return cls(groups)

    def __getitem__(self, key: type) -> list[Any]:
        return self._groups[key]

    def __iter__(self) -> Iterator[type]:
        return iter(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    def __getattr__(self, name: str) -> list[Any]:
        """
        Allow attribute access to batches by class name.

        Raises:
            AttributeError: If no batch has a type with that name
        """
        if name.startswith("_"):
            raise AttributeError(f"No attribute '{name}'")
        for entity_type, objects in self._groups.items():
            if entity_type.__name__ == name:
                return objects
        raise AttributeError(f"No batch for type '{name}'")

    def __repr__(self) -> str:
        return f"Batches({self.counts()})"

    @property
    def total(self) -> int:
        """Total number of objects across all batches."""
        return sum(len(objects) for objects in self._groups.values())

    def counts(self) -> dict[str, int]:
        """Object count per type name."""
        return {t.__name__: len(objects) for t, objects in self._groups.items()}
