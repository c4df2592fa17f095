"""Named (singleton) dependencies keyed by type."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from seedgraph.exceptions import DuplicateNamedDependencyError

logger = logging.getLogger(__name__)


class NamedDependencies(Mapping[type, Any]):
    """
    Values supplied by the caller that are not produced by any seed.

    Typical uses are shared configuration or identity objects, e.g. the
    tenant every generated row belongs to:

        >>> named = NamedDependencies()
        >>> named.register(Tenant(name="acme"))
        >>> named[Tenant].name
        'acme'
    """

    def __init__(self):
        self._values: dict[type, Any] = {}

    def register(self, value: Any, as_type: type | None = None) -> None:
        """
        Register a value.

        Args:
            value: The dependency value (must not be None)
            as_type: Key to register under (default: type(value))

        Raises:
            ValueError: If value is None
            DuplicateNamedDependencyError: If the type is already registered
        """
        if value is None:
            raise ValueError("Named dependency value must not be None")

        key = as_type if as_type is not None else type(value)
        if key in self._values:
            raise DuplicateNamedDependencyError(key)

        self._values[key] = value
        logger.debug(f"Registered named dependency {key.__name__}")

    def __getitem__(self, key: type) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[type]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"NamedDependencies({[t.__name__ for t in self._values]})"
