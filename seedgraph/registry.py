"""Seed registry for explicit seed registration."""

from __future__ import annotations

import importlib
import logging

from seedgraph.exceptions import DuplicateSeedError, InvalidSeedError
from seedgraph.seed import Seed

logger = logging.getLogger(__name__)


class SeedRegistry:
    """Registry of seed definitions, keyed by entity type."""

    def __init__(self):
        self._seeds: dict[type, type[Seed]] = {}

    def register(self, seed_cls: type[Seed]) -> type[Seed]:
        """
        Register a seed definition.

        Args:
            seed_cls: Seed subclass

        Returns:
            The seed class (so this can be used as a decorator)

        Raises:
            InvalidSeedError: If seed_cls is not a valid Seed subclass
            DuplicateSeedError: If another seed already produces the same type
        """
        if not (isinstance(seed_cls, type) and issubclass(seed_cls, Seed)):
            raise InvalidSeedError(seed_cls, "must be a subclass of Seed")
        seed_cls.validate()

        existing = self._seeds.get(seed_cls.entity_type)
        if existing is not None and existing is not seed_cls:
            raise DuplicateSeedError(seed_cls.entity_type, existing, seed_cls)

        self._seeds[seed_cls.entity_type] = seed_cls
        logger.debug(f"Registered seed {seed_cls.__name__} for {seed_cls.entity_type.__name__}")
        return seed_cls

    def get(self, entity_type: type) -> type[Seed] | None:
        """
        Get seed by entity type.

        Returns:
            Seed class or None if not found
        """
        return self._seeds.get(entity_type)

    def list_seeds(self) -> list[type[Seed]]:
        """List all registered seeds in registration order."""
        return list(self._seeds.values())

    def clear(self) -> None:
        """Clear all registered seeds (for testing)."""
        self._seeds.clear()

    def __len__(self) -> int:
        return len(self._seeds)

    def __contains__(self, seed_cls: object) -> bool:
        return seed_cls in self._seeds.values()


# Global registry instance
_registry = SeedRegistry()


def get_registry() -> SeedRegistry:
    """Return the global registry."""
    return _registry


def register_seed(seed_cls: type[Seed]) -> type[Seed]:
    """
    Register a seed in the global registry (user-facing API).

    Example:
        >>> from seedgraph import Seed, register_seed
        >>>
        >>> @register_seed
        ... class CustomerSeed(Seed[Customer]):
        ...     entity_type = Customer
        ...
        ...     def single(self):
        ...         return Customer(name=self.fake.name())
    """
    return _registry.register(seed_cls)


def list_seeds() -> list[type[Seed]]:
    """List all seeds in the global registry."""
    return _registry.list_seeds()


def clear_seeds() -> None:
    """Clear the global registry (for testing)."""
    _registry.clear()


def load_module(path: str) -> list[type[Seed]]:
    """
    Import a module so its @register_seed decorators run.

    Args:
        path: Dotted module path, e.g. "myapp.tests.seeds"

    Returns:
        All seeds in the global registry after the import

    Raises:
        ModuleNotFoundError: If the module can't be imported
    """
    importlib.import_module(path)
    seeds = _registry.list_seeds()
    logger.info(f"Loaded {len(seeds)} seed(s) after importing {path}")
    return seeds
