"""SeedContainer API: load dependencies and seeds, then generate."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from seedgraph.config import Config
from seedgraph.exceptions import SeedGraphError, UnknownSeedError
from seedgraph.generator import generate_all
from seedgraph.models import Batches
from seedgraph.named import NamedDependencies
from seedgraph.registry import list_seeds
from seedgraph.resolver import ExistingLookup, Resolver
from seedgraph.seed import Seed

logger = logging.getLogger(__name__)


class SeedContainer:
    """
    One-shot container for a resolution run.

    Usage:
        >>> container = SeedContainer(existing=backend)
        >>> container.load_dependency(Tenant(name="acme"))
        >>> container.load_seeds([CustomerSeed, OrderSeed])
        >>> batches = container.generate()
        >>> len(batches[Customer])
        20

    Named dependencies must be loaded before load_seeds(); seeds are
    resolved once and never re-resolved.
    """

    def __init__(
        self,
        existing: ExistingLookup | None = None,
        config: Config | None = None,
        rng: random.Random | None = None,
    ):
        """
        Initialize container.

        Args:
            existing: Existing-data lookup (default: no existing data)
            config: Configuration (default: Config())
            rng: Random source (default: seeded from config.generation.random_seed)
        """
        self.config = config if config is not None else Config()
        self.existing = existing
        self.rng = rng if rng is not None else random.Random(self.config.generation.random_seed)
        self._named = NamedDependencies()
        self._seeds: dict[type, Seed] | None = None

    def load_dependency(self, value: Any, as_type: type | None = None) -> SeedContainer:
        """
        Register a named (singleton) dependency.

        Args:
            value: Dependency value
            as_type: Type to register under (default: type(value))

        Returns:
            Self for chaining

        Raises:
            DuplicateNamedDependencyError: If the type is already registered
            SeedGraphError: If seeds are already loaded
        """
        if self._seeds is not None:
            raise SeedGraphError("Named dependencies must be loaded before load_seeds()")
        self._named.register(value, as_type=as_type)
        return self

    def load_seeds(
        self,
        seeds: Iterable[type[Seed]] | None = None,
        counts: Mapping[type, int] | None = None,
    ) -> Mapping[type, Seed]:
        """
        Resolve seed definitions.

        Args:
            seeds: Seed classes (default: every seed in the global registry)
            counts: Count overrides keyed by entity type; these win over
                config counts

        Returns:
            Read-only view of the resolved seeds keyed by entity type

        Raises:
            SeedGraphError: If seeds were already loaded, or any resolution error
        """
        if self._seeds is not None:
            raise SeedGraphError("Seeds are already loaded; create a new SeedContainer")

        seed_classes = list(seeds) if seeds is not None else list_seeds()
        generation = self.config.generation

        merged = self._config_counts(seed_classes)
        merged.update(counts or {})

        resolver = Resolver(
            existing=self.existing,
            named=self._named,
            rng=self.rng,
            locale=generation.faker_locale,
        )
        self._seeds = resolver.resolve(
            seed_classes, counts=merged, default_count=generation.default_count
        )
        return self.seeds

    def _config_counts(self, seed_classes: list[type[Seed]]) -> dict[type, int]:
        """Map config counts (keyed by class name) to entity types."""
        by_name = {cls.entity_type.__name__: cls.entity_type for cls in seed_classes}
        counts: dict[type, int] = {}
        for name, count in self.config.generation.counts.items():
            entity_type = by_name.get(name)
            if entity_type is None:
                logger.warning(f"Configured count for '{name}' matches no seed")
                continue
            counts[entity_type] = count
        return counts

    @property
    def seeds(self) -> Mapping[type, Seed]:
        """Resolved seeds keyed by entity type."""
        return MappingProxyType(self._require_seeds())

    def entity(self, entity_type: type) -> Seed:
        """
        Get the resolved seed for an entity type.

        Raises:
            UnknownSeedError: If no seed was resolved for the type
        """
        seeds = self._require_seeds()
        if entity_type not in seeds:
            raise UnknownSeedError(entity_type)
        return seeds[entity_type]

    def generate(self) -> Batches:
        """
        Produce all objects, grouped by runtime type.

        Returns:
            Batches ready for one bulk insert per type
        """
        return generate_all(self._require_seeds())

    def _require_seeds(self) -> dict[type, Seed]:
        if self._seeds is None:
            raise SeedGraphError("No seeds loaded; call load_seeds() first")
        return self._seeds
