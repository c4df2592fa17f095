"""Dependency resolution: order, instantiate and wire seed definitions."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType
from typing import Any

from seedgraph.exceptions import (
    CyclicDependencyError,
    DuplicateSeedError,
    InstantiationError,
    InvalidSeedError,
    MissingDependencyError,
)
from seedgraph.seed import Seed

logger = logging.getLogger(__name__)

ExistingLookup = Callable[[type], Iterable[Any]]


def empty_lookup(entity_type: type) -> list[Any]:
    """Existing-data lookup for an empty store."""
    return []


class Resolver:
    """
    Resolve seed definitions into wired seed instances.

    Resolution runs in passes. In each pass every pending seed whose
    dependencies are all available (as resolved seeds or existing data) is
    instantiated and wired. A pass that resolves nothing means the remaining
    seeds depend on each other.

    Example:
        >>> resolver = Resolver(existing=backend, named={Tenant: tenant})
        >>> seeds = resolver.resolve([CustomerSeed, OrderSeed])
        >>> list(seeds)
        [<class 'Customer'>, <class 'Order'>]
    """

    def __init__(
        self,
        existing: ExistingLookup | None = None,
        named: Mapping[type, Any] | None = None,
        rng: random.Random | None = None,
        locale: str | None = None,
    ):
        """
        Initialize resolver.

        Args:
            existing: Callable returning already-persisted objects for a type
            named: Singleton values keyed by type
            rng: Parent random source; each seed gets one derived from it
            locale: Faker locale applied to every seed (default: per seed)
        """
        self.existing = existing if existing is not None else empty_lookup
        self.named = MappingProxyType(dict(named or {}))
        self.rng = rng if rng is not None else random.Random()
        self.locale = locale

    def resolve(
        self,
        seeds: Iterable[type[Seed]],
        counts: Mapping[type, int] | None = None,
        default_count: int | None = None,
    ) -> dict[type, Seed]:
        """
        Resolve seed definitions in dependency order.

        Args:
            seeds: Seed classes to resolve
            counts: Count overrides keyed by entity type
            default_count: Count for seeds that don't declare their own

        Returns:
            Wired seeds keyed by entity type, in resolution order

        Raises:
            InvalidSeedError: If a seed definition is invalid
            DuplicateSeedError: If two seeds produce the same type
            MissingDependencyError: If nothing can ever supply a dependency
            CyclicDependencyError: If the remaining seeds can't make progress
            InstantiationError: If a seed can't be constructed
        """
        definitions = self._collect(seeds)
        counts = dict(counts or {})
        for entity_type in counts:
            if entity_type not in definitions:
                logger.warning(f"Count override for {entity_type.__name__} has no seed")

        existing_items = self._load_existing(definitions)
        self._check_suppliers(definitions, existing_items)

        pending = dict(definitions)
        resolved: dict[type, Seed] = {}
        pass_number = 0

        while pending:
            pass_number += 1
            ready = [
                seed_cls
                for seed_cls in pending.values()
                if all(
                    dep in resolved or dep in existing_items
                    for dep in seed_cls.dependency_types()
                )
            ]

            if not ready:
                raise CyclicDependencyError(pending.keys())

            for seed_cls in ready:
                seed = self._instantiate(seed_cls)
                self._apply_count(seed, counts, default_count)

                # Types covered by existing data are served from existing_items
                seed_dependencies = {
                    dep: resolved[dep]
                    for dep in seed_cls.dependency_types()
                    if dep not in existing_items
                }
                seed._wire(seed_dependencies, existing_items, self.named)
                resolved[seed_cls.entity_type] = seed

            for seed_cls in ready:
                del pending[seed_cls.entity_type]

            logger.debug(
                f"Pass {pass_number}: resolved {[s.__name__ for s in ready]}, "
                f"{len(pending)} pending"
            )

        logger.info(f"Resolved {len(resolved)} seed(s) in {pass_number} pass(es)")
        return resolved

    def _collect(self, seeds: Iterable[type[Seed]]) -> dict[type, type[Seed]]:
        """Validate seed classes and key them by entity type."""
        definitions: dict[type, type[Seed]] = {}
        for seed_cls in seeds:
            if not (isinstance(seed_cls, type) and issubclass(seed_cls, Seed)):
                raise InvalidSeedError(seed_cls, "must be a subclass of Seed")
            seed_cls.validate()

            existing = definitions.get(seed_cls.entity_type)
            if existing is not None:
                raise DuplicateSeedError(seed_cls.entity_type, existing, seed_cls)
            definitions[seed_cls.entity_type] = seed_cls
        return definitions

    def _load_existing(
        self, definitions: Mapping[type, type[Seed]]
    ) -> Mapping[type, tuple[Any, ...]]:
        """Query existing data once per entity and dependency type."""
        wanted: dict[type, None] = dict.fromkeys(definitions)
        for seed_cls in definitions.values():
            wanted.update(dict.fromkeys(seed_cls.dependency_types()))

        existing_items: dict[type, tuple[Any, ...]] = {}
        for entity_type in wanted:
            items = tuple(self.existing(entity_type))
            if items:
                existing_items[entity_type] = items
                logger.debug(f"Found {len(items)} existing {entity_type.__name__} item(s)")

        return MappingProxyType(existing_items)

    @staticmethod
    def _check_suppliers(
        definitions: Mapping[type, type[Seed]],
        existing_items: Mapping[type, tuple[Any, ...]],
    ) -> None:
        """Every dependency needs a seed or existing data."""
        for seed_cls in definitions.values():
            for dep in seed_cls.dependency_types():
                if dep not in definitions and dep not in existing_items:
                    raise MissingDependencyError(seed_cls, dep)

    def _instantiate(self, seed_cls: type[Seed]) -> Seed:
        rng = random.Random(self.rng.getrandbits(64))
        try:
            seed = seed_cls(rng=rng)
        except Exception as e:
            raise InstantiationError(seed_cls, str(e) or type(e).__name__) from e

        if self.locale is not None:
            seed.locale = self.locale
        return seed

    @staticmethod
    def _apply_count(
        seed: Seed, counts: Mapping[type, int], default_count: int | None
    ) -> None:
        if seed.entity_type in counts:
            count = counts[seed.entity_type]
        elif default_count is not None and not _declares_count(type(seed)):
            count = default_count
        else:
            return

        if count < 0:
            raise InvalidSeedError(type(seed), f"count must be non-negative, got {count}")
        seed.count = count


def _declares_count(seed_cls: type[Seed]) -> bool:
    """Whether a subclass sets count itself rather than inheriting the default."""
    return any("count" in vars(cls) for cls in seed_cls.__mro__ if cls is not Seed)


def resolve(
    seeds: Iterable[type[Seed]],
    existing: ExistingLookup | None = None,
    named: Mapping[type, Any] | None = None,
    counts: Mapping[type, int] | None = None,
    rng: random.Random | None = None,
) -> dict[type, Seed]:
    """
    Resolve seed definitions (convenience wrapper around Resolver).

    Args:
        seeds: Seed classes to resolve
        existing: Existing-data lookup
        named: Singleton values keyed by type
        counts: Count overrides keyed by entity type
        rng: Random source

    Returns:
        Wired seeds keyed by entity type
    """
    return Resolver(existing=existing, named=named, rng=rng).resolve(seeds, counts=counts)
