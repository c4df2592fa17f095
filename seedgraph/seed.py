"""Seed base class: one seed produces objects of one entity type."""

from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from typing import Any, ClassVar, Generic, TypeVar

from faker import Faker

from seedgraph.exceptions import (
    InvalidSeedError,
    MissingDependencyError,
    NamedDependencyNotFoundError,
    NullObjectError,
    SeedGraphError,
    UndeclaredDependencyError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
D = TypeVar("D")

DEFAULT_COUNT = 20


class Seed(ABC, Generic[T]):
    """
    Base class for seed definitions.

    Subclass this once per entity type. Declare the produced type and the
    types it needs, then implement single():

        >>> class OrderSeed(Seed[Order]):
        ...     entity_type = Order
        ...     depends_on = (Customer,)
        ...     count = 50
        ...
        ...     def single(self):
        ...         customer = self.random.choice(self.dependencies(Customer))
        ...         return Order(customer=customer, total=self.fake.pyfloat(positive=True))

    Instances are created by the Resolver, once per resolution run, with a
    dedicated random source. Objects are produced lazily by produce() and
    memoized in items.

    Attributes:
        entity_type: Class of the objects this seed produces
        depends_on: Entity types that must be available before this seed runs
        count: Desired number of objects (default: 20)
        locale: Faker locale used by the fake attribute
    """

    entity_type: ClassVar[type]
    depends_on: ClassVar[tuple[type, ...]] = ()
    count: int = DEFAULT_COUNT
    locale: str = "en_US"

    def __init__(self, rng: random.Random | None = None):
        """
        Initialize seed.

        Args:
            rng: Random source for this seed (a fresh unseeded one if omitted)
        """
        self.random = rng if rng is not None else random.Random()
        self.items: list[T] = []
        self._fake: Faker | None = None
        self._wired = False
        self._dependencies: dict[type, Seed[Any]] = {}
        self._existing_items: Mapping[type, tuple[Any, ...]] | None = None
        self._named: Mapping[type, Any] = {}

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} entity_type={self.entity_type.__name__} "
            f"count={self.count} items={len(self.items)}>"
        )

    @classmethod
    def validate(cls) -> None:
        """
        Check the class-level declaration.

        Raises:
            InvalidSeedError: If entity_type, depends_on or count is invalid
        """
        entity_type = getattr(cls, "entity_type", None)
        if not isinstance(entity_type, type):
            raise InvalidSeedError(cls, "entity_type must be a class")

        depends_on = cls.depends_on
        if not isinstance(depends_on, (tuple, list, set, frozenset)):
            raise InvalidSeedError(cls, "depends_on must be a tuple of classes")
        for dependency in depends_on:
            if not isinstance(dependency, type):
                raise InvalidSeedError(
                    cls, f"depends_on contains {dependency!r}, which is not a class"
                )

        if not isinstance(cls.count, int) or cls.count < 0:
            raise InvalidSeedError(cls, f"count must be a non-negative int, got {cls.count!r}")

    @classmethod
    def dependency_types(cls) -> tuple[type, ...]:
        """Declared dependency types, de-duplicated, in declaration order."""
        return tuple(dict.fromkeys(cls.depends_on))

    @property
    def fake(self) -> Faker:
        """Faker instance seeded from this seed's random source."""
        if self._fake is None:
            self._fake = Faker(self.locale)
            self._fake.seed_instance(self.random.getrandbits(32))
        return self._fake

    @property
    def has_existing(self) -> bool:
        """Whether the store already holds objects of this seed's entity type."""
        return bool(self._existing_items) and self.entity_type in self._existing_items

    @property
    def existing_count(self) -> int:
        """Number of already-persisted objects of this seed's entity type."""
        if not self.has_existing:
            return 0
        return len(self._existing_items[self.entity_type])

    @property
    def remaining(self) -> int:
        """Number of objects produce() would still create."""
        return max(0, self.count - (self.existing_count + len(self.items)))

    @abstractmethod
    def single(self) -> T:
        """Create one new object of entity_type."""

    def produce(self) -> Iterator[T]:
        """
        Lazily yield this seed's objects.

        Objects created by earlier calls are replayed first, then new ones
        are created until count is met. Existing data for entity_type counts
        towards count. Overlapping generators share items, so together they
        never create more than count objects.

        Raises:
            NullObjectError: If single() returns None
        """
        index = 0
        while True:
            # Replay by position: another generator may have appended meanwhile
            if index < len(self.items):
                yield self.items[index]
                index += 1
                continue

            if self.existing_count + len(self.items) >= self.count:
                return

            item = self.single()
            if item is None:
                raise NullObjectError(self)
            self.items.append(item)

    def materialize(self) -> tuple[T, ...]:
        """Run produce() to completion and return a snapshot of items."""
        for _ in self.produce():
            pass
        return tuple(self.items)

    def dependencies(self, dependency_type: type[D]) -> tuple[D, ...]:
        """
        Get the objects available for a dependency type.

        Existing (already-persisted) data takes precedence over objects
        generated by another seed.

        Args:
            dependency_type: Entity type to look up

        Returns:
            Existing objects, or the materialized items of the resolved seed,
            as a tuple so callers can't change another seed's items

        Raises:
            UndeclaredDependencyError: If the type isn't in depends_on
            MissingDependencyError: If nothing supplies the type
        """
        if self._existing_items and dependency_type in self._existing_items:
            return self._existing_items[dependency_type]

        if dependency_type not in self.depends_on:
            raise UndeclaredDependencyError(self, dependency_type)

        seed = self._dependencies.get(dependency_type)
        if seed is None:
            raise MissingDependencyError(self, dependency_type)

        return seed.materialize()

    def dependency(self, dependency_type: type[D]) -> D:
        """
        Get a named (singleton) dependency.

        Raises:
            NamedDependencyNotFoundError: If no value was loaded for the type
        """
        try:
            return self._named[dependency_type]
        except KeyError:
            raise NamedDependencyNotFoundError(self, dependency_type) from None

    def _wire(
        self,
        dependencies: Mapping[type, Seed[Any]],
        existing_items: Mapping[type, tuple[Any, ...]] | None,
        named: Mapping[type, Any],
    ) -> None:
        """Attach resolved dependencies. Called once by the Resolver."""
        if self._wired:
            raise SeedGraphError(f"Seed '{type(self).__name__}' is already wired")

        self._dependencies = dict(dependencies)
        self._existing_items = existing_items
        self._named = named
        self._wired = True
        logger.debug(
            f"Wired {type(self).__name__}: seeds={[t.__name__ for t in self._dependencies]}, "
            f"named={[t.__name__ for t in self._named]}"
        )
