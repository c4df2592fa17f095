"""Custom exceptions with helpful error messages."""

from __future__ import annotations

from collections.abc import Iterable


def _type_name(value: object) -> str:
    return getattr(value, "__name__", repr(value))


class SeedGraphError(Exception):
    """Base exception for seedgraph errors."""

    pass


class CyclicDependencyError(SeedGraphError):
    """No seed could be resolved during a full pass."""

    def __init__(self, types: Iterable[type]):
        self.types = frozenset(types)
        names = ", ".join(sorted(_type_name(t) for t in self.types))
        super().__init__(
            f"Circular dependency detected between the following types: {names}\n\n"
            f"Suggestions:\n"
            f"1. Check the depends_on declarations of these seeds for cycles\n"
            f"2. Load one of the types as existing data to break the cycle\n"
            f"3. A seed cannot depend on its own entity type"
        )


class UndeclaredDependencyError(SeedGraphError):
    """Seed accessed a dependency type it never declared."""

    def __init__(self, seed: object, dependency: type):
        self.seed = seed
        self.dependency = dependency
        seed_name = _type_name(type(seed))
        dep_name = _type_name(dependency)
        super().__init__(
            f"Seed '{seed_name}' accessed '{dep_name}', "
            f"which isn't marked as a dependency.\n\n"
            f"Suggestions:\n"
            f"1. Declare it on the seed:\n"
            f"   class {seed_name}(Seed):\n"
            f"       depends_on = (..., {dep_name})"
        )


class MissingDependencyError(SeedGraphError):
    """Declared dependency has no seed and no existing data."""

    def __init__(self, seed: object, dependency: type):
        self.seed = seed
        self.dependency = dependency
        seed_name = _type_name(seed if isinstance(seed, type) else type(seed))
        dep_name = _type_name(dependency)
        super().__init__(
            f"Seed '{seed_name}' depends on '{dep_name}', "
            f"but no items of type '{dep_name}' are available.\n\n"
            f"Suggestions:\n"
            f"1. Add a seed whose entity_type is {dep_name}\n"
            f"2. Make sure the existing-data lookup returns {dep_name} objects"
        )


class DuplicateNamedDependencyError(SeedGraphError, ValueError):
    """Named dependency registered twice for the same type."""

    def __init__(self, dependency_type: type):
        self.dependency_type = dependency_type
        super().__init__(
            f"A named dependency of type '{_type_name(dependency_type)}' "
            f"is already registered.\n\n"
            f"Suggestions:\n"
            f"1. Register each named dependency type only once\n"
            f"2. Use as_type= to register the value under a different type"
        )


class NamedDependencyNotFoundError(SeedGraphError, LookupError):
    """Seed asked for a named dependency that was never registered."""

    def __init__(self, seed: object, dependency_type: type):
        self.seed = seed
        self.dependency_type = dependency_type
        dep_name = _type_name(dependency_type)
        super().__init__(
            f"Seed '{_type_name(type(seed))}' requested named dependency "
            f"'{dep_name}', but none was loaded.\n\n"
            f"Suggestions:\n"
            f"1. container.load_dependency(value)  # value of type {dep_name}"
        )


class InstantiationError(SeedGraphError):
    """Seed definition could not be constructed."""

    def __init__(self, seed_cls: type, reason: str):
        self.seed_cls = seed_cls
        super().__init__(
            f"Could not create instance of {_type_name(seed_cls)}: {reason}\n\n"
            f"Suggestions:\n"
            f"1. Seeds are constructed as SeedClass(rng=...); "
            f"make sure __init__ accepts that signature\n"
            f"2. Move required state into named dependencies"
        )


class InvalidSeedError(SeedGraphError):
    """Seed definition failed registration checks."""

    def __init__(self, seed_cls: object, reason: str):
        self.seed_cls = seed_cls
        super().__init__(f"Invalid seed definition '{_type_name(seed_cls)}': {reason}")


class DuplicateSeedError(SeedGraphError):
    """Two seed definitions produce the same entity type."""

    def __init__(self, entity_type: type, existing: type, new: type):
        self.entity_type = entity_type
        super().__init__(
            f"Seeds '{_type_name(existing)}' and '{_type_name(new)}' both produce "
            f"'{_type_name(entity_type)}'.\n\n"
            f"Suggestions:\n"
            f"1. Keep a single seed per entity type\n"
            f"2. Call clear_seeds() between tests that register seeds"
        )


class NullObjectError(SeedGraphError):
    """Seed factory returned None."""

    def __init__(self, seed: object):
        self.seed = seed
        super().__init__(f"Seed '{_type_name(type(seed))}' returned None from single().")


class UnknownSeedError(SeedGraphError, KeyError):
    """No resolved seed for the requested entity type."""

    def __init__(self, entity_type: type):
        self.entity_type = entity_type
        super().__init__(f"No seed resolved for entity type '{_type_name(entity_type)}'")

    def __str__(self) -> str:
        return str(self.args[0])


class ConfigError(SeedGraphError, ValueError):
    """Configuration file could not be parsed or validated."""

    def __init__(self, path: object, reason: str):
        self.path = path
        super().__init__(
            f"Invalid configuration in {path}:\n{reason}\n\n"
            f"Suggestions:\n"
            f"1. Check the file is valid TOML\n"
            f"2. Compare it against the output of Config().to_toml(...)"
        )
