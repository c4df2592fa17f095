"""
seedgraph - Dependency-Ordered Test Fixture Generation

Define one seed per entity type, declare what it depends on, and let the
resolver build and wire seeds so dependencies are always produced first.
"""

__version__ = "0.1.0"

from seedgraph.container import SeedContainer
from seedgraph.decorators import seed_data
from seedgraph.exceptions import (
    ConfigError,
    CyclicDependencyError,
    DuplicateNamedDependencyError,
    DuplicateSeedError,
    InstantiationError,
    InvalidSeedError,
    MissingDependencyError,
    NamedDependencyNotFoundError,
    NullObjectError,
    SeedGraphError,
    UndeclaredDependencyError,
    UnknownSeedError,
)
from seedgraph.generator import generate_all
from seedgraph.models import Batches
from seedgraph.named import NamedDependencies
from seedgraph.registry import clear_seeds, list_seeds, register_seed
from seedgraph.resolver import Resolver, resolve
from seedgraph.seed import Seed

__all__ = [
    "Batches",
    "ConfigError",
    "CyclicDependencyError",
    "DuplicateNamedDependencyError",
    "DuplicateSeedError",
    "InstantiationError",
    "InvalidSeedError",
    "MissingDependencyError",
    "NamedDependencies",
    "NamedDependencyNotFoundError",
    "NullObjectError",
    "Resolver",
    "Seed",
    "SeedContainer",
    "SeedGraphError",
    "UndeclaredDependencyError",
    "UnknownSeedError",
    "__version__",
    "clear_seeds",
    "generate_all",
    "list_seeds",
    "register_seed",
    "resolve",
    "seed_data",
]
