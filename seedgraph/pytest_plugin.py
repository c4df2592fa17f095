"""Pytest plugin: fixtures that work with the @seed_data() decorator."""

import pytest

from seedgraph.backends.memory import MemoryBackend
from seedgraph.container import SeedContainer


@pytest.fixture
def seed_existing():
    """
    Existing-data lookup used by seed_container.

    Override in a conftest.py to point at a real store; the default is an
    empty in-memory backend.
    """
    return MemoryBackend()


@pytest.fixture
def seed_named():
    """Named dependencies loaded into seed_container. Override to supply values."""
    return []


@pytest.fixture
def seed_container(request, seed_existing, seed_named):
    """
    Resolved SeedContainer for the seeds declared with @seed_data().

    Returns None when the test function has no @seed_data() decorators.
    """
    plans = getattr(request.function, "_seed_plans", None)
    if not plans:
        return None

    container = SeedContainer(existing=seed_existing)
    for value in seed_named:
        container.load_dependency(value)

    counts = {
        plan["seed"].entity_type: plan["count"]
        for plan in plans
        if plan["count"] is not None
    }
    container.load_seeds([plan["seed"] for plan in plans], counts=counts)
    return container


@pytest.fixture
def seeded(seed_container):
    """Generated Batches for the seeds declared with @seed_data()."""
    if seed_container is None:
        return None
    return seed_container.generate()
