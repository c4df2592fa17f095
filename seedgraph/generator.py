"""Run resolved seeds and collect their output."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping

from seedgraph.models import Batches
from seedgraph.seed import Seed

logger = logging.getLogger(__name__)


def _produce_all(seeds: Mapping[type, Seed]) -> Iterator[object]:
    for seed in seeds.values():
        yield from seed.produce()


def generate_all(seeds: Mapping[type, Seed]) -> Batches:
    """
    Produce every seed's objects and group them by runtime type.

    Seeds are already wired, so they can run in any order: a seed that
    needs another seed's objects materializes them on first access.

    Args:
        seeds: Resolved seeds, as returned by Resolver.resolve()

    Returns:
        Batches keyed by the concrete class of each object
    """
    batches = Batches.from_objects(_produce_all(seeds))
    logger.info(f"Generated {batches.total} object(s) in {len(batches)} batch(es)")
    return batches
