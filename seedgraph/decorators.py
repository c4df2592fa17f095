"""Pytest decorators for seed data generation."""

from collections.abc import Callable

from seedgraph.seed import Seed


def seed_data(seed_cls: type[Seed], count: int | None = None):
    """
    Decorator to inject seed data into pytest test functions.

    Usage:
        @seed_data(CustomerSeed, count=3)
        @seed_data(OrderSeed)
        def test_orders(seeded):
            assert len(seeded.Customer) == 3

    The decorator works with the `seeded` and `seed_container` pytest
    fixtures provided by the seedgraph pytest plugin.
    """

    def decorator(func: Callable) -> Callable:
        # Get existing seed plans or create new list
        if not hasattr(func, "_seed_plans"):
            func._seed_plans = []

        func._seed_plans.append({"seed": seed_cls, "count": count})

        # Return original function (fixture will handle execution)
        return func

    return decorator
