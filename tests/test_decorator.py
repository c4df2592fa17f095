"""Tests for the @seed_data decorator and pytest fixtures."""

import pytest

from sample_seeds import Customer, CustomerSeed, Order, OrderSeed, Tenant, TenantOrderSeed
from seedgraph import seed_data


@seed_data(CustomerSeed)
@seed_data(OrderSeed, count=4)
def test_seeded_fixture(seeded):
    assert len(seeded.Customer) == 3
    assert len(seeded.Order) == 4


@seed_data(CustomerSeed, count=2)
def test_seed_container_fixture(seed_container):
    assert seed_container.entity(Customer).count == 2
    assert seed_container.generate().counts() == {"Customer": 2}


def test_without_decorator(seeded, seed_container):
    assert seeded is None
    assert seed_container is None


def test_decorator_records_plans():
    @seed_data(CustomerSeed)
    @seed_data(OrderSeed, count=1)
    def fn():
        pass

    assert fn._seed_plans == [
        {"seed": OrderSeed, "count": 1},
        {"seed": CustomerSeed, "count": None},
    ]


class TestWithExistingData:
    @pytest.fixture
    def seed_existing(self, backend):
        return backend.add(Customer(name="Ada", email="ada@example.com"))

    @pytest.fixture
    def seed_named(self):
        return [Tenant(name="acme")]

    @seed_data(CustomerSeed)
    @seed_data(TenantOrderSeed)
    def test_overridden_fixtures(self, seeded):
        assert len(seeded.Customer) == 2
        assert all(order.customer.name == "Ada" for order in seeded[Order])
        assert all(order.tenant.name == "acme" for order in seeded[Order])
