"""Entities and seeds shared by the tests."""

from dataclasses import dataclass
from typing import Optional

from seedgraph import Seed


@dataclass(eq=False)
class Tenant:
    name: str


@dataclass(eq=False)
class Country:
    code: str


@dataclass(eq=False)
class Customer:
    name: str
    email: str


@dataclass(eq=False)
class VipCustomer(Customer):
    tier: str = "gold"


@dataclass(eq=False)
class Order:
    customer: Customer
    total: float
    tenant: Optional[Tenant] = None


class CustomerSeed(Seed[Customer]):
    entity_type = Customer
    count = 3

    def single(self):
        return Customer(name=self.fake.name(), email=self.fake.email())


class OrderSeed(Seed[Order]):
    entity_type = Order
    depends_on = (Customer,)
    count = 5

    def single(self):
        customer = self.random.choice(self.dependencies(Customer))
        return Order(customer=customer, total=round(self.random.uniform(1, 500), 2))


class TenantOrderSeed(Seed[Order]):
    """Orders stamped with the named Tenant dependency."""

    entity_type = Order
    depends_on = (Customer,)
    count = 2

    def single(self):
        return Order(
            customer=self.random.choice(self.dependencies(Customer)),
            total=10.0,
            tenant=self.dependency(Tenant),
        )


class MixedCustomerSeed(Seed[Customer]):
    """Every other customer is a VipCustomer."""

    entity_type = Customer
    count = 4

    def single(self):
        if len(self.items) % 2:
            return VipCustomer(name=self.fake.name(), email=self.fake.email())
        return Customer(name=self.fake.name(), email=self.fake.email())


def make_seed(entity_type, depends_on=(), count=None, factory=None):
    """Build a seed class for entity_type without writing one out."""
    build = factory or (lambda seed: entity_type())
    attrs = {
        "entity_type": entity_type,
        "depends_on": tuple(depends_on),
        "single": lambda self: build(self),
    }
    if count is not None:
        attrs["count"] = count
    return type(Seed)(f"{entity_type.__name__}Seed", (Seed,), attrs)


class Alpha:
    pass


class Beta:
    pass


class Gamma:
    pass


class Delta:
    pass
