"""Tests for existing-data lookups."""

import random

import pytest

from sample_seeds import Country, Customer, CustomerSeed, Order, OrderSeed
from seedgraph import SeedContainer


def test_memory_backend_groups_by_type(backend):
    nl, be = Country("NL"), Country("BE")
    backend.add(nl, Customer(name="Ada", email="ada@example.com"), be)

    assert backend(Country) == [nl, be]
    assert len(backend(Customer)) == 1
    assert backend(Order) == []


def test_memory_backend_returns_copies(backend):
    backend.add(Country("NL"))

    backend(Country).clear()

    assert len(backend(Country)) == 1


def test_memory_backend_clear(backend):
    backend.add(Country("NL"))
    backend.clear()

    assert backend(Country) == []


class Manufacturer:
    def __init__(self, id, name):
        self.id = id
        self.name = name


@pytest.fixture
def manufacturer_table(db_conn):
    with db_conn.cursor() as cur:
        cur.execute("DROP SCHEMA IF EXISTS seedgraph_test CASCADE")
        cur.execute("CREATE SCHEMA seedgraph_test")
        cur.execute(
            """
            CREATE TABLE seedgraph_test.tb_manufacturer (
                id INTEGER PRIMARY KEY,
                name TEXT NOT NULL
            )
            """
        )
        cur.execute(
            "INSERT INTO seedgraph_test.tb_manufacturer (id, name) VALUES (1, 'Acme'), (2, 'Beta')"
        )

    yield "tb_manufacturer"

    db_conn.rollback()


@pytest.mark.postgres
def test_postgres_backend_fetches_rows(db_conn, manufacturer_table):
    from seedgraph.backends.postgres import PostgresBackend

    backend = PostgresBackend(
        db_conn, {Manufacturer: manufacturer_table}, schema="seedgraph_test"
    )

    manufacturers = backend(Manufacturer)

    assert sorted(m.name for m in manufacturers) == ["Acme", "Beta"]
    assert backend(Customer) == []


@pytest.mark.postgres
def test_postgres_backend_unknown_table(db_conn, manufacturer_table):
    from seedgraph.backends.postgres import PostgresBackend, TableNotFoundError

    with pytest.raises(TableNotFoundError, match="tb_missing"):
        PostgresBackend(db_conn, {Manufacturer: "tb_missing"}, schema="seedgraph_test")


@pytest.mark.postgres
def test_postgres_backend_row_factory(db_conn, manufacturer_table):
    from seedgraph.backends.postgres import PostgresBackend

    backend = PostgresBackend(
        db_conn,
        {Customer: manufacturer_table},
        schema="seedgraph_test",
        row_factory=lambda entity_type, row: entity_type(
            name=row["name"], email=f"{row['id']}@example.com"
        ),
    )
    container = SeedContainer(existing=backend, rng=random.Random(1))
    container.load_seeds([CustomerSeed, OrderSeed])

    batches = container.generate()

    # Two existing customers, so CustomerSeed (count=3) creates one more
    assert len(batches[Customer]) == 1
    assert {o.customer.name for o in batches[Order]} <= {"Acme", "Beta"}
