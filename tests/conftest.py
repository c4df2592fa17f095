"""Pytest configuration and shared fixtures."""

import os
import random

import pytest

from seedgraph import clear_seeds, pytest_plugin
from seedgraph.backends import MemoryBackend


def pytest_configure(config):
    # Installed packages load the plugin through the pytest11 entry point
    if not config.pluginmanager.is_registered(pytest_plugin):
        config.pluginmanager.register(pytest_plugin, "seedgraph")


@pytest.fixture(autouse=True)
def clean_registry():
    """Each test starts and ends with an empty global seed registry."""
    clear_seeds()
    yield
    clear_seeds()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def db_conn():
    """
    Provide a test database connection.

    Uses SEEDGRAPH_TEST_DATABASE_URL; tests are skipped when it isn't set or
    the database can't be reached.
    """
    psycopg = pytest.importorskip("psycopg")

    url = os.getenv("SEEDGRAPH_TEST_DATABASE_URL")
    if not url:
        pytest.skip("SEEDGRAPH_TEST_DATABASE_URL not set")

    try:
        conn = psycopg.connect(url, autocommit=False)
    except psycopg.OperationalError as e:
        pytest.skip(f"Database not reachable: {e}")

    yield conn

    # Rollback any changes
    conn.rollback()
    conn.close()
