"""
Pytest configuration and shared fixtures for the wiki_graph tests.
"""

import logging

import pytest

from wiki_graph import InMemoryGraphClient, TaskPool, Wikigraph

# Configure logging for tests
logging.basicConfig(level=logging.INFO)

@pytest.fixture
def path_client() -> InMemoryGraphClient:
    """Directed path A -> B -> C with no reverse links."""
    return InMemoryGraphClient(
        links={1: [2], 2: [3], 3: []},
        names={1: "A", 2: "B", 3: "C"},
    )

@pytest.fixture
def chain_client() -> InMemoryGraphClient:
    """Directed chain 1 -> 2 -> 3 -> 4 -> 5."""
    return InMemoryGraphClient(
        links={1: [2], 2: [3], 3: [4], 4: [5]},
        names={1: "One", 2: "Two", 3: "Three", 4: "Four", 5: "Five"},
    )

@pytest.fixture
def make_graph():
    """Build a Wikigraph over a client with a fresh, unbounded pool."""
    def factory(client, **kwargs) -> Wikigraph:
        kwargs.setdefault("pool", TaskPool())
        return Wikigraph(client, **kwargs)
    return factory
