"""
Graph clients: read-only access to a link graph, one lookup per call.
"""

from .base import GraphClient
from .memory import InMemoryGraphClient
from .live import LiveWikipediaClient
from .static_db import SqliteGraphClient

__all__ = [
    "GraphClient",
    "InMemoryGraphClient",
    "LiveWikipediaClient",
    "SqliteGraphClient",
]
