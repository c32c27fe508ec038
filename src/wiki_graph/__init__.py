"""
wiki_graph - distances in a lazily fetched link graph

Breadth-first search and distance matrices over a remote link graph, built on
composable asynchronous results.
"""

from .clients import GraphClient, InMemoryGraphClient, LiveWikipediaClient, SqliteGraphClient
from .config import GraphSettings
from .execution import TaskPool
from .graph import Wikigraph, adjacent_pairs
from .models import DistanceMatrixRow, NodeId, WikiError
from .result import AsyncResult, Err, Ok

__all__ = [
    'AsyncResult',
    'Ok',
    'Err',
    'WikiError',
    'NodeId',
    'DistanceMatrixRow',
    'TaskPool',
    'Wikigraph',
    'adjacent_pairs',
    'GraphSettings',
    'GraphClient',
    'InMemoryGraphClient',
    'LiveWikipediaClient',
    'SqliteGraphClient',
]
