"""
In-memory link graph, for tests and offline analysis.
"""

import asyncio
import logging
from typing import AbstractSet, Dict, FrozenSet, Iterable, List, Mapping, Optional, Union

from ..exceptions import PageNotFoundException, WikiServiceUnavailableException
from ..models import NodeId, NodeName
from ..result import AsyncResult

logger = logging.getLogger(__name__)


class InMemoryGraphClient:
    """
    GraphClient over a fixed adjacency mapping.

    Args:
        links: Outgoing links per node. Nodes that only appear as link targets
            or in ``names`` exist but have no outgoing links.
        names: Title of each node. Several nodes may share a title; ``search_id``
            returns the first one registered.
        failing: Nodes whose link lookup always fails.
        delays: Seconds to sleep before answering, keyed by node id or title.
    """

    def __init__(
        self,
        links: Mapping[NodeId, Iterable[NodeId]],
        names: Optional[Mapping[NodeId, NodeName]] = None,
        failing: Iterable[NodeId] = (),
        delays: Optional[Mapping[Union[NodeId, NodeName], float]] = None,
    ):
        self._links: Dict[NodeId, FrozenSet[NodeId]] = {
            node: frozenset(targets) for node, targets in links.items()
        }
        self._names: Dict[NodeId, NodeName] = dict(names or {})
        self._ids: Dict[NodeName, NodeId] = {}
        for node, name in self._names.items():
            self._ids.setdefault(name, node)

        self._nodes = set(self._links) | set(self._names)
        for targets in self._links.values():
            self._nodes.update(targets)

        self.failing = set(failing)
        self.delays = dict(delays or {})

        # Lookup log, in call order
        self.link_lookups: List[NodeId] = []
        self.name_lookups: List[NodeId] = []
        self.id_lookups: List[NodeName] = []

    def links_from(self, node: NodeId) -> AsyncResult[AbstractSet[NodeId]]:
        return AsyncResult.attempt(self._links_from(node))

    def name_of_article(self, node: NodeId) -> AsyncResult[NodeName]:
        return AsyncResult.attempt(self._name_of_article(node))

    def search_id(self, name: NodeName) -> AsyncResult[NodeId]:
        return AsyncResult.attempt(self._search_id(name))

    async def _links_from(self, node: NodeId) -> FrozenSet[NodeId]:
        self.link_lookups.append(node)
        await self._pause(node)
        if node in self.failing:
            raise WikiServiceUnavailableException(f"Link lookup failed for page {node}")
        if node not in self._nodes:
            raise PageNotFoundException(f"Page not found: {node}")
        return self._links.get(node, frozenset())

    async def _name_of_article(self, node: NodeId) -> NodeName:
        self.name_lookups.append(node)
        await self._pause(node)
        if node not in self._names:
            raise PageNotFoundException(f"No title for page {node}")
        return self._names[node]

    async def _search_id(self, name: NodeName) -> NodeId:
        self.id_lookups.append(name)
        await self._pause(name)
        if name not in self._ids:
            raise PageNotFoundException(f"Page does not exist: {name}")
        return self._ids[name]

    async def _pause(self, key: Union[NodeId, NodeName]) -> None:
        delay = self.delays.get(key, 0.0)
        if delay > 0:
            await asyncio.sleep(delay)
