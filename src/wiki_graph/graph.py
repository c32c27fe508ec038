"""
Wikigraph - distances between pages of a lazily fetched link graph.

Every lookup goes through the injected GraphClient and TaskPool. The graph is
never loaded up front: breadth-first search asks for one page's links at a
time and treats a page whose links cannot be fetched as a dead end.
"""

import logging
from collections import deque
from functools import partial
from typing import AbstractSet, Deque, List, Optional, Sequence, Set, Tuple

from .clients.base import GraphClient
from .config import DEFAULT_MAX_DEPTH, GraphSettings
from .execution import TaskPool
from .models import DistanceMatrixRow, NodeId, NodeName, WikiError
from .result import AsyncResult, Ok, Result
from .utils.wiki_helpers import validate_max_depth

logger = logging.getLogger(__name__)

ResolvedTitle = Tuple[str, NodeId]


def adjacent_pairs(resolved: Sequence[ResolvedTitle]) -> List[Tuple[ResolvedTitle, ResolvedTitle]]:
    """
    Consecutive pairs of ``resolved``, then consecutive pairs of its reverse.

    ``[A, B, C]`` gives ``(A, B), (B, C), (C, B), (B, A)``. Fewer than two
    entries give no pairs.
    """
    forward = list(resolved)
    backward = forward[::-1]
    return list(zip(forward, forward[1:])) + list(zip(backward, backward[1:]))


class Wikigraph:
    """Analyzes the link graph exposed by a GraphClient."""

    def __init__(
        self,
        client: GraphClient,
        pool: Optional[TaskPool] = None,
        default_max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        validate_max_depth(default_max_depth)
        self.client = client
        self.pool = pool or TaskPool()
        self.default_max_depth = default_max_depth

    @classmethod
    def from_settings(cls, client: GraphClient, settings: Optional[GraphSettings] = None) -> "Wikigraph":
        settings = settings or GraphSettings.from_env()
        return cls(
            client,
            pool=TaskPool(settings.max_concurrency),
            default_max_depth=settings.max_depth,
        )

    # --- pooled client lookups --------------------------------------------

    def _links_from(self, node: NodeId) -> AsyncResult[AbstractSet[NodeId]]:
        return self.pool.run(lambda: self.client.links_from(node))

    def _name_of_article(self, node: NodeId) -> AsyncResult[NodeName]:
        return self.pool.run(lambda: self.client.name_of_article(node))

    def _search_id(self, name: NodeName) -> AsyncResult[NodeId]:
        return self.pool.run(lambda: self.client.search_id(name))

    # --- public operations ------------------------------------------------

    def named_links(self, of: NodeId) -> AsyncResult[Set[NodeName]]:
        """
        Titles of the pages ``of`` links to. Pages sharing a title collapse
        into one entry. Fails if the links or any title cannot be resolved.
        """
        return self._links_from(of).flat_map(
            lambda links: AsyncResult.traverse(links, self._name_of_article).map(set)
        )

    def breadth_first_search(self, start: NodeId, target: NodeId, max_depth: int) -> AsyncResult[Optional[int]]:
        """
        Length of the shortest link path from ``start`` to ``target``.

        Args:
            start: Page the search starts from
            target: Page to reach
            max_depth: Pages at this distance or further from ``start`` are
                never expanded

        Returns:
            An AsyncResult that always succeeds, with the distance or None if
            ``target`` was not found within the bound. Pages whose links cannot
            be fetched are skipped.

        Raises:
            ValueError: If ``max_depth`` is negative.
        """
        validate_max_depth(max_depth)
        if start == target:
            return AsyncResult.successful(0)
        return AsyncResult(self._search(start, target, max_depth))

    def distance_matrix(
        self,
        titles: Sequence[NodeName],
        max_depth: Optional[int] = None,
    ) -> AsyncResult[List[DistanceMatrixRow]]:
        """
        Distances between consecutive titles, in both directions.

        For ``[A, B, C]`` the rows are A->B, B->C, C->B, B->A, in that order.
        Fails if any title cannot be resolved to a page.
        """
        max_depth = self.default_max_depth if max_depth is None else max_depth
        validate_max_depth(max_depth)
        titles = list(titles)

        def resolve(title: NodeName) -> AsyncResult[ResolvedTitle]:
            return self._search_id(title).map(lambda node: (title, node))

        return AsyncResult.traverse(titles, resolve).flat_map(
            partial(self._measure_pairs, max_depth=max_depth)
        )

    # --- internals --------------------------------------------------------

    def _measure_pairs(
        self,
        resolved: List[ResolvedTitle],
        max_depth: int,
    ) -> AsyncResult[List[DistanceMatrixRow]]:
        pairs = adjacent_pairs(resolved)
        logger.info(f"Computing {len(pairs)} distances for {len(resolved)} titles (max_depth={max_depth})")

        def measure(pair: Tuple[ResolvedTitle, ResolvedTitle]) -> AsyncResult[DistanceMatrixRow]:
            (source_title, source), (destination_title, destination) = pair
            return self.breadth_first_search(source, destination, max_depth).map(
                lambda distance: DistanceMatrixRow(source_title, destination_title, distance)
            )

        return AsyncResult.traverse(pairs, measure)

    def _dead_end(self, node: NodeId, error: WikiError) -> AsyncResult[AbstractSet[NodeId]]:
        logger.debug(f"Skipping page {node}, links unavailable: {error}")
        return AsyncResult.successful(frozenset())

    async def _search(self, start: NodeId, target: NodeId, max_depth: int) -> Result[Optional[int]]:
        # Frontier entries carry the distance of the links found when the
        # node is expanded, hence the start node enters at 1.
        frontier: Deque[Tuple[int, NodeId]] = deque([(1, start)])
        # Expanded or already queued; each node is queued at most once.
        seen: Set[NodeId] = {start}
        expanded = 0

        while frontier:
            distance, node = frontier.popleft()
            if distance >= max_depth:
                logger.debug(f"Depth bound {max_depth} reached after expanding {expanded} pages")
                return Ok(None)

            outcome = await self._links_from(node).recover_with(partial(self._dead_end, node))
            links = outcome.unwrap()
            expanded += 1

            if target in links:
                logger.debug(f"Found {target} from {start} at distance {distance} ({expanded} pages expanded)")
                return Ok(distance)

            for neighbor in links:
                if neighbor not in seen:
                    seen.add(neighbor)
                    frontier.append((distance + 1, neighbor))

        logger.debug(f"No path from {start} to {target}; frontier exhausted after {expanded} pages")
        return Ok(None)
