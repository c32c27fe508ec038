from typing import AbstractSet, Protocol, runtime_checkable

from ..models import NodeId, NodeName
from ..result import AsyncResult


@runtime_checkable
class GraphClient(Protocol):
    """
    Read-only access to a remote, lazily discovered link graph.

    Every lookup returns an AsyncResult that fails with a WikiError when the
    node or title does not exist or the data source cannot be reached.
    Implementations may be shared by concurrent lookups.
    """

    def links_from(self, node: NodeId) -> AsyncResult[AbstractSet[NodeId]]:
        """Ids of the pages ``node`` links to."""
        ...

    def name_of_article(self, node: NodeId) -> AsyncResult[NodeName]:
        """Human-readable title of ``node``."""
        ...

    def search_id(self, name: NodeName) -> AsyncResult[NodeId]:
        """Id of the page titled ``name``."""
        ...
