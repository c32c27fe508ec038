"""
GraphClient over the static wiki_graph.sqlite link database.
"""

import logging
from pathlib import Path
from typing import FrozenSet, Optional, Union

import aiosqlite

from ..config import GraphSettings
from ..exceptions import PageNotFoundException
from ..models import NodeId, NodeName
from ..result import AsyncResult
from ..utils.wiki_helpers import (
    get_readable_page_title,
    get_sanitized_page_title,
    validate_page_id,
    validate_page_title,
)

logger = logging.getLogger(__name__)


class SqliteGraphClient:
    """
    Reads the ``pages``, ``redirects`` and ``links`` tables of the static
    link graph. The ``links`` table stores each page's outgoing link ids as a
    pipe-separated string.
    """

    def __init__(self, db_path: Union[str, Path] = "database/wiki_graph.sqlite", namespace: int = 0):
        self.db_path = Path(db_path)
        self.namespace = namespace
        if not self.db_path.exists():
            logger.error(f"Database file not found at {self.db_path.resolve()}")

    @classmethod
    def from_settings(cls, settings: GraphSettings) -> "SqliteGraphClient":
        return cls(settings.db_path)

    def links_from(self, node: NodeId) -> AsyncResult[FrozenSet[NodeId]]:
        return AsyncResult.attempt(self._get_outgoing_links(node))

    def name_of_article(self, node: NodeId) -> AsyncResult[NodeName]:
        return AsyncResult.attempt(self._get_page_title(node))

    def search_id(self, name: NodeName) -> AsyncResult[NodeId]:
        return AsyncResult.attempt(self._get_page_id(name))

    async def _get_outgoing_links(self, node: NodeId) -> FrozenSet[NodeId]:
        validate_page_id(node)
        async with aiosqlite.connect(self.db_path) as db:
            async with db.execute("SELECT id FROM pages WHERE id = ?", (node,)) as cursor:
                if await cursor.fetchone() is None:
                    raise PageNotFoundException(f"Page not found: {node}")
            async with db.execute("SELECT outgoing_links FROM links WHERE id = ?", (node,)) as cursor:
                row = await cursor.fetchone()

        if row and row[0]:
            return frozenset(NodeId(int(target)) for target in row[0].split('|') if target)
        return frozenset()

    async def _get_page_title(self, node: NodeId) -> NodeName:
        validate_page_id(node)
        async with aiosqlite.connect(self.db_path) as db:
            async with db.execute("SELECT title FROM pages WHERE id = ?", (node,)) as cursor:
                row = await cursor.fetchone()
        if row is None:
            raise PageNotFoundException(f"No title for page {node}")
        return get_readable_page_title(row[0])

    async def _get_page_id(self, name: NodeName) -> NodeId:
        """
        Case-insensitive title match. An exact non-redirect match wins, then
        any non-redirect match, then the redirect target of the first match.
        """
        validate_page_title(name)
        sanitized = get_sanitized_page_title(name)

        async with aiosqlite.connect(self.db_path) as db:
            query = """
                SELECT id, title, is_redirect
                FROM pages
                WHERE title = ? COLLATE NOCASE AND namespace = ?
            """
            async with db.execute(query, (sanitized, self.namespace)) as cursor:
                rows = await cursor.fetchall()

            if not rows:
                raise PageNotFoundException(f"Page does not exist: {name}")

            resolved = self._pick_page(rows, sanitized)
            if resolved is not None:
                return resolved

            first_id = rows[0][0]
            async with db.execute("SELECT target_id FROM redirects WHERE source_id = ?", (first_id,)) as cursor:
                redirect = await cursor.fetchone()

        if redirect is None:
            logger.warning(f"Page '{name}' is a redirect but no target found for ID {first_id}")
            raise PageNotFoundException(f"Redirect target missing for: {name}")
        return NodeId(redirect[0])

    @staticmethod
    def _pick_page(rows, sanitized: str) -> Optional[NodeId]:
        for page_id, db_title, is_redirect in rows:
            if db_title == sanitized and not is_redirect:
                return NodeId(page_id)
        for page_id, _, is_redirect in rows:
            if not is_redirect:
                return NodeId(page_id)
        return None
