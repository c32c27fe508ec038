import logging
from typing import Any, Dict, FrozenSet, Optional, Set

import httpx

from ..config import DEFAULT_USER_AGENT, GraphSettings
from ..exceptions import PageNotFoundException, WikiServiceUnavailableException
from ..models import NodeId, NodeName
from ..result import AsyncResult

logger = logging.getLogger(__name__)


class LiveWikipediaClient:
    """
    GraphClient backed by the live MediaWiki action API.

    One ``httpx.AsyncClient`` is shared by every lookup. Pass ``session`` to
    supply your own (it is then left open on ``close``), otherwise use the
    client as an async context manager.
    """

    def __init__(
        self,
        language: str = "en",
        session: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.language = language
        self.base_url = f"https://{language}.wikipedia.org/w/api.php"
        self.timeout = timeout
        self.user_agent = user_agent
        self._session = session
        self._owns_session = session is None

    @classmethod
    def from_settings(cls, settings: GraphSettings) -> "LiveWikipediaClient":
        return cls(
            language=settings.language,
            timeout=settings.request_timeout,
            user_agent=settings.user_agent,
        )

    async def __aenter__(self) -> "LiveWikipediaClient":
        if self._session is None:
            self._session = httpx.AsyncClient(
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent, "Accept-Encoding": "gzip"},
            )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the session if this client created it."""
        if self._session is not None and self._owns_session:
            await self._session.aclose()
            self._session = None

    # --- GraphClient ------------------------------------------------------

    def links_from(self, node: NodeId) -> AsyncResult[FrozenSet[NodeId]]:
        return AsyncResult.attempt(self._fetch_links(node))

    def name_of_article(self, node: NodeId) -> AsyncResult[NodeName]:
        return AsyncResult.attempt(self._fetch_title(node))

    def search_id(self, name: NodeName) -> AsyncResult[NodeId]:
        return AsyncResult.attempt(self._fetch_page_id(name))

    # --- requests ---------------------------------------------------------

    async def _request(self, params: Dict[str, Any]) -> Dict[str, Any]:
        if self._session is None:
            raise RuntimeError("Client not initialized. Use 'async with' context manager.")

        query = {"action": "query", "format": "json", "formatversion": "2"}
        query.update(params)
        logger.debug(f"Making API request: {query}")

        try:
            response = await self._session.get(self.base_url, params=query)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Wikipedia API request failed: {e}")
            raise WikiServiceUnavailableException(f"Wikipedia API request failed: {e}") from e

        data = response.json()
        if "error" in data:
            raise WikiServiceUnavailableException(f"Wikipedia API error: {data['error'].get('info')}")
        return data

    async def _fetch_page(self, params: Dict[str, Any], label: str) -> Dict[str, Any]:
        data = await self._request(params)
        pages = data.get("query", {}).get("pages", [])
        if not pages:
            raise PageNotFoundException(f"Page not found: {label}")
        page = pages[0]
        if page.get("missing") or page.get("invalid"):
            raise PageNotFoundException(f"Page does not exist: {label}")
        return page

    async def _fetch_title(self, node: NodeId) -> NodeName:
        page = await self._fetch_page({"pageids": str(node), "prop": "info"}, str(node))
        return page["title"]

    async def _fetch_page_id(self, name: NodeName) -> NodeId:
        page = await self._fetch_page({"titles": name, "prop": "info", "redirects": "1"}, name)
        return NodeId(page["pageid"])

    async def _fetch_links(self, node: NodeId) -> FrozenSet[NodeId]:
        """
        Ids of the main-namespace pages ``node`` links to, following
        ``continue`` tokens until the listing is complete. Red links
        (targets without a page) are dropped.
        """
        base_params = {
            "generator": "links",
            "pageids": str(node),
            "gplnamespace": "0",
            "gpllimit": "max",
            "prop": "info",
        }
        links: Set[NodeId] = set()
        continue_token: Optional[Dict[str, Any]] = None
        seen_any = False

        while True:
            params = dict(base_params)
            if continue_token:
                params.update(continue_token)

            data = await self._request(params)
            for page in data.get("query", {}).get("pages", []):
                seen_any = True
                if "pageid" in page and not page.get("missing"):
                    links.add(NodeId(page["pageid"]))

            if "continue" not in data:
                break
            continue_token = data["continue"]
            logger.debug(f"Continuing pagination for links of page {node}...")

        if not seen_any:
            # An empty generator looks the same for a page without links and a
            # page that does not exist.
            await self._fetch_title(node)

        logger.debug(f"Retrieved {len(links)} links for page {node}")
        return frozenset(links)
