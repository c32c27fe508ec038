import os
from pydantic import BaseModel, Field

from .logging_config import setup_logging

DEFAULT_MAX_DEPTH = 50
DEFAULT_USER_AGENT = "wiki-graph/0.1 (link distance analysis)"

class GraphSettings(BaseModel):
    """Configuration for the traversal engine and its graph clients."""

    # Search settings
    max_depth: int = Field(DEFAULT_MAX_DEPTH, ge=0, description="Default depth bound for distance matrices")
    max_concurrency: int = Field(8, description="Lookups in flight at once; 0 or less means unbounded")

    # Live Wikipedia API settings
    language: str = Field("en", min_length=1)
    request_timeout: float = Field(10.0, gt=0)
    user_agent: str = DEFAULT_USER_AGENT

    # Static database settings
    db_path: str = "database/wiki_graph.sqlite"

    log_level: str = "INFO"
    log_rich: bool = True

    @classmethod
    def from_env(cls) -> "GraphSettings":
        """Create settings from environment variables."""
        return cls(
            max_depth=int(os.getenv("WIKI_GRAPH_MAX_DEPTH", str(DEFAULT_MAX_DEPTH))),
            max_concurrency=int(os.getenv("WIKI_GRAPH_MAX_CONCURRENCY", "8")),
            language=os.getenv("WIKI_GRAPH_LANGUAGE", "en"),
            request_timeout=float(os.getenv("WIKI_GRAPH_REQUEST_TIMEOUT", "10.0")),
            user_agent=os.getenv("WIKI_GRAPH_USER_AGENT", DEFAULT_USER_AGENT),
            db_path=os.getenv("WIKI_GRAPH_DB_PATH", "database/wiki_graph.sqlite"),
            log_level=os.getenv("WIKI_GRAPH_LOG_LEVEL", "INFO"),
            log_rich=os.getenv("WIKI_GRAPH_LOG_RICH", "true").lower() == "true",
        )

    def configure_logging(self) -> None:
        """Install the root log handler at ``log_level``, Rich or plain per ``log_rich``."""
        setup_logging(level=self.log_level, use_rich=self.log_rich)
