"""
Logging setup for wiki_graph.

Library modules only create loggers; an application calls ``setup_logging``
(or ``GraphSettings.configure_logging``) once to decide where records go.
"""

import logging
import sys
from typing import Iterable, Union
from rich.logging import RichHandler
from rich.console import Console

# Per-request chatter from the HTTP and sqlite clients
QUIET_LOGGERS = ("httpx", "httpcore", "aiosqlite")

PLAIN_FORMAT = "[%(asctime)s] %(levelname)-5s %(name)s: %(message)s"

def resolve_level(level: Union[str, int]) -> int:
    """Map "debug"/"INFO"/logging.WARNING style levels to a logging constant."""
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)

def setup_logging(
    level: Union[str, int] = "INFO",
    use_rich: bool = True,
    quiet: Iterable[str] = QUIET_LOGGERS,
) -> logging.Handler:
    """
    Replace the root logger's handlers with a single stderr handler.

    Args:
        level: Log level name or constant
        use_rich: Rich's colored output for terminals; plain lines otherwise
        quiet: Loggers capped at WARNING, so BFS debug output is not buried
            under one record per lookup

    Returns:
        The installed handler.
    """
    numeric_level = resolve_level(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if use_rich:
        handler: logging.Handler = RichHandler(
            console=Console(file=sys.stderr),
            level=numeric_level,
            show_path=True,
            rich_tracebacks=True,
            markup=False,
            log_time_format="[%H:%M:%S]"
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT, datefmt="%H:%M:%S"))

    handler.setLevel(numeric_level)
    root_logger.addHandler(handler)

    for name in quiet:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    logging.getLogger(__name__).debug(f"Logging configured: level={logging.getLevelName(numeric_level)}, rich={use_rich}")
    return handler

def setup_dev_logging(level: str = "DEBUG") -> logging.Handler:
    """Development setup: Rich output, verbose by default."""
    return setup_logging(level=level, use_rich=True)

def setup_prod_logging(level: str = "INFO") -> logging.Handler:
    """Production setup: plain single-line records."""
    return setup_logging(level=level, use_rich=False)
