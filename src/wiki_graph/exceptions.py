"""
Custom exceptions for the wiki_graph package.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import WikiError


class WikiGraphException(Exception):
    """Base exception for the package."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

class PageNotFoundException(WikiGraphException):
    """Raised when a page id or title does not exist in the data source."""
    pass

class WikiServiceUnavailableException(WikiGraphException):
    """Raised when the Wikipedia API is unreachable or returns an error."""
    pass

class LookupFailedError(WikiGraphException):
    """Raised when a failed result is unwrapped by exception-style code."""
    def __init__(self, error: "WikiError"):
        self.error = error
        super().__init__(error.message)
