"""
Data models shared by the traversal engine and the graph clients.
"""

from dataclasses import dataclass
from typing import NamedTuple, NewType, Optional

NodeId = NewType("NodeId", int)
NodeName = str


@dataclass(frozen=True)
class WikiError:
    """Opaque domain error: any failed lookup against the link graph."""
    message: str
    cause: Optional[BaseException] = None

    @classmethod
    def from_exception(cls, exc: BaseException) -> "WikiError":
        message = str(exc) or type(exc).__name__
        return cls(message=message, cause=exc)

    def __str__(self) -> str:
        return self.message


class DistanceMatrixRow(NamedTuple):
    """One (source, destination, distance) entry of a distance matrix."""
    source: str
    destination: str
    distance: Optional[int]
