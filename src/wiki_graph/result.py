"""
Asynchronous, fallible computations over the link graph.

An ``AsyncResult`` wraps an awaitable that resolves exactly once to either
``Ok(value)`` or ``Err(WikiError)``. Failures are plain values, never raised,
so every recovery point in the traversal is an explicit ``recover_with`` /
``fallback_to`` call rather than a ``try`` block.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import (
    Any,
    Awaitable,
    Callable,
    Generator,
    Generic,
    Iterable,
    List,
    Optional,
    Tuple,
    TypeVar,
    Union,
)

from .exceptions import LookupFailedError
from .models import WikiError

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")
A = TypeVar("A")
B = TypeVar("B")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome."""
    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying the domain error."""
    error: WikiError

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self):
        raise LookupFailedError(self.error)


Result = Union[Ok[T], Err]


class AsyncResult(Generic[T]):
    """
    A single eventual ``Ok``/``Err`` outcome.

    Awaiting an AsyncResult returns its ``Result``. The wrapped awaitable is
    scheduled on first await and its outcome is memoised, so awaiting the same
    instance again (or from several branches) never re-runs the computation.
    """

    __slots__ = ("_source", "_task", "_outcome")

    def __init__(
        self,
        source: Optional[Awaitable[Result[T]]] = None,
        *,
        outcome: Optional[Result[T]] = None,
    ):
        if (source is None) == (outcome is None):
            raise ValueError("AsyncResult needs exactly one of source or outcome")
        self._source = source
        self._task: Optional[asyncio.Future] = None
        self._outcome = outcome

    # --- constructors -----------------------------------------------------

    @classmethod
    def successful(cls, value: T) -> "AsyncResult[T]":
        """An already-resolved success."""
        return cls(outcome=Ok(value))

    @classmethod
    def failed(cls, error: WikiError) -> "AsyncResult[Any]":
        """An already-resolved failure."""
        return cls(outcome=Err(error))

    @classmethod
    def attempt(cls, awaitable: Awaitable[T]) -> "AsyncResult[T]":
        """
        Lift a coroutine that may raise into an AsyncResult.

        Any ``Exception`` becomes an ``Err`` holding a ``WikiError``; this is the
        boundary where client errors turn into domain errors.
        """
        async def guarded() -> Result[T]:
            try:
                return Ok(await awaitable)
            except Exception as e:
                logger.debug(f"Lookup failed: {type(e).__name__}: {e}")
                return Err(WikiError.from_exception(e))

        return cls(guarded())

    # --- resolution -------------------------------------------------------

    def __await__(self) -> Generator[Any, None, Result[T]]:
        return self._resolve().__await__()

    async def _resolve(self) -> Result[T]:
        if self._outcome is None:
            if self._task is None:
                self._task = asyncio.ensure_future(self._source)
            # A cancelled awaiter must not cancel the computation it shares.
            outcome = await asyncio.shield(self._task)
            self._outcome = outcome
        return self._outcome

    @property
    def done(self) -> bool:
        return self._outcome is not None

    async def unwrap(self) -> T:
        """Await the value, raising ``LookupFailedError`` on failure."""
        outcome = await self
        return outcome.unwrap()

    # --- combinators ------------------------------------------------------

    def map(self, f: Callable[[T], U]) -> "AsyncResult[U]":
        """Transform a successful value; failures pass through unchanged."""
        async def mapped() -> Result[U]:
            outcome = await self
            if isinstance(outcome, Err):
                return outcome
            return Ok(f(outcome.value))

        return AsyncResult(mapped())

    def flat_map(self, f: Callable[[T], "AsyncResult[U]"]) -> "AsyncResult[U]":
        """Sequence a dependent asynchronous step."""
        async def chained() -> Result[U]:
            outcome = await self
            if isinstance(outcome, Err):
                return outcome
            return await f(outcome.value)

        return AsyncResult(chained())

    def recover_with(self, f: Callable[[WikiError], "AsyncResult[T]"]) -> "AsyncResult[T]":
        """On failure, continue with the computation built from the error."""
        async def recovered() -> Result[T]:
            outcome = await self
            if isinstance(outcome, Ok):
                return outcome
            return await f(outcome.error)

        return AsyncResult(recovered())

    def fallback_to(self, alternative: Callable[[], "AsyncResult[T]"]) -> "AsyncResult[T]":
        """
        On failure, discard the error and evaluate ``alternative`` instead.

        ``alternative`` is only called when this result fails. The original
        error is never resurfaced, even if the alternative fails too.
        """
        return self.recover_with(lambda _error: alternative())

    def zip(self, other: "AsyncResult[U]") -> "AsyncResult[Tuple[T, U]]":
        """Pair two results evaluated concurrently; the left failure wins."""
        async def zipped() -> Result[Tuple[T, U]]:
            left, right = await asyncio.gather(self._resolve(), other._resolve())
            if isinstance(left, Err):
                return left
            if isinstance(right, Err):
                return right
            return Ok((left.value, right.value))

        return AsyncResult(zipped())

    @staticmethod
    def traverse(
        items: Iterable[A],
        f: Callable[[A], "AsyncResult[B]"],
    ) -> "AsyncResult[List[B]]":
        """
        Apply ``f`` to every item and collect the values in input order.

        The applications run concurrently. If any of them fails, the combined
        result is the failure of the earliest failing item by input position,
        whatever order the branches complete in.
        """
        items = list(items)

        async def collected() -> Result[List[B]]:
            branches = [f(item)._resolve() for item in items]
            outcomes = await asyncio.gather(*branches)

            values: List[B] = []
            for outcome in outcomes:
                if isinstance(outcome, Err):
                    return outcome
                values.append(outcome.value)
            return Ok(values)

        return AsyncResult(collected())

    def __repr__(self) -> str:
        state = repr(self._outcome) if self._outcome is not None else "pending"
        return f"AsyncResult({state})"
