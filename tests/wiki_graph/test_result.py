import asyncio

import pytest

from wiki_graph.exceptions import LookupFailedError, PageNotFoundException
from wiki_graph.models import WikiError
from wiki_graph.result import AsyncResult, Err, Ok

BOOM = WikiError("boom")


def delayed(value, delay: float) -> AsyncResult:
    async def compute():
        await asyncio.sleep(delay)
        return Ok(value)
    return AsyncResult(compute())


def delayed_failure(error: WikiError, delay: float) -> AsyncResult:
    async def compute():
        await asyncio.sleep(delay)
        return Err(error)
    return AsyncResult(compute())


class TestConstruction:

    @pytest.mark.asyncio
    async def test_successful_is_resolved(self):
        result = AsyncResult.successful(42)
        assert result.done
        assert await result == Ok(42)

    @pytest.mark.asyncio
    async def test_failed_is_resolved(self):
        assert await AsyncResult.failed(BOOM) == Err(BOOM)

    def test_requires_exactly_one_of_source_or_outcome(self):
        with pytest.raises(ValueError):
            AsyncResult()

    @pytest.mark.asyncio
    async def test_attempt_turns_exceptions_into_domain_errors(self):
        async def lookup():
            raise PageNotFoundException("Page does not exist: Nowhere")

        outcome = await AsyncResult.attempt(lookup())
        assert isinstance(outcome, Err)
        assert outcome.error.message == "Page does not exist: Nowhere"
        assert isinstance(outcome.error.cause, PageNotFoundException)

    @pytest.mark.asyncio
    async def test_attempt_wraps_plain_values(self):
        async def lookup():
            return {1, 2}

        assert await AsyncResult.attempt(lookup()) == Ok({1, 2})

    @pytest.mark.asyncio
    async def test_computation_runs_once_when_awaited_twice(self):
        calls = []

        async def compute():
            calls.append(1)
            return Ok("value")

        result = AsyncResult(compute())
        first = await result
        second = await result
        assert first == second == Ok("value")
        assert calls == [1]

    @pytest.mark.asyncio
    async def test_timed_out_awaiter_does_not_cancel_shared_computation(self):
        result = delayed(1, 0.05)
        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(result.unwrap(), 0.001)

        assert not result.done
        assert await result == Ok(1)

    @pytest.mark.asyncio
    async def test_other_awaiters_survive_one_cancellation(self):
        result = delayed("shared", 0.03)
        first = asyncio.ensure_future(result.unwrap())
        second = asyncio.ensure_future(result.unwrap())
        await asyncio.sleep(0.005)
        first.cancel()

        assert await second == "shared"
        assert first.cancelled()

    @pytest.mark.asyncio
    async def test_unwrap(self):
        assert await AsyncResult.successful(3).unwrap() == 3
        with pytest.raises(LookupFailedError) as excinfo:
            await AsyncResult.failed(BOOM).unwrap()
        assert excinfo.value.error is BOOM


class TestCombinators:

    @pytest.mark.asyncio
    async def test_map_transforms_success(self):
        assert await AsyncResult.successful(2).map(lambda x: x * 10) == Ok(20)

    @pytest.mark.asyncio
    async def test_map_propagates_failure_without_calling_f(self):
        called = []
        result = AsyncResult.failed(BOOM).map(lambda x: called.append(x))
        assert await result == Err(BOOM)
        assert called == []

    @pytest.mark.asyncio
    async def test_flat_map_sequences_dependent_steps(self):
        result = delayed(3, 0.01).flat_map(lambda x: delayed(x + 1, 0.01))
        assert await result == Ok(4)

    @pytest.mark.asyncio
    async def test_flat_map_propagates_failure_of_the_next_step(self):
        result = AsyncResult.successful(1).flat_map(lambda _: AsyncResult.failed(BOOM))
        assert await result == Err(BOOM)

    @pytest.mark.asyncio
    async def test_fallback_not_evaluated_on_success(self):
        evaluated = []

        def alternative():
            evaluated.append(True)
            return AsyncResult.successful("alt")

        assert await AsyncResult.successful("main").fallback_to(alternative) == Ok("main")
        assert evaluated == []

    @pytest.mark.asyncio
    async def test_fallback_replaces_failure(self):
        result = AsyncResult.failed(BOOM).fallback_to(lambda: AsyncResult.successful(set()))
        assert await result == Ok(set())

    @pytest.mark.asyncio
    async def test_fallback_never_resurfaces_the_original_error(self):
        other = WikiError("alternative failed")
        result = AsyncResult.failed(BOOM).fallback_to(lambda: AsyncResult.failed(other))
        assert await result == Err(other)

    @pytest.mark.asyncio
    async def test_recover_with_receives_the_error(self):
        result = AsyncResult.failed(BOOM).recover_with(
            lambda error: AsyncResult.successful(f"recovered from {error}")
        )
        assert await result == Ok("recovered from boom")

    @pytest.mark.asyncio
    async def test_zip(self):
        assert await delayed(1, 0.02).zip(delayed("a", 0.01)) == Ok((1, "a"))

        left = WikiError("left")
        right = WikiError("right")
        zipped = delayed_failure(left, 0.02).zip(delayed_failure(right, 0.0))
        assert await zipped == Err(left)


class TestTraverse:

    @pytest.mark.asyncio
    async def test_results_keep_input_order(self):
        # Later items finish first
        delays = {"a": 0.03, "b": 0.02, "c": 0.0}
        result = AsyncResult.traverse(["a", "b", "c"], lambda item: delayed(item.upper(), delays[item]))
        assert await result == Ok(["A", "B", "C"])

    @pytest.mark.asyncio
    async def test_first_failure_by_input_order_wins(self):
        error_b = WikiError("b failed")
        error_c = WikiError("c failed")

        def step(item):
            if item == "b":
                return delayed_failure(error_b, 0.03)
            if item == "c":
                return delayed_failure(error_c, 0.0)
            return delayed(item, 0.01)

        assert await AsyncResult.traverse(["a", "b", "c"], step) == Err(error_b)

    @pytest.mark.asyncio
    async def test_single_failure_is_reported(self):
        error_b = WikiError("b failed")

        def step(item):
            return delayed_failure(error_b, 0.0) if item == "b" else delayed(item, 0.01)

        assert await AsyncResult.traverse(["a", "b", "c"], step) == Err(error_b)

    @pytest.mark.asyncio
    async def test_empty_input(self):
        assert await AsyncResult.traverse([], lambda item: AsyncResult.successful(item)) == Ok([])

    @pytest.mark.asyncio
    async def test_branches_run_concurrently(self):
        running = 0
        peak = 0

        def step(item):
            async def compute():
                nonlocal running, peak
                running += 1
                peak = max(peak, running)
                await asyncio.sleep(0.01)
                running -= 1
                return Ok(item)
            return AsyncResult(compute())

        assert await AsyncResult.traverse(range(5), step) == Ok([0, 1, 2, 3, 4])
        assert peak == 5
