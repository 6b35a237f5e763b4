import asyncio

import pytest

from webhandle.exceptions import CancellationError
from webhandle.scope import ExecutionScope


class TestExecutionScopeRun:
    """Test ExecutionScope.run()."""

    @pytest.mark.asyncio
    async def test_run_returns_result(self):
        scope = ExecutionScope()

        async def compute():
            return 42

        assert await scope.run(compute()) == 42

    @pytest.mark.asyncio
    async def test_run_propagates_operation_error(self):
        scope = ExecutionScope()

        async def fail():
            raise ValueError('boom')

        with pytest.raises(ValueError, match='boom'):
            await scope.run(fail())

    @pytest.mark.asyncio
    async def test_cancel_interrupts_in_flight_operation(self):
        scope = ExecutionScope()
        loop = asyncio.get_running_loop()
        started = loop.time()

        task = asyncio.create_task(scope.run(asyncio.sleep(30)))
        await asyncio.sleep(0.01)
        scope.cancel('stop')

        with pytest.raises(CancellationError, match='stop'):
            await task
        assert loop.time() - started < 1.0

    @pytest.mark.asyncio
    async def test_cancelled_operation_is_cancelled(self):
        scope = ExecutionScope()
        inner_cancelled = asyncio.Event()

        async def operation():
            try:
                await asyncio.sleep(30)
            except asyncio.CancelledError:
                inner_cancelled.set()
                raise

        task = asyncio.create_task(scope.run(operation()))
        await asyncio.sleep(0.01)
        scope.cancel()

        with pytest.raises(CancellationError):
            await task
        await asyncio.wait_for(inner_cancelled.wait(), timeout=1)

    @pytest.mark.asyncio
    async def test_cancel_waits_for_operation_cleanup(self):
        scope = ExecutionScope()
        cleaned_up = []

        async def operation():
            try:
                await asyncio.sleep(30)
            finally:
                await asyncio.sleep(0.05)
                cleaned_up.append(True)

        task = asyncio.create_task(scope.run(operation()))
        await asyncio.sleep(0.01)
        scope.cancel()

        with pytest.raises(CancellationError):
            await task
        assert cleaned_up == [True]

    @pytest.mark.asyncio
    async def test_run_after_cancel_raises_immediately(self):
        scope = ExecutionScope()
        scope.cancel('done')

        with pytest.raises(CancellationError, match='done'):
            await scope.run(asyncio.sleep(30))

    @pytest.mark.asyncio
    async def test_deadline_exceeded(self):
        scope = ExecutionScope(timeout=0.05)

        with pytest.raises(CancellationError, match='deadline exceeded'):
            await scope.run(asyncio.sleep(30))
        assert scope.cancelled


class TestExecutionScopeTree:
    """Test parent/child propagation."""

    def test_cancel_propagates_to_children(self):
        parent = ExecutionScope()
        child = parent.child()
        grandchild = child.child()

        parent.cancel('page closed')

        assert child.cancelled
        assert grandchild.cancelled
        assert grandchild.reason == 'page closed'

    def test_child_cancel_does_not_affect_parent(self):
        parent = ExecutionScope()
        child = parent.child()

        child.cancel()

        assert not parent.cancelled

    def test_child_of_cancelled_parent_starts_cancelled(self):
        parent = ExecutionScope()
        parent.cancel('gone')

        child = parent.child()

        assert child.cancelled
        assert child.reason == 'gone'

    def test_remaining_uses_nearest_deadline(self):
        parent = ExecutionScope(timeout=100)
        child = parent.child(timeout=1)

        assert child.remaining() <= 1
        assert ExecutionScope().remaining() is None

    @pytest.mark.asyncio
    async def test_child_inherits_parent_deadline(self):
        parent = ExecutionScope(timeout=0.05)
        child = parent.child()

        with pytest.raises(CancellationError):
            await child.run(asyncio.sleep(30))


class TestExecutionScopeSleep:
    """Test ExecutionScope.sleep()."""

    @pytest.mark.asyncio
    async def test_sleep_completes(self):
        scope = ExecutionScope()
        await scope.sleep(0.001)
        assert not scope.cancelled

    @pytest.mark.asyncio
    async def test_negative_delay_returns_immediately(self):
        scope = ExecutionScope()
        await scope.sleep(-1)

    @pytest.mark.asyncio
    async def test_cancel_interrupts_sleep(self):
        scope = ExecutionScope()
        loop = asyncio.get_running_loop()

        task = asyncio.create_task(scope.sleep(10))
        await asyncio.sleep(0.01)
        started = loop.time()
        scope.cancel()

        with pytest.raises(CancellationError):
            await task
        assert loop.time() - started < 0.5
