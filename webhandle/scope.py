from __future__ import annotations

import asyncio
import logging
import time
import weakref
from typing import Awaitable, Optional, TypeVar

from webhandle.exceptions import CancellationError

logger = logging.getLogger(__name__)

T = TypeVar('T')


class ExecutionScope:
    """
    Cancellable lifetime governing every pending operation of a page or element.

    Scopes form a tree: cancelling a scope cancels all of its children, and a
    child never outlives its parent's deadline. Every awaited protocol call and
    every sleep goes through :meth:`run`, which races the operation against the
    cancellation signal instead of checking it only after the operation returns.
    """

    def __init__(
        self,
        parent: Optional[ExecutionScope] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize execution scope.

        Args:
            parent: Scope whose cancellation and deadline this scope inherits.
            timeout: Seconds from now after which the scope cancels itself.
        """
        self._parent = parent
        self._event = asyncio.Event()
        self._reason: Optional[str] = None
        self._children: weakref.WeakSet[ExecutionScope] = weakref.WeakSet()
        self._deadline = time.monotonic() + timeout if timeout is not None else None

        if parent is not None:
            parent._children.add(self)
            if parent.cancelled:
                self.cancel(parent.reason)

    @property
    def cancelled(self) -> bool:
        """Whether the scope has been cancelled."""
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        """Why the scope was cancelled, if it was."""
        return self._reason

    def child(self, timeout: Optional[float] = None) -> ExecutionScope:
        """Create a child scope, optionally with its own deadline."""
        return ExecutionScope(parent=self, timeout=timeout)

    def cancel(self, reason: str = 'scope cancelled') -> None:
        """
        Cancel this scope and all of its descendants.

        Pending :meth:`run` calls raise :class:`CancellationError` immediately.
        """
        if self._event.is_set():
            return
        logger.debug(f'Cancelling execution scope: {reason}')
        self._reason = reason
        self._event.set()
        for child in list(self._children):
            child.cancel(reason)

    def remaining(self) -> Optional[float]:
        """Seconds until the nearest deadline in the scope chain, or None."""
        remaining = None
        if self._deadline is not None:
            remaining = self._deadline - time.monotonic()
        if self._parent is not None:
            parent_remaining = self._parent.remaining()
            if parent_remaining is not None:
                remaining = (
                    parent_remaining if remaining is None else min(remaining, parent_remaining)
                )
        return remaining

    def raise_if_cancelled(self) -> None:
        """Raise CancellationError if the scope is already done."""
        if not self._event.is_set():
            remaining = self.remaining()
            if remaining is not None and remaining <= 0:
                self.cancel('deadline exceeded')
        if self._event.is_set():
            raise CancellationError(self._reason)

    async def run(self, awaitable: Awaitable[T]) -> T:
        """
        Await an operation unless the scope ends first.

        Args:
            awaitable: Coroutine or future to run.

        Returns:
            The operation's result.

        Raises:
            CancellationError: If the scope is cancelled or its deadline passes
                before the operation completes. The operation is cancelled and
                its cleanup awaited before this is raised; an error raised by
                that cleanup becomes the ``__cause__``.
        """
        try:
            self.raise_if_cancelled()
        except CancellationError:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise

        task = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            done, _ = await asyncio.wait(
                {task, waiter},
                timeout=self.remaining(),
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            waiter.cancel()
            if not task.done():
                task.cancel()
                await asyncio.gather(task, return_exceptions=True)

        if task in done:
            return task.result()

        if not self._event.is_set():
            self.cancel('deadline exceeded')

        cleanup_error = None if task.cancelled() else task.exception()
        if cleanup_error is not None:
            logger.debug(f'Cancelled operation failed during cleanup: {cleanup_error!r}')
        raise CancellationError(self._reason) from cleanup_error

    async def sleep(self, delay: float) -> None:
        """Sleep for ``delay`` seconds, waking immediately on cancellation."""
        await self.run(asyncio.sleep(max(0.0, delay)))
