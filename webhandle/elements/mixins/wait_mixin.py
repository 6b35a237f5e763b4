from __future__ import annotations

import asyncio
import logging
import math
from typing import TYPE_CHECKING, Any

from webhandle.config import get_config
from webhandle.constants import js_helper

if TYPE_CHECKING:
    from webhandle.elements.geometry import Box
    from webhandle.protocol.runtime.types import RemoteObject
    from webhandle.scope import ExecutionScope


logger = logging.getLogger(__name__)


class WaitMixin:
    """
    Mixin providing predicate polling and geometric-stability waits.

    Every sleep goes through the element's execution scope, so cancelling the
    scope interrupts a wait in the middle of a delay rather than at the next
    poll boundary.
    """

    if TYPE_CHECKING:
        _scope: ExecutionScope

        async def evaluate(
            self, script: str, *args: Any, by_value: bool = True
        ) -> RemoteObject: ...

        async def box(self) -> Box: ...

    async def wait(self, script: str, *args: Any) -> None:
        """
        Evaluate a predicate until it returns the boolean ``true``.

        The delay between attempts starts at ``poll_initial_delay`` and grows
        by ``poll_backoff_factor`` up to ``poll_max_delay``. Any other result,
        including truthy non-boolean values, counts as not yet satisfied.

        Args:
            script: Predicate evaluated with ``this`` bound to the element.
            *args: Positional arguments forwarded to the predicate.

        Raises:
            EvaluationError: If the predicate throws.
            ProtocolError: If the browser rejects the call.
            CancellationError: If the element's scope ends while waiting.
        """
        config = get_config()
        delay = config.poll_initial_delay
        attempt = 0
        while True:
            attempt += 1
            result = await self.evaluate(script, *args)
            if result.get('value') is True:
                logger.debug(f'Wait predicate satisfied after {attempt} attempt(s)')
                return

            await self._scope.sleep(delay)
            delay = min(delay * config.poll_backoff_factor, config.poll_max_delay)

    async def wait_visible(self) -> None:
        """Wait until the element is rendered and not hidden."""
        await self.wait(js_helper('visible'))

    async def wait_invisible(self) -> None:
        """Wait until the element is hidden or has no layout box."""
        await self.wait(js_helper('invisible'))

    async def wait_stable(self, interval: float) -> None:
        """
        Wait until the element's box stops changing.

        Samples the box every ``interval`` seconds on a fixed schedule and
        returns at the first tick whose sample equals the previous one. Ticks
        missed while a sample was in flight are skipped. Periodic animations
        whose period aliases with ``interval`` can look stable.

        Raises:
            ValueError: If ``interval`` is not positive.
            CancellationError: If the element's scope ends while waiting.
        """
        if interval <= 0:
            raise ValueError(f'interval must be positive, got {interval}')

        await self.wait_visible()

        loop = asyncio.get_running_loop()
        previous = await self.box()
        start = loop.time()
        tick = 0
        while True:
            tick = max(tick + 1, math.floor((loop.time() - start) / interval) + 1)
            await self._scope.sleep(start + tick * interval - loop.time())

            current = await self.box()
            if current == previous:
                logger.debug(f'Element stable after {tick} tick(s): {current}')
                return
            previous = current
