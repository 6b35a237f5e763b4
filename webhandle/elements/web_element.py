from __future__ import annotations

import logging
import uuid
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, AsyncIterator, Optional

from webhandle.commands import DomCommands, RuntimeCommands
from webhandle.config import get_config
from webhandle.constants import TRACE_OVERLAY_ATTRIBUTE, js_helper
from webhandle.elements.frame_resolver import find_owner_frame
from webhandle.elements.geometry import Box, box_from_model
from webhandle.elements.mixins import InteractionMixin, ResourceMixin, WaitMixin
from webhandle.exceptions import WebHandleException
from webhandle.scope import ExecutionScope
from webhandle.utils import extract_remote_object, to_call_argument, to_function_declaration

if TYPE_CHECKING:
    from webhandle.browser.page import Page
    from webhandle.protocol.base import Command, T_CommandParams, T_CommandResponse
    from webhandle.protocol.dom.types import Node
    from webhandle.protocol.runtime.types import RemoteObject

logger = logging.getLogger(__name__)
trace_logger = logging.getLogger('webhandle.trace')


class WebElement(WaitMixin, InteractionMixin, ResourceMixin):
    """
    A DOM element addressed by a remote object handle.

    The handle is only valid in the JavaScript world of the owning page. Frame
    resolution may move the element to a nested iframe page; the element keeps
    its identity and execution scope while the page/handle pair is replaced.
    """

    def __init__(
        self,
        object_id: str,
        page: Page,
        scope: Optional[ExecutionScope] = None,
    ):
        """
        Initialize web element.

        Args:
            object_id: Remote object id of the element.
            page: Page whose JavaScript world issued the handle.
            scope: Execution scope governing this element's calls; a child of
                the page scope when omitted.
        """
        self._object_id = object_id
        self._page = page
        self._scope = scope if scope is not None else page.scope.child()

    @property
    def object_id(self) -> str:
        return self._object_id

    @property
    def page(self) -> Page:
        return self._page

    @property
    def scope(self) -> ExecutionScope:
        return self._scope

    def timeout(self, seconds: float) -> WebElement:
        """
        Same element bound to a child scope that expires after ``seconds``.

        Calls made through the returned element raise CancellationError once
        the deadline passes; the original element is unaffected.
        """
        return WebElement(self._object_id, self._page, scope=self._scope.child(timeout=seconds))

    def cancel(self, reason: str = 'element cancelled') -> None:
        """Abort every pending call and wait of this element."""
        self._scope.cancel(reason)

    async def release(self) -> None:
        """Release the remote handle and end the element's scope."""
        logger.debug(f'Releasing {self!r}')
        await self._execute_command(RuntimeCommands.release_object(self._object_id))
        self._scope.cancel('element released')

    async def evaluate(self, script: str, *args: Any, by_value: bool = True) -> RemoteObject:
        """
        Run a script with ``this`` bound to the element.

        Args:
            script: A function declaration applied to ``args``, or an expression.
            *args: Positional arguments; WebElements are passed by handle.
            by_value: Convert the result to JSON; False keeps a live handle.

        Returns:
            RemoteObject describing the result.

        Raises:
            EvaluationError: If the script throws in the page.
            ProtocolError: If the browser rejects the call (e.g. foreign handle).
            CancellationError: If the element's scope ends first.
        """
        command = RuntimeCommands.call_function_on(
            function_declaration=to_function_declaration(script),
            object_id=self._object_id,
            arguments=[to_call_argument(arg) for arg in args],
            return_by_value=by_value,
            await_promise=True,
        )
        response = await self._execute_command(command)
        return extract_remote_object(response)

    async def _evaluate_helper(self, name: str, *args: Any, by_value: bool = True) -> RemoteObject:
        return await self.evaluate(js_helper(name), *args, by_value=by_value)

    async def box(self) -> Box:
        """Bounding box of the element's content quad."""
        response = await self._execute_command(DomCommands.get_box_model(self._object_id))
        return box_from_model(response['result']['model'])

    async def text(self) -> str:
        """Visible text, or the value of form fields."""
        result = await self._evaluate_helper('text')
        return str(result.get('value', ''))

    async def html(self) -> str:
        result = await self.evaluate('this.outerHTML')
        return str(result.get('value', ''))

    async def visible(self) -> bool:
        result = await self._evaluate_helper('visible')
        return bool(result.get('value'))

    async def matches(self, selector: str) -> bool:
        """Whether the element matches a CSS selector."""
        result = await self.evaluate('(s) => this.matches(s)', selector)
        return bool(result.get('value'))

    async def get_attribute(self, name: str) -> Optional[str]:
        """Attribute value, or None when the attribute is absent."""
        result = await self.evaluate('(n) => this.getAttribute(n)', name)
        return result.get('value')

    async def get_property(self, name: str) -> Any:
        """JSON value of a JavaScript property."""
        result = await self.evaluate('(n) => this[n]', name)
        return result.get('value')

    async def describe(self, depth: int = 1, pierce: bool = False) -> Node:
        """
        Describe the node via DOM.describeNode.

        Args:
            depth: Subtree depth to include; 0 means 1, negative means the whole subtree.
            pierce: Whether iframes and shadow roots are traversed.
        """
        if depth < 0:
            depth = -1
        elif depth == 0:
            depth = 1
        response = await self._execute_command(
            DomCommands.describe_node(self._object_id, depth=depth, pierce=pierce)
        )
        return response['result']['node']

    async def shadow_root(self) -> WebElement:
        """The element's shadow root as a new element of the same page."""
        node = await self.describe()
        backend_node_id = node['shadowRoots'][0]['backendNodeId']
        response = await self._execute_command(
            DomCommands.resolve_node(backend_node_id=backend_node_id)
        )
        return self._page.element_from_object(response['result']['object']['objectId'])

    def frame(self) -> Page:
        """Nested page for this iframe element."""
        from webhandle.browser.page import Page  # noqa: PLC0415

        return Page.for_iframe(self)

    async def ensure_parent_page(self, node_id: int, object_id: Optional[str]) -> bool:
        """
        Make sure the element is bound to the page that owns its node.

        When ``object_id`` does not belong to the current page, the page's
        iframes are searched depth-first and the element is rebound to the
        first frame that resolves ``node_id``.

        Returns:
            True if the element is bound to its owning page, False if no known
            frame owns the node.
        """
        if object_id and await self._scope.run(self._page.has_object(object_id)):
            return True

        match = await self._scope.run(find_owner_frame(self._page, node_id))
        if match is None:
            logger.debug(f'Node {node_id} not found in any frame below {self._page!r}')
            return False

        self._page, self._object_id = match.page, match.object_id
        logger.debug(f'Rebound node {node_id} to {match.page!r}')
        return True

    async def _execute_command(
        self, command: Command[T_CommandParams, T_CommandResponse]
    ) -> T_CommandResponse:
        return await self._scope.run(self._page.execute_command(command))

    async def _slow_motion(self) -> None:
        delay = get_config().slow_motion
        if delay > 0:
            await self._scope.sleep(delay)

    @asynccontextmanager
    async def _trace(self, message: str) -> AsyncIterator[None]:
        """
        Report an interaction on the trace side channel.

        Logs the message and highlights the element with an in-page overlay
        while the block runs. Overlay failures are logged and ignored.
        """
        if not get_config().trace:
            yield
            return

        trace_logger.info(f'{message} {self!r}')
        overlay_id = uuid.uuid4().hex
        try:
            await self._evaluate_helper(
                'showOverlay', TRACE_OVERLAY_ATTRIBUTE, overlay_id, message
            )
        except WebHandleException as exc:
            logger.debug(f'Trace overlay failed: {exc}')
            overlay_id = None

        try:
            yield
        finally:
            if overlay_id is not None:
                try:
                    await self._evaluate_helper('hideOverlay', TRACE_OVERLAY_ATTRIBUTE, overlay_id)
                except WebHandleException as exc:
                    logger.debug(f'Trace overlay cleanup failed: {exc}')

    def __repr__(self) -> str:
        return f'<WebElement object_id={self._object_id!r} page={self._page!r}>'
