from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, AsyncIterator, Optional

from webhandle.commands import DomCommands, DomainCommands, PageCommands, RuntimeCommands
from webhandle.config import get_config
from webhandle.constants import FOREIGN_NODE_ERRORS, FOREIGN_OBJECT_ERRORS, js_helper
from webhandle.exceptions import (
    DomainToggleError,
    ElementNotFound,
    NotFoundInAnyFrame,
    ProtocolError,
    WebHandleException,
)
from webhandle.interactions import Keyboard, Mouse
from webhandle.scope import ExecutionScope
from webhandle.utils import (
    ObjectRef,
    decode_base64_to_bytes,
    extract_remote_object,
    to_call_argument,
)

if TYPE_CHECKING:
    from webhandle.connection import ProtocolClient
    from webhandle.elements.web_element import WebElement
    from webhandle.protocol.base import Command, T_CommandParams, T_CommandResponse
    from webhandle.protocol.page.methods import GetResourceContentResult
    from webhandle.protocol.page.types import ScreenshotFormat, Viewport
    from webhandle.protocol.runtime.types import RemoteObject

logger = logging.getLogger(__name__)

ISOLATED_WORLD_NAME = 'webhandle'


def create_web_element(*args, **kwargs):
    """
    Create WebElement instance avoiding circular imports.

    Factory method that dynamically imports WebElement at runtime
    to prevent circular import dependencies.
    """
    from webhandle.elements.web_element import WebElement  # noqa: PLC0415

    return WebElement(*args, **kwargs)


class Page:
    """
    A page or iframe context within one protocol session.

    A top-level page evaluates in the default execution context of its
    session. A nested page represents the content of an iframe element: it
    shares the root page's client, session, input devices and domain toggles,
    and evaluates in an isolated world created for the iframe's frame.
    """

    def __init__(
        self,
        client: ProtocolClient,
        session_id: Optional[str] = None,
        *,
        scope: Optional[ExecutionScope] = None,
        parent: Optional[Page] = None,
        element: Optional[WebElement] = None,
    ):
        """
        Initialize page context.

        Args:
            client: Transport used to send protocol commands.
            session_id: Protocol session attached to the page target.
            scope: Execution scope for page-level calls; nested pages inherit
                the parent's scope when omitted.
            parent: Page containing the iframe element (nested pages only).
            element: The iframe element this page represents (nested pages only).
        """
        self._client = client
        self._session_id = session_id
        self._parent = parent
        self._element = element
        if scope is None:
            scope = parent.scope if parent is not None else ExecutionScope()
        self._scope = scope

        self._frame_id: Optional[str] = None
        self._execution_context_id: Optional[int] = None
        self._window_object_id: Optional[str] = None

        self._mouse: Optional[Mouse] = None
        self._keyboard: Optional[Keyboard] = None
        self._domain_refs: dict[str, int] = {}
        self._domain_lock = asyncio.Lock()
        if parent is None:
            self._mouse = Mouse(self)
            self._keyboard = Keyboard(self)

        logger.debug(
            f'Page initialized: session_id={session_id}, is_iframe={self.is_iframe}'
        )

    @classmethod
    def for_iframe(cls, element: WebElement) -> Page:
        """Create the nested page for an iframe element."""
        parent = element.page
        return cls(parent._client, parent._session_id, parent=parent, element=element)

    @property
    def session_id(self) -> Optional[str]:
        return self._session_id

    @property
    def scope(self) -> ExecutionScope:
        return self._scope

    @property
    def parent(self) -> Optional[Page]:
        return self._parent

    @property
    def iframe_element(self) -> Optional[WebElement]:
        """The iframe element for nested pages, None for top-level pages."""
        return self._element

    @property
    def is_iframe(self) -> bool:
        return self._element is not None

    @property
    def root(self) -> Page:
        """The top-level page of this frame tree."""
        page = self
        while page._parent is not None:
            page = page._parent
        return page

    @property
    def mouse(self) -> Mouse:
        return self.root._mouse

    @property
    def keyboard(self) -> Keyboard:
        return self.root._keyboard

    async def execute_command(
        self,
        command: Command[T_CommandParams, T_CommandResponse],
        timeout: Optional[float] = None,
    ) -> T_CommandResponse:
        """
        Send a command through the client within the page scope.

        Raises:
            ProtocolError: If the browser answers with an error.
            CancellationError: If the page scope ends first.
        """
        if self._session_id:
            command['sessionId'] = self._session_id
        if timeout is None:
            timeout = get_config().command_timeout

        response = await self._scope.run(self._client.execute_command(command, timeout=timeout))
        if 'error' in response:
            error = response['error']
            logger.debug(f'{command["method"]} failed: {error}')
            raise ProtocolError(error.get('message'), code=error.get('code'))
        return response

    async def frame_id(self) -> str:
        """Frame id of this page (the iframe's content frame for nested pages)."""
        if self._frame_id is not None:
            return self._frame_id

        if self._element is None:
            response = await self.execute_command(PageCommands.get_frame_tree())
            self._frame_id = response['result']['frameTree']['frame']['id']
        else:
            node = await self._element.describe()
            self._frame_id = node['frameId']
        return self._frame_id

    async def execution_context_id(self) -> Optional[int]:
        """
        Execution context used to evaluate in this page.

        Top-level pages use the session's default context and return None.
        """
        if self._element is None:
            return None
        if self._execution_context_id is None:
            frame_id = await self.frame_id()
            response = await self.execute_command(
                PageCommands.create_isolated_world(frame_id, world_name=ISOLATED_WORLD_NAME)
            )
            self._execution_context_id = response['result']['executionContextId']
            logger.debug(
                f'Isolated world created: frame_id={frame_id}, '
                f'context_id={self._execution_context_id}'
            )
        return self._execution_context_id

    def invalidate(self) -> None:
        """Forget cached frame and context ids, e.g. after the frame navigated."""
        self._frame_id = None
        self._execution_context_id = None
        self._window_object_id = None

    async def call(self, script: str, *args: Any, by_value: bool = True) -> RemoteObject:
        """
        Call a function declaration with ``this`` bound to the page's global object.

        Args:
            script: Function declaration receiving ``args`` positionally.
            *args: Arguments; WebElements are passed by handle.
            by_value: Return the result as JSON instead of a live handle.

        Raises:
            EvaluationError: If the script throws.
        """
        arguments = [to_call_argument(arg) for arg in args]
        context_id = await self.execution_context_id()
        if context_id is not None:
            command = RuntimeCommands.call_function_on(
                function_declaration=script,
                execution_context_id=context_id,
                arguments=arguments,
                return_by_value=by_value,
                await_promise=True,
            )
        else:
            command = RuntimeCommands.call_function_on(
                function_declaration=script,
                object_id=await self._window(),
                arguments=arguments,
                return_by_value=by_value,
                await_promise=True,
            )
        response = await self.execute_command(command)
        return extract_remote_object(response)

    async def elements(self, selector: str) -> list[WebElement]:
        """
        Find all elements matching a CSS selector, in document order.

        Returns:
            List of WebElement instances, empty if nothing matches.
        """
        logger.debug(f'elements(): selector={selector!r}, is_iframe={self.is_iframe}')
        result = await self.call(js_helper('querySelectorAll'), selector, by_value=False)
        array_id = result.get('objectId')
        if not array_id:
            return []

        try:
            response = await self.execute_command(RuntimeCommands.get_properties(array_id))
        finally:
            await self.release(array_id)

        indexed = []
        for prop in response['result']['result']:
            if not (prop['name'].isdigit() and 'objectId' in prop.get('value', {})):
                continue
            indexed.append((int(prop['name']), prop['value']['objectId']))
        indexed.sort()

        elements = [self.element_from_object(object_id) for _, object_id in indexed]
        logger.debug(f'elements() returning {len(elements)} elements')
        return elements

    async def element(self, selector: str) -> WebElement:
        """
        Find the first element matching a CSS selector.

        Raises:
            ElementNotFound: If nothing matches.
        """
        result = await self.call(
            'function (selector) { return document.querySelector(selector) }',
            selector,
            by_value=False,
        )
        object_id = result.get('objectId')
        if not object_id:
            raise ElementNotFound(f'No element matches {selector!r}')
        return self.element_from_object(object_id)

    async def document(self) -> WebElement:
        """The document node of this page."""
        result = await self.call('function () { return document }', by_value=False)
        return self.element_from_object(result['objectId'])

    def element_from_object(self, object_id: str) -> WebElement:
        """Wrap an existing remote handle that belongs to this page."""
        return create_web_element(object_id, self)

    async def element_from_node(self, node_id: int) -> WebElement:
        """
        Create an element for a DOM node id, locating the frame that owns it.

        The handle first resolved in this page is released when the element
        ends up bound to a different one, or to none.

        Raises:
            NotFoundInAnyFrame: If neither this page nor any nested iframe owns the node.
        """
        object_id = await self.resolve_node(node_id)
        element = self.element_from_object(object_id or '')
        owned = await element.ensure_parent_page(node_id, object_id)
        if object_id and (not owned or element.object_id != object_id):
            await self.release(object_id)
        if not owned:
            raise NotFoundInAnyFrame(f'Node {node_id} is not owned by any known frame')
        return element

    async def resolve_node(self, node_id: int) -> Optional[str]:
        """
        Resolve a node id into a handle scoped to this page's context.

        Returns:
            The object id, or None when the node does not belong to this context.
        """
        try:
            response = await self.execute_command(
                DomCommands.resolve_node(
                    node_id=node_id, execution_context_id=await self.execution_context_id()
                )
            )
        except ProtocolError as exc:
            if any(message in exc.message for message in FOREIGN_NODE_ERRORS):
                logger.debug(f'Node {node_id} is not in this context: {exc.message}')
                return None
            raise
        return response['result']['object'].get('objectId')

    async def has_object(self, object_id: str) -> bool:
        """Whether a remote handle belongs to this page's JavaScript world."""
        try:
            result = await self.call(js_helper('containsElement'), ObjectRef(object_id))
        except ProtocolError as exc:
            if any(message in exc.message for message in FOREIGN_OBJECT_ERRORS):
                return False
            raise
        return bool(result.get('value'))

    async def release(self, object_id: str) -> None:
        """Release a remote handle."""
        await self.execute_command(RuntimeCommands.release_object(object_id))

    @asynccontextmanager
    async def enable_domain(self, domain: str) -> AsyncIterator[None]:
        """
        Keep a protocol domain enabled for the duration of the block.

        The toggle is shared by every user of the session: the first holder
        sends ``<domain>.enable``, the last one sends ``<domain>.disable``.
        Disabling is attempted on every exit path once the domain was acquired.

        Raises:
            DomainToggleError: If disabling fails; carries the block's own
                error when there was one.
        """
        root = self.root
        await root._acquire_domain(domain)
        try:
            yield
        except BaseException as exc:
            try:
                await root._release_domain(domain)
            except WebHandleException as release_error:
                raise DomainToggleError(domain, release_error, exc) from exc
            raise
        try:
            await root._release_domain(domain)
        except WebHandleException as release_error:
            raise DomainToggleError(domain, release_error) from release_error

    async def _acquire_domain(self, domain: str) -> None:
        async with self._domain_lock:
            count = self._domain_refs.get(domain, 0)
            if count == 0:
                logger.debug(f'Enabling {domain} domain')
                await self.execute_command(DomainCommands.enable(domain))
            self._domain_refs[domain] = count + 1

    async def _release_domain(self, domain: str) -> None:
        async with self._domain_lock:
            count = self._domain_refs.get(domain, 0) - 1
            if count > 0:
                self._domain_refs[domain] = count
                return
            self._domain_refs.pop(domain, None)
            logger.debug(f'Disabling {domain} domain')
            await self.execute_command(DomainCommands.disable(domain))

    async def capture_screenshot(
        self,
        format: Optional[ScreenshotFormat] = None,
        quality: Optional[int] = None,
        clip: Optional[Viewport] = None,
    ) -> bytes:
        """Capture the top-level page, optionally clipped, and return decoded image bytes."""
        root = self.root
        logger.info(f'Capturing screenshot: format={format}, quality={quality}, clip={clip}')
        response = await root.execute_command(
            PageCommands.capture_screenshot(format=format, quality=quality, clip=clip)
        )
        return decode_base64_to_bytes(response['result']['data'])

    async def get_resource_content(self, url: str) -> GetResourceContentResult:
        """Fetch the raw content of a resource loaded by this page's frame."""
        frame_id = await self.frame_id()
        logger.debug(f'Fetching resource content: frame_id={frame_id}, url={url}')
        response = await self.execute_command(PageCommands.get_resource_content(frame_id, url))
        return response['result']

    async def _window(self) -> str:
        if self._window_object_id is None:
            response = await self.execute_command(RuntimeCommands.evaluate('window'))
            self._window_object_id = extract_remote_object(response)['objectId']
        return self._window_object_id

    def __repr__(self) -> str:
        kind = 'iframe' if self.is_iframe else 'top-level'
        return f'<Page {kind} session_id={self._session_id!r}>'

