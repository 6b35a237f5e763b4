from __future__ import annotations

import logging
from contextlib import AbstractAsyncContextManager
from pathlib import Path
from typing import TYPE_CHECKING, Any, Union

from webhandle.commands import DomCommands
from webhandle.constants import js_helper
from webhandle.elements.geometry import click_point
from webhandle.protocol.input.types import MouseButton

if TYPE_CHECKING:
    from webhandle.browser.page import Page
    from webhandle.elements.geometry import Box
    from webhandle.protocol.base import Command, T_CommandParams, T_CommandResponse
    from webhandle.protocol.runtime.types import RemoteObject
    from webhandle.scope import ExecutionScope


logger = logging.getLogger(__name__)


class InteractionMixin:
    """
    Mixin composing user-level interactions from ordered protocol steps.

    Each action awaits its steps in order and stops at the first failure;
    nothing is retried. Later steps depend on the side effects of earlier
    ones (scroll position before geometry, geometry before the click point).
    """

    if TYPE_CHECKING:
        _object_id: str
        _page: Page
        _scope: ExecutionScope

        async def evaluate(
            self, script: str, *args: Any, by_value: bool = True
        ) -> RemoteObject: ...

        async def _evaluate_helper(
            self, name: str, *args: Any, by_value: bool = True
        ) -> RemoteObject: ...

        async def _execute_command(
            self, command: Command[T_CommandParams, T_CommandResponse]
        ) -> T_CommandResponse: ...

        async def box(self) -> Box: ...

        async def wait_visible(self) -> None: ...

        async def _slow_motion(self) -> None: ...

        def _trace(self, message: str) -> AbstractAsyncContextManager[None]: ...

    async def scroll_into_view(self) -> None:
        """Scroll the element into the viewport if it is not already visible."""
        async with self._trace('scroll into view'):
            await self._slow_motion()
            await self._execute_command(DomCommands.scroll_into_view_if_needed(self._object_id))

    async def focus(self) -> None:
        """Scroll the element into view and give it keyboard focus."""
        await self.scroll_into_view()
        await self.evaluate('this.focus()')

    async def blur(self) -> None:
        """Remove keyboard focus from the element."""
        await self.evaluate('this.blur()')

    async def click(self, button: MouseButton = MouseButton.LEFT) -> None:
        """
        Click the center of the element.

        Waits for visibility, scrolls the element into view, moves the mouse
        to the center of its box in a single step, then presses and releases
        ``button``.

        Args:
            button: Mouse button to click.
        """
        await self.wait_visible()
        await self.scroll_into_view()

        box = await self.box()
        x, y = click_point(box)
        logger.debug(f'Clicking {button.value} at ({x}, {y})')

        mouse = self._page.mouse
        await self._scope.run(mouse.move(x, y, 1))

        async with self._trace(f'{button.value} click'):
            await self._scope.run(mouse.click(button))

    async def press(self, key: str) -> None:
        """Focus the element and press a key."""
        await self.wait_visible()
        await self.focus()

        async with self._trace(f'press {key}'):
            await self._scope.run(self._page.keyboard.press(key))

    async def input(self, text: str) -> None:
        """
        Focus the element and type text into it.

        The text is inserted through the input method, then bubbling ``input``
        and ``change`` events are dispatched because raw insertion does not
        reliably trigger listeners bound to those events.
        """
        await self.wait_visible()
        await self.focus()

        async with self._trace(f'input {text}'):
            await self._scope.run(self._page.keyboard.insert_text(text))
            await self._evaluate_helper('inputEvent')

    async def select(self, selectors: list[str]) -> None:
        """
        Select the options of a ``<select>`` element.

        Args:
            selectors: Option texts or CSS selectors; an option is selected
                when its text contains the value or it matches the selector.
        """
        await self.wait_visible()

        async with self._trace(f'select "{"; ".join(selectors)}"'):
            await self._slow_motion()
            await self._evaluate_helper('select', list(selectors))

    async def select_text(self, regex: str) -> None:
        """Select the first span of the field's value that matches ``regex``."""
        await self.focus()

        async with self._trace(f'select text: {regex}'):
            await self._slow_motion()
            await self._evaluate_helper('selectText', regex)

    async def select_all_text(self) -> None:
        """Select the whole value of a text field."""
        await self.focus()

        async with self._trace('select all text'):
            await self._slow_motion()
            await self._evaluate_helper('selectAllText')

    async def set_files(self, paths: list[Union[str, Path]]) -> None:
        """
        Assign files to an ``<input type="file">`` element.

        Args:
            paths: File paths; relative paths are made absolute against the
                current working directory.
        """
        files = [str(Path(path).absolute()) for path in paths]

        async with self._trace(f'set files: {files}'):
            await self._slow_motion()
            await self._execute_command(DomCommands.set_file_input_files(files, self._object_id))
