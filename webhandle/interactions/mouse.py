from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from webhandle.commands import InputCommands
from webhandle.protocol.input.types import MouseButton, MouseEventType

if TYPE_CHECKING:
    from webhandle.browser.page import Page

logger = logging.getLogger(__name__)

_BUTTON_FLAGS = {
    MouseButton.NONE: 0,
    MouseButton.LEFT: 1,
    MouseButton.RIGHT: 2,
    MouseButton.MIDDLE: 4,
    MouseButton.BACK: 8,
    MouseButton.FORWARD: 16,
}


class Mouse:
    """
    Mouse input controller for a page.

    Tracks the cursor position and the set of pressed buttons so that moves
    can be interpolated from the last known position and drag states are
    reported to the page.
    """

    def __init__(self, page: Page):
        """
        Initialize mouse controller.

        Args:
            page: Page whose session receives the input events.
        """
        self._page = page
        self._position: tuple[float, float] = (0.0, 0.0)
        self._buttons = 0

    @property
    def position(self) -> tuple[float, float]:
        """Last dispatched cursor position."""
        return self._position

    async def move(self, x: float, y: float, steps: int = 1) -> None:
        """
        Move the cursor to the given position.

        Args:
            x: Target X coordinate (CSS pixels).
            y: Target Y coordinate (CSS pixels).
            steps: Number of evenly spaced mouseMoved events to reach the target.
        """
        steps = max(1, steps)
        start_x, start_y = self._position
        step_x = (x - start_x) / steps
        step_y = (y - start_y) / steps

        for i in range(1, steps + 1):
            if i == steps:
                to_x, to_y = x, y
            else:
                to_x, to_y = start_x + step_x * i, start_y + step_y * i
            await self._dispatch_move(to_x, to_y)

    async def down(self, button: MouseButton = MouseButton.LEFT, click_count: int = 1) -> None:
        """Press a mouse button at the current position."""
        self._buttons |= _BUTTON_FLAGS[button]
        await self._dispatch_button(MouseEventType.MOUSE_PRESSED, button, click_count)

    async def up(self, button: MouseButton = MouseButton.LEFT, click_count: int = 1) -> None:
        """Release a mouse button at the current position."""
        self._buttons &= ~_BUTTON_FLAGS[button]
        await self._dispatch_button(MouseEventType.MOUSE_RELEASED, button, click_count)

    async def click(self, button: MouseButton = MouseButton.LEFT, click_count: int = 1) -> None:
        """
        Press and release a button at the current position.

        Args:
            button: Mouse button to click.
            click_count: Number of clicks reported to the page (2 for double-click).
        """
        logger.debug(f'Mouse click: button={button}, position={self._position}')
        await self.down(button, click_count)
        await self.up(button, click_count)

    async def _dispatch_move(self, x: float, y: float) -> None:
        """Dispatch a mouseMoved event and update internal position."""
        command = InputCommands.dispatch_mouse_event(
            type=MouseEventType.MOUSE_MOVED,
            x=x,
            y=y,
            buttons=self._buttons,
        )
        await self._page.execute_command(command)
        self._position = (x, y)

    async def _dispatch_button(
        self,
        event_type: MouseEventType,
        button: MouseButton,
        click_count: int = 1,
    ) -> None:
        """Dispatch mousePressed or mouseReleased at current position."""
        command = InputCommands.dispatch_mouse_event(
            type=event_type,
            x=self._position[0],
            y=self._position[1],
            button=button,
            buttons=self._buttons,
            click_count=click_count,
        )
        await self._page.execute_command(command)


MouseAPI = Mouse
