from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from webhandle.commands import InputCommands
from webhandle.protocol.input.types import KeyEventType

if TYPE_CHECKING:
    from webhandle.browser.page import Page

logger = logging.getLogger(__name__)


class Keyboard:
    """Keyboard input controller for a page."""

    def __init__(self, page: Page):
        self._page = page

    async def down(self, key: str) -> None:
        """Dispatch keyDown; printable single characters also carry their text."""
        text = key if len(key) == 1 else None
        await self._page.execute_command(
            InputCommands.dispatch_key_event(type=KeyEventType.KEY_DOWN, key=key, text=text)
        )

    async def up(self, key: str) -> None:
        await self._page.execute_command(
            InputCommands.dispatch_key_event(type=KeyEventType.KEY_UP, key=key)
        )

    async def press(self, key: str) -> None:
        """
        Press and release a key.

        Args:
            key: Key value such as ``'a'``, ``'Enter'`` or ``'Tab'``.
        """
        logger.debug(f'Keyboard press: {key!r}')
        await self.down(key)
        await self.up(key)

    async def insert_text(self, text: str) -> None:
        """Insert text as if typed through an input method, without key events."""
        logger.debug(f'Keyboard insert text: length={len(text)}')
        await self._page.execute_command(InputCommands.insert_text(text))


KeyboardAPI = Keyboard
