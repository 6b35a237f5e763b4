from __future__ import annotations

from typing import Optional

from webhandle.protocol.base import Command
from webhandle.protocol.input.types import KeyEventType, MouseButton, MouseEventType


class InputCommands:
    """Builders for Input domain commands."""

    @staticmethod
    def dispatch_mouse_event(
        type: MouseEventType,
        x: float,
        y: float,
        button: Optional[MouseButton] = None,
        buttons: Optional[int] = None,
        click_count: Optional[int] = None,
    ) -> Command[dict, dict]:
        params: dict = {'type': type, 'x': x, 'y': y}
        if button is not None:
            params['button'] = button
        if buttons is not None:
            params['buttons'] = buttons
        if click_count is not None:
            params['clickCount'] = click_count
        return Command(method='Input.dispatchMouseEvent', params=params)

    @staticmethod
    def dispatch_key_event(
        type: KeyEventType,
        key: Optional[str] = None,
        text: Optional[str] = None,
        code: Optional[str] = None,
    ) -> Command[dict, dict]:
        params: dict = {'type': type}
        if key is not None:
            params['key'] = key
        if text is not None:
            params['text'] = text
        if code is not None:
            params['code'] = code
        return Command(method='Input.dispatchKeyEvent', params=params)

    @staticmethod
    def insert_text(text: str) -> Command[dict, dict]:
        return Command(method='Input.insertText', params={'text': text})
