"""
Interface of the transport that carries protocol commands.

The persistent connection and its command/event multiplexing live outside this
package; anything with a compatible ``execute_command`` coroutine can drive a
:class:`~webhandle.browser.page.Page`.
"""

from __future__ import annotations

from typing import Protocol

from webhandle.protocol.base import Command, Response


class ProtocolClient(Protocol):
    async def execute_command(self, command: Command, timeout: float = 60) -> Response: ...


__all__ = ['ProtocolClient']
