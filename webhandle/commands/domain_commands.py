from __future__ import annotations

from webhandle.protocol.base import Command


class DomainCommands:
    """Builders for the enable/disable pair every protocol domain exposes."""

    @staticmethod
    def enable(domain: str) -> Command[dict, dict]:
        """Start event delivery and state tracking for a domain (e.g. ``'Page'``)."""
        return Command(method=f'{domain}.enable')

    @staticmethod
    def disable(domain: str) -> Command[dict, dict]:
        return Command(method=f'{domain}.disable')
