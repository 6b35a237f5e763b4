"""Process-wide settings for element interactions."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

_TRUTHY = {'1', 'true', 'yes', 'on'}


@dataclass(frozen=True)
class AutomationConfig:
    """Timing and diagnostics configuration shared by every element."""

    # delay injected before UI-mutating steps, in seconds
    slow_motion: float = 0.0
    trace: bool = False

    command_timeout: float = 60.0

    poll_initial_delay: float = 0.1
    poll_max_delay: float = 1.0
    poll_backoff_factor: float = 1.5

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> AutomationConfig:
        """
        Build a configuration from ``WEBHANDLE_*`` environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``.

        Returns:
            AutomationConfig with defaults for every unset variable.

        Raises:
            ValueError: If a numeric variable cannot be parsed.
        """
        env = os.environ if environ is None else environ
        kwargs: dict = {}

        slow_motion = env.get('WEBHANDLE_SLOW_MOTION')
        if slow_motion:
            kwargs['slow_motion'] = float(slow_motion)

        trace = env.get('WEBHANDLE_TRACE')
        if trace:
            kwargs['trace'] = trace.strip().lower() in _TRUTHY

        command_timeout = env.get('WEBHANDLE_COMMAND_TIMEOUT')
        if command_timeout:
            kwargs['command_timeout'] = float(command_timeout)

        logger.debug(f'Configuration loaded from environment: {kwargs}')
        return cls(**kwargs)


_config = AutomationConfig.from_env()


def get_config() -> AutomationConfig:
    """Current process-wide configuration."""
    return _config


def set_config(config: AutomationConfig) -> None:
    """Replace the process-wide configuration."""
    global _config
    logger.debug(f'Configuration replaced: {config}')
    _config = config
