from __future__ import annotations

from enum import Enum

from typing_extensions import TypedDict


class ScreenshotFormat(str, Enum):
    PNG = 'png'
    JPEG = 'jpeg'
    WEBP = 'webp'

    @classmethod
    def has_value(cls, value: str) -> bool:
        return value in cls._value2member_map_

    @classmethod
    def get_value(cls, value: str) -> ScreenshotFormat:
        return cls(value)


class Viewport(TypedDict):
    """Clip rectangle for screenshots, in CSS pixels."""

    x: float
    y: float
    width: float
    height: float
    scale: float
