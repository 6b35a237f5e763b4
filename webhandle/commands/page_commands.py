from __future__ import annotations

from typing import Optional

from webhandle.protocol.base import Command
from webhandle.protocol.page.methods import (
    CaptureScreenshotResult,
    CreateIsolatedWorldResult,
    GetFrameTreeResult,
    GetResourceContentResult,
)
from webhandle.protocol.page.types import ScreenshotFormat, Viewport


class PageCommands:
    """Builders for Page domain commands."""

    @staticmethod
    def get_frame_tree() -> Command[dict, GetFrameTreeResult]:
        return Command(method='Page.getFrameTree')

    @staticmethod
    def create_isolated_world(
        frame_id: str, world_name: Optional[str] = None
    ) -> Command[dict, CreateIsolatedWorldResult]:
        params: dict = {'frameId': frame_id}
        if world_name is not None:
            params['worldName'] = world_name
        return Command(method='Page.createIsolatedWorld', params=params)

    @staticmethod
    def capture_screenshot(
        format: Optional[ScreenshotFormat] = None,
        quality: Optional[int] = None,
        clip: Optional[Viewport] = None,
        capture_beyond_viewport: Optional[bool] = None,
    ) -> Command[dict, CaptureScreenshotResult]:
        params: dict = {}
        if format is not None:
            params['format'] = ScreenshotFormat(format).value
        if quality is not None:
            params['quality'] = quality
        if clip is not None:
            params['clip'] = clip
        if capture_beyond_viewport is not None:
            params['captureBeyondViewport'] = capture_beyond_viewport
        return Command(method='Page.captureScreenshot', params=params)

    @staticmethod
    def get_resource_content(frame_id: str, url: str) -> Command[dict, GetResourceContentResult]:
        return Command(
            method='Page.getResourceContent', params={'frameId': frame_id, 'url': url}
        )
