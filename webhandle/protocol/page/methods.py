from __future__ import annotations

from typing_extensions import TypedDict

from webhandle.protocol.base import Response


class Frame(TypedDict):
    id: str
    url: str


class FrameTree(TypedDict):
    frame: Frame


class GetFrameTreeResult(TypedDict):
    frameTree: FrameTree


class CreateIsolatedWorldResult(TypedDict):
    executionContextId: int


class CaptureScreenshotResult(TypedDict):
    data: str


class GetResourceContentResult(TypedDict):
    content: str
    base64Encoded: bool


GetFrameTreeResponse = Response[GetFrameTreeResult]
CreateIsolatedWorldResponse = Response[CreateIsolatedWorldResult]
CaptureScreenshotResponse = Response[CaptureScreenshotResult]
GetResourceContentResponse = Response[GetResourceContentResult]
