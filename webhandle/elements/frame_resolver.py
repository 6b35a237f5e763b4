"""Depth-first search for the iframe whose JavaScript world owns a DOM node."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from webhandle.exceptions import HandleReleaseError, WebHandleException

if TYPE_CHECKING:
    from webhandle.browser.page import Page
    from webhandle.elements.web_element import WebElement

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameMatch:
    """The nested page that owns the node, the node's handle there, and the iframe."""

    page: Page
    object_id: str
    iframe: WebElement


async def find_owner_frame(page: Page, node_id: int) -> Optional[FrameMatch]:
    """
    Search the iframes below ``page`` for the one that can resolve ``node_id``.

    Iframes are tried in document order; when an iframe cannot resolve the
    node, its own iframes are searched before its next sibling. The first
    frame that resolves the node wins and the walk stops.

    Every iframe handle obtained by the walk is released before returning,
    except the matched iframe, which backs the returned page.

    Args:
        page: Page whose nested frames are searched (the page itself is not).
        node_id: DOM node id to resolve.

    Returns:
        FrameMatch for the owning frame, or None if no frame owns the node.

    Raises:
        ProtocolError: If a protocol call fails during the walk.
        HandleReleaseError: If transient iframe handles could not be released.
    """
    iframes = await page.elements('iframe')
    logger.debug(f'Searching {len(iframes)} iframe(s) of {page!r} for node {node_id}')

    match: Optional[FrameMatch] = None
    error: Optional[BaseException] = None
    try:
        for iframe in iframes:
            frame = iframe.frame()
            object_id = await frame.resolve_node(node_id)
            if object_id:
                logger.debug(f'Node {node_id} resolved in {frame!r}')
                match = FrameMatch(page=frame, object_id=object_id, iframe=iframe)
                break

            match = await find_owner_frame(frame, node_id)
            if match is not None:
                break
    except BaseException as exc:
        error = exc
        raise
    finally:
        keep = match.iframe if match is not None else None
        await _release_all([iframe for iframe in iframes if iframe is not keep], error)

    return match


async def _release_all(elements: list[WebElement], original: Optional[BaseException]) -> None:
    """Release every element, then raise once if any release failed."""
    errors: list[BaseException] = []
    for element in elements:
        try:
            await element.release()
        except WebHandleException as exc:
            logger.warning(f'Failed to release {element!r}: {exc}')
            errors.append(exc)

    if errors:
        raise HandleReleaseError(errors, original) from original
