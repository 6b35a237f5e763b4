from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional, Union

import aiofiles

from webhandle.constants import Scripts
from webhandle.elements.geometry import clip_from_box
from webhandle.exceptions import InvalidFileExtension
from webhandle.protocol.page.types import ScreenshotFormat
from webhandle.utils import decode_base64_to_bytes, parse_data_uri

if TYPE_CHECKING:
    from webhandle.browser.page import Page
    from webhandle.elements.geometry import Box
    from webhandle.protocol.runtime.types import RemoteObject
    from webhandle.scope import ExecutionScope


logger = logging.getLogger(__name__)


class ResourceMixin:
    """Mixin extracting binary content from elements: canvas pixels, resources, screenshots."""

    if TYPE_CHECKING:
        _page: Page
        _scope: ExecutionScope

        async def evaluate(
            self, script: str, *args: Any, by_value: bool = True
        ) -> RemoteObject: ...

        async def _evaluate_helper(
            self, name: str, *args: Any, by_value: bool = True
        ) -> RemoteObject: ...

        async def box(self) -> Box: ...

        async def wait_visible(self) -> None: ...

        async def scroll_into_view(self) -> None: ...

    async def canvas_to_image(self, format: str = 'image/png', quality: float = 0.92) -> bytes:
        """
        Export the pixels of a ``<canvas>`` element.

        Args:
            format: Image MIME type passed to ``toDataURL``.
            quality: Encoder quality between 0 and 1 for lossy formats.

        Returns:
            Decoded image bytes.

        Raises:
            InvalidDataURI: If the canvas did not return a base64 data URI.
        """
        result = await self.evaluate(Scripts.CANVAS_TO_DATA_URL, format, quality)
        _, data = parse_data_uri(result.get('value'))
        return data

    async def resource(self) -> bytes:
        """
        Content of the resource the element loaded (``img``, ``script``, ``video``...).

        The page's Page domain is kept enabled while the content is fetched
        and is disabled afterwards even when the fetch fails.

        Returns:
            Raw resource bytes.
        """
        src = await self._evaluate_helper('resource')
        url = src.get('value')
        logger.debug(f'Fetching element resource: {url}')

        async with self._page.enable_domain('Page'):
            content = await self._scope.run(self._page.get_resource_content(url))

        if content.get('base64Encoded'):
            return decode_base64_to_bytes(content['content'])
        return content['content'].encode('utf-8')

    async def screenshot(
        self,
        format: ScreenshotFormat = ScreenshotFormat.PNG,
        quality: Optional[int] = None,
    ) -> bytes:
        """
        Capture the area covered by the element.

        Args:
            format: Image format of the capture.
            quality: Compression quality 0-100 for lossy formats.

        Returns:
            Decoded image bytes.
        """
        await self.wait_visible()
        await self.scroll_into_view()

        clip = clip_from_box(await self.box())
        return await self._scope.run(
            self._page.root.capture_screenshot(format=format, quality=quality, clip=clip)
        )

    async def take_screenshot(self, path: Union[str, Path], quality: int = 100) -> None:
        """
        Capture the element and save it to a file.

        Args:
            path: Destination file; the extension selects the format.
            quality: Compression quality 0-100 (ignored for PNG).

        Raises:
            InvalidFileExtension: If the extension is not png, jpeg/jpg or webp.
        """
        output_extension = Path(path).suffix.lstrip('.').lower()
        if output_extension == 'jpg':
            output_extension = 'jpeg'

        if not ScreenshotFormat.has_value(output_extension):
            raise InvalidFileExtension(f'{output_extension} extension is not supported.')

        output_format = ScreenshotFormat.get_value(output_extension)
        image = await self.screenshot(format=output_format, quality=quality)

        async with aiofiles.open(str(path), 'wb') as file:
            await file.write(image)
        logger.info(f'Element screenshot saved to: {path}')
