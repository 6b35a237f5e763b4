from webhandle.elements.geometry import Box, click_point, clip_from_box
from webhandle.elements.web_element import WebElement

__all__ = ['Box', 'WebElement', 'click_point', 'clip_from_box']
