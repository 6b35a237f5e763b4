from webhandle.browser.page import Page
from webhandle.config import AutomationConfig, get_config, set_config
from webhandle.elements.geometry import Box
from webhandle.elements.web_element import WebElement
from webhandle.scope import ExecutionScope

__all__ = [
    'AutomationConfig',
    'Box',
    'ExecutionScope',
    'Page',
    'WebElement',
    'get_config',
    'set_config',
]
