from webhandle.browser.page import Page

__all__ = ['Page']
