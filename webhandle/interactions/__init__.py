from webhandle.interactions.keyboard import Keyboard, KeyboardAPI
from webhandle.interactions.mouse import Mouse, MouseAPI

__all__ = ['Keyboard', 'KeyboardAPI', 'Mouse', 'MouseAPI']
