"""refitui - A basic terminal text viewer."""

from .model import Document, CursorPosition
from .view import Viewport, visible_rows, reconcile, screen_cursor

__all__ = [
    'Document',
    'CursorPosition',
    'Viewport',
    'visible_rows',
    'reconcile',
    'screen_cursor',
]
