"""Cursor entities and component factories."""
from .cursors import CursorBounds, CursorTrail, create_cursor

__all__ = ['CursorBounds', 'CursorTrail', 'create_cursor']
