"""Cursor trail animation core."""
from .geometry import Point, Rect, Polygon
from .trail_animator import TrailAnimator, AnimatorState

__all__ = ['Point', 'Rect', 'Polygon', 'TrailAnimator', 'AnimatorState']
