"""
Cursor Trail - motion smear animation for text cursors.
"""

from .animation import TrailAnimator, AnimatorState, Point, Rect
from .config import TrailSettings, load_settings, save_settings

__version__ = "1.0.0"
__all__ = [
    "TrailAnimator",
    "AnimatorState",
    "Point",
    "Rect",
    "TrailSettings",
    "load_settings",
    "save_settings",
]
