"""Frame systems package."""
from .trail_system import CursorTrailSystem

__all__ = ["CursorTrailSystem"]
