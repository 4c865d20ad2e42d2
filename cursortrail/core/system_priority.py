"""System execution priority definitions.

Lower numbers execute first within a frame.
"""
from enum import IntEnum


class SystemPriority(IntEnum):
    """Priority levels for system execution order."""
    # Cursor bounds are settled before the trail reads them
    INPUT = 0
    LAYOUT = 10

    # Animation
    TRAIL = 20

    # Anything that only observes the finished frame
    OBSERVERS = 100
