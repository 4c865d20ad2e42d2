"""Trail constants and configuration."""
from __future__ import annotations
import json
import logging
from dataclasses import dataclass, field, asdict, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .animation.trail_animator import TrailAnimator

logger = logging.getLogger(__name__)

# Display settings (demo)
SCREEN_WIDTH = 1200
SCREEN_HEIGHT = 720
FPS = 60
TITLE = "Cursor Trail"

# Terminal grid (demo)
CELL_WIDTH = 10
CELL_HEIGHT = 20
FONT_SIZE = 18
PANE_PADDING = 12

# Animation defaults
DEFAULT_ANIMATION_SPEED = 10.0
DEFAULT_FADE_SPEED = 1.5
DEFAULT_TRAIL_WIDTH = 0.4  # Fraction of cursor width for vertical moves

# Decay time constants (seconds)
DECAY_SLOW = 0.4

# Motion thresholds (pixels)
DISTANCE_THRESHOLD = 5.0  # Cursor move needed to start a trail
LARGE_JUMP_FACTOR = 3.0  # Jumps beyond this many cursor widths re-anchor the trail
CATCH_UP_DISTANCE = 1.0  # Trail counts as caught up below this
RESTING_DISTANCE = 0.1  # Below this the trail is drawn as a resting mark

MAX_FRAME_DT = 1.0  # Seconds; longer gaps skip the animation step
RENDER_EPSILON = 0.01  # Opacity below which nothing is drawn

# Colors
COLORS = {
    'background': (18, 18, 24),
    'pane_bg': (24, 24, 32),
    'pane_border': (60, 60, 90),
    'pane_border_active': (100, 150, 255),
    'text': (200, 200, 220),
    'cursor': (220, 220, 240),
    'trail': (100, 180, 255),
}


@dataclass
class TrailSettings:
    """User-facing trail settings (profile values).

    Tunables are validated here rather than in the animator.
    """
    enabled: bool = True
    animation_speed: float = DEFAULT_ANIMATION_SPEED
    fade_speed: float = DEFAULT_FADE_SPEED
    trail_width: float = DEFAULT_TRAIL_WIDTH
    color: tuple[int, int, int] = field(default_factory=lambda: COLORS['trail'])
    max_alpha: int = 200  # Alpha at full opacity

    def validate(self) -> None:
        """Check value ranges.

        Raises:
            ValueError: If any setting is out of range
        """
        if self.animation_speed <= 0:
            raise ValueError(f"animation_speed must be positive, got {self.animation_speed}")
        if self.fade_speed <= 0:
            raise ValueError(f"fade_speed must be positive, got {self.fade_speed}")
        if self.trail_width <= 0:
            raise ValueError(f"trail_width must be positive, got {self.trail_width}")
        if len(self.color) != 3 or any(not 0 <= c <= 255 for c in self.color):
            raise ValueError(f"color must be three 0-255 components, got {self.color}")
        if not 0 <= self.max_alpha <= 255:
            raise ValueError(f"max_alpha must be within 0-255, got {self.max_alpha}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TrailSettings:
        """Build validated settings from a profile mapping. Unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        try:
            if 'color' in values:
                values['color'] = tuple(values['color'])
            settings = cls(**values)
            settings.validate()
        except TypeError as e:
            raise ValueError(f"Invalid trail settings: {e}") from e
        return settings

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data['color'] = list(self.color)
        return data

    def apply_to(self, animator: TrailAnimator) -> None:
        """Push the tunables into an animator."""
        animator.set_animation_speed(self.animation_speed)
        animator.set_fade_speed(self.fade_speed)
        animator.set_trail_width(self.trail_width)


def load_settings(path: Path | str) -> TrailSettings:
    """Load trail settings from a JSON profile.

    A missing file yields the defaults.

    Raises:
        ValueError: If the file is not valid JSON or holds invalid values
    """
    path = Path(path)
    if not path.exists():
        logger.warning("Settings file %s not found, using defaults", path)
        return TrailSettings()

    try:
        with open(path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid settings file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Invalid settings file {path}: expected an object")

    settings = TrailSettings.from_dict(data)
    logger.info("Loaded trail settings from %s", path)
    return settings


def save_settings(settings: TrailSettings, path: Path | str) -> None:
    """Write trail settings to a JSON profile."""
    settings.validate()
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(settings.to_dict(), f, indent=2)


@dataclass
class DemoConfig:
    """Runtime demo configuration."""
    screen_width: int = SCREEN_WIDTH
    screen_height: int = SCREEN_HEIGHT
    fps: int = FPS
    pane_count: int = 2
    trail: TrailSettings = field(default_factory=TrailSettings)
