"""Trail animator - chases the cursor with a fading motion smear.

Fed one cursor rectangle per frame together with a millisecond clock, the
animator keeps a trail center that eases toward the cursor center and an
opacity that holds at 1.0 while chasing and fades once the trail has caught
up. Everything is derived from a handful of scalars, so no position history
is kept.
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass

from ..config import (
    DEFAULT_ANIMATION_SPEED, DEFAULT_FADE_SPEED, DEFAULT_TRAIL_WIDTH,
    DECAY_SLOW, DISTANCE_THRESHOLD, LARGE_JUMP_FACTOR, MAX_FRAME_DT,
    RENDER_EPSILON, CATCH_UP_DISTANCE, RESTING_DISTANCE,
)
from .geometry import Point, Rect, Polygon

logger = logging.getLogger(__name__)


@dataclass
class AnimatorState:
    """Continuous state of one cursor trail."""
    # Size of the last observed cursor
    cursor_width: float = 0.0
    cursor_height: float = 0.0

    # Center of the last observed cursor
    target_x: float = 0.0
    target_y: float = 0.0

    # Center of the trail, following the target
    trail_x: float = 0.0
    trail_y: float = 0.0

    last_update_ms: int = 0
    initialized: bool = False

    # Small idle moves seen on skipped frames, applied on the next real step
    pending_dx: float = 0.0
    pending_dy: float = 0.0

    opacity: float = 0.0
    needs_render: bool = False

    # Tunables
    animation_speed: float = DEFAULT_ANIMATION_SPEED
    fade_speed: float = DEFAULT_FADE_SPEED
    trail_width_factor: float = DEFAULT_TRAIL_WIDTH

    @property
    def trail_distance(self) -> float:
        """Distance between trail center and target center."""
        return Point(self.trail_x, self.trail_y).distance_to(Point(self.target_x, self.target_y))


class TrailAnimator:
    """Animates the smear left behind by a moving cursor.

    One instance per cursor. Not thread-safe: call from the render tick only.
    """

    def __init__(
        self,
        animation_speed: float = DEFAULT_ANIMATION_SPEED,
        fade_speed: float = DEFAULT_FADE_SPEED,
        trail_width: float = DEFAULT_TRAIL_WIDTH,
    ) -> None:
        self.state = AnimatorState(
            animation_speed=animation_speed,
            fade_speed=fade_speed,
            trail_width_factor=trail_width,
        )

    def update(self, cursor_rect: Rect, now_ms: int) -> None:
        """Advance the animation with the latest cursor observation.

        Args:
            cursor_rect: Current cursor bounds
            now_ms: Monotonic elapsed time in milliseconds
        """
        s = self.state

        # Size always follows the latest observation
        s.cursor_width = cursor_rect.width
        s.cursor_height = cursor_rect.height

        center = cursor_rect.center

        if not s.initialized:
            # Start at rest on the cursor, nothing to draw yet
            s.target_x = s.trail_x = center.x
            s.target_y = s.trail_y = center.y
            s.last_update_ms = now_ms
            s.initialized = True
            s.pending_dx = s.pending_dy = 0.0
            s.opacity = 0.0
            s.needs_render = False
            return

        move_dx = center.x - s.target_x
        move_dy = center.y - s.target_y
        move_distance = math.sqrt(move_dx * move_dx + move_dy * move_dy)

        s.target_x = center.x
        s.target_y = center.y

        dt = (now_ms - s.last_update_ms) / 1000.0
        s.last_update_ms = now_ms

        if dt <= 0.0 or dt > MAX_FRAME_DT:
            logger.debug("Skipping trail step, dt=%.3fs out of range", dt)
            if move_distance <= DISTANCE_THRESHOLD and not s.needs_render:
                # Remember the idle ride-along; trail stays put this frame
                s.pending_dx += move_dx
                s.pending_dy += move_dy
            return

        if s.pending_dx or s.pending_dy:
            s.trail_x += s.pending_dx
            s.trail_y += s.pending_dy
            s.pending_dx = s.pending_dy = 0.0

        if move_distance > DISTANCE_THRESHOLD:
            s.opacity = 1.0
            s.needs_render = True
            if move_distance > s.cursor_width * LARGE_JUMP_FACTOR:
                # Re-anchor at the previous cursor position instead of
                # animating from wherever the trail was left. The full smear
                # is shown for this frame; chasing starts on the next one.
                s.trail_x = s.target_x - move_dx
                s.trail_y = s.target_y - move_dy
                logger.debug("Large cursor jump (%.1f), trail re-anchored", move_distance)
                return
        elif not s.needs_render:
            # Idle trail rides along with small moves
            s.trail_x += move_dx
            s.trail_y += move_dy

        dx = s.target_x - s.trail_x
        dy = s.target_y - s.trail_y
        distance = math.sqrt(dx * dx + dy * dy)

        if distance > CATCH_UP_DISTANCE:
            # Exponential ease-out, same fraction per unit of real time
            step = 1.0 - math.pow(2.0, -s.animation_speed * dt / DECAY_SLOW)
            s.trail_x += dx * step
            s.trail_y += dy * step
            s.opacity = 1.0
            s.needs_render = True
        else:
            s.opacity = min(1.0, max(0.0, s.opacity - dt * s.fade_speed))
            s.needs_render = s.opacity > RENDER_EPSILON

    def reset(self) -> None:
        """Forget the cursor; the next update starts from rest again."""
        s = self.state
        s.cursor_width = 0.0
        s.cursor_height = 0.0
        s.target_x = 0.0
        s.target_y = 0.0
        s.trail_x = 0.0
        s.trail_y = 0.0
        s.last_update_ms = 0
        s.initialized = False
        s.pending_dx = 0.0
        s.pending_dy = 0.0
        s.opacity = 0.0
        s.needs_render = False

    def set_animation_speed(self, speed: float) -> None:
        self.state.animation_speed = speed

    def set_fade_speed(self, speed: float) -> None:
        self.state.fade_speed = speed

    def set_trail_width(self, width: float) -> None:
        self.state.trail_width_factor = width

    @property
    def needs_render(self) -> bool:
        """Whether the trail should be drawn this frame."""
        return self.state.needs_render

    @property
    def opacity(self) -> float:
        """Current trail opacity (0-1)."""
        return self.state.opacity

    def cursor_rect(self) -> Rect:
        """Cursor bounds centered on the current target."""
        s = self.state
        return Rect.from_center(s.target_x, s.target_y, s.cursor_width, s.cursor_height)

    def trail_polygon(self) -> Polygon:
        """Quadrilateral stretched from the trail center to the cursor center."""
        s = self.state
        dx = s.target_x - s.trail_x
        dy = s.target_y - s.trail_y
        distance = math.sqrt(dx * dx + dy * dy)

        if distance < RESTING_DISTANCE:
            # Trail sits on the cursor: small upright mark
            half_w = s.cursor_width * 0.10
            half_h = s.cursor_height * 0.3
            return (
                Point(s.trail_x - half_w, s.trail_y - half_h),
                Point(s.trail_x + half_w, s.trail_y - half_h),
                Point(s.trail_x + half_w, s.trail_y + half_h),
                Point(s.trail_x - half_w, s.trail_y + half_h),
            )

        perp_x = -dy / distance
        perp_y = dx / distance

        # Thin for horizontal typing, fuller for line-to-line moves
        if abs(dx) > abs(dy):
            thickness = s.cursor_height * 0.35 * 0.5
        else:
            thickness = s.cursor_width * s.trail_width_factor

        offset_x = -s.cursor_width * 0.15
        ox = perp_x * thickness
        oy = perp_y * thickness

        return (
            Point(s.trail_x - ox + offset_x, s.trail_y - oy),
            Point(s.target_x - ox + offset_x, s.target_y - oy),
            Point(s.target_x + ox + offset_x, s.target_y + oy),
            Point(s.trail_x + ox + offset_x, s.trail_y + oy),
        )
