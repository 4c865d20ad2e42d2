"""Tests for the cursor trail animator."""
import pytest
from cursortrail.animation.geometry import Rect, Point
from cursortrail.animation.trail_animator import TrailAnimator, AnimatorState


FRAME_MS = 16


def cursor_at(x: float, y: float = 0.0, width: float = 10.0, height: float = 20.0) -> Rect:
    return Rect(x, y, width, height)


def settle(animator: TrailAnimator, rect: Rect, start_ms: int, frames: int) -> int:
    """Feed the same rect for a number of frames, returning the last timestamp."""
    now = start_ms
    for _ in range(frames):
        now += FRAME_MS
        animator.update(rect, now)
    return now


class TestInitialization:
    """Tests for the first observation."""

    def test_fresh_state(self):
        """Test a new animator is empty and idle."""
        animator = TrailAnimator()

        assert animator.state == AnimatorState()
        assert animator.opacity == 0.0
        assert not animator.needs_render

    def test_default_tunables(self):
        """Test default speed and width parameters."""
        state = TrailAnimator().state

        assert state.animation_speed == 10.0
        assert state.fade_speed == 1.5
        assert state.trail_width_factor == 0.4

    def test_first_update_snaps_without_trail(self):
        """Test the first update initializes at rest on the cursor."""
        animator = TrailAnimator()
        animator.update(cursor_at(300, 200), 1000)

        assert animator.opacity == 0.0
        assert not animator.needs_render
        assert animator.state.trail_x == 305
        assert animator.state.trail_y == 210
        assert animator.state.target_x == 305
        assert animator.state.target_y == 210

    def test_first_update_polygon_is_resting_mark(self):
        """Test the first polygon is the small rect centered on the cursor."""
        animator = TrailAnimator()
        animator.update(cursor_at(300, 200), 1000)

        polygon = animator.trail_polygon()

        expected = [(304, 204), (306, 204), (306, 216), (304, 216)]
        for point, (x, y) in zip(polygon, expected):
            assert point.x == pytest.approx(x)
            assert point.y == pytest.approx(y)

    def test_timestamp_zero_is_valid(self):
        """Test a clock starting at 0 still animates the next move."""
        animator = TrailAnimator()
        animator.update(cursor_at(0), 0)
        animator.update(cursor_at(20), 16)

        assert animator.needs_render
        assert animator.opacity == 1.0


class TestJumpDetection:
    """Tests for the movement threshold."""

    def test_move_below_threshold_does_not_trigger(self):
        """Test a 4.9 unit move leaves the trail idle."""
        animator = TrailAnimator()
        animator.update(cursor_at(0), 1000)
        animator.update(cursor_at(4.9), 1016)

        assert not animator.needs_render
        assert animator.opacity == 0.0

    def test_move_above_threshold_triggers(self):
        """Test a 5.1 unit move starts a trail."""
        animator = TrailAnimator()
        animator.update(cursor_at(0), 1000)
        animator.update(cursor_at(5.1), 1016)

        assert animator.needs_render
        assert animator.opacity == 1.0

    def test_small_moves_carry_idle_trail(self):
        """Test repeated sub-threshold moves never draw a trail."""
        animator = TrailAnimator()
        animator.update(cursor_at(0), 1000)

        now = 1000
        for i in range(1, 20):
            now += FRAME_MS
            animator.update(cursor_at(i * 3.0), now)
            assert not animator.needs_render

        assert animator.state.trail_x == pytest.approx(animator.state.target_x)

    def test_large_jump_snaps_to_old_target(self):
        """Test a jump beyond 3x cursor width re-anchors the trail at the old center."""
        animator = TrailAnimator()
        animator.update(cursor_at(0), 1000)
        # Leave the trail somewhere stale first
        animator.update(cursor_at(20), 1016)
        old_x = animator.state.target_x
        old_y = animator.state.target_y

        animator.update(cursor_at(200, 40), 1032)

        assert animator.state.trail_x == pytest.approx(old_x)
        assert animator.state.trail_y == pytest.approx(old_y)
        assert animator.state.target_x == 205
        assert animator.state.target_y == 50
        assert animator.opacity == 1.0

    def test_medium_jump_animates_from_current_trail(self):
        """Test a jump under 3x cursor width starts chasing immediately."""
        animator = TrailAnimator()
        animator.update(cursor_at(0), 1000)
        animator.update(cursor_at(20), 1016)

        # step = 1 - 2^(-10 * 0.016 / 0.4)
        step = 1.0 - 2.0 ** -0.4
        assert animator.state.trail_x == pytest.approx(5 + 20 * step)
        assert animator.needs_render


class TestChase:
    """Tests for the ease-out chase and fade."""

    def test_distance_strictly_decreases(self):
        """Test the trail closes in on a stationary cursor every frame."""
        animator = TrailAnimator()
        animator.update(cursor_at(0), 1000)
        rect = cursor_at(100)
        animator.update(rect, 1016)

        now = 1016
        previous = animator.state.trail_distance
        while previous > 1.0:
            now += FRAME_MS
            animator.update(rect, now)
            current = animator.state.trail_distance
            assert current < previous
            previous = current

    def test_never_overshoots(self):
        """Test the trail stays between its start and the target."""
        animator = TrailAnimator()
        animator.update(cursor_at(0), 1000)
        rect = cursor_at(100)
        animator.update(rect, 1016)

        now = 1016
        for _ in range(60):
            now += FRAME_MS
            animator.update(rect, now)
            assert 5 <= animator.state.trail_x <= 105

    def test_opacity_non_increasing_after_catch_up(self):
        """Test opacity only falls once the trail has caught up."""
        animator = TrailAnimator()
        animator.update(cursor_at(0), 1000)
        rect = cursor_at(100)
        animator.update(rect, 1016)

        now = 1016
        while animator.state.trail_distance > 1.0:
            now += FRAME_MS
            animator.update(rect, now)

        previous = animator.opacity
        for _ in range(100):
            now += FRAME_MS
            animator.update(rect, now)
            assert animator.opacity <= previous
            previous = animator.opacity

        assert animator.opacity == 0.0
        assert not animator.needs_render

    def test_frame_rate_independent(self):
        """Test the same elapsed time covers the same fraction at any frame rate."""
        coarse = TrailAnimator()
        fine = TrailAnimator()
        for animator in (coarse, fine):
            animator.update(cursor_at(0), 1000)
            animator.update(cursor_at(20), 1016)

        rect = cursor_at(20)
        for i in range(1, 6):
            coarse.update(rect, 1016 + i * 16)
        for i in range(1, 11):
            fine.update(rect, 1016 + i * 8)

        assert fine.state.trail_x == pytest.approx(coarse.state.trail_x, rel=1e-9)

    def test_stays_idle_without_movement(self):
        """Test a faded trail stays hidden under repeated identical updates."""
        animator = TrailAnimator()
        animator.update(cursor_at(0), 1000)
        rect = cursor_at(100)
        animator.update(rect, 1016)
        now = settle(animator, rect, 1016, 120)

        for _ in range(200):
            now += FRAME_MS
            animator.update(rect, now)
            assert not animator.needs_render
            assert animator.opacity == 0.0

    def test_negative_fade_speed_stays_clamped(self):
        """Test opacity never leaves [0, 1] with a bad fade speed."""
        animator = TrailAnimator(fade_speed=-5.0)
        animator.update(cursor_at(0), 1000)
        rect = cursor_at(100)
        animator.update(rect, 1016)
        settle(animator, rect, 1016, 120)

        assert 0.0 <= animator.opacity <= 1.0


class TestTimeGuard:
    """Tests for rejected frame intervals."""

    def _animating(self) -> TrailAnimator:
        animator = TrailAnimator()
        animator.update(cursor_at(0), 1000)
        animator.update(cursor_at(20), 1016)
        return animator

    def test_same_timestamp_is_noop(self):
        """Test a repeated timestamp leaves trail and opacity untouched."""
        animator = self._animating()
        before = (animator.state.trail_x, animator.state.trail_y, animator.opacity)

        animator.update(cursor_at(20), 1016)

        assert (animator.state.trail_x, animator.state.trail_y, animator.opacity) == before

    def test_backwards_clock_commits_target_only(self):
        """Test a backwards timestamp records target and time but skips the chase."""
        animator = self._animating()
        before = (animator.state.trail_x, animator.state.trail_y, animator.opacity)

        animator.update(cursor_at(40), 900)

        assert (animator.state.trail_x, animator.state.trail_y, animator.opacity) == before
        assert animator.cursor_rect() == cursor_at(40)
        assert animator.state.last_update_ms == 900

    def test_stall_over_one_second_is_skipped(self):
        """Test a gap over one second does not take a giant step."""
        animator = self._animating()
        before = animator.state.trail_x

        animator.update(cursor_at(20), 1016 + 1500)

        assert animator.state.trail_x == before

    def test_exactly_one_second_is_allowed(self):
        """Test a one second gap still advances."""
        animator = self._animating()
        before = animator.state.trail_x

        animator.update(cursor_at(20), 2016)

        assert animator.state.trail_x > before

    def test_small_move_on_repeated_timestamp_stays_idle(self):
        """Test a small move on a skipped frame does not start a trail later."""
        animator = TrailAnimator()
        animator.update(Rect(0, 0, 10, 20), 1000)

        animator.update(Rect(4.9, 0, 10, 20), 1000)

        assert animator.state.trail_x == 5.0
        assert animator.opacity == 0.0
        assert not animator.needs_render

        animator.update(Rect(4.9, 0, 10, 20), 1016)

        assert not animator.needs_render
        assert animator.opacity == 0.0
        assert animator.state.trail_x == pytest.approx(animator.state.target_x)

    def test_small_move_during_stall_stays_idle(self):
        """Test a small move across a long gap is carried over on the next frame."""
        animator = TrailAnimator()
        animator.update(cursor_at(0), 1000)

        animator.update(cursor_at(4.9), 2500)

        assert animator.state.trail_x == 5.0
        assert not animator.needs_render

        animator.update(cursor_at(4.9), 2516)

        assert not animator.needs_render
        assert animator.state.trail_x == pytest.approx(9.9)

    def test_skipped_moves_ignored_while_animating(self):
        """Test an active trail keeps chasing instead of storing skipped moves."""
        animator = self._animating()

        animator.update(cursor_at(22), 1016)

        assert animator.state.pending_dx == 0.0
        assert animator.needs_render


class TestGeometry:
    """Tests for the derived polygon and cursor rect."""

    def test_cursor_rect_follows_target(self):
        """Test the echoed cursor rect matches the last observation."""
        animator = TrailAnimator()
        animator.update(cursor_at(0), 1000)
        animator.update(cursor_at(80, 40, 12, 24), 1016)

        assert animator.cursor_rect() == Rect(80, 40, 12, 24)

    def test_size_tracks_latest_observation(self):
        """Test size updates even when the time guard rejects the frame."""
        animator = TrailAnimator()
        animator.update(cursor_at(0), 1000)
        animator.update(cursor_at(0, 0, 8, 16), 1000)

        assert animator.state.cursor_width == 8
        assert animator.state.cursor_height == 16

    def test_horizontal_polygon(self):
        """Test a horizontal smear uses the thin height-based thickness."""
        animator = TrailAnimator()
        s = animator.state
        s.cursor_width, s.cursor_height = 10.0, 20.0
        s.trail_x, s.trail_y = 0.0, 10.0
        s.target_x, s.target_y = 50.0, 10.0

        polygon = animator.trail_polygon()

        expected = [(-1.5, 6.5), (48.5, 6.5), (48.5, 13.5), (-1.5, 13.5)]
        for point, (x, y) in zip(polygon, expected):
            assert point.x == pytest.approx(x)
            assert point.y == pytest.approx(y)

    def test_vertical_polygon(self):
        """Test a vertical smear uses the configured width factor."""
        animator = TrailAnimator()
        s = animator.state
        s.cursor_width, s.cursor_height = 10.0, 20.0
        s.trail_x, s.trail_y = 5.0, 0.0
        s.target_x, s.target_y = 5.0, 40.0

        polygon = animator.trail_polygon()

        expected = [(7.5, 0.0), (7.5, 40.0), (-0.5, 40.0), (-0.5, 0.0)]
        for point, (x, y) in zip(polygon, expected):
            assert point.x == pytest.approx(x)
            assert point.y == pytest.approx(y)

    def test_trail_width_setter(self):
        """Test the width factor changes vertical thickness."""
        animator = TrailAnimator()
        animator.set_trail_width(1.0)
        s = animator.state
        s.cursor_width, s.cursor_height = 10.0, 20.0
        s.trail_x, s.trail_y = 5.0, 0.0
        s.target_x, s.target_y = 5.0, 40.0

        polygon = animator.trail_polygon()

        assert polygon[0].x - polygon[3].x == pytest.approx(20.0)

    def test_zero_size_cursor(self):
        """Test a zero-size cursor degenerates to a point."""
        animator = TrailAnimator()
        animator.update(Rect(10, 10, 0, 0), 1000)

        polygon = animator.trail_polygon()

        assert all(p == Point(10, 10) for p in polygon)

    def test_point_distance(self):
        """Test Euclidean distance between points."""
        assert Point(0, 0).distance_to(Point(3, 4)) == pytest.approx(5.0)
        assert Point(2, 2).distance_to(Point(2, 2)) == 0.0


class TestReset:
    """Tests for reset."""

    def test_reset_clears_state(self):
        """Test reset returns to the never-initialized state."""
        animator = TrailAnimator()
        animator.update(cursor_at(0), 1000)
        animator.update(cursor_at(100), 1016)

        animator.reset()

        assert not animator.state.initialized
        assert animator.state.last_update_ms == 0
        assert animator.opacity == 0.0
        assert not animator.needs_render
        assert animator.cursor_rect() == Rect(0, 0, 0, 0)

    def test_reset_keeps_tunables(self):
        """Test reset leaves configured speeds alone."""
        animator = TrailAnimator()
        animator.set_animation_speed(4.0)
        animator.set_fade_speed(3.0)
        animator.reset()

        assert animator.state.animation_speed == 4.0
        assert animator.state.fade_speed == 3.0

    def test_update_after_reset_snaps(self):
        """Test the first update after reset does not animate from the origin."""
        animator = TrailAnimator()
        animator.update(cursor_at(0), 1000)
        animator.update(cursor_at(100), 1016)
        animator.reset()

        animator.update(cursor_at(500, 300), 2000)

        assert animator.opacity == 0.0
        assert not animator.needs_render
        assert animator.state.trail_x == 505
        assert animator.state.trail_y == 310

    def test_reset_drops_skipped_moves(self):
        """Test reset forgets small moves held from skipped frames."""
        animator = TrailAnimator()
        animator.update(cursor_at(0), 1000)
        animator.update(cursor_at(3), 1000)

        animator.reset()

        assert animator.state.pending_dx == 0.0
        assert animator.state.pending_dy == 0.0


class TestEndToEnd:
    """Scenario: type, jump, settle."""

    def test_jump_then_fade(self):
        """Test a 50 unit jump shows a trail that chases and then fades out."""
        animator = TrailAnimator()
        animator.update(Rect(0, 0, 10, 20), 1000)

        assert animator.opacity == 0.0
        assert not animator.needs_render

        rect = Rect(50, 0, 10, 20)
        animator.update(rect, 1016)

        assert animator.needs_render
        assert animator.opacity == 1.0
        assert animator.state.trail_x == pytest.approx(5.0)
        assert animator.state.trail_y == pytest.approx(10.0)
        assert animator.state.target_x == 55.0
        assert animator.state.target_y == 10.0

        now = 1016
        gap = animator.state.trail_distance
        while gap > 1.0:
            now += FRAME_MS
            animator.update(rect, now)
            assert animator.state.trail_distance < gap
            gap = animator.state.trail_distance

        # About 240 ms of chase plus about 667 ms of fade at the default
        # speeds, so the trail is gone well inside a second
        while animator.needs_render:
            now += FRAME_MS
            animator.update(rect, now)
            assert now < 1016 + 1000

        assert animator.opacity <= 0.01
        now = settle(animator, rect, now, 10)
        assert animator.opacity == 0.0
        assert not animator.needs_render
