"""
Tests for the canvas gesture state machine.

Covers:
- Hit testing (body, resize handle, rotation, z-order)
- Drag with clamping and grid snap
- Resize with the minimum size and snap
- Exactly one history entry per gesture
- Selection changes from pointer-down
"""
import pytest

from components.canvas import (
    CanvasController, Dragging, Resizing, IDLE, BodyHandle, ResizeHandle, to_local,
)


def history_length(session):
    return len(session.history.history)


@pytest.fixture
def square(session):
    """80x80 square at (100, 100), selected"""
    return session.add_shape('square', (100, 100))


# ══════════════════════════════════════════════════════════════════════════
# Hit testing
# ══════════════════════════════════════════════════════════════════════════

class TestHitTesting:

    def test_body_hit(self, square):
        handle = BodyHandle()
        assert handle.hit_test(140, 140, square)
        assert handle.hit_test(100, 100, square)
        assert not handle.hit_test(99, 140, square)
        assert handle.get_cursor() == 'move'

    def test_resize_handle_hit(self, square):
        handle = ResizeHandle()
        assert handle.hit_test(180, 180, square)
        assert handle.hit_test(187, 187, square)
        assert not handle.hit_test(170, 170, square)
        assert handle.get_cursor() == 'se-resize'

    def test_rotated_body(self, session):
        rect = session.add_shape('rectangle', (100, 100))  # 80x50, centre (140, 125)
        handle = BodyHandle()
        assert not handle.hit_test(140, 160, rect)
        rect.rotation = 90
        assert handle.hit_test(140, 160, rect)

    def test_rotated_resize_corner(self, square):
        square.rotation = 90
        x, y = ResizeHandle().corner(square)
        assert (x, y) == pytest.approx((100, 180))
        assert ResizeHandle().hit_test(100, 180, square)

    def test_to_local_unrotated(self, square):
        assert to_local(140, 140, square) == (0, 0)

    def test_topmost_shape_wins(self, session):
        bottom = session.add_shape('square', (100, 100))
        top = session.add_shape('square', (120, 120))
        assert session.controller.shape_at(150, 150) is top
        assert session.controller.shape_at(105, 105) is bottom
        assert session.controller.shape_at(5, 5) is None


class TestCursor:

    def test_cursor_names(self, session, square):
        controller = session.controller
        assert controller.cursor_at(180, 180) == 'se-resize'
        assert controller.cursor_at(130, 130) == 'move'
        assert controller.cursor_at(5, 5) is None


# ══════════════════════════════════════════════════════════════════════════
# Dragging
# ══════════════════════════════════════════════════════════════════════════

class TestDragging:

    def test_pointer_down_starts_drag(self, session, square):
        session.select(None)
        assert session.pointer_down(110, 120) == square.id
        state = session.controller.state
        assert isinstance(state, Dragging)
        assert (state.offset_x, state.offset_y) == (10, 20)
        assert session.selected_id == square.id

    def test_drag_moves_live_shape_without_history(self, session, square):
        entries = history_length(session)
        session.pointer_down(110, 110)
        session.pointer_move(160, 130)
        session.pointer_move(170, 140)
        assert (square.x, square.y) == (160, 130)
        assert history_length(session) == entries

    def test_gesture_commits_once(self, session, square):
        entries = history_length(session)
        session.pointer_down(110, 110)
        for step in range(10):
            session.pointer_move(110 + step, 110 + step)
        assert session.pointer_up()
        assert history_length(session) == entries + 1
        assert session.controller.state is IDLE

    def test_drag_clamped_inside_canvas(self, session, square):
        session.pointer_down(110, 110)
        session.pointer_move(2000, 2000)
        assert (square.x, square.y) == (520, 320)
        session.pointer_move(-500, -500)
        assert (square.x, square.y) == (0, 0)
        session.pointer_up()

    def test_drag_snaps_to_grid(self, session, square):
        assert session.set_snap(True, 20)
        session.pointer_down(110, 110)
        session.pointer_move(63, 120)  # raw position (53, 110)
        session.pointer_up()
        assert (square.x, square.y) == (60, 120)

    def test_snap_stays_inside_canvas(self, session):
        session.set_snap(True, 50)
        rect = session.add_shape('rectangle', (100, 100))  # 80x50
        session.pointer_down(110, 110)
        session.pointer_move(2000, 2000)
        session.pointer_up()
        assert rect.x + rect.width <= 600
        assert rect.y + rect.height <= 400

    def test_undo_restores_pre_drag_position(self, session, square):
        session.pointer_down(110, 110)
        session.pointer_move(310, 210)
        session.pointer_up()
        session.undo()
        moved_back = session.shapes[0]
        assert (moved_back.x, moved_back.y) == (100, 100)

    def test_click_without_move_still_commits(self, session, square):
        entries = history_length(session)
        session.pointer_down(110, 110)
        session.pointer_up()
        assert history_length(session) == entries + 1


# ══════════════════════════════════════════════════════════════════════════
# Resizing
# ══════════════════════════════════════════════════════════════════════════

class TestResizing:

    def test_handle_of_selected_shape_starts_resize(self, session, square):
        session.pointer_down(180, 180)
        assert isinstance(session.controller.state, Resizing)

    def test_handle_ignored_when_not_selected(self, session, square):
        session.select(None)
        session.pointer_down(186, 186)  # outside body, on the handle
        assert session.controller.state is IDLE

    def test_resize_keeps_top_left(self, session, square):
        session.pointer_down(180, 180)
        session.pointer_move(230, 200)
        session.pointer_up()
        assert (square.x, square.y) == (100, 100)
        assert (square.width, square.height) == (130, 100)

    def test_resize_minimum(self, session, square):
        session.pointer_down(180, 180)
        session.pointer_move(0, 0)
        session.pointer_up()
        assert (square.width, square.height) == (20, 20)

    def test_resize_snaps(self, session, square):
        session.set_snap(True, 20)
        session.pointer_down(180, 180)
        session.pointer_move(193, 185)  # raw size (93, 85)
        session.pointer_up()
        assert (square.width, square.height) == (100, 80)

    def test_resize_commits_once(self, session, square):
        entries = history_length(session)
        session.pointer_down(180, 180)
        session.pointer_move(200, 200)
        session.pointer_move(210, 220)
        session.pointer_up()
        assert history_length(session) == entries + 1
        assert session.history.get_current_description() == "Resize shape"


# ══════════════════════════════════════════════════════════════════════════
# Selection and robustness
# ══════════════════════════════════════════════════════════════════════════

class TestControllerState:

    def test_empty_canvas_click_clears_selection(self, session, square):
        assert session.pointer_down(5, 5) is None
        assert session.selected_id is None
        assert session.controller.state is IDLE

    def test_selection_is_exclusive(self, session):
        first = session.add_shape('square', (0, 0))
        second = session.add_shape('square', (300, 200))
        session.pointer_down(10, 10)
        session.pointer_up()
        assert session.selected_id == first.id
        session.pointer_down(310, 210)
        session.pointer_up()
        assert session.selected_id == second.id

    def test_pointer_up_when_idle(self, session):
        assert not session.pointer_up()

    def test_pointer_move_when_idle(self, session, square):
        assert not session.pointer_move(50, 50)

    def test_lost_pointer_up_is_committed_on_next_down(self, session, square):
        entries = history_length(session)
        session.pointer_down(110, 110)
        session.pointer_move(210, 110)
        session.pointer_down(5, 5)
        assert history_length(session) == entries + 1
        assert session.controller.state is IDLE

    def test_undo_mid_gesture_resets(self, session, square):
        session.pointer_down(110, 110)
        session.undo()
        assert session.controller.state is IDLE
        assert not session.pointer_move(300, 300)
        assert not session.pointer_up()

    def test_edit_mid_gesture_commits_gesture_first(self, session, square):
        entries = history_length(session)
        session.pointer_down(110, 110)
        session.pointer_move(150, 150)
        assert session.update_property(square.id, 'opacity', 50)
        assert history_length(session) == entries + 2
        assert session.controller.state is IDLE

        # The host release that follows has nothing left to commit
        assert not session.pointer_up()
        assert history_length(session) == entries + 2
        assert (square.x, square.y, square.opacity) == (140, 140, 50)

        session.undo()
        restored = session.find_shape(square.id)
        assert (restored.x, restored.y, restored.opacity) == (140, 140, 100)

    def test_delete_mid_gesture_keeps_one_entry_per_edit(self, session, square):
        entries = history_length(session)
        session.pointer_down(110, 110)
        session.pointer_move(150, 150)
        assert session.delete_selected()
        assert history_length(session) == entries + 2
        assert session.controller.state is IDLE
        assert not session.pointer_up()

    def test_invalid_grid_size_rejected(self, session):
        assert not session.set_snap(True, 0)
        assert not session.set_snap(True, 2.5)
        assert session.controller.snap_enabled is False
        assert session.controller.grid_size == 20

    def test_snap_disabled_is_identity(self, session):
        assert session.controller.snap(53) == 53

    def test_snap_rounds_half_up(self, session):
        session.set_snap(True, 20)
        assert session.controller.snap(50) == 60
        assert session.controller.snap(49) == 40

    def test_standalone_controller_defaults(self, session):
        controller = CanvasController(session)
        assert (controller.canvas_width, controller.canvas_height) == (600, 400)
        assert controller.is_idle
