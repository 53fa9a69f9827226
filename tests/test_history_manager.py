"""
Tests for the undo/redo HistoryManager.

Covers:
- Basic save/undo/redo stack behaviour
- Deep copy isolation of stored and returned snapshots
- Redo branch pruning
- Optional history cap
- Listener notifications and descriptions
"""
import pytest

from utils.history_manager import HistoryManager


# ══════════════════════════════════════════════════════════════════════════
# HistoryManager (standalone state stack)
# ══════════════════════════════════════════════════════════════════════════

class TestHistoryManagerStack:

    @pytest.fixture
    def hm(self):
        return HistoryManager()

    # ── basic operations ────────────────────────────────────────────

    def test_initial_state_empty(self, hm):
        assert not hm.can_undo()
        assert not hm.can_redo()
        assert hm.current_index == -1
        assert hm.current_state() is None

    def test_single_save_no_undo(self, hm):
        hm.save_state([1], "initial")
        assert not hm.can_undo()
        assert not hm.can_redo()

    def test_undo_returns_previous_state(self, hm):
        hm.save_state([1], "first")
        hm.save_state([1, 2], "second")
        assert hm.undo() == [1]

    def test_redo_returns_next_state(self, hm):
        hm.save_state([1], "first")
        hm.save_state([1, 2], "second")
        hm.undo()
        assert hm.redo() == [1, 2]

    def test_undo_at_beginning_returns_none(self, hm):
        hm.save_state([1], "first")
        assert hm.undo() is None
        assert hm.current_index == 0

    def test_redo_at_end_returns_none(self, hm):
        hm.save_state([1], "first")
        assert hm.redo() is None

    def test_record_alias(self, hm):
        hm.record([1], "first")
        hm.record([2], "second")
        assert hm.undo() == [1]

    def test_unbounded_by_default(self, hm):
        for i in range(500):
            hm.save_state([i])
        assert len(hm.history) == 500

    # ── deep copy isolation ─────────────────────────────────────────

    def test_saved_state_is_deep_copy(self, hm):
        data = {"nested": [1, 2, 3]}
        hm.save_state(data, "save")
        data["nested"].append(999)
        hm.save_state({}, "second")
        restored = hm.undo()
        assert 999 not in restored["nested"]

    def test_returned_state_is_fresh_copy(self, hm):
        hm.save_state({"v": [1]}, "a")
        hm.save_state({"v": [2]}, "b")
        state = hm.undo()
        state["v"].append(999)
        assert hm.current_state() == {"v": [1]}
        hm.redo()
        assert hm.undo() == {"v": [1]}

    # ── branch pruning ──────────────────────────────────────────────

    def test_save_after_undo_prunes_future(self, hm):
        hm.save_state({"v": 1}, "a")
        hm.save_state({"v": 2}, "b")
        hm.save_state({"v": 3}, "c")
        hm.undo()
        hm.save_state({"v": 4}, "d")
        assert not hm.can_redo()
        assert hm.redo() is None
        assert hm.undo() == {"v": 2}

    # ── max history trimming ────────────────────────────────────────

    def test_max_history_trims_oldest(self):
        hm = HistoryManager(max_history=3)
        for v in range(1, 5):
            hm.save_state({"v": v})
        assert len(hm.history) == 3
        assert hm.undo() == {"v": 3}
        assert hm.undo() == {"v": 2}
        assert hm.undo() is None

    def test_invalid_cap_rejected(self):
        with pytest.raises(ValueError):
            HistoryManager(max_history=0)

    # ── listener notification ───────────────────────────────────────

    def test_listener_called_on_save(self, hm):
        events = []
        hm.add_listener(lambda cu, cr: events.append((cu, cr)))
        hm.save_state({"v": 1}, "first")
        assert events == [(False, False)]

    def test_listener_called_on_undo_redo(self, hm):
        events = []
        hm.save_state({"v": 1}, "a")
        hm.save_state({"v": 2}, "b")
        hm.add_listener(lambda cu, cr: events.append((cu, cr)))
        hm.undo()
        assert events[-1] == (False, True)
        hm.redo()
        assert events[-1] == (True, False)

    def test_failing_listener_does_not_break_history(self, hm):
        def boom(cu, cr):
            raise RuntimeError("listener failure")
        hm.add_listener(boom)
        hm.save_state({"v": 1}, "a")
        assert hm.current_state() == {"v": 1}

    def test_remove_listener(self, hm):
        events = []
        cb = lambda cu, cr: events.append(True)
        hm.add_listener(cb)
        hm.save_state({}, "a")
        hm.remove_listener(cb)
        hm.save_state({}, "b")
        assert len(events) == 1

    # ── descriptions ────────────────────────────────────────────────

    def test_get_undo_redo_descriptions(self, hm):
        hm.save_state({}, "alpha")
        hm.save_state({}, "beta")
        assert hm.get_current_description() == "beta"
        assert hm.get_undo_description() == "alpha"
        assert hm.get_redo_description() == ""
        hm.undo()
        assert hm.get_redo_description() == "beta"

    # ── clear ───────────────────────────────────────────────────────

    def test_clear_resets_everything(self, hm):
        hm.save_state({"v": 1}, "a")
        hm.save_state({"v": 2}, "b")
        hm.clear()
        assert not hm.can_undo()
        assert not hm.can_redo()
        assert hm.current_index == -1
        assert len(hm.history) == 0
