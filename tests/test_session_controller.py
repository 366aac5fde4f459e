import io
import unittest
from contextlib import redirect_stderr, redirect_stdout
from datetime import datetime, timedelta, timezone

from dailyquiz.app.events import ANSWER_RECORDED, QUESTION_CHANGED, STATS_CHANGED
from dailyquiz.app.session_controller import SessionController
from dailyquiz.bank import load_bank
from dailyquiz.progress import MemoryBackend, ProgressStore
from dailyquiz.util.clock import FixedClock

BANK = load_bank()
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def clock_for(index: int, hour: int = 12) -> FixedClock:
    """A clock whose daily question is BANK[index]."""
    return FixedClock(EPOCH + timedelta(days=len(BANK) * 3000 + index, hours=hour))


class RecordingHistory:
    def __init__(self) -> None:
        self.rows = []

    def append(self, row) -> None:
        self.rows.append(row)


class BrokenHistory:
    def append(self, row) -> None:
        raise OSError("disk full")


def make(index: int = 0, *, store=None, history=None, clock=None) -> SessionController:
    ctrl = SessionController(
        BANK,
        store or ProgressStore(MemoryBackend()),
        clock=clock or clock_for(index),
        history=history,
    )
    ctrl.start()
    return ctrl


class DailyFlowTests(unittest.TestCase):
    def test_start_selects_daily_question(self) -> None:
        ctrl = make(3)
        self.assertEqual(ctrl.question.id, BANK[3].id)
        self.assertFalse(ctrl.state.has_answered)
        self.assertTrue(ctrl.is_daily(ctrl.question))

    def test_answer_updates_progress_and_emits(self) -> None:
        ctrl = make(0)
        seen = []
        for ev in (ANSWER_RECORDED, STATS_CHANGED):
            ctrl.bus.subscribe(ev, lambda p, ev=ev: seen.append(ev))
        ctrl.select_option(1)
        p = ctrl.progress
        self.assertEqual((p.streak, p.total_answered, p.correct_count), (1, 1, 1))
        self.assertEqual(p.answered_questions, [BANK[0].id])
        self.assertEqual(seen, [ANSWER_RECORDED, STATS_CHANGED])

    def test_resubmit_same_day_is_idempotent(self) -> None:
        store = ProgressStore(MemoryBackend())
        clock = clock_for(0)
        make(0, store=store, clock=clock).select_option(1)
        again = make(0, store=store, clock=clock)
        self.assertTrue(again.state.has_answered)
        again.select_option(0)
        self.assertEqual(store.get().total_answered, 1)
        view = again.render()
        self.assertTrue(view.feedback.visible)
        self.assertEqual(view.feedback.header, "Correct!")

    def test_consecutive_days_extend_streak(self) -> None:
        store = ProgressStore(MemoryBackend())
        clock = clock_for(0)
        make(store=store, clock=clock).select_option(1)
        clock.advance(days=1)
        ctrl = make(store=store, clock=clock)
        self.assertEqual(ctrl.question.id, BANK[1].id)
        self.assertFalse(ctrl.state.has_answered)
        ctrl.click_entity("b1")
        p = store.get()
        self.assertEqual((p.streak, p.total_answered, p.correct_count), (2, 2, 1))
        self.assertFalse(p.last_answer_correct)

    def test_missed_day_resets_streak(self) -> None:
        store = ProgressStore(MemoryBackend())
        clock = clock_for(0)
        make(store=store, clock=clock).select_option(1)
        clock.advance(days=2)
        ctrl = make(store=store, clock=clock)
        ctrl.click_entity("r2")
        ctrl.click_entity("r3")
        ctrl.submit()
        self.assertEqual(store.get().streak, 1)
        self.assertEqual(store.get().total_answered, 2)

    def test_flashcard_reveal_counts_correct(self) -> None:
        ctrl = make(6)
        ctrl.set_mode("flashcard")
        ctrl.reveal_flashcard()
        self.assertTrue(ctrl.state.revealed)
        self.assertEqual(ctrl.progress.correct_count, 1)
        ctrl.reveal_flashcard()
        self.assertEqual(ctrl.progress.total_answered, 1)

    def test_click_at_coordinates(self) -> None:
        ctrl = make(1)
        node = ctrl.diagram_view().find("c2", kind="node")
        ctrl.click_at(*node.center)
        self.assertTrue(ctrl.state.verdict)
        self.assertEqual(ctrl.progress.correct_count, 1)

    def test_click_on_empty_space_is_ignored(self) -> None:
        ctrl = make(1)
        ctrl.click_at(1, 1)
        self.assertFalse(ctrl.state.has_answered)

    def test_drag_question_through_pointer(self) -> None:
        ctrl = make(3)
        for zone, item in BANK[3].correct.items():
            view = ctrl.diagram_view()
            ctrl.pointer_down(*view.find(item, kind="item").center)
            zx, zy = view.find(zone, kind="zone").center
            ctrl.pointer_move(zx, zy)
            ctrl.pointer_up(zx, zy)
        self.assertFalse(ctrl.state.has_answered)
        self.assertTrue(ctrl.render().submit_enabled)
        ctrl.submit()
        self.assertTrue(ctrl.state.verdict)
        self.assertEqual(ctrl.progress.total_answered, 1)


class BrowseTests(unittest.TestCase):
    def test_enter_browse_defaults_to_daily(self) -> None:
        ctrl = make(2)
        ctrl.enter_browse()
        self.assertTrue(ctrl.state.browse_mode)
        self.assertEqual(ctrl.state.browse_index, 2)
        self.assertEqual(ctrl.render().browse_position, (3, len(BANK)))

    def test_navigation_clamps(self) -> None:
        ctrl = make(0)
        ctrl.enter_browse(0)
        ctrl.browse_prev()
        self.assertEqual(ctrl.state.browse_index, 0)
        ctrl.browse_jump(99)
        self.assertEqual(ctrl.state.browse_index, len(BANK) - 1)
        ctrl.browse_next()
        self.assertEqual(ctrl.state.browse_index, len(BANK) - 1)
        self.assertEqual(ctrl.question.id, BANK[len(BANK) - 1].id)

    def test_navigation_resets_answer_state(self) -> None:
        ctrl = make(0)
        ctrl.enter_browse(2)
        ctrl.click_entity("r2")
        ctrl.browse_next()
        ctrl.browse_prev()
        self.assertEqual(ctrl.state.selected_nodes, ())
        self.assertTrue(ctrl.state.browse_mode)

    def test_browse_answer_is_counted(self) -> None:
        ctrl = make(0)
        events = []
        ctrl.bus.subscribe(QUESTION_CHANGED, events.append)
        ctrl.enter_browse(6)
        ctrl.select_option(1)
        self.assertEqual(ctrl.progress.total_answered, 1)
        self.assertEqual(ctrl.progress.answered_questions, [BANK[6].id])
        self.assertEqual(len(events), 1)

    def test_daily_question_in_browse_cannot_be_counted_twice(self) -> None:
        ctrl = make(0)
        ctrl.select_option(1)
        ctrl.enter_browse()
        self.assertTrue(ctrl.state.has_answered)
        ctrl.select_option(0)
        ctrl.browse_next()
        ctrl.browse_prev()
        self.assertTrue(ctrl.state.has_answered)
        self.assertEqual(ctrl.progress.total_answered, 1)

    def test_exit_browse_returns_to_daily(self) -> None:
        ctrl = make(4)
        ctrl.enter_browse(0)
        ctrl.exit_browse()
        self.assertFalse(ctrl.state.browse_mode)
        self.assertEqual(ctrl.question.id, BANK[4].id)


class PracticeTests(unittest.TestCase):
    def test_practice_never_touches_progress(self) -> None:
        store = ProgressStore(MemoryBackend())
        ctrl = make(0, store=store)
        before = store.get()
        session = ctrl.practice(BANK[2].id)
        session.click_entity("r2")
        session.click_entity("r3")
        session.submit()
        self.assertTrue(session.verdict)
        self.assertTrue(session.render().feedback.visible)
        self.assertEqual(store.get(), before)
        self.assertEqual(ctrl.progress, before)
        # feedback can be reset and tried again
        session.reset()
        self.assertIsNone(session.verdict)

    def test_unknown_question(self) -> None:
        with self.assertRaises(KeyError):
            make(0).practice(999)

    def test_question_list_marks_answered(self) -> None:
        ctrl = make(0)
        ctrl.select_option(1)
        rows = ctrl.question_list()
        self.assertEqual(len(rows), len(BANK))
        self.assertEqual([r["id"] for r in rows if r["answered"]], [BANK[0].id])


class HistoryAndErrorTests(unittest.TestCase):
    def test_history_row_per_counted_answer(self) -> None:
        history = RecordingHistory()
        ctrl = make(6, history=history)
        ctrl.set_mode("flashcard")
        ctrl.reveal_flashcard()
        ctrl.enter_browse(1)
        ctrl.click_entity("c1")
        self.assertEqual([(r.question_id, r.mode, r.browse, r.correct) for r in history.rows],
                         [(BANK[6].id, "flashcard", False, True), (BANK[1].id, "diagram", True, False)])
        self.assertEqual(history.rows[1].diagram_kind, "kraft-quorum")

    def test_history_failure_does_not_block_answer(self) -> None:
        out = io.StringIO()
        with redirect_stdout(out):
            ctrl = make(0, history=BrokenHistory())
            ctrl.select_option(1)
        self.assertEqual(ctrl.progress.total_answered, 1)
        self.assertIn("[WARN] Could not append answer history", out.getvalue())

    def test_empty_bank(self) -> None:
        err = io.StringIO()
        with redirect_stderr(err):
            ctrl = SessionController([], ProgressStore(MemoryBackend()), clock=clock_for(0))
            ctrl.start()
        self.assertEqual(ctrl.state.error, "empty_bank")
        self.assertIn("ERROR:", err.getvalue())
        ctrl.select_option(0)
        ctrl.enter_browse()
        view = ctrl.render()
        self.assertIsNone(view.question_id)
        self.assertEqual(view.error, "empty_bank")

    def test_render_badges_and_stats(self) -> None:
        ctrl = make(0)
        ctrl.select_option(0)
        view = ctrl.render()
        self.assertEqual(view.category_label, "Core Concepts")
        self.assertRegex(view.day_label, r"^Day \d+ of 365$")
        self.assertEqual(view.feedback.header, "Not quite!")
        self.assertEqual(view.stats.accuracy, 0)
        classes = {o.letter: o.classes for o in view.options}
        self.assertEqual(classes["A"], ("option", "incorrect"))
        self.assertEqual(classes["B"], ("option", "correct"))


if __name__ == "__main__":
    unittest.main()
