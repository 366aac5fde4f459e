import unittest

from dailyquiz.bank import load_bank
from dailyquiz.diagrams.base_diagram import Canvas
from dailyquiz.interaction import engine, gestures
from dailyquiz.interaction.gestures import POOL, TouchPoint, place_item, unplace_item
from dailyquiz.interaction.state import SessionState

BANK = load_bank()
Q = BANK.get(4)


def view(state):
    return engine.render_diagram(Q, state, Canvas())


def center(state, entity_id, kind):
    return view(state).find(entity_id, kind=kind).center


def drag(state, item_id, to):
    x, y = center(state, item_id, "item")
    v = view(state)
    state = gestures.pointer_down(Q, state, x, y, v.pick_item)
    state = gestures.pointer_move(Q, state, to[0], to[1], v.hit_test)
    return gestures.pointer_up(Q, state, to[0], to[1], v.hit_test)


class PlacementHelpersTests(unittest.TestCase):
    def test_item_occupies_one_zone(self) -> None:
        p = place_item({"a": "x"}, "x", "b")
        self.assertEqual(p, {"b": "x"})

    def test_displaces_previous_occupant(self) -> None:
        p = place_item({"a": "x"}, "y", "a")
        self.assertEqual(p, {"a": "y"})

    def test_unplace(self) -> None:
        self.assertEqual(unplace_item({"a": "x", "b": "y"}, "x"), {"b": "y"})


class PointerGestureTests(unittest.TestCase):
    def setUp(self) -> None:
        self.state = SessionState().with_question(Q, has_answered=False)

    def test_drop_on_zone_places(self) -> None:
        s = drag(self.state, "producer", center(self.state, "clients", "zone"))
        self.assertEqual(dict(s.drag_placements), {"clients": "producer"})
        self.assertIsNone(s.drag)

    def test_move_tracks_hovered_target(self) -> None:
        x, y = center(self.state, "producer", "item")
        v = view(self.state)
        s = gestures.pointer_down(Q, self.state, x, y, v.pick_item)
        self.assertEqual(s.drag.item_id, "producer")
        zx, zy = center(self.state, "storage", "zone")
        s = gestures.pointer_move(Q, s, zx, zy, v.hit_test)
        self.assertEqual(s.drag.over, "storage")
        dragging = view(s).find("producer", kind="item")
        self.assertIn("dragging", dragging.classes)
        self.assertIn("drag-over", view(s).find("storage", kind="zone").classes)

    def test_drop_on_pool_unplaces(self) -> None:
        s = drag(self.state, "producer", center(self.state, "clients", "zone"))
        s = drag(s, "producer", center(s, POOL, "pool"))
        self.assertEqual(dict(s.drag_placements), {})

    def test_drop_elsewhere_reverts(self) -> None:
        s = drag(self.state, "producer", center(self.state, "clients", "zone"))
        s = drag(s, "producer", (2.0, 2.0))
        self.assertEqual(dict(s.drag_placements), {"clients": "producer"})

    def test_move_between_zones(self) -> None:
        s = drag(self.state, "producer", center(self.state, "clients", "zone"))
        s = drag(s, "producer", center(s, "storage", "zone"))
        self.assertEqual(dict(s.drag_placements), {"storage": "producer"})

    def test_press_on_empty_space_starts_nothing(self) -> None:
        v = view(self.state)
        self.assertIsNone(gestures.pointer_down(Q, self.state, 2.0, 2.0, v.pick_item).drag)

    def test_answered_question_ignores_drags(self) -> None:
        s = SessionState().with_question(Q, has_answered=True)
        x, y = center(self.state, "producer", "item")
        self.assertIsNone(gestures.pointer_down(Q, s, x, y, view(self.state).pick_item).drag)

    def test_cancel_keeps_placements(self) -> None:
        s = drag(self.state, "producer", center(self.state, "clients", "zone"))
        x, y = center(s, "broker", "item")
        s = gestures.pointer_down(Q, s, x, y, view(s).pick_item)
        s = gestures.cancel_drag(s)
        self.assertIsNone(s.drag)
        self.assertEqual(dict(s.drag_placements), {"clients": "producer"})


class TouchGestureTests(unittest.TestCase):
    def test_touch_end_uses_last_move(self) -> None:
        state = SessionState().with_question(Q, has_answered=False)
        v = view(state)
        x, y = center(state, "connect", "item")
        zx, zy = center(state, "integration", "zone")
        s = gestures.touch_start(Q, state, [TouchPoint(0, x, y)], v.pick_item)
        self.assertEqual(s.drag.pointer, "touch")
        s = gestures.touch_move(Q, s, [TouchPoint(0, zx, zy)], v.hit_test)
        s = gestures.touch_end(Q, s, v.hit_test)
        self.assertEqual(dict(s.drag_placements), {"integration": "connect"})

    def test_touch_without_points_is_noop(self) -> None:
        state = SessionState().with_question(Q, has_answered=False)
        self.assertIs(gestures.touch_start(Q, state, [], view(state).pick_item), state)

    def test_full_drag_then_submit(self) -> None:
        s = SessionState().with_question(Q, has_answered=False)
        for item, zone in (("producer", "clients"), ("broker", "storage"), ("connect", "integration")):
            s = drag(s, item, center(s, zone, "zone"))
        self.assertTrue(view(s).submit_enabled)
        s = engine.submit(Q, s)
        self.assertTrue(s.verdict)
        self.assertEqual({e.id: e.classes for e in view(s).by_kind("item")},
                         {"producer": ("correct",), "broker": ("correct",), "connect": ("correct",)})


if __name__ == "__main__":
    unittest.main()
