import json
import tempfile
import unittest
from pathlib import Path

from dailyquiz.bank import BankError, load_bank, parse_bank
from dailyquiz.bank.models import Question, category_display


def text_q(qid: int = 1, **kw) -> dict:
    base = {
        "id": qid,
        "category": "core-concepts",
        "difficulty": "easy",
        "question": f"Question {qid}?",
        "options": ["a", "b", "c"],
        "correct": 0,
    }
    base.update(kw)
    return base


class PackagedBankTests(unittest.TestCase):
    def test_sample_bank_loads(self) -> None:
        bank = load_bank()
        self.assertGreaterEqual(len(bank), 7)
        kinds = {q.diagram.type for q in bank.diagrams()}
        self.assertEqual(
            kinds,
            {"kraft-quorum", "broker-cluster", "partition-replicas", "drag-topology", "heartbeat-timeline"},
        )

    def test_correct_is_normalised_per_interaction(self) -> None:
        bank = load_bank()
        self.assertEqual(bank.get(1).correct, 1)
        self.assertEqual(bank.get(2).correct, "c2")
        self.assertEqual(bank.get(3).correct, ("r2", "r3"))
        self.assertEqual(bank.get(4).correct, {"clients": "producer", "storage": "broker", "integration": "connect"})
        self.assertEqual(bank.get(4).interaction, "drag")
        # numeric ids become strings
        self.assertEqual(bank.get(6).correct, "3")

    def test_answer_text(self) -> None:
        bank = load_bank()
        self.assertEqual(bank.get(1).answer_text, "Ordering is guaranteed within a single partition")
        self.assertEqual(bank.get(3).answer_text, "r2, r3")

    def test_lookup(self) -> None:
        bank = load_bank()
        self.assertEqual(bank[bank.index_of(5)].id, 5)
        with self.assertRaises(KeyError):
            bank.index_of(999)


class ValidationTests(unittest.TestCase):
    def test_accepts_mapping_with_questions(self) -> None:
        self.assertEqual(len(parse_bank({"questions": [text_q(1), text_q(2)]})), 2)

    def test_duplicate_ids_rejected(self) -> None:
        with self.assertRaises(BankError):
            parse_bank([text_q(1), text_q(1)])

    def test_text_index_out_of_range(self) -> None:
        with self.assertRaisesRegex(BankError, "Invalid question 9"):
            parse_bank([text_q(9, correct=3)])

    def test_unknown_diagram_kind(self) -> None:
        raw = text_q(2, type="diagram", options=[], diagram={"type": "pie-chart"}, correct="x")
        with self.assertRaises(BankError):
            parse_bank([raw])

    def test_single_click_answer_must_be_selectable(self) -> None:
        raw = text_q(
            3,
            type="diagram",
            options=[],
            diagram={"type": "kraft-quorum", "nodes": [{"id": "c1"}, {"id": "c2"}]},
            correct="c9",
        )
        with self.assertRaises(BankError):
            parse_bank([raw])

    def test_drag_must_cover_every_zone(self) -> None:
        raw = text_q(
            4,
            type="diagram",
            options=[],
            diagram={
                "type": "drag-topology",
                "items": [{"id": "p"}, {"id": "b"}],
                "zones": [{"id": "z1"}, {"id": "z2"}],
            },
            correct={"z1": "p"},
        )
        with self.assertRaises(BankError):
            parse_bank([raw])

    def test_drag_cannot_be_multi_select(self) -> None:
        raw = text_q(
            4,
            type="diagram",
            options=[],
            diagram={
                "type": "drag-topology",
                "multi_select": True,
                "items": [{"id": "p"}],
                "zones": [{"id": "z1"}],
            },
            correct={"z1": "p"},
        )
        with self.assertRaises(BankError):
            parse_bank([raw])

    def test_timeline_event_past_duration(self) -> None:
        raw = text_q(
            5,
            type="diagram",
            options=[],
            diagram={
                "type": "heartbeat-timeline",
                "duration": 10,
                "nodes": [{"id": "a"}],
                "events": [{"id": "e1", "node": "a", "t": 12}],
            },
            correct="e1",
        )
        with self.assertRaises(BankError):
            parse_bank([raw])

    def test_question_is_frozen(self) -> None:
        q = Question.model_validate(text_q(1))
        with self.assertRaises(Exception):
            q.correct = 2  # type: ignore[misc]


class FileLoadingTests(unittest.TestCase):
    def test_json_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            p = Path(tmp) / "bank.json"
            p.write_text(json.dumps([text_q(1), text_q(2)]), encoding="utf-8")
            self.assertEqual([q.id for q in load_bank(p)], [1, 2])

    def test_missing_file(self) -> None:
        with self.assertRaisesRegex(BankError, "not found"):
            load_bank("/nonexistent/bank.yml")

    def test_category_display(self) -> None:
        self.assertEqual(category_display("core-concepts"), "Core Concepts")
        self.assertEqual(category_display("other"), "other")


if __name__ == "__main__":
    unittest.main()
