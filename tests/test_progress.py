import json
import tempfile
import unittest
from datetime import date, datetime, timezone

from dailyquiz.progress import JsonFileBackend, MemoryBackend, ProgressRecord, ProgressStore, record_answer
from dailyquiz.progress.tracker import apply_answer
from dailyquiz.util.clock import FixedClock


def _clock(day: int = 19, hour: int = 12) -> FixedClock:
    return FixedClock(datetime(2026, 10, day, hour, tzinfo=timezone.utc))


class StreakRuleTests(unittest.TestCase):
    def test_first_answer_starts_streak(self) -> None:
        rec = apply_answer(ProgressRecord(), 3, True, _clock())
        self.assertEqual(rec.streak, 1)
        self.assertEqual(rec.last_answered_date, date(2026, 10, 19))
        self.assertEqual(rec.answered_questions, [3])
        self.assertEqual((rec.correct_count, rec.total_answered), (1, 1))
        self.assertTrue(rec.last_answer_correct)

    def test_answer_the_day_after_extends(self) -> None:
        prev = ProgressRecord(streak=4, last_answered_date=date(2026, 10, 18), total_answered=4, correct_count=2)
        rec = apply_answer(prev, 5, False, _clock())
        self.assertEqual(rec.streak, 5)
        self.assertFalse(rec.last_answer_correct)
        self.assertEqual((rec.correct_count, rec.total_answered), (2, 5))

    def test_same_day_keeps_streak(self) -> None:
        prev = ProgressRecord(streak=4, last_answered_date=date(2026, 10, 19), total_answered=4, correct_count=4)
        self.assertEqual(apply_answer(prev, 5, True, _clock()).streak, 4)

    def test_gap_resets_to_one(self) -> None:
        prev = ProgressRecord(streak=9, last_answered_date=date(2026, 10, 15), total_answered=9, correct_count=9)
        self.assertEqual(apply_answer(prev, 5, True, _clock()).streak, 1)

    def test_answered_ids_are_a_set(self) -> None:
        rec = apply_answer(ProgressRecord(answered_questions=[5]), 5, True, _clock())
        self.assertEqual(rec.answered_questions, [5])
        self.assertEqual(rec.total_answered, 1)


class ProgressRecordTests(unittest.TestCase):
    def test_accuracy_rounds_half_up(self) -> None:
        self.assertEqual(ProgressRecord().accuracy, 0)
        self.assertEqual(ProgressRecord(correct_count=1, total_answered=8).accuracy, 13)
        self.assertEqual(ProgressRecord(correct_count=2, total_answered=3).accuracy, 67)
        self.assertEqual(ProgressRecord(correct_count=1, total_answered=200).accuracy, 1)

    def test_blob_uses_camel_case(self) -> None:
        blob = ProgressRecord(answered_questions=[1], last_answered_date=date(2026, 10, 19), streak=1,
                              correct_count=1, total_answered=1, last_answer_correct=True).to_blob()
        self.assertEqual(
            blob,
            {
                "answeredQuestions": [1],
                "lastAnsweredDate": "2026-10-19",
                "streak": 1,
                "correctCount": 1,
                "totalAnswered": 1,
                "lastAnswerCorrect": True,
            },
        )


class ProgressStoreTests(unittest.TestCase):
    def test_round_trip(self) -> None:
        store = ProgressStore(MemoryBackend())
        rec = ProgressRecord(answered_questions=[2, 7], last_answered_date=date(2026, 10, 19), streak=3,
                             correct_count=1, total_answered=2, last_answer_correct=False)
        store.set(rec)
        self.assertEqual(store.get(), rec)

    def test_missing_is_default(self) -> None:
        self.assertEqual(ProgressStore(MemoryBackend()).get(), ProgressRecord())

    def test_corrupt_blobs_fall_back_to_default(self) -> None:
        for raw in ("{not json", "[1, 2]", '"text"', '{"streak": -3}', '{"correctCount": 5, "totalAnswered": 1}',
                    '{"lastAnsweredDate": "yesterday"}'):
            store = ProgressStore(MemoryBackend({"kafkaQuiz": raw}))
            self.assertEqual(store.get(), ProgressRecord(), raw)

    def test_record_answer_writes_through(self) -> None:
        backend = MemoryBackend()
        store = ProgressStore(backend)
        out = record_answer(store, 4, True, _clock())
        self.assertEqual(store.get(), out)
        self.assertEqual(json.loads(backend.get_item("kafkaQuiz"))["answeredQuestions"], [4])

    def test_json_file_backend(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            store = ProgressStore(JsonFileBackend(tmp))
            record_answer(store, 1, False, _clock(18))
            record_answer(store, 2, True, _clock(19))
            reopened = ProgressStore(JsonFileBackend(tmp)).get()
            self.assertEqual(reopened.streak, 2)
            self.assertEqual(reopened.answered_questions, [1, 2])
            self.assertEqual(reopened.accuracy, 50)


if __name__ == "__main__":
    unittest.main()
