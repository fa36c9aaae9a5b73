# tests/test_scoring_engine.py
import random
import unittest

from survey.aggregate_store import AggregateStore, MemoryStorage
from survey.questions import PERSONA_NAMES, PERSONAS, QUESTIONS, option_label
from survey.scoring_engine import (
    SurveyResult,
    compute_scores,
    determine_winner,
    persona_ranges,
    result_bar_fraction,
    score_survey,
)

# q4, q8, q10 high: Traditional Cultural and Practical Cultural both reach 14
CULTURAL_TIE = [1, 1, 1, 7, 1, 1, 1, 7, 1, 7, 1, 1]


class TestPersonaTable(unittest.TestCase):
    def test_table_shape(self):
        self.assertEqual(len(QUESTIONS), 12)
        self.assertEqual(len(PERSONA_NAMES), 12)
        self.assertEqual([q.position for q in QUESTIONS], list(range(1, 13)))

    def test_declaration_order(self):
        self.assertEqual(PERSONA_NAMES[0], "Traditional Spiritual")
        self.assertEqual(PERSONA_NAMES[-1], "Practical Cultural")

    def test_table_is_read_only(self):
        with self.assertRaises(TypeError):
            PERSONAS["New Persona"] = (1,)

    def test_option_labels(self):
        self.assertEqual(option_label(1), "Strongly Disagree")
        self.assertEqual(option_label(4), "Neutral")
        self.assertEqual(option_label(7), "Strongly Agree")
        with self.assertRaises(ValueError):
            option_label(8)


class TestComputeScores(unittest.TestCase):
    def test_random_answers_within_range(self):
        rng = random.Random(7)
        ranges = persona_ranges()
        for _ in range(200):
            answers = [rng.randint(1, 7) for _ in range(12)]
            scores = compute_scores(answers)
            self.assertEqual(list(scores), PERSONA_NAMES)
            for name, score in scores.items():
                lo, hi = ranges[name]
                self.assertTrue(lo <= score <= hi, f"{name}={score} outside [{lo}, {hi}]")

    def test_specific_sums(self):
        answers = list(range(1, 13))
        scores = compute_scores(answers)
        self.assertEqual(scores["Traditional Spiritual"], 1 + 9)
        self.assertEqual(scores["Traditional Religious"], 1 + 6 + 12)
        self.assertEqual(scores["Practical Astrologer"], 3 + 11)
        self.assertEqual(scores["Scientific Cultural"], 8)

    def test_linearity(self):
        low = compute_scores([1] * 12)
        high = compute_scores([7] * 12)
        self.assertEqual(high, {k: 7 * v for k, v in low.items()})
        rank = lambda s: sorted(s, key=lambda k: -s[k])
        self.assertEqual(rank(low), rank(high))

    def test_unanswered_counts_as_zero(self):
        answers = [4] * 12
        answers[0] = None
        scores = compute_scores(answers)
        self.assertEqual(scores["Traditional Spiritual"], 4)
        self.assertEqual(scores["Traditional Religious"], 8)
        self.assertEqual(scores["Scientific Spiritual"], 8)

    def test_all_unanswered(self):
        scores = compute_scores([None] * 12)
        self.assertEqual(len(scores), 12)
        self.assertTrue(all(v == 0 for v in scores.values()))

    def test_rejects_wrong_length(self):
        with self.assertRaises(ValueError):
            compute_scores([4] * 11)

    def test_rejects_out_of_range(self):
        for bad in (0, 8):
            answers = [4] * 12
            answers[5] = bad
            with self.assertRaises(ValueError):
                compute_scores(answers)

    def test_rejects_fractional_answers(self):
        answers = [4] * 12
        answers[2] = 7.9
        with self.assertRaises(ValueError):
            compute_scores(answers)

    def test_accepts_integral_floats(self):
        self.assertEqual(compute_scores([4.0] * 12), compute_scores([4] * 12))


class TestDetermineWinner(unittest.TestCase):
    def setUp(self):
        self.store = AggregateStore(MemoryStorage())

    def test_neutral_answers(self):
        sizes = {name: len(pos) for name, pos in PERSONAS.items()}
        largest = max(sizes.values())
        expected = [n for n in PERSONA_NAMES if sizes[n] == largest]

        result = score_survey([4] * 12, store=self.store)

        self.assertEqual(expected, ["Traditional Religious"])
        self.assertEqual(result.primary, "Traditional Religious")
        self.assertEqual(result.max_score, 12)
        self.assertFalse(result.is_hybrid)
        self.assertEqual(result.tied, ())

    def test_unique_winner_increments_only_itself(self):
        self.store.increment("Scientific Spiritual")
        before = self.store.snapshot()

        answers = [1] * 12
        answers[1] = answers[4] = 7
        result = score_survey(answers, store=self.store)

        self.assertEqual(result.primary, "Scientific Spiritual")
        after = self.store.snapshot()
        self.assertEqual(after["Scientific Spiritual"], before["Scientific Spiritual"] + 1)
        self.assertEqual({k: v for k, v in after.items() if k != "Scientific Spiritual"},
                         {k: v for k, v in before.items() if k != "Scientific Spiritual"})

    def test_tie_increments_first_declared_only(self):
        result = score_survey(CULTURAL_TIE, store=self.store)

        self.assertTrue(result.is_hybrid)
        self.assertEqual(result.primary, "Traditional Cultural")
        self.assertEqual(result.tied, ("Traditional Cultural", "Practical Cultural"))
        self.assertEqual(self.store.snapshot(), {"Traditional Cultural": 1})

    def test_tie_order_follows_declaration_not_input_order(self):
        scores = {name: 0 for name in reversed(PERSONA_NAMES)}
        scores["Practical Cultural"] = scores["Scientific Religious"] = 5
        result = determine_winner(scores)
        self.assertEqual(result.tied, ("Scientific Religious", "Practical Cultural"))
        self.assertEqual(list(result.scores), PERSONA_NAMES)

    def test_without_store_has_no_side_effect(self):
        result = determine_winner(compute_scores([4] * 12))
        self.assertIsInstance(result, SurveyResult)
        self.assertEqual(len(self.store), 0)

    def test_missing_persona_in_scores(self):
        scores = compute_scores([4] * 12)
        del scores["Scientific Cultural"]
        with self.assertRaises(KeyError):
            determine_winner(scores)

    def test_one_increment_per_survey(self):
        rng = random.Random(3)
        for _ in range(50):
            score_survey([rng.randint(1, 7) for _ in range(12)], store=self.store)
        self.assertEqual(self.store.total(), 50)

    def test_to_dict(self):
        tied = score_survey(CULTURAL_TIE).to_dict()
        self.assertEqual(tied["hybrid"], ["Traditional Cultural", "Practical Cultural"])
        single = score_survey([4] * 12).to_dict()
        self.assertIsNone(single["hybrid"])
        self.assertEqual(single["primary"], "Traditional Religious")
        self.assertEqual(len(single["scores"]), 12)


class TestHelpers(unittest.TestCase):
    def test_persona_ranges(self):
        ranges = persona_ranges()
        self.assertEqual(ranges["Traditional Religious"], (3, 21))
        self.assertEqual(ranges["Scientific Religious"], (1, 7))

    def test_ranked_scores_is_stable(self):
        result = score_survey([4] * 12)
        ranked = [name for name, _ in result.ranked_scores()]
        self.assertEqual(ranked[0], "Traditional Religious")
        twos = [n for n in PERSONA_NAMES if len(PERSONAS[n]) == 2]
        self.assertEqual(ranked[1:1 + len(twos)], twos)

    def test_result_bar_fraction(self):
        self.assertEqual(result_bar_fraction(21), 1.0)
        self.assertAlmostEqual(result_bar_fraction(7), 1 / 3)


if __name__ == "__main__":
    unittest.main()
