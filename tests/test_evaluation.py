"""Tests for the correctness evaluators."""

import pytest

from exercises import (
    evaluate_completion,
    evaluate_matching,
    evaluate_multiple_choice,
    evaluate_ordering,
    is_pair_correct,
    percent_score,
)
from models import CompletionCatalog, MatchingCatalog, MatchPair, MultipleChoiceCatalog


def pairs(*entries):
    return [MatchPair(source_id=s, target_id=t) for s, t in entries]


class TestPercentScore:
    """Tests for percent_score()."""

    @pytest.mark.parametrize(
        "correct,total,expected",
        [
            (0, 4, 0),
            (1, 4, 25),
            (2, 4, 50),
            (4, 4, 100),
            (1, 3, 33),
            (2, 3, 67),
            (1, 8, 13),  # 12.5 rounds half up
            (1, 200, 1),  # 0.5 rounds half up
        ],
    )
    def test_rounds_half_up(self, correct, total, expected):
        assert percent_score(correct, total) == expected

    def test_zero_total_scores_zero(self):
        """A degenerate total should score 0 instead of dividing by zero."""
        assert percent_score(0, 0) == 0


class TestEvaluateMatching:
    """Tests for evaluate_matching()."""

    def test_all_correct(self, matching_catalog):
        result = evaluate_matching(pairs(("s1", "t1"), ("s2", "t2")), matching_catalog)
        assert result.all_correct
        assert result.score == 100
        assert result.item_results == {"s1": True, "s2": True}

    def test_swapped_targets_all_wrong(self, matching_catalog):
        result = evaluate_matching(pairs(("s1", "t2"), ("s2", "t1")), matching_catalog)
        assert not result.all_correct
        assert result.correct_count == 0
        assert result.score == 0

    def test_unmatched_source_is_incorrect(self, matching_catalog):
        """A source with no match should appear in item_results as incorrect."""
        result = evaluate_matching(pairs(("s1", "t1")), matching_catalog)
        assert result.item_results == {"s1": True, "s2": False}
        assert result.score == 50
        assert not result.all_correct

    def test_partial_score_rounding(self, three_pair_catalog):
        result = evaluate_matching(
            pairs(("s1", "t1"), ("s2", "t3"), ("s3", "t2")), three_pair_catalog
        )
        assert result.correct_count == 1
        assert result.total == 3
        assert result.score == 33

    def test_evaluation_is_pure(self, matching_catalog):
        """Evaluating twice should give identical results and not mutate input."""
        state = pairs(("s1", "t1"))
        first = evaluate_matching(state, matching_catalog)
        second = evaluate_matching(state, matching_catalog)
        assert first == second
        assert state == pairs(("s1", "t1"))

    def test_zero_sources_degenerate(self):
        """An empty catalog should score 0 and report all correct."""
        result = evaluate_matching([], MatchingCatalog())
        assert result.score == 0
        assert result.total == 0
        assert result.all_correct

    def test_is_pair_correct(self, matching_catalog):
        assert is_pair_correct(matching_catalog, "s1", "t1")
        assert not is_pair_correct(matching_catalog, "s1", "t2")


class TestEvaluateOrdering:
    """Tests for evaluate_ordering()."""

    def test_correct_order(self, ordering_catalog):
        result = evaluate_ordering(list(ordering_catalog.items))
        assert result.all_correct
        assert result.score == 100

    def test_reversed_order_scores_zero(self, ordering_catalog):
        result = evaluate_ordering(list(reversed(ordering_catalog.items)))
        assert result.correct_count == 0
        assert result.score == 0
        assert not result.all_correct

    def test_two_swapped_scores_half(self, ordering_catalog):
        a, b, c, d = ordering_catalog.items
        result = evaluate_ordering([a, c, b, d])
        assert result.item_results == {"A": True, "B": False, "C": False, "D": True}
        assert result.score == 50

    def test_empty_sequence(self):
        result = evaluate_ordering([])
        assert result.score == 0
        assert result.all_correct


class TestEvaluateCompletion:
    """Tests for evaluate_completion()."""

    @pytest.mark.parametrize(
        "answer,expected",
        [
            ("Paris", True),
            ("paris", True),
            ("  Paris  ", True),
            ("PARIS\n", True),
            ("Pariss", False),
            ("Par is", False),
            ("", False),
        ],
    )
    def test_normalized_exact_match(self, answer, expected):
        catalog = CompletionCatalog(text="_____", blanks=[{"id": "b1", "answer": "Paris"}])
        result = evaluate_completion({"b1": answer}, catalog)
        assert result.item_results["b1"] is expected

    def test_missing_answer_is_incorrect(self, completion_catalog):
        result = evaluate_completion({"b1": "Paris"}, completion_catalog)
        assert result.item_results == {"b1": True, "b2": False}
        assert result.score == 50

    def test_all_correct(self, completion_catalog):
        result = evaluate_completion({"b1": "paris", "b2": "tokyo"}, completion_catalog)
        assert result.all_correct
        assert result.score == 100


class TestEvaluateMultipleChoice:
    """Tests for evaluate_multiple_choice()."""

    def test_single_choice_correct(self, single_choice_catalog):
        result = evaluate_multiple_choice(["o1"], single_choice_catalog)
        assert result.all_correct
        assert result.score == 100

    def test_single_choice_wrong(self, single_choice_catalog):
        result = evaluate_multiple_choice(["o2"], single_choice_catalog)
        assert not result.all_correct
        assert result.score == 0
        assert result.item_results["o1"] is False
        assert result.item_results["o2"] is False
        assert result.item_results["o3"] is True

    def test_multi_all_correct(self, multi_choice_catalog):
        result = evaluate_multiple_choice(["two", "three", "five"], multi_choice_catalog)
        assert result.all_correct
        assert result.score == 100

    def test_multi_partial(self, multi_choice_catalog):
        result = evaluate_multiple_choice(["two", "three"], multi_choice_catalog)
        assert not result.all_correct
        assert result.score == 67

    def test_multi_wrong_picks_subtract(self, multi_choice_catalog):
        """Each wrong pick should cancel one correct pick."""
        result = evaluate_multiple_choice(["two", "three", "four"], multi_choice_catalog)
        assert not result.all_correct
        assert result.score == 33

    def test_multi_score_clamped_at_zero(self, multi_choice_catalog):
        result = evaluate_multiple_choice(["four"], multi_choice_catalog)
        assert result.score == 0

    def test_no_options(self):
        result = evaluate_multiple_choice([], MultipleChoiceCatalog())
        assert result.score == 0
        assert result.all_correct
