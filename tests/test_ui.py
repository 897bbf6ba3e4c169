"""Tests for the rich UI components."""

import pytest
from rich.color import Color
from rich.console import Console

from exercises import (
    CompletionAttempt,
    MatchingAttempt,
    MultipleChoiceAttempt,
    OrderingAttempt,
    Selection,
)
from ui import (
    ChoiceBoard,
    CompletionBoard,
    MatchingBoard,
    OrderingBoard,
    PlayerUI,
    ProgressTracker,
    ResultPanel,
    ResultsTable,
)
from ui.styles import get_score_style, source_label, target_label


def render(renderable) -> str:
    console = Console(record=True, width=100)
    console.print(renderable)
    return console.export_text()


class TestLabels:
    """Tests for label helpers."""

    def test_labels(self):
        assert [source_label(i) for i in range(3)] == ["A", "B", "C"]
        assert [target_label(i) for i in range(3)] == ["1", "2", "3"]

    @pytest.mark.parametrize("score,color", [(100, "#22C55E"), (50, "#F59E0B"), (0, "#EF4444")])
    def test_score_style(self, score, color):
        assert get_score_style(score).color == Color.parse(color)


class TestBoards:
    """Tests for exercise boards."""

    def test_matching_board(self, matching_catalog, unshuffled_config):
        attempt = MatchingAttempt("capitals", matching_catalog, config=unshuffled_config)
        attempt.match("s1", "t2")
        text = render(MatchingBoard(attempt, Selection(id="s2", is_source=True)))
        assert "A. France" in text
        assert "→ 2" in text
        assert "1. Paris" in text

    def test_matching_board_marks_after_completion(self, matching_catalog, unshuffled_config):
        attempt = MatchingAttempt("capitals", matching_catalog, config=unshuffled_config)
        attempt.match("s1", "t1")
        attempt.match("s2", "t1")
        text = render(MatchingBoard(attempt))
        assert "✓" in text
        assert "✗" in text

    def test_ordering_board(self, ordering_catalog, unshuffled_config):
        attempt = OrderingAttempt("letters", ordering_catalog, config=unshuffled_config)
        text = render(OrderingBoard(attempt))
        assert "Put the letters in order" in text
        assert "4. D" in text

    def test_completion_board(self, completion_catalog):
        attempt = CompletionAttempt("capitals-text", completion_catalog)
        attempt.set_answer("b1", "Paris")
        text = render(CompletionBoard(attempt))
        assert "[1: Paris]" in text
        assert "[2: ____]" in text

    def test_choice_board(self, multi_choice_catalog):
        attempt = MultipleChoiceAttempt("primes", multi_choice_catalog)
        text = render(ChoiceBoard(attempt))
        assert "Which are primes?" in text
        assert "D. 5" in text
        assert "Toggle letters" in text


class TestResults:
    """Tests for result rendering."""

    @pytest.fixture
    def result(self, matching_catalog):
        attempt = MatchingAttempt("capitals", matching_catalog)
        attempt.match("s1", "t1")
        return attempt.match("s2", "t1")

    def test_result_panel(self, result):
        text = render(ResultPanel(result))
        assert "50%" in text
        assert "1/2 correct" in text
        assert "Attempt 1" in text

    def test_results_table(self, result):
        text = render(ResultsTable("capitals", [result]))
        assert "Results for capitals" in text
        assert "matching" in text

    def test_progress_tracker(self, result):
        tracker = ProgressTracker(total=2)
        tracker.update(result)
        assert tracker.progress_percent == 50.0
        assert tracker.average_score == 50
        assert tracker.perfect_count == 0
        assert "1/2" in render(tracker)


class TestPlayerFeedback:
    """PlayerUI acts as the feedback listener."""

    def test_match_cues(self, matching_catalog):
        console = Console(record=True, width=100)
        ui = PlayerUI(console)
        attempt = MatchingAttempt("capitals", matching_catalog, listeners=[ui])
        attempt.match("s1", "t1")
        attempt.match("s2", "t1")
        text = console.export_text()
        assert "Great!" in text
        assert "Try again" in text
        assert "Good try!" in text


class TestSessionHelpers:
    """Tests for PlayerUI session helpers."""

    def test_create_progress_tracker(self):
        ui = PlayerUI(Console(record=True, width=100))
        tracker = ui.create_progress_tracker(3)
        assert tracker.total == 3
        assert ui.create_progress_tracker(3) is not tracker

    def test_completion_board_quit_hint(self, completion_catalog):
        text = render(CompletionBoard(CompletionAttempt("capitals-text", completion_catalog)))
        assert ":q quit" in text
