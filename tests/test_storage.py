"""Tests for the storage layer repository implementations."""

import json

import pytest

from exercises import MatchingAttempt
from models import InteractiveQuestion, QuestionType
from storage import (
    SQLiteAttemptResultRepository,
    SQLiteQuestionRepository,
    get_attempt_result_repo,
    get_connection,
    get_question_repo,
    import_assignment,
    parse_assignment,
)

SAMPLE_ASSIGNMENT = {
    "id": "a1",
    "title": "Capitals",
    "questions": [
        {
            "id": "q2",
            "questionType": "ORDERING",
            "questionText": "Order",
            "questionData": {"items": [{"id": "x", "text": "x", "correctPosition": 0}]},
            "order": 1,
        },
        {
            "id": "q1",
            "questionType": "MATCHING",
            "questionText": "Match",
            "questionData": {"pairs": [{"id": "p1", "left": "France", "right": "Paris"}]},
            "order": 0,
        },
    ],
}


@pytest.fixture
def assignment_file(tmp_path):
    path = tmp_path / "assignment.json"
    path.write_text(json.dumps(SAMPLE_ASSIGNMENT), encoding="utf-8")
    return path


class TestQuestionRepository:
    """Tests for SQLiteQuestionRepository."""

    def test_get_by_id_returns_none_for_unknown_id(self, test_db_path):
        repo = SQLiteQuestionRepository(test_db_path)
        assert repo.get_by_id("nonexistent") is None

    def test_add_and_get(self, test_db_path):
        """Question data should round-trip through the JSON column."""
        repo = SQLiteQuestionRepository(test_db_path)
        question = InteractiveQuestion(
            id="q1",
            assignment_id="a1",
            question_type=QuestionType.COMPLETION,
            question_text="Fill",
            question_data={"text": "___", "blanks": [{"id": "b1", "answer": "x"}]},
        )
        repo.add(question)
        assert repo.get_by_id("q1") == question

    def test_add_replaces_existing(self, test_db_path):
        repo = SQLiteQuestionRepository(test_db_path)
        repo.add(InteractiveQuestion(id="q1", question_type=QuestionType.MATCHING))
        repo.add(
            InteractiveQuestion(
                id="q1", question_type=QuestionType.MATCHING, question_text="Updated"
            )
        )
        assert repo.get_by_id("q1").question_text == "Updated"

    def test_get_for_assignment_sorted(self, test_db_path, assignment_file):
        import_assignment(assignment_file, test_db_path)
        repo = get_question_repo(test_db_path)
        questions = repo.get_for_assignment("a1")
        assert [q.id for q in questions] == ["q1", "q2"]
        assert repo.get_for_assignment("other") == []


class TestAttemptResultRepository:
    """Tests for SQLiteAttemptResultRepository."""

    def test_empty(self, test_db_path):
        repo = SQLiteAttemptResultRepository(test_db_path)
        assert repo.get_for_exercise("capitals") == []
        assert repo.get_latest("capitals") is None
        assert repo.best_score("capitals") is None

    def test_records_completed_attempts(self, test_db_path, matching_catalog):
        """The repository should work as the attempt's completion callback."""
        repo = get_attempt_result_repo(test_db_path)
        attempt = MatchingAttempt("capitals", matching_catalog, on_complete=repo.record)

        attempt.match("s1", "t2")
        first = attempt.match("s2", "t1")
        attempt.reset()
        attempt.match("s1", "t1")
        second = attempt.match("s2", "t2")

        stored = repo.get_for_exercise("capitals")
        assert stored == [first, second]
        assert repo.get_latest("capitals") == second
        assert repo.best_score("capitals") == 100

    def test_row_contents(self, test_db_path, matching_catalog):
        repo = SQLiteAttemptResultRepository(test_db_path)
        attempt = MatchingAttempt("capitals", matching_catalog, on_complete=repo.record)
        attempt.match("s1", "t1")
        attempt.match("s2", "t1")

        conn = get_connection(test_db_path)
        try:
            row = conn.execute("SELECT * FROM attempt_results").fetchone()
        finally:
            conn.close()

        assert row["kind"] == "matching"
        assert row["score"] == 50
        assert row["all_correct"] == 0
        assert json.loads(row["response"])["pairs"][1] == {"left_id": "s2", "right_id": "t1"}


class TestAssignments:
    """Tests for assignment file parsing and import."""

    def test_parse_sorts_by_order(self):
        assignment = parse_assignment(SAMPLE_ASSIGNMENT)
        assert assignment.title == "Capitals"
        assert [q.id for q in assignment.questions] == ["q1", "q2"]
        assert all(q.assignment_id == "a1" for q in assignment.questions)
        assert assignment.questions[0].question_type == QuestionType.MATCHING

    def test_parse_unknown_type(self):
        data = {"id": "a", "questions": [{"id": "q", "questionType": "ESSAY"}]}
        with pytest.raises(ValueError):
            parse_assignment(data)

    def test_import_assignment(self, test_db_path, assignment_file):
        assignment = import_assignment(assignment_file, test_db_path)
        assert len(assignment.questions) == 2
        stored = SQLiteQuestionRepository(test_db_path).get_by_id("q1")
        assert stored.question_data["pairs"][0]["right"] == "Paris"
