"""SQLite implementations of repository interfaces."""

import json
from datetime import datetime, timezone
from pathlib import Path

from loguru import logger

from .base import AttemptResultRepository, QuestionRepository
from .connection import get_connection, DEFAULT_DB_PATH
from models import (
    AttemptResult,
    EvaluationResult,
    ExerciseKind,
    InteractiveQuestion,
    QuestionType,
)


class SQLiteQuestionRepository(QuestionRepository):
    """SQLite implementation of QuestionRepository."""

    def __init__(self, db_path: Path = DEFAULT_DB_PATH):
        self.db_path = db_path

    def add(self, question: InteractiveQuestion) -> None:
        """Insert or replace a question."""
        conn = get_connection(self.db_path)
        try:
            conn.execute(
                """INSERT OR REPLACE INTO questions
                (id, assignment_id, question_type, question_text, question_data, sort_order)
                VALUES (?, ?, ?, ?, ?, ?)""",
                (
                    question.id,
                    question.assignment_id,
                    question.question_type.value,
                    question.question_text,
                    json.dumps(question.question_data),
                    question.order,
                ),
            )
            conn.commit()
        finally:
            conn.close()

    def get_by_id(self, question_id: str) -> InteractiveQuestion | None:
        """Load a single question by ID."""
        conn = get_connection(self.db_path)
        try:
            cursor = conn.execute(
                "SELECT * FROM questions WHERE id = ?", (question_id,)
            )
            row = cursor.fetchone()
            return self._row_to_model(row) if row else None
        finally:
            conn.close()

    def get_for_assignment(self, assignment_id: str) -> list[InteractiveQuestion]:
        """Load the questions of an assignment in display order."""
        conn = get_connection(self.db_path)
        try:
            cursor = conn.execute(
                """SELECT * FROM questions WHERE assignment_id = ?
                ORDER BY sort_order, id""",
                (assignment_id,),
            )
            return [self._row_to_model(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def _row_to_model(self, row) -> InteractiveQuestion:
        """Convert a database row to an InteractiveQuestion model."""
        return InteractiveQuestion(
            id=row["id"],
            assignment_id=row["assignment_id"],
            question_type=QuestionType(row["question_type"]),
            question_text=row["question_text"],
            question_data=json.loads(row["question_data"]),
            order=row["sort_order"],
        )


class SQLiteAttemptResultRepository(AttemptResultRepository):
    """SQLite implementation of AttemptResultRepository."""

    def __init__(self, db_path: Path = DEFAULT_DB_PATH):
        self.db_path = db_path

    def record(self, result: AttemptResult) -> None:
        """Store a completed attempt."""
        conn = get_connection(self.db_path)
        try:
            conn.execute(
                """INSERT INTO attempt_results
                (exercise_id, kind, attempt_number, all_correct, score,
                evaluation, response, recorded_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    result.exercise_id,
                    result.kind.value,
                    result.attempt_number,
                    int(result.all_correct),
                    result.score,
                    result.evaluation.model_dump_json(),
                    json.dumps(result.response),
                    datetime.now(timezone.utc).isoformat(),
                ),
            )
            conn.commit()
        finally:
            conn.close()
        logger.debug(
            "Recorded attempt {} of {} (score {})",
            result.attempt_number,
            result.exercise_id,
            result.score,
        )

    def get_for_exercise(self, exercise_id: str) -> list[AttemptResult]:
        """Load every stored attempt of an exercise, oldest first."""
        conn = get_connection(self.db_path)
        try:
            cursor = conn.execute(
                "SELECT * FROM attempt_results WHERE exercise_id = ? ORDER BY id",
                (exercise_id,),
            )
            return [self._row_to_model(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def get_latest(self, exercise_id: str) -> AttemptResult | None:
        """Load the most recent attempt of an exercise."""
        conn = get_connection(self.db_path)
        try:
            cursor = conn.execute(
                """SELECT * FROM attempt_results WHERE exercise_id = ?
                ORDER BY id DESC LIMIT 1""",
                (exercise_id,),
            )
            row = cursor.fetchone()
            return self._row_to_model(row) if row else None
        finally:
            conn.close()

    def best_score(self, exercise_id: str) -> int | None:
        """Return the highest recorded score for an exercise."""
        conn = get_connection(self.db_path)
        try:
            cursor = conn.execute(
                "SELECT MAX(score) AS best FROM attempt_results WHERE exercise_id = ?",
                (exercise_id,),
            )
            row = cursor.fetchone()
            return row["best"] if row else None
        finally:
            conn.close()

    def _row_to_model(self, row) -> AttemptResult:
        """Convert a database row to an AttemptResult model."""
        return AttemptResult(
            exercise_id=row["exercise_id"],
            kind=ExerciseKind(row["kind"]),
            attempt_number=row["attempt_number"],
            all_correct=bool(row["all_correct"]),
            score=row["score"],
            evaluation=EvaluationResult.model_validate_json(row["evaluation"]),
            response=json.loads(row["response"]),
        )
