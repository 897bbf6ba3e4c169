"""Storage layer for the exercise engine.

Provides repository interfaces and SQLite implementations for the
persistence collaborator: authoring-system questions and completed
attempt results.
"""

from pathlib import Path

from .base import AttemptResultRepository, QuestionRepository
from .sqlite import SQLiteAttemptResultRepository, SQLiteQuestionRepository
from .assignments import (
    Assignment,
    import_assignment,
    load_assignment_file,
    parse_assignment,
)
from .connection import get_connection, init_schema, DEFAULT_DB_PATH

__all__ = [
    # Abstract interfaces
    "QuestionRepository",
    "AttemptResultRepository",
    # SQLite implementations
    "SQLiteQuestionRepository",
    "SQLiteAttemptResultRepository",
    # Assignment files
    "Assignment",
    "parse_assignment",
    "load_assignment_file",
    "import_assignment",
    # Connection utilities
    "get_connection",
    "init_schema",
    "DEFAULT_DB_PATH",
    # Factory functions
    "get_question_repo",
    "get_attempt_result_repo",
]


def get_question_repo(db_path: Path = DEFAULT_DB_PATH) -> QuestionRepository:
    """Get a QuestionRepository instance."""
    return SQLiteQuestionRepository(db_path)


def get_attempt_result_repo(db_path: Path = DEFAULT_DB_PATH) -> AttemptResultRepository:
    """Get an AttemptResultRepository instance."""
    return SQLiteAttemptResultRepository(db_path)
