"""Database connection management and schema initialization."""

import sqlite3
from pathlib import Path

DEFAULT_DB_PATH = Path(__file__).parent.parent / "data" / "exercises.db"

SCHEMA_SQL = """
-- Questions as delivered by the authoring system
CREATE TABLE IF NOT EXISTS questions (
    id TEXT PRIMARY KEY,
    assignment_id TEXT NOT NULL DEFAULT '',
    question_type TEXT NOT NULL CHECK (
        question_type IN ('MATCHING', 'ORDERING', 'COMPLETION', 'MULTIPLE_CHOICE')
    ),
    question_text TEXT NOT NULL DEFAULT '',
    question_data TEXT NOT NULL DEFAULT '{}',  -- JSON object
    sort_order INTEGER NOT NULL DEFAULT 0
);

CREATE INDEX IF NOT EXISTS idx_questions_assignment ON questions(assignment_id);

-- One row per completed attempt
CREATE TABLE IF NOT EXISTS attempt_results (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    exercise_id TEXT NOT NULL,
    kind TEXT NOT NULL,
    attempt_number INTEGER NOT NULL,
    all_correct INTEGER NOT NULL,
    score INTEGER NOT NULL CHECK (score BETWEEN 0 AND 100),
    evaluation TEXT NOT NULL,  -- JSON EvaluationResult
    response TEXT NOT NULL,  -- JSON response payload
    recorded_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_attempt_results_exercise ON attempt_results(exercise_id);
"""


def get_connection(db_path: Path = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Get a database connection with appropriate settings.

    Args:
        db_path: Path to the SQLite database file.

    Returns:
        A configured sqlite3 Connection object.
    """
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_schema(db_path: Path = DEFAULT_DB_PATH) -> None:
    """Initialize the database schema if it doesn't exist.

    Args:
        db_path: Path to the SQLite database file.
    """
    # Ensure the parent directory exists
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = get_connection(db_path)
    try:
        conn.executescript(SCHEMA_SQL)
        conn.commit()
    finally:
        conn.close()
