"""Loading assignment files exported by the authoring system.

An assignment file is a JSON object:

    {
      "id": "a1",
      "title": "Animals",
      "questions": [
        {"id": "q1", "questionType": "MATCHING", "questionText": "...",
         "questionData": {"pairs": [...]}, "order": 0}
      ]
    }
"""

import json
from pathlib import Path

from pydantic import BaseModel, Field

from models import InteractiveQuestion, QuestionType

from .connection import DEFAULT_DB_PATH
from .sqlite import SQLiteQuestionRepository


class Assignment(BaseModel):
    id: str
    title: str = ""
    questions: list[InteractiveQuestion] = Field(default_factory=list)


def parse_assignment(data: dict) -> Assignment:
    """Build an Assignment from the authoring system's camelCase JSON."""
    assignment_id = data["id"]
    questions = [
        InteractiveQuestion(
            id=item["id"],
            assignment_id=assignment_id,
            question_type=QuestionType(item["questionType"]),
            question_text=item.get("questionText", ""),
            question_data=item.get("questionData") or {},
            order=item.get("order", index),
        )
        for index, item in enumerate(data.get("questions", []))
    ]
    questions.sort(key=lambda question: question.order)
    return Assignment(id=assignment_id, title=data.get("title", ""), questions=questions)


def load_assignment_file(path: Path) -> Assignment:
    with open(path, encoding="utf-8") as f:
        return parse_assignment(json.load(f))


def import_assignment(path: Path, db_path: Path = DEFAULT_DB_PATH) -> Assignment:
    """Load an assignment file and store its questions.

    Args:
        path: Path to the assignment JSON file.
        db_path: Database to write the questions to (schema must exist).

    Returns:
        The parsed assignment.
    """
    assignment = load_assignment_file(path)
    repo = SQLiteQuestionRepository(db_path)
    for question in assignment.questions:
        repo.add(question)
    return assignment
