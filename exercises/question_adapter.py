"""Authoring-system adapter.

Transforms question records from the assignment-authoring system (camelCase
JSON `question_data`) into item catalogs and ready-to-play attempts. This
module contains all knowledge of the authoring system's data shapes.
"""

import random
from typing import Any

from loguru import logger
from pydantic import BaseModel, ValidationError

from exercises.base import Attempt, CompletionCallback
from exercises.completion import CompletionAttempt
from exercises.config import EngineConfig
from exercises.errors import InvalidCatalogError
from exercises.events import ExerciseListener
from exercises.matching import MatchingAttempt
from exercises.multiple_choice import MultipleChoiceAttempt
from exercises.ordering import OrderingAttempt
from models import (
    Blank,
    ChoiceOption,
    CompletionCatalog,
    InteractiveQuestion,
    Item,
    MatchingCatalog,
    MatchPair,
    MultipleChoiceCatalog,
    OrderingCatalog,
    OrderingItem,
    QuestionType,
)

# Registry of attempt classes per question type
ATTEMPT_CLASSES: dict[QuestionType, type[Attempt]] = {
    QuestionType.MATCHING: MatchingAttempt,
    QuestionType.ORDERING: OrderingAttempt,
    QuestionType.COMPLETION: CompletionAttempt,
    QuestionType.MULTIPLE_CHOICE: MultipleChoiceAttempt,
}

LEFT_SUFFIX = "-left"
RIGHT_SUFFIX = "-right"


def _all_records(values: list) -> bool:
    return all(isinstance(value, dict) for value in values)


def _require_list(question: InteractiveQuestion, field: str) -> list[dict[str, Any]]:
    value = question.question_data.get(field)
    if not isinstance(value, list) or not value or not _all_records(value):
        raise InvalidCatalogError(
            [f"{question.question_type.value} question {question.id} is missing its {field} data"]
        )
    return value


def _malformed(kind: str, exc: Exception) -> InvalidCatalogError:
    if isinstance(exc, KeyError):
        return InvalidCatalogError([f"{kind} without {exc.args[0]}"])
    return InvalidCatalogError([f"Malformed {kind.lower()}: {exc}"])


def _side_item(pair: dict[str, Any], side: str, suffix: str) -> Item:
    content = pair.get(side) or "Missing content"
    is_image = pair.get(f"{side}Type") == "image"
    return Item(
        id=f"{pair['id']}{suffix}",
        content=content,
        image_url=content if is_image else None,
    )


class QuestionAdapter:
    """Builds catalogs and attempts from authoring-system questions."""

    def __init__(
        self,
        config: EngineConfig | None = None,
        rng: random.Random | None = None,
    ):
        self.config = config or EngineConfig()
        self.rng = rng

    def matching_catalog(self, question: InteractiveQuestion) -> MatchingCatalog:
        """Split each authored pair into a `<id>-left` source and `<id>-right` target."""
        pairs = _require_list(question, "pairs")
        try:
            return MatchingCatalog(
                source_items=[_side_item(p, "left", LEFT_SUFFIX) for p in pairs],
                target_items=[_side_item(p, "right", RIGHT_SUFFIX) for p in pairs],
                correct_pairs=[
                    MatchPair(
                        source_id=f"{p['id']}{LEFT_SUFFIX}",
                        target_id=f"{p['id']}{RIGHT_SUFFIX}",
                    )
                    for p in pairs
                ],
            )
        except (KeyError, ValidationError) as exc:
            raise _malformed("Matching pair", exc) from exc

    def ordering_catalog(self, question: InteractiveQuestion) -> OrderingCatalog:
        """Build an ordering catalog, accepting 1-based `correctPosition` values.

        The authoring forms number positions from 1. A set of positions that is
        exactly 1..N is shifted down to 0..N-1; anything else is kept as-is and
        left to catalog validation.
        """
        items = _require_list(question, "items")
        try:
            ordering_items = [
                OrderingItem(
                    id=item["id"],
                    text=item.get("text", ""),
                    correct_position=item["correctPosition"],
                    image_url=item.get("imageUrl"),
                )
                for item in items
            ]
        except (KeyError, ValidationError) as exc:
            raise _malformed("Ordering item", exc) from exc

        positions = sorted(item.correct_position for item in ordering_items)
        if positions == list(range(1, len(ordering_items) + 1)):
            logger.debug("Question {} uses 1-based positions, shifting to 0-based", question.id)
            for item in ordering_items:
                item.correct_position -= 1

        return OrderingCatalog(instructions=question.question_text, items=ordering_items)

    def completion_catalog(self, question: InteractiveQuestion) -> CompletionCatalog:
        text = question.question_data.get("text")
        blanks = question.question_data.get("blanks")
        if not text or not isinstance(blanks, list) or not _all_records(blanks):
            raise InvalidCatalogError(
                [f"COMPLETION question {question.id} is missing its text or blanks data"]
            )
        try:
            return CompletionCatalog(
                text=text,
                blanks=[
                    Blank(
                        id=blank["id"],
                        answer=blank["answer"],
                        position=blank.get("position", 0),
                    )
                    for blank in blanks
                ],
            )
        except (KeyError, ValidationError) as exc:
            raise _malformed("Blank", exc) from exc

    def multiple_choice_catalog(
        self, question: InteractiveQuestion
    ) -> MultipleChoiceCatalog:
        options = _require_list(question, "options")
        try:
            return MultipleChoiceCatalog(
                question=question.question_text,
                allow_multiple=bool(question.question_data.get("allowMultiple", False)),
                options=[
                    ChoiceOption(
                        id=option["id"],
                        text=option.get("text", ""),
                        is_correct=bool(option.get("isCorrect", False)),
                        image_url=option.get("imageUrl"),
                    )
                    for option in options
                ],
            )
        except (KeyError, ValidationError) as exc:
            raise _malformed("Option", exc) from exc

    def build_catalog(self, question: InteractiveQuestion) -> BaseModel:
        builders = {
            QuestionType.MATCHING: self.matching_catalog,
            QuestionType.ORDERING: self.ordering_catalog,
            QuestionType.COMPLETION: self.completion_catalog,
            QuestionType.MULTIPLE_CHOICE: self.multiple_choice_catalog,
        }
        return builders[question.question_type](question)

    def create_attempt(
        self,
        question: InteractiveQuestion,
        listeners: list[ExerciseListener] | None = None,
        on_complete: CompletionCallback | None = None,
    ) -> Attempt:
        """Build the attempt for a question, validating its catalog."""
        attempt_class = ATTEMPT_CLASSES[question.question_type]
        return attempt_class(
            question.id,
            self.build_catalog(question),
            config=self.config,
            listeners=listeners,
            on_complete=on_complete,
            rng=self.rng,
        )
