from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ExerciseKind(str, Enum):
    MATCHING = "matching"
    ORDERING = "ordering"
    COMPLETION = "completion"
    MULTIPLE_CHOICE = "multiple_choice"


class AttemptStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


def _duplicates(ids: list[str]) -> list[str]:
    """Return ids that occur more than once, in first-seen order."""
    seen: set[str] = set()
    dupes: list[str] = []
    for item_id in ids:
        if item_id in seen and item_id not in dupes:
            dupes.append(item_id)
        seen.add(item_id)
    return dupes


# ============================================================================
# Item Catalog Models
# ============================================================================


class Item(BaseModel):
    """A source or target card in a matching exercise."""

    id: str
    content: str
    image_url: str | None = None


class MatchPair(BaseModel):
    """One source -> target association (answer key entry or learner match)."""

    source_id: str
    target_id: str


class MatchingCatalog(BaseModel):
    """Immutable content and answer key for a matching exercise.

    Source and target ids live in disjoint id spaces. The answer key is a
    function from source to target: each source id appears at most once.
    """

    source_items: list[Item] = Field(default_factory=list)
    target_items: list[Item] = Field(default_factory=list)
    correct_pairs: list[MatchPair] = Field(default_factory=list)

    @property
    def source_ids(self) -> list[str]:
        return [item.id for item in self.source_items]

    @property
    def target_ids(self) -> list[str]:
        return [item.id for item in self.target_items]

    def answer_key(self) -> dict[str, str]:
        """Return the correct target for each keyed source."""
        return {pair.source_id: pair.target_id for pair in self.correct_pairs}

    def validate_catalog(self) -> tuple[bool, list[str]]:
        """Validate ids and the answer key.

        Returns:
            Tuple of (is_valid, list of error messages).
        """
        errors: list[str] = []
        source_ids = self.source_ids
        target_ids = self.target_ids

        for dupe in _duplicates(source_ids):
            errors.append(f"Duplicate source id: {dupe}")
        for dupe in _duplicates(target_ids):
            errors.append(f"Duplicate target id: {dupe}")

        for shared in sorted(set(source_ids) & set(target_ids)):
            errors.append(f"Id used as both source and target: {shared}")

        keyed_sources = [pair.source_id for pair in self.correct_pairs]
        for dupe in _duplicates(keyed_sources):
            errors.append(f"Source {dupe} has more than one correct target")

        known_sources = set(source_ids)
        known_targets = set(target_ids)
        for pair in self.correct_pairs:
            if pair.source_id not in known_sources:
                errors.append(f"Answer key references unknown source: {pair.source_id}")
            if pair.target_id not in known_targets:
                errors.append(f"Answer key references unknown target: {pair.target_id}")

        return len(errors) == 0, errors


class OrderingItem(BaseModel):
    """An item of an ordering exercise with its 0-based correct position."""

    id: str
    text: str
    correct_position: int
    image_url: str | None = None


class OrderingCatalog(BaseModel):
    instructions: str = ""
    items: list[OrderingItem] = Field(default_factory=list)

    def validate_catalog(self) -> tuple[bool, list[str]]:
        """Check ids are unique and correct positions form a permutation of [0, N)."""
        errors: list[str] = []

        for dupe in _duplicates([item.id for item in self.items]):
            errors.append(f"Duplicate item id: {dupe}")

        positions = sorted(item.correct_position for item in self.items)
        if positions != list(range(len(self.items))):
            errors.append(
                f"Correct positions {positions} are not a permutation of "
                f"0..{len(self.items) - 1}"
            )

        return len(errors) == 0, errors


class Blank(BaseModel):
    """A blank in a completion text.

    `position` is a character offset into the text (or, for underscore
    templates, only the blank's order).
    """

    id: str
    answer: str
    position: int = 0


class CompletionCatalog(BaseModel):
    text: str
    blanks: list[Blank] = Field(default_factory=list)

    def sorted_blanks(self) -> list[Blank]:
        return sorted(self.blanks, key=lambda blank: blank.position)

    def validate_catalog(self) -> tuple[bool, list[str]]:
        errors: list[str] = []
        for dupe in _duplicates([blank.id for blank in self.blanks]):
            errors.append(f"Duplicate blank id: {dupe}")
        for blank in self.blanks:
            if blank.position < 0:
                errors.append(f"Blank {blank.id} has negative position")

        # Without underscore slots, positions are character offsets of inline answers
        if "_" not in self.text:
            sorted_blanks = self.sorted_blanks()
            for previous, blank in zip(sorted_blanks, sorted_blanks[1:]):
                if blank.position < previous.position + len(previous.answer):
                    errors.append(f"Blank {blank.id} overlaps blank {previous.id}")
        return len(errors) == 0, errors


class ChoiceOption(BaseModel):
    id: str
    text: str
    is_correct: bool = False
    image_url: str | None = None


class MultipleChoiceCatalog(BaseModel):
    question: str = ""
    options: list[ChoiceOption] = Field(default_factory=list)
    allow_multiple: bool = False

    @property
    def correct_ids(self) -> list[str]:
        return [option.id for option in self.options if option.is_correct]

    def validate_catalog(self) -> tuple[bool, list[str]]:
        errors: list[str] = []
        for dupe in _duplicates([option.id for option in self.options]):
            errors.append(f"Duplicate option id: {dupe}")
        if self.options and not self.correct_ids:
            errors.append("No option is marked correct")
        if not self.allow_multiple and len(self.correct_ids) > 1:
            errors.append("Single-choice question has more than one correct option")
        return len(errors) == 0, errors


# ============================================================================
# Evaluation and Result Models
# ============================================================================


class EvaluationResult(BaseModel):
    """Output of a correctness evaluator.

    `item_results` maps each graded id (source, item, blank or option) to
    whether it is correct.
    """

    item_results: dict[str, bool] = Field(default_factory=dict)
    correct_count: int = 0
    total: int = 0
    score: int = Field(default=0, ge=0, le=100)
    all_correct: bool = False


class ResponsePair(BaseModel):
    left_id: str
    right_id: str


class MatchingResponse(BaseModel):
    pairs: list[ResponsePair] = Field(default_factory=list)


class OrderedItemResponse(BaseModel):
    id: str
    position: int


class OrderingResponse(BaseModel):
    ordered_items: list[OrderedItemResponse] = Field(default_factory=list)


class BlankAnswer(BaseModel):
    blank_id: str
    answer: str


class CompletionResponse(BaseModel):
    answers: list[BlankAnswer] = Field(default_factory=list)


class MultipleChoiceResponse(BaseModel):
    selected_options: list[str] = Field(default_factory=list)


ExerciseResponse = (
    MatchingResponse | OrderingResponse | CompletionResponse | MultipleChoiceResponse
)


class AttemptResult(BaseModel):
    """Payload of the terminal "attempt complete" event."""

    exercise_id: str
    kind: ExerciseKind
    attempt_number: int = 1
    all_correct: bool
    score: int = Field(ge=0, le=100)
    evaluation: EvaluationResult
    response: dict[str, Any] = Field(default_factory=dict)


# ============================================================================
# Authoring-side Question Records
# ============================================================================


class QuestionType(str, Enum):
    MATCHING = "MATCHING"
    ORDERING = "ORDERING"
    COMPLETION = "COMPLETION"
    MULTIPLE_CHOICE = "MULTIPLE_CHOICE"


class InteractiveQuestion(BaseModel):
    """A question as stored by the authoring system.

    `question_data` keeps the authoring system's camelCase JSON shape; the
    question adapter turns it into a catalog.
    """

    id: str
    assignment_id: str = ""
    question_type: QuestionType
    question_text: str = ""
    question_data: dict[str, Any] = Field(default_factory=dict)
    order: int = 0
