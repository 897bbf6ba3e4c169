"""Completion (fill-in-the-blank) attempts."""

import random

from exercises.base import Attempt, CompletionCallback
from exercises.config import EngineConfig
from exercises.errors import IncompleteAttemptError, UnknownItemError
from exercises.evaluation import evaluate_completion
from exercises.events import ExerciseListener
from exercises.templates import TemplateSegment, segment_template
from models import (
    AttemptResult,
    BlankAnswer,
    CompletionCatalog,
    CompletionResponse,
    EvaluationResult,
    ExerciseKind,
)


class CompletionAttempt(Attempt[CompletionCatalog]):
    kind = ExerciseKind.COMPLETION

    def __init__(
        self,
        exercise_id: str,
        catalog: CompletionCatalog,
        config: EngineConfig | None = None,
        listeners: list[ExerciseListener] | None = None,
        on_complete: CompletionCallback | None = None,
        rng: random.Random | None = None,
        initial_answers: dict[str, str] | None = None,
    ):
        super().__init__(exercise_id, catalog, config, listeners, on_complete, rng)
        self._blank_ids = {blank.id for blank in catalog.blanks}
        self.answers: dict[str, str] = {}
        for blank_id, answer in (initial_answers or {}).items():
            self._check_blank(blank_id)
            self.answers[blank_id] = answer

    def _check_blank(self, blank_id: str) -> None:
        if blank_id not in self._blank_ids:
            raise UnknownItemError(blank_id, "blank")

    def set_answer(self, blank_id: str, answer: str) -> None:
        """Store the learner's text for a blank, replacing any earlier answer."""
        self.ensure_in_progress("answer")
        self._check_blank(blank_id)
        self.answers = {**self.answers, blank_id: answer}

    def clear_answer(self, blank_id: str) -> None:
        self.ensure_in_progress("clear an answer")
        self._check_blank(blank_id)
        self.answers = {k: v for k, v in self.answers.items() if k != blank_id}

    def get_answer(self, blank_id: str) -> str:
        return self.answers.get(blank_id, "")

    def missing_blanks(self) -> list[str]:
        """Blank ids (in position order) with no answer or only whitespace."""
        return [
            blank.id
            for blank in self.catalog.sorted_blanks()
            if not self.answers.get(blank.id, "").strip()
        ]

    def submit(self) -> AttemptResult:
        """Grade and complete the attempt.

        Raises IncompleteAttemptError, leaving the attempt untouched, if
        blanks are empty and the configuration requires every answer.
        """
        self.ensure_in_progress("submit")
        missing = self.missing_blanks()
        if missing and self.config.completion.require_all_answers:
            plural = "s" if len(missing) > 1 else ""
            raise IncompleteAttemptError(
                f"Please fill in all the blanks ({len(missing)} blank{plural} empty)",
                missing,
            )
        return self._complete()

    def _clear_state(self, new_attempt: bool) -> None:
        self.answers = {}

    def is_answer_correct(self, blank_id: str) -> bool:
        self._check_blank(blank_id)
        return self.evaluate().item_results[blank_id]

    def segments(self) -> list[TemplateSegment]:
        return segment_template(self.catalog.text, self.catalog.blanks)

    def evaluate(self) -> EvaluationResult:
        return evaluate_completion(self.answers, self.catalog)

    def to_response(self) -> CompletionResponse:
        return CompletionResponse(
            answers=[
                BlankAnswer(blank_id=blank.id, answer=self.answers[blank.id])
                for blank in self.catalog.sorted_blanks()
                if blank.id in self.answers
            ]
        )

    def has_progress(self) -> bool:
        return any(answer.strip() for answer in self.answers.values())
